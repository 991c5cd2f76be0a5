# analyse/pipeline.py
"""
End-to-end dominant-frequency analysis.

Stages (each returns a new object, nothing is shared between runs):
  Waveform -> segment -> Hann window -> zero-padded rFFT -> magnitude -> main peaks

Typical usage:
    from analyse.pipeline import PeakAnalysisSettings, analyse_peaks_from_audio_file
    result = analyse_peaks_from_audio_file("tone.wav", PeakAnalysisSettings(start_seconds=0.5))
    print(summarise_peaks_text(result))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np

from analyse.peaks import Peak, peaks_from_spectrum
from analyse.source import DecodedWaveSource, Waveform, WaveSource, extract_segment
from analyse.spectrum import (
    HANN_WINDOW_GAIN,
    MagnitudeSpectrum,
    compute_magnitude_spectrum,
    forward_transform,
)
from analyse.window import apply_hann_window, hann_window


logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------------------
# Data models
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class PeakAnalysisSettings:
    # Side-lobe suppression: only one peak is reported per +/- neighborhood_hz.
    neighborhood_hz: float = 3.0

    # Bins below this magnitude are never reported.
    min_magnitude_threshold: float = 0.5

    # Amplitude compensation for the Hann window.
    # 0.5 is the textbook Hann average. None uses the mean of the actual window
    # values, (N - 1) / (2N), which reads a bin-centred sine at exactly its amplitude.
    window_gain: Optional[float] = HANN_WINDOW_GAIN

    # Time selection (seconds into the source waveform).
    start_seconds: float = 0.0

    # If None, analyse to the end of the waveform.
    analysis_duration_seconds: Optional[float] = None


@dataclass(frozen=True)
class PeakAnalysisResult:
    sample_rate_hz: int

    source_duration_seconds: float
    analysis_start_sample_index: int
    analysis_length_samples: int

    spectrum: MagnitudeSpectrum
    peaks: List[Peak]


# --------------------------------------------------------------------------------------
# Core analysis
# --------------------------------------------------------------------------------------


def _resolve_window_gain(settings: PeakAnalysisSettings, number_of_samples: int) -> float:
    if settings.window_gain is not None:
        return float(settings.window_gain)
    return float(np.mean(hann_window(number_of_samples)))


def analyse_waveform_peaks(
    waveform: Waveform,
    settings: Optional[PeakAnalysisSettings] = None,
) -> PeakAnalysisResult:
    if settings is None:
        settings = PeakAnalysisSettings()

    segment = extract_segment(waveform, settings.start_seconds, settings.analysis_duration_seconds)
    start_index = int(np.floor(settings.start_seconds * float(waveform.sample_rate_hz)))

    logger.info(
        "Analysing %d samples from index %d at %d Hz",
        segment.number_of_samples,
        start_index,
        waveform.sample_rate_hz,
    )

    windowed_samples = apply_hann_window(segment.samples)
    frame = forward_transform(windowed_samples)
    spectrum = compute_magnitude_spectrum(
        frame,
        sample_rate_hz=waveform.sample_rate_hz,
        window_gain=_resolve_window_gain(settings, segment.number_of_samples),
    )

    logger.info(
        "FFT size %d, frequency resolution %.4f Hz",
        spectrum.fft_size,
        spectrum.frequency_resolution_hz,
    )

    peaks = peaks_from_spectrum(
        spectrum,
        neighborhood_hz=settings.neighborhood_hz,
        threshold=settings.min_magnitude_threshold,
    )

    logger.info("Detected %d main peaks", len(peaks))

    return PeakAnalysisResult(
        sample_rate_hz=waveform.sample_rate_hz,
        source_duration_seconds=waveform.duration_seconds,
        analysis_start_sample_index=start_index,
        analysis_length_samples=segment.number_of_samples,
        spectrum=spectrum,
        peaks=peaks,
    )


def analyse_peaks_from_wave_source(
    source: WaveSource,
    settings: Optional[PeakAnalysisSettings] = None,
) -> PeakAnalysisResult:
    return analyse_waveform_peaks(source.load(), settings)


def analyse_peaks_from_audio_file(
    audio_file_path: str | Path,
    settings: Optional[PeakAnalysisSettings] = None,
) -> PeakAnalysisResult:
    return analyse_peaks_from_wave_source(DecodedWaveSource(audio_file_path), settings)


# --------------------------------------------------------------------------------------
# CLI-friendly numeric summary
# --------------------------------------------------------------------------------------


def summarise_peaks_text(
    result: PeakAnalysisResult,
    frequency_decimals: int = 2,
    magnitude_decimals: int = 8,
) -> str:
    lines: List[str] = ["Detected main frequencies:"]
    for peak in result.peaks:
        lines.append(
            f"Frequency: {peak.frequency_hz:.{frequency_decimals}f} Hz, "
            f"Magnitude: {peak.magnitude:.{magnitude_decimals}f}"
        )
    return "\n".join(lines)
