# analyse/__init__.py
"""
analyse package

Dominant-frequency extraction for synthetic and decoded audio signals.

This package contains:
- audio decoding and mono downmix (analyse.io)
- wave sources and segment extraction (analyse.source)
- Hann windowing (analyse.window)
- zero-padded FFT and magnitude calibration (analyse.spectrum)
- main-peak detection (analyse.peaks)
- the end-to-end pipeline and its settings (analyse.pipeline)
- command line interface entrypoint (analyse.cli)

Typical usage:
    from analyse import PeakAnalysisSettings, SyntheticWaveSource, analyse_peaks_from_wave_source
"""

from .errors import (
    DecodeError,
    InvalidInputError,
    PeakAnalysisError,
    RangeError,
    UnsupportedFormatError,
)
from .io import LoadedAudio, load_audio_file
from .peaks import Peak, find_main_peaks, peaks_from_spectrum
from .pipeline import (
    PeakAnalysisResult,
    PeakAnalysisSettings,
    analyse_peaks_from_audio_file,
    analyse_peaks_from_wave_source,
    analyse_waveform_peaks,
    summarise_peaks_text,
)
from .source import (
    DecodedWaveSource,
    SyntheticWaveSource,
    Waveform,
    WaveSource,
    extract_segment,
    generate_composite_wave,
)
from .spectrum import (
    HANN_WINDOW_GAIN,
    MagnitudeSpectrum,
    SpectralFrame,
    compute_magnitude_spectrum,
    forward_transform,
    next_power_of_two,
)
from .window import apply_hann_window, hann_window

__all__ = [
    "DecodeError",
    "InvalidInputError",
    "PeakAnalysisError",
    "RangeError",
    "UnsupportedFormatError",
    "LoadedAudio",
    "load_audio_file",
    "Peak",
    "find_main_peaks",
    "peaks_from_spectrum",
    "PeakAnalysisResult",
    "PeakAnalysisSettings",
    "analyse_peaks_from_audio_file",
    "analyse_peaks_from_wave_source",
    "analyse_waveform_peaks",
    "summarise_peaks_text",
    "DecodedWaveSource",
    "SyntheticWaveSource",
    "Waveform",
    "WaveSource",
    "extract_segment",
    "generate_composite_wave",
    "HANN_WINDOW_GAIN",
    "MagnitudeSpectrum",
    "SpectralFrame",
    "compute_magnitude_spectrum",
    "forward_transform",
    "next_power_of_two",
    "apply_hann_window",
    "hann_window",
]
