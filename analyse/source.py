# analyse/source.py
"""
Wave sources for peak analysis.

A wave source produces a mono Waveform (samples + sample rate). Two sources
share the same load() contract:
- SyntheticWaveSource: sum of sine components, computed in memory
- DecodedWaveSource: an audio file decoded by analyse.io

extract_segment() cuts a [start, start + duration) window out of either.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

import numpy as np

from analyse.errors import InvalidInputError, RangeError
from analyse.io import load_audio_file


logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Data container
# -------------------------------------------------------------------

@dataclass(frozen=True)
class Waveform:
    """
    Mono samples in time order plus their sample rate.
    """
    samples: np.ndarray      # shape (num_samples,), float64
    sample_rate_hz: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "samples", np.asarray(self.samples, dtype=np.float64))
        if self.sample_rate_hz <= 0:
            raise InvalidInputError(f"Sample rate must be positive, got {self.sample_rate_hz}")
        if self.samples.ndim != 1:
            raise InvalidInputError(f"Waveform samples must be 1D, got shape {self.samples.shape}")

    @property
    def number_of_samples(self) -> int:
        return int(self.samples.size)

    @property
    def duration_seconds(self) -> float:
        return self.number_of_samples / float(self.sample_rate_hz)

    def segment(self, start_seconds: float, duration_seconds: Optional[float] = None) -> "Waveform":
        return extract_segment(self, start_seconds, duration_seconds)


class WaveSource(Protocol):
    def load(self) -> Waveform:
        ...


# -------------------------------------------------------------------
# Synthetic source
# -------------------------------------------------------------------

def generate_composite_wave(
    frequencies_hz: Sequence[float],
    amplitudes: Sequence[float],
    sample_rate_hz: int,
    duration_seconds: float,
) -> np.ndarray:
    """
    Generate a sum of sine waves.

    sample[i] = sum_j amplitudes[j] * sin(2*pi * frequencies_hz[j] * i / sample_rate_hz)
    for i in [0, floor(sample_rate_hz * duration_seconds)).

    The result is not normalised; its peak depends on the amplitudes.
    """
    if len(frequencies_hz) != len(amplitudes):
        raise InvalidInputError(
            f"Got {len(frequencies_hz)} frequencies but {len(amplitudes)} amplitudes"
        )
    if sample_rate_hz <= 0:
        raise InvalidInputError(f"Sample rate must be positive, got {sample_rate_hz}")
    if duration_seconds <= 0.0:
        raise InvalidInputError(f"Duration must be positive, got {duration_seconds}")

    number_of_samples = int(np.floor(float(sample_rate_hz) * float(duration_seconds)))
    if number_of_samples < 1:
        raise InvalidInputError(
            f"Duration {duration_seconds}s at {sample_rate_hz} Hz yields no samples"
        )

    time_axis_seconds = np.arange(number_of_samples, dtype=np.float64) / float(sample_rate_hz)

    wave = np.zeros(number_of_samples, dtype=np.float64)
    for frequency_hz, amplitude in zip(frequencies_hz, amplitudes):
        wave += float(amplitude) * np.sin(2.0 * np.pi * float(frequency_hz) * time_axis_seconds)

    return wave


@dataclass(frozen=True)
class SyntheticWaveSource:
    frequencies_hz: Sequence[float]
    amplitudes: Sequence[float]
    sample_rate_hz: int
    duration_seconds: float

    def load(self) -> Waveform:
        samples = generate_composite_wave(
            frequencies_hz=self.frequencies_hz,
            amplitudes=self.amplitudes,
            sample_rate_hz=self.sample_rate_hz,
            duration_seconds=self.duration_seconds,
        )
        logger.debug(
            "Generated composite wave: %d components, %d samples at %d Hz",
            len(self.frequencies_hz),
            samples.size,
            self.sample_rate_hz,
        )
        return Waveform(samples=samples, sample_rate_hz=int(self.sample_rate_hz))


# -------------------------------------------------------------------
# Decoded source
# -------------------------------------------------------------------

@dataclass(frozen=True)
class DecodedWaveSource:
    file_path: str | Path

    def load(self) -> Waveform:
        loaded_audio = load_audio_file(self.file_path)
        return Waveform(samples=loaded_audio.samples, sample_rate_hz=loaded_audio.sample_rate_hz)


# -------------------------------------------------------------------
# Windowed extraction
# -------------------------------------------------------------------

def extract_segment(
    waveform: Waveform,
    start_seconds: float,
    duration_seconds: Optional[float] = None,
) -> Waveform:
    """
    Return a copy of the samples in [floor(start*R), floor(start*R) + floor(duration*R)).

    With duration_seconds=None the segment runs to the last sample of the waveform.

    A segment starting exactly at the end of the waveform with zero duration
    is valid and empty.
    """
    if start_seconds < 0.0:
        raise InvalidInputError(f"Start offset must be non-negative, got {start_seconds}")
    if duration_seconds is not None and duration_seconds < 0.0:
        raise InvalidInputError(f"Segment duration must be non-negative, got {duration_seconds}")

    sample_rate = float(waveform.sample_rate_hz)
    total_length = waveform.number_of_samples

    start_index = int(np.floor(start_seconds * sample_rate))
    if duration_seconds is None:
        end_index = total_length
    else:
        end_index = start_index + int(np.floor(duration_seconds * sample_rate))

    logger.debug(
        "Segment request: start=%d end=%d (waveform length %d)",
        start_index,
        end_index,
        total_length,
    )

    if start_index > total_length:
        raise RangeError(
            f"Invalid starting point: waveform length is {total_length} but start index is {start_index}"
        )
    if end_index > total_length:
        raise RangeError(
            f"Invalid end point: waveform length is {total_length} but end index is {end_index}"
        )

    return Waveform(
        samples=waveform.samples[start_index:end_index].copy(),
        sample_rate_hz=waveform.sample_rate_hz,
    )
