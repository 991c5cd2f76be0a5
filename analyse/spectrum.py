# analyse/spectrum.py
"""
Zero-padded rFFT and calibrated magnitude spectrum.

Conventions:
- FFT size is the smallest power of two >= the analysed segment length
- the segment is zero-padded to the FFT size before the transform
- magnitudes are scaled by 2 / N / window_gain, where N is the segment
  length *before* padding, so a full-scale sine reads ~its amplitude
- the output covers bins 0 .. fft_size/2 - 1 (Nyquist bin excluded)

No peak logic lives here; see analyse.peaks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from analyse.errors import InvalidInputError


logger = logging.getLogger(__name__)

HANN_WINDOW_GAIN = 0.5


# --------------------------------------------------------------------------------------
# Data models
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class SpectralFrame:
    # rFFT output, fft_size/2 + 1 complex coefficients
    coefficients: np.ndarray
    fft_size: int

    # Segment length before zero-padding
    analysis_length_samples: int


@dataclass(frozen=True)
class MagnitudeSpectrum:
    # Non-negative, one entry per bin, bins 0 .. fft_size/2 - 1
    magnitude: np.ndarray
    fft_size: int
    sample_rate_hz: int
    analysis_length_samples: int

    @property
    def frequency_resolution_hz(self) -> float:
        return float(self.sample_rate_hz) / float(self.fft_size)

    @property
    def frequency_hz(self) -> np.ndarray:
        return np.arange(self.magnitude.size, dtype=np.float64) * self.frequency_resolution_hz

    def frequency_of_bin(self, bin_index: int) -> float:
        return float(bin_index) * float(self.sample_rate_hz) / float(self.fft_size)


# --------------------------------------------------------------------------------------
# Core analysis
# --------------------------------------------------------------------------------------


def next_power_of_two(number_of_samples: int) -> int:
    if number_of_samples < 1:
        raise InvalidInputError(f"Cannot size an FFT for {number_of_samples} samples")

    fft_size = 1
    while fft_size < number_of_samples:
        fft_size *= 2
    return fft_size


def forward_transform(windowed_samples: np.ndarray) -> SpectralFrame:
    """
    Zero-pad to the next power of two and run a real-to-complex FFT.
    """
    windowed_samples = np.asarray(windowed_samples, dtype=np.float64)
    analysis_length_samples = int(windowed_samples.size)

    fft_size = next_power_of_two(analysis_length_samples)

    # rfft with n > len zero-pads at the end
    coefficients = np.fft.rfft(windowed_samples, n=fft_size)

    logger.debug(
        "FFT: %d samples zero-padded to %d (%d coefficients)",
        analysis_length_samples,
        fft_size,
        coefficients.size,
    )

    return SpectralFrame(
        coefficients=coefficients,
        fft_size=fft_size,
        analysis_length_samples=analysis_length_samples,
    )


def compute_magnitude_spectrum(
    frame: SpectralFrame,
    sample_rate_hz: int,
    window_gain: float = HANN_WINDOW_GAIN,
) -> MagnitudeSpectrum:
    if sample_rate_hz <= 0:
        raise InvalidInputError(f"Sample rate must be positive, got {sample_rate_hz}")
    if window_gain <= 0.0:
        raise InvalidInputError(f"Window gain must be positive, got {window_gain}")

    half_size = frame.fft_size // 2
    magnitude = (
        np.abs(frame.coefficients[:half_size])
        * 2.0
        / float(frame.analysis_length_samples)
        / float(window_gain)
    )

    return MagnitudeSpectrum(
        magnitude=magnitude.astype(np.float64),
        fft_size=frame.fft_size,
        sample_rate_hz=int(sample_rate_hz),
        analysis_length_samples=frame.analysis_length_samples,
    )
