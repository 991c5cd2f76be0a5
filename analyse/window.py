# analyse/window.py
"""
Hann windowing ahead of the FFT.

The window tapers both ends of the analysed segment to zero, so the transform
does not see a hard discontinuity at the frame boundary (spectral leakage).
"""

from __future__ import annotations

import numpy as np

from analyse.errors import InvalidInputError


def hann_window(number_of_samples: int) -> np.ndarray:
    """
    Symmetric Hann window: w[i] = 0.5 * (1 - cos(2*pi*i / (N - 1))).
    """
    if number_of_samples < 2:
        raise InvalidInputError(
            f"Hann window needs at least 2 samples, got {number_of_samples}"
        )
    return np.hanning(number_of_samples).astype(np.float64)


def apply_hann_window(samples: np.ndarray) -> np.ndarray:
    """
    Return a new, windowed copy of samples. The input is left untouched.
    """
    samples = np.asarray(samples, dtype=np.float64)
    return samples * hann_window(samples.size)
