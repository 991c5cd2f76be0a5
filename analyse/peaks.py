# analyse/peaks.py
"""
Main-peak detection on a magnitude spectrum.

A bin is a main peak when its magnitude is at or above the threshold and nothing
within +/- neighborhood_hz is strictly larger. After a peak is found the scan
jumps past its neighborhood, which suppresses the side lobes around it.

The threshold is inclusive: only bins strictly below it are skipped, so a
threshold equal to the global maximum still reports that bin.

Known limitation: two genuine peaks closer than one neighborhood cannot both
be reported. The larger one wins, or the leftmost one if they are equal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from analyse.errors import InvalidInputError
from analyse.spectrum import MagnitudeSpectrum


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Peak:
    bin_index: int
    frequency_hz: float
    magnitude: float


def find_main_peaks(
    magnitude: np.ndarray,
    frequency_resolution_hz: float,
    neighborhood_hz: float,
    threshold: float,
) -> List[int]:
    """
    Return the bin indices of main peaks, ascending.

    The first and last bins are never reported.
    """
    if frequency_resolution_hz <= 0.0:
        raise InvalidInputError(
            f"Frequency resolution must be positive, got {frequency_resolution_hz}"
        )
    if neighborhood_hz < 0.0:
        raise InvalidInputError(f"Neighborhood must be non-negative, got {neighborhood_hz}")

    magnitude = np.asarray(magnitude, dtype=np.float64)
    number_of_bins = int(magnitude.size)
    bin_radius = int(np.floor(neighborhood_hz / frequency_resolution_hz))

    peak_indices: List[int] = []

    bin_index = 1
    while bin_index < number_of_bins - 1:
        current = magnitude[bin_index]
        if current < threshold:
            bin_index += 1
            continue

        window_start = max(0, bin_index - bin_radius)
        window_end = min(number_of_bins - 1, bin_index + bin_radius)

        if np.any(magnitude[window_start:window_end + 1] > current):
            bin_index += 1
            continue

        peak_indices.append(bin_index)
        # Skip the neighborhood so side lobes of this peak are not reported
        bin_index = window_end + 1

    return peak_indices


def peaks_from_spectrum(
    spectrum: MagnitudeSpectrum,
    neighborhood_hz: float,
    threshold: float,
) -> List[Peak]:
    peak_indices = find_main_peaks(
        magnitude=spectrum.magnitude,
        frequency_resolution_hz=spectrum.frequency_resolution_hz,
        neighborhood_hz=neighborhood_hz,
        threshold=threshold,
    )

    logger.debug(
        "Peak scan: %d bins, radius %.3f Hz, threshold %.4f -> %d peaks",
        spectrum.magnitude.size,
        neighborhood_hz,
        threshold,
        len(peak_indices),
    )

    return [
        Peak(
            bin_index=index,
            frequency_hz=spectrum.frequency_of_bin(index),
            magnitude=float(spectrum.magnitude[index]),
        )
        for index in peak_indices
    ]
