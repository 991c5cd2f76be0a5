"""
Shared fixtures for the test suite.

Centralizes synthetic signals and WAV writing so individual test files
don't need to repeat generation boilerplate.
"""

from pathlib import Path
from typing import Callable, Sequence

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from analyse.source import SyntheticWaveSource, Waveform
from gen.cli import write_wav_file_pcm16

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

COMPOSITE_FREQUENCIES_HZ = [50.0, 120.0, 300.0]
COMPOSITE_AMPLITUDES = [1.0, 0.5, 0.8]
COMPOSITE_SAMPLE_RATE_HZ = 1024
COMPOSITE_DURATION_SECONDS = 15.0
"""15 s at 1024 Hz -> 15360 samples, FFT size 16384, 0.0625 Hz per bin."""


# ---------------------------------------------------------------------------
# Synthetic signals
# ---------------------------------------------------------------------------


@pytest.fixture
def composite_source() -> SyntheticWaveSource:
    return SyntheticWaveSource(
        frequencies_hz=COMPOSITE_FREQUENCIES_HZ,
        amplitudes=COMPOSITE_AMPLITUDES,
        sample_rate_hz=COMPOSITE_SAMPLE_RATE_HZ,
        duration_seconds=COMPOSITE_DURATION_SECONDS,
    )


@pytest.fixture
def composite_waveform(composite_source: SyntheticWaveSource) -> Waveform:
    return composite_source.load()


# ---------------------------------------------------------------------------
# WAV files
# ---------------------------------------------------------------------------


@pytest.fixture
def write_tone(tmp_path: Path) -> Callable[..., Path]:
    """Factory: write a composite tone to a 16-bit WAV under tmp_path."""

    def _write(
        name: str = "tone.wav",
        frequencies_hz: Sequence[float] = (440.0, 1000.0),
        amplitudes: Sequence[float] = (0.5, 0.25),
        sample_rate_hz: int = 8192,
        duration_seconds: float = 1.0,
        stereo: bool = False,
    ) -> Path:
        samples = SyntheticWaveSource(
            frequencies_hz=list(frequencies_hz),
            amplitudes=list(amplitudes),
            sample_rate_hz=sample_rate_hz,
            duration_seconds=duration_seconds,
        ).load().samples
        if stereo:
            samples = np.stack([samples, samples], axis=1)
        path = tmp_path / name
        write_wav_file_pcm16(path, samples, sample_rate_hz)
        return path

    return _write
