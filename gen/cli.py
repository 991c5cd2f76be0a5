# gen/cli.py
"""
Command Line Interface (CLI) for writing composite sine test tones to WAV.

The tones are meant as known-answer inputs for `python -m analyse.cli file`.

Usage examples:
  python -m gen.cli --help
  python -m gen.cli --output composite.wav
  python -m gen.cli --frequencies 440 880 --amplitudes 0.5 0.25 --duration 2
  python -m gen.cli --channel_mode stereo --sample_rate_hz 44100

Outputs are 16-bit PCM WAV, mono by default, 48 kHz by default.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

try:
    from scipy.io import wavfile
except ImportError as import_error:  # pragma: no cover
    raise ImportError(
        "scipy is required for WAV writing. Install with: pip install scipy"
    ) from import_error

from analyse.errors import PeakAnalysisError
from analyse.source import SyntheticWaveSource


logger = logging.getLogger("gen")

DEFAULT_SAMPLE_RATE_HZ = 48_000


def limit_peak(samples: np.ndarray) -> np.ndarray:
    """
    Scale samples down so the peak magnitude is <= 1.0. Quieter signals are left alone.
    """
    samples = np.asarray(samples, dtype=np.float64)

    if samples.size == 0:
        return samples

    peak_magnitude = float(np.max(np.abs(samples)))
    if peak_magnitude > 1.0:
        logger.warning("Composite peak %.3f exceeds full scale, normalising to 1.0", peak_magnitude)
        samples = samples / peak_magnitude

    return samples


def duplicate_mono_to_stereo(samples: np.ndarray) -> np.ndarray:
    """
    Convert mono (N,) to stereo (N,2) by duplicating channels.
    """
    return np.stack([samples, samples], axis=1)


def write_wav_file_pcm16(
    output_file_path: Path,
    samples: np.ndarray,
    sample_rate_hz: int,
) -> None:
    """
    Write mono or stereo float samples to 16-bit PCM WAV.

    Accepted shapes:
    - mono:  (num_samples,) or (num_samples, 1)
    - stereo:(num_samples, 2)
    """
    samples = np.asarray(samples, dtype=np.float64)

    if samples.ndim == 2 and samples.shape[1] == 1:
        samples = samples[:, 0]  # flatten to (N,)

    if samples.ndim == 1:
        pass  # mono is fine
    elif samples.ndim == 2 and samples.shape[1] == 2:
        pass  # stereo is fine
    else:
        raise ValueError(
            f"Expected mono (N) or stereo (N,2). Got shape {samples.shape}"
        )

    clipped_samples = np.clip(samples, -1.0, 1.0)
    int16_samples = np.round(clipped_samples * 32767.0).astype(np.int16)

    output_file_path.parent.mkdir(parents=True, exist_ok=True)
    wavfile.write(str(output_file_path), sample_rate_hz, int16_samples)


def ensure_wav_suffix(output_file_path: Path) -> Path:
    if output_file_path.suffix.lower() != ".wav":
        return output_file_path.with_suffix(".wav")
    return output_file_path


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gen",
        description="Write a composite sine test tone to a 16-bit PCM WAV file.",
    )

    parser.add_argument(
        "--output-dir",
        dest="output_directory",
        type=str,
        default="test_tones",
        help="Directory to write generated WAV files (default: ./test_tones).",
    )

    parser.add_argument(
        "--output",
        type=str,
        default="composite.wav",
        help="Output WAV filename (default: composite.wav).",
    )

    parser.add_argument(
        "--channel_mode",
        type=str,
        default="mono",
        choices=["mono", "stereo"],
        help="Output channel mode (default: mono).",
    )

    parser.add_argument(
        "--sample_rate_hz",
        type=int,
        default=DEFAULT_SAMPLE_RATE_HZ,
        help="Sample rate in Hz (default: 48000).",
    )

    parser.add_argument(
        "--duration",
        dest="duration_seconds",
        type=float,
        default=2.0,
        help="Duration in seconds (default: 2.0).",
    )

    parser.add_argument(
        "--frequencies",
        dest="frequencies_hz",
        type=float,
        nargs="+",
        default=[440.0, 1000.0],
        help="Component frequencies in Hz (default: 440 1000).",
    )

    parser.add_argument(
        "--amplitudes",
        type=float,
        nargs="+",
        default=[0.5, 0.25],
        help="Component amplitudes, one per frequency (default: 0.5 0.25).",
    )

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parsed_arguments = parse_arguments(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    source = SyntheticWaveSource(
        frequencies_hz=list(parsed_arguments.frequencies_hz),
        amplitudes=list(parsed_arguments.amplitudes),
        sample_rate_hz=int(parsed_arguments.sample_rate_hz),
        duration_seconds=float(parsed_arguments.duration_seconds),
    )

    try:
        waveform = source.load()
    except PeakAnalysisError as generation_error:
        logger.error("%s: %s", type(generation_error).__name__, generation_error)
        return 1

    output_file_path = Path(parsed_arguments.output_directory) / parsed_arguments.output
    output_file_path = ensure_wav_suffix(output_file_path)

    output_samples = limit_peak(waveform.samples)

    channel_mode = str(parsed_arguments.channel_mode)
    if channel_mode == "stereo":
        output_samples = duplicate_mono_to_stereo(output_samples)

    write_wav_file_pcm16(
        output_file_path=output_file_path,
        samples=output_samples,
        sample_rate_hz=waveform.sample_rate_hz,
    )

    if output_samples.ndim == 1:
        channel_count = 1
    else:
        channel_count = int(output_samples.shape[1])

    print(f"Wrote {output_file_path} ({output_samples.shape[0]} samples, {waveform.sample_rate_hz} Hz, {channel_count} channel(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
