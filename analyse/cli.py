# analyse/cli.py
"""
Command Line Interface (CLI) for dominant-frequency peak analysis.

Usage examples:
  python -m analyse.cli --help
  python -m analyse.cli file -input tone.wav
  python -m analyse.cli file -input song.mp3 -start 12.5 -duration 2 -mmt 0.1
  python -m analyse.cli file -input tone.ogg --output plots/tone
  python -m analyse.cli synthetic
  python -m analyse.cli synthetic --frequencies 440 880 --amplitudes 1.0 0.25 --sample_rate_hz 8192

Notes:
- Results go to stdout, diagnostics go to stderr through logging.
- Analysis errors (bad range, undecodable file, ...) exit with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from analyse.errors import PeakAnalysisError
from analyse.pipeline import (
    PeakAnalysisResult,
    PeakAnalysisSettings,
    analyse_peaks_from_audio_file,
    analyse_peaks_from_wave_source,
    summarise_peaks_text,
)
from analyse.source import SyntheticWaveSource
from analyse.spectrum import HANN_WINDOW_GAIN


logger = logging.getLogger("analyse")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    top_level_parser = argparse.ArgumentParser(
        prog="analyse",
        description="Extract dominant frequency peaks (frequency + magnitude) from a signal.",
    )

    top_level_parser.add_argument(
        "--verbose",
        action="store_true",
        help="If set, log debug details of every pipeline stage.",
    )

    subparsers = top_level_parser.add_subparsers(
        dest="command_name",
        required=True,
        help="Signal source. Use: analyse <command> --help",
    )

    # ------------------------------------------------------------------
    # Decoded audio file
    # ------------------------------------------------------------------
    file_parser = subparsers.add_parser(
        "file",
        help="Decode a .wav/.mp3/.ogg file, mix to mono, and report its main peaks.",
    )

    file_parser.add_argument(
        "-input",
        "--input",
        dest="input_audio_file_path",
        type=str,
        required=True,
        help="Path to input audio file (.wav, .mp3 or .ogg).",
    )

    file_parser.add_argument(
        "-duration",
        "--duration",
        dest="analysis_duration_seconds",
        type=float,
        default=1.0,
        help="Length of the analysed segment in seconds (default: 1).",
    )

    file_parser.add_argument(
        "-start",
        "--start",
        dest="start_seconds",
        type=float,
        default=0.0,
        help="Offset of the analysed segment in seconds (default: 0).",
    )

    file_parser.add_argument(
        "-mmt",
        "--mmt",
        dest="min_magnitude_threshold",
        type=float,
        default=0.5,
        help="Minimum magnitude threshold for main peaks (default: 0.5).",
    )

    _add_common_analysis_arguments(file_parser)

    # ------------------------------------------------------------------
    # Synthetic composite wave
    # ------------------------------------------------------------------
    synthetic_parser = subparsers.add_parser(
        "synthetic",
        help="Analyse a generated sum of sine waves (no file I/O).",
    )

    synthetic_parser.add_argument(
        "--frequencies",
        dest="frequencies_hz",
        type=float,
        nargs="+",
        default=[50.0, 120.0, 300.0],
        help="Component frequencies in Hz (default: 50 120 300).",
    )

    synthetic_parser.add_argument(
        "--amplitudes",
        type=float,
        nargs="+",
        default=[1.0, 0.5, 0.8],
        help="Component amplitudes, one per frequency (default: 1.0 0.5 0.8).",
    )

    synthetic_parser.add_argument(
        "--sample_rate_hz",
        type=int,
        default=1024,
        help="Sample rate in Hz (default: 1024).",
    )

    synthetic_parser.add_argument(
        "--duration",
        dest="duration_seconds",
        type=float,
        default=15.0,
        help="Generated duration in seconds (default: 15).",
    )

    synthetic_parser.add_argument(
        "-mmt",
        "--mmt",
        dest="min_magnitude_threshold",
        type=float,
        default=0.05,
        help="Minimum magnitude threshold for main peaks (default: 0.05).",
    )

    _add_common_analysis_arguments(synthetic_parser)

    return top_level_parser.parse_args(argv)


def _add_common_analysis_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--neighborhood_hz",
        type=float,
        default=3.0,
        help="Side-lobe suppression radius in Hz (default: 3).",
    )

    parser.add_argument(
        "--mean_window_gain",
        action="store_true",
        help="If set, compensate with the mean of the Hann window instead of the fixed 0.5.",
    )

    parser.add_argument(
        "--output",
        dest="output_basename",
        type=str,
        default=None,
        help="If provided, saves PNG: <basename>_peaks.png",
    )

    parser.add_argument(
        "--show",
        action="store_true",
        help="If set, display the spectrum plot interactively.",
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _plot_result(
    result: PeakAnalysisResult,
    title: str,
    output_basename: Optional[str],
    show_interactive: bool,
) -> None:
    if output_basename is None and not show_interactive:
        return

    # matplotlib is only imported when a plot is requested
    from analyse.plotting import (
        finalize_and_show_or_save,
        peaks_plot_path,
        plot_magnitude_spectrum_with_peaks,
    )

    output_path = None if output_basename is None else peaks_plot_path(output_basename)

    figure = plot_magnitude_spectrum_with_peaks(result, title=title)
    finalize_and_show_or_save(
        figure=figure,
        output_path=output_path,
        show_interactive=show_interactive,
    )

    if output_path is not None:
        print(f"Wrote: {output_path}")


def run_file_command(parsed_arguments: argparse.Namespace) -> None:
    input_path = Path(parsed_arguments.input_audio_file_path)

    settings = PeakAnalysisSettings(
        neighborhood_hz=float(parsed_arguments.neighborhood_hz),
        min_magnitude_threshold=float(parsed_arguments.min_magnitude_threshold),
        window_gain=None if parsed_arguments.mean_window_gain else HANN_WINDOW_GAIN,
        start_seconds=float(parsed_arguments.start_seconds),
        analysis_duration_seconds=float(parsed_arguments.analysis_duration_seconds),
    )

    result = analyse_peaks_from_audio_file(input_path, settings)

    logger.info(
        "Input duration %.3f s, sample rate %d Hz, segment [%d, %d)",
        result.source_duration_seconds,
        result.sample_rate_hz,
        result.analysis_start_sample_index,
        result.analysis_start_sample_index + result.analysis_length_samples,
    )

    print(summarise_peaks_text(result, frequency_decimals=2, magnitude_decimals=8))

    _plot_result(
        result,
        title=f"Main peaks: {input_path}",
        output_basename=parsed_arguments.output_basename,
        show_interactive=bool(parsed_arguments.show),
    )


def run_synthetic_command(parsed_arguments: argparse.Namespace) -> None:
    source = SyntheticWaveSource(
        frequencies_hz=list(parsed_arguments.frequencies_hz),
        amplitudes=list(parsed_arguments.amplitudes),
        sample_rate_hz=int(parsed_arguments.sample_rate_hz),
        duration_seconds=float(parsed_arguments.duration_seconds),
    )

    settings = PeakAnalysisSettings(
        neighborhood_hz=float(parsed_arguments.neighborhood_hz),
        min_magnitude_threshold=float(parsed_arguments.min_magnitude_threshold),
        window_gain=None if parsed_arguments.mean_window_gain else HANN_WINDOW_GAIN,
    )

    result = analyse_peaks_from_wave_source(source, settings)

    print(summarise_peaks_text(result, frequency_decimals=1, magnitude_decimals=3))

    _plot_result(
        result,
        title="Main peaks: synthetic composite wave",
        output_basename=parsed_arguments.output_basename,
        show_interactive=bool(parsed_arguments.show),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parsed_arguments = parse_arguments(argv)
    configure_logging(bool(parsed_arguments.verbose))

    command_name = str(parsed_arguments.command_name)

    try:
        if command_name == "file":
            run_file_command(parsed_arguments)
        elif command_name == "synthetic":
            run_synthetic_command(parsed_arguments)
        else:
            raise ValueError(f"Unknown command: {command_name}")
    except PeakAnalysisError as analysis_error:
        logger.error("%s: %s", type(analysis_error).__name__, analysis_error)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
