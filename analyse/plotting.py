# analyse/plotting.py
"""
Plotting helpers for peak analysis results.

Design goals:
- explicit labels, units, and titles
- no hidden global matplotlib state
- readable, boring plotting code
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import matplotlib.pyplot as plt

from analyse.pipeline import PeakAnalysisResult


# -------------------------------------------------------------------
# Global plotting defaults (local, not rcParams-global)
# -------------------------------------------------------------------

DEFAULT_FIGURE_SIZE = (10.0, 6.0)
DEFAULT_DPI = 100
DEFAULT_GRID = True


# -------------------------------------------------------------------
# Figure / axis helpers
# -------------------------------------------------------------------

def create_figure_and_axis(
    title: Optional[str] = None,
    figure_size: Tuple[float, float] = DEFAULT_FIGURE_SIZE,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Create a matplotlib figure and axis with consistent defaults.
    """
    figure, axis = plt.subplots(figsize=figure_size, dpi=DEFAULT_DPI)

    if title is not None:
        axis.set_title(title)

    axis.grid(DEFAULT_GRID)
    return figure, axis


def finalize_and_show_or_save(
    figure: plt.Figure,
    output_path: Optional[str | Path] = None,
    show_interactive: bool = True,
) -> None:
    """
    Finalise a plot: either show it interactively or save to disk.

    If output_path is provided:
        - the figure is saved as PNG
        - the figure is closed
    Otherwise:
        - the figure is shown interactively (unless show_interactive=False)
    """
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(output_path, bbox_inches="tight")
        plt.close(figure)
        return

    if show_interactive:
        plt.show()

    plt.close(figure)


def peaks_plot_path(output_basename: str | Path) -> Path:
    output_basename = Path(output_basename)
    return output_basename.with_name(f"{output_basename.stem}_peaks.png")


# -------------------------------------------------------------------
# Peak plot
# -------------------------------------------------------------------

def plot_magnitude_spectrum_with_peaks(
    result: PeakAnalysisResult,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Linear magnitude vs frequency, with detected peaks marked and labelled.
    """
    figure, axis = create_figure_and_axis(title=title)

    spectrum = result.spectrum
    axis.plot(spectrum.frequency_hz, spectrum.magnitude, linewidth=0.8, label="magnitude")

    if result.peaks:
        axis.scatter(
            [peak.frequency_hz for peak in result.peaks],
            [peak.magnitude for peak in result.peaks],
            color="tab:red",
            zorder=3,
            label="main peaks",
        )
        for peak in result.peaks:
            axis.annotate(
                f"{peak.frequency_hz:.1f} Hz",
                xy=(peak.frequency_hz, peak.magnitude),
                xytext=(4, 4),
                textcoords="offset points",
                fontsize=8,
            )

    axis.set_xlabel("Frequency (Hz)")
    axis.set_ylabel("Magnitude")
    axis.set_xlim(0.0, 0.5 * float(spectrum.sample_rate_hz))
    axis.set_ylim(bottom=0.0)
    axis.legend(loc="best")
    return figure
