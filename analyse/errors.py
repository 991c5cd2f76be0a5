# analyse/errors.py
"""
Error types raised by the peak analysis pipeline.

Every error is terminal for the current analysis run. The library raises,
the CLI reports and exits.
"""

from __future__ import annotations


class PeakAnalysisError(Exception):
    """Base class for all analysis errors."""


class InvalidInputError(PeakAnalysisError, ValueError):
    """Malformed parameters: mismatched lengths, non-positive rate/duration, too-short window."""


class UnsupportedFormatError(PeakAnalysisError, ValueError):
    """Audio file extension is not one of the supported formats."""


class DecodeError(PeakAnalysisError, RuntimeError):
    """The audio decoder failed to read or decode the file."""


class RangeError(PeakAnalysisError, IndexError):
    """Requested start/duration window exceeds the available samples."""
