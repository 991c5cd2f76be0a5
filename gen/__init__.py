# gen/__init__.py
"""
gen package

Offline test-tone generation for peak analysis.

This package contains:
- command line interface entrypoint (gen.cli) writing composite sine WAV files

Typical usage:
    python -m gen.cli --frequencies 440 1000 --amplitudes 0.5 0.25
"""
