"""
Tests for analyse/source.py: composite synthesis, wave sources, segment extraction.
"""

import numpy as np
import pytest

from analyse.errors import InvalidInputError, RangeError
from analyse.source import (
    DecodedWaveSource,
    SyntheticWaveSource,
    Waveform,
    extract_segment,
    generate_composite_wave,
)

# ---------------------------------------------------------------------------
# Composite synthesis
# ---------------------------------------------------------------------------


class TestGenerateCompositeWave:
    def test_single_sine_matches_formula(self):
        """One component at 50 Hz reproduces sin(2*pi*50*i/1024)."""
        wave = generate_composite_wave([50], [1.0], 1024, 1.0)
        i = np.arange(1024)
        assert wave.shape == (1024,)
        np.testing.assert_allclose(wave, np.sin(2 * np.pi * 50 * i / 1024), atol=1e-12)

    def test_components_are_summed(self):
        wave = generate_composite_wave([10, 30], [0.5, 2.0], 256, 0.5)
        i = np.arange(128)
        expected = 0.5 * np.sin(2 * np.pi * 10 * i / 256) + 2.0 * np.sin(2 * np.pi * 30 * i / 256)
        np.testing.assert_allclose(wave, expected, atol=1e-12)

    def test_sample_count_is_floored(self):
        """floor(1000 * 0.0125) = 12."""
        assert generate_composite_wave([100], [1.0], 1000, 0.0125).size == 12
        assert generate_composite_wave([100], [1.0], 100, 0.019999).size == 1

    def test_synthetic_samples_are_not_normalised(self):
        wave = generate_composite_wave([1], [3.0], 64, 1.0)
        assert np.max(np.abs(wave)) == pytest.approx(3.0, rel=1e-6)

    def test_empty_component_list_gives_silence(self):
        wave = generate_composite_wave([], [], 100, 1.0)
        assert wave.size == 100
        assert not np.any(wave)

    def test_mismatched_lengths_raise(self):
        with pytest.raises(InvalidInputError, match="frequencies"):
            generate_composite_wave([50, 60], [1.0], 1024, 1.0)

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            generate_composite_wave([50], [1.0, 2.0], 1024, 1.0)

    @pytest.mark.parametrize("sample_rate_hz", [0, -8000])
    def test_non_positive_sample_rate_raises(self, sample_rate_hz):
        with pytest.raises(InvalidInputError, match="Sample rate"):
            generate_composite_wave([50], [1.0], sample_rate_hz, 1.0)

    @pytest.mark.parametrize("duration_seconds", [0.0, -1.0])
    def test_non_positive_duration_raises(self, duration_seconds):
        with pytest.raises(InvalidInputError, match="Duration"):
            generate_composite_wave([50], [1.0], 1024, duration_seconds)

    def test_duration_shorter_than_one_sample_raises(self):
        with pytest.raises(InvalidInputError, match="no samples"):
            generate_composite_wave([50], [1.0], 100, 0.001)


# ---------------------------------------------------------------------------
# Waveform container
# ---------------------------------------------------------------------------


class TestWaveform:
    def test_duration_is_samples_over_rate(self):
        waveform = Waveform(samples=np.zeros(22050), sample_rate_hz=44100)
        assert waveform.number_of_samples == 22050
        assert waveform.duration_seconds == pytest.approx(0.5)

    def test_samples_are_coerced_to_float64(self):
        waveform = Waveform(samples=[0, 1, 2], sample_rate_hz=10)
        assert waveform.samples.dtype == np.float64

    def test_rejects_non_positive_sample_rate(self):
        with pytest.raises(InvalidInputError):
            Waveform(samples=np.zeros(4), sample_rate_hz=0)

    def test_rejects_multichannel_samples(self):
        with pytest.raises(InvalidInputError, match="1D"):
            Waveform(samples=np.zeros((4, 2)), sample_rate_hz=8)


# ---------------------------------------------------------------------------
# Segment extraction
# ---------------------------------------------------------------------------


class TestExtractSegment:
    def _ramp(self, length: int = 1024, sample_rate_hz: int = 1024) -> Waveform:
        return Waveform(samples=np.arange(length, dtype=np.float64), sample_rate_hz=sample_rate_hz)

    def test_indices_are_floored(self):
        segment = extract_segment(self._ramp(), start_seconds=0.5, duration_seconds=0.25)
        assert segment.number_of_samples == 256
        assert segment.samples[0] == 512
        assert segment.samples[-1] == 767

    def test_segment_method_delegates(self):
        waveform = self._ramp()
        np.testing.assert_array_equal(
            waveform.segment(0.25, 0.25).samples,
            extract_segment(waveform, 0.25, 0.25).samples,
        )

    def test_returns_a_copy(self):
        waveform = self._ramp()
        segment = extract_segment(waveform, 0.0, 0.5)
        segment.samples[0] = -99.0
        assert waveform.samples[0] == 0.0

    def test_whole_waveform(self):
        segment = extract_segment(self._ramp(), 0.0, 1.0)
        assert segment.number_of_samples == 1024

    @pytest.mark.parametrize("length", [44109, 44110, 88199])
    def test_open_ended_segment_runs_to_the_last_sample(self, length):
        waveform = self._ramp(length=length, sample_rate_hz=44100)
        segment = extract_segment(waveform, 0.25)
        assert segment.number_of_samples == length - 11025
        assert segment.samples[-1] == length - 1

    def test_open_ended_segment_past_the_end_raises(self):
        with pytest.raises(RangeError, match="starting point"):
            extract_segment(self._ramp(), 2.0)

    def test_start_at_end_with_zero_duration_is_empty(self):
        """Start == duration and zero length is the last valid request."""
        waveform = self._ramp()
        segment = extract_segment(waveform, waveform.duration_seconds, 0.0)
        assert segment.number_of_samples == 0
        assert segment.sample_rate_hz == 1024

    def test_start_one_sample_beyond_end_raises(self):
        waveform = self._ramp()
        with pytest.raises(RangeError, match="starting point"):
            extract_segment(waveform, 1025 / 1024, 0.0)

    def test_end_beyond_length_raises(self):
        with pytest.raises(RangeError, match="end point"):
            extract_segment(self._ramp(), 0.5, 0.75)

    def test_range_error_is_an_index_error(self):
        with pytest.raises(IndexError):
            extract_segment(self._ramp(), 2.0, 0.0)

    @pytest.mark.parametrize("start, duration", [(-0.1, 0.5), (0.0, -0.5)])
    def test_negative_arguments_raise(self, start, duration):
        with pytest.raises(InvalidInputError):
            extract_segment(self._ramp(), start, duration)


# ---------------------------------------------------------------------------
# Wave sources
# ---------------------------------------------------------------------------


class TestWaveSources:
    def test_synthetic_source_load(self, composite_source):
        waveform = composite_source.load()
        assert waveform.sample_rate_hz == 1024
        assert waveform.number_of_samples == 15360
        assert waveform.duration_seconds == pytest.approx(15.0)

    def test_synthetic_source_validates(self):
        source = SyntheticWaveSource([50.0], [1.0, 0.5], 1024, 1.0)
        with pytest.raises(InvalidInputError):
            source.load()

    def test_decoded_source_load(self, write_tone):
        path = write_tone(sample_rate_hz=8000, duration_seconds=0.5)
        waveform = DecodedWaveSource(path).load()
        assert waveform.sample_rate_hz == 8000
        assert waveform.number_of_samples == 4000
        assert waveform.duration_seconds == pytest.approx(0.5)

    def test_sources_share_the_load_contract(self, write_tone):
        path = write_tone(frequencies_hz=[100.0], amplitudes=[0.5], sample_rate_hz=4000)
        sources = [
            SyntheticWaveSource([100.0], [0.5], 4000, 1.0),
            DecodedWaveSource(path),
        ]
        synthetic, decoded = [source.load() for source in sources]
        np.testing.assert_allclose(decoded.samples, synthetic.samples, atol=1.0 / 32767)
