"""
Tests for input processing.

Tests weather sanitization and profile validation.
"""

from datetime import datetime, timedelta

import pytest
import pytz

from src.zero_hydro.core.exceptions import InvalidProfile, UpstreamDataUnavailable
from src.zero_hydro.models import (
    WaterBodyProfile,
    WeatherSample,
    BasinType,
    DepthCategory,
)
from src.zero_hydro.processing import InputProcessor, ProfileValidator, SampleSanitizer


class TestSampleSanitizer:
    """Test cases for SampleSanitizer."""

    @pytest.fixture
    def sanitizer(self):
        return SampleSanitizer()

    def test_clean_series_untouched(self, sanitizer, sample_factory, june_start):
        """Valid samples pass through without substitutions."""
        samples = sample_factory(june_start, 5)

        clean, substituted = sanitizer.sanitize(samples)

        assert substituted == 0
        assert clean == samples

    def test_missing_fields_get_defaults(self, sanitizer, june_start):
        """Missing values are replaced by documented defaults."""
        samples = [WeatherSample(timestamp=june_start)]

        clean, substituted = sanitizer.sanitize(samples)

        assert substituted == 7
        sample = clean[0]
        assert sample.air_temperature == 10.0
        assert sample.pressure == 1013.25
        assert sample.wind_speed == 0.0
        assert sample.wind_direction == 0.0
        assert sample.precipitation == 0.0
        assert sample.cloud_cover == 0.0
        assert sample.weather_code == 0

    def test_non_numeric_and_non_finite(self, sanitizer, sample_factory, june_start):
        """Strings, NaN and out-of-range values are malformed."""
        samples = sample_factory(
            june_start,
            3,
            air_temperature=lambda i: ["warm", float("nan"), 14.0][i],
            pressure=lambda i: [1010.0, 1010.0, 5.0][i],
        )

        clean, substituted = sanitizer.sanitize(samples)

        assert substituted == 3
        assert clean[0].air_temperature == 10.0
        assert clean[1].air_temperature == 10.0
        assert clean[2].air_temperature == 14.0
        assert clean[2].pressure == 1013.25

    def test_negative_precipitation(self, sanitizer, sample_factory, june_start):
        """Negative rain is malformed."""
        clean, substituted = sanitizer.sanitize(
            sample_factory(june_start, 1, precipitation=-2.0)
        )

        assert substituted == 1
        assert clean[0].precipitation == 0.0

    def test_empty_series(self, sanitizer):
        """An empty series is unusable."""
        with pytest.raises(UpstreamDataUnavailable):
            sanitizer.sanitize([])

    def test_non_increasing_timestamps(self, sanitizer, sample_factory, june_start):
        """Duplicated or reversed hours are unusable."""
        samples = sample_factory(june_start, 3)
        duplicated = [samples[0], samples[1], samples[1]]
        reversed_ = list(reversed(samples))

        with pytest.raises(UpstreamDataUnavailable):
            sanitizer.sanitize(duplicated)
        with pytest.raises(UpstreamDataUnavailable):
            sanitizer.sanitize(reversed_)

    def test_mixed_naive_and_aware_rejected(self, sanitizer):
        """A series cannot mix local wall-clock and aware timestamps."""
        naive = WeatherSample(timestamp=datetime(2024, 6, 10, 12, 0))
        aware = WeatherSample(timestamp=pytz.UTC.localize(datetime(2024, 6, 10, 11, 0)))

        with pytest.raises(UpstreamDataUnavailable):
            sanitizer.sanitize([naive, aware])

    def test_aware_series_across_dst_transitions(self, sanitizer):
        """Hourly UTC series stay strictly increasing through both DST changes."""
        spring = [
            WeatherSample(timestamp=pytz.UTC.localize(datetime(2024, 3, 30, 12, 0)) + timedelta(hours=i))
            for i in range(48)
        ]
        autumn = [
            WeatherSample(timestamp=pytz.UTC.localize(datetime(2024, 10, 26, 12, 0)) + timedelta(hours=i))
            for i in range(48)
        ]

        for series in (spring, autumn):
            clean, _ = sanitizer.sanitize(series)
            assert len(clean) == 48

    def test_naive_series_across_spring_gap(self, sanitizer, sample_factory):
        """Naive hours are ordered as written, including the skipped hour."""
        samples = sample_factory(datetime(2024, 3, 30, 0, 0), 48)

        clean, _ = sanitizer.sanitize(samples)

        assert len(clean) == 48

    def test_naive_repeated_autumn_hour_rejected(self, sanitizer):
        """A repeated wall-clock hour is ambiguous without an offset."""
        times = [
            datetime(2024, 10, 27, 1, 0),
            datetime(2024, 10, 27, 2, 0),
            datetime(2024, 10, 27, 2, 0),
            datetime(2024, 10, 27, 3, 0),
        ]

        with pytest.raises(UpstreamDataUnavailable):
            sanitizer.sanitize([WeatherSample(timestamp=t) for t in times])


class TestProfileValidator:
    """Test cases for ProfileValidator."""

    @pytest.fixture
    def validator(self):
        return ProfileValidator()

    def test_defaults_are_valid(self, validator):
        """A minimal profile is valid."""
        is_valid, errors = validator.validate_profile(WaterBodyProfile(basin=BasinType.POND))

        assert is_valid
        assert errors == []

    def test_depth_outside_category(self, validator):
        """Numeric depth must agree with its category."""
        profile = WaterBodyProfile(
            basin=BasinType.DEEP_LAKE,
            depth_category=DepthCategory.SHALLOW,
            mean_depth=20.0,
        )

        with pytest.raises(InvalidProfile):
            validator.ensure_valid(profile)

    def test_non_positive_values(self, validator):
        """Depth and area must be positive and shape factor at least 1."""
        profile = WaterBodyProfile(
            basin=BasinType.POND,
            mean_depth=0.0,
            surface_area=-5.0,
            shape_factor=0.5,
        )

        is_valid, errors = validator.validate_profile(profile)

        assert not is_valid
        assert len(errors) == 3

    def test_empty_species(self, validator):
        """At least one target species is required."""
        profile = WaterBodyProfile(basin=BasinType.POND, target_species=())

        with pytest.raises(InvalidProfile):
            validator.ensure_valid(profile)


class TestInputProcessor:
    """Test cases for InputProcessor facade."""

    def test_validates_profile_before_samples(self, sample_factory, june_start):
        """An invalid profile fails even with a good series."""
        processor = InputProcessor()
        profile = WaterBodyProfile(basin=BasinType.POND, shape_factor=0.1)

        with pytest.raises(InvalidProfile):
            processor.prepare(profile, sample_factory(june_start, 3))

    def test_prepare(self, sample_factory, june_start):
        """Valid input is returned sanitized."""
        processor = InputProcessor()
        samples = sample_factory(june_start, 3, wind_speed=lambda i: None if i == 1 else 5.0)

        clean, substituted = processor.prepare(WaterBodyProfile(basin=BasinType.POND), samples)

        assert substituted == 1
        assert clean[1].wind_speed == 0.0
