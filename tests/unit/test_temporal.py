"""Unit tests for time-series synthesis."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.distributions.temporal import (
    TimeSeriesSynthesizer,
    day_of_week,
    seasonal_component,
)

pytestmark = pytest.mark.unit

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestSeasonality:
    """Tests for the seasonal term."""

    def test_day_of_week_sunday_is_zero(self) -> None:
        """Sunday maps to 0 and Monday to 1."""
        assert day_of_week(datetime(2024, 1, 7)) == 0
        assert day_of_week(datetime(2024, 1, 1)) == 1
        assert day_of_week(datetime(2024, 1, 6)) == 6

    def test_sunday_midnight_has_no_seasonality(self) -> None:
        """Both sine terms vanish at day 0, hour 0."""
        assert seasonal_component(datetime(2024, 1, 7), 5.0) == 0.0

    def test_seasonal_formula(self) -> None:
        """Weekly and daily terms are weighted 0.3 and 0.2."""
        timestamp = datetime(2024, 1, 3, 6)  # Wednesday, 06:00
        expected = 2.0 * (
            math.sin(2 * math.pi * 3 / 7) * 0.3 + math.sin(2 * math.pi * 6 / 24) * 0.2
        )

        assert seasonal_component(timestamp, 2.0) == pytest.approx(expected)


class TestTimeSeriesSynthesizer:
    """Tests for TimeSeriesSynthesizer."""

    def test_point_count_matches_window(self) -> None:
        """30 days at 24h yields 30 points."""
        synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(1))
        series = synthesizer.synthesize(START, START + timedelta(days=30), baseline=2.0)

        assert len(series.data_points) == 30
        assert series.sampling_interval == "24h"
        assert series.aggregation_method == "avg"
        assert series.interpolation_method == "linear"

    def test_weekly_interval(self) -> None:
        """A 90-day window at 168h yields 12 points."""
        synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(1))
        series = synthesizer.synthesize(
            START, START + timedelta(days=90), baseline=25.0, interval_hours=168
        )

        assert len(series.data_points) == 12
        assert series.sampling_interval == "168h"

    def test_points_are_evenly_spaced(self) -> None:
        """Points start at start and advance by the interval."""
        synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(1))
        series = synthesizer.synthesize(START, START + timedelta(days=5), baseline=1.0)

        timestamps = [point.timestamp for point in series.data_points]
        assert timestamps == [START + timedelta(days=i) for i in range(5)]

    def test_inverted_range_is_empty(self) -> None:
        """An inverted window yields no points and consumes no draws."""
        rng = DeterministicRandomSource(1)
        synthesizer = TimeSeriesSynthesizer(rng)
        series = synthesizer.synthesize(START, START - timedelta(days=3), baseline=1.0)

        assert series.data_points == []
        assert rng.state == 1

    def test_values_and_confidence_bounds(self) -> None:
        """Values are non-negative and confidence stays in [0.1, 1]."""
        synthesizer = TimeSeriesSynthesizer(
            DeterministicRandomSource(3), outlier_frequency=0.2
        )
        series = synthesizer.synthesize(
            START, START + timedelta(days=60), baseline=0.5, trend=-1.0, noise=1.0
        )

        assert all(point.value >= 0.0 for point in series.data_points)
        assert all(0.1 <= point.confidence <= 1.0 for point in series.data_points)

    def test_noiseless_series_follows_trend(self) -> None:
        """Without noise, seasonality, or outliers the value is the trend line."""
        synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(1), outlier_frequency=0.0)
        series = synthesizer.synthesize(
            START, START + timedelta(days=10), baseline=10.0, trend=5.0, noise=0.0
        )

        assert series.values() == pytest.approx([10.0 + 5.0 * i / 10 for i in range(10)])
        assert all(point.confidence == 1.0 for point in series.data_points)
        assert not any(point.metadata.is_outlier for point in series.data_points)

    def test_all_outliers_when_frequency_is_one(self) -> None:
        """outlier_frequency=1 flags every point."""
        synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(1), outlier_frequency=1.0)
        series = synthesizer.synthesize(START, START + timedelta(days=10), baseline=3.0)

        assert all(point.metadata.is_outlier for point in series.data_points)

    def test_noise_scale_zero_removes_noise(self) -> None:
        """A zero noise scale silences every call's noise factor."""
        synthesizer = TimeSeriesSynthesizer(
            DeterministicRandomSource(1), outlier_frequency=0.0, noise_scale=0.0
        )
        series = synthesizer.synthesize(START, START + timedelta(days=4), baseline=2.0, noise=0.5)

        assert all(point.metadata.noise_component == 0.0 for point in series.data_points)

    def test_repeated_calls_differ(self) -> None:
        """Each call consumes state, so the same window gives a new series."""
        synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(1))
        first = synthesizer.synthesize(START, START + timedelta(days=10), baseline=2.0)
        second = synthesizer.synthesize(START, START + timedelta(days=10), baseline=2.0)

        assert first.values() != second.values()

    def test_same_seed_same_series(self) -> None:
        """Same seed reproduces the series."""
        first = TimeSeriesSynthesizer(DeterministicRandomSource(5)).synthesize(
            START, START + timedelta(days=10), baseline=2.0, seasonality=0.3
        )
        second = TimeSeriesSynthesizer(DeterministicRandomSource(5)).synthesize(
            START, START + timedelta(days=10), baseline=2.0, seasonality=0.3
        )

        assert first == second
