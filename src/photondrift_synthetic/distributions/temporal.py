"""Time-series synthesis.

This module builds realistic measurement sequences from four components:
- Linear trend over the window
- Weekly and daily seasonality
- Gaussian noise proportional to the baseline
- Occasional outliers
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.schemas.common import PointMetadata, TimeSeries, TimeSeriesPoint

# Fixed seasonal weighting
WEEKLY_WEIGHT = 0.3
DAILY_WEIGHT = 0.2

MIN_CONFIDENCE = 0.1


def day_of_week(timestamp: datetime) -> int:
    """Day index with Sunday as 0."""
    return timestamp.isoweekday() % 7


def seasonal_component(timestamp: datetime, seasonality: float) -> float:
    """Weekly plus daily seasonal term for a timestamp.

    Args:
        timestamp: Sample time (hour taken in the timestamp's own zone)
        seasonality: Amplitude of the seasonal term

    Returns:
        seasonality * (0.3 * sin(2pi * dow / 7) + 0.2 * sin(2pi * hour / 24))
    """
    weekly = math.sin(2 * math.pi * day_of_week(timestamp) / 7) * WEEKLY_WEIGHT
    daily = math.sin(2 * math.pi * timestamp.hour / 24) * DAILY_WEIGHT
    return seasonality * (weekly + daily)


class TimeSeriesSynthesizer:
    """Synthesizes trend + seasonal + noise + outlier series.

    Each call consumes random source state, so synthesizing the same window
    twice yields two different series.

    Attributes:
        rng: Random source owned by the current run
        outlier_frequency: Probability that a point is an outlier
        noise_scale: Multiplier applied to every call's noise factor

    Example:
        >>> synthesizer = TimeSeriesSynthesizer(DeterministicRandomSource(42))
        >>> series = synthesizer.synthesize(
        ...     datetime(2024, 1, 1), datetime(2024, 1, 31), baseline=2.0, noise=0.2
        ... )
        >>> len(series.data_points)
        30
    """

    def __init__(
        self,
        rng: DeterministicRandomSource,
        *,
        outlier_frequency: float = 0.05,
        noise_scale: float = 1.0,
    ) -> None:
        self.rng = rng
        self.outlier_frequency = outlier_frequency
        self.noise_scale = noise_scale

    def synthesize(
        self,
        start: datetime,
        end: datetime,
        baseline: float,
        trend: float = 0.0,
        seasonality: float = 0.0,
        noise: float = 0.1,
        interval_hours: float = 24,
    ) -> TimeSeries:
        """Build a series over [start, end).

        Args:
            start: First sample time
            end: Exclusive end of the window
            baseline: Value at the start of the trend
            trend: Total change in the trend across the window
            seasonality: Amplitude of the seasonal term
            noise: Noise standard deviation as a fraction of baseline
            interval_hours: Spacing between samples

        Returns:
            TimeSeries with floor((end - start) / interval) points
        """
        interval = timedelta(hours=interval_hours)
        num_points = max(0, math.floor((end - start) / interval))
        effective_noise = noise * self.noise_scale
        noise_denominator = baseline * effective_noise

        points: list[TimeSeriesPoint] = []
        for i in range(num_points):
            timestamp = start + i * interval
            progress = i / num_points

            trend_value = baseline + trend * progress
            seasonal_value = seasonal_component(timestamp, seasonality)
            noise_value = self.rng.gaussian(0.0, effective_noise * baseline)

            is_outlier = self.rng.next() < self.outlier_frequency
            multiplier = 1 + self.rng.uniform(-0.5, 2) if is_outlier else 1.0

            value = max(0.0, (trend_value + seasonal_value + noise_value) * multiplier)

            if noise_denominator == 0:
                confidence = 1.0
            else:
                confidence = 1 - abs(noise_value) / noise_denominator
                confidence = max(MIN_CONFIDENCE, min(1.0, confidence))

            points.append(
                TimeSeriesPoint(
                    timestamp=timestamp,
                    value=value,
                    confidence=confidence,
                    metadata=PointMetadata(
                        is_outlier=is_outlier,
                        trend_component=trend_value,
                        seasonal_component=seasonal_value,
                        noise_component=noise_value,
                    ),
                )
            )

        return TimeSeries(
            data_points=points,
            sampling_interval=f"{interval_hours:g}h",
            aggregation_method="avg",
            interpolation_method="linear",
        )
