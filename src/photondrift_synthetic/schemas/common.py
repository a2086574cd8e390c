"""Shared schema building blocks.

This module defines models reused across entity schemas:
- SyntheticModel: Frozen base model for every generated entity
- TimeSeriesPoint / TimeSeries: Synthesized measurement sequences
- TimeWindow: Closed time window used for periods and predictions
- SeasonalPattern: Periodic pattern summary
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SeverityType = Literal["low", "medium", "high", "critical"]
TrendType = Literal["improving", "stable", "declining"]


class SyntheticModel(BaseModel):
    """Base class for generated entities.

    All models are immutable (frozen=True) and reject unknown fields, so a
    dataset can be serialized to JSON and validated back without loss.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


class PointMetadata(SyntheticModel):
    """Decomposition of a time-series point into its model components."""

    is_outlier: bool
    trend_component: float
    seasonal_component: float
    noise_component: float


class TimeSeriesPoint(SyntheticModel):
    """Single synthesized measurement.

    Attributes:
        timestamp: Sample time
        value: Non-negative sample value
        confidence: Confidence derived from the noise magnitude
        metadata: Trend, seasonal, and noise components
    """

    timestamp: datetime
    value: float = Field(..., ge=0.0, description="Sample value")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Sample confidence")
    metadata: PointMetadata


class TimeSeries(SyntheticModel):
    """Ordered, fixed-interval sequence of points over [start, end)."""

    data_points: list[TimeSeriesPoint] = Field(default_factory=list)
    sampling_interval: str = Field(..., description="Interval between points, e.g. '24h'")
    aggregation_method: str = "avg"
    interpolation_method: str = "linear"

    def values(self) -> list[float]:
        """Return the point values in order."""
        return [point.value for point in self.data_points]


class TimeWindow(SyntheticModel):
    """Time window with explicit start and end."""

    start: datetime
    end: datetime


class SeasonalPattern(SyntheticModel):
    """Periodic pattern detected in historical data."""

    pattern_type: Literal["daily", "weekly", "monthly"]
    peak_times: list[str]
    strength: float
    confidence: float
