"""Pydantic schemas for synthetic data generation.

This module provides type-safe Pydantic models for:
- Time series: TimeSeries, TimeSeriesPoint
- Drift events: DriftEvent and its nested analysis blocks
- Architecture health: ArchitectureHealthSnapshot, HealthForecast
- Team metrics: TeamMetricsSnapshot
- Dataset: Top-level generation result
"""

from __future__ import annotations

from photondrift_synthetic.schemas.architecture_health import (
    ArchitectureHealthSnapshot,
    HealthForecast,
)
from photondrift_synthetic.schemas.common import TimeSeries, TimeSeriesPoint, TimeWindow
from photondrift_synthetic.schemas.dataset import Dataset, DatasetMetadata, DatasetStatistics
from photondrift_synthetic.schemas.drift_event import DriftEvent, EventRelationships
from photondrift_synthetic.schemas.team_metrics import TeamMetricsSnapshot

__all__ = [
    # Time series
    "TimeSeries",
    "TimeSeriesPoint",
    "TimeWindow",
    # Drift events
    "DriftEvent",
    "EventRelationships",
    # Architecture health
    "ArchitectureHealthSnapshot",
    "HealthForecast",
    # Team metrics
    "TeamMetricsSnapshot",
    # Dataset
    "Dataset",
    "DatasetMetadata",
    "DatasetStatistics",
]
