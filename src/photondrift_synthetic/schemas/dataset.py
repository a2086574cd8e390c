"""Top-level dataset returned by the orchestrator."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from photondrift_synthetic.config import GeneratorConfig
from photondrift_synthetic.schemas.architecture_health import ArchitectureHealthSnapshot
from photondrift_synthetic.schemas.common import SyntheticModel, TimeWindow
from photondrift_synthetic.schemas.drift_event import DriftEvent
from photondrift_synthetic.schemas.team_metrics import TeamMetricsSnapshot


class DatasetStatistics(SyntheticModel):
    total_drift_events: int = Field(..., ge=0)
    total_health_records: int = Field(..., ge=0)
    total_team_records: int = Field(..., ge=0)
    date_range: TimeWindow


class DatasetMetadata(SyntheticModel):
    generation_timestamp: datetime
    config: GeneratorConfig
    statistics: DatasetStatistics


class Dataset(SyntheticModel):
    """Complete generated dataset.

    The caller owns the dataset entirely; nothing is cached or shared.

    Attributes:
        drift_events: Events for every repository, chronological per repository
        architecture_health: Daily snapshots for every repository
        team_metrics: One snapshot per team
        metadata: Generation anchor, configuration, and counts
    """

    drift_events: list[DriftEvent] = Field(default_factory=list)
    architecture_health: list[ArchitectureHealthSnapshot] = Field(default_factory=list)
    team_metrics: list[TeamMetricsSnapshot] = Field(default_factory=list)
    metadata: DatasetMetadata
