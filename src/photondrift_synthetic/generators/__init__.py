"""Entity generators for photondrift-synthetic.

This module provides:
- DataGenerator: Base class for all generators
- DriftEventGenerator: Drift events with severity-correlated analysis
- ArchitectureHealthGenerator: Per-repository health snapshots
- TeamMetricsGenerator: Per-team productivity and health rollups
- BatchOrchestrator: Complete, linked dataset generation
"""

from __future__ import annotations

from photondrift_synthetic.generators.architecture_health import ArchitectureHealthGenerator
from photondrift_synthetic.generators.base import TEAM_ROSTER, DataGenerator
from photondrift_synthetic.generators.drift_event import DriftEventGenerator
from photondrift_synthetic.generators.orchestrator import (
    BatchOrchestrator,
    generate_complete_dataset,
)
from photondrift_synthetic.generators.relationships import link_batch
from photondrift_synthetic.generators.team_metrics import TeamMetricsGenerator

__all__ = [
    "DataGenerator",
    "DriftEventGenerator",
    "ArchitectureHealthGenerator",
    "TeamMetricsGenerator",
    "BatchOrchestrator",
    "generate_complete_dataset",
    "link_batch",
    "TEAM_ROSTER",
]
