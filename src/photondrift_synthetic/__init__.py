"""Deterministic synthetic data generation for PhotonDrift analytics.

This package generates fully linked, reproducible datasets of architecture
drift events, architecture-health snapshots, and team-productivity metrics
for dashboards and test suites that run without a live detection backend.

Key Components:
- distributions: Seeded random source and time-series synthesis
- generators: Drift event, architecture health, and team metrics generators
- schemas: Pydantic models defining the generated entities
- config: Generator configuration, presets, and YAML loading
- export: JSON, CSV, and PyArrow projections of generated data
- observability: structlog setup

Example:
    >>> from photondrift_synthetic import create_config, generate_complete_dataset
    >>>
    >>> config = create_config("SMALL_DATASET", seed=42)
    >>> dataset = generate_complete_dataset(config)
    >>> len(dataset.drift_events)
    100
"""

from __future__ import annotations

__version__ = "0.1.0"

from photondrift_synthetic.config import (
    MOCK_DATA_PRESETS,
    DataVolume,
    DateRange,
    GeneratorConfig,
    build_config,
    create_config,
)
from photondrift_synthetic.distributions import DeterministicRandomSource, TimeSeriesSynthesizer
from photondrift_synthetic.errors import ConfigurationError, EmptyDomainError
from photondrift_synthetic.export import from_json, to_arrow_table, to_csv, to_json, to_records
from photondrift_synthetic.generators import (
    ArchitectureHealthGenerator,
    BatchOrchestrator,
    DriftEventGenerator,
    TeamMetricsGenerator,
    generate_complete_dataset,
    link_batch,
)
from photondrift_synthetic.observability import configure_logging, get_logger
from photondrift_synthetic.schemas import Dataset

__all__ = [
    "__version__",
    # Configuration
    "GeneratorConfig",
    "DateRange",
    "DataVolume",
    "MOCK_DATA_PRESETS",
    "build_config",
    "create_config",
    # Errors
    "ConfigurationError",
    "EmptyDomainError",
    # Distributions
    "DeterministicRandomSource",
    "TimeSeriesSynthesizer",
    # Generators
    "DriftEventGenerator",
    "ArchitectureHealthGenerator",
    "TeamMetricsGenerator",
    "BatchOrchestrator",
    "generate_complete_dataset",
    "link_batch",
    # Export
    "to_json",
    "from_json",
    "to_records",
    "to_arrow_table",
    "to_csv",
    "Dataset",
    # Logging
    "configure_logging",
    "get_logger",
]
