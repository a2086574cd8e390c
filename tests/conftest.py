"""Shared pytest fixtures for photondrift-synthetic tests.

This module provides structlog capture plus fixed dates and configurations,
so every generated value in the suite is reproducible.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone

import pytest
import structlog

from photondrift_synthetic.config import DataVolume, DateRange, GeneratorConfig
from photondrift_synthetic.distributions.random_source import DeterministicRandomSource

FIXED_START = datetime(2024, 1, 1, tzinfo=timezone.utc)
FIXED_END = datetime(2024, 3, 31, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    This fixture ensures structlog outputs to stdout so that capsys
    can capture the output in tests.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def fixed_date() -> datetime:
    """Base timestamp used for single-event tests."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_range() -> DateRange:
    """Q1 2024 generation window."""
    return DateRange(start=FIXED_START, end=FIXED_END)


@pytest.fixture
def default_config(fixed_range: DateRange) -> GeneratorConfig:
    """Default configuration pinned to a fixed window."""
    return GeneratorConfig(date_range=fixed_range)


@pytest.fixture
def small_config(fixed_range: DateRange) -> GeneratorConfig:
    """SMALL_DATASET volumes pinned to a fixed window."""
    return GeneratorConfig(
        seed=42,
        date_range=fixed_range,
        data_volume=DataVolume(
            repositories=2,
            events_per_repo=50,
            team_members=8,
            time_period_days=30,
            scan_frequency_hours=12,
        ),
    )


@pytest.fixture
def tiny_config(fixed_range: DateRange) -> GeneratorConfig:
    """Minimal volumes for export and round-trip tests."""
    return GeneratorConfig(
        seed=7,
        date_range=fixed_range,
        data_volume=DataVolume(repositories=1, events_per_repo=5, time_period_days=2),
    )


@pytest.fixture
def rng() -> DeterministicRandomSource:
    """Random source with the default seed."""
    return DeterministicRandomSource(12345)
