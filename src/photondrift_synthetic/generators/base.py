"""Base generator class and utilities.

This module defines the DataGenerator base that all entity generators extend,
plus pools and helpers shared between them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any

from photondrift_synthetic.config import GeneratorConfig
from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.distributions.temporal import TimeSeriesSynthesizer
from photondrift_synthetic.errors import ConfigurationError
from photondrift_synthetic.observability import get_logger

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class DataGenerator(ABC):
    """Abstract base class for synthetic entity generators.

    All generators must implement:
    - generate_batch: Generate a list of entities

    Generators share:
    - One DeterministicRandomSource passed in by the caller; generators never
      seed their own randomness
    - A TimeSeriesSynthesizer bound to that source and the config's noise settings

    Attributes:
        rng: Random source owned by the current run or branch
        config: Generator configuration
        synthesizer: Time-series synthesizer drawing from rng

    Example:
        >>> class MyGenerator(DataGenerator):
        ...     def generate_batch(self, count: int, **kwargs) -> list[float]:
        ...         return [self.rng.next() for _ in range(count)]
    """

    def __init__(
        self,
        rng: DeterministicRandomSource,
        config: GeneratorConfig | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            rng: Random source; consumed in a fixed order by every call
            config: Generator configuration (defaults to GeneratorConfig())
        """
        self.rng = rng
        self.config = config or GeneratorConfig()
        self.synthesizer = TimeSeriesSynthesizer(
            rng,
            outlier_frequency=self.config.outlier_frequency,
            noise_scale=self.config.noise_scale,
        )

    @abstractmethod
    def generate_batch(  # pragma: no cover - abstract method
        self, count: int, **kwargs: Any
    ) -> list[Any]:
        """Generate a batch of entities.

        Args:
            count: Number of entities to generate
            **kwargs: Generator-specific options

        Returns:
            List of generated entities
        """
        ...

    def _log_generation(self, entity: str, count: int, **context: Any) -> None:
        """Log generation activity.

        Args:
            entity: Name of the entity being generated
            count: Number of records generated
            **context: Extra fields (repository, team)
        """
        get_logger().info("data_generated", entity=entity, count=count, **context)

    def _require_count(self, count: int, *, field_path: str = "count") -> None:
        """Reject negative batch sizes before any randomness is consumed.

        Raises:
            ConfigurationError: If count is negative.
        """
        if count < 0:
            raise ConfigurationError(
                f"{field_path} must be non-negative, got {count}",
                field_path=field_path,
                operation="generate_batch",
            )


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def as_utc(timestamp: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def epoch_millis(timestamp: datetime) -> int:
    """Whole milliseconds since the Unix epoch."""
    return (as_utc(timestamp) - EPOCH) // timedelta(milliseconds=1)


# Common pools for reuse
SEVERITIES: tuple[str, ...] = ("low", "medium", "high", "critical")

SEVERITY_MULTIPLIER: dict[str, int] = {
    "low": 1,
    "medium": 2,
    "high": 3,
    "critical": 4,
}

TEAM_ROSTER: tuple[str, ...] = (
    "Frontend Team",
    "Backend Team",
    "DevOps Team",
    "QA Team",
    "Architecture Team",
)
