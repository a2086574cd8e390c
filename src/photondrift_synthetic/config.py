"""Generator configuration for photondrift-synthetic.

This module defines:
- DateRange: Time window covered by a generation run
- DataVolume: How many repositories, events, and days to generate
- GeneratorConfig: Immutable per-run configuration
- MOCK_DATA_PRESETS: Named volume templates (small, medium, large)

Configurations validate at construction time. Direct construction and the
public loaders (build_config, create_config, GeneratorConfig.from_yaml) all
report failures as ConfigurationError with the offending field path.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from photondrift_synthetic.errors import ConfigurationError

# Defaults that leave the noise and correlation models unscaled
DEFAULT_SEED = 12345
DEFAULT_NOISE_LEVEL = 0.1
DEFAULT_CORRELATION_STRENGTH = 0.7
DEFAULT_OUTLIER_FREQUENCY = 0.05
DEFAULT_WINDOW_DAYS = 90


def _configuration_error(err: PydanticValidationError) -> ConfigurationError:
    first = err.errors()[0]
    field_path = ".".join(str(part) for part in first["loc"]) or None
    return ConfigurationError(
        f"Invalid generator configuration: {first['msg']}",
        field_path=field_path,
        internal_details=str(err),
    )


class _ConfigModel(BaseModel):
    """Frozen model whose constructor reports ConfigurationError."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as err:
            raise _configuration_error(err) from err


def _default_date_range() -> DateRange:
    end = datetime.now(timezone.utc)
    return DateRange(start=end - timedelta(days=DEFAULT_WINDOW_DAYS), end=end)


class DateRange(_ConfigModel):
    """Half-open time window [start, end).

    Naive datetimes are interpreted as UTC.

    Example:
        >>> window = DateRange(start=datetime(2024, 1, 1), end=datetime(2024, 4, 1))
        >>> window.duration.days
        91
    """

    start: datetime = Field(..., description="Inclusive start of the window")
    end: datetime = Field(..., description="Exclusive end of the window")

    @field_validator("start", "end")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.start >= self.end:
            raise ConfigurationError("start must be before end", field_path="date_range")
        return self

    @property
    def duration(self) -> timedelta:
        """Length of the window."""
        return self.end - self.start


class DataVolume(_ConfigModel):
    """Volume settings for a generation run.

    Attributes:
        repositories: Number of repositories (repo_1..repo_N)
        events_per_repo: Drift events generated per repository
        team_members: Team size hint carried for consumers
        time_period_days: Daily architecture-health snapshots per repository
        scan_frequency_hours: Scan cadence hint carried for consumers
    """

    repositories: int = Field(default=5, ge=0, description="Number of repositories")
    events_per_repo: int = Field(default=200, ge=0, description="Drift events per repository")
    team_members: int = Field(default=15, ge=0, description="Team size hint")
    time_period_days: int = Field(default=90, ge=0, description="Days of health history")
    scan_frequency_hours: float = Field(default=6, gt=0, description="Scan cadence in hours")


class GeneratorConfig(_ConfigModel):
    """Immutable configuration for one generation run.

    All generation is a pure function of (seed, config, call order): the same
    seed and the same sequence of generator calls always produce the same data.

    Attributes:
        seed: Seed for the deterministic random source
        locale: Locale tag carried for consumers
        date_range: Window drift events and team metrics are drawn from
        data_volume: Volume settings
        correlation_strength: Tightness of severity-conditioned draws (0.0-1.0)
        noise_level: Scale of time-series noise (0.1 = unscaled)
        outlier_frequency: Probability a time-series point is an outlier
        batch_size: Chunk size for streamed drift-event generation
        parallel_generation: Use independent per-branch random sources

    Example:
        >>> config = GeneratorConfig(
        ...     seed=42,
        ...     date_range=DateRange(start=datetime(2024, 1, 1), end=datetime(2024, 2, 1)),
        ...     data_volume=DataVolume(repositories=2, events_per_repo=10),
        ... )
    """

    seed: int = Field(default=DEFAULT_SEED, description="Random seed")
    locale: str = Field(default="en-US", min_length=2, description="Locale tag")
    date_range: DateRange = Field(
        default_factory=_default_date_range,
        description="Generation window",
    )
    data_volume: DataVolume = Field(default_factory=DataVolume, description="Volume settings")
    correlation_strength: float = Field(
        default=DEFAULT_CORRELATION_STRENGTH,
        ge=0.0,
        le=1.0,
        description="Severity-to-confidence correlation strength",
    )
    noise_level: float = Field(
        default=DEFAULT_NOISE_LEVEL,
        ge=0.0,
        le=1.0,
        description="Time-series noise level",
    )
    outlier_frequency: float = Field(
        default=DEFAULT_OUTLIER_FREQUENCY,
        ge=0.0,
        le=1.0,
        description="Outlier probability per time-series point",
    )
    batch_size: int = Field(default=100, gt=0, description="Streaming batch size")
    parallel_generation: bool = Field(
        default=False,
        description="Generate repositories and teams on independent branches",
    )

    @property
    def noise_scale(self) -> float:
        """Multiplier applied to every time-series noise factor."""
        return self.noise_level / DEFAULT_NOISE_LEVEL

    @classmethod
    def from_yaml(cls, path: str | Path) -> GeneratorConfig:
        """Load and validate a GeneratorConfig from a YAML file.

        Args:
            path: Path to the YAML document.

        Returns:
            Validated GeneratorConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            ConfigurationError: If schema validation fails.

        Example:
            >>> config = GeneratorConfig.from_yaml("generator.yaml")
            >>> config.seed
            42
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: dict[str, Any] | None = yaml.safe_load(f)

        return build_config(data or {})


MOCK_DATA_PRESETS: dict[str, DataVolume] = {
    "SMALL_DATASET": DataVolume(
        repositories=2,
        events_per_repo=50,
        team_members=8,
        time_period_days=30,
        scan_frequency_hours=12,
    ),
    "MEDIUM_DATASET": DataVolume(
        repositories=5,
        events_per_repo=200,
        team_members=15,
        time_period_days=90,
        scan_frequency_hours=6,
    ),
    "LARGE_DATASET": DataVolume(
        repositories=10,
        events_per_repo=500,
        team_members=25,
        time_period_days=180,
        scan_frequency_hours=3,
    ),
}


def build_config(data: Mapping[str, Any]) -> GeneratorConfig:
    """Validate a plain mapping into a GeneratorConfig.

    Args:
        data: Raw configuration values (e.g., parsed YAML).

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigurationError: With the dotted path of the first invalid field.
    """
    try:
        return GeneratorConfig.model_validate(dict(data))
    except PydanticValidationError as err:
        raise _configuration_error(err) from err


def create_config(preset: str = "MEDIUM_DATASET", **overrides: Any) -> GeneratorConfig:
    """Create a configuration from a named volume preset.

    Presets carry no behavior; they only fill data_volume. Noise and
    correlation settings default to the dashboard preset values.

    Args:
        preset: One of SMALL_DATASET, MEDIUM_DATASET, LARGE_DATASET
        **overrides: Any GeneratorConfig field

    Returns:
        Validated GeneratorConfig

    Raises:
        ConfigurationError: If the preset is unknown or an override is invalid.

    Example:
        >>> config = create_config("SMALL_DATASET", seed=7)
        >>> config.data_volume.events_per_repo
        50
    """
    if preset not in MOCK_DATA_PRESETS:
        available = ", ".join(MOCK_DATA_PRESETS)
        raise ConfigurationError(
            f"Preset '{preset}' not found. Available: {available}",
            field_path="preset",
        )

    values: dict[str, Any] = {
        "data_volume": MOCK_DATA_PRESETS[preset],
        "correlation_strength": 0.7,
        "noise_level": 0.15,
        "outlier_frequency": 0.05,
    }
    values.update(overrides)
    return build_config(values)
