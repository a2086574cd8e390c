"""Complete dataset generation.

This module provides the BatchOrchestrator, which drives the entity
generators for every repository and team of a configuration and assembles
a Dataset.

Modes:
- Sequential (default): one random source seeded with config.seed, consumed
  in the order events (all repositories), health (all repositories), teams
- Parallel: one forked source per branch; repository i is branch i and team
  j is branch repositories + j. Branches run on a thread pool and merge in
  branch order, so output does not depend on scheduling.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from photondrift_synthetic.config import GeneratorConfig
from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.generators.architecture_health import ArchitectureHealthGenerator
from photondrift_synthetic.generators.base import TEAM_ROSTER, as_utc
from photondrift_synthetic.generators.drift_event import DriftEventGenerator
from photondrift_synthetic.generators.relationships import link_batch
from photondrift_synthetic.generators.team_metrics import TeamMetricsGenerator
from photondrift_synthetic.observability import get_logger
from photondrift_synthetic.schemas.architecture_health import ArchitectureHealthSnapshot
from photondrift_synthetic.schemas.common import TimeWindow
from photondrift_synthetic.schemas.dataset import Dataset, DatasetMetadata, DatasetStatistics
from photondrift_synthetic.schemas.drift_event import DriftEvent
from photondrift_synthetic.schemas.team_metrics import TeamMetricsSnapshot


class BatchOrchestrator:
    """Generates a complete, linked dataset from one configuration.

    Attributes:
        config: Generator configuration
        now: Anchor for health snapshots and the generation timestamp
        max_workers: Thread pool size in parallel mode (None = executor default)

    Example:
        >>> config = create_config("SMALL_DATASET", seed=42)
        >>> dataset = BatchOrchestrator(config).generate()
        >>> len(dataset.drift_events)
        100
    """

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        now: datetime | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config
        self.now = as_utc(now) if now is not None else config.date_range.end
        self.max_workers = max_workers

    @property
    def repositories(self) -> list[str]:
        """Repository ids repo_1..repo_N."""
        return [f"repo_{i + 1}" for i in range(self.config.data_volume.repositories)]

    @property
    def period(self) -> TimeWindow:
        """Window team metrics cover."""
        return TimeWindow(start=self.config.date_range.start, end=self.config.date_range.end)

    def generate(self) -> Dataset:
        """Generate the dataset.

        Returns:
            Dataset with drift events, health snapshots, team snapshots, and
            metadata. Identical configurations produce identical datasets.
        """
        volume = self.config.data_volume
        get_logger().info(
            "dataset_generation_started",
            seed=self.config.seed,
            repositories=volume.repositories,
            events_per_repo=volume.events_per_repo,
            time_period_days=volume.time_period_days,
            parallel=self.config.parallel_generation,
        )

        if self.config.parallel_generation:
            events, health, teams = self._generate_parallel()
        else:
            events, health, teams = self._generate_sequential()

        dataset = Dataset(
            drift_events=events,
            architecture_health=health,
            team_metrics=teams,
            metadata=DatasetMetadata(
                generation_timestamp=self.now,
                config=self.config,
                statistics=DatasetStatistics(
                    total_drift_events=len(events),
                    total_health_records=len(health),
                    total_team_records=len(teams),
                    date_range=self.period,
                ),
            ),
        )

        get_logger().info(
            "dataset_generated",
            seed=self.config.seed,
            drift_events=len(events),
            health_records=len(health),
            team_records=len(teams),
        )
        return dataset

    def _generate_sequential(
        self,
    ) -> tuple[list[DriftEvent], list[ArchitectureHealthSnapshot], list[TeamMetricsSnapshot]]:
        rng = DeterministicRandomSource(self.config.seed)
        volume = self.config.data_volume

        drift_generator = DriftEventGenerator(rng, self.config)
        events: list[DriftEvent] = []
        for repository_id in self.repositories:
            batch = drift_generator.generate_batch(
                volume.events_per_repo, repository_id=repository_id
            )
            events.extend(link_batch(batch, rng))

        health_generator = ArchitectureHealthGenerator(rng, self.config)
        health: list[ArchitectureHealthSnapshot] = []
        for repository_id in self.repositories:
            health.extend(
                health_generator.generate_batch(
                    volume.time_period_days, repository_id=repository_id, end=self.now
                )
            )

        team_generator = TeamMetricsGenerator(rng, self.config)
        teams = team_generator.generate_batch(len(TEAM_ROSTER), period=self.period)

        return events, health, teams

    def _generate_parallel(
        self,
    ) -> tuple[list[DriftEvent], list[ArchitectureHealthSnapshot], list[TeamMetricsSnapshot]]:
        root = DeterministicRandomSource(self.config.seed)
        repositories = self.repositories

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            repository_futures = [
                executor.submit(self._repository_branch, root.fork(i), repository_id)
                for i, repository_id in enumerate(repositories)
            ]
            team_futures = [
                executor.submit(self._team_branch, root.fork(len(repositories) + j), team_name)
                for j, team_name in enumerate(TEAM_ROSTER)
            ]

            events: list[DriftEvent] = []
            health: list[ArchitectureHealthSnapshot] = []
            for future in repository_futures:
                branch_events, branch_health = future.result()
                events.extend(branch_events)
                health.extend(branch_health)

            teams = [future.result() for future in team_futures]

        return events, health, teams

    def _repository_branch(
        self,
        rng: DeterministicRandomSource,
        repository_id: str,
    ) -> tuple[list[DriftEvent], list[ArchitectureHealthSnapshot]]:
        volume = self.config.data_volume
        batch = DriftEventGenerator(rng, self.config).generate_batch(
            volume.events_per_repo, repository_id=repository_id
        )
        events = link_batch(batch, rng)
        health = ArchitectureHealthGenerator(rng, self.config).generate_batch(
            volume.time_period_days, repository_id=repository_id, end=self.now
        )
        return events, health

    def _team_branch(self, rng: DeterministicRandomSource, team_name: str) -> TeamMetricsSnapshot:
        return TeamMetricsGenerator(rng, self.config).generate(team_name, self.period)


def generate_complete_dataset(
    config: GeneratorConfig | None = None,
    *,
    now: datetime | None = None,
) -> Dataset:
    """Generate a complete dataset for a configuration.

    Args:
        config: Generator configuration (defaults to GeneratorConfig())
        now: Anchor for health snapshots and metadata
            (default: config.date_range.end)

    Returns:
        Dataset owned entirely by the caller

    Example:
        >>> dataset = generate_complete_dataset(create_config("SMALL_DATASET"))
        >>> dataset.metadata.statistics.total_health_records
        60
    """
    return BatchOrchestrator(config or GeneratorConfig(), now=now).generate()
