"""Unit tests for TeamMetricsGenerator."""

from __future__ import annotations

import math
import re
from datetime import timedelta

import pytest

from photondrift_synthetic.config import DateRange, GeneratorConfig
from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.errors import ConfigurationError
from photondrift_synthetic.generators.base import TEAM_ROSTER
from photondrift_synthetic.generators.team_metrics import TeamMetricsGenerator
from photondrift_synthetic.schemas.team_metrics import TeamMetricsSnapshot

pytestmark = pytest.mark.unit


@pytest.fixture
def generator(default_config: GeneratorConfig) -> TeamMetricsGenerator:
    return TeamMetricsGenerator(DeterministicRandomSource(13), default_config)


@pytest.fixture
def snapshot(generator: TeamMetricsGenerator, fixed_range: DateRange) -> TeamMetricsSnapshot:
    return generator.generate("Backend Team", fixed_range)


class TestTeamComposition:
    """Members, insights, and derived sizes."""

    def test_team_size_bounds(self, snapshot: TeamMetricsSnapshot) -> None:
        """Team size is in [3, 11] and insights match members."""
        assert 3 <= snapshot.team_size <= 11
        assert len(snapshot.members) == snapshot.team_size
        assert len(snapshot.individual_insights) == snapshot.team_size

    def test_member_ids_and_emails(self, snapshot: TeamMetricsSnapshot) -> None:
        """Members are numbered from zero with matching emails."""
        for index, member in enumerate(snapshot.members):
            assert member.id == f"member_{index}"
            assert member.email == f"user{index}@company.com"
        for index, insight in enumerate(snapshot.individual_insights):
            assert insight.member_id == f"member_{index}_anon"

    def test_bus_factor(self, snapshot: TeamMetricsSnapshot) -> None:
        """Bus factor is 30% of the team, at least one."""
        expected = max(1, math.floor(snapshot.team_size * 0.3))

        assert snapshot.collaboration.knowledge_sharing.bus_factor == expected

    def test_pair_frequencies_capped(self, snapshot: TeamMetricsSnapshot) -> None:
        """At most five collaboration pairs are reported."""
        pairs = snapshot.collaboration.team_dynamics.collaboration_frequency

        assert len(pairs) == min(5, snapshot.team_size)

    def test_burnout_ids_anonymized(self, generator: TeamMetricsGenerator) -> None:
        """Burnout entries carry anonymous member ids."""
        window = DateRange.model_validate(
            {"start": "2024-01-01T00:00:00Z", "end": "2024-01-15T00:00:00Z"}
        )
        risks = [
            risk
            for _ in range(10)
            for risk in generator.generate("QA Team", window).team_health.burnout_risk
        ]

        assert all(re.fullmatch(r"anon_member_[0-9a-z]{5}", risk.member_id) for risk in risks)


class TestSeriesWindows:
    """Series cover the documented windows and intervals."""

    def test_productivity_spans_period(
        self, snapshot: TeamMetricsSnapshot, fixed_range: DateRange
    ) -> None:
        """Productivity series start at the period start."""
        velocity = snapshot.productivity.velocity
        days = fixed_range.duration.days

        assert velocity.story_points_per_sprint.sampling_interval == "168h"
        assert len(velocity.story_points_per_sprint.data_points) == days // 7
        assert len(velocity.tasks_completed_per_day.data_points) == days
        assert velocity.cycle_time.data_points[0].timestamp == fixed_range.start

    def test_collaboration_last_thirty_days(
        self, snapshot: TeamMetricsSnapshot, fixed_range: DateRange
    ) -> None:
        """Collaboration series cover the 30 days before the period end."""
        points = snapshot.collaboration.communication.meeting_frequency.data_points

        assert len(points) == 30
        assert points[0].timestamp == fixed_range.end - timedelta(days=30)
        assert points[-1].timestamp == fixed_range.end - timedelta(days=1)

    def test_learning_last_ninety_days_weekly(
        self, snapshot: TeamMetricsSnapshot, fixed_range: DateRange
    ) -> None:
        """Learning series are weekly over the 90 days before the period end."""
        series = snapshot.knowledge.learning_velocity.training_hours

        assert series.sampling_interval == "168h"
        assert len(series.data_points) == 12
        assert series.data_points[0].timestamp == fixed_range.end - timedelta(days=90)

    def test_period_recorded(self, snapshot: TeamMetricsSnapshot, fixed_range: DateRange) -> None:
        """The snapshot keeps the requested period."""
        assert snapshot.period.start == fixed_range.start
        assert snapshot.period.end == fixed_range.end
        assert snapshot.team == "Backend Team"


class TestTrendsAndHealth:
    """Performance trends and health indicators."""

    def test_five_trends(self, snapshot: TeamMetricsSnapshot) -> None:
        """Each snapshot carries five performance trends."""
        assert len(snapshot.performance_trends) == 5
        for trend in snapshot.performance_trends:
            assert len(trend.correlation_factors) == 2
            assert 7 <= trend.trend_duration < 30

    def test_anomalies_within_period(
        self, generator: TeamMetricsGenerator, fixed_range: DateRange
    ) -> None:
        """Anomalies fall inside the period."""
        anomalies = [
            anomaly
            for _ in range(5)
            for trend in generator.generate("Frontend Team", fixed_range).performance_trends
            for anomaly in trend.anomalies
        ]

        assert anomalies
        assert all(fixed_range.start <= a.timestamp < fixed_range.end for a in anomalies)

    def test_health_scores(self, snapshot: TeamMetricsSnapshot) -> None:
        """Health score and turnover risk stay in range."""
        health = snapshot.team_health

        assert 65 <= health.overall_health_score < 95
        assert 0.1 <= health.turnover_risk.overall_risk < 0.3
        assert len(health.burnout_risk) <= 1
        assert all(concern.affected_members >= 1 for concern in health.performance_concerns)


class TestBatch:
    """Tests for generate_batch."""

    def test_roster_order(self, generator: TeamMetricsGenerator, fixed_range: DateRange) -> None:
        """Teams follow roster order."""
        snapshots = generator.generate_batch(3, period=fixed_range)

        assert [s.team for s in snapshots] == list(TEAM_ROSTER[:3])

    def test_custom_names(self, generator: TeamMetricsGenerator, fixed_range: DateRange) -> None:
        """A custom roster supplies the names."""
        snapshots = generator.generate_batch(2, period=fixed_range, team_names=["Alpha", "Beta"])

        assert [s.team for s in snapshots] == ["Alpha", "Beta"]

    def test_too_many_teams(self, generator: TeamMetricsGenerator, fixed_range: DateRange) -> None:
        """Asking for more teams than names raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Requested 6 teams"):
            generator.generate_batch(6, period=fixed_range)

    def test_negative_count_rejected(
        self, generator: TeamMetricsGenerator, fixed_range: DateRange
    ) -> None:
        """A negative count is rejected rather than slicing the roster."""
        with pytest.raises(ConfigurationError) as exc_info:
            generator.generate_batch(-1, period=fixed_range)

        assert exc_info.value.field_path == "count"
        assert exc_info.value.operation == "generate_batch"

    def test_unknown_option_rejected(
        self, generator: TeamMetricsGenerator, fixed_range: DateRange
    ) -> None:
        """Misspelled keyword options raise instead of being ignored."""
        with pytest.raises(TypeError):
            generator.generate_batch(
                2, period=fixed_range, team_name=["QA Team"]  # type: ignore[call-arg]
            )

    def test_deterministic(self, default_config: GeneratorConfig, fixed_range: DateRange) -> None:
        """Same seed reproduces the snapshot."""
        first = TeamMetricsGenerator(DeterministicRandomSource(2), default_config)
        second = TeamMetricsGenerator(DeterministicRandomSource(2), default_config)

        assert first.generate("QA Team", fixed_range) == second.generate("QA Team", fixed_range)
