"""Unit tests for DriftEventGenerator and its builders.

Tests cover:
- Reproducible opening values for the default seed
- Field ranges and severity conditioning
- Streaming and batch generation
- Impact multipliers by category
- Historical context windows
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from statistics import mean

import pytest

from photondrift_synthetic.config import DateRange, GeneratorConfig
from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.distributions.temporal import TimeSeriesSynthesizer
from photondrift_synthetic.errors import ConfigurationError
from photondrift_synthetic.generators.drift_event import (
    DAY_MS,
    SUGGESTIONS,
    DriftEventGenerator,
    build_historical_context,
    build_impact,
    build_tags,
    confidence_stddev,
)

pytestmark = pytest.mark.unit


class TestDefaultSeed:
    """The default seed reproduces a known first event."""

    def test_first_event(self, default_config: GeneratorConfig, fixed_date: datetime) -> None:
        """Seed 12345 yields a medium code-smell event."""
        generator = DriftEventGenerator(DeterministicRandomSource(12345), default_config)
        event = generator.generate("repo_1", fixed_date)

        assert event.severity == "medium"
        assert event.category == "code-smell"
        assert event.location.file == "src/utils/ValidationHelpers.ts"
        assert event.confidence == pytest.approx(0.733498, abs=1e-5)
        assert event.ml_score == event.confidence
        assert event.title == "Complex conditional logic"
        assert event.suggestion == SUGGESTIONS["code-smell"]

    def test_first_event_timestamp(
        self, default_config: GeneratorConfig, fixed_date: datetime
    ) -> None:
        """The jitter of the first event is about -14.2 hours."""
        generator = DriftEventGenerator(DeterministicRandomSource(12345), default_config)
        event = generator.generate("repo_1", fixed_date)

        expected = fixed_date - timedelta(milliseconds=51_091_111.111)
        assert abs(event.timestamp - expected) < timedelta(milliseconds=1)

    def test_same_seed_same_event(self, fixed_date: datetime) -> None:
        """Two generators with the same seed agree field for field."""
        first = DriftEventGenerator(DeterministicRandomSource(99)).generate("repo_1", fixed_date)
        second = DriftEventGenerator(DeterministicRandomSource(99)).generate("repo_1", fixed_date)

        assert first == second


class TestFieldRanges:
    """Generated values stay within their documented ranges."""

    @pytest.fixture
    def events(self, default_config: GeneratorConfig, fixed_date: datetime) -> list:
        generator = DriftEventGenerator(DeterministicRandomSource(2024), default_config)
        return [generator.generate("repo_1", fixed_date) for _ in range(40)]

    def test_timestamp_within_one_day(self, events: list, fixed_date: datetime) -> None:
        """Timestamps are jittered by at most one day."""
        for event in events:
            assert abs(event.timestamp - fixed_date) <= timedelta(days=1)
            assert event.timestamp.tzinfo is not None

    def test_scores_and_location(self, events: list) -> None:
        """Confidence, line, and column stay in range."""
        for event in events:
            assert 0.1 <= event.confidence <= 1.0
            assert 1 <= event.location.line < 500
            assert 1 <= event.location.column < 100

    def test_tags_start_with_category_and_severity(self, events: list) -> None:
        """Tags lead with category and severity and have no duplicates."""
        for event in events:
            assert event.tags[0] == event.category
            assert event.tags[1] == event.severity
            assert len(event.tags) == len(set(event.tags))

    def test_ml_analysis(self, events: list) -> None:
        """Ensemble weights sum to one and uncertainty is capped."""
        for event in events:
            analysis = event.ml_analysis
            assert sum(score.weight for score in analysis.ensemble_scores) == pytest.approx(1.0)
            assert [score.model_name for score in analysis.ensemble_scores] == [
                "RandomForest",
                "XGBoost",
                "NeuralNetwork",
            ]
            assert analysis.uncertainty.total == pytest.approx(
                min(1.0, analysis.uncertainty.epistemic + analysis.uncertainty.aleatoric)
            )
            assert analysis.prediction_timestamp == event.timestamp
            assert len(analysis.explanations.shap_values) == len(
                analysis.explanations.feature_names
            )
            assert 50 <= analysis.processing_time < 200

    def test_visual_metadata(self, events: list) -> None:
        """Opacity follows confidence and the cluster follows category."""
        for event in events:
            visual = event.visual_metadata
            assert visual.opacity == pytest.approx(max(0.3, min(1.0, event.confidence)))
            assert visual.cluster_id == f"cluster_{event.category}"
            assert visual.group_label.lower() == event.category

    def test_cost_total(self, events: list) -> None:
        """The total cost is the sum of its parts."""
        for event in events:
            cost = event.impact.estimated_cost
            assert cost.total_estimated_cost == pytest.approx(
                cost.development_cost + cost.opportunity_cost + cost.risk_mitigation_cost
            )
            assert cost.confidence_interval[0] < 1.0 < cost.confidence_interval[1]


class TestSeverityConditioning:
    """Severity conditions confidence and the rest of the event."""

    def test_confidence_stddev_default(self) -> None:
        """The default correlation strength leaves the spread at 0.1."""
        assert confidence_stddev(0.7) == pytest.approx(0.1)
        assert confidence_stddev(1.0) < confidence_stddev(0.0)

    def test_critical_more_confident_than_low(self, fixed_date: datetime) -> None:
        """Critical events average a higher confidence than low ones."""
        critical = DriftEventGenerator(DeterministicRandomSource(1))
        low = DriftEventGenerator(DeterministicRandomSource(1))

        critical_scores = [
            critical.generate("repo_1", fixed_date, severity="critical").confidence
            for _ in range(1000)
        ]
        low_scores = [
            low.generate("repo_1", fixed_date, severity="low").confidence for _ in range(1000)
        ]

        assert mean(critical_scores) > mean(low_scores)
        assert mean(critical_scores) == pytest.approx(0.9, abs=0.05)
        assert mean(low_scores) == pytest.approx(0.6, abs=0.05)

    def test_forced_severity_keeps_stream_aligned(self, fixed_date: datetime) -> None:
        """Forcing severity still consumes the severity draw."""
        natural_rng = DeterministicRandomSource(77)
        forced_rng = DeterministicRandomSource(77)

        natural = DriftEventGenerator(natural_rng).generate("repo_1", fixed_date)
        forced = DriftEventGenerator(forced_rng).generate(
            "repo_1", fixed_date, severity="critical"
        )

        assert forced.severity == "critical"
        assert forced.category == natural.category
        assert forced.location == natural.location
        assert forced_rng.state == natural_rng.state


class TestBatchGeneration:
    """Tests for generate_stream and generate_batch."""

    def test_stream_chunk_sizes(self, default_config: GeneratorConfig) -> None:
        """Chunks hold batch_size events with the remainder last."""
        generator = DriftEventGenerator(DeterministicRandomSource(5), default_config)

        chunks = list(generator.generate_stream("repo_1", 25, batch_size=10))

        assert [len(chunk) for chunk in chunks] == [10, 10, 5]

    def test_stream_logs_each_chunk(
        self, default_config: GeneratorConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Each chunk emits a data_generated event."""
        generator = DriftEventGenerator(DeterministicRandomSource(5), default_config)

        list(generator.generate_stream("repo_1", 6, batch_size=3))

        captured = capsys.readouterr()
        assert captured.out.count("data_generated") == 2

    def test_batch_sorted_and_in_range(self, fixed_range: DateRange) -> None:
        """Batches are chronological and near the configured window."""
        config = GeneratorConfig(date_range=fixed_range, batch_size=7)
        generator = DriftEventGenerator(DeterministicRandomSource(5), config)

        events = generator.generate_batch(20, repository_id="repo_2")

        timestamps = [event.timestamp for event in events]
        assert timestamps == sorted(timestamps)
        assert all(
            fixed_range.start - timedelta(days=1)
            <= ts
            <= fixed_range.end + timedelta(days=1)
            for ts in timestamps
        )
        assert {event.repository for event in events} == {"repo_2"}

    def test_ids_are_sequential_and_unique(self, default_config: GeneratorConfig) -> None:
        """Ids follow drift_<repo>_<sequence> and never repeat."""
        generator = DriftEventGenerator(DeterministicRandomSource(5), default_config)

        events = generator.generate_batch(12, repository_id="repo_1")

        ids = {event.id for event in events}
        assert len(ids) == 12
        assert "drift_repo_1_000001" in ids
        assert all(re.fullmatch(r"drift_repo_1_\d{6}", event_id) for event_id in ids)

    def test_empty_batch(self, default_config: GeneratorConfig) -> None:
        """A zero count yields no events and no draws."""
        rng = DeterministicRandomSource(5)
        generator = DriftEventGenerator(rng, default_config)

        assert generator.generate_batch(0, repository_id="repo_1") == []
        assert rng.state == 5

    def test_negative_count_rejected(self, default_config: GeneratorConfig) -> None:
        """A negative count is rejected before any draw."""
        rng = DeterministicRandomSource(5)
        generator = DriftEventGenerator(rng, default_config)

        with pytest.raises(ConfigurationError) as exc_info:
            generator.generate_batch(-1, repository_id="repo_1")

        assert exc_info.value.field_path == "count"
        assert rng.state == 5

    @pytest.mark.parametrize(
        ("total", "batch_size", "field_path"),
        [(-10, None, "total"), (10, 0, "batch_size"), (10, -4, "batch_size")],
    )
    def test_invalid_stream_sizes_rejected(
        self,
        default_config: GeneratorConfig,
        total: int,
        batch_size: int | None,
        field_path: str,
    ) -> None:
        """Streams reject negative totals and non-positive chunk sizes."""
        generator = DriftEventGenerator(DeterministicRandomSource(5), default_config)

        with pytest.raises(ConfigurationError) as exc_info:
            next(generator.generate_stream("repo_1", total, batch_size=batch_size))

        assert exc_info.value.field_path == field_path


class TestBuilders:
    """Tests for the standalone builder functions."""

    def test_build_tags_deduplicates(self) -> None:
        """Extra tags never duplicate earlier ones."""
        rng = DeterministicRandomSource(3)
        for _ in range(100):
            tags = build_tags(rng, "maintainability", "low")
            assert tags[:2] == ["maintainability", "low"]
            assert len(tags) == len(set(tags))
            assert 2 <= len(tags) <= 5

    def test_security_doubles_compliance_risk(self) -> None:
        """Security impact doubles compliance risk and quadruples security risk."""
        security = build_impact(DeterministicRandomSource(10), "high", "security")
        baseline = build_impact(DeterministicRandomSource(10), "high", "code-smell")

        assert security.business_impact.compliance_risk == pytest.approx(
            2 * baseline.business_impact.compliance_risk
        )
        assert security.technical_impact.security_risk == pytest.approx(
            4 * baseline.technical_impact.security_risk
        )

    def test_performance_doubles_degradation(self) -> None:
        """Performance impact doubles performance degradation."""
        performance = build_impact(DeterministicRandomSource(10), "low", "performance")
        baseline = build_impact(DeterministicRandomSource(10), "low", "testing")

        assert performance.technical_impact.performance_degradation == pytest.approx(
            2 * baseline.technical_impact.performance_degradation
        )

    def test_severity_scales_revenue(self) -> None:
        """Critical revenue impact is four times the low value for the same draws."""
        critical = build_impact(DeterministicRandomSource(10), "critical", "testing")
        low = build_impact(DeterministicRandomSource(10), "low", "testing")

        assert critical.business_impact.revenue_impact == pytest.approx(
            4 * low.business_impact.revenue_impact
        )
        assert critical.technical_impact.maintainability_score >= 0.0

    def test_historical_context_windows(self, fixed_date: datetime) -> None:
        """Occurrence history covers 30 days and the prediction +7 to +30 days."""
        rng = DeterministicRandomSource(4)
        context = build_historical_context(rng, TimeSeriesSynthesizer(rng), fixed_date)

        points = context.occurrence_frequency.data_points
        assert len(points) == 30
        assert points[0].timestamp == fixed_date - timedelta(days=30)
        window = context.next_occurrence_prediction.time_window
        assert window.start == fixed_date + timedelta(days=7)
        assert window.end == fixed_date + timedelta(days=30)
        assert 1 <= len(context.resolution_history) <= 4
        assert 1 <= len(context.similar_events) <= 3

    def test_resolution_before_event(self, fixed_date: datetime) -> None:
        """Past resolutions fall within the 30 days before the event."""
        rng = DeterministicRandomSource(4)
        context = build_historical_context(rng, TimeSeriesSynthesizer(rng), fixed_date)

        for record in context.resolution_history:
            assert fixed_date - timedelta(milliseconds=30 * DAY_MS) <= record.resolved_at
            assert record.resolved_at <= fixed_date


def test_naive_base_timestamp_treated_as_utc() -> None:
    """Naive base timestamps produce UTC event timestamps."""
    generator = DriftEventGenerator(DeterministicRandomSource(12345))
    event = generator.generate("repo_1", datetime(2024, 6, 1, 12))

    assert event.timestamp.utcoffset() == timedelta(0)
    assert abs(event.timestamp - datetime(2024, 6, 1, 12, tzinfo=timezone.utc)) < timedelta(
        days=1
    )
