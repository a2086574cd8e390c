"""Drift event generator.

This module provides the DriftEventGenerator plus the pure builder functions
for each nested block of a drift event.

Features:
- Severity-conditioned confidence (critical events score higher than low ones)
- Category-conditioned titles, suggestions, and impact multipliers
- Fixed draw order, so a seed reproduces the exact same events
- Streaming in fixed-size batches for large datasets

Each build_* function takes the random source and the upstream fields it
depends on and returns one sub-structure. Callers must invoke them in the
order used by DriftEventGenerator.generate() to reproduce a dataset.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from datetime import datetime, timedelta

from photondrift_synthetic.config import DEFAULT_CORRELATION_STRENGTH, DateRange, GeneratorConfig
from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.distributions.temporal import TimeSeriesSynthesizer
from photondrift_synthetic.errors import ConfigurationError
from photondrift_synthetic.generators.base import (
    SEVERITIES,
    SEVERITY_MULTIPLIER,
    DataGenerator,
    as_utc,
    clamp,
)
from photondrift_synthetic.schemas.common import SeasonalPattern, TimeWindow
from photondrift_synthetic.schemas.drift_event import (
    BusinessImpact,
    ChartCoordinates,
    CorrelatedEvent,
    CostEstimate,
    DependencyNode,
    DriftEvent,
    EnsembleScore,
    EventRelationships,
    Explanations,
    HistoricalContext,
    ImpactAssessment,
    Location,
    MLAnalysis,
    OccurrencePrediction,
    OutcomeComparison,
    PatternMembership,
    ResolutionRecord,
    SimilarEvent,
    TeamImpact,
    TechnicalImpact,
    Uncertainty,
    VisualMetadata,
)

CATEGORIES: tuple[str, ...] = (
    "code-smell",
    "architecture",
    "security",
    "performance",
    "maintainability",
    "documentation",
    "testing",
    "dependencies",
)

SOURCE_FILES: tuple[str, ...] = (
    "src/components/UserAuth.tsx",
    "src/services/ApiClient.ts",
    "src/utils/ValidationHelpers.ts",
    "src/models/DataModels.ts",
    "src/hooks/useDataFetching.ts",
    "src/pages/Dashboard.tsx",
    "src/config/AppConfig.ts",
)

# Mean detection confidence by severity
SEVERITY_CONFIDENCE: dict[str, float] = {
    "low": 0.6,
    "medium": 0.75,
    "high": 0.85,
    "critical": 0.9,
}

SEVERITY_SCORE: dict[str, float] = {
    "low": 0.25,
    "medium": 0.5,
    "high": 0.75,
    "critical": 1.0,
}

CONFIDENCE_STDDEV = 0.1

DRIFT_TITLES: dict[str, tuple[str, ...]] = {
    "code-smell": (
        "{severity} code duplication detected",
        "Long parameter list found",
        "Complex conditional logic",
    ),
    "architecture": (
        "Layer violation in {severity} component",
        "Circular dependency detected",
        "Architecture boundary crossed",
    ),
    "security": (
        "{severity} security vulnerability",
        "Unvalidated input detected",
        "Weak encryption usage",
    ),
    "performance": (
        "{severity} performance bottleneck",
        "Memory leak potential",
        "Inefficient algorithm usage",
    ),
    "maintainability": (
        "{severity} maintainability issue",
        "High cyclomatic complexity",
        "Dead code detected",
    ),
    "documentation": (
        "Missing {severity} documentation",
        "Outdated API documentation",
        "Incomplete code comments",
    ),
    "testing": (
        "{severity} test coverage gap",
        "Missing unit tests",
        "Flaky test detected",
    ),
    "dependencies": (
        "{severity} dependency issue",
        "Outdated dependency version",
        "Vulnerable package detected",
    ),
}

SUGGESTIONS: dict[str, str] = {
    "code-smell": "Consider extracting methods and reducing complexity through refactoring.",
    "architecture": "Review component dependencies and consider architectural refactoring.",
    "security": "Implement proper input validation and security best practices.",
    "performance": "Optimize algorithm efficiency and consider caching strategies.",
    "maintainability": "Simplify logic and improve code readability.",
    "documentation": "Add comprehensive documentation and code comments.",
    "testing": "Increase test coverage and implement missing test cases.",
    "dependencies": "Update dependencies and review security implications.",
}

ADDITIONAL_TAGS: tuple[str, ...] = (
    "auto-detected",
    "ml-generated",
    "needs-review",
    "technical-debt",
    "refactor-candidate",
    "code-quality",
    "maintainability",
)

ASSIGNEES: tuple[str, ...] = ("alice", "bob", "charlie", "diana", "eve")

# (model name, weight, score stddev); weights sum to 1
ENSEMBLE_MODELS: tuple[tuple[str, float, float], ...] = (
    ("RandomForest", 0.3, 0.08),
    ("XGBoost", 0.4, 0.06),
    ("NeuralNetwork", 0.3, 0.1),
)

FEATURE_RANGES: dict[str, tuple[float, float]] = {
    "code_complexity": (0.15, 0.25),
    "change_frequency": (0.10, 0.20),
    "team_experience": (0.05, 0.15),
    "file_size": (0.08, 0.18),
    "dependency_count": (0.05, 0.15),
    "test_coverage": (0.10, 0.20),
}

MODEL_VERSION = "2.1.0"

SEVERITY_COLORS: dict[str, str] = {
    "low": "#28a745",
    "medium": "#ffc107",
    "high": "#fd7e14",
    "critical": "#dc3545",
}

TREND_COLORS: tuple[str, ...] = ("#28a745", "#ffc107", "#dc3545")

RESOLUTION_METHODS: tuple[str, ...] = (
    "refactoring",
    "code_review",
    "architecture_change",
    "documentation",
)

RESOLVERS: tuple[str, ...] = ("alice", "bob", "charlie", "diana")

SKILL_SETS: tuple[tuple[str, str], ...] = (
    ("javascript", "react"),
    ("typescript", "node.js"),
    ("architecture", "design-patterns"),
    ("security", "encryption"),
    ("performance", "optimization"),
)

DEPENDENT_SYSTEMS: tuple[str, ...] = (
    "auth-service",
    "api-gateway",
    "database",
    "ui-components",
    "notification-service",
)

PATTERN_NAMES: tuple[str, ...] = ("God Class", "Feature Envy", "Long Method", "Data Clumps")

DAY_MS = 24 * 60 * 60 * 1000


def confidence_stddev(correlation_strength: float) -> float:
    """Spread of the severity-conditioned confidence draw.

    Stronger correlation tightens the cluster around the severity mean.
    The default strength (0.7) gives the unscaled spread of 0.1.
    """
    return CONFIDENCE_STDDEV * (1 + (DEFAULT_CORRELATION_STRENGTH - correlation_strength))


def build_tags(rng: DeterministicRandomSource, category: str, severity: str) -> list[str]:
    """Category and severity first, then 1-3 extra tags with duplicates removed."""
    tags = [category, severity]
    extra = [rng.choice(ADDITIONAL_TAGS) for _ in range(rng.integer(1, 4))]
    return list(dict.fromkeys(tags + extra))


def build_ml_analysis(
    rng: DeterministicRandomSource,
    severity: str,
    confidence: float,
    timestamp: datetime,
) -> MLAnalysis:
    """Simulate a multi-model analysis conditioned on severity and confidence.

    Args:
        rng: Random source
        severity: Event severity
        confidence: Event confidence
        timestamp: Event timestamp, used as the prediction timestamp

    Returns:
        MLAnalysis with clamped scores and uncertainty total = min(1, e + a)
    """
    base_score = SEVERITY_SCORE[severity]

    severity_prediction = clamp(rng.gaussian(base_score, 0.1), 0.0, 1.0)
    priority_score = clamp(rng.gaussian(base_score * confidence, 0.15), 0.0, 1.0)

    ensemble_scores = [
        EnsembleScore(
            model_name=name,
            score=clamp(rng.gaussian(base_score, stddev), 0.0, 1.0),
            weight=weight,
        )
        for name, weight, stddev in ENSEMBLE_MODELS
    ]

    feature_importance = {
        feature: rng.uniform(low, high) for feature, (low, high) in FEATURE_RANGES.items()
    }

    epistemic = rng.uniform(0.05, 0.15)
    aleatoric = rng.uniform(0.05, 0.20)

    shap_values = [rng.gaussian(0.0, 0.1) for _ in FEATURE_RANGES]

    return MLAnalysis(
        confidence=confidence,
        severity_prediction=severity_prediction,
        priority_score=priority_score,
        ensemble_scores=ensemble_scores,
        feature_importance=feature_importance,
        uncertainty=Uncertainty(
            epistemic=epistemic,
            aleatoric=aleatoric,
            total=min(1.0, epistemic + aleatoric),
        ),
        explanations=Explanations(
            shap_values=shap_values,
            feature_names=list(FEATURE_RANGES),
            base_value=0.5,
        ),
        model_version=MODEL_VERSION,
        prediction_timestamp=timestamp,
        processing_time=rng.uniform(50, 200),
    )


def build_visual_metadata(
    rng: DeterministicRandomSource,
    severity: str,
    confidence: float,
    category: str,
) -> VisualMetadata:
    """Rendering hints derived from severity, confidence, and category."""
    opacity = clamp(confidence, 0.3, 1.0)
    trend_color = rng.choice(TREND_COLORS)
    coordinates = ChartCoordinates(
        x=rng.uniform(0, 1),
        y=rng.uniform(0, 1),
        z=rng.uniform(0, 1),
    )

    return VisualMetadata(
        severity_color=SEVERITY_COLORS[severity],
        confidence_color=f"rgba(0, 123, 255, {opacity})",
        trend_color=trend_color,
        chart_coordinates=coordinates,
        visual_weight=confidence * SEVERITY_MULTIPLIER[severity],
        opacity=opacity,
        animation_delay=rng.uniform(0, 500),
        transition_duration=300,
        clickable=True,
        draggable=False,
        resizable=False,
        cluster_id=f"cluster_{category}",
        group_label=category[:1].upper() + category[1:],
    )


def _build_resolution_record(
    rng: DeterministicRandomSource, timestamp: datetime
) -> ResolutionRecord:
    resolved_at = timestamp - timedelta(milliseconds=rng.uniform(0, 30 * DAY_MS))
    method = rng.choice(RESOLUTION_METHODS)
    resolver = rng.choice(RESOLVERS)
    time_to_resolve = rng.uniform(2, 72)
    effectiveness = rng.uniform(0.6, 1.0)
    recurrence = rng.uniform(24, 168) if rng.chance(0.3) else None
    return ResolutionRecord(
        resolved_at=resolved_at,
        resolution_method=method,
        resolver=resolver,
        time_to_resolve=time_to_resolve,
        effectiveness_score=effectiveness,
        recurrence_time=recurrence,
    )


def _build_similar_event(rng: DeterministicRandomSource) -> SimilarEvent:
    event_id = f"similar_{rng.token()}"
    similarity = rng.uniform(0.6, 0.95)
    outcome = OutcomeComparison(
        resolution_time_ratio=rng.uniform(0.5, 2.0),
        success_probability=rng.uniform(0.6, 0.9),
        effort_required_ratio=rng.uniform(0.7, 1.5),
    )
    return SimilarEvent(
        event_id=event_id,
        similarity_score=similarity,
        similarity_features=["category", "file_type", "complexity"],
        outcome_comparison=outcome,
    )


def build_historical_context(
    rng: DeterministicRandomSource,
    synthesizer: TimeSeriesSynthesizer,
    timestamp: datetime,
) -> HistoricalContext:
    """History of the drift pattern over the 30 days before the event.

    Args:
        rng: Random source shared with synthesizer
        synthesizer: Time-series synthesizer drawing from rng
        timestamp: Event timestamp

    Returns:
        HistoricalContext with a daily occurrence series and a prediction
        window from +7 to +30 days
    """
    occurrence = synthesizer.synthesize(
        timestamp - timedelta(days=30),
        timestamp,
        baseline=2,
        trend=0.1,
        seasonality=0.3,
        noise=0.2,
        interval_hours=24,
    )

    resolution_history = [
        _build_resolution_record(rng, timestamp) for _ in range(rng.integer(1, 5))
    ]

    seasonal = SeasonalPattern(
        pattern_type="weekly",
        peak_times=["Monday", "Tuesday"],
        strength=rng.uniform(0.3, 0.8),
        confidence=rng.uniform(0.6, 0.9),
    )

    trend_direction = rng.choice(("increasing", "decreasing", "stable", "cyclical"))
    trend_strength = rng.uniform(0.2, 0.8)

    similar_events = [_build_similar_event(rng) for _ in range(rng.integer(1, 4))]

    lifecycle_stage = rng.choice(("emerging", "peak", "declining", "resolved"))

    prediction = OccurrencePrediction(
        probability=rng.uniform(0.1, 0.8),
        time_window=TimeWindow(
            start=timestamp + timedelta(days=7),
            end=timestamp + timedelta(days=30),
        ),
        confidence_interval=(rng.uniform(0.1, 0.4), rng.uniform(0.6, 0.9)),
    )

    return HistoricalContext(
        occurrence_frequency=occurrence,
        resolution_history=resolution_history,
        seasonal_patterns=[seasonal],
        trend_direction=trend_direction,
        trend_strength=trend_strength,
        similar_events=similar_events,
        lifecycle_stage=lifecycle_stage,
        next_occurrence_prediction=prediction,
    )


def build_impact(
    rng: DeterministicRandomSource,
    severity: str,
    category: str,
) -> ImpactAssessment:
    """Severity-scaled impact assessment.

    Business, technical, team, and cost fields scale with the severity
    multiplier (1-4). Security doubles compliance and security risk;
    performance doubles performance degradation.
    """
    multiplier = SEVERITY_MULTIPLIER[severity]
    is_security = category == "security"
    is_performance = category == "performance"

    business = BusinessImpact(
        revenue_impact=rng.uniform(0, 10000) * multiplier,
        user_impact=math.floor(rng.uniform(10, 1000) * multiplier),
        availability_impact=rng.uniform(0, 0.1) * multiplier,
        compliance_risk=rng.uniform(0, 0.3) * (2 if is_security else 1),
        reputation_risk=rng.uniform(0, 0.2) * multiplier,
    )

    technical = TechnicalImpact(
        performance_degradation=rng.uniform(0, 20) * (2 if is_performance else 1),
        maintainability_score=max(0.0, 1 - rng.uniform(0, 0.3) * multiplier),
        security_risk=rng.uniform(0, 0.4) * (2 if is_security else 0.5),
        scalability_impact=rng.uniform(0, 0.3) * multiplier,
        code_quality_impact=rng.uniform(0, 0.4) * multiplier,
    )

    estimated_hours = rng.uniform(2, 40) * multiplier
    skills = list(rng.choice(SKILL_SETS))
    members_affected = rng.integer(1, 5)
    knowledge_transfer = rng.chance(0.3)
    training = ["security-training", "architecture-patterns"] if rng.chance(0.2) else []
    team = TeamImpact(
        estimated_hours=estimated_hours,
        skill_requirements=skills,
        team_members_affected=members_affected,
        knowledge_transfer_needed=knowledge_transfer,
        training_required=training,
    )

    risk_score = math.floor(rng.uniform(10, 90) * (multiplier / 4))
    urgency_score = math.floor(rng.uniform(20, 95) * (multiplier / 4))
    complexity_score = rng.integer(15, 85)
    dependent_systems = [rng.choice(DEPENDENT_SYSTEMS) for _ in range(rng.integer(0, 4))]
    cascading_risk = rng.uniform(0, 0.6) * multiplier / 4

    development_hours = rng.uniform(4, 80) * multiplier
    development_cost = rng.uniform(400, 8000) * multiplier
    opportunity_cost = rng.uniform(200, 4000) * multiplier
    risk_mitigation_cost = rng.uniform(100, 2000) * multiplier
    cost = CostEstimate(
        development_hours=development_hours,
        development_cost=development_cost,
        opportunity_cost=opportunity_cost,
        risk_mitigation_cost=risk_mitigation_cost,
        total_estimated_cost=development_cost + opportunity_cost + risk_mitigation_cost,
        confidence_interval=(rng.uniform(0.7, 0.9), rng.uniform(1.1, 1.4)),
    )

    return ImpactAssessment(
        business_impact=business,
        technical_impact=technical,
        team_impact=team,
        risk_score=risk_score,
        urgency_score=urgency_score,
        complexity_score=complexity_score,
        dependent_systems=dependent_systems,
        cascading_risk=cascading_risk,
        estimated_cost=cost,
    )


def _build_correlated_event(rng: DeterministicRandomSource) -> CorrelatedEvent:
    event_id = f"corr_{rng.token()}"
    strength = rng.uniform(-0.8, 0.8)
    correlation_type = rng.choice(("causal", "temporal", "spatial", "categorical"))
    lag_time = rng.uniform(1000, DAY_MS) if rng.chance(0.5) else None
    return CorrelatedEvent(
        event_id=event_id,
        correlation_strength=strength,
        correlation_type=correlation_type,
        lag_time=lag_time,
    )


def _build_pattern_membership(rng: DeterministicRandomSource) -> PatternMembership:
    return PatternMembership(
        pattern_id=f"pattern_{rng.token()}",
        pattern_name=rng.choice(PATTERN_NAMES),
        pattern_type=rng.choice(
            ("anti-pattern", "code-smell", "architectural-issue", "process-issue")
        ),
        membership_strength=rng.uniform(0.5, 1.0),
        pattern_frequency=rng.uniform(0.1, 0.4),
    )


def _build_dependency_node(rng: DeterministicRandomSource) -> DependencyNode:
    return DependencyNode(
        node_id=f"node_{rng.token()}",
        node_type=rng.choice(("file", "module", "service", "team", "process")),
        dependency_strength=rng.uniform(0.1, 1.0),
        dependency_direction=rng.choice(("incoming", "outgoing", "bidirectional")),
        risk_propagation=rng.uniform(0.1, 0.7),
    )


def build_relationships(rng: DeterministicRandomSource) -> EventRelationships:
    """Graph-shaped links with synthetic ids.

    Parent, child, and correlated ids are placeholders until link_batch()
    rewires them to events of the same batch.
    """
    parent_events = [f"parent_{rng.token()}" for _ in range(rng.integer(0, 3))]
    child_events = [f"child_{rng.token()}" for _ in range(rng.integer(0, 4))]
    correlated = [_build_correlated_event(rng) for _ in range(rng.integer(1, 5))]
    patterns = [_build_pattern_membership(rng) for _ in range(rng.integer(1, 3))]
    graph = [_build_dependency_node(rng) for _ in range(rng.integer(2, 8))]
    return EventRelationships(
        parent_events=parent_events,
        child_events=child_events,
        correlated_events=correlated,
        pattern_membership=patterns,
        dependency_graph=graph,
    )


class DriftEventGenerator(DataGenerator):
    """Generator for drift events with severity-correlated analysis.

    Ids are drift_<repository>_<sequence>, numbered per generator instance,
    so they are unique within a run.

    Example:
        >>> rng = DeterministicRandomSource(12345)
        >>> generator = DriftEventGenerator(rng)
        >>> event = generator.generate("repo_1", datetime(2024, 6, 1))
        >>> event.severity
        'medium'
    """

    def __init__(
        self,
        rng: DeterministicRandomSource,
        config: GeneratorConfig | None = None,
    ) -> None:
        super().__init__(rng, config)
        self._sequence = 0

    def _next_id(self, repository_id: str) -> str:
        self._sequence += 1
        return f"drift_{repository_id}_{self._sequence:06d}"

    def generate(
        self,
        repository_id: str,
        base_timestamp: datetime,
        *,
        severity: str | None = None,
    ) -> DriftEvent:
        """Generate one drift event.

        Args:
            repository_id: Repository the event belongs to
            base_timestamp: Center of the ±1 day timestamp jitter
            severity: Force a severity. The severity draw is still consumed,
                so the remaining stream stays aligned with an unforced call.

        Returns:
            DriftEvent with every nested block populated
        """
        drawn_severity = self.rng.choice(SEVERITIES)
        if severity is None:
            severity = drawn_severity
        category = self.rng.choice(CATEGORIES)
        file = self.rng.choice(SOURCE_FILES)

        stddev = confidence_stddev(self.config.correlation_strength)
        confidence = clamp(self.rng.gaussian(SEVERITY_CONFIDENCE[severity], stddev), 0.1, 1.0)

        jitter_ms = self.rng.uniform(-DAY_MS, DAY_MS)
        timestamp = as_utc(base_timestamp) + timedelta(milliseconds=jitter_ms)

        title = self.rng.choice(DRIFT_TITLES[category]).format(severity=severity)
        description = (
            f"{severity.capitalize()} {category} issue detected by ML analysis. "
            "This pattern indicates potential technical debt accumulation "
            "and should be addressed according to team priorities."
        )
        location = Location(
            file=file,
            line=self.rng.integer(1, 500),
            column=self.rng.integer(1, 100),
        )
        resolved = self.rng.chance(0.3)
        assignee = self.rng.choice(ASSIGNEES) if self.rng.chance(0.7) else None
        tags = build_tags(self.rng, category, severity)

        ml_analysis = build_ml_analysis(self.rng, severity, confidence, timestamp)
        visual_metadata = build_visual_metadata(self.rng, severity, confidence, category)
        historical_context = build_historical_context(self.rng, self.synthesizer, timestamp)
        impact = build_impact(self.rng, severity, category)
        relationships = build_relationships(self.rng)

        return DriftEvent(
            id=self._next_id(repository_id),
            repository=repository_id,
            timestamp=timestamp,
            severity=severity,
            category=category,
            title=title,
            description=description,
            location=location,
            ml_score=confidence,
            confidence=confidence,
            resolved=resolved,
            assignee=assignee,
            tags=tags,
            suggestion=SUGGESTIONS[category],
            ml_analysis=ml_analysis,
            visual_metadata=visual_metadata,
            historical_context=historical_context,
            impact=impact,
            relationships=relationships,
        )

    def generate_stream(
        self,
        repository_id: str,
        total: int,
        *,
        batch_size: int | None = None,
        date_range: DateRange | None = None,
    ) -> Iterator[list[DriftEvent]]:
        """Stream events in chunks for large datasets.

        Each event's base timestamp is drawn uniformly across the range
        immediately before the event itself.

        Args:
            repository_id: Repository the events belong to
            total: Total number of events to generate
            batch_size: Events per chunk (default: config.batch_size)
            date_range: Window for base timestamps (default: config.date_range)

        Yields:
            Lists of at most batch_size events, in generation order

        Raises:
            ConfigurationError: If total is negative or batch_size is not positive.
        """
        self._require_count(total, field_path="total")
        if batch_size is not None and batch_size <= 0:
            raise ConfigurationError(
                f"batch_size must be positive, got {batch_size}",
                field_path="batch_size",
                operation="generate_stream",
            )
        size = batch_size or self.config.batch_size
        window = date_range or self.config.date_range
        start = as_utc(window.start)
        span = as_utc(window.end) - start

        for offset in range(0, total, size):
            current_batch = min(size, total - offset)
            events = [
                self.generate(repository_id, start + self.rng.next() * span)
                for _ in range(current_batch)
            ]
            self._log_generation("drift_events", len(events), repository=repository_id)
            yield events

    def generate_batch(  # type: ignore[override]
        self,
        count: int,
        *,
        repository_id: str,
        date_range: DateRange | None = None,
    ) -> list[DriftEvent]:
        """Generate events for one repository sorted by timestamp ascending.

        Args:
            count: Number of events
            repository_id: Repository the events belong to
            date_range: Window for base timestamps (default: config.date_range)

        Returns:
            Chronologically sorted events

        Raises:
            ConfigurationError: If count is negative.
        """
        self._require_count(count)
        events = [
            event
            for chunk in self.generate_stream(repository_id, count, date_range=date_range)
            for event in chunk
        ]
        return sorted(events, key=lambda event: event.timestamp)
