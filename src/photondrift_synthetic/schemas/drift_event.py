"""Drift event schema definitions.

This module defines Pydantic models for a drift event and its nested
analysis blocks:
- DriftEvent: One detected deviation from a documented architectural decision
- MLAnalysis: Simulated multi-model prediction with uncertainty
- VisualMetadata: Rendering hints for dashboards
- HistoricalContext: Occurrence series, resolution history, similar events
- ImpactAssessment: Business, technical, team, and cost impact
- EventRelationships: Parent/child/correlated events and dependency graph

All models are immutable (frozen=True) and validate at construction time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from photondrift_synthetic.schemas.common import (
    SeasonalPattern,
    SeverityType,
    SyntheticModel,
    TimeSeries,
    TimeWindow,
)

CategoryType = Literal[
    "code-smell",
    "architecture",
    "security",
    "performance",
    "maintainability",
    "documentation",
    "testing",
    "dependencies",
]


class Location(SyntheticModel):
    """Source location of a drift event."""

    file: str = Field(..., min_length=1)
    line: int = Field(..., ge=1)
    column: int = Field(..., ge=1)


# ---------------------------------------------------------------------------
# ML analysis
# ---------------------------------------------------------------------------


class EnsembleScore(SyntheticModel):
    """Score from one ensemble member."""

    model_name: str
    score: float = Field(..., ge=0.0, le=1.0)
    weight: float = Field(..., ge=0.0, le=1.0)


class Uncertainty(SyntheticModel):
    """Prediction uncertainty decomposition.

    total is epistemic + aleatoric, clamped to 1.0.
    """

    epistemic: float = Field(..., ge=0.0)
    aleatoric: float = Field(..., ge=0.0)
    total: float = Field(..., ge=0.0, le=1.0)


class Explanations(SyntheticModel):
    """SHAP-style feature attributions."""

    shap_values: list[float]
    feature_names: list[str]
    base_value: float


class MLAnalysis(SyntheticModel):
    """Simulated multi-model analysis of a drift event.

    Attributes:
        confidence: Event confidence the analysis was conditioned on
        severity_prediction: Predicted severity score (0.0-1.0)
        priority_score: Priority derived from severity and confidence
        ensemble_scores: Individual model scores with weights summing to 1
        feature_importance: Importance over a fixed feature vocabulary
        uncertainty: Epistemic/aleatoric decomposition
        explanations: Per-feature attributions
        model_version: Version of the simulated model
        prediction_timestamp: When the prediction was made
        processing_time: Simulated inference latency in milliseconds
    """

    confidence: float = Field(..., ge=0.0, le=1.0)
    severity_prediction: float = Field(..., ge=0.0, le=1.0)
    priority_score: float = Field(..., ge=0.0, le=1.0)
    ensemble_scores: list[EnsembleScore]
    feature_importance: dict[str, float]
    uncertainty: Uncertainty
    explanations: Explanations
    model_version: str
    prediction_timestamp: datetime
    processing_time: float = Field(..., ge=0.0)

    @property
    def ensemble_score(self) -> float:
        """Weighted combination of the ensemble member scores."""
        return sum(member.score * member.weight for member in self.ensemble_scores)


# ---------------------------------------------------------------------------
# Visual metadata
# ---------------------------------------------------------------------------


class ChartCoordinates(SyntheticModel):
    x: float
    y: float
    z: float


class VisualMetadata(SyntheticModel):
    """Rendering hints derived from severity, confidence, and category."""

    severity_color: str
    confidence_color: str
    trend_color: str
    chart_coordinates: ChartCoordinates
    visual_weight: float = Field(..., ge=0.0)
    opacity: float = Field(..., ge=0.3, le=1.0)
    animation_delay: float
    transition_duration: int
    clickable: bool
    draggable: bool
    resizable: bool
    cluster_id: str
    group_label: str


# ---------------------------------------------------------------------------
# Historical context
# ---------------------------------------------------------------------------


class ResolutionRecord(SyntheticModel):
    """Past resolution of a similar drift."""

    resolved_at: datetime
    resolution_method: str
    resolver: str
    time_to_resolve: float = Field(..., description="Hours to resolve")
    effectiveness_score: float
    recurrence_time: float | None = Field(default=None, description="Hours until recurrence")


class OutcomeComparison(SyntheticModel):
    resolution_time_ratio: float
    success_probability: float
    effort_required_ratio: float


class SimilarEvent(SyntheticModel):
    """Cross-reference to a historically similar event."""

    event_id: str
    similarity_score: float = Field(..., ge=0.6, le=0.95)
    similarity_features: list[str]
    outcome_comparison: OutcomeComparison


class OccurrencePrediction(SyntheticModel):
    probability: float
    time_window: TimeWindow
    confidence_interval: tuple[float, float]


class HistoricalContext(SyntheticModel):
    """History of a drift pattern leading up to the event."""

    occurrence_frequency: TimeSeries
    resolution_history: list[ResolutionRecord]
    seasonal_patterns: list[SeasonalPattern]
    trend_direction: Literal["increasing", "decreasing", "stable", "cyclical"]
    trend_strength: float
    similar_events: list[SimilarEvent]
    lifecycle_stage: Literal["emerging", "peak", "declining", "resolved"]
    next_occurrence_prediction: OccurrencePrediction


# ---------------------------------------------------------------------------
# Impact assessment
# ---------------------------------------------------------------------------


class BusinessImpact(SyntheticModel):
    revenue_impact: float
    user_impact: int
    availability_impact: float
    compliance_risk: float
    reputation_risk: float


class TechnicalImpact(SyntheticModel):
    performance_degradation: float
    maintainability_score: float = Field(..., ge=0.0)
    security_risk: float
    scalability_impact: float
    code_quality_impact: float


class TeamImpact(SyntheticModel):
    estimated_hours: float
    skill_requirements: list[str]
    team_members_affected: int
    knowledge_transfer_needed: bool
    training_required: list[str]


class CostEstimate(SyntheticModel):
    """Cost of addressing the drift, scaled by severity."""

    development_hours: float
    development_cost: float
    opportunity_cost: float
    risk_mitigation_cost: float
    total_estimated_cost: float
    confidence_interval: tuple[float, float]


class ImpactAssessment(SyntheticModel):
    """Severity-scaled impact of a drift event."""

    business_impact: BusinessImpact
    technical_impact: TechnicalImpact
    team_impact: TeamImpact
    risk_score: int
    urgency_score: int
    complexity_score: int
    dependent_systems: list[str]
    cascading_risk: float
    estimated_cost: CostEstimate


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------


class CorrelatedEvent(SyntheticModel):
    event_id: str
    correlation_strength: float = Field(..., ge=-1.0, le=1.0)
    correlation_type: Literal["causal", "temporal", "spatial", "categorical"]
    lag_time: float | None = Field(default=None, description="Lag in milliseconds")


class PatternMembership(SyntheticModel):
    pattern_id: str
    pattern_name: str
    pattern_type: Literal["anti-pattern", "code-smell", "architectural-issue", "process-issue"]
    membership_strength: float
    pattern_frequency: float


class DependencyNode(SyntheticModel):
    node_id: str
    node_type: Literal["file", "module", "service", "team", "process"]
    dependency_strength: float
    dependency_direction: Literal["incoming", "outgoing", "bidirectional"]
    risk_propagation: float


class EventRelationships(SyntheticModel):
    """Graph-shaped links from a drift event to other entities.

    Within a batch produced by the orchestrator, parent, child, and
    correlated ids refer to events of the same repository batch.
    """

    parent_events: list[str] = Field(default_factory=list)
    child_events: list[str] = Field(default_factory=list)
    correlated_events: list[CorrelatedEvent] = Field(default_factory=list)
    pattern_membership: list[PatternMembership] = Field(default_factory=list)
    dependency_graph: list[DependencyNode] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Drift event
# ---------------------------------------------------------------------------


class DriftEvent(SyntheticModel):
    """Drift event with nested analysis.

    Attributes:
        id: Identifier unique within a generation run
        repository: Repository the event belongs to
        timestamp: Detection time
        severity: low, medium, high, or critical
        category: Drift category
        title: Short summary
        description: Longer explanation
        location: File, line, and column
        ml_score: Model score (0.1-1.0), equal to confidence
        confidence: Confidence drawn around a severity-dependent mean
        resolved: Whether the drift has been resolved
        assignee: Developer assigned to the drift, if any
        tags: Unique tags, starting with category and severity
        suggestion: Remediation hint
    """

    id: str = Field(..., min_length=1, description="Unique event identifier")
    repository: str = Field(..., min_length=1, description="Repository identifier")
    timestamp: datetime = Field(..., description="Detection timestamp")
    severity: SeverityType = Field(..., description="Event severity")
    category: CategoryType = Field(..., description="Drift category")
    title: str = Field(..., min_length=1)
    description: str
    location: Location
    ml_score: float = Field(..., ge=0.1, le=1.0, description="Model score")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Detection confidence")
    resolved: bool
    assignee: str | None = None
    tags: list[str]
    suggestion: str
    ml_analysis: MLAnalysis
    visual_metadata: VisualMetadata
    historical_context: HistoricalContext
    impact: ImpactAssessment
    relationships: EventRelationships
