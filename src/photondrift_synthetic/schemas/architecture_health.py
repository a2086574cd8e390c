"""Architecture health schema definitions.

Repository-level rollups produced once per repository per day:
- ArchitectureHealthSnapshot: Overall score, detailed metrics, forecasts
- HealthForecast: Clamped projection with a widening confidence interval
- HealthHistoryEntry: One day of the trailing 30-day history
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, model_validator

from photondrift_synthetic.schemas.common import SeverityType, SyntheticModel

HISTORY_LENGTH = 30


class RepositoryMetrics(SyntheticModel):
    drift_count: int = Field(..., ge=0)
    coverage: float
    compliance: float
    maintainability: float
    technical_debt: float


class HealthTrend(SyntheticModel):
    direction: Literal["improving", "stable", "degrading"]
    velocity: float


class CodeQualityMetrics(SyntheticModel):
    complexity: float
    duplication: float
    test_coverage: float
    documentation_coverage: float
    code_smells: int


class ArchitectureMetrics(SyntheticModel):
    modularity: float
    coupling: float
    cohesion: float
    dependency_health: float
    layering_compliance: float


class ProcessMetrics(SyntheticModel):
    adr_compliance: float
    decision_velocity: float
    review_efficiency: float
    change_success_rate: float
    rollback_frequency: float


class TeamStructureMetrics(SyntheticModel):
    knowledge_distribution: float
    collaboration_index: float
    onboarding_efficiency: float
    expert_dependency: float
    communication_quality: float


class SecurityMetrics(SyntheticModel):
    vulnerability_count: int = Field(..., ge=0)
    security_debt: float
    compliance_score: float
    access_control_health: float
    data_protection_score: float


class DetailedMetrics(SyntheticModel):
    """Five independently sampled metric groups."""

    code_quality: CodeQualityMetrics
    architecture: ArchitectureMetrics
    process: ProcessMetrics
    team: TeamStructureMetrics
    security: SecurityMetrics


class ForecastFactor(SyntheticModel):
    factor_name: str
    impact_weight: float
    current_trend: Literal["positive", "negative", "neutral"]
    expected_change: float


class ForecastRisk(SyntheticModel):
    risk_name: str
    probability: float
    impact_severity: float
    time_to_impact: float = Field(..., description="Days until impact")
    mitigation_options: list[str]


class ImprovementOpportunity(SyntheticModel):
    opportunity_name: str
    potential_gain: float
    effort_required: float
    timeline: str
    prerequisites: list[str]
    success_probability: float


class HealthForecast(SyntheticModel):
    """Projection of the health score at a horizon.

    Attributes:
        days_ahead: Forecast horizon in days
        predicted_score: Projected score, clamped to [20, 100]
        uncertainty: Half-width of the interval, min(20, days_ahead / 10)
        confidence_interval: [lower, upper] clamped to [0, 100]
    """

    days_ahead: int = Field(..., ge=0)
    predicted_score: float = Field(..., ge=20.0, le=100.0)
    uncertainty: float = Field(..., ge=0.0, le=20.0)
    confidence_interval: tuple[float, float]
    key_factors: list[ForecastFactor]
    risk_factors: list[ForecastRisk]
    improvement_opportunities: list[ImprovementOpportunity]

    @model_validator(mode="after")
    def _check_interval(self) -> HealthForecast:
        lower, upper = self.confidence_interval
        if not 0.0 <= lower <= self.predicted_score <= upper <= 100.0:
            raise ValueError(
                "confidence_interval must satisfy 0 <= lower <= predicted <= upper <= 100"
            )
        return self


class Scenario(SyntheticModel):
    scenario_name: str
    scenario_description: str
    probability: float
    health_impact: float
    timeline: str
    mitigation_strategies: list[str]


class HealthPredictions(SyntheticModel):
    """Forecasts at 30, 90, and 365 days plus narrative scenarios."""

    short_term: HealthForecast
    medium_term: HealthForecast
    long_term: HealthForecast
    scenarios: list[Scenario]


class Benchmarks(SyntheticModel):
    industry_percentile: float
    industry_average: float
    industry_best_practice: float
    peer_ranking: int
    peer_count: int
    peer_average: float
    best_historical_score: float
    worst_historical_score: float
    average_historical_score: float
    target_score: float
    progress_to_target: float
    estimated_time_to_target: int = Field(..., description="Days to reach target")


class ActionItem(SyntheticModel):
    id: str
    description: str
    estimated_hours: float
    required_skills: list[str]
    dependencies: list[str]
    completed: bool


class Recommendation(SyntheticModel):
    recommendation_id: str
    category: Literal["quick-win", "strategic", "foundational", "emergency"]
    title: str
    description: str
    expected_impact: float
    effort_required: float
    implementation_time: str
    priority_score: int
    urgency: SeverityType
    action_items: list[ActionItem]
    prerequisites: list[str]
    risks: list[str]
    success_criteria: list[str]
    status: Literal["suggested", "approved", "in-progress", "completed", "rejected"]
    assigned_to: str | None = None
    estimated_completion: datetime


class HealthEvent(SyntheticModel):
    event_type: Literal["improvement", "degradation", "milestone", "incident"]
    description: str
    impact_score: float
    related_metrics: list[str]


class HistoryContext(SyntheticModel):
    team_size: int
    codebase_size: int
    active_projects: int
    major_releases: int
    external_factors: list[str]


class HealthHistoryEntry(SyntheticModel):
    """One day of health history; each day is sampled independently."""

    timestamp: datetime
    overall_score: float = Field(..., ge=0.0)
    metric_scores: dict[str, float]
    events: list[HealthEvent]
    context: HistoryContext


class ArchitectureHealthSnapshot(SyntheticModel):
    """Repository health at a point in time.

    Attributes:
        id: health_<repository>_<epoch milliseconds>
        repository: Repository identifier
        timestamp: Snapshot time
        overall_score: Integer part of the base health score
        health_history: Exactly 30 daily entries ending at timestamp
    """

    id: str = Field(..., min_length=1)
    repository: str = Field(..., min_length=1)
    timestamp: datetime
    overall_score: int = Field(..., ge=0, le=100)
    metrics: RepositoryMetrics
    trends: HealthTrend
    detailed_metrics: DetailedMetrics
    predictions: HealthPredictions
    benchmarks: Benchmarks
    recommendations: list[Recommendation]
    health_history: list[HealthHistoryEntry] = Field(
        ...,
        min_length=HISTORY_LENGTH,
        max_length=HISTORY_LENGTH,
    )
