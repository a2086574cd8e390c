"""Team metrics schema definitions.

Team-level rollups produced once per team per period. Productivity,
collaboration, and knowledge sub-models embed synthesized time series.
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
    TrendType,
)


class TeamSummaryMetrics(SyntheticModel):
    adrs_created: int
    drift_resolved: int
    review_time: float = Field(..., description="Average review time in hours")
    collaboration_score: float
    decision_velocity: float


class MemberContributions(SyntheticModel):
    adrs_authored: int
    drift_resolved: int
    reviews_completed: int
    discussion_participation: float


class TeamMember(SyntheticModel):
    id: str
    name: str
    email: str
    role: str
    contributions: MemberContributions


# ---------------------------------------------------------------------------
# Productivity
# ---------------------------------------------------------------------------


class VelocityMetrics(SyntheticModel):
    story_points_per_sprint: TimeSeries
    tasks_completed_per_day: TimeSeries
    cycle_time: TimeSeries
    lead_time: TimeSeries
    throughput: TimeSeries
    velocity_variance: float
    predictability_score: float


class DeliveryQualityMetrics(SyntheticModel):
    defect_rate: TimeSeries
    rework_percentage: float
    code_review_effectiveness: float
    test_coverage_trend: TimeSeries
    customer_satisfaction: TimeSeries
    first_time_right: float
    technical_debt_trend: TimeSeries


class EfficiencyMetrics(SyntheticModel):
    coding_time_percentage: float
    meeting_time_percentage: float
    review_time_percentage: float
    planning_time_percentage: float
    waiting_time: float
    rework_time: float
    context_switch_overhead: float
    work_in_progress: TimeSeries
    flow_efficiency: float


class InnovationMetrics(SyntheticModel):
    experimental_projects: int
    new_technologies_adopted: int
    process_improvements_suggested: int
    patents_or_publications: int
    knowledge_sharing_sessions: int
    innovation_time_percentage: float
    idea_implementation_rate: float


class BlockerMetrics(SyntheticModel):
    total_blockers: int
    average_blocking_time: float = Field(..., description="Hours")
    blocker_categories: dict[str, float]
    blocker_trends: TimeSeries
    resolution_effectiveness: float


class FocusTimeMetrics(SyntheticModel):
    daily_focus_hours: TimeSeries
    interruption_frequency: TimeSeries
    deep_work_sessions: TimeSeries
    optimal_focus_hours: list[str]


class ContextSwitchingMetrics(SyntheticModel):
    switches_per_day: TimeSeries
    switch_cost: float = Field(..., description="Minutes lost per switch")
    concurrent_projects: TimeSeries
    multitasking_efficiency: float


class ProductivityMetrics(SyntheticModel):
    """Productivity sub-model; every series spans the team period."""

    velocity: VelocityMetrics
    quality: DeliveryQualityMetrics
    efficiency: EfficiencyMetrics
    innovation: InnovationMetrics
    blockers: BlockerMetrics
    focus_time: FocusTimeMetrics
    context_switching: ContextSwitchingMetrics


# ---------------------------------------------------------------------------
# Collaboration
# ---------------------------------------------------------------------------


class CommunicationMetrics(SyntheticModel):
    meeting_frequency: TimeSeries
    meeting_effectiveness: float
    response_time: TimeSeries
    communication_clarity: float
    channel_usage: dict[str, float]
    preferred_communication_methods: list[str]


class KnowledgeSharingMetrics(SyntheticModel):
    documentation_contributions: int
    mentoring_hours: float
    knowledge_sessions_led: int
    cross_training_participation: float
    knowledge_centralization_index: float
    bus_factor: int = Field(..., ge=1)


class TeamDynamics(SyntheticModel):
    psychological_safety_score: float
    trust_index: float
    conflict_resolution_efficiency: float
    decision_making_speed: float
    collaboration_frequency: dict[str, float]
    team_cohesion_score: float


class CrossFunctionalMetrics(SyntheticModel):
    cross_team_collaborations: int
    stakeholder_satisfaction: float
    external_communication_effectiveness: float
    alignment_with_business_goals: float


class CollaborationMetrics(SyntheticModel):
    communication: CommunicationMetrics
    knowledge_sharing: KnowledgeSharingMetrics
    team_dynamics: TeamDynamics
    cross_functional: CrossFunctionalMetrics


# ---------------------------------------------------------------------------
# Knowledge
# ---------------------------------------------------------------------------


class SkillDistribution(SyntheticModel):
    skill_name: str
    coverage_percentage: float
    expertise_levels: dict[str, float]
    growth_trend: TrendType


class KnowledgeGap(SyntheticModel):
    gap_name: str
    criticality: SeverityType
    impact_assessment: str
    recommended_actions: list[str]
    timeline_to_fill: str


class LearningVelocity(SyntheticModel):
    new_skills_acquired: TimeSeries
    certification_achievements: int
    training_hours: TimeSeries
    skill_application_rate: float


class TrainingEffectiveness(SyntheticModel):
    training_satisfaction: float
    knowledge_retention: float
    skill_application: float
    performance_improvement: float
    roi_on_training: float


class KnowledgeMetrics(SyntheticModel):
    domain_expertise_coverage: dict[str, float]
    skill_distribution: list[SkillDistribution]
    knowledge_gaps: list[KnowledgeGap]
    learning_velocity: LearningVelocity
    training_effectiveness: TrainingEffectiveness
    knowledge_retention_rate: float
    documentation_quality: float


# ---------------------------------------------------------------------------
# Performance trends and team health
# ---------------------------------------------------------------------------


class CorrelationFactor(SyntheticModel):
    factor_name: str
    correlation_coefficient: float
    significance: float
    causal_direction: Literal["causes", "caused_by", "correlated"]


class PerformanceAnomaly(SyntheticModel):
    timestamp: datetime
    severity: Literal["minor", "moderate", "major"]
    description: str
    likely_causes: list[str]
    impact_duration: int = Field(..., description="Days")


class PerformanceTrend(SyntheticModel):
    metric_name: str
    trend_direction: TrendType
    trend_strength: float
    trend_duration: int = Field(..., description="Days")
    correlation_factors: list[CorrelationFactor]
    seasonality: list[SeasonalPattern]
    anomalies: list[PerformanceAnomaly]


class BurnoutRisk(SyntheticModel):
    member_id: str
    risk_level: SeverityType
    contributing_factors: list[str]
    recommended_interventions: list[str]
    timeline: str


class TurnoverRisk(SyntheticModel):
    overall_risk: float
    high_risk_members: int
    contributing_factors: list[str]
    retention_strategies: list[str]


class PerformanceConcern(SyntheticModel):
    concern_type: str
    severity: Literal["minor", "moderate", "significant"]
    affected_members: int
    recommended_actions: list[str]


class TeamHealthIndicators(SyntheticModel):
    overall_health_score: int
    workload_balance: float
    stress_levels: float = Field(..., description="Higher is worse")
    job_satisfaction: float
    work_life_balance: float
    career_growth_satisfaction: float
    burnout_risk: list[BurnoutRisk]
    turnover_risk: TurnoverRisk
    performance_concerns: list[PerformanceConcern]
    engagement_score: float
    motivation_level: float
    team_spirit: float


class IndividualInsight(SyntheticModel):
    """Anonymized per-member insight."""

    member_id: str
    role: str
    tenure: int = Field(..., description="Months")
    productivity_score: float
    quality_score: float
    collaboration_score: float
    growth_trajectory: Literal["accelerating", "steady", "plateauing"]
    strengths: list[str]
    development_areas: list[str]
    career_goals: list[str]
    unique_contributions: list[str]
    mentorship_activities: list[str]
    innovation_contributions: list[str]


class TeamMetricsSnapshot(SyntheticModel):
    """Team rollup for one period.

    Attributes:
        team: Team name
        period: Window the metrics cover
        members: One entry per team member
        individual_insights: One anonymized entry per team member
    """

    team: str = Field(..., min_length=1)
    period: TimeWindow
    metrics: TeamSummaryMetrics
    members: list[TeamMember]
    productivity: ProductivityMetrics
    collaboration: CollaborationMetrics
    knowledge: KnowledgeMetrics
    performance_trends: list[PerformanceTrend]
    team_health: TeamHealthIndicators
    individual_insights: list[IndividualInsight]

    @property
    def team_size(self) -> int:
        """Number of members on the team."""
        return len(self.members)
