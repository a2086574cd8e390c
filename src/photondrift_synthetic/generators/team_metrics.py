"""Team metrics generator.

This module provides the TeamMetricsGenerator for per-team rollups:
members, productivity and collaboration series, knowledge coverage,
performance trends, team health, and anonymized individual insights.

Windows:
- Productivity series span the requested period
- Collaboration series span the 30 days before the period end
- Learning series span the 90 days before the period end, weekly
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Protocol

from photondrift_synthetic.errors import ConfigurationError
from photondrift_synthetic.generators.base import (
    SEVERITIES,
    TEAM_ROSTER,
    DataGenerator,
    as_utc,
)
from photondrift_synthetic.schemas.common import SeasonalPattern, TimeSeries, TimeWindow
from photondrift_synthetic.schemas.team_metrics import (
    BlockerMetrics,
    BurnoutRisk,
    CollaborationMetrics,
    CommunicationMetrics,
    ContextSwitchingMetrics,
    CorrelationFactor,
    CrossFunctionalMetrics,
    DeliveryQualityMetrics,
    EfficiencyMetrics,
    FocusTimeMetrics,
    IndividualInsight,
    InnovationMetrics,
    KnowledgeGap,
    KnowledgeMetrics,
    KnowledgeSharingMetrics,
    LearningVelocity,
    MemberContributions,
    PerformanceAnomaly,
    PerformanceConcern,
    PerformanceTrend,
    ProductivityMetrics,
    SkillDistribution,
    TeamDynamics,
    TeamHealthIndicators,
    TeamMember,
    TeamMetricsSnapshot,
    TeamSummaryMetrics,
    TrainingEffectiveness,
    TurnoverRisk,
    VelocityMetrics,
)

COLLABORATION_WINDOW_DAYS = 30
LEARNING_WINDOW_DAYS = 90

DAILY = 24
WEEKLY = 168

MEMBER_NAMES: tuple[str, ...] = (
    "Alice",
    "Bob",
    "Charlie",
    "Diana",
    "Eve",
    "Frank",
    "Grace",
    "Henry",
)

MEMBER_ROLES: tuple[str, ...] = (
    "Senior Developer",
    "Developer",
    "Junior Developer",
    "Tech Lead",
    "Architect",
)

INSIGHT_ROLES: tuple[str, ...] = ("Senior Developer", "Developer", "Junior Developer")

STRENGTHS: tuple[tuple[str, str], ...] = (
    ("Technical expertise", "Problem solving"),
    ("Code review", "Mentoring"),
    ("Architecture design", "Documentation"),
    ("Testing", "Process improvement"),
)

DEVELOPMENT_AREAS: tuple[tuple[str, str], ...] = (
    ("Communication", "Time management"),
    ("Technical depth", "Leadership"),
    ("Documentation", "Testing practices"),
)


class Period(Protocol):
    """Anything with a start and an end (TimeWindow, DateRange)."""

    start: datetime
    end: datetime


class TeamMetricsGenerator(DataGenerator):
    """Generator for team metrics snapshots.

    Team size is drawn in [3, 12); members, individual insights, and the
    bus factor all follow from it.

    Example:
        >>> generator = TeamMetricsGenerator(DeterministicRandomSource(7))
        >>> period = TimeWindow(start=datetime(2024, 1, 1), end=datetime(2024, 4, 1))
        >>> snapshot = generator.generate("Backend Team", period)
        >>> len(snapshot.members) == len(snapshot.individual_insights)
        True
    """

    def generate(self, team_name: str, period: Period) -> TeamMetricsSnapshot:
        """Generate one team snapshot.

        Args:
            team_name: Team name
            period: Window the metrics cover (naive datetimes are UTC)

        Returns:
            TeamMetricsSnapshot
        """
        window = TimeWindow(start=as_utc(period.start), end=as_utc(period.end))
        rng = self.rng

        team_size = rng.integer(3, 12)

        summary = TeamSummaryMetrics(
            adrs_created=rng.integer(2, 20),
            drift_resolved=rng.integer(10, 100),
            review_time=rng.uniform(2, 24),
            collaboration_score=rng.uniform(0.6, 0.95),
            decision_velocity=rng.uniform(0.5, 0.9),
        )

        members = [self._member(i) for i in range(team_size)]

        productivity = self._productivity(window)
        collaboration = self._collaboration(window, team_size)
        knowledge = self._knowledge(window, team_size)
        performance_trends = [self._performance_trend(window) for _ in range(5)]
        team_health = self._team_health(team_size)
        insights = [self._insight(i) for i in range(team_size)]

        return TeamMetricsSnapshot(
            team=team_name,
            period=window,
            metrics=summary,
            members=members,
            productivity=productivity,
            collaboration=collaboration,
            knowledge=knowledge,
            performance_trends=performance_trends,
            team_health=team_health,
            individual_insights=insights,
        )

    def generate_batch(  # type: ignore[override]
        self,
        count: int,
        *,
        period: Period,
        team_names: Sequence[str] = TEAM_ROSTER,
    ) -> list[TeamMetricsSnapshot]:
        """Generate snapshots for the first count teams.

        Args:
            count: Number of teams
            period: Window the metrics cover
            team_names: Roster to take names from (default: TEAM_ROSTER)

        Returns:
            One snapshot per team, in roster order

        Raises:
            ConfigurationError: If count is negative or exceeds the roster size.
        """
        self._require_count(count)
        if count > len(team_names):
            raise ConfigurationError(
                f"Requested {count} teams but only {len(team_names)} team names are available",
                field_path="team_names",
                operation="generate_batch",
            )

        snapshots = [self.generate(name, period) for name in team_names[:count]]
        self._log_generation("team_metrics", len(snapshots))
        return snapshots

    def _series(
        self,
        start: datetime,
        end: datetime,
        baseline: float,
        trend: float,
        seasonality: float,
        noise: float,
        interval_hours: float,
    ) -> TimeSeries:
        return self.synthesizer.synthesize(
            start,
            end,
            baseline=baseline,
            trend=trend,
            seasonality=seasonality,
            noise=noise,
            interval_hours=interval_hours,
        )

    def _member(self, index: int) -> TeamMember:
        rng = self.rng
        name = rng.choice(MEMBER_NAMES)
        role = rng.choice(MEMBER_ROLES)
        contributions = MemberContributions(
            adrs_authored=rng.integer(0, 5),
            drift_resolved=rng.integer(2, 20),
            reviews_completed=rng.integer(5, 30),
            discussion_participation=rng.uniform(0.2, 0.9),
        )
        return TeamMember(
            id=f"member_{index}",
            name=name,
            email=f"user{index}@company.com",
            role=role,
            contributions=contributions,
        )

    def _productivity(self, window: TimeWindow) -> ProductivityMetrics:
        rng = self.rng
        start, end = window.start, window.end

        velocity = VelocityMetrics(
            story_points_per_sprint=self._series(start, end, 25, 2, 3, 0.15, WEEKLY),
            tasks_completed_per_day=self._series(start, end, 3.5, 0.1, 0.5, 0.2, DAILY),
            cycle_time=self._series(start, end, 4.2, -0.2, 0.8, 0.25, DAILY),
            lead_time=self._series(start, end, 7.5, -0.1, 1.2, 0.3, DAILY),
            throughput=self._series(start, end, 12, 1, 2, 0.2, WEEKLY),
            velocity_variance=rng.uniform(0.1, 0.3),
            predictability_score=rng.uniform(0.65, 0.9),
        )
        quality = DeliveryQualityMetrics(
            defect_rate=self._series(start, end, 0.05, -0.01, 0.01, 0.02, DAILY),
            rework_percentage=rng.uniform(5, 20),
            code_review_effectiveness=rng.uniform(0.7, 0.95),
            test_coverage_trend=self._series(start, end, 75, 2, 5, 2, WEEKLY),
            customer_satisfaction=self._series(start, end, 4.2, 0.1, 0.2, 0.15, WEEKLY),
            first_time_right=rng.uniform(0.7, 0.9),
            technical_debt_trend=self._series(start, end, 20, -1, 3, 2, WEEKLY),
        )
        efficiency = EfficiencyMetrics(
            coding_time_percentage=rng.uniform(40, 70),
            meeting_time_percentage=rng.uniform(15, 35),
            review_time_percentage=rng.uniform(10, 25),
            planning_time_percentage=rng.uniform(5, 15),
            waiting_time=rng.uniform(5, 20),
            rework_time=rng.uniform(5, 25),
            context_switch_overhead=rng.uniform(10, 30),
            work_in_progress=self._series(start, end, 5, 0, 1, 0.5, DAILY),
            flow_efficiency=rng.uniform(0.6, 0.85),
        )
        innovation = InnovationMetrics(
            experimental_projects=rng.integer(1, 5),
            new_technologies_adopted=rng.integer(0, 3),
            process_improvements_suggested=rng.integer(2, 10),
            patents_or_publications=rng.integer(0, 2),
            knowledge_sharing_sessions=rng.integer(1, 8),
            innovation_time_percentage=rng.uniform(5, 20),
            idea_implementation_rate=rng.uniform(0.3, 0.8),
        )
        blockers = BlockerMetrics(
            total_blockers=rng.integer(3, 15),
            average_blocking_time=rng.uniform(4, 24),
            blocker_categories={
                "external_dependency": rng.uniform(20, 40),
                "technical_issue": rng.uniform(15, 35),
                "resource_unavailable": rng.uniform(10, 25),
                "process_bottleneck": rng.uniform(10, 30),
            },
            blocker_trends=self._series(start, end, 0.8, -0.1, 0.2, 0.15, DAILY),
            resolution_effectiveness=rng.uniform(0.6, 0.9),
        )
        focus_time = FocusTimeMetrics(
            daily_focus_hours=self._series(start, end, 4.5, 0.2, 1, 0.5, DAILY),
            interruption_frequency=self._series(start, end, 6, -0.5, 2, 0.8, DAILY),
            deep_work_sessions=self._series(start, end, 2.5, 0.1, 0.5, 0.3, DAILY),
            optimal_focus_hours=["09:00-11:00", "14:00-16:00"],
        )
        context_switching = ContextSwitchingMetrics(
            switches_per_day=self._series(start, end, 8, -0.5, 2, 1, DAILY),
            switch_cost=rng.uniform(10, 25),
            concurrent_projects=self._series(start, end, 2.5, 0, 0.5, 0.3, DAILY),
            multitasking_efficiency=rng.uniform(0.5, 0.8),
        )

        return ProductivityMetrics(
            velocity=velocity,
            quality=quality,
            efficiency=efficiency,
            innovation=innovation,
            blockers=blockers,
            focus_time=focus_time,
            context_switching=context_switching,
        )

    def _collaboration(self, window: TimeWindow, team_size: int) -> CollaborationMetrics:
        rng = self.rng
        end = window.end
        start = end - timedelta(days=COLLABORATION_WINDOW_DAYS)

        communication = CommunicationMetrics(
            meeting_frequency=self._series(start, end, 3, 0, 0.5, 0.2, DAILY),
            meeting_effectiveness=rng.uniform(0.6, 0.9),
            response_time=self._series(start, end, 2.5, 0, 0.5, 0.3, DAILY),
            communication_clarity=rng.uniform(0.7, 0.95),
            channel_usage={
                "slack": rng.uniform(40, 60),
                "email": rng.uniform(20, 35),
                "face_to_face": rng.uniform(15, 30),
                "video_call": rng.uniform(10, 25),
            },
            preferred_communication_methods=["Slack", "Video calls", "Face-to-face"],
        )
        knowledge_sharing = KnowledgeSharingMetrics(
            documentation_contributions=rng.integer(2, 15),
            mentoring_hours=rng.uniform(5, 25),
            knowledge_sessions_led=rng.integer(1, 8),
            cross_training_participation=rng.uniform(0.4, 0.9),
            knowledge_centralization_index=rng.uniform(0.3, 0.7),
            bus_factor=max(1, math.floor(team_size * 0.3)),
        )
        dynamics = TeamDynamics(
            psychological_safety_score=rng.uniform(0.6, 0.95),
            trust_index=rng.uniform(0.7, 0.9),
            conflict_resolution_efficiency=rng.uniform(0.6, 0.9),
            decision_making_speed=rng.uniform(0.5, 0.85),
            collaboration_frequency={
                f"pair_{i}": rng.uniform(2, 20) for i in range(min(5, team_size))
            },
            team_cohesion_score=rng.uniform(0.65, 0.9),
        )
        cross_functional = CrossFunctionalMetrics(
            cross_team_collaborations=rng.integer(3, 15),
            stakeholder_satisfaction=rng.uniform(0.7, 0.9),
            external_communication_effectiveness=rng.uniform(0.6, 0.85),
            alignment_with_business_goals=rng.uniform(0.7, 0.95),
        )

        return CollaborationMetrics(
            communication=communication,
            knowledge_sharing=knowledge_sharing,
            team_dynamics=dynamics,
            cross_functional=cross_functional,
        )

    def _knowledge(self, window: TimeWindow, team_size: int) -> KnowledgeMetrics:
        rng = self.rng
        end = window.end
        start = end - timedelta(days=LEARNING_WINDOW_DAYS)

        coverage = {
            "frontend": rng.uniform(0.6, 0.9),
            "backend": rng.uniform(0.7, 0.95),
            "database": rng.uniform(0.5, 0.8),
            "devops": rng.uniform(0.4, 0.7),
            "testing": rng.uniform(0.6, 0.85),
        }
        skills = [
            SkillDistribution(
                skill_name=rng.choice(("JavaScript", "TypeScript", "React", "Node.js", "Testing")),
                coverage_percentage=rng.uniform(40, 90),
                expertise_levels={
                    "beginner": rng.uniform(10, 30),
                    "intermediate": rng.uniform(40, 60),
                    "advanced": rng.uniform(20, 40),
                    "expert": rng.uniform(5, 20),
                },
                growth_trend=rng.choice(("improving", "stable", "declining")),
            )
            for _ in range(5)
        ]
        gaps = [
            KnowledgeGap(
                gap_name=rng.choice(
                    (
                        "Cloud Architecture",
                        "Machine Learning",
                        "Security Practices",
                        "Performance Optimization",
                    )
                ),
                criticality=rng.choice(SEVERITIES),
                impact_assessment="Impact on team capability and project delivery",
                recommended_actions=[
                    "Training program",
                    "Hire specialist",
                    "External consultation",
                ],
                timeline_to_fill=rng.choice(("1-2 months", "2-4 months", "6+ months")),
            )
            for _ in range(rng.integer(1, 4))
        ]
        learning = LearningVelocity(
            new_skills_acquired=self._series(start, end, 1.5, 0.1, 0.3, 0.2, WEEKLY),
            certification_achievements=rng.integer(0, team_size),
            training_hours=self._series(start, end, 8, 1, 2, 1, WEEKLY),
            skill_application_rate=rng.uniform(0.6, 0.9),
        )
        training = TrainingEffectiveness(
            training_satisfaction=rng.uniform(0.7, 0.95),
            knowledge_retention=rng.uniform(0.6, 0.85),
            skill_application=rng.uniform(0.65, 0.9),
            performance_improvement=rng.uniform(0.5, 0.8),
            roi_on_training=rng.uniform(1.5, 4.0),
        )

        return KnowledgeMetrics(
            domain_expertise_coverage=coverage,
            skill_distribution=skills,
            knowledge_gaps=gaps,
            learning_velocity=learning,
            training_effectiveness=training,
            knowledge_retention_rate=rng.uniform(0.7, 0.9),
            documentation_quality=rng.uniform(0.6, 0.85),
        )

    def _performance_trend(self, window: TimeWindow) -> PerformanceTrend:
        rng = self.rng
        span = window.end - window.start

        metric_name = rng.choice(
            ("Velocity", "Quality", "Collaboration", "Innovation", "Efficiency")
        )
        direction = rng.choice(("improving", "stable", "declining"))
        strength = rng.uniform(0.2, 0.8)
        duration = rng.integer(7, 30)
        factors = [
            CorrelationFactor(
                factor_name=rng.choice(
                    ("Team size", "Project complexity", "Tool adoption", "Process changes")
                ),
                correlation_coefficient=rng.uniform(-0.8, 0.8),
                significance=rng.uniform(0.01, 0.1),
                causal_direction=rng.choice(("causes", "caused_by", "correlated")),
            )
            for _ in range(2)
        ]
        seasonality = SeasonalPattern(
            pattern_type="weekly",
            peak_times=["Tuesday", "Wednesday"],
            strength=rng.uniform(0.2, 0.6),
            confidence=rng.uniform(0.6, 0.9),
        )
        anomalies = [
            PerformanceAnomaly(
                timestamp=window.start + rng.next() * span,
                severity=rng.choice(("minor", "moderate", "major")),
                description="Performance anomaly detected",
                likely_causes=["External dependency", "Process change", "Team event"],
                impact_duration=rng.integer(1, 7),
            )
            for _ in range(rng.integer(0, 3))
        ]

        return PerformanceTrend(
            metric_name=metric_name,
            trend_direction=direction,
            trend_strength=strength,
            trend_duration=duration,
            correlation_factors=factors,
            seasonality=[seasonality],
            anomalies=anomalies,
        )

    def _team_health(self, team_size: int) -> TeamHealthIndicators:
        rng = self.rng

        overall = rng.integer(65, 95)
        workload = rng.uniform(0.6, 0.9)
        stress = rng.uniform(0.2, 0.6)
        satisfaction = rng.uniform(0.7, 0.95)
        work_life = rng.uniform(0.6, 0.9)
        career = rng.uniform(0.65, 0.9)
        burnout = [
            BurnoutRisk(
                member_id=f"anon_member_{rng.token(5)}",
                risk_level=rng.choice(SEVERITIES),
                contributing_factors=["High workload", "Tight deadlines", "Limited resources"],
                recommended_interventions=[
                    "Workload redistribution",
                    "Time off",
                    "Process improvement",
                ],
                timeline=rng.choice(("immediate", "1-2 weeks", "2-4 weeks")),
            )
            for _ in range(rng.integer(0, 2))
        ]
        turnover = TurnoverRisk(
            overall_risk=rng.uniform(0.1, 0.3),
            high_risk_members=rng.integer(0, max(1, team_size * 0.2)),
            contributing_factors=[
                "Limited growth opportunities",
                "Work-life balance",
                "Compensation",
            ],
            retention_strategies=["Career development", "Flexible work", "Recognition programs"],
        )
        concerns = [
            PerformanceConcern(
                concern_type=rng.choice(("Productivity", "Quality", "Collaboration", "Skills")),
                severity=rng.choice(("minor", "moderate", "significant")),
                affected_members=rng.integer(1, max(1, team_size * 0.3)),
                recommended_actions=["Additional training", "Mentoring", "Process clarification"],
            )
            for _ in range(rng.integer(0, 2))
        ]

        return TeamHealthIndicators(
            overall_health_score=overall,
            workload_balance=workload,
            stress_levels=stress,
            job_satisfaction=satisfaction,
            work_life_balance=work_life,
            career_growth_satisfaction=career,
            burnout_risk=burnout,
            turnover_risk=turnover,
            performance_concerns=concerns,
            engagement_score=rng.uniform(0.7, 0.95),
            motivation_level=rng.uniform(0.65, 0.9),
            team_spirit=rng.uniform(0.7, 0.95),
        )

    def _insight(self, index: int) -> IndividualInsight:
        rng = self.rng
        return IndividualInsight(
            member_id=f"member_{index}_anon",
            role=rng.choice(INSIGHT_ROLES),
            tenure=rng.integer(6, 48),
            productivity_score=rng.uniform(0.6, 0.95),
            quality_score=rng.uniform(0.65, 0.9),
            collaboration_score=rng.uniform(0.7, 0.95),
            growth_trajectory=rng.choice(("accelerating", "steady", "plateauing")),
            strengths=list(rng.choice(STRENGTHS)),
            development_areas=list(rng.choice(DEVELOPMENT_AREAS)),
            career_goals=["Senior role", "Technical leadership", "Architecture"],
            unique_contributions=["Innovation", "Knowledge sharing"],
            mentorship_activities=["Code review", "Onboarding"],
            innovation_contributions=["Process improvement", "Tool evaluation"],
        )
