"""Architecture health generator.

This module provides the ArchitectureHealthGenerator for per-repository
health snapshots: summary metrics, five detailed metric groups, three
forecast horizons, benchmarks, recommendations, and a 30-day history.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from photondrift_synthetic.generators.base import (
    SEVERITIES,
    DataGenerator,
    as_utc,
    clamp,
    epoch_millis,
)
from photondrift_synthetic.schemas.architecture_health import (
    HISTORY_LENGTH,
    ActionItem,
    ArchitectureHealthSnapshot,
    ArchitectureMetrics,
    Benchmarks,
    CodeQualityMetrics,
    DetailedMetrics,
    ForecastFactor,
    ForecastRisk,
    HealthEvent,
    HealthForecast,
    HealthHistoryEntry,
    HealthPredictions,
    HealthTrend,
    HistoryContext,
    ImprovementOpportunity,
    ProcessMetrics,
    Recommendation,
    RepositoryMetrics,
    Scenario,
    SecurityMetrics,
    TeamStructureMetrics,
)

# Forecast horizons in days
SHORT_TERM_DAYS = 30
MEDIUM_TERM_DAYS = 90
LONG_TERM_DAYS = 365

TARGET_SCORE = 85
BASELINE_SCORE = 65
PEER_COUNT = 50

RECOMMENDATION_TITLES: tuple[str, ...] = (
    "Reduce code complexity in core modules",
    "Improve test coverage for critical paths",
    "Implement automated code quality gates",
    "Refactor high-coupling components",
    "Update architectural documentation",
)


class ArchitectureHealthGenerator(DataGenerator):
    """Generator for repository architecture health snapshots.

    Every snapshot draws a base score in [60, 95); the overall score,
    forecasts, benchmarks, and history all derive from it.

    Example:
        >>> generator = ArchitectureHealthGenerator(DeterministicRandomSource(7))
        >>> snapshot = generator.generate("repo_1", datetime(2024, 6, 1))
        >>> len(snapshot.health_history)
        30
    """

    def generate(self, repository_id: str, timestamp: datetime) -> ArchitectureHealthSnapshot:
        """Generate one health snapshot.

        Args:
            repository_id: Repository identifier
            timestamp: Snapshot time (naive values are UTC)

        Returns:
            ArchitectureHealthSnapshot
        """
        timestamp = as_utc(timestamp)
        stamp = epoch_millis(timestamp)
        base_score = self.rng.uniform(60, 95)

        metrics = RepositoryMetrics(
            drift_count=self.rng.integer(5, 50),
            coverage=self.rng.uniform(65, 95),
            compliance=self.rng.uniform(70, 98),
            maintainability=self.rng.uniform(60, 90),
            technical_debt=self.rng.uniform(10, 40),
        )
        trends = HealthTrend(
            direction=self.rng.choice(("improving", "stable", "degrading")),
            velocity=self.rng.uniform(-5, 5),
        )

        detailed = self._detailed_metrics()

        predictions = HealthPredictions(
            short_term=self.generate_forecast(base_score, SHORT_TERM_DAYS),
            medium_term=self.generate_forecast(base_score, MEDIUM_TERM_DAYS),
            long_term=self.generate_forecast(base_score, LONG_TERM_DAYS),
            scenarios=[self._scenario() for _ in range(3)],
        )

        benchmarks = self._benchmarks(base_score)

        recommendations = [
            self._recommendation(i, timestamp, stamp)
            for i in range(self.rng.integer(3, 8))
        ]

        history = [
            self._history_entry(timestamp - timedelta(days=HISTORY_LENGTH - 1 - i), base_score)
            for i in range(HISTORY_LENGTH)
        ]

        return ArchitectureHealthSnapshot(
            id=f"health_{repository_id}_{stamp}",
            repository=repository_id,
            timestamp=timestamp,
            overall_score=int(base_score),
            metrics=metrics,
            trends=trends,
            detailed_metrics=detailed,
            predictions=predictions,
            benchmarks=benchmarks,
            recommendations=recommendations,
            health_history=history,
        )

    def generate_forecast(self, base_score: float, days_ahead: int) -> HealthForecast:
        """Project the health score days_ahead days into the future.

        Args:
            base_score: Current base health score
            days_ahead: Forecast horizon

        Returns:
            HealthForecast with predicted score clamped to [20, 100] and an
            interval of half-width min(20, days_ahead / 10)
        """
        trend_strength = self.rng.uniform(-0.1, 0.1) * days_ahead / 30
        predicted = clamp(base_score + trend_strength * 30, 20.0, 100.0)
        uncertainty = min(20.0, days_ahead / 10)

        key_factors = [
            ForecastFactor(
                factor_name=self.rng.choice(
                    ("Team velocity", "Technical debt", "Code quality", "Process maturity")
                ),
                impact_weight=self.rng.uniform(0.1, 0.4),
                current_trend=self.rng.choice(("positive", "negative", "neutral")),
                expected_change=self.rng.uniform(-0.2, 0.3),
            )
            for _ in range(3)
        ]
        risk_factors = [
            ForecastRisk(
                risk_name=self.rng.choice(
                    ("Resource constraints", "Technical complexity", "External dependencies")
                ),
                probability=self.rng.uniform(0.1, 0.4),
                impact_severity=self.rng.uniform(1, 5),
                time_to_impact=self.rng.uniform(7, days_ahead),
                mitigation_options=["Risk mitigation option"],
            )
            for _ in range(2)
        ]
        opportunities = [
            ImprovementOpportunity(
                opportunity_name=self.rng.choice(
                    ("Process automation", "Tool adoption", "Training program")
                ),
                potential_gain=self.rng.uniform(3, 12),
                effort_required=self.rng.uniform(20, 100),
                timeline=self.rng.choice(("2-4 weeks", "1-2 months", "2-3 months")),
                prerequisites=["Management buy-in", "Resource allocation"],
                success_probability=self.rng.uniform(0.6, 0.9),
            )
            for _ in range(2)
        ]

        lower = max(0.0, predicted - uncertainty)
        upper = min(100.0, predicted + uncertainty)

        return HealthForecast(
            days_ahead=days_ahead,
            predicted_score=predicted,
            uncertainty=uncertainty,
            confidence_interval=(lower, upper),
            key_factors=key_factors,
            risk_factors=risk_factors,
            improvement_opportunities=opportunities,
        )

    def generate_batch(  # type: ignore[override]
        self,
        count: int,
        *,
        repository_id: str,
        end: datetime,
    ) -> list[ArchitectureHealthSnapshot]:
        """Generate one snapshot per day for the count days ending at end.

        Args:
            count: Number of days
            repository_id: Repository identifier
            end: Timestamp of the newest snapshot

        Returns:
            Snapshots ordered oldest first

        Raises:
            ConfigurationError: If count is negative.
        """
        self._require_count(count)
        end = as_utc(end)
        snapshots = [
            self.generate(repository_id, end - timedelta(days=days_back))
            for days_back in range(count - 1, -1, -1)
        ]
        self._log_generation("architecture_health", len(snapshots), repository=repository_id)
        return snapshots

    def _detailed_metrics(self) -> DetailedMetrics:
        rng = self.rng
        code_quality = CodeQualityMetrics(
            complexity=rng.uniform(2, 8),
            duplication=rng.uniform(1, 15),
            test_coverage=rng.uniform(65, 95),
            documentation_coverage=rng.uniform(40, 85),
            code_smells=rng.integer(10, 100),
        )
        architecture = ArchitectureMetrics(
            modularity=rng.uniform(0.6, 0.95),
            coupling=rng.uniform(0.1, 0.4),
            cohesion=rng.uniform(0.7, 0.95),
            dependency_health=rng.uniform(0.65, 0.9),
            layering_compliance=rng.uniform(0.8, 0.98),
        )
        process = ProcessMetrics(
            adr_compliance=rng.uniform(0.7, 0.95),
            decision_velocity=rng.uniform(0.6, 0.9),
            review_efficiency=rng.uniform(0.65, 0.9),
            change_success_rate=rng.uniform(0.85, 0.98),
            rollback_frequency=rng.uniform(0.01, 0.1),
        )
        team = TeamStructureMetrics(
            knowledge_distribution=rng.uniform(0.6, 0.9),
            collaboration_index=rng.uniform(0.7, 0.95),
            onboarding_efficiency=rng.uniform(0.5, 0.85),
            expert_dependency=rng.uniform(0.2, 0.6),
            communication_quality=rng.uniform(0.65, 0.9),
        )
        security = SecurityMetrics(
            vulnerability_count=rng.integer(0, 15),
            security_debt=rng.uniform(5, 30),
            compliance_score=rng.uniform(0.8, 0.98),
            access_control_health=rng.uniform(0.85, 0.98),
            data_protection_score=rng.uniform(0.8, 0.95),
        )
        return DetailedMetrics(
            code_quality=code_quality,
            architecture=architecture,
            process=process,
            team=team,
            security=security,
        )

    def _scenario(self) -> Scenario:
        return Scenario(
            scenario_name=self.rng.choice(("Best Case", "Likely Case", "Worst Case")),
            scenario_description="Scenario based on current trends and planned improvements",
            probability=self.rng.uniform(0.2, 0.4),
            health_impact=self.rng.uniform(-15, 15),
            timeline=self.rng.choice(("2-4 weeks", "1-3 months", "3-6 months")),
            mitigation_strategies=[
                "Regular refactoring",
                "Code review improvements",
                "Team training",
            ],
        )

    def _benchmarks(self, base_score: float) -> Benchmarks:
        rng = self.rng
        return Benchmarks(
            industry_percentile=rng.uniform(45, 85),
            industry_average=rng.uniform(70, 80),
            industry_best_practice=rng.uniform(90, 98),
            peer_ranking=rng.integer(1, 20),
            peer_count=PEER_COUNT,
            peer_average=rng.uniform(65, 85),
            best_historical_score=max(base_score, rng.uniform(80, 98)),
            worst_historical_score=min(base_score, rng.uniform(45, 70)),
            average_historical_score=rng.uniform(65, 85),
            target_score=TARGET_SCORE,
            progress_to_target=(base_score - BASELINE_SCORE) / (TARGET_SCORE - BASELINE_SCORE),
            estimated_time_to_target=rng.integer(30, 180),
        )

    def _recommendation(self, index: int, timestamp: datetime, stamp: int) -> Recommendation:
        rng = self.rng
        category = rng.choice(("quick-win", "strategic", "foundational", "emergency"))
        title = rng.choice(RECOMMENDATION_TITLES)
        expected_impact = rng.uniform(2, 15)
        effort_required = rng.uniform(8, 80)
        implementation_time = rng.choice(("1-2 weeks", "2-4 weeks", "1-2 months"))
        priority_score = rng.integer(20, 95)
        urgency = rng.choice(SEVERITIES)
        action_items = [
            ActionItem(
                id=f"action_{index}_{j}",
                description=f"Action item {j + 1}",
                estimated_hours=rng.uniform(2, 16),
                required_skills=["typescript", "testing", "architecture"],
                dependencies=[],
                completed=rng.chance(0.2),
            )
            for j in range(rng.integer(2, 6))
        ]
        status = rng.choice(("suggested", "approved", "in-progress", "completed", "rejected"))
        assigned_to = rng.choice(("alice", "bob", "charlie")) if rng.chance(0.6) else None
        completion = timestamp + timedelta(days=rng.uniform(7, 60))

        return Recommendation(
            recommendation_id=f"rec_{index}_{stamp}",
            category=category,
            title=title,
            description="Detailed recommendation based on ML analysis of architecture patterns",
            expected_impact=expected_impact,
            effort_required=effort_required,
            implementation_time=implementation_time,
            priority_score=priority_score,
            urgency=urgency,
            action_items=action_items,
            prerequisites=[],
            risks=["Time investment", "Team capacity"],
            success_criteria=["Measurable improvement in metrics", "Team adoption"],
            status=status,
            assigned_to=assigned_to,
            estimated_completion=completion,
        )

    def _history_entry(self, timestamp: datetime, base_score: float) -> HealthHistoryEntry:
        rng = self.rng
        overall = max(0.0, base_score + rng.gaussian(0, 3))
        metric_scores = {
            "code_quality": rng.uniform(60, 90),
            "architecture": rng.uniform(70, 95),
            "process": rng.uniform(65, 85),
            "team": rng.uniform(70, 90),
            "security": rng.uniform(80, 95),
        }
        events = [
            HealthEvent(
                event_type=rng.choice(("improvement", "degradation", "milestone", "incident")),
                description="Health event description",
                impact_score=rng.uniform(-10, 10),
                related_metrics=["code_quality", "architecture"],
            )
            for _ in range(rng.integer(0, 3))
        ]
        context = HistoryContext(
            team_size=rng.integer(5, 15),
            codebase_size=rng.integer(10000, 100000),
            active_projects=rng.integer(1, 5),
            major_releases=rng.integer(0, 2),
            external_factors=[],
        )
        return HealthHistoryEntry(
            timestamp=timestamp,
            overall_score=overall,
            metric_scores=metric_scores,
            events=events,
            context=context,
        )
