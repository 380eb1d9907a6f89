"""Rule-based assessment of how well a roster fits its selected strategy."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..models import (
    Member,
    SingleTypeStrategy,
    StrategyAssessment,
    StrategyKind,
    StrategyProfile,
)
from .roles import classify
from .roster_analysis import active_members, average_stats

STAT_LABELS = {
    "hp": "HP",
    "attack": "Attack",
    "defense": "Defense",
    "special_attack": "Sp. Atk",
    "special_defense": "Sp. Def",
    "speed": "Speed",
}

BASE_COVERAGE = 60
MAX_STRENGTHS = 4
MAX_WEAKNESSES = 4
MAX_RECOMMENDATIONS = 3


class StrategyAnalyzer:
    """Scores the current roster against a strategy with simple heuristics."""

    def assess(
        self, roster: Sequence[Optional[Member]], strategy: Optional[StrategyProfile]
    ) -> Optional[StrategyAssessment]:
        """Return strengths, weaknesses and a 0-100 coverage figure.

        ``None`` when there is no strategy or the roster is empty.
        """
        members = active_members(roster)
        if strategy is None or not members:
            return None

        strengths: List[str] = []
        weaknesses: List[str] = []
        recommendations: List[str] = []

        if not isinstance(strategy, SingleTypeStrategy):
            types = {t for m in members for t in m.types}
            if len(types) >= 4:
                strengths.append("Good type diversity")
            elif len(types) <= 2:
                weaknesses.append("Little type diversity")
                recommendations.append("Consider adding more type variety")

        self._check_priorities(members, strategy, strengths, weaknesses, recommendations)

        if isinstance(strategy, SingleTypeStrategy):
            self._single_type(members, strengths, weaknesses, recommendations)
        elif strategy.kind is StrategyKind.OFFENSIVE:
            self._offensive(members, strengths, weaknesses, recommendations)
        elif strategy.kind is StrategyKind.DEFENSIVE:
            self._defensive(members, strengths, weaknesses, recommendations)
        elif strategy.kind is StrategyKind.SPEED_CONTROL:
            self._speed_control(members, strengths, weaknesses, recommendations)

        coverage = BASE_COVERAGE
        coverage += min(len(strengths) * 8, 32)
        coverage -= min(len(weaknesses) * 6, 30)
        return StrategyAssessment(
            strengths=strengths[:MAX_STRENGTHS],
            weaknesses=weaknesses[:MAX_WEAKNESSES],
            recommendations=recommendations[:MAX_RECOMMENDATIONS],
            coverage=max(0, min(100, coverage)),
        )

    @staticmethod
    def _check_priorities(
        members: List[Member],
        strategy: StrategyProfile,
        strengths: List[str],
        weaknesses: List[str],
        recommendations: List[str],
    ) -> None:
        averages = average_stats(members)
        for stat, label in STAT_LABELS.items():
            priority = getattr(strategy.stat_priorities, stat)
            if priority <= 1.2:
                continue
            value = getattr(averages, stat)
            if value > 90:
                strengths.append(f"Excellent {label} for this strategy")
            elif value < 70:
                weaknesses.append(f"{label} is low for this strategy")
                recommendations.append(f"Add Pokémon with higher {label}")

    @staticmethod
    def _single_type(
        members: List[Member],
        strengths: List[str],
        weaknesses: List[str],
        recommendations: List[str],
    ) -> None:
        types = {t for m in members for t in m.types}
        if len(types) == 1:
            strengths.append("Perfect type consistency")
        elif len(types) <= 2:
            strengths.append("Good type consistency")
        else:
            weaknesses.append("Too many different types for a single-type team")
            recommendations.append("Focus on one main type")

        if len({classify(m) for m in members}) >= 3:
            strengths.append("Good role variety")
        else:
            recommendations.append("Add more role variety (tank, sweeper, support)")

    @staticmethod
    def _offensive(
        members: List[Member],
        strengths: List[str],
        weaknesses: List[str],
        recommendations: List[str],
    ) -> None:
        averages = average_stats(members)
        if averages.offense > 180:
            strengths.append("Excellent offensive power")
        if averages.speed > 95:
            strengths.append("Good Speed for striking first")
        else:
            weaknesses.append("Not enough Speed for an offensive strategy")
            recommendations.append("Add faster Pokémon")
        if averages.bulk < 120:
            weaknesses.append("Very low defenses")
            recommendations.append("Consider at least one tank for protection")

    @staticmethod
    def _defensive(
        members: List[Member],
        strengths: List[str],
        weaknesses: List[str],
        recommendations: List[str],
    ) -> None:
        averages = average_stats(members)
        if averages.hp > 85:
            strengths.append("Excellent staying power")
        if averages.bulk > 160:
            strengths.append("Solid defenses")
        else:
            weaknesses.append("Defenses too low for a defensive strategy")
            recommendations.append("Add more Pokémon with high defenses")
        if averages.offense < 100:
            weaknesses.append("Very low offensive power")
            recommendations.append("Include at least one offensive win condition")

    @staticmethod
    def _speed_control(
        members: List[Member],
        strengths: List[str],
        weaknesses: List[str],
        recommendations: List[str],
    ) -> None:
        averages = average_stats(members)
        if averages.speed > 105:
            strengths.append("Exceptional Speed")
        elif averages.speed < 95:
            weaknesses.append("CRITICAL: Speed is far too low for a speed team")
            recommendations.append("URGENT: replace slow members with faster ones")

        fast = [m for m in members if m.stats.speed > 100]
        if len(fast) < len(members) * 0.8:
            weaknesses.append("Not every Pokémon is fast enough")
            recommendations.append("At least 80% of the team should have 100+ Speed")
