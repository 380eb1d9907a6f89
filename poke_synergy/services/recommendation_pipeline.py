"""Recommendation pipeline: filter, score, rank and explain candidates."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..analysis.roles import count_roles
from ..analysis.roster_analysis import (
    active_members,
    analyze_roster,
    average_stats,
    common_weaknesses,
)
from ..analysis.synergy_scorer import ScoredCandidate, SynergyScorer
from ..data.type_chart import weaknesses_of
from ..errors import UnknownType
from ..models import (
    Member,
    MemberRecommendationResult,
    Recommendation,
    Role,
    SingleTypeStrategy,
    StrategyCoverage,
    StrategyKind,
    StrategyProfile,
    StrategyRecommendationResult,
)

MAX_TIPS = 5
MAX_WARNINGS = 4

Roster = Sequence[Optional[Member]]


class RecommendationPipeline:
    """Coordinates filtering, scoring and explanation for both modes."""

    def __init__(
        self,
        *,
        scorer: Optional[SynergyScorer] = None,
        member_limit: int = 10,
        strategy_limit: int = 12,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.scorer = scorer or SynergyScorer()
        self.member_limit = member_limit
        self.strategy_limit = strategy_limit
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def recommend(
        self,
        roster: Roster,
        target: Union[Member, StrategyProfile],
        candidates: Iterable[Member],
    ) -> Union[MemberRecommendationResult, StrategyRecommendationResult]:
        if isinstance(target, StrategyProfile):
            return self.recommend_for_strategy(roster, target, candidates)
        return self.recommend_for_member(roster, target, candidates)

    # ------------------------------------------------------------------
    # Reference-member mode
    # ------------------------------------------------------------------
    def recommend_for_member(
        self, roster: Roster, reference: Member, candidates: Iterable[Member]
    ) -> MemberRecommendationResult:
        members = active_members(roster)
        taken = {m.id for m in members}
        analysed = members if reference.id in taken else members + [reference]
        analysis = analyze_roster(analysed)
        pool = [c for c in candidates if c.id not in taken and c.id != reference.id]
        self._debug(f"Scoring {len(pool)} candidate(s) against {reference.name}")
        scored = [
            self.scorer.score_for_member(candidate, roster, reference, analysis)
            for candidate in pool
        ]
        return MemberRecommendationResult(
            reference=reference,
            recommendations=self._rank(scored, self.member_limit),
            analysis=analysis,
        )

    # ------------------------------------------------------------------
    # Strategy mode
    # ------------------------------------------------------------------
    def recommend_for_strategy(
        self, roster: Roster, strategy: StrategyProfile, candidates: Iterable[Member]
    ) -> StrategyRecommendationResult:
        if isinstance(strategy, SingleTypeStrategy) and not strategy.chosen_type:
            raise UnknownType(strategy.chosen_type)
        members = active_members(roster)
        analysis = analyze_roster(members, strategy)
        pool = self.filter_candidates(members, strategy, candidates)
        self._debug(f"Scoring {len(pool)} candidate(s) for strategy {strategy.kind.value}")
        scored = [
            self.scorer.score_for_strategy(candidate, roster, strategy, analysis)
            for candidate in pool
        ]
        coverage = self.analyze_coverage(members, strategy)
        return StrategyRecommendationResult(
            strategy=strategy,
            recommendations=self._rank(scored, self.strategy_limit),
            analysis=analysis,
            coverage=coverage,
            tips=self.build_tips(members, strategy, coverage),
            warnings=self.build_warnings(strategy, coverage),
        )

    @staticmethod
    def filter_candidates(
        members: Sequence[Member], strategy: StrategyProfile, candidates: Iterable[Member]
    ) -> List[Member]:
        """Drop roster members, then keep candidates that carry a preferred
        type (when the strategy names any) and none of the avoided types."""

        taken = {m.id for m in members}
        preferred = strategy.preferred_types
        avoided = set(strategy.avoided_types)
        pool: List[Member] = []
        for candidate in candidates:
            if candidate.id in taken:
                continue
            if preferred and not any(candidate.has_type(t) for t in preferred):
                continue
            if avoided.intersection(candidate.types):
                continue
            pool.append(candidate)
        return pool

    @staticmethod
    def _rank(scored: List[ScoredCandidate], limit: int) -> List[Recommendation]:
        # sorted() is stable, so ties keep pool order.
        ranked = sorted(scored, key=lambda item: item.score, reverse=True)[:limit]
        return [
            Recommendation(
                member=item.member,
                score=item.score,
                reasons=item.reasons,
                synergy=item.synergy,
            )
            for item in ranked
        ]

    # ------------------------------------------------------------------
    # Coverage, tips and warnings
    # ------------------------------------------------------------------
    @staticmethod
    def analyze_coverage(
        members: Sequence[Member], strategy: StrategyProfile
    ) -> StrategyCoverage:
        types_covered: List[str] = []
        for member in members:
            for type_name in member.types:
                if type_name not in types_covered:
                    types_covered.append(type_name)
        if isinstance(strategy, SingleTypeStrategy):
            types_weak = sorted(weaknesses_of(strategy.chosen_type))
        else:
            types_weak = common_weaknesses(members)
        return StrategyCoverage(
            types_covered=types_covered,
            types_weak=types_weak,
            role_balance=count_roles(members),
            stat_distribution=average_stats(list(members)),
        )

    @staticmethod
    def build_tips(
        members: Sequence[Member], strategy: StrategyProfile, coverage: StrategyCoverage
    ) -> List[str]:
        tips: List[str] = list(strategy.tips)
        roles: Dict[Role, int] = coverage.role_balance
        averages = coverage.stat_distribution
        kind = strategy.kind

        if isinstance(strategy, SingleTypeStrategy):
            if coverage.types_weak:
                tips.append(
                    "Prioritise secondary types that resist: "
                    + ", ".join(coverage.types_weak[:3])
                )
            if len(roles) < 3:
                tips.append("Diversify roles: include sweepers, tanks and support")
        elif kind is StrategyKind.OFFENSIVE:
            if averages.speed < 90:
                tips.append("Add faster Pokémon to secure the first move")
            if not roles.get(Role.WALLBREAKER):
                tips.append("Include at least one wallbreaker to break defensive cores")
        elif kind is StrategyKind.DEFENSIVE:
            if averages.hp < 80:
                tips.append("Add Pokémon with more HP for better longevity")
            if roles.get(Role.SWEEPER, 0) > 1:
                tips.append("Consider trading some sweepers for tanks")
        elif kind is StrategyKind.SPEED_CONTROL:
            if averages.speed < 100:
                tips.append("CRITICAL: every Pokémon should have high Speed (100+)")
        elif kind is StrategyKind.BALANCED:
            total_roles = sum(roles.values())
            if total_roles and len(roles) / total_roles < 0.5:
                tips.append("Diversify the team's roles further")

        size = len(members)
        if size < 3:
            tips.append("Build a solid base of at least 3 complementary Pokémon")
        elif size >= 4:
            tips.append("Fine-tune: focus on covering the remaining weaknesses")
        return tips[:MAX_TIPS]

    @staticmethod
    def build_warnings(strategy: StrategyProfile, coverage: StrategyCoverage) -> List[str]:
        warnings: List[str] = list(strategy.warnings)
        roles = coverage.role_balance
        averages = coverage.stat_distribution
        kind = strategy.kind

        if isinstance(strategy, SingleTypeStrategy):
            critical = sorted(weaknesses_of(strategy.chosen_type))
            warnings.append(
                "WARNING: team is extremely vulnerable to " + ", ".join(critical)
            )
            if len(coverage.types_covered) == 1:
                warnings.append("No secondary types to soften those weaknesses")
        elif kind is StrategyKind.OFFENSIVE:
            if averages.bulk < 120:
                warnings.append("Team is very frail and can be knocked out quickly")
            if not roles.get(Role.TANK):
                warnings.append("No tanks - vulnerable to stall strategies")
        elif kind is StrategyKind.SPEED_CONTROL:
            if averages.speed < 95:
                warnings.append("CRITICAL: average Speed is too low for a speed strategy")
            if averages.hp > 90:
                warnings.append("High average HP suggests slow Pokémon on the team")
        elif kind is StrategyKind.ATTRITION:
            if not roles.get(Role.SWEEPER):
                warnings.append("No win condition - how will the team win?")
            elif roles[Role.SWEEPER] > 1:
                warnings.append("Too many sweepers for a defensive strategy")

        if len(coverage.types_weak) > 3:
            warnings.append(
                "Many shared weaknesses: " + ", ".join(coverage.types_weak[:3]) + "..."
            )
        return warnings[:MAX_WARNINGS]
