"""Synergy scoring for a candidate against a roster.

Both scoring modes share the pairwise helpers below. The reference-member mode
scores a candidate against a single anchor Pokémon; the strategy mode scores it
against every roster member under a strategy's weights.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from ..data.type_chart import covered_weaknesses, weaknesses_of
from ..models import (
    Member,
    Role,
    RosterAnalysis,
    SingleTypeStrategy,
    StrategyKind,
    StrategyProfile,
    SynergyTag,
)
from .roles import classify, count_roles, stat_category
from .roster_analysis import active_members, common_weaknesses

MAX_SCORE = 100.0
MAX_REASONS = 3

# Fixed weights of the reference-member mode.
MEMBER_WEIGHTS = {
    "type_balance": 0.4,
    "stat_complement": 0.3,
    "defensive_coverage": 0.2,
    "diversity": 0.1,
}

STAT_PRIORITY_WEIGHT = 0.3
ROLE_FIT_WEIGHT = 0.25

# hp, attack, defense, special_attack, special_defense, speed
STAT_COEFFICIENTS = (0.15, 0.18, 0.16, 0.18, 0.16, 0.17)

WEATHER_TYPES = {"fire", "grass", "water", "rock"}
OFFENSE_ORIENTED = {StrategyKind.OFFENSIVE, StrategyKind.SPEED_CONTROL}
BULK_ORIENTED = {StrategyKind.DEFENSIVE, StrategyKind.ATTRITION}


@dataclass(slots=True)
class ScoreBreakdown:
    """Weighted contribution of each scoring term."""

    terms: Dict[str, float] = field(default_factory=dict)

    @property
    def raw_total(self) -> float:
        return sum(self.terms.values())

    @property
    def total(self) -> float:
        return max(0.0, min(self.raw_total, MAX_SCORE))

    def nonzero(self) -> List[str]:
        return [name for name, value in self.terms.items() if value]


@dataclass(slots=True)
class ScoredCandidate:
    member: Member
    score: float
    breakdown: ScoreBreakdown
    reasons: List[str] = field(default_factory=list)
    synergy: FrozenSet[SynergyTag] = frozenset()


# ----------------------------------------------------------------------
# Pairwise helpers
# ----------------------------------------------------------------------
def physical_special_split(a: Member, b: Member) -> Tuple[bool, bool]:
    """(a physical & b special, a special & b physical)."""

    sa, sb = a.stats, b.stats
    return (
        sa.attack > sa.special_attack and sb.special_attack > sb.attack,
        sa.special_attack > sa.attack and sb.attack > sb.special_attack,
    )


def offense_defense_split(a: Member, b: Member) -> Tuple[bool, bool]:
    """(a offensive & b defensive, a defensive & b offensive)."""

    sa, sb = a.stats, b.stats
    return (
        sa.offense > sa.bulk and sb.bulk > sb.offense,
        sa.bulk > sa.offense and sb.offense > sb.bulk,
    )


def pair_coverage(anchor: Member, candidate: Member) -> List[Tuple[str, List[str]]]:
    """For each (anchor type, candidate type) pair, the anchor weaknesses resisted."""

    pairs: List[Tuple[str, List[str]]] = []
    for anchor_type in anchor.types:
        weaknesses = sorted(weaknesses_of(anchor_type))
        for candidate_type in candidate.types:
            pairs.append((candidate_type, covered_weaknesses(weaknesses, candidate_type)))
    return pairs


def weaknesses_covered_by(candidate: Member, weaknesses: Sequence[str]) -> List[str]:
    covered: Set[str] = set()
    for candidate_type in candidate.types:
        covered.update(covered_weaknesses(weaknesses, candidate_type))
    return [w for w in weaknesses if w in covered]


def _resist_pairs(candidate: Member, weaknesses: Sequence[str]) -> int:
    return sum(len(covered_weaknesses(weaknesses, t)) for t in candidate.types)


def _roster_types(members: Sequence[Member]) -> Set[str]:
    return {type_name for member in members for type_name in member.types}


class SynergyScorer:
    """Scores how well a candidate complements a roster."""

    # ------------------------------------------------------------------
    # Reference-member mode
    # ------------------------------------------------------------------
    def score_for_member(
        self,
        candidate: Member,
        roster: Sequence[Optional[Member]],
        reference: Member,
        analysis: RosterAnalysis,
    ) -> ScoredCandidate:
        members = active_members(roster)
        breakdown = ScoreBreakdown(
            terms={
                "type_balance": self._member_type_balance(candidate, members, reference)
                * MEMBER_WEIGHTS["type_balance"],
                "stat_complement": self._member_complement(candidate, reference)
                * MEMBER_WEIGHTS["stat_complement"],
                "defensive_coverage": _resist_pairs(candidate, analysis.weaknesses)
                * 20
                * MEMBER_WEIGHTS["defensive_coverage"],
                "diversity": self._diversity(candidate, members)
                * MEMBER_WEIGHTS["diversity"],
            }
        )
        return ScoredCandidate(
            member=candidate,
            score=breakdown.total,
            breakdown=breakdown,
            reasons=self._member_reasons(candidate, reference, analysis),
            synergy=self._member_tags(candidate, reference),
        )

    def _member_type_balance(
        self, candidate: Member, members: Sequence[Member], reference: Member
    ) -> float:
        balance = sum(len(covered) * 15 for _, covered in pair_coverage(reference, candidate))
        team_types = _roster_types(members)
        balance -= 10 * sum(1 for t in candidate.types if t in team_types)
        return max(0, balance)

    @staticmethod
    def _member_complement(candidate: Member, reference: Member) -> float:
        complement = 20 * sum(physical_special_split(reference, candidate))
        complement += 25 * sum(offense_defense_split(reference, candidate))
        ref, cand = reference.stats, candidate.stats
        if ref.speed > 90 and cand.speed < 50 and cand.hp > 80:
            complement += 15
        return complement

    @staticmethod
    def _diversity(candidate: Member, members: Sequence[Member]) -> float:
        existing = {stat_category(member) for member in members}
        return 30 if stat_category(candidate) not in existing else 0

    @staticmethod
    def _member_reasons(
        candidate: Member, reference: Member, analysis: RosterAnalysis
    ) -> List[str]:
        reasons: List[str] = []
        for _, covered in pair_coverage(reference, candidate):
            if covered:
                reasons.append(
                    f"Resists the types {reference.name} is weak to: {', '.join(covered)}"
                )
        physical_special, special_physical = physical_special_split(reference, candidate)
        if physical_special:
            reasons.append("Complements with strong special attacks")
        if special_physical:
            reasons.append("Complements with strong physical attacks")
        if reference.stats.speed > 90 and candidate.stats.bulk > 150:
            reasons.append("Offers defensive backing for a fast attacker")
        covered_team = weaknesses_covered_by(candidate, analysis.weaknesses)
        if covered_team:
            reasons.append(f"Covers team weaknesses: {', '.join(covered_team)}")
        return reasons[:MAX_REASONS]

    @staticmethod
    def _member_tags(candidate: Member, reference: Member) -> FrozenSet[SynergyTag]:
        tags: Set[SynergyTag] = set()
        if any(covered for _, covered in pair_coverage(reference, candidate)):
            tags.add(SynergyTag.TYPE_BALANCE)
        if any(physical_special_split(reference, candidate)):
            tags.add(SynergyTag.STAT_COMPLEMENT)
        if candidate.stats.bulk > 150:
            tags.add(SynergyTag.DEFENSIVE_WALL)
        if candidate.stats.offense > 150:
            tags.add(SynergyTag.OFFENSIVE_CORE)
        return frozenset(tags)

    # ------------------------------------------------------------------
    # Strategy mode
    # ------------------------------------------------------------------
    def score_for_strategy(
        self,
        candidate: Member,
        roster: Sequence[Optional[Member]],
        strategy: StrategyProfile,
        analysis: RosterAnalysis,
    ) -> ScoredCandidate:
        members = active_members(roster)
        roles = count_roles(members)
        weights = strategy.synergy_weights
        breakdown = ScoreBreakdown(
            terms={
                "stat_priority": self._stat_priority(candidate, strategy) * STAT_PRIORITY_WEIGHT,
                "role_fit": self._role_fit(candidate, roles, strategy) * ROLE_FIT_WEIGHT,
                "type_balance": self._strategy_type_balance(candidate, members, strategy)
                * weights.type_balance,
                "stat_complement": self._strategy_complement(candidate, members)
                * weights.stat_complement,
                "defensive_coverage": self._strategy_defense(candidate, analysis, strategy)
                * weights.defensive_coverage,
                "offensive_synergy": self._offensive_synergy(candidate, strategy)
                * weights.offensive_synergy,
                "strategy_bonus": self._strategy_bonus(candidate, roles, strategy),
            }
        )
        return ScoredCandidate(
            member=candidate,
            score=breakdown.total,
            breakdown=breakdown,
            reasons=self._strategy_reasons(candidate, roles, strategy, analysis),
            synergy=self._strategy_tags(candidate, members, strategy),
        )

    @staticmethod
    def _stat_priority(candidate: Member, strategy: StrategyProfile) -> float:
        p = strategy.stat_priorities
        priorities = (
            p.hp,
            p.attack,
            p.defense,
            p.special_attack,
            p.special_defense,
            p.speed,
        )
        total = sum(
            stat * priority * coefficient
            for stat, priority, coefficient in zip(
                candidate.stats.as_tuple(), priorities, STAT_COEFFICIENTS
            )
        )
        return min(total / 10, 40)

    @staticmethod
    def _role_fit(candidate: Member, roles: Dict[Role, int], strategy: StrategyProfile) -> float:
        role = classify(candidate)
        needed = strategy.desired(role)
        current = roles.get(role, 0)
        if current >= needed:
            return 0
        return (needed - current) * 20

    @staticmethod
    def _strategy_type_balance(
        candidate: Member, members: Sequence[Member], strategy: StrategyProfile
    ) -> float:
        if isinstance(strategy, SingleTypeStrategy):
            chosen = strategy.chosen_type
            if not candidate.has_type(chosen):
                return 0
            score = 30
            secondary = [t for t in candidate.types if t != chosen]
            if secondary:
                weaknesses = sorted(weaknesses_of(chosen))
                score += 5 * len(covered_weaknesses(weaknesses, secondary[0]))
            return score

        balance = 10 * _resist_pairs(candidate, common_weaknesses(members))
        team_types = _roster_types(members)
        balance -= 5 * sum(1 for t in candidate.types if t in team_types)
        return max(0, balance)

    @staticmethod
    def _strategy_complement(candidate: Member, members: Sequence[Member]) -> float:
        if not members:
            return 20
        complement = 0
        for member in members:
            complement += 8 * sum(physical_special_split(candidate, member))
            complement += 6 * sum(offense_defense_split(candidate, member))
        return min(complement, 35)

    @staticmethod
    def _strategy_defense(
        candidate: Member, analysis: RosterAnalysis, strategy: StrategyProfile
    ) -> float:
        if isinstance(strategy, SingleTypeStrategy):
            weaknesses = sorted(weaknesses_of(strategy.chosen_type))
            return 8 * _resist_pairs(candidate, weaknesses)
        return 10 * _resist_pairs(candidate, analysis.weaknesses)

    @staticmethod
    def _offensive_synergy(candidate: Member, strategy: StrategyProfile) -> float:
        stats = candidate.stats
        if strategy.kind in OFFENSE_ORIENTED:
            if stats.speed > 100:
                speed_bonus = 15
            elif stats.speed > 80:
                speed_bonus = 10
            else:
                speed_bonus = 0
            return min(stats.offense / 8 + speed_bonus, 35)
        if strategy.kind in BULK_ORIENTED:
            return min((stats.hp + stats.bulk) / 10, 35)
        return 15

    @staticmethod
    def _strategy_bonus(
        candidate: Member, roles: Dict[Role, int], strategy: StrategyProfile
    ) -> float:
        stats = candidate.stats
        bonus = 0
        if strategy.kind is StrategyKind.SPEED_CONTROL:
            if stats.speed > 110:
                bonus += 15
            elif stats.speed > 95:
                bonus += 10
            elif stats.speed < 60:
                bonus -= 10
        elif strategy.kind is StrategyKind.ATTRITION:
            if stats.hp > 100:
                bonus += 10
            if stats.bulk > 160:
                bonus += 15
            if stats.offense > 120:
                bonus -= 5
        elif strategy.kind is StrategyKind.WEATHER:
            if WEATHER_TYPES.intersection(candidate.types):
                bonus += 10
        elif strategy.kind is StrategyKind.SINGLE_TYPE:
            if not roles.get(classify(candidate)):
                bonus += 15
        return bonus

    @staticmethod
    def _strategy_reasons(
        candidate: Member,
        roles: Dict[Role, int],
        strategy: StrategyProfile,
        analysis: RosterAnalysis,
    ) -> List[str]:
        reasons: List[str] = []
        stats = candidate.stats
        kind = strategy.kind

        if isinstance(strategy, SingleTypeStrategy):
            chosen = strategy.chosen_type
            if candidate.has_type(chosen):
                reasons.append(f"{chosen.title()}-type, as the single-type strategy requires")
                secondary = [t for t in candidate.types if t != chosen]
                if secondary:
                    covered = covered_weaknesses(sorted(weaknesses_of(chosen)), secondary[0])
                    if covered:
                        reasons.append(
                            f"Secondary {secondary[0]} typing helps against: {', '.join(covered)}"
                        )
        elif kind is StrategyKind.OFFENSIVE:
            if stats.offense > 140:
                reasons.append("High offensive output suits an aggressive plan")
            if stats.speed > 100:
                reasons.append("High Speed lets it strike first")
        elif kind is StrategyKind.DEFENSIVE:
            if stats.hp > 80 and (stats.defense > 80 or stats.special_defense > 80):
                reasons.append("Excellent bulk for absorbing hits")
        elif kind is StrategyKind.SPEED_CONTROL:
            if stats.speed > 110:
                reasons.append("Exceptional Speed for controlling the field")
            if stats.attack > 100 or stats.special_attack > 100:
                reasons.append("Pairs Speed with power for sweeping")
        elif kind is StrategyKind.ATTRITION:
            if stats.hp > 100:
                reasons.append("High HP to drag the battle out")
            if stats.bulk > 160:
                reasons.append("Excellent defenses to outlast opponents")

        role = classify(candidate)
        if roles.get(role, 0) < strategy.desired(role):
            reasons.append(f"Fills the {role.value} role this strategy needs")

        if not isinstance(strategy, SingleTypeStrategy):
            covered_team = weaknesses_covered_by(candidate, analysis.weaknesses)
            if covered_team:
                reasons.append(f"Covers team weaknesses: {', '.join(covered_team)}")

        return reasons[:MAX_REASONS]

    @staticmethod
    def _strategy_tags(
        candidate: Member, members: Sequence[Member], strategy: StrategyProfile
    ) -> FrozenSet[SynergyTag]:
        tags: Set[SynergyTag] = set()
        stats = candidate.stats
        if isinstance(strategy, SingleTypeStrategy):
            if candidate.has_type(strategy.chosen_type):
                tags.add(SynergyTag.TYPE_BALANCE)
        elif strategy.kind in OFFENSE_ORIENTED:
            if stats.attack > 100 or stats.special_attack > 100:
                tags.add(SynergyTag.OFFENSIVE_CORE)
        elif strategy.kind in BULK_ORIENTED:
            if stats.bulk > 140:
                tags.add(SynergyTag.DEFENSIVE_WALL)

        if any(any(physical_special_split(candidate, member)) for member in members):
            tags.add(SynergyTag.STAT_COMPLEMENT)
        if strategy.synergy_weights.move_coverage > 0:
            team_types = _roster_types(members)
            if any(t not in team_types for t in candidate.types):
                tags.add(SynergyTag.MOVE_COVERAGE)
        return frozenset(tags)
