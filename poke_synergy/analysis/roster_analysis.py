"""Type-level roster analysis shared by both recommendation modes."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Set

from ..data.type_chart import resistances_of, weaknesses_of
from ..models import (
    STAT_NAMES,
    BaseStats,
    Member,
    RosterAnalysis,
    SingleTypeStrategy,
    StrategyProfile,
)


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def active_members(roster: Sequence[Optional[Member]]) -> List[Member]:
    return [member for member in roster if member is not None]


def average_stats(members: Sequence[Member]) -> BaseStats:
    """Per-stat mean over ``members``, rounded half-up. Zeros when empty."""

    if not members:
        return BaseStats()
    count = len(members)
    values = {
        name: round_half_up(sum(getattr(m.stats, name) for m in members) / count)
        for name in STAT_NAMES
    }
    return BaseStats(**values)


def type_distribution(members: Sequence[Member]) -> Dict[str, int]:
    distribution: Dict[str, int] = {}
    for member in members:
        for type_name in member.types:
            distribution[type_name] = distribution.get(type_name, 0) + 1
    return distribution


def _shared(members: Sequence[Member], lookup) -> List[str]:
    counts: Dict[str, int] = {}
    for member in members:
        related: Set[str] = set()
        for type_name in member.types:
            related.update(lookup(type_name))
        for name in sorted(related):
            counts[name] = counts.get(name, 0) + 1
    return [name for name, count in counts.items() if count >= 2]


def common_weaknesses(members: Sequence[Member]) -> List[str]:
    """Attacking types at least two members are weak to.

    A member counts once per attacking type even when both of its own types
    share that weakness.
    """

    return _shared(members, weaknesses_of)


def common_resistances(members: Sequence[Member]) -> List[str]:
    return _shared(members, resistances_of)


def _roster_recommendations(
    distribution: Dict[str, int],
    weaknesses: List[str],
    strategy: Optional[StrategyProfile],
) -> List[str]:
    recommendations: List[str] = []
    if isinstance(strategy, SingleTypeStrategy):
        recommendations.append(f"Keep the focus on {strategy.chosen_type}-types")
        if weaknesses:
            recommendations.append(
                f"Look for secondary types that resist: {', '.join(weaknesses)}"
            )
        return recommendations

    if weaknesses:
        recommendations.append(f"Add Pokémon that resist: {', '.join(weaknesses)}")
    if distribution:
        top_type, top_count = sorted(
            distribution.items(), key=lambda kv: kv[1], reverse=True
        )[0]
        if top_count > 2:
            recommendations.append(
                f"Consider diversifying - many {top_type}-type Pokémon"
            )
    return recommendations


def analyze_roster(
    members: Sequence[Member], strategy: Optional[StrategyProfile] = None
) -> RosterAnalysis:
    """Summarise type distribution, shared weaknesses and shared resistances.

    For a single-type strategy the weaknesses and strengths are those of the
    chosen type itself rather than aggregates over the members.
    """

    distribution = type_distribution(members)
    if isinstance(strategy, SingleTypeStrategy):
        weaknesses = sorted(weaknesses_of(strategy.chosen_type))
        strengths = sorted(resistances_of(strategy.chosen_type))
    else:
        weaknesses = common_weaknesses(members)
        strengths = common_resistances(members)
    return RosterAnalysis(
        type_distribution=distribution,
        strengths=strengths,
        weaknesses=weaknesses,
        recommendations=_roster_recommendations(distribution, weaknesses, strategy),
    )
