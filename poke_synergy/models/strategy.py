"""Strategy profile dataclasses.

A strategy is a tagged union: every profile carries a ``kind`` and the
single-type variant is its own subclass carrying the chosen type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from .team import Role


class StrategyKind(str, Enum):
    BALANCED = "balanced"
    SINGLE_TYPE = "single-type"
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    SPEED_CONTROL = "speed-control"
    WEATHER = "weather"
    DUAL_CORE = "dual-core"
    ATTRITION = "attrition"


@dataclass(frozen=True, slots=True)
class StatPriorities:
    """Per-stat multipliers applied when scoring a candidate."""

    hp: float = 1.0
    attack: float = 1.0
    defense: float = 1.0
    special_attack: float = 1.0
    special_defense: float = 1.0
    speed: float = 1.0


@dataclass(frozen=True, slots=True)
class SynergyWeights:
    type_balance: float
    stat_complement: float
    move_coverage: float
    defensive_coverage: float
    offensive_synergy: float


@dataclass(frozen=True, slots=True)
class StrategyProfile:
    """Named, immutable heuristic weighting for recommendations."""

    kind: StrategyKind
    name: str
    description: str
    stat_priorities: StatPriorities
    role_targets: Mapping[Role, int]
    synergy_weights: SynergyWeights
    warnings: Tuple[str, ...] = ()
    tips: Tuple[str, ...] = ()
    preferred_types: Tuple[str, ...] = ()
    avoided_types: Tuple[str, ...] = ()

    def desired(self, role: Role) -> int:
        return self.role_targets.get(role, 0)

    def to_selection(self) -> Dict[str, Optional[str]]:
        """Compact form used to persist the active strategy."""

        return {"kind": self.kind.value, "chosen_type": None}


@dataclass(frozen=True, slots=True)
class SingleTypeStrategy(StrategyProfile):
    """A strategy restricted to Pokémon carrying ``chosen_type``."""

    chosen_type: str = ""

    def to_selection(self) -> Dict[str, Optional[str]]:
        return {"kind": self.kind.value, "chosen_type": self.chosen_type}
