"""Core dataclasses shared across the team builder and recommendation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Optional, Tuple

if TYPE_CHECKING:
    from .strategy import StrategyProfile

MAX_TEAM_SIZE = 6


class Role(str, Enum):
    """Coarse tactical role derived from base stats."""

    SWEEPER = "sweeper"
    WALLBREAKER = "wallbreaker"
    TANK = "tank"
    SUPPORT = "support"
    BALANCED = "balanced"


class SynergyTag(str, Enum):
    TYPE_BALANCE = "type-balance"
    STAT_COMPLEMENT = "stat-complement"
    MOVE_COVERAGE = "move-coverage"
    DEFENSIVE_WALL = "defensive-wall"
    OFFENSIVE_CORE = "offensive-core"


STAT_NAMES: Tuple[str, ...] = (
    "hp",
    "attack",
    "defense",
    "special_attack",
    "special_defense",
    "speed",
)


@dataclass(frozen=True, slots=True)
class BaseStats:
    """The six base stats of a Pokémon."""

    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    @property
    def offense(self) -> int:
        return self.attack + self.special_attack

    @property
    def bulk(self) -> int:
        return self.defense + self.special_defense

    @property
    def total(self) -> int:
        return self.hp + self.offense + self.bulk + self.speed

    def as_tuple(self) -> Tuple[int, ...]:
        return (
            self.hp,
            self.attack,
            self.defense,
            self.special_attack,
            self.special_defense,
            self.speed,
        )


@dataclass(frozen=True, slots=True)
class Member:
    """A Pokémon as obtained from the catalog. Immutable."""

    id: int
    name: str
    types: Tuple[str, ...] = ()
    stats: BaseStats = field(default_factory=BaseStats)

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(str(t).lower() for t in self.types))

    def has_type(self, type_name: str) -> bool:
        return type_name.lower() in self.types

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "types": list(self.types),
            "stats": {name: getattr(self.stats, name) for name in STAT_NAMES},
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Member":
        raw_stats = payload.get("stats") or {}
        stats = BaseStats(**{name: int(raw_stats.get(name, 0) or 0) for name in STAT_NAMES})
        return cls(
            id=int(payload["id"]),
            name=str(payload.get("name", "")),
            types=tuple(payload.get("types") or ()),
            stats=stats,
        )


@dataclass(slots=True)
class SavedTeam:
    """Named, timestamped snapshot of a roster."""

    id: str
    name: str
    members: List[Optional[Member]] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "members": [m.to_dict() if m else None for m in self.members],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SavedTeam":
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name", "")),
            members=[Member.from_dict(m) if m else None for m in payload.get("members", [])],
            created_at=str(payload.get("created_at", "")),
            updated_at=str(payload.get("updated_at", "")),
        )


@dataclass(slots=True)
class TeamStats:
    """Aggregate statistics over the occupied roster slots."""

    size: int = 0
    total: int = 0
    averages: BaseStats = field(default_factory=BaseStats)
    type_distribution: Dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class Recommendation:
    """A scored candidate with human-readable justification."""

    member: Member
    score: float
    reasons: List[str] = field(default_factory=list)
    synergy: FrozenSet[SynergyTag] = frozenset()


@dataclass(slots=True)
class RosterAnalysis:
    """Type-level summary of a roster."""

    type_distribution: Dict[str, int] = field(default_factory=dict)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(slots=True)
class StrategyCoverage:
    """Coverage snapshot computed alongside strategy recommendations."""

    types_covered: List[str] = field(default_factory=list)
    types_weak: List[str] = field(default_factory=list)
    role_balance: Dict[Role, int] = field(default_factory=dict)
    stat_distribution: BaseStats = field(default_factory=BaseStats)


@dataclass(slots=True)
class MemberRecommendationResult:
    reference: Member
    recommendations: List[Recommendation] = field(default_factory=list)
    analysis: RosterAnalysis = field(default_factory=RosterAnalysis)


@dataclass(slots=True)
class StrategyRecommendationResult:
    strategy: "StrategyProfile"
    recommendations: List[Recommendation] = field(default_factory=list)
    analysis: RosterAnalysis = field(default_factory=RosterAnalysis)
    coverage: StrategyCoverage = field(default_factory=StrategyCoverage)
    tips: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(slots=True)
class StrategyAssessment:
    """How well the current roster lines up with a strategy."""

    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    coverage: int = 0
