"""Static registry of team-building strategies."""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Optional

from ..errors import StrategyNotFound, UnknownType
from ..models import (
    Role,
    SingleTypeStrategy,
    StatPriorities,
    StrategyKind,
    StrategyProfile,
    SynergyWeights,
)
from .type_chart import is_known_type


def _roles(sweeper: int, tank: int, support: int, wallbreaker: int):
    return MappingProxyType(
        {
            Role.SWEEPER: sweeper,
            Role.TANK: tank,
            Role.SUPPORT: support,
            Role.WALLBREAKER: wallbreaker,
        }
    )


STRATEGIES: Dict[StrategyKind, StrategyProfile] = {
    StrategyKind.BALANCED: StrategyProfile(
        kind=StrategyKind.BALANCED,
        name="Balanced",
        description="An even team with broad type coverage and varied roles",
        stat_priorities=StatPriorities(),
        role_targets=_roles(sweeper=2, tank=2, support=1, wallbreaker=1),
        synergy_weights=SynergyWeights(0.3, 0.25, 0.25, 0.15, 0.05),
        warnings=(
            "Can be predictable against specialised strategies",
            "Needs good coordination between different roles",
        ),
        tips=(
            "Keep at least two different offensive types",
            "Include both physical and special sweepers",
            "Have at least one defensive tank",
        ),
    ),
    StrategyKind.SINGLE_TYPE: SingleTypeStrategy(
        kind=StrategyKind.SINGLE_TYPE,
        name="Single Type",
        description="A team built around one Pokémon type",
        stat_priorities=StatPriorities(1.2, 1.1, 1.1, 1.1, 1.1, 1.0),
        role_targets=_roles(sweeper=3, tank=2, support=1, wallbreaker=0),
        synergy_weights=SynergyWeights(0.1, 0.4, 0.2, 0.2, 0.1),
        warnings=(
            "Extremely vulnerable to the types that beat your chosen type",
            "May struggle against certain opponents",
            "High-risk, high-reward strategy",
        ),
        tips=(
            "Vary stat spreads for different situations",
            "Look for secondary types that help defensively",
            "Always have a plan for the type's weaknesses",
        ),
    ),
    StrategyKind.OFFENSIVE: StrategyProfile(
        kind=StrategyKind.OFFENSIVE,
        name="Offensive",
        description="A team focused on high damage and Speed",
        stat_priorities=StatPriorities(0.6, 1.5, 0.7, 1.5, 0.7, 1.4),
        role_targets=_roles(sweeper=4, tank=0, support=1, wallbreaker=1),
        synergy_weights=SynergyWeights(0.2, 0.2, 0.3, 0.1, 0.2),
        warnings=(
            "Very fragile against defensive strategies",
            "Relies on securing quick KOs",
            "Vulnerable to priority moves",
        ),
        tips=(
            "Prioritise Pokémon with high Speed",
            "Include both physical and special attackers",
            "Carry varied coverage moves",
        ),
    ),
    StrategyKind.DEFENSIVE: StrategyProfile(
        kind=StrategyKind.DEFENSIVE,
        name="Defensive",
        description="A team focused on resilience and control",
        stat_priorities=StatPriorities(1.5, 0.6, 1.4, 0.6, 1.4, 0.8),
        role_targets=_roles(sweeper=1, tank=4, support=1, wallbreaker=0),
        synergy_weights=SynergyWeights(0.15, 0.25, 0.15, 0.35, 0.1),
        warnings=(
            "May struggle to close out battles",
            "Vulnerable to setup strategies",
            "Games can run very long",
        ),
        tips=(
            "Include recovery and status moves",
            "Keep good resistance coverage",
            "Keep at least one win condition",
        ),
    ),
    StrategyKind.SPEED_CONTROL: StrategyProfile(
        kind=StrategyKind.SPEED_CONTROL,
        name="Speed Control",
        description="A team focused on Speed control and moving first",
        stat_priorities=StatPriorities(0.8, 1.2, 0.8, 1.2, 0.8, 1.6),
        role_targets=_roles(sweeper=5, tank=0, support=1, wallbreaker=0),
        synergy_weights=SynergyWeights(0.2, 0.3, 0.25, 0.05, 0.2),
        warnings=(
            "Extremely fragile once Speed control is lost",
            "Relies on priority moves in emergencies",
            "Can struggle against very bulky walls",
        ),
        tips=(
            "Every Pokémon should have high Speed",
            "Consider priority moves as a backup",
            "Aim for one-hit KOs whenever possible",
        ),
    ),
    StrategyKind.WEATHER: StrategyProfile(
        kind=StrategyKind.WEATHER,
        name="Weather",
        description="A team built to exploit weather conditions",
        stat_priorities=StatPriorities(1.0, 1.2, 1.0, 1.2, 1.0, 1.1),
        role_targets=_roles(sweeper=3, tank=1, support=2, wallbreaker=0),
        synergy_weights=SynergyWeights(0.15, 0.2, 0.2, 0.15, 0.3),
        warnings=(
            "Heavily dependent on keeping the weather up",
            "Vulnerable to the opponent changing the weather",
            "Can fall flat once the weather is removed",
        ),
        tips=(
            "Include several setters for the same weather",
            "Pick Pokémon that benefit from the chosen weather",
            "Have a backup plan for when the weather ends",
        ),
    ),
    StrategyKind.DUAL_CORE: StrategyProfile(
        kind=StrategyKind.DUAL_CORE,
        name="Dual Core",
        description="A team built around two key Pokémon",
        stat_priorities=StatPriorities(1.1, 1.2, 1.0, 1.2, 1.0, 1.1),
        role_targets=_roles(sweeper=2, tank=2, support=2, wallbreaker=0),
        synergy_weights=SynergyWeights(0.25, 0.35, 0.2, 0.15, 0.05),
        warnings=(
            "Heavily dependent on the two core Pokémon",
            "The plan can collapse if one core falls",
            "The core needs extra protection",
        ),
        tips=(
            "Pick two Pokémon that complement each other perfectly",
            "Build the rest of the team to protect the core",
            "Keep redundancy in important roles",
        ),
    ),
    StrategyKind.ATTRITION: StrategyProfile(
        kind=StrategyKind.ATTRITION,
        name="Attrition",
        description="A team that outlasts the opponent through recovery",
        stat_priorities=StatPriorities(1.6, 0.4, 1.5, 0.4, 1.5, 0.7),
        role_targets=_roles(sweeper=0, tank=5, support=1, wallbreaker=0),
        synergy_weights=SynergyWeights(0.1, 0.2, 0.1, 0.5, 0.1),
        warnings=(
            "Extremely long games",
            "Can be tedious for some players",
            "Vulnerable to strong setup sweepers",
        ),
        tips=(
            "Include several forms of recovery",
            "Carry status moves to weaken opponents",
            "Keep at least one reliable win condition",
        ),
    ),
}


class StrategyCatalog:
    """Read-only lookup over the registered strategies."""

    def __init__(self, strategies: Optional[Dict[StrategyKind, StrategyProfile]] = None) -> None:
        self._strategies = dict(strategies or STRATEGIES)

    def names(self) -> List[str]:
        return [kind.value for kind in self._strategies]

    def profiles(self) -> List[StrategyProfile]:
        return list(self._strategies.values())

    def get(self, name: str, chosen_type: Optional[str] = None) -> StrategyProfile:
        """Return a usable profile for ``name``.

        ``single-type`` needs ``chosen_type``; without one :class:`UnknownType`
        is raised instead of handing out the bare template.
        """

        return self.resolve(name, chosen_type)

    def _lookup(self, name: str) -> StrategyProfile:
        try:
            kind = StrategyKind(name.strip().lower())
        except ValueError:
            raise StrategyNotFound(name) from None
        profile = self._strategies.get(kind)
        if profile is None:
            raise StrategyNotFound(name)
        return profile

    def single_type(self, chosen_type: str) -> SingleTypeStrategy:
        type_name = chosen_type.strip().lower()
        if not is_known_type(type_name):
            raise UnknownType(chosen_type)
        template = self._lookup(StrategyKind.SINGLE_TYPE.value)
        return replace(
            template,
            name=f"Single {type_name.title()}",
            description=f"A team focused exclusively on {type_name}-type Pokémon",
            preferred_types=(type_name,),
            avoided_types=(),
            chosen_type=type_name,
        )

    def resolve(self, name: str, chosen_type: Optional[str] = None) -> StrategyProfile:
        """Look up ``name``, instantiating the single-type template when needed."""

        profile = self._lookup(name)
        if profile.kind is StrategyKind.SINGLE_TYPE:
            return self.single_type(chosen_type or "")
        return profile
