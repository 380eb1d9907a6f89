"""Static type relations used by the synergy heuristics.

Relations are categorical and seen from the defender's side: ``weak_to`` lists
the attacking types this type takes extra damage from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

TYPE_ORDER = [
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
]

TYPE_CHART: dict[str, dict[str, tuple[str, ...]]] = {
    "normal": {"weak": ("fighting",), "resist": (), "immune": ("ghost",)},
    "fire": {
        "weak": ("water", "ground", "rock"),
        "resist": ("fire", "grass", "ice", "bug", "steel", "fairy"),
        "immune": (),
    },
    "water": {
        "weak": ("electric", "grass"),
        "resist": ("fire", "water", "ice", "steel"),
        "immune": (),
    },
    "electric": {
        "weak": ("ground",),
        "resist": ("electric", "flying", "steel"),
        "immune": (),
    },
    "grass": {
        "weak": ("fire", "ice", "poison", "flying", "bug"),
        "resist": ("water", "electric", "grass", "ground"),
        "immune": (),
    },
    "ice": {
        "weak": ("fire", "fighting", "rock", "steel"),
        "resist": ("ice",),
        "immune": (),
    },
    "fighting": {
        "weak": ("flying", "psychic", "fairy"),
        "resist": ("bug", "rock", "dark"),
        "immune": (),
    },
    "poison": {
        "weak": ("ground", "psychic"),
        "resist": ("grass", "fighting", "poison", "bug", "fairy"),
        "immune": (),
    },
    "ground": {
        "weak": ("water", "grass", "ice"),
        "resist": ("poison", "rock"),
        "immune": ("electric",),
    },
    "flying": {
        "weak": ("electric", "ice", "rock"),
        "resist": ("grass", "fighting", "bug"),
        "immune": ("ground",),
    },
    "psychic": {
        "weak": ("bug", "ghost", "dark"),
        "resist": ("fighting", "psychic"),
        "immune": (),
    },
    "bug": {
        "weak": ("fire", "flying", "rock"),
        "resist": ("grass", "fighting", "ground"),
        "immune": (),
    },
    "rock": {
        "weak": ("water", "grass", "fighting", "ground", "steel"),
        "resist": ("normal", "fire", "poison", "flying"),
        "immune": (),
    },
    "ghost": {
        "weak": ("ghost", "dark"),
        "resist": ("poison", "bug"),
        "immune": ("normal", "fighting"),
    },
    "dragon": {
        "weak": ("ice", "dragon", "fairy"),
        "resist": ("fire", "water", "electric", "grass"),
        "immune": (),
    },
    "dark": {
        "weak": ("fighting", "bug", "fairy"),
        "resist": ("ghost", "dark"),
        "immune": ("psychic",),
    },
    "steel": {
        "weak": ("fire", "fighting", "ground"),
        "resist": (
            "normal",
            "grass",
            "ice",
            "flying",
            "psychic",
            "bug",
            "rock",
            "dragon",
            "steel",
            "fairy",
        ),
        "immune": ("poison",),
    },
    "fairy": {
        "weak": ("poison", "steel"),
        "resist": ("fighting", "bug", "dark"),
        "immune": ("dragon",),
    },
}


@dataclass(frozen=True, slots=True)
class TypeRelation:
    weak_to: FrozenSet[str] = frozenset()
    resists: FrozenSet[str] = frozenset()
    immune_to: FrozenSet[str] = frozenset()


_EMPTY = TypeRelation()
_RELATIONS: dict[str, TypeRelation] = {
    name: TypeRelation(
        weak_to=frozenset(entry["weak"]),
        resists=frozenset(entry["resist"]),
        immune_to=frozenset(entry["immune"]),
    )
    for name, entry in TYPE_CHART.items()
}


def is_known_type(type_name: str) -> bool:
    return type_name.strip().lower() in _RELATIONS


def relation(type_name: str) -> TypeRelation:
    """Return the relation for ``type_name``; unknown types get empty sets."""

    return _RELATIONS.get(type_name.strip().lower(), _EMPTY)


def weaknesses_of(type_name: str) -> FrozenSet[str]:
    return relation(type_name).weak_to


def resistances_of(type_name: str) -> FrozenSet[str]:
    return relation(type_name).resists


def immunities_of(type_name: str) -> FrozenSet[str]:
    return relation(type_name).immune_to


def covered_weaknesses(weaknesses: Iterable[str], defender_type: str) -> list[str]:
    """Weaknesses from ``weaknesses`` that ``defender_type`` resists, in input order."""

    resists = resistances_of(defender_type)
    return [w for w in weaknesses if w in resists]
