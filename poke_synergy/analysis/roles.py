"""Role classification from base stats."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from ..models import Member, Role

# Secondary categories used only for the diversity term of the member scorer.
STAT_CATEGORIES = ("sweeper", "tank", "attacker", "wall", "balanced")


def classify(member: Member) -> Role:
    """Derive a tactical role. Order matters: the first matching rule wins."""

    stats = member.stats
    if stats.speed > 100 and stats.offense > 120:
        return Role.SWEEPER
    if stats.offense > 140:
        return Role.WALLBREAKER
    if stats.bulk > 140:
        return Role.TANK
    if stats.hp > 100:
        return Role.SUPPORT
    return Role.BALANCED


def count_roles(members: Iterable[Optional[Member]]) -> Dict[Role, int]:
    roles: Dict[Role, int] = {}
    for member in members:
        if member is None:
            continue
        role = classify(member)
        roles[role] = roles.get(role, 0) + 1
    return roles


def stat_category(member: Member) -> str:
    stats = member.stats
    if stats.speed > 100:
        return "sweeper"
    if stats.bulk > stats.offense + 50:
        return "tank"
    if stats.offense > stats.bulk + 50:
        return "attacker"
    if stats.hp > 100:
        return "wall"
    return "balanced"
