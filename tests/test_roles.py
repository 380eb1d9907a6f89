"""Tests for stat-based role classification."""

from __future__ import annotations

from poke_synergy.analysis.roles import classify, count_roles, stat_category
from poke_synergy.models import BaseStats, Member, Role


def _member(member_id: int = 1, **stats: int) -> Member:
    return Member(id=member_id, name=f"mon-{member_id}", types=("normal",), stats=BaseStats(**stats))


def test_classify_first_matching_rule_wins() -> None:
    # Fast and strong qualifies as both sweeper and wallbreaker; sweeper comes first.
    assert classify(_member(speed=110, attack=150)) is Role.SWEEPER
    assert classify(_member(speed=50, attack=90, special_attack=60)) is Role.WALLBREAKER
    assert classify(_member(defense=80, special_defense=80)) is Role.TANK
    assert classify(_member(hp=120)) is Role.SUPPORT


def test_classify_falls_back_to_balanced() -> None:
    member = _member(hp=50, attack=50, defense=50, special_attack=50, special_defense=50, speed=50)
    assert classify(member) is Role.BALANCED


def test_count_roles_skips_empty_slots() -> None:
    roster = [_member(1, speed=110, attack=130), None, _member(2, hp=120), None]
    assert count_roles(roster) == {Role.SWEEPER: 1, Role.SUPPORT: 1}


def test_stat_category() -> None:
    assert stat_category(_member(speed=101)) == "sweeper"
    assert stat_category(_member(defense=100)) == "tank"
    assert stat_category(_member(attack=100)) == "attacker"
    assert stat_category(_member(hp=110)) == "wall"
    assert stat_category(_member()) == "balanced"
