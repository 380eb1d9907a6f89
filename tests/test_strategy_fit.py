"""Tests for the roster-versus-strategy assessment."""

from __future__ import annotations

from poke_synergy.analysis import StrategyAnalyzer
from poke_synergy.data.strategies import StrategyCatalog
from poke_synergy.models import BaseStats, Member


def _member(member_id: int, types, **stats: int) -> Member:
    return Member(id=member_id, name=f"mon-{member_id}", types=tuple(types), stats=BaseStats(**stats))


def test_empty_roster_has_no_assessment() -> None:
    analyzer = StrategyAnalyzer()
    assert analyzer.assess([None] * 6, StrategyCatalog().get("balanced")) is None
    assert analyzer.assess([_member(1, ["fire"])], None) is None


def test_offensive_roster_with_good_speed() -> None:
    roster = [
        _member(1, ["fire"], attack=130, special_attack=80, speed=110),
        _member(2, ["water"], attack=70, special_attack=120, speed=100),
        _member(3, ["electric", "flying"], special_attack=120, speed=120),
        _member(4, ["ground"], attack=120, speed=90, defense=90, special_defense=90),
    ]
    result = StrategyAnalyzer().assess(roster, StrategyCatalog().get("offensive"))
    assert "Good type diversity" in result.strengths
    assert "Good Speed for striking first" in result.strengths
    assert "Very low defenses" in result.weaknesses
    assert 0 <= result.coverage <= 100
    assert len(result.strengths) <= 4
    assert len(result.recommendations) <= 3


def test_slow_speed_team_is_flagged() -> None:
    roster = [
        _member(1, ["rock"], speed=40, attack=100),
        _member(2, ["rock"], speed=50, attack=100),
    ]
    result = StrategyAnalyzer().assess(roster, StrategyCatalog().get("speed-control"))
    assert "Little type diversity" in result.weaknesses
    assert "CRITICAL: Speed is far too low for a speed team" in result.weaknesses
    assert "Speed is low for this strategy" in result.weaknesses
    assert result.recommendations[0] == "Consider adding more type variety"
    # Four weaknesses and no strengths.
    assert result.coverage == 60 - 24


def test_single_type_consistency() -> None:
    roster = [
        _member(1, ["water"], speed=110, attack=130),
        _member(2, ["water"], defense=90, special_defense=90),
        _member(3, ["water"], hp=120),
    ]
    result = StrategyAnalyzer().assess(roster, StrategyCatalog().single_type("water"))
    assert "Perfect type consistency" in result.strengths
    assert "Good role variety" in result.strengths
    assert "Good type diversity" not in result.strengths
