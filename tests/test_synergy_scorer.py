"""Tests for candidate scoring in both recommendation modes."""

from __future__ import annotations

import pytest

from poke_synergy.analysis import SynergyScorer, analyze_roster
from poke_synergy.data.strategies import StrategyCatalog
from poke_synergy.models import BaseStats, Member, SynergyTag


def _member(member_id: int, name: str, types, **stats: int) -> Member:
    return Member(id=member_id, name=name, types=tuple(types), stats=BaseStats(**stats))


FIRE_A = _member(1, "FireA", ["fire"], attack=80, speed=90)
WATER_B = _member(2, "WaterB", ["water"], defense=100, speed=40, hp=90)
GRASS_C = _member(3, "GrassC", ["grass"], special_attack=100, speed=60)


def test_reference_mode_fire_water_grass() -> None:
    roster = [FIRE_A, WATER_B, None, None, None, None]
    analysis = analyze_roster([FIRE_A, WATER_B])
    scored = SynergyScorer().score_for_member(GRASS_C, roster, FIRE_A, analysis)

    # Grass resists ground and water, two of fire's three weaknesses.
    assert scored.breakdown.terms["type_balance"] == pytest.approx(30 * 0.4)
    # Physical reference with a special candidate.
    assert scored.breakdown.terms["stat_complement"] == pytest.approx(20 * 0.3)
    assert scored.breakdown.terms["defensive_coverage"] == 0
    assert scored.score == pytest.approx(18.0)

    assert 0 < len(scored.reasons) <= 3
    assert "Resists the types FireA is weak to: ground, water" in scored.reasons
    assert "Complements with strong special attacks" in scored.reasons
    assert SynergyTag.TYPE_BALANCE in scored.synergy
    assert SynergyTag.STAT_COMPLEMENT in scored.synergy


def test_reference_mode_penalises_duplicate_types() -> None:
    reference = _member(1, "FireA", ["fire"])
    roster = [reference, _member(2, "GrassB", ["grass"])]
    other_grass = _member(3, "GrassC", ["grass"])
    scored = SynergyScorer().score_for_member(
        other_grass, roster, reference, analyze_roster(roster)
    )
    assert scored.breakdown.terms["type_balance"] == pytest.approx((30 - 10) * 0.4)


def test_strategy_mode_empty_roster_score_in_range() -> None:
    scorer = SynergyScorer()
    candidate = _member(9, "Strong", ["dragon"], hp=255, attack=255, defense=255,
                        special_attack=255, special_defense=255, speed=255)
    for profile in StrategyCatalog().profiles():
        if profile.kind.value == "single-type":
            profile = StrategyCatalog().single_type("dragon")
        scored = scorer.score_for_strategy(candidate, [None] * 6, profile, analyze_roster([], profile))
        assert 0 <= scored.score <= 100


def test_strategy_mode_negative_bonus_is_clamped() -> None:
    slow = _member(5, "Slowpoke", ["normal"], speed=5)
    profile = StrategyCatalog().get("speed-control")
    scored = SynergyScorer().score_for_strategy(slow, [None] * 6, profile, analyze_roster([], profile))
    assert scored.breakdown.terms["strategy_bonus"] == -10
    assert scored.score >= 0


def test_strategy_mode_single_type_reasons_and_bonus() -> None:
    profile = StrategyCatalog().single_type("water")
    candidate = _member(7, "Quagsire", ["water", "ground"], hp=95, attack=85, defense=85, speed=35)
    scored = SynergyScorer().score_for_strategy(
        candidate, [None] * 6, profile, analyze_roster([], profile)
    )
    # Ground does not resist electric or grass.
    assert scored.breakdown.terms["type_balance"] == pytest.approx(30 * 0.1)
    assert scored.reasons[0] == "Water-type, as the single-type strategy requires"
    assert SynergyTag.TYPE_BALANCE in scored.synergy
    assert scored.breakdown.terms["strategy_bonus"] == 15


def test_strategy_mode_speed_control_rewards_fast_attackers() -> None:
    profile = StrategyCatalog().get("speed-control")
    fast = _member(8, "Fast", ["electric"], special_attack=120, speed=130)
    scored = SynergyScorer().score_for_strategy(fast, [None] * 6, profile, analyze_roster([], profile))
    assert scored.breakdown.terms["strategy_bonus"] == 15
    assert "Exceptional Speed for controlling the field" in scored.reasons
    assert SynergyTag.OFFENSIVE_CORE in scored.synergy
    assert SynergyTag.MOVE_COVERAGE in scored.synergy


def test_dual_type_member_alone_has_no_shared_weakness() -> None:
    charizard = _member(6, "Charizard", ["fire", "flying"])
    analysis = analyze_roster([charizard])
    assert analysis.weaknesses == []
    assert analysis.strengths == []

    pikachu = _member(25, "Pikachu", ["electric"])
    assert analyze_roster([charizard, pikachu]).weaknesses == ["ground"]


def test_attrition_bonus_rewards_bulk_and_penalises_offense() -> None:
    profile = StrategyCatalog().get("attrition")
    wall = _member(10, "Wall", ["steel"], hp=110, attack=70, defense=90,
                   special_attack=60, special_defense=80)
    scored = SynergyScorer().score_for_strategy(wall, [None] * 6, profile, analyze_roster([], profile))
    assert scored.breakdown.terms["strategy_bonus"] == 10 + 15 - 5
    # (hp + bulk) / 10 under the attrition weight.
    assert scored.breakdown.terms["offensive_synergy"] == pytest.approx(28 * 0.1)
    assert "High HP to drag the battle out" in scored.reasons


def test_defensive_offensive_synergy_is_capped() -> None:
    profile = StrategyCatalog().get("defensive")
    huge = _member(11, "Huge", ["normal"], hp=200, defense=150, special_defense=150)
    scored = SynergyScorer().score_for_strategy(huge, [None] * 6, profile, analyze_roster([], profile))
    assert scored.breakdown.terms["offensive_synergy"] == pytest.approx(35 * 0.1)


def test_weather_bonus_only_for_weather_types() -> None:
    profile = StrategyCatalog().get("weather")
    scorer = SynergyScorer()
    analysis = analyze_roster([], profile)
    water = scorer.score_for_strategy(_member(12, "Rain", ["water"]), [None] * 6, profile, analysis)
    electric = scorer.score_for_strategy(_member(13, "Spark", ["electric"]), [None] * 6, profile, analysis)
    assert water.breakdown.terms["strategy_bonus"] == 10
    assert electric.breakdown.terms["strategy_bonus"] == 0
    # Neither offence- nor bulk-oriented: flat 15.
    assert water.breakdown.terms["offensive_synergy"] == pytest.approx(15 * 0.3)
