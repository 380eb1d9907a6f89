"""Tests for the strategy registry."""

from __future__ import annotations

import pytest

from poke_synergy.data.strategies import STRATEGIES, StrategyCatalog
from poke_synergy.errors import StrategyNotFound, UnknownType
from poke_synergy.models import Role, SingleTypeStrategy, StrategyKind


def test_catalog_lists_every_kind() -> None:
    catalog = StrategyCatalog()
    assert catalog.names() == [kind.value for kind in StrategyKind]
    assert len(catalog.profiles()) == 8


@pytest.mark.parametrize("kind", list(STRATEGIES))
def test_synergy_weights_sum_to_one(kind: StrategyKind) -> None:
    w = STRATEGIES[kind].synergy_weights
    total = (
        w.type_balance
        + w.stat_complement
        + w.move_coverage
        + w.defensive_coverage
        + w.offensive_synergy
    )
    assert total == pytest.approx(1.0)


def test_get_is_case_insensitive() -> None:
    profile = StrategyCatalog().get(" Offensive ")
    assert profile.kind is StrategyKind.OFFENSIVE
    assert profile.stat_priorities.attack == 1.5
    assert profile.desired(Role.SWEEPER) == 4
    assert profile.desired(Role.BALANCED) == 0


def test_unknown_strategy_raises() -> None:
    with pytest.raises(StrategyNotFound):
        StrategyCatalog().get("hyper-offense")


def test_single_type_builds_instance() -> None:
    profile = StrategyCatalog().single_type("Water")
    assert isinstance(profile, SingleTypeStrategy)
    assert profile.chosen_type == "water"
    assert profile.name == "Single Water"
    assert profile.preferred_types == ("water",)
    assert profile.to_selection() == {"kind": "single-type", "chosen_type": "water"}


def test_single_type_rejects_unknown_type() -> None:
    catalog = StrategyCatalog()
    with pytest.raises(UnknownType):
        catalog.single_type("shadow")
    with pytest.raises(StrategyNotFound):
        catalog.resolve("single-type")


def test_resolve_plain_strategy_ignores_type() -> None:
    profile = StrategyCatalog().resolve("defensive", "fire")
    assert profile.kind is StrategyKind.DEFENSIVE
    assert profile.to_selection() == {"kind": "defensive", "chosen_type": None}


def test_get_never_returns_untyped_single_type_template() -> None:
    catalog = StrategyCatalog()
    with pytest.raises(UnknownType):
        catalog.get("single-type")
    profile = catalog.get("single-type", "Ice")
    assert isinstance(profile, SingleTypeStrategy)
    assert profile.chosen_type == "ice"
