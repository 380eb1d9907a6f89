"""Tests for roster state and saved-team persistence."""

from __future__ import annotations

import json
import random

import pytest

from poke_synergy.data.strategies import StrategyCatalog
from poke_synergy.errors import (
    DuplicateMember,
    InvalidSlot,
    PersistenceFailure,
    RosterFull,
    TeamNotFound,
)
from poke_synergy.models import BaseStats, Member, StrategyKind
from poke_synergy.services import ROSTER_KEY, STRATEGY_KEY, TEAMS_KEY, TeamStateManager
from poke_synergy.storage import InMemoryStore


def _member(member_id: int, *types: str, **stats: int) -> Member:
    return Member(
        id=member_id,
        name=f"mon-{member_id}",
        types=types or ("normal",),
        stats=BaseStats(**stats),
    )


class FailingStore(InMemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def set(self, key: str, value: str) -> None:
        if self.fail:
            raise PersistenceFailure("disk full")
        super().set(key, value)


def test_add_fills_lowest_empty_slot() -> None:
    manager = TeamStateManager(InMemoryStore())
    manager.add(_member(1), slot=0)
    manager.add(_member(2), slot=2)
    manager.add(_member(3))
    assert [m.id if m else None for m in manager.roster] == [1, 3, 2, None, None, None]


def test_duplicate_rejected_regardless_of_slot() -> None:
    manager = TeamStateManager(InMemoryStore())
    manager.add(_member(1))
    with pytest.raises(DuplicateMember):
        manager.add(_member(1), slot=4)
    with pytest.raises(DuplicateMember):
        manager.add(_member(1))
    assert manager.size == 1


def test_roster_full_when_no_slot_given() -> None:
    manager = TeamStateManager(InMemoryStore())
    for member_id in range(1, 7):
        manager.add(_member(member_id))
    assert manager.is_full
    with pytest.raises(RosterFull):
        manager.add(_member(7))
    # Explicit slot replaces the occupant.
    manager.add(_member(7), slot=3)
    assert manager.roster[3].id == 7
    assert manager.size == 6


def test_invalid_slots_raise() -> None:
    manager = TeamStateManager(InMemoryStore())
    with pytest.raises(InvalidSlot):
        manager.add(_member(1), slot=6)
    with pytest.raises(InvalidSlot):
        manager.remove(-1)
    with pytest.raises(InvalidSlot):
        manager.move(0, 9)


def test_remove_move_and_clear() -> None:
    manager = TeamStateManager(InMemoryStore())
    manager.add(_member(1))
    manager.add(_member(2))
    manager.move(0, 5)
    assert manager.roster[5].id == 1
    assert manager.roster[0] is None
    manager.remove(1)
    assert [m.id for m in manager.members] == [1]
    manager.clear()
    assert manager.size == 0
    assert len(manager.roster) == 6


def test_stats_on_empty_roster_are_zero() -> None:
    stats = TeamStateManager(InMemoryStore()).stats()
    assert stats.size == 0
    assert stats.total == 0
    assert stats.averages == BaseStats()
    assert stats.type_distribution == {}


def test_stats_average_rounds_half_up() -> None:
    manager = TeamStateManager(InMemoryStore())
    manager.add(_member(1, "fire", hp=80, speed=101))
    manager.add(_member(2, "water", "fire", hp=81, speed=100))
    stats = manager.stats()
    assert stats.size == 2
    assert stats.averages.hp == 81
    assert stats.averages.speed == 101
    assert stats.total == 80 + 101 + 81 + 100
    assert stats.type_distribution == {"fire": 2, "water": 1}


def test_team_types_deduplicated_in_order() -> None:
    manager = TeamStateManager(InMemoryStore())
    manager.add(_member(1, "fire", "flying"))
    manager.add(_member(2, "water", "fire"))
    assert manager.team_types() == ["fire", "flying", "water"]


def test_save_load_and_delete() -> None:
    manager = TeamStateManager(InMemoryStore())
    manager.add(_member(1, "fire"))
    manager.add(_member(2, "water"))
    team_id = manager.save("Starters")
    manager.clear()

    assert manager.load(team_id) is True
    assert [m.id for m in manager.members] == [1, 2]
    assert [team.name for team in manager.list_teams()] == ["Starters"]

    assert manager.delete(team_id) is True
    assert manager.list_teams() == []


def test_save_ids_are_unique() -> None:
    manager = TeamStateManager(InMemoryStore())
    assert manager.save("a") != manager.save("b")


def test_load_unknown_team_raises() -> None:
    manager = TeamStateManager(InMemoryStore())
    with pytest.raises(TeamNotFound):
        manager.load("nonexistent-id")
    with pytest.raises(TeamNotFound):
        manager.delete("nonexistent-id")


def test_mutations_are_written_through() -> None:
    store = InMemoryStore()
    manager = TeamStateManager(store)
    manager.add(_member(25, "electric", speed=90))
    payload = json.loads(store.get(ROSTER_KEY))
    assert payload[0]["id"] == 25
    assert payload[0]["stats"]["speed"] == 90
    assert payload[1:] == [None] * 5


def test_restore_round_trips_state() -> None:
    store = InMemoryStore()
    manager = TeamStateManager(store)
    manager.add(_member(1, "fire"), slot=2)
    manager.save("One")
    manager.select_strategy(StrategyCatalog().single_type("fire"))

    restored = TeamStateManager(store)
    restored.restore()
    assert restored.roster[2].id == 1
    assert restored.list_teams()[0].name == "One"
    assert restored.active_strategy.kind is StrategyKind.SINGLE_TYPE
    assert restored.active_strategy.chosen_type == "fire"


def test_restore_rejects_corrupt_payload() -> None:
    store = InMemoryStore({ROSTER_KEY: "{not json"})
    with pytest.raises(PersistenceFailure):
        TeamStateManager(store).restore()


def test_failed_write_rolls_back() -> None:
    store = FailingStore()
    manager = TeamStateManager(store)
    manager.add(_member(1))
    store.fail = True

    with pytest.raises(PersistenceFailure):
        manager.add(_member(2))
    assert [m.id for m in manager.members] == [1]

    with pytest.raises(PersistenceFailure):
        manager.save("lost")
    assert manager.list_teams() == []

    with pytest.raises(PersistenceFailure):
        manager.select_strategy(StrategyCatalog().get("offensive"))
    assert manager.active_strategy.kind is StrategyKind.BALANCED
    assert store.get(STRATEGY_KEY) is None


def test_default_strategy_is_balanced() -> None:
    manager = TeamStateManager(InMemoryStore())
    assert manager.summary()["strategy"] == {"kind": "balanced", "chosen_type": None}


@pytest.mark.parametrize(
    "roster",
    [
        [{"name": "x"}],
        [{"id": "not-a-number"}],
        {"id": 1},
        [None] * 7,
    ],
)
def test_restore_rejects_malformed_roster(roster) -> None:
    store = InMemoryStore({ROSTER_KEY: json.dumps(roster)})
    with pytest.raises(PersistenceFailure):
        TeamStateManager(store).restore()


def test_restore_rejects_duplicate_ids() -> None:
    entry = _member(1, "fire").to_dict()
    store = InMemoryStore({ROSTER_KEY: json.dumps([entry, entry, None, None, None, None])})
    with pytest.raises(PersistenceFailure):
        TeamStateManager(store).restore()


def test_restore_applies_nothing_when_any_key_is_malformed() -> None:
    roster = [_member(1, "fire").to_dict(), None, None, None, None, None]
    store = InMemoryStore(
        {
            ROSTER_KEY: json.dumps(roster),
            TEAMS_KEY: json.dumps([{"name": "no id"}]),
        }
    )
    manager = TeamStateManager(store)
    with pytest.raises(PersistenceFailure):
        manager.restore()
    assert manager.size == 0
    assert manager.list_teams() == []


def test_restore_rejects_unknown_stored_strategy() -> None:
    store = InMemoryStore({STRATEGY_KEY: json.dumps({"kind": "single-type", "chosen_type": "shadow"})})
    manager = TeamStateManager(store)
    with pytest.raises(PersistenceFailure):
        manager.restore()
    assert manager.active_strategy.kind is StrategyKind.BALANCED


def test_random_operation_sequences_keep_roster_invariants() -> None:
    rng = random.Random(1234)
    manager = TeamStateManager(InMemoryStore())
    for _ in range(500):
        operation = rng.choice(["add", "add", "add_slot", "remove", "move", "move", "clear"])
        try:
            if operation == "add":
                manager.add(_member(rng.randint(1, 10)))
            elif operation == "add_slot":
                manager.add(_member(rng.randint(1, 10)), slot=rng.randint(0, 5))
            elif operation == "remove":
                manager.remove(rng.randint(0, 5))
            elif operation == "move":
                manager.move(rng.randint(0, 5), rng.randint(0, 5))
            else:
                manager.clear()
        except (DuplicateMember, RosterFull):
            pass
        ids = [m.id for m in manager.members]
        assert len(manager.roster) == 6
        assert manager.size <= 6
        assert len(ids) == len(set(ids))
