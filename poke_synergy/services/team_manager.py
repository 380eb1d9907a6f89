"""Roster state with write-through persistence."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, TypeVar

from ..analysis.roster_analysis import average_stats, type_distribution
from ..data.strategies import StrategyCatalog
from ..errors import (
    DuplicateMember,
    InvalidSlot,
    PersistenceFailure,
    RosterFull,
    StrategyNotFound,
    TeamNotFound,
)
from ..models import (
    MAX_TEAM_SIZE,
    Member,
    SavedTeam,
    StrategyKind,
    StrategyProfile,
    TeamStats,
)
from ..storage import KeyValueStore

ROSTER_KEY = "poke_synergy:roster"
TEAMS_KEY = "poke_synergy:teams"
STRATEGY_KEY = "poke_synergy:strategy"

T = TypeVar("T")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TeamStateManager:
    """Owns a six-slot roster plus the saved-team list for one session.

    Not safe for concurrent mutation; callers serialise access. Each mutation
    is written through to ``store`` before returning. If the write fails the
    in-memory change is undone and :class:`PersistenceFailure` propagates.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        catalog: Optional[StrategyCatalog] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.store = store
        self.catalog = catalog or StrategyCatalog()
        self._slots: List[Optional[Member]] = [None] * MAX_TEAM_SIZE
        self._teams: List[SavedTeam] = []
        self._strategy: StrategyProfile = self.catalog.get(StrategyKind.BALANCED.value)
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def restore(self) -> None:
        """Load roster, saved teams and strategy selection from the store.

        Nothing is applied unless all three entries decode; a malformed entry
        raises :class:`PersistenceFailure` and leaves the current state as is.
        """

        slots = list(self._slots)
        teams = list(self._teams)
        strategy = self._strategy

        roster_payload = self._read_json(ROSTER_KEY)
        if roster_payload is not None:
            slots = self._decode_roster(roster_payload)
        teams_payload = self._read_json(TEAMS_KEY)
        if teams_payload is not None:
            teams = self._decode(TEAMS_KEY, lambda: [SavedTeam.from_dict(t) for t in teams_payload])
        strategy_payload = self._read_json(STRATEGY_KEY)
        if strategy_payload:
            strategy = self._decode(
                STRATEGY_KEY,
                lambda: self.catalog.resolve(
                    strategy_payload.get("kind", StrategyKind.BALANCED.value),
                    strategy_payload.get("chosen_type"),
                ),
            )

        self._slots = slots
        self._teams = teams
        self._strategy = strategy
        self._debug(
            f"Restored {self.size} team member(s), {len(self._teams)} saved team(s), "
            f"strategy={self._strategy.kind.value}"
        )

    @staticmethod
    def _decode(key: str, build: Callable[[], T]) -> T:
        try:
            return build()
        except (AttributeError, KeyError, TypeError, ValueError, StrategyNotFound) as exc:
            raise PersistenceFailure(f"Malformed data stored under {key}: {exc!r}") from exc

    def _decode_roster(self, payload) -> List[Optional[Member]]:
        decoded = self._decode(
            ROSTER_KEY, lambda: [Member.from_dict(m) if m else None for m in payload]
        )
        if len(decoded) > MAX_TEAM_SIZE:
            raise PersistenceFailure(
                f"Malformed data stored under {ROSTER_KEY}: {len(decoded)} slots"
            )
        ids = [m.id for m in decoded if m is not None]
        if len(ids) != len(set(ids)):
            raise PersistenceFailure(
                f"Malformed data stored under {ROSTER_KEY}: duplicate Pokémon ids {ids}"
            )
        return decoded + [None] * (MAX_TEAM_SIZE - len(decoded))

    def _read_json(self, key: str):
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise PersistenceFailure(f"Corrupt data stored under {key}: {exc}") from exc

    # ------------------------------------------------------------------
    # Roster queries
    # ------------------------------------------------------------------
    @property
    def roster(self) -> List[Optional[Member]]:
        return list(self._slots)

    @property
    def members(self) -> List[Member]:
        return [m for m in self._slots if m is not None]

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return self.size >= MAX_TEAM_SIZE

    def contains(self, member_id: int) -> bool:
        return any(m is not None and m.id == member_id for m in self._slots)

    def empty_slots(self) -> List[int]:
        return [index for index, m in enumerate(self._slots) if m is None]

    def team_types(self) -> List[str]:
        types: List[str] = []
        for member in self.members:
            for type_name in member.types:
                if type_name not in types:
                    types.append(type_name)
        return types

    # ------------------------------------------------------------------
    # Roster mutations
    # ------------------------------------------------------------------
    def add(self, member: Member, slot: Optional[int] = None) -> bool:
        if self.contains(member.id):
            raise DuplicateMember(member.id)
        if slot is not None:
            self._check_slot(slot)
            target = slot
        else:
            empty = self.empty_slots()
            if not empty:
                raise RosterFull()
            target = empty[0]
        previous = list(self._slots)
        self._slots[target] = member
        self._commit_roster(previous)
        self._debug(f"Added {member.name} to slot {target}")
        return True

    def remove(self, slot: int) -> bool:
        self._check_slot(slot)
        previous = list(self._slots)
        self._slots[slot] = None
        self._commit_roster(previous)
        return True

    def move(self, from_slot: int, to_slot: int) -> bool:
        self._check_slot(from_slot)
        self._check_slot(to_slot)
        previous = list(self._slots)
        self._slots[from_slot], self._slots[to_slot] = (
            self._slots[to_slot],
            self._slots[from_slot],
        )
        self._commit_roster(previous)
        return True

    def clear(self) -> None:
        previous = list(self._slots)
        self._slots = [None] * MAX_TEAM_SIZE
        self._commit_roster(previous)

    @staticmethod
    def _check_slot(slot: int) -> None:
        if not 0 <= slot < MAX_TEAM_SIZE:
            raise InvalidSlot(slot)

    def _commit_roster(self, previous: List[Optional[Member]]) -> None:
        payload = json.dumps([m.to_dict() if m else None for m in self._slots])
        try:
            self.store.set(ROSTER_KEY, payload)
        except PersistenceFailure:
            self._slots = previous
            raise

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def stats(self) -> TeamStats:
        members = self.members
        if not members:
            return TeamStats()
        return TeamStats(
            size=len(members),
            total=sum(m.stats.total for m in members),
            averages=average_stats(members),
            type_distribution=type_distribution(members),
        )

    # ------------------------------------------------------------------
    # Saved teams
    # ------------------------------------------------------------------
    def save(self, name: str) -> str:
        timestamp = _now()
        team = SavedTeam(
            id=uuid.uuid4().hex,
            name=name,
            members=list(self._slots),
            created_at=timestamp,
            updated_at=timestamp,
        )
        previous = list(self._teams)
        self._teams.append(team)
        self._commit_teams(previous)
        self._debug(f"Saved team {name!r} as {team.id}")
        return team.id

    def load(self, team_id: str) -> bool:
        team = self._find_team(team_id)
        previous = list(self._slots)
        self._slots = (list(team.members) + [None] * MAX_TEAM_SIZE)[:MAX_TEAM_SIZE]
        self._commit_roster(previous)
        return True

    def delete(self, team_id: str) -> bool:
        team = self._find_team(team_id)
        previous = list(self._teams)
        self._teams.remove(team)
        self._commit_teams(previous)
        return True

    def list_teams(self) -> List[SavedTeam]:
        return list(self._teams)

    def _find_team(self, team_id: str) -> SavedTeam:
        for team in self._teams:
            if team.id == team_id:
                return team
        raise TeamNotFound(team_id)

    def _commit_teams(self, previous: List[SavedTeam]) -> None:
        payload = json.dumps([team.to_dict() for team in self._teams])
        try:
            self.store.set(TEAMS_KEY, payload)
        except PersistenceFailure:
            self._teams = previous
            raise

    # ------------------------------------------------------------------
    # Strategy selection
    # ------------------------------------------------------------------
    @property
    def active_strategy(self) -> StrategyProfile:
        return self._strategy

    def select_strategy(self, strategy: StrategyProfile) -> None:
        previous = self._strategy
        self._strategy = strategy
        try:
            self.store.set(STRATEGY_KEY, json.dumps(strategy.to_selection()))
        except PersistenceFailure:
            self._strategy = previous
            raise

    def summary(self) -> Dict[str, object]:
        return {
            "roster": [m.to_dict() if m else None for m in self._slots],
            "size": self.size,
            "strategy": self._strategy.to_selection(),
        }
