"""Exceptions raised by the team manager, strategy catalog and storage layers."""

from __future__ import annotations


class TeamSynergyError(Exception):
    """Base class for recoverable, caller-handled failures."""


class InvalidSlot(TeamSynergyError):
    """Raised when a slot index falls outside 0-5."""

    def __init__(self, slot: int) -> None:
        super().__init__(f"Invalid team slot: {slot}")
        self.slot = slot


class DuplicateMember(TeamSynergyError):
    """Raised when adding a Pokémon whose id is already on the roster."""

    def __init__(self, member_id: int) -> None:
        super().__init__(f"Pokémon {member_id} is already on the team")
        self.member_id = member_id


class RosterFull(TeamSynergyError):
    """Raised when adding without a slot while all six slots are taken."""

    def __init__(self) -> None:
        super().__init__("Team is full; remove a Pokémon first")


class TeamNotFound(TeamSynergyError):
    """Raised when a saved team id is unknown."""

    def __init__(self, team_id: str) -> None:
        super().__init__(f"Saved team not found: {team_id}")
        self.team_id = team_id


class StrategyNotFound(TeamSynergyError):
    """Raised when a strategy name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown strategy: {name}")
        self.name = name


class UnknownType(StrategyNotFound):
    """Raised when a single-type strategy is built for an unmodelled type."""

    def __init__(self, type_name: str) -> None:
        TeamSynergyError.__init__(self, f"Unknown Pokémon type: {type_name}")
        self.name = type_name


class PersistenceFailure(TeamSynergyError):
    """Raised when the key-value store rejects a read or write."""


class CatalogError(RuntimeError):
    """Raised when the remote Pokémon catalog request fails."""
