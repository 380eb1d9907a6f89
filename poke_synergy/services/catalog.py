"""Lazily loaded candidate catalog backed by PokeAPI."""

from __future__ import annotations

from typing import Callable, List, Optional, Union

from ..clients import PokeAPIClient
from ..models import Member


class MemberCatalog:
    """Caches the candidate pool and resolves members by name or id."""

    def __init__(
        self,
        client: Optional[PokeAPIClient] = None,
        *,
        limit: int = 151,
        members: Optional[List[Member]] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client or PokeAPIClient(debug_logger=debug_logger)
        self.limit = limit
        self._members = list(members) if members is not None else None
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def members(self) -> List[Member]:
        if self._members is None:
            self._debug(f"Fetching catalog of {self.limit} Pokémon")
            self._members = self.client.get_catalog(limit=self.limit)
        return list(self._members)

    def find(self, name_or_id: Union[str, int]) -> Member:
        """Return a catalog member, falling back to a direct lookup."""

        key = str(name_or_id).strip().lower()
        for member in self._members or []:
            if str(member.id) == key or member.name.lower() == key:
                return member
        return self.client.get_member(key)
