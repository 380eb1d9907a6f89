"""Lightweight wrapper around PokeAPI for building the candidate catalog."""

from __future__ import annotations

import re
import time
from typing import Any, Callable, Dict, List, Optional, Union

import requests

from ..errors import CatalogError
from ..models import BaseStats, Member

# PokeAPI stat names mapped onto BaseStats fields.
STAT_FIELDS = {
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "special-attack": "special_attack",
    "special-defense": "special_defense",
    "speed": "speed",
}


class PokeAPIClient:
    """Small helper client with naive in-memory caching."""

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        cache_ttl: int = 600,
        timeout: int = 10,
        user_agent: str = "poke-synergy/0.1",
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.user_agent = user_agent
        self._cache: Dict[str, tuple[float, Any]] = {}
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_pokemon(self, name_or_id: Union[str, int]) -> Dict[str, Any]:
        slug = self._slugify_name(str(name_or_id))
        return self._get_json(f"pokemon/{slug}")

    def get_member(self, name_or_id: Union[str, int]) -> Member:
        return self._member_from_payload(self.get_pokemon(name_or_id))

    def get_catalog(self, limit: int = 151, offset: int = 0) -> List[Member]:
        """Fetch ``limit`` Pokémon starting at ``offset`` as members.

        Entries that fail to load are skipped; a failure of the listing itself
        raises :class:`CatalogError`.
        """
        listing = self._get_json("pokemon", params={"limit": limit, "offset": offset})
        members: List[Member] = []
        for entry in listing.get("results", []):
            name = entry.get("name")
            if not name:
                continue
            try:
                members.append(self.get_member(name))
            except CatalogError as exc:
                self._debug(f"Skipping {name}: {exc}")
        self._debug(f"Loaded {len(members)} catalog member(s) (limit={limit}, offset={offset})")
        return members

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(
        self, endpoint: str, *, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        url = self._build_url(endpoint)
        cache_key = url
        if params:
            cache_key += "?" + "&".join(f"{k}={v}" for k, v in sorted(params.items()))
        now = time.time()
        cached = self._cache.get(cache_key)
        if cached and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            response = self.session.get(
                url,
                params=params,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise CatalogError(str(exc)) from exc
        except ValueError as exc:
            raise CatalogError(f"Invalid JSON from {url}") from exc

        self._cache[cache_key] = (now, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip("/")
        return f"{self.base_url}/{endpoint}"

    @staticmethod
    def _member_from_payload(payload: Dict[str, Any]) -> Member:
        try:
            member_id = int(payload["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError("Pokémon payload has no usable id") from exc

        slots = sorted(payload.get("types") or [], key=lambda slot: slot.get("slot", 0))
        types = tuple(
            (slot.get("type") or {}).get("name", "").lower()
            for slot in slots
            if (slot.get("type") or {}).get("name")
        )
        values: Dict[str, int] = {}
        for stat in payload.get("stats") or []:
            field_name = STAT_FIELDS.get((stat.get("stat") or {}).get("name", ""))
            if field_name:
                values[field_name] = int(stat.get("base_stat") or 0)
        return Member(
            id=member_id,
            name=str(payload.get("name", "")),
            types=types,
            stats=BaseStats(**values),
        )

    @staticmethod
    def _slugify_name(name: str) -> str:
        slug = name.strip().lower()
        slug = re.sub(r"[\s\.]+", "-", slug)
        slug = slug.replace("'", "")
        slug = slug.replace(":", "")
        slug = slug.replace("%", "")
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        return slug
