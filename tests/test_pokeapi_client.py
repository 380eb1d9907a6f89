"""Unit tests for the PokeAPI catalog client."""

from __future__ import annotations

import pytest
import requests

from poke_synergy.clients import PokeAPIClient
from poke_synergy.errors import CatalogError


def _pokemon_payload(pokemon_id: int, name: str, types, speed: int = 50):
    return {
        "id": pokemon_id,
        "name": name,
        "types": [
            {"slot": slot, "type": {"name": type_name}}
            for slot, type_name in enumerate(types, start=1)
        ],
        "stats": [
            {"base_stat": 45, "stat": {"name": "hp"}},
            {"base_stat": 49, "stat": {"name": "attack"}},
            {"base_stat": 49, "stat": {"name": "defense"}},
            {"base_stat": 65, "stat": {"name": "special-attack"}},
            {"base_stat": 65, "stat": {"name": "special-defense"}},
            {"base_stat": speed, "stat": {"name": "speed"}},
        ],
    }


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, routes) -> None:
        self.routes = routes
        self.calls = []

    def get(self, url, params=None, timeout=None, headers=None):
        self.calls.append((url, params))
        key = url.rsplit("/api/v2/", 1)[-1]
        if key not in self.routes:
            return FakeResponse({}, status_code=404)
        return FakeResponse(self.routes[key])


def test_get_member_maps_stats_and_types() -> None:
    session = FakeSession({"pokemon/bulbasaur": _pokemon_payload(1, "bulbasaur", ["grass", "poison"])})
    member = PokeAPIClient(session=session).get_member("Bulbasaur")
    assert member.id == 1
    assert member.types == ("grass", "poison")
    assert member.stats.special_attack == 65
    assert member.stats.special_defense == 65
    assert member.stats.total == 323


def test_responses_are_cached() -> None:
    session = FakeSession({"pokemon/1": _pokemon_payload(1, "bulbasaur", ["grass"])})
    client = PokeAPIClient(session=session)
    client.get_member(1)
    client.get_member(1)
    assert len(session.calls) == 1


def test_catalog_skips_entries_that_fail() -> None:
    session = FakeSession(
        {
            "pokemon": {
                "results": [
                    {"name": "bulbasaur"},
                    {"name": "missingno"},
                    {"name": "charmander"},
                ]
            },
            "pokemon/bulbasaur": _pokemon_payload(1, "bulbasaur", ["grass", "poison"]),
            "pokemon/charmander": _pokemon_payload(4, "charmander", ["fire"], speed=65),
        }
    )
    messages = []
    client = PokeAPIClient(session=session, debug_logger=messages.append)
    members = client.get_catalog(limit=3)
    assert [m.name for m in members] == ["bulbasaur", "charmander"]
    assert session.calls[0][1] == {"limit": 3, "offset": 0}
    assert any("missingno" in message for message in messages)


def test_listing_failure_raises_catalog_error() -> None:
    client = PokeAPIClient(session=FakeSession({}))
    with pytest.raises(CatalogError):
        client.get_catalog()


def test_custom_base_url() -> None:
    session = FakeSession({"pokemon/pikachu": _pokemon_payload(25, "pikachu", ["electric"])})
    client = PokeAPIClient(session=session, base_url="https://mirror.example/api/v2/")
    client.get_member("pikachu")
    assert session.calls[0][0] == "https://mirror.example/api/v2/pokemon/pikachu"
