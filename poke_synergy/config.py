"""Environment-driven settings for the servers and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()
load_dotenv(".env.local", override=True)

DEFAULT_STORE_PATH = ".poke_synergy/state.json"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class Settings:
    store_path: str = DEFAULT_STORE_PATH
    catalog_limit: int = 151
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    pokeapi_timeout: int = 10
    pokeapi_cache_ttl: int = 600

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            store_path=os.getenv("POKE_SYNERGY_STORE") or defaults.store_path,
            catalog_limit=_int_env("POKE_SYNERGY_CATALOG_LIMIT", defaults.catalog_limit),
            pokeapi_base_url=os.getenv("POKEAPI_BASE_URL") or defaults.pokeapi_base_url,
            pokeapi_timeout=_int_env("POKEAPI_TIMEOUT", defaults.pokeapi_timeout),
            pokeapi_cache_ttl=_int_env("POKEAPI_CACHE_TTL", defaults.pokeapi_cache_ttl),
        )
