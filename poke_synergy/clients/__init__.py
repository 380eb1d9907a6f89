"""External data clients used to build the candidate catalog."""

from .pokeapi import PokeAPIClient

__all__ = [
    "PokeAPIClient",
]
