"""Pokémon team building with synergy-based recommendations."""

from .data.strategies import StrategyCatalog
from .services import RecommendationPipeline, TeamStateManager

__all__ = [
    "RecommendationPipeline",
    "StrategyCatalog",
    "TeamStateManager",
]
