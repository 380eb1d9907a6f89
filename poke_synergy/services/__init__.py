"""Stateful services: roster management and recommendation orchestration."""

from .catalog import MemberCatalog
from .recommendation_pipeline import RecommendationPipeline
from .session import TeamSession
from .team_manager import ROSTER_KEY, STRATEGY_KEY, TEAMS_KEY, TeamStateManager

__all__ = [
    "MemberCatalog",
    "ROSTER_KEY",
    "STRATEGY_KEY",
    "TEAMS_KEY",
    "RecommendationPipeline",
    "TeamSession",
    "TeamStateManager",
]
