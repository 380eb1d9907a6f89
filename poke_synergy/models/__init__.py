"""Shared dataclasses for team building and recommendations."""

from .strategy import (
    SingleTypeStrategy,
    StatPriorities,
    StrategyKind,
    StrategyProfile,
    SynergyWeights,
)
from .team import (
    MAX_TEAM_SIZE,
    STAT_NAMES,
    BaseStats,
    Member,
    MemberRecommendationResult,
    Recommendation,
    Role,
    RosterAnalysis,
    SavedTeam,
    StrategyAssessment,
    StrategyCoverage,
    StrategyRecommendationResult,
    SynergyTag,
    TeamStats,
)

__all__ = [
    "MAX_TEAM_SIZE",
    "STAT_NAMES",
    "BaseStats",
    "Member",
    "MemberRecommendationResult",
    "Recommendation",
    "Role",
    "RosterAnalysis",
    "SavedTeam",
    "SingleTypeStrategy",
    "StatPriorities",
    "StrategyAssessment",
    "StrategyCoverage",
    "StrategyKind",
    "StrategyProfile",
    "StrategyRecommendationResult",
    "SynergyTag",
    "SynergyWeights",
    "TeamStats",
]
