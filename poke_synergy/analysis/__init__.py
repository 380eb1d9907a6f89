"""Analysis utilities for Pokémon team building."""

from .roles import classify, count_roles, stat_category
from .roster_analysis import analyze_roster, common_resistances, common_weaknesses
from .strategy_fit import StrategyAnalyzer
from .synergy_scorer import ScoreBreakdown, ScoredCandidate, SynergyScorer

__all__ = [
    "ScoreBreakdown",
    "ScoredCandidate",
    "StrategyAnalyzer",
    "SynergyScorer",
    "analyze_roster",
    "classify",
    "common_resistances",
    "common_weaknesses",
    "count_roles",
    "stat_category",
]
