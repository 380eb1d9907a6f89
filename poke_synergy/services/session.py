"""Per-session wiring of roster state, catalog and recommendation pipeline."""

from __future__ import annotations

from typing import Callable, List, Optional, Union

from ..analysis import StrategyAnalyzer
from ..clients import PokeAPIClient
from ..config import Settings
from ..data.strategies import StrategyCatalog
from ..models import (
    Member,
    MemberRecommendationResult,
    StrategyAssessment,
    StrategyProfile,
    StrategyRecommendationResult,
)
from ..storage import JsonFileStore, KeyValueStore
from .catalog import MemberCatalog
from .recommendation_pipeline import RecommendationPipeline
from .team_manager import TeamStateManager


class TeamSession:
    """Facade used by the CLI, MCP tools and REST routes."""

    def __init__(
        self,
        store: KeyValueStore,
        catalog: MemberCatalog,
        *,
        strategies: Optional[StrategyCatalog] = None,
        pipeline: Optional[RecommendationPipeline] = None,
        analyzer: Optional[StrategyAnalyzer] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.strategies = strategies or StrategyCatalog()
        self.manager = TeamStateManager(
            store, catalog=self.strategies, debug_logger=debug_logger
        )
        self.catalog = catalog
        self.pipeline = pipeline or RecommendationPipeline(debug_logger=debug_logger)
        self.analyzer = analyzer or StrategyAnalyzer()
        self.manager.restore()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> "TeamSession":
        settings = settings or Settings.from_env()
        client = PokeAPIClient(
            base_url=settings.pokeapi_base_url,
            cache_ttl=settings.pokeapi_cache_ttl,
            timeout=settings.pokeapi_timeout,
            debug_logger=debug_logger,
        )
        return cls(
            JsonFileStore(settings.store_path),
            MemberCatalog(client, limit=settings.catalog_limit, debug_logger=debug_logger),
            debug_logger=debug_logger,
        )

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    def add(self, name_or_id: Union[str, int], slot: Optional[int] = None) -> Member:
        member = self.catalog.find(name_or_id)
        self.manager.add(member, slot)
        return member

    def select_strategy(self, name: str, chosen_type: Optional[str] = None) -> StrategyProfile:
        profile = self.strategies.resolve(name, chosen_type)
        self.manager.select_strategy(profile)
        return profile

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------
    def recommend_for_strategy(
        self, name: Optional[str] = None, chosen_type: Optional[str] = None
    ) -> StrategyRecommendationResult:
        """Recommend for ``name`` or, when omitted, the active strategy."""

        profile = (
            self.strategies.resolve(name, chosen_type)
            if name
            else self.manager.active_strategy
        )
        return self.pipeline.recommend_for_strategy(
            self.manager.roster, profile, self.catalog.members()
        )

    def recommend_for_member(self, name_or_id: Union[str, int]) -> MemberRecommendationResult:
        reference = self.catalog.find(name_or_id)
        return self.pipeline.recommend_for_member(
            self.manager.roster, reference, self.catalog.members()
        )

    def assess(self) -> Optional[StrategyAssessment]:
        return self.analyzer.assess(self.manager.roster, self.manager.active_strategy)

    def strategy_profiles(self) -> List[StrategyProfile]:
        return self.strategies.profiles()
