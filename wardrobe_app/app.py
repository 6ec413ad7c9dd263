"""Wardrobe planner bootstrap."""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any, Mapping, Optional

from logic.recommendation import (
    OutfitSuggestion,
    RandomSource,
    SuggestionRequest,
    save_suggestion,
    season_for_date,
    suggest_outfit,
)
from models.outfit import Outfit
from tools.image_analysis import ImageAnalyzer, KeywordImageAnalyzer
from tools.snapshot_store import (
    InMemorySnapshotStore,
    JSONSnapshotStore,
    SnapshotStore,
    SQLiteSnapshotStore,
)
from tools.wardrobe_repository import WardrobeRepository
from wardrobe_app.config import AppConfig
from wardrobe_app.logging_config import configure_logging, get_logger, log_event, operation_context

LOGGER = get_logger(__name__)


class WardrobeApp:
    """Wires together configuration, persistence, the repository and the engine.

    One instance is built at process start and handed to every consumer; there
    is no module-level repository.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        store: SnapshotStore | None = None,
        analyzer: ImageAnalyzer | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging(self.config.log_level)

        self.store = store or self._build_snapshot_store()
        self.repository = WardrobeRepository.load(
            self.store,
            storage_slot=self.config.storage_slot,
            seed_on_first_run=self.config.seed_on_first_run,
        )
        self.analyzer = analyzer or KeywordImageAnalyzer()
        self.rng = rng or random.Random()

    def _build_snapshot_store(self) -> SnapshotStore:
        backend = self.config.snapshot_backend.lower()
        if backend == "sqlite":
            return SQLiteSnapshotStore(self.config.snapshot_path or "data/wardrobe.db")
        if backend == "memory":
            return InMemorySnapshotStore()
        return JSONSnapshotStore(self.config.snapshot_path or "data/snapshots")

    def suggest(
        self,
        request: SuggestionRequest | Mapping[str, Any] | None = None,
        current_season: bool = False,
    ) -> OutfitSuggestion:
        """Suggest an outfit from the current wardrobe.

        With ``current_season`` set, a request that names no season is narrowed
        to today's season.
        """

        payload = dict(request.__dict__) if isinstance(request, SuggestionRequest) else dict(request or {})
        if current_season and not payload.get("season"):
            payload["season"] = season_for_date(date.today())
        with operation_context("app:suggest") as correlation_id:
            suggestion = suggest_outfit(payload, self.repository.list_items(), rng=self.rng)
            log_event(
                LOGGER,
                logging.INFO,
                "suggestion_ready",
                correlation_id=correlation_id,
                item_count=len(suggestion.item_ids),
                usable=suggestion.usable,
            )
        return suggestion

    def save_suggestion(
        self,
        request: SuggestionRequest | Mapping[str, Any] | None,
        suggestion: OutfitSuggestion,
        name: Optional[str] = None,
    ) -> Optional[Outfit]:
        return save_suggestion(self.repository, request, suggestion.item_ids, name=name)


__all__ = ["WardrobeApp"]
