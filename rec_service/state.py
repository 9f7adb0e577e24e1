"""Application state: stores, repository, and the engine bound to them."""

import sys
from typing import Optional

from hybrid_recs import RecommendationEngine

from .config import ServiceConfig, get_config
from .services import (
    InMemoryContentStore,
    JsonContentStore,
    RecommendationStore,
    StoreRepository,
)


class AppState:
    """Global application state."""

    def __init__(self, config: ServiceConfig):
        self.config = config

        ok, errors = config.validate()
        if not ok:
            raise ValueError("Invalid service configuration: " + "; ".join(errors))

        self.content_store = self._create_content_store(config)
        print(
            f"[startup] Content store: {type(self.content_store).__name__} "
            f"({self.content_store.item_count} items)",
            file=sys.stderr,
        )

        self.recommendation_store = RecommendationStore(config.recommendations_json_path)
        where = config.recommendations_json_path or "memory"
        print(f"[startup] Recommendation store: {where}", file=sys.stderr)

        self.repository = StoreRepository(self.content_store, self.recommendation_store)
        self.engine = RecommendationEngine(
            self.repository,
            config=config.load_algorithm_config(),
        )

    def _create_content_store(self, config: ServiceConfig) -> InMemoryContentStore:
        """Create content store (JSON file when configured, else empty in-memory)."""
        if config.data_source == "json" and config.content_json_path:
            return JsonContentStore(config.content_json_path)
        return InMemoryContentStore()


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState(get_config())
    return _state


def reset_state() -> None:
    global _state
    _state = None
