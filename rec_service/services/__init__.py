"""Backing stores: content (read), recommendation history (append), and the composed repository."""

from .content_store import InMemoryContentStore, JsonContentStore
from .errors import StoreError
from .recommendation_store import INTERACTION_ACTIONS, RecommendationStore
from .repository import StoreRepository

__all__ = [
    "INTERACTION_ACTIONS",
    "InMemoryContentStore",
    "JsonContentStore",
    "RecommendationStore",
    "StoreError",
    "StoreRepository",
]
