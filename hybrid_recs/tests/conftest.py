"""Shared fixtures: in-memory stores, a composed repository, and a fixed clock."""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from rec_service.services import InMemoryContentStore, RecommendationStore, StoreRepository

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def make_item(item_id: str, owner_id: str, tags: List[str], hours_ago: float = 500.0, **extra) -> dict:
    """Store row for one item. Default age is outside the 7-day trending window."""
    return {
        "id": item_id,
        "owner_id": owner_id,
        "title": f"Item {item_id}",
        "tags": tags,
        "url": f"https://example.com/{item_id}",
        "created_at": NOW - timedelta(hours=hours_ago),
        **extra,
    }


@pytest.fixture
def content() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def history() -> RecommendationStore:
    return RecommendationStore()


@pytest.fixture
def repo(content, history) -> StoreRepository:
    return StoreRepository(content, history)
