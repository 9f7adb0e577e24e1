"""
StoreRepository: one RecommendationRepository built from a content store and a
recommendation store. This is what the service hands to the engine.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from hybrid_recs.models.content import ContentItem

from .content_store import InMemoryContentStore
from .recommendation_store import RecommendationStore


class StoreRepository:
    """Reads delegate to the content store; appends and pruning go to the recommendation store."""

    def __init__(self, content: InMemoryContentStore, recommendations: RecommendationStore):
        self.content = content
        self.recommendations = recommendations

    async def list_own_items(self, user_id: str, limit: Optional[int] = None) -> List[ContentItem]:
        return await self.content.list_own_items(user_id, limit)

    async def list_public_items_by_tag_overlap(
        self,
        tags: Iterable[str],
        exclude_owner_id: Optional[str] = None,
        exclude_ids: Optional[Iterable[str]] = None,
        limit: int = 100,
    ) -> List[ContentItem]:
        return await self.content.list_public_items_by_tag_overlap(
            tags, exclude_owner_id=exclude_owner_id, exclude_ids=exclude_ids, limit=limit
        )

    async def list_public_recent_items(
        self,
        since: datetime,
        limit: int,
        exclude_owner_id: Optional[str] = None,
    ) -> List[ContentItem]:
        return await self.content.list_public_recent_items(since, limit, exclude_owner_id=exclude_owner_id)

    async def list_public_items_by_popularity(self, exclude_id: Optional[str], limit: int) -> List[ContentItem]:
        return await self.content.list_public_items_by_popularity(exclude_id, limit)

    async def count_likes_by_item_ids(self, item_ids: Iterable[str]) -> Dict[str, int]:
        return await self.content.count_likes_by_item_ids(item_ids)

    async def list_follows(self, user_id: str, limit: int) -> List[str]:
        return await self.content.list_follows(user_id, limit)

    async def get_user_profiles(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        return await self.content.get_user_profiles(user_ids)

    async def append_recommendations(self, user_id: str, rows: List[Dict[str, Any]]) -> bool:
        self.recommendations.append(user_id, rows)
        return True

    async def prune_recommendations(self, user_id: str, keep_batches: int) -> int:
        return self.recommendations.prune(user_id, keep_batches)
