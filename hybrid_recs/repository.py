"""
Repository abstraction.

Everything the engine reads (content items, follows, likes, profiles) and the one
thing it writes (recommendation rows) goes through this interface, so the engine
holds no store handles of its own. Implementations: in-memory / JSON file
(rec_service.services), or any database adapter with the same async methods.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol

from .models.content import ContentItem


class RecommendationRepository(Protocol):
    """Protocol for the content/profile store (read) and recommendation store (append)."""

    async def list_own_items(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> List[ContentItem]:
        """Items owned by user_id, any visibility. limit=None means all."""
        ...

    async def list_public_items_by_tag_overlap(
        self,
        tags: Iterable[str],
        exclude_owner_id: Optional[str] = None,
        exclude_ids: Optional[Iterable[str]] = None,
        limit: int = 100,
    ) -> List[ContentItem]:
        """Public items sharing at least one tag with tags, minus the exclusions."""
        ...

    async def list_public_recent_items(
        self,
        since: datetime,
        limit: int,
        exclude_owner_id: Optional[str] = None,
    ) -> List[ContentItem]:
        """Public items created at or after since, newest first."""
        ...

    async def list_public_items_by_popularity(
        self,
        exclude_id: Optional[str],
        limit: int,
    ) -> List[ContentItem]:
        """Public items ordered by like count, most liked first."""
        ...

    async def count_likes_by_item_ids(self, item_ids: Iterable[str]) -> Dict[str, int]:
        """Like count per item id. Items without likes may be omitted."""
        ...

    async def list_follows(self, user_id: str, limit: int) -> List[str]:
        """Ids of users that user_id follows."""
        ...

    async def get_user_profiles(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Display info (username, avatar_url) per known user id."""
        ...

    async def append_recommendations(self, user_id: str, rows: List[Dict[str, Any]]) -> bool:
        """
        Append one batch of recommendation rows for user_id. Never replaces earlier batches.
        Returns False when the write did not happen.
        """
        ...


class PrunableRepository(RecommendationRepository, Protocol):
    """Repositories that can cap stored recommendation history."""

    async def prune_recommendations(self, user_id: str, keep_batches: int) -> int:
        """Drop all but the newest keep_batches batches for user_id. Returns rows removed."""
        ...
