"""
Content store: items, follows, likes, and user profiles.

Implements the read half of hybrid_recs.RecommendationRepository.
InMemoryContentStore is used for tests and local runs; JsonContentStore loads
the same structures from a JSON document (DATA_SOURCE=json).

JSON document shape:
    {
      "items":   [{"id", "owner_id", "title", "tags", "url", "is_public", "created_at"}],
      "follows": {"<user_id>": ["<followed_user_id>", ...]},
      "likes":   [{"item_id", "user_id"}]  or  {"<item_id>": <count>},
      "users":   [{"user_id", "username", "avatar_url"}]
    }
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from hybrid_recs.models.content import ContentItem
from hybrid_recs.utils.scores import as_utc

from .errors import StoreError


class InMemoryContentStore:
    """Content/profile store held in memory. Reads return items in insertion order unless noted."""

    def __init__(self):
        self._items: Dict[str, ContentItem] = {}
        self._follows: Dict[str, List[str]] = {}
        self._like_counts: Dict[str, int] = {}
        self._users: Dict[str, Dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # Writes (fixtures / loading)
    # ------------------------------------------------------------------

    def add_item(self, item: Union[ContentItem, Dict[str, Any]]) -> ContentItem:
        item = ContentItem.model_validate(item) if isinstance(item, dict) else item
        self._items[item.id] = item
        return item

    def add_like(self, item_id: str, count: int = 1) -> None:
        self._like_counts[item_id] = self._like_counts.get(item_id, 0) + count

    def follow(self, follower_id: str, followed_id: str) -> None:
        followed = self._follows.setdefault(follower_id, [])
        if followed_id not in followed:
            followed.append(followed_id)

    def add_user(self, user_id: str, username: Optional[str] = None, avatar_url: Optional[str] = None) -> None:
        self._users[user_id] = {"username": username, "avatar_url": avatar_url}

    @property
    def item_count(self) -> int:
        return len(self._items)

    def _with_likes(self, item: ContentItem) -> ContentItem:
        return item.model_copy(update={"like_count": self._like_counts.get(item.id, 0)})

    def _public(self) -> List[ContentItem]:
        return [item for item in self._items.values() if item.is_public]

    # ------------------------------------------------------------------
    # Repository reads
    # ------------------------------------------------------------------

    async def list_own_items(self, user_id: str, limit: Optional[int] = None) -> List[ContentItem]:
        own = [item for item in self._items.values() if item.owner_id == user_id]
        return own if limit is None else own[:limit]

    async def list_public_items_by_tag_overlap(
        self,
        tags: Iterable[str],
        exclude_owner_id: Optional[str] = None,
        exclude_ids: Optional[Iterable[str]] = None,
        limit: int = 100,
    ) -> List[ContentItem]:
        wanted = set(tags)
        if not wanted:
            return []
        excluded = set(exclude_ids or ())
        matches = []
        for item in self._public():
            if exclude_owner_id is not None and item.owner_id == exclude_owner_id:
                continue
            if item.id in excluded:
                continue
            if wanted & item.tag_set():
                matches.append(item)
                if len(matches) >= limit:
                    break
        return matches

    async def list_public_recent_items(
        self,
        since: datetime,
        limit: int,
        exclude_owner_id: Optional[str] = None,
    ) -> List[ContentItem]:
        since = as_utc(since)
        recent = [
            item
            for item in self._public()
            if item.created_at is not None
            and as_utc(item.created_at) >= since
            and (exclude_owner_id is None or item.owner_id != exclude_owner_id)
        ]
        recent.sort(key=lambda item: as_utc(item.created_at), reverse=True)
        return recent[:limit]

    async def list_public_items_by_popularity(
        self,
        exclude_id: Optional[str],
        limit: int,
    ) -> List[ContentItem]:
        items = [self._with_likes(item) for item in self._public() if item.id != exclude_id]
        items.sort(key=lambda item: item.like_count, reverse=True)
        return items[:limit]

    async def count_likes_by_item_ids(self, item_ids: Iterable[str]) -> Dict[str, int]:
        return {
            item_id: self._like_counts[item_id]
            for item_id in item_ids
            if item_id in self._like_counts
        }

    async def list_follows(self, user_id: str, limit: int) -> List[str]:
        return list(self._follows.get(user_id, []))[:limit]

    async def get_user_profiles(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        return {
            user_id: dict(self._users[user_id])
            for user_id in user_ids
            if user_id in self._users
        }


class JsonContentStore(InMemoryContentStore):
    """
    Content store loaded from a JSON document (see module docstring).
    Used when DATA_SOURCE=json; path comes from CONTENT_JSON_PATH.
    """

    def __init__(self, path: Union[Path, str]):
        super().__init__()
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Content JSON not found: {self._path}")
        try:
            with open(self._path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Content JSON is malformed: {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Content JSON must be an object: {self._path}")
        self._load(data)

    def _load(self, data: Dict[str, Any]) -> None:
        for raw in data.get("items", []):
            try:
                self.add_item(raw)
            except ValueError as e:
                raise StoreError(f"Invalid item in {self._path}: {e}") from e

        for follower_id, followed in (data.get("follows") or {}).items():
            for followed_id in followed:
                self.follow(follower_id, followed_id)

        likes = data.get("likes") or []
        if isinstance(likes, dict):
            for item_id, count in likes.items():
                self.add_like(item_id, int(count))
        else:
            for like in likes:
                item_id = like.get("item_id") or like.get("content_id")
                if item_id:
                    self.add_like(item_id)

        for user in data.get("users", []):
            user_id = user.get("user_id") or user.get("id")
            if user_id:
                self.add_user(user_id, user.get("username"), user.get("avatar_url"))
