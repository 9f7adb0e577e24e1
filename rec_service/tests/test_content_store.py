"""
Content store tests: in-memory reads and JSON loading.

Run:
----
    pytest rec_service/tests/test_content_store.py -v
"""

import asyncio
import json
from datetime import datetime, timedelta, timezone

import pytest

from rec_service.services import InMemoryContentStore, JsonContentStore, StoreError

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def _iso(hours_ago: float) -> str:
    return (NOW - timedelta(hours=hours_ago)).isoformat()


@pytest.fixture
def document():
    return {
        "items": [
            {"id": "a1", "owner_id": "alice", "title": "Asyncio tips", "tags": ["py", "async"], "created_at": _iso(5)},
            {"id": "b1", "owner_id": "bob", "title": "Vue intro", "tags": ["vue"], "created_at": _iso(1)},
            {"id": "b2", "owner_id": "bob", "title": "Draft", "tags": ["py"], "is_public": False, "created_at": _iso(2)},
            {"id": "c1", "owner_id": "carol", "title": "Py web", "tags": ["py", "web"], "created_at": _iso(300)},
            {"id": "c2", "owner_id": "carol", "title": "No tags", "tags": None},
        ],
        "follows": {"alice": ["bob", "carol"]},
        "likes": [{"item_id": "c1", "user_id": "alice"}, {"item_id": "c1", "user_id": "bob"}, {"content_id": "b1"}],
        "users": [{"user_id": "bob", "username": "bobby", "avatar_url": None}],
    }


@pytest.fixture
def json_store(tmp_path, document):
    path = tmp_path / "content.json"
    path.write_text(json.dumps(document))
    return JsonContentStore(path)


class TestInMemoryContentStore:
    def test_tag_overlap_filters(self, json_store):
        items = asyncio.run(json_store.list_public_items_by_tag_overlap(["py"], exclude_owner_id="alice"))
        assert [i.id for i in items] == ["c1"]

        items = asyncio.run(json_store.list_public_items_by_tag_overlap(["py", "vue"], exclude_ids=["c1"]))
        assert [i.id for i in items] == ["a1", "b1"]

    def test_tag_overlap_limit(self, json_store):
        items = asyncio.run(json_store.list_public_items_by_tag_overlap(["py", "vue"], limit=1))
        assert [i.id for i in items] == ["a1"]

    def test_own_items_include_private(self, json_store):
        items = asyncio.run(json_store.list_own_items("bob"))
        assert [i.id for i in items] == ["b1", "b2"]
        assert [i.id for i in asyncio.run(json_store.list_own_items("bob", 1))] == ["b1"]

    def test_recent_items_newest_first(self, json_store):
        items = asyncio.run(json_store.list_public_recent_items(NOW - timedelta(days=7), 10))
        assert [i.id for i in items] == ["b1", "a1"]

        items = asyncio.run(
            json_store.list_public_recent_items(NOW - timedelta(days=7), 10, exclude_owner_id="bob")
        )
        assert [i.id for i in items] == ["a1"]

    def test_popularity_order_carries_like_count(self, json_store):
        items = asyncio.run(json_store.list_public_items_by_popularity("a1", 10))
        assert [i.id for i in items][:2] == ["c1", "b1"]
        assert items[0].like_count == 2

    def test_like_counts(self, json_store):
        counts = asyncio.run(json_store.count_likes_by_item_ids(["c1", "b1", "a1"]))
        assert counts == {"c1": 2, "b1": 1}

    def test_follows_and_profiles(self, json_store):
        assert asyncio.run(json_store.list_follows("alice", 1)) == ["bob"]
        assert asyncio.run(json_store.list_follows("nobody", 10)) == []
        profiles = asyncio.run(json_store.get_user_profiles(["bob", "ghost"]))
        assert profiles == {"bob": {"username": "bobby", "avatar_url": None}}

    def test_null_tags_become_empty(self, json_store):
        items = asyncio.run(json_store.list_own_items("carol"))
        assert items[1].tags == []

    def test_follow_is_idempotent(self):
        store = InMemoryContentStore()
        store.follow("a", "b")
        store.follow("a", "b")
        assert asyncio.run(store.list_follows("a", 10)) == ["b"]


class TestJsonContentStore:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonContentStore(tmp_path / "nope.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(StoreError):
            JsonContentStore(path)

    def test_invalid_item(self, tmp_path):
        path = tmp_path / "bad_item.json"
        path.write_text(json.dumps({"items": [{"title": "no id"}]}))
        with pytest.raises(StoreError):
            JsonContentStore(path)

    def test_like_count_mapping(self, tmp_path):
        path = tmp_path / "counts.json"
        path.write_text(json.dumps({"items": [], "likes": {"x": 7}}))
        store = JsonContentStore(path)
        assert asyncio.run(store.count_likes_by_item_ids(["x"])) == {"x": 7}
