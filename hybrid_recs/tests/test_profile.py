"""
Interest profile tests.

Run:
----
    pytest hybrid_recs/tests/test_profile.py -v
"""

import asyncio

from hybrid_recs.models.config import RecommendationConfig
from hybrid_recs.stages.profile import build_profile

from .conftest import make_item


class TestBuildProfile:
    def test_empty_user_gets_empty_profile(self, repo):
        profile = asyncio.run(build_profile(repo, "nobody"))
        assert profile.tags == []
        assert profile.followed_user_ids == []
        assert profile.avg_engagement == 0.0
        assert profile.is_empty

    def test_tags_ranked_by_frequency(self, content, repo):
        content.add_item(make_item("a1", "alice", ["python", "web"]))
        content.add_item(make_item("a2", "alice", ["python", "async"]))
        content.add_item(make_item("a3", "alice", ["async", "python"]))
        content.add_item(make_item("b1", "bob", ["rust", "rust"]))

        profile = asyncio.run(build_profile(repo, "alice"))

        assert profile.tags == ["python", "async", "web"]

    def test_private_items_still_profile_the_owner(self, content, repo):
        content.add_item(make_item("a1", "alice", ["secret"], is_public=False))
        profile = asyncio.run(build_profile(repo, "alice"))
        assert profile.tags == ["secret"]

    def test_keeps_top_twenty(self, content, repo):
        content.add_item(make_item("a1", "alice", [f"t{n}" for n in range(25)]))
        profile = asyncio.run(build_profile(repo, "alice"))
        assert len(profile.tags) == 20

    def test_follows_read(self, content, repo):
        content.follow("alice", "bob")
        content.follow("alice", "carol")
        profile = asyncio.run(build_profile(repo, "alice"))
        assert profile.followed_user_ids == ["bob", "carol"]
        assert profile.tags == []

    def test_failing_reads_give_empty_profile(self, content, repo, caplog):
        content.add_item(make_item("a1", "alice", ["python"]))

        async def broken(*args, **kwargs):
            raise ConnectionError("store down")

        repo.list_own_items = broken
        repo.list_follows = broken

        profile = asyncio.run(build_profile(repo, "alice"))

        assert profile.tags == []
        assert profile.followed_user_ids == []
        assert "READ_FAILED" in caplog.text

    def test_slow_read_times_out_to_empty(self, content, repo, caplog):
        content.add_item(make_item("a1", "alice", ["python"]))

        async def slow(*args, **kwargs):
            await asyncio.sleep(3)
            return ["bob"]

        repo.list_follows = slow
        config = RecommendationConfig(scorer_timeout_seconds=0.05)

        profile = asyncio.run(
            asyncio.wait_for(build_profile(repo, "alice", config), timeout=1)
        )

        assert profile.tags == ["python"]
        assert profile.followed_user_ids == []
        assert "READ_TIMEOUT" in caplog.text

    def test_invalid_rows_are_skipped(self, repo, caplog):
        async def rows(*args, **kwargs):
            return [
                {"id": "a1", "owner_id": "alice", "tags": ["python"], "title": None},
                {"id": "broken", "tags": ["rust"]},
            ]

        repo.list_own_items = rows

        profile = asyncio.run(build_profile(repo, "alice"))

        assert profile.tags == ["python"]
        assert "INVALID_ROW_SKIPPED id=broken" in caplog.text
