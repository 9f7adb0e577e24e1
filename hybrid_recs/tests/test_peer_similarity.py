"""
Peer similarity (collaborative filtering) tests.

Fixture graph (alice's own tags U = {a, b}):
-------------------------------------------
- carol: c1 [a, b]          -> jaccard 1.0            owner score 1.0
- bob:   b1 [a, c], b2 [b]  -> jaccard 1/3 + 1/2      owner score 5/6
- dave:  d1 [a, x, y, z]    -> jaccard 1/5            owner score 0.2
- erin:  e1 [z]             -> no overlap, never a candidate

Run:
----
    pytest hybrid_recs/tests/test_peer_similarity.py -v
"""

import asyncio

import pytest

from hybrid_recs.models.config import RecommendationConfig
from hybrid_recs.models.profile import InterestProfile
from hybrid_recs.stages.peer_similarity import (
    PEER_REASON,
    get_similar_users,
    rank_peer_owners,
    score_by_peers,
)

from .conftest import make_item


@pytest.fixture
def graph(content):
    content.add_item(make_item("a1", "alice", ["a"]))
    content.add_item(make_item("a2", "alice", ["b"]))
    content.add_item(make_item("b1", "bob", ["a", "c"]))
    content.add_item(make_item("c1", "carol", ["a", "b"]))
    content.add_item(make_item("b2", "bob", ["b"]))
    content.add_item(make_item("d1", "dave", ["a", "x", "y", "z"]))
    content.add_item(make_item("e1", "erin", ["z"]))
    content.add_item(make_item("c2", "carol", ["a"], is_public=False))
    content.add_user("carol", username="carol_c", avatar_url="https://example.com/carol.png")
    return content


class TestRankPeerOwners:
    def test_owner_scores_are_sums(self, graph, repo):
        ranked, items_by_owner = asyncio.run(rank_peer_owners(repo, "alice"))

        assert [owner for owner, _ in ranked] == ["carol", "bob", "dave"]
        scores = dict(ranked)
        assert scores["carol"] == pytest.approx(1.0)
        assert scores["bob"] == pytest.approx(1 / 3 + 1 / 2)
        assert scores["dave"] == pytest.approx(1 / 5)
        assert [i.id for i in items_by_owner["bob"]] == ["b1", "b2"]

    def test_private_items_are_not_candidates(self, graph, repo):
        _, items_by_owner = asyncio.run(rank_peer_owners(repo, "alice"))
        assert [i.id for i in items_by_owner["carol"]] == ["c1"]

    def test_no_own_tags_short_circuits(self, graph, repo):
        calls = []
        original = repo.list_public_items_by_tag_overlap

        async def spy(*args, **kwargs):
            calls.append(args)
            return await original(*args, **kwargs)

        repo.list_public_items_by_tag_overlap = spy
        ranked, items = asyncio.run(rank_peer_owners(repo, "newcomer"))

        assert ranked == []
        assert items == {}
        assert calls == []


class TestScoreByPeers:
    def test_every_item_gets_owner_aggregate(self, graph, repo):
        recs = asyncio.run(score_by_peers(repo, "alice", InterestProfile(), limit=10))

        assert [r.id for r in recs] == ["c1", "b1", "b2", "d1"]
        by_id = {r.id: r for r in recs}
        assert by_id["c1"].score == pytest.approx(0.8)
        assert by_id["b1"].score == pytest.approx((1 / 3 + 1 / 2) * 0.8)
        assert by_id["b2"].score == by_id["b1"].score
        assert by_id["b1"].reason == PEER_REASON
        assert by_id["b1"].metadata["url"] == "https://example.com/b1"
        assert by_id["b1"].metadata["tags"] == ["a", "c"]

    def test_limit_slices_in_owner_order(self, graph, repo):
        recs = asyncio.run(score_by_peers(repo, "alice", InterestProfile(), limit=2))
        assert [r.id for r in recs] == ["c1", "b1"]

    def test_top_owner_cap(self, graph, repo):
        config = RecommendationConfig(peer_top_owners=1)
        recs = asyncio.run(score_by_peers(repo, "alice", InterestProfile(), 10, config))
        assert [r.id for r in recs] == ["c1"]

    def test_weight_is_tunable(self, graph, repo):
        config = RecommendationConfig(peer_weight=1.0)
        recs = asyncio.run(score_by_peers(repo, "alice", InterestProfile(), 10, config))
        assert recs[0].score == pytest.approx(1.0)

    def test_never_recommends_own_items(self, graph, repo):
        recs = asyncio.run(score_by_peers(repo, "alice", InterestProfile(), limit=10))
        assert not any(r.id.startswith("a") for r in recs)

    def test_user_without_items_gets_nothing(self, graph, repo):
        assert asyncio.run(score_by_peers(repo, "newcomer", InterestProfile(), 10)) == []


class TestGetSimilarUsers:
    def test_ranked_with_display_info(self, graph, repo):
        users = asyncio.run(get_similar_users(repo, "alice", limit=10))

        assert [u.user_id for u in users] == ["carol", "bob", "dave"]
        assert users[0].score == pytest.approx(1.0)
        assert users[0].display_info == {
            "username": "carol_c",
            "avatar_url": "https://example.com/carol.png",
        }
        assert users[1].display_info == {}

    def test_limit(self, graph, repo):
        users = asyncio.run(get_similar_users(repo, "alice", limit=1))
        assert [u.user_id for u in users] == ["carol"]

    def test_agrees_with_peer_scorer(self, graph, repo):
        users = asyncio.run(get_similar_users(repo, "alice", limit=5))
        recs = asyncio.run(score_by_peers(repo, "alice", InterestProfile(), limit=10))

        owners_in_order = list(dict.fromkeys(r.metadata["owner_id"] for r in recs))
        assert owners_in_order == [u.user_id for u in users]

    def test_no_tags_no_peers(self, graph, repo):
        assert asyncio.run(get_similar_users(repo, "newcomer")) == []
