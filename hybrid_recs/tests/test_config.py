"""
Algorithm configuration tests.

Run:
----
    pytest hybrid_recs/tests/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from hybrid_recs.models.config import DEFAULT_CONFIG, RecommendationConfig, resolve_config


class TestRecommendationConfig:
    def test_defaults(self):
        c = RecommendationConfig()
        assert (c.peer_weight, c.content_weight, c.trending_weight) == (0.8, 0.7, 0.6)
        assert (c.peer_limit, c.content_limit, c.trending_limit) == (10, 10, 5)
        assert c.default_limit == 20
        assert c.profile_top_tags == 20
        assert c.peer_top_owners == 5
        assert c.trending_window_days == 7
        assert c.history_limit is None

    def test_from_dict_flattens_sections(self):
        c = RecommendationConfig.from_dict(
            {
                "profile": {"top_tags": 10},
                "peer_similarity": {"weight": 0.9, "top_owners": 3},
                "content_similarity": {"weight": 0.5},
                "trending": {"window_days": 3, "like_weight": 0.3, "recency_weight": 0.7},
                "fusion": {"default_limit": 15, "history_limit": 4, "unknown": 1},
                "related": {"default_limit": 8},
            }
        )
        assert c.profile_top_tags == 10
        assert c.peer_weight == 0.9
        assert c.peer_top_owners == 3
        assert c.content_weight == 0.5
        assert c.trending_window_days == 3
        assert c.trending_like_weight == 0.3
        assert c.default_limit == 15
        assert c.history_limit == 4
        assert c.related_default_limit == 8

    def test_blend_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            RecommendationConfig(trending_like_weight=0.6, trending_recency_weight=0.6)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            RecommendationConfig(content_weight=-0.1)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            RecommendationConfig(peer_limit=-1)

    def test_resolve_config(self):
        assert resolve_config(None) is DEFAULT_CONFIG
        custom = RecommendationConfig(default_limit=5)
        assert resolve_config(custom) is custom
