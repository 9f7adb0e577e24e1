"""Pipeline stages: profile, the three scorers, fusion orchestration, related items."""

from .content_similarity import score_by_content
from .orchestrator import compute_recommendations, dedupe_candidates, generate_batch, rank_candidates
from .peer_similarity import get_similar_users, rank_peer_owners, score_by_peers
from .profile import build_profile
from .related import find_related_items
from .trending import score_by_trending, trending_score

__all__ = [
    "build_profile",
    "compute_recommendations",
    "dedupe_candidates",
    "find_related_items",
    "generate_batch",
    "get_similar_users",
    "rank_candidates",
    "rank_peer_owners",
    "score_by_content",
    "score_by_peers",
    "score_by_trending",
    "trending_score",
]
