"""
Hybrid Recommendation Engine: peer similarity + content similarity + trending

Single entry point for the engine package:
- models/: RecommendationConfig, ContentItem, InterestProfile, ScoredCandidate
- stages/: profile, the three scorers, orchestrator, related items
- repository: the store interface the engine reads from and appends to
"""

from .models.config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .models.content import ContentItem, ensure_items
from .models.profile import InterestProfile
from .models.scoring import (
    CandidateKind,
    CandidateSource,
    RecommendationBatch,
    ScoredCandidate,
    SimilarUser,
)
from .recommendation_engine import RecommendationEngine
from .repository import PrunableRepository, RecommendationRepository
from .stages import (
    build_profile,
    compute_recommendations,
    find_related_items,
    generate_batch,
    get_similar_users,
    score_by_content,
    score_by_peers,
    score_by_trending,
)
from .utils.similarity import jaccard_similarity

__all__ = [
    "CandidateKind",
    "CandidateSource",
    "ContentItem",
    "DEFAULT_CONFIG",
    "InterestProfile",
    "PrunableRepository",
    "RecommendationBatch",
    "RecommendationConfig",
    "RecommendationEngine",
    "RecommendationRepository",
    "ScoredCandidate",
    "SimilarUser",
    "build_profile",
    "compute_recommendations",
    "ensure_items",
    "find_related_items",
    "generate_batch",
    "get_similar_users",
    "jaccard_similarity",
    "resolve_config",
    "score_by_content",
    "score_by_peers",
    "score_by_trending",
]
