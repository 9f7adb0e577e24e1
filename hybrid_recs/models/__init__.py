"""Data models for the recommendation engine."""

from .config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .content import ContentItem, ensure_items
from .profile import InterestProfile
from .scoring import (
    CandidateKind,
    CandidateSource,
    RecommendationBatch,
    ScoredCandidate,
    SimilarUser,
)

__all__ = [
    "DEFAULT_CONFIG",
    "CandidateKind",
    "CandidateSource",
    "ContentItem",
    "InterestProfile",
    "RecommendationBatch",
    "RecommendationConfig",
    "ScoredCandidate",
    "SimilarUser",
    "ensure_items",
    "resolve_config",
]
