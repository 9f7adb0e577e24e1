"""
Scoring model: ScoredCandidate and friends produced by the scoring stages.

Contains:
- CandidateKind: what a candidate points at (only content items have a producer)
- ScoredCandidate: one recommendation with score, reason, and side data
- SimilarUser: a ranked peer returned by get_similar_users
- RecommendationBatch: the orchestrator's full result, including persistence outcome
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class CandidateKind(str, Enum):
    CONTENT_ITEM = "content_item"
    COLLECTION = "collection"
    USER = "user"
    TAG = "tag"


class CandidateSource(str, Enum):
    PEER_SIMILARITY = "peer_similarity"
    CONTENT_SIMILARITY = "content_similarity"
    TRENDING = "trending"
    RELATED = "related"


class ScoredCandidate(BaseModel):
    """A recommended item with its score. Scores are not normalized across sources."""

    id: str
    kind: CandidateKind = CandidateKind.CONTENT_ITEM
    title: str = ""
    score: float = Field(ge=0.0)
    reason: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)
    source: CandidateSource = CandidateSource.PEER_SIMILARITY

    @property
    def dedup_key(self) -> tuple:
        return (self.kind, self.id)

    def to_record(self) -> Dict[str, Any]:
        """Row shape written to the recommendation store."""
        return {
            "recommended_type": self.kind.value,
            "recommended_id": self.id,
            "relevance_score": self.score,
            "confidence": self.score * 100,
            "reason": self.reason,
        }


class SimilarUser(BaseModel):
    """A peer ranked by summed tag similarity."""

    user_id: str
    score: float
    display_info: Dict[str, Any] = Field(default_factory=dict)


class RecommendationBatch(BaseModel):
    """Ranked recommendations for one call plus what happened along the way."""

    user_id: str
    recommendations: List[ScoredCandidate] = Field(default_factory=list)
    persisted: bool = False
    source_counts: Dict[str, int] = Field(default_factory=dict)
    failed_sources: List[str] = Field(default_factory=list)
