"""
Hybrid Recommendation Engine

Thin facade over the stages:
- profile: interest profile from the user's own tags
- peer_similarity / content_similarity / trending: the three scorers
- orchestrator: concurrent fan-out, first-wins dedup, ranking, persistence
- related: shared-tag lookup for a single item

Binds a repository and a config so callers do not pass them on every call.
"""

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from .models.config import RecommendationConfig, resolve_config
from .models.profile import InterestProfile
from .models.scoring import RecommendationBatch, ScoredCandidate, SimilarUser
from .repository import RecommendationRepository
from .stages.orchestrator import generate_batch
from .stages.peer_similarity import get_similar_users
from .stages.profile import build_profile
from .stages.related import find_related_items
from .utils.scores import utc_now


class RecommendationEngine:
    """Recommendation entry points bound to one repository and config."""

    def __init__(
        self,
        repository: RecommendationRepository,
        config: Optional[RecommendationConfig] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.config = resolve_config(config)
        self._clock = clock

    async def compute_recommendations(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> List[ScoredCandidate]:
        batch = await self.generate_batch(user_id, limit)
        return batch.recommendations

    async def generate_batch(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> RecommendationBatch:
        return await generate_batch(
            self.repository,
            user_id,
            limit=limit,
            config=self.config,
            now=self._clock(),
        )

    async def get_similar_users(self, user_id: str, limit: int = 10) -> List[SimilarUser]:
        return await get_similar_users(self.repository, user_id, limit, self.config)

    async def get_related_items(
        self,
        item_id: str,
        tags: Iterable[str],
        limit: Optional[int] = None,
    ) -> List[ScoredCandidate]:
        return await find_related_items(self.repository, item_id, tags, limit, self.config)

    async def build_profile(self, user_id: str) -> InterestProfile:
        return await build_profile(self.repository, user_id, self.config)
