"""
Trending (recency / popularity).

Reads the newest public items inside the trending window, then blends like
count with a linear recency decay:

    score = (likes * like_weight + recency * recency_weight) * trending_weight

Like counts are not normalized, so trending scores are unbounded above while
the peer and content scores stay under their weights.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.content import ensure_items
from ..models.scoring import CandidateSource, ScoredCandidate
from ..repository import RecommendationRepository
from ..utils.reads import read_or_default
from ..utils.scores import as_utc, hours_since, recency_factor, utc_now

logger = logging.getLogger(__name__)

TRENDING_REASON = "Trending now"


def trending_score(
    like_count: int,
    age_hours: float,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    recency = recency_factor(age_hours, config.trending_window_days * 24.0)
    blended = (
        like_count * config.trending_like_weight
        + recency * config.trending_recency_weight
    )
    return blended * config.trending_weight


async def score_by_trending(
    repo: RecommendationRepository,
    user_id: str,
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> List[ScoredCandidate]:
    """
    Score the most recent public items by likes and age.

    The candidate cap is applied before scoring, so only the newest
    trending_candidate_limit items compete. The user's own items are excluded.
    """
    now = as_utc(now) if now is not None else utc_now()
    since = now - timedelta(days=config.trending_window_days)

    recent = await read_or_default(
        "list_public_recent_items",
        repo.list_public_recent_items(
            since,
            config.trending_candidate_limit,
            exclude_owner_id=user_id,
        ),
        list,
    )
    items = [item for item in ensure_items(recent, skip_invalid=True) if item.is_public]
    if not items:
        return []

    like_counts = await read_or_default(
        "count_likes_by_item_ids",
        repo.count_likes_by_item_ids([item.id for item in items]),
        dict,
    )

    recommendations: List[ScoredCandidate] = []
    for item in items:
        like_count = int(like_counts.get(item.id, 0))
        score = trending_score(like_count, hours_since(item.created_at, now), config)
        recommendations.append(
            ScoredCandidate(
                id=item.id,
                title=item.title,
                score=score,
                reason=TRENDING_REASON,
                metadata={
                    "url": item.url,
                    "tags": item.tags,
                    "likes": like_count,
                },
                source=CandidateSource.TRENDING,
            )
        )

    recommendations.sort(key=lambda c: c.score, reverse=True)
    return recommendations[:limit]
