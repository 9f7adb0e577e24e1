"""
Content similarity (content-based filtering).

Scores other people's public items by how much of the user's interest profile
they cover: |item_tags ∩ profile_tags| / |profile_tags| * content_weight.
The denominator is the profile size, so an item matching every profile tag
scores the full weight regardless of how many other tags it carries.
"""

import logging
from typing import List

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.content import ensure_items
from ..models.profile import InterestProfile
from ..models.scoring import CandidateSource, ScoredCandidate
from ..repository import RecommendationRepository
from ..utils.reads import read_or_default

logger = logging.getLogger(__name__)


def content_reason(matching_tags: List[str], max_tags: int = 3) -> str:
    return f"Matches your interests: {', '.join(matching_tags[:max_tags])}"


async def score_by_content(
    repo: RecommendationRepository,
    user_id: str,
    profile: InterestProfile,
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[ScoredCandidate]:
    """Rank tag-overlapping public items the user does not own, best coverage first."""
    if not profile.tags:
        return []

    own_items = await read_or_default(
        "list_own_items",
        repo.list_own_items(user_id, None),
        list,
    )
    exclude_ids = {item.id for item in ensure_items(own_items, skip_invalid=True)}

    matches = await read_or_default(
        "list_public_items_by_tag_overlap",
        repo.list_public_items_by_tag_overlap(
            profile.tags,
            exclude_ids=exclude_ids,
            limit=config.content_candidate_limit,
        ),
        list,
    )

    profile_tags = set(profile.tags)
    recommendations: List[ScoredCandidate] = []
    for item in ensure_items(matches, skip_invalid=True):
        if item.id in exclude_ids or not item.is_public:
            continue
        matching = [tag for tag in dict.fromkeys(item.tags) if tag in profile_tags]
        score = len(matching) / len(profile.tags)
        recommendations.append(
            ScoredCandidate(
                id=item.id,
                title=item.title,
                score=score * config.content_weight,
                reason=content_reason(matching, config.content_reason_tags),
                metadata={
                    "url": item.url,
                    "tags": item.tags,
                    "matched_tags": matching,
                },
                source=CandidateSource.CONTENT_SIMILARITY,
            )
        )

    recommendations.sort(key=lambda c: c.score, reverse=True)
    logger.debug(
        "[content] SCORED user_id=%s profile_tags=%d candidates=%d",
        user_id, len(profile.tags), len(recommendations),
    )
    return recommendations[:limit]
