"""
Interest profile builder.

Tallies tag frequencies across the user's own items and keeps the most used
tags (ties keep first-seen order). Follow relations are read alongside into
followed_user_ids; no scorer consumes them yet.

The public entry point is build_profile.
"""

import asyncio
import logging
from typing import Dict, List

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.content import ContentItem, ensure_items
from ..models.profile import InterestProfile
from ..repository import RecommendationRepository
from ..utils.reads import read_or_default

logger = logging.getLogger(__name__)


def top_tags(items: List[ContentItem], n: int) -> List[str]:
    """Tags ordered by frequency (desc), first-seen order on ties, capped at n."""
    tag_counts: Dict[str, int] = {}
    for item in items:
        for tag in item.tags:
            tag_counts[tag] = tag_counts.get(tag, 0) + 1
    ranked = sorted(tag_counts.items(), key=lambda kv: kv[1], reverse=True)
    return [tag for tag, _ in ranked[:n]]


async def build_profile(
    repo: RecommendationRepository,
    user_id: str,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> InterestProfile:
    """
    Build the interest profile for user_id.

    Missing, failing or slow reads (over scorer_timeout_seconds) produce an
    empty profile rather than an error.
    """
    items, follows = await asyncio.gather(
        read_or_default(
            "list_own_items",
            repo.list_own_items(user_id, config.profile_items_limit),
            list,
            timeout=config.scorer_timeout_seconds,
        ),
        read_or_default(
            "list_follows",
            repo.list_follows(user_id, config.profile_follows_limit),
            list,
            timeout=config.scorer_timeout_seconds,
        ),
    )
    profile = InterestProfile(
        tags=top_tags(ensure_items(items, skip_invalid=True), config.profile_top_tags),
        followed_user_ids=list(follows)[: config.profile_follows_limit],
    )
    logger.debug(
        "[profile] BUILT user_id=%s items=%d tags=%d follows=%d",
        user_id, len(items), len(profile.tags), len(profile.followed_user_ids),
    )
    return profile
