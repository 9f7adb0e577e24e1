"""
Related items: other public items sharing tags with one item.

Reads the most liked public items (a few times more than needed), keeps those
sharing at least one tag, and orders by shared-tag count, then likes.
"""

from typing import Iterable, List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.content import ensure_items
from ..models.scoring import CandidateSource, ScoredCandidate
from ..repository import RecommendationRepository
from ..utils.reads import read_or_default


async def find_related_items(
    repo: RecommendationRepository,
    item_id: str,
    tags: Iterable[str],
    limit: Optional[int] = None,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[ScoredCandidate]:
    """Items related to item_id by shared tags. score = number of shared tags."""
    if limit is None:
        limit = config.related_default_limit
    wanted = set(tags)
    if not wanted or limit <= 0:
        return []

    candidates = await read_or_default(
        "list_public_items_by_popularity",
        repo.list_public_items_by_popularity(
            item_id, limit * config.related_candidate_multiplier
        ),
        list,
    )

    scored = []
    for item in ensure_items(candidates, skip_invalid=True):
        if item.id == item_id or not item.is_public:
            continue
        shared = [tag for tag in dict.fromkeys(item.tags) if tag in wanted]
        if shared:
            scored.append((len(shared), item.like_count, item, shared))
    scored.sort(key=lambda s: (s[0], s[1]), reverse=True)

    return [
        ScoredCandidate(
            id=item.id,
            title=item.title,
            score=float(shared_count),
            reason=f"Shares tags: {', '.join(shared[:3])}",
            metadata={
                "url": item.url,
                "tags": item.tags,
                "likes": likes,
            },
            source=CandidateSource.RELATED,
        )
        for shared_count, likes, item, shared in scored[:limit]
    ]
