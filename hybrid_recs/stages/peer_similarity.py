"""
Peer similarity (collaborative filtering).

Finds owners whose public items overlap the user's tags, scores each owner by
the SUM of Jaccard similarities over their matching items, and recommends the
items of the top owners. Every item from one owner carries that owner's
aggregate score, not a per-item similarity.

Public API: score_by_peers, get_similar_users, rank_peer_owners.
"""

import logging
from typing import Dict, List, Set, Tuple

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.content import ContentItem, ensure_items
from ..models.profile import InterestProfile
from ..models.scoring import CandidateSource, ScoredCandidate, SimilarUser
from ..repository import RecommendationRepository
from ..utils.reads import read_or_default
from ..utils.similarity import jaccard_similarity

logger = logging.getLogger(__name__)

PEER_REASON = "Users with similar interests saved this"


async def _own_tag_set(
    repo: RecommendationRepository,
    user_id: str,
    config: RecommendationConfig,
) -> Set[str]:
    own_items = await read_or_default(
        "list_own_items",
        repo.list_own_items(user_id, config.peer_own_items_limit),
        list,
    )
    user_tags: Set[str] = set()
    for item in ensure_items(own_items, skip_invalid=True):
        user_tags.update(item.tags)
    return user_tags


async def rank_peer_owners(
    repo: RecommendationRepository,
    user_id: str,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> Tuple[List[Tuple[str, float]], Dict[str, List[ContentItem]]]:
    """
    Rank other owners by summed tag similarity to the user's own items.

    Returns:
        ranked: (owner_id, owner_score) sorted by score desc, first-seen order on ties
        items_by_owner: the matching public items grouped by owner, in store order
    """
    user_tags = await _own_tag_set(repo, user_id, config)
    if not user_tags:
        return [], {}

    candidates = await read_or_default(
        "list_public_items_by_tag_overlap",
        repo.list_public_items_by_tag_overlap(
            sorted(user_tags),
            exclude_owner_id=user_id,
            limit=config.peer_candidate_limit,
        ),
        list,
    )

    owner_scores: Dict[str, float] = {}
    items_by_owner: Dict[str, List[ContentItem]] = {}
    for item in ensure_items(candidates, skip_invalid=True):
        if item.owner_id == user_id or not item.is_public:
            continue
        items_by_owner.setdefault(item.owner_id, []).append(item)
        sim = jaccard_similarity(user_tags, item.tag_set())
        owner_scores[item.owner_id] = owner_scores.get(item.owner_id, 0.0) + sim

    ranked = sorted(owner_scores.items(), key=lambda kv: kv[1], reverse=True)
    logger.debug(
        "[peer] RANKED user_id=%s own_tags=%d candidates=%d owners=%d",
        user_id, len(user_tags), len(candidates), len(ranked),
    )
    return ranked, items_by_owner


async def score_by_peers(
    repo: RecommendationRepository,
    user_id: str,
    profile: InterestProfile,
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[ScoredCandidate]:
    """
    Recommend items owned by the top similar owners.

    Items are emitted in owner-rank order, then store order within an owner,
    and sliced to limit without re-sorting. The profile is accepted for
    signature parity with the other scorers; similarity is computed from the
    user's own item tags.
    """
    ranked, items_by_owner = await rank_peer_owners(repo, user_id, config)

    recommendations: List[ScoredCandidate] = []
    for owner_id, owner_score in ranked[: config.peer_top_owners]:
        for item in items_by_owner.get(owner_id, []):
            recommendations.append(
                ScoredCandidate(
                    id=item.id,
                    title=item.title,
                    score=owner_score * config.peer_weight,
                    reason=PEER_REASON,
                    metadata={
                        "url": item.url,
                        "tags": item.tags,
                        "owner_id": owner_id,
                    },
                    source=CandidateSource.PEER_SIMILARITY,
                )
            )
    return recommendations[:limit]


async def get_similar_users(
    repo: RecommendationRepository,
    user_id: str,
    limit: int = 10,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[SimilarUser]:
    """Peers ranked the same way score_by_peers ranks owners, with display info."""
    if limit <= 0:
        return []
    ranked, _ = await rank_peer_owners(repo, user_id, config)
    top = ranked[:limit]
    if not top:
        return []
    profiles = await read_or_default(
        "get_user_profiles",
        repo.get_user_profiles([owner_id for owner_id, _ in top]),
        dict,
    )
    return [
        SimilarUser(
            user_id=owner_id,
            score=score,
            display_info=dict(profiles.get(owner_id) or {}),
        )
        for owner_id, score in top
    ]
