"""
Fusion orchestrator: build the profile, fan out to the three scorers, then
merge, dedupe, rank, truncate, and persist.

The main entry point is generate_batch, which returns the ranked list plus
what happened along the way (persistence outcome, failed sources).
compute_recommendations returns just the list.

Fusion is concatenate-then-sort: scores are not recalibrated across sources,
and dedup keeps the FIRST occurrence in source priority order
(peer similarity > content similarity > trending), not the highest score.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Dict, List, Optional, Tuple

from ..models.config import RecommendationConfig, resolve_config
from ..models.scoring import CandidateSource, RecommendationBatch, ScoredCandidate
from ..repository import RecommendationRepository
from .content_similarity import score_by_content
from .peer_similarity import score_by_peers
from .profile import build_profile
from .trending import score_by_trending

logger = logging.getLogger(__name__)


async def _run_scorer(
    source: CandidateSource,
    scorer: Awaitable[List[ScoredCandidate]],
    timeout: float,
) -> Tuple[List[ScoredCandidate], bool]:
    """Await one scorer with a timeout. Failure or timeout means no candidates from it."""
    try:
        return await asyncio.wait_for(scorer, timeout=timeout), True
    except asyncio.TimeoutError:
        logger.warning(
            "[fusion] SCORER_TIMEOUT source=%s timeout=%s", source.value, timeout
        )
    except Exception as e:
        logger.warning(
            "[fusion] SCORER_FAILED source=%s error=%r", source.value, e
        )
    return [], False


def dedupe_candidates(candidates: List[ScoredCandidate]) -> List[ScoredCandidate]:
    """Keep the first candidate per (kind, id); later duplicates are dropped whatever their score."""
    unique: Dict[tuple, ScoredCandidate] = {}
    for candidate in candidates:
        if candidate.dedup_key not in unique:
            unique[candidate.dedup_key] = candidate
    return list(unique.values())


def rank_candidates(candidates: List[ScoredCandidate]) -> List[ScoredCandidate]:
    """Sort by score desc; equal scores keep their merged order."""
    return sorted(candidates, key=lambda c: c.score, reverse=True)


async def _persist(
    repo: RecommendationRepository,
    user_id: str,
    recommendations: List[ScoredCandidate],
    config: RecommendationConfig,
) -> bool:
    """Append the batch. Failures are logged and reported, never raised."""
    if not recommendations:
        return True
    rows = [candidate.to_record() for candidate in recommendations]
    try:
        ok = await repo.append_recommendations(user_id, rows)
    except Exception as e:
        logger.warning(
            "[fusion] PERSIST_FAILED user_id=%s rows=%d error=%r", user_id, len(rows), e
        )
        return False
    if not ok:
        logger.warning(
            "[fusion] PERSIST_REJECTED user_id=%s rows=%d", user_id, len(rows)
        )
        return False

    if config.history_limit is not None:
        prune = getattr(repo, "prune_recommendations", None)
        if prune is not None:
            try:
                removed = await prune(user_id, config.history_limit)
                logger.debug("[fusion] PRUNED user_id=%s removed=%s", user_id, removed)
            except Exception as e:
                logger.warning("[fusion] PRUNE_FAILED user_id=%s error=%r", user_id, e)
    return True


async def generate_batch(
    repo: RecommendationRepository,
    user_id: str,
    limit: Optional[int] = None,
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
) -> RecommendationBatch:
    """
    Compute, persist, and return ranked recommendations for user_id.

    Returns:
        RecommendationBatch with the top `limit` candidates (the same slice that
        was appended to the store), whether the append succeeded, per-source
        candidate counts, and the sources that failed or timed out.
    """
    config = resolve_config(config)
    if limit is None:
        limit = config.default_limit
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    # 1) Interest profile
    profile = await build_profile(repo, user_id, config)

    # 2) Fan out; each scorer degrades to [] on its own
    timeout = config.scorer_timeout_seconds
    sources = (
        CandidateSource.PEER_SIMILARITY,
        CandidateSource.CONTENT_SIMILARITY,
        CandidateSource.TRENDING,
    )
    results = await asyncio.gather(
        _run_scorer(
            sources[0],
            score_by_peers(repo, user_id, profile, config.peer_limit, config),
            timeout,
        ),
        _run_scorer(
            sources[1],
            score_by_content(repo, user_id, profile, config.content_limit, config),
            timeout,
        ),
        _run_scorer(
            sources[2],
            score_by_trending(repo, user_id, config.trending_limit, config, now=now),
            timeout,
        ),
    )

    # 3) Concatenate in priority order, 4) first-wins dedup, 5) rank
    merged: List[ScoredCandidate] = []
    source_counts: Dict[str, int] = {}
    failed_sources: List[str] = []
    for source, (candidates, ok) in zip(sources, results):
        merged.extend(candidates)
        source_counts[source.value] = len(candidates)
        if not ok:
            failed_sources.append(source.value)
    ranked = rank_candidates(dedupe_candidates(merged))

    # 6) Persist and 7) return the same slice
    top = ranked[:limit]
    persisted = await _persist(repo, user_id, top, config)

    logger.debug(
        "[fusion] DONE user_id=%s merged=%d unique=%d returned=%d persisted=%s",
        user_id, len(merged), len(ranked), len(top), persisted,
    )
    return RecommendationBatch(
        user_id=user_id,
        recommendations=top,
        persisted=persisted,
        source_counts=source_counts,
        failed_sources=failed_sources,
    )


async def compute_recommendations(
    repo: RecommendationRepository,
    user_id: str,
    limit: Optional[int] = None,
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
) -> List[ScoredCandidate]:
    """Ranked, deduplicated recommendations for user_id (also appended to the store)."""
    batch = await generate_batch(repo, user_id, limit=limit, config=config, now=now)
    return batch.recommendations
