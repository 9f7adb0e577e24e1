"""
Algorithm configuration: profile, scorer, and fusion parameters.

RecommendationConfig defaults are defined here. The service may pass a dict
(e.g. loaded from ALGORITHM_CONFIG_PATH); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class RecommendationConfig(BaseModel):
    """Configuration for the hybrid recommendation engine."""

    # -------------------------------------------------------------------------
    # Interest Profile
    # -------------------------------------------------------------------------

    # Max own items read to tally tag frequencies.
    profile_items_limit: int = 100
    # Tags kept in the profile, most frequent first.
    profile_top_tags: int = 20
    # Max follow relations read into followed_user_ids (not consumed by scorers yet).
    profile_follows_limit: int = 50

    # -------------------------------------------------------------------------
    # Peer Similarity (collaborative filtering)
    # owner_score = sum of jaccard(own_tags, item_tags) over the owner's matching items
    # candidate score = owner_score * peer_weight
    # -------------------------------------------------------------------------

    # Own items whose tags are unioned into the comparison set.
    peer_own_items_limit: int = 50
    # Public items pre-filtered by tag overlap before similarity is computed.
    peer_candidate_limit: int = 100
    # Owners kept as "similar users" for content recommendations.
    peer_top_owners: int = 5
    peer_weight: float = 0.8

    # -------------------------------------------------------------------------
    # Content Similarity (content-based filtering)
    # score = |item_tags ∩ profile_tags| / |profile_tags| * content_weight
    # -------------------------------------------------------------------------

    content_candidate_limit: int = 50
    content_weight: float = 0.7
    # Matching tags named in the reason string.
    content_reason_tags: int = 3

    # -------------------------------------------------------------------------
    # Trending (recency / popularity)
    # recency = max(0, 1 - age_hours / (window_days * 24))
    # score = (likes * like_weight + recency * recency_weight) * trending_weight
    # -------------------------------------------------------------------------

    trending_window_days: int = 7
    # Newest items read before scoring; not a popularity cap.
    trending_candidate_limit: int = 20
    trending_like_weight: float = 0.5
    trending_recency_weight: float = 0.5
    trending_weight: float = 0.6

    # -------------------------------------------------------------------------
    # Fusion
    # -------------------------------------------------------------------------

    peer_limit: int = 10
    content_limit: int = 10
    trending_limit: int = 5
    default_limit: int = 20
    # Per-scorer timeout. A timed-out scorer contributes no candidates.
    scorer_timeout_seconds: float = 5.0  # also bounds each profile read
    # When set, stored batches beyond this many per user are pruned after each append.
    history_limit: Optional[int] = None

    # -------------------------------------------------------------------------
    # Related items (shared-tag lookup for a single item)
    # -------------------------------------------------------------------------

    # Candidates read = limit * related_candidate_multiplier, ordered by likes.
    related_candidate_multiplier: int = 3
    related_default_limit: int = 6

    @model_validator(mode="after")
    def check_ranges(self):
        for name in (
            "peer_weight",
            "content_weight",
            "trending_weight",
            "trending_like_weight",
            "trending_recency_weight",
            "scorer_timeout_seconds",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        for name, value in self.model_dump().items():
            if name.endswith(("_limit", "_top_tags", "_top_owners", "_reason_tags")) and value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.trending_window_days <= 0:
            raise ValueError("trending_window_days must be positive")
        blend = self.trending_like_weight + self.trending_recency_weight
        if abs(blend - 1.0) > 0.01:
            raise ValueError(f"Trending like/recency weights must sum to 1.0, got {blend}")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "profile" in config_dict:
            p = config_dict["profile"]
            if "items_limit" in p:
                flat["profile_items_limit"] = p["items_limit"]
            if "top_tags" in p:
                flat["profile_top_tags"] = p["top_tags"]
            if "follows_limit" in p:
                flat["profile_follows_limit"] = p["follows_limit"]
        if "peer_similarity" in config_dict:
            ps = config_dict["peer_similarity"]
            for key in ("own_items_limit", "candidate_limit", "top_owners", "weight"):
                if key in ps:
                    flat[f"peer_{key}"] = ps[key]
        if "content_similarity" in config_dict:
            cs = config_dict["content_similarity"]
            for key in ("candidate_limit", "weight", "reason_tags"):
                if key in cs:
                    flat[f"content_{key}"] = cs[key]
        if "trending" in config_dict:
            tr = config_dict["trending"]
            for key in ("window_days", "candidate_limit", "like_weight", "recency_weight", "weight"):
                if key in tr:
                    flat[f"trending_{key}"] = tr[key]
        if "fusion" in config_dict:
            flat.update(config_dict["fusion"])
        if "related" in config_dict:
            rel = config_dict["related"]
            if "candidate_multiplier" in rel:
                flat["related_candidate_multiplier"] = rel["candidate_multiplier"]
            if "default_limit" in rel:
                flat["related_default_limit"] = rel["default_limit"]
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
