"""Shared utilities for similarity, recency, and fail-soft reads."""

from .reads import read_or_default
from .scores import as_utc, hours_since, recency_factor, utc_now
from .similarity import jaccard_similarity

__all__ = [
    "as_utc",
    "hours_since",
    "jaccard_similarity",
    "read_or_default",
    "recency_factor",
    "utc_now",
]
