"""
Similarity utilities: set overlap for tag matching.
"""

from typing import AbstractSet


def jaccard_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """|A ∩ B| / |A ∪ B|; 0.0 when both sets are empty."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union
