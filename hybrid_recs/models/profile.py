"""
Interest profile model: compact interest signature rebuilt on every call.
"""

from typing import List

from pydantic import BaseModel, Field


class InterestProfile(BaseModel):
    """Tags the user uses most, plus who they follow. Never persisted."""

    # Most frequent first; exact, case-sensitive tag strings.
    tags: List[str] = Field(default_factory=list)
    # Reserved: read but not consumed by any scorer.
    followed_user_ids: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    avg_engagement: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.tags and not self.followed_user_ids
