"""
Content item model: a bookmark-like item read from the content store.

Used by every scoring stage instead of raw store rows.
Built from store dicts via ContentItem.model_validate(d) or ensure_items().
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ContentItem(BaseModel):
    """
    Content payload used across the scoring stages.

    Only id and owner_id are required; stores may return partial rows
    (e.g. the own-items read selects just id and tags).
    """

    model_config = ConfigDict(extra="allow")

    id: str
    owner_id: str
    title: str = ""
    tags: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    is_public: bool = True
    created_at: Optional[datetime] = None
    like_count: int = 0

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_list(cls, value: Any) -> List[str]:
        # Store rows may carry null or a non-list tags column
        if not isinstance(value, (list, tuple, set)):
            return []
        return [t for t in value if isinstance(t, str)]

    @field_validator("title", mode="before")
    @classmethod
    def _title_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("like_count", mode="before")
    @classmethod
    def _like_count(cls, value: Any) -> Any:
        return 0 if value is None else value

    def tag_set(self) -> set:
        return set(self.tags)


def ensure_items(
    items: List[Union[Dict[str, Any], "ContentItem"]],
    skip_invalid: bool = False,
) -> List["ContentItem"]:
    """
    Convert list of dicts or ContentItems to list of ContentItem models.

    With skip_invalid=True, rows that fail validation are logged and dropped
    instead of raising.
    """
    out: List[ContentItem] = []
    for i in items:
        if isinstance(i, ContentItem):
            out.append(i)
            continue
        try:
            out.append(ContentItem.model_validate(i))
        except ValidationError as e:
            if not skip_invalid:
                raise
            row_id = i.get("id") if isinstance(i, dict) else None
            logger.warning(
                "[content] INVALID_ROW_SKIPPED id=%s errors=%d", row_id, e.error_count()
            )
    return out
