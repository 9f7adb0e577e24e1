"""
Recommendation store: append-only history of computed batches per user.

Every engine call appends a new batch; nothing is replaced. prune() is the
optional hook for capping history (RecommendationConfig.history_limit).
Rows can be marked shown / clicked / dismissed after the fact.
Persists to a JSON file when a path is given, else memory only. File writes go
through a temp file and os.replace; memory changes only after a write succeeds.
"""

import json
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from hybrid_recs.utils.scores import as_utc, utc_now

from .errors import StoreError

INTERACTION_ACTIONS = ("shown", "clicked", "dismissed")


class RecommendationStore:
    """Append-only recommendation rows, optionally backed by a JSON file."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        self._path = Path(path) if path else None
        self._rows: List[Dict[str, Any]] = []
        if self._path is not None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Recommendations JSON is malformed: {self._path}: {e}") from e
        rows = data.get("recommendations", data) if isinstance(data, dict) else data
        if not isinstance(rows, list):
            raise StoreError(f"Recommendations JSON must hold a list: {self._path}")
        self._rows = rows

    def _commit(self, rows: List[Dict[str, Any]]) -> None:
        """Write rows to disk (when file-backed), then make them current."""
        if self._path is not None:
            tmp = self._path.with_name(self._path.name + ".tmp")
            try:
                with open(tmp, "w") as f:
                    json.dump({"recommendations": rows}, f, indent=2)
                os.replace(tmp, self._path)
            except Exception:
                if tmp.exists():
                    tmp.unlink()
                raise
        self._rows = rows

    def append(
        self,
        user_id: str,
        rows: List[Dict[str, Any]],
        created_at: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """Append one batch for user_id. Returns the stored rows with ids assigned."""
        batch_id = uuid.uuid4().hex[:12]
        created = as_utc(created_at or utc_now()).isoformat()
        stored = []
        for row in rows:
            record = {
                **row,
                "id": uuid.uuid4().hex[:12],
                "user_id": user_id,
                "batch_id": batch_id,
                "created_at": created,
                "was_shown": False,
                "was_clicked": False,
                "was_dismissed": False,
                "shown_at": None,
                "interacted_at": None,
            }
            stored.append(record)
        self._commit(self._rows + stored)
        return stored

    def _batch_ids(self, user_id: str) -> List[str]:
        """Batch ids for user_id in append order."""
        seen: Dict[str, None] = {}
        for row in self._rows:
            if row.get("user_id") == user_id:
                seen.setdefault(row.get("batch_id"), None)
        return list(seen)

    def prune(self, user_id: str, keep_batches: int) -> int:
        """Keep only the newest keep_batches batches for user_id. Returns rows removed."""
        if keep_batches < 0:
            raise ValueError("keep_batches must be >= 0")
        batch_ids = self._batch_ids(user_id)
        drop = set(batch_ids[: max(0, len(batch_ids) - keep_batches)])
        if not drop:
            return 0
        kept = [
            row for row in self._rows
            if not (row.get("user_id") == user_id and row.get("batch_id") in drop)
        ]
        removed = len(self._rows) - len(kept)
        self._commit(kept)
        return removed

    def list_recommendations(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Stored rows for user_id, newest batch first, rank order within a batch."""
        out: List[Dict[str, Any]] = []
        for batch_id in reversed(self._batch_ids(user_id)):
            out.extend(
                row for row in self._rows
                if row.get("user_id") == user_id and row.get("batch_id") == batch_id
            )
        return out if limit is None else out[:limit]

    def count_batches(self, user_id: str) -> int:
        return len(self._batch_ids(user_id))

    def mark_interaction(
        self,
        user_id: str,
        record_id: str,
        action: str,
        at: Optional[datetime] = None,
    ) -> bool:
        """
        Mark one stored row as shown, clicked, or dismissed.
        Returns False if no row with record_id belongs to user_id.
        """
        if action not in INTERACTION_ACTIONS:
            raise ValueError(f"Invalid action: {action!r} (expected one of {', '.join(INTERACTION_ACTIONS)})")
        index = next(
            (
                n for n, r in enumerate(self._rows)
                if r.get("id") == record_id and r.get("user_id") == user_id
            ),
            None,
        )
        if index is None:
            return False
        row = dict(self._rows[index])
        timestamp = as_utc(at or utc_now()).isoformat()
        if action == "shown":
            row["was_shown"] = True
            row["shown_at"] = timestamp
        elif action == "clicked":
            row["was_clicked"] = True
            row["interacted_at"] = timestamp
        else:
            row["was_dismissed"] = True
            row["interacted_at"] = timestamp
        rows = list(self._rows)
        rows[index] = row
        self._commit(rows)
        return True
