"""
Score helpers: time and recency utilities used by the trending stage.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def hours_since(created_at: Optional[datetime], now: Optional[datetime] = None) -> float:
    """Hours elapsed since created_at. Missing timestamps count as infinitely old."""
    if created_at is None:
        return float("inf")
    now = as_utc(now) if now is not None else utc_now()
    return (now - as_utc(created_at)).total_seconds() / 3600.0


def recency_factor(age_hours: float, window_hours: float = 168.0) -> float:
    """
    Linear decay over the window: 1.0 when brand new, 0.0 at or past the window edge.
    window_hours=168 is the 7-day trending window. Future timestamps clamp to 1.0.
    """
    return min(1.0, max(0.0, 1.0 - age_hours / window_hours))
