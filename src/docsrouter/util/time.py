from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Plan timestamps are tz-aware UTC."""
    return datetime.now(timezone.utc)
