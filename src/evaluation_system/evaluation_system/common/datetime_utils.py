from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


def now_utc() -> datetime:
    """Current time (timezone aware).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a trailing Z, as stored in local storage."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse stored timestamps; returns None for anything unparseable.

    Naive values are treated as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_id(now: Optional[datetime] = None) -> int:
    """Millisecond timestamp used as a record id."""
    now = now or now_utc()
    return int(now.timestamp() * 1000)
