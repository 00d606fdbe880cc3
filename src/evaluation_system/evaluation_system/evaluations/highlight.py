from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Collection, Optional, Union

from ..common.datetime_utils import now_utc, parse_iso
from ..core.constants import NEW_SUBMISSION_HOURS, RECENT_SUBMISSION_HOURS
from ..core.enums import ApprovalStatus, Highlight


def _seen(submission_id: Any, seen_ids: Collection) -> bool:
    return str(submission_id) in {str(s) for s in seen_ids or ()}


def classify_highlight(
    submitted_at: Union[str, datetime, None],
    submission_id: Any,
    approval_status: ApprovalStatus,
    seen_ids: Collection,
    *,
    now: Optional[datetime] = None,
) -> Highlight:
    """Row highlight: approved > new (24h, unseen) > recent (48h, unseen) > old."""
    if approval_status == ApprovalStatus.FULLY_APPROVED:
        return Highlight.APPROVED

    submitted = parse_iso(submitted_at)
    if submitted is None or _seen(submission_id, seen_ids):
        return Highlight.OLD

    age = (now or now_utc()) - submitted
    if age <= timedelta(hours=NEW_SUBMISSION_HOURS):
        return Highlight.NEW
    if age <= timedelta(hours=RECENT_SUBMISSION_HOURS):
        return Highlight.RECENT
    return Highlight.OLD


def time_ago(submitted_at: Union[str, datetime, None], *, now: Optional[datetime] = None) -> str:
    submitted = parse_iso(submitted_at)
    if submitted is None:
        return ""
    seconds = ((now or now_utc()) - submitted).total_seconds()
    minutes = int(seconds // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    return submitted.date().isoformat()
