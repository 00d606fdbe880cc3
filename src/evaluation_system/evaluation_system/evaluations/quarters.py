from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import parse_iso

UNKNOWN_QUARTER = "Unknown"

_QUARTER_FLAGS = (
    ("reviewTypeRegularQ1", 1),
    ("reviewTypeRegularQ2", 2),
    ("reviewTypeRegularQ3", 3),
    ("reviewTypeRegularQ4", 4),
)


def quarter_from_date(value: Union[str, datetime, None]) -> str:
    parsed = parse_iso(value)
    if parsed is None:
        return UNKNOWN_QUARTER
    return f"Q{(parsed.month - 1) // 3 + 1} {parsed.year}"


def quarter_from_evaluation(
    evaluation_data: Optional[Mapping[str, Any]],
    submitted_at: Union[str, datetime, None] = None,
) -> str:
    """Quarter an evaluation covers.

    The regular review flags on the form win; the year comes from the
    coverage start date, else the submission date.
    """
    data = evaluation_data or {}
    for flag, quarter in _QUARTER_FLAGS:
        if data.get(flag) is True:
            reference = parse_iso(data.get("coverageFrom")) or parse_iso(submitted_at)
            if reference is None:
                return f"Q{quarter}"
            return f"Q{quarter} {reference.year}"
    return quarter_from_date(submitted_at)
