from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Union

from ..core.constants import MAX_RATING, MIN_RATING, RUBRIC_WEIGHTS
from .model import RUBRIC, EvaluationScores, Submission

ScoresInput = Union[EvaluationScores, Mapping[str, Any], None]


def _coerce(scores: ScoresInput) -> EvaluationScores:
    if isinstance(scores, EvaluationScores):
        return scores
    return EvaluationScores.from_mapping(scores)


def _mean(values: list[Optional[float]]) -> float:
    present = [v for v in values if v is not None and not math.isnan(v)]
    if not present:
        return 0.0
    return sum(present) / len(present)


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_category_scores(scores: ScoresInput) -> dict[str, float]:
    """Mean of the answered items per rubric category (0 when none answered)."""
    scores = _coerce(scores)
    return {category: _mean(scores.category_items(category)) for category in RUBRIC}


def calculate_overall_rating(scores: ScoresInput) -> float:
    """Weighted overall rating, clamped to [0, 5] and rounded to one decimal."""
    categories = calculate_category_scores(scores)
    weighted = sum(categories[c] * w for c, w in RUBRIC_WEIGHTS.items())
    clamped = max(MIN_RATING, min(MAX_RATING, weighted))
    return round_half_up(clamped, 1)


def weighted_breakdown(scores: ScoresInput) -> list[dict]:
    categories = calculate_category_scores(scores)
    return [
        {
            "category": category,
            "average": round_half_up(categories[category], 2),
            "weight": weight,
            "weighted": round_half_up(categories[category] * weight, 2),
        }
        for category, weight in RUBRIC_WEIGHTS.items()
    ]


def rating_label(score: float) -> str:
    if score >= 4.5:
        return "Outstanding"
    if score >= 4.0:
        return "Exceeds Expectations"
    if score >= 3.5:
        return "Meets Expectations"
    if score >= 2.5:
        return "Needs Improvement"
    return "Unsatisfactory"


def submission_rating(submission: Submission) -> float:
    """Rating of a stored submission; older rows without scores fall back to overallRating."""
    computed = calculate_overall_rating(submission.scores)
    if computed > 0:
        return computed
    try:
        stored = float(submission.overall_rating)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(stored):
        return 0.0
    return round_half_up(max(MIN_RATING, min(MAX_RATING, stored)), 1)
