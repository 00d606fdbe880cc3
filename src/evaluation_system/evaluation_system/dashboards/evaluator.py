from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import StorageKeys
from ..core.enums import Highlight
from ..evaluations.quarters import quarter_from_evaluation
from ..evaluations.scoring import round_half_up, submission_rating
from ..evaluations.service import EvaluationRecord, SubmissionService
from .cache import ViewCache


class EvaluatorDashboard:
    def __init__(self, submissions: SubmissionService, cache: ViewCache):
        self._submissions = submissions
        self._cache = cache

    def submissions(self, evaluator_id: int, *, now: Optional[datetime] = None) -> Sequence[EvaluationRecord]:
        return self._submissions.records_view(evaluator_id=evaluator_id, now=now)

    def new_count(self, evaluator_id: int, *, now: Optional[datetime] = None) -> int:
        return sum(1 for r in self.submissions(evaluator_id, now=now) if r.highlight == Highlight.NEW)

    def quarterly_performance(self, evaluator_id: int) -> dict[str, dict[str, float]]:
        """employee name -> quarter -> average rating."""
        return self._cache.get_or_compute(
            f"evaluator.quarterly.{evaluator_id}",
            (StorageKeys.SUBMISSIONS,),
            lambda: self._compute_quarterly(evaluator_id),
        )

    def _compute_quarterly(self, evaluator_id: int) -> dict[str, dict[str, float]]:
        buckets: dict[str, dict[str, list[float]]] = defaultdict(lambda: defaultdict(list))
        for s in self._submissions.list_for_evaluator(evaluator_id):
            rating = submission_rating(s)
            if rating <= 0:
                continue
            quarter = quarter_from_evaluation(s.evaluation_data, s.submitted_at)
            buckets[s.employee_name][quarter].append(rating)
        return {
            name: {q: round_half_up(sum(v) / len(v), 1) for q, v in sorted(quarters.items())}
            for name, quarters in sorted(buckets.items())
        }
