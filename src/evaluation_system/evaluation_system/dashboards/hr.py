from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc, parse_iso
from ..core.constants import NEW_SUBMISSION_HOURS, StorageKeys
from ..core.enums import ApprovalStatus
from ..employees.service import EmployeeService
from ..evaluations.scoring import round_half_up, submission_rating
from ..evaluations.service import EvaluationRecord, SubmissionService
from .cache import ViewCache

_BREAKDOWN_KEYS = (StorageKeys.EMPLOYEES, StorageKeys.DELETED_EMPLOYEES, StorageKeys.SUBMISSIONS)


def _average(values: Sequence[float]) -> float:
    return round_half_up(sum(values) / len(values), 1) if values else 0.0


class HRDashboard:
    def __init__(self, employees: EmployeeService, submissions: SubmissionService, cache: ViewCache):
        self._employees = employees
        self._submissions = submissions
        self._cache = cache

    def overview(self, *, now: Optional[datetime] = None) -> dict:
        """Headline metrics; the 24h count depends on `now` so it is never cached."""
        now = now or now_utc()
        submissions = self._submissions.list_submissions()
        window = timedelta(hours=NEW_SUBMISSION_HOURS)
        ratings = [r for r in (submission_rating(s) for s in submissions) if r > 0]
        recent = 0
        for s in submissions:
            submitted = parse_iso(s.submitted_at)
            if submitted is not None and timedelta(0) <= now - submitted <= window:
                recent += 1
        return {
            "totalEmployees": len(self._employees.list_employees()),
            "newSubmissions": recent,
            "averageRating": _average(ratings),
            "fullyApproved": sum(1 for s in submissions if s.approval_status == ApprovalStatus.FULLY_APPROVED.value),
        }

    def _ratings_by_employee(self) -> dict[str, list[float]]:
        ratings: dict[str, list[float]] = defaultdict(list)
        for s in self._submissions.list_submissions():
            rating = submission_rating(s)
            if rating <= 0:
                continue
            if s.employee_id is not None:
                ratings[str(s.employee_id)].append(rating)
            elif s.employee_email:
                ratings[s.employee_email.lower()].append(rating)
        return ratings

    def _breakdown(self, attribute: str) -> list[dict]:
        ratings = self._ratings_by_employee()
        groups: dict[str, dict] = {}
        for e in self._employees.list_employees():
            name = getattr(e, attribute) or "Unassigned"
            group = groups.setdefault(name, {"name": name, "employees": 0, "_ratings": []})
            group["employees"] += 1
            group["_ratings"].extend(ratings.get(str(e.id), []) or ratings.get(e.email.lower(), []))
        out = []
        for group in sorted(groups.values(), key=lambda g: g["name"].lower()):
            group["averageRating"] = _average(group.pop("_ratings"))
            out.append(group)
        return out

    def department_breakdown(self) -> list[dict]:
        return self._cache.get_or_compute("hr.departments", _BREAKDOWN_KEYS, lambda: self._breakdown("department"))

    def branch_breakdown(self) -> list[dict]:
        return self._cache.get_or_compute("hr.branches", _BREAKDOWN_KEYS, lambda: self._breakdown("branch"))

    def performance_reviews(self, *, now: Optional[datetime] = None) -> Sequence[EvaluationRecord]:
        """Rated evaluations, best first."""
        records = [r for r in self._submissions.records_view(now=now) if r.rating > 0]
        records.sort(key=lambda r: r.rating, reverse=True)
        return records

    def evaluation_records(
        self,
        *,
        search: str = "",
        approval_status: Optional[ApprovalStatus] = None,
        quarter: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Sequence[EvaluationRecord]:
        """All evaluations as records-table rows, newest first."""
        return self._submissions.records_view(
            search=search, approval_status=approval_status, quarter=quarter, now=now
        )
