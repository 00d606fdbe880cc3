from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_iso, timestamp_id, to_iso
from ..common.validators import has_text, require_non_empty
from ..core.enums import ApprovalStatus, ApprovalView, Highlight, NotificationType, Role, SubmissionStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..storage.collection import same_id
from ..users.service import PasswordGate
from .approval import status_for_submission
from .highlight import classify_highlight, time_ago
from .model import Submission
from .quarters import quarter_from_evaluation
from .repository import ApprovalDataRepository, SeenSubmissionRepository, SubmissionRepository
from .scoring import calculate_overall_rating, rating_label, submission_rating

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {f.name for f in fields(Submission)} - {"id", "extra"}


@dataclass(frozen=True)
class EvaluationRecord:
    """A submission as one row of an evaluation records table."""

    submission: Submission
    approval_status: ApprovalStatus
    highlight: Highlight
    quarter: str
    rating: float
    rating_label: str
    time_ago: str

    def to_dict(self) -> dict:
        row = self.submission.to_dict()
        row.update(
            {
                "approvalStatus": self.approval_status.value,
                "highlight": self.highlight.value,
                "quarter": self.quarter,
                "rating": self.rating,
                "ratingLabel": self.rating_label,
                "timeAgo": self.time_ago,
            }
        )
        return row


class SubmissionService:
    """Use case: create, sign, list and delete evaluation submissions.

    Stored approvalStatus values are never trusted; every read re-derives the
    status from the signatures (and any employee acknowledgement kept under
    approvalData_<email>).
    """

    def __init__(
        self,
        submissions: SubmissionRepository,
        seen: SeenSubmissionRepository,
        approvals: ApprovalDataRepository,
        password_gate: PasswordGate,
        notifications: Optional[NotificationService] = None,
    ):
        self._submissions = submissions
        self._seen = seen
        self._approvals = approvals
        self._password_gate = password_gate
        self._notifications = notifications

    # ---- reads ----

    def _merge_acknowledgement(self, submission: Submission) -> Submission:
        if has_text(submission.employee_signature):
            return submission
        email = submission.employee_email or submission.evaluation_data.get("employeeEmail")
        data = self._approvals.get(email, submission.id) if email else None
        if not data:
            data = self._approvals.find(submission.id)
        if not data:
            return submission
        return replace(
            submission,
            employee_signature=data.get("employeeSignature"),
            employee_approved_at=data.get("approvedAt") or submission.employee_approved_at,
            employee_email=submission.employee_email or data.get("employeeEmail"),
        )

    def _resolve(self, submission: Submission, view: ApprovalView) -> Submission:
        merged = self._merge_acknowledgement(submission)
        return replace(merged, approval_status=status_for_submission(merged, view=view).value)

    def list_submissions(self, *, view: ApprovalView = ApprovalView.RECORDS) -> list[Submission]:
        return [self._resolve(s, view) for s in self._submissions.list()]

    def get(self, submission_id: int, *, view: ApprovalView = ApprovalView.RECORDS) -> Optional[Submission]:
        submission = self._submissions.get(submission_id)
        return self._resolve(submission, view) if submission else None

    def list_for_employee(
        self,
        *,
        email: Optional[str] = None,
        employee_id: Optional[int] = None,
        view: ApprovalView = ApprovalView.EMPLOYEE_HISTORY,
    ) -> list[Submission]:
        needle = (email or "").strip().lower()
        out = []
        for s in self._submissions.list():
            owner_email = (s.employee_email or s.evaluation_data.get("employeeEmail") or "").lower()
            if (needle and owner_email == needle) or (employee_id is not None and same_id(s.employee_id, employee_id)):
                out.append(self._resolve(s, view))
        return out

    def list_for_evaluator(self, evaluator_id: int, *, view: ApprovalView = ApprovalView.RECORDS) -> list[Submission]:
        return [self._resolve(s, view) for s in self._submissions.list() if same_id(s.evaluator_id, evaluator_id)]

    # ---- writes ----

    def _next_id(self, now: datetime) -> int:
        candidate = timestamp_id(now)
        latest = max((s.id for s in self._submissions.list() if isinstance(s.id, int)), default=0)
        return max(candidate, latest + 1)

    def create_submission(
        self,
        *,
        employee_name: str,
        evaluation_data: Mapping[str, Any],
        employee_id: Optional[int] = None,
        employee_email: Optional[str] = None,
        evaluator_id: Optional[int] = None,
        evaluator_name: Optional[str] = None,
        period: Optional[str] = None,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Submission:
        employee_name = require_non_empty(employee_name, "Employee name")
        now = now or now_utc()
        data = dict(evaluation_data or {})

        submission = Submission(
            id=self._next_id(now),
            employee_id=employee_id,
            employee_name=employee_name,
            employee_email=employee_email,
            evaluator_id=evaluator_id,
            evaluator_name=evaluator_name,
            evaluator=evaluator_name,
            evaluation_data=data,
            status=SubmissionStatus.COMPLETED.value,
            period=period,
            overall_rating=f"{calculate_overall_rating(data):.1f}",
            submitted_at=to_iso(now),
            category=category or "Performance Review",
            evaluator_signature=data.get("evaluatorSignature") or None,
        )
        submission = replace(submission, approval_status=status_for_submission(submission).value)
        self._submissions.put(submission)
        logger.info("Submission %s created for %s", submission.id, employee_name)
        return submission

    def update_submission(self, submission_id: int, updates: Mapping[str, Any]) -> Optional[Submission]:
        submission = self._submissions.get(submission_id)
        if not submission:
            return None

        unknown = set(updates) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown submission fields: {', '.join(sorted(unknown))}")

        changes = dict(updates)
        if "evaluation_data" in changes:
            changes["evaluation_data"] = dict(changes["evaluation_data"] or {})
            changes["overall_rating"] = f"{calculate_overall_rating(changes['evaluation_data']):.1f}"
        updated = replace(submission, **changes)
        updated = replace(updated, approval_status=status_for_submission(updated).value)
        return self._submissions.put(updated)

    def sign_as_employee(
        self,
        submission_id: int,
        *,
        signature: str,
        employee_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Submission:
        """Employee acknowledgement of an evaluation."""
        signature = require_non_empty(signature, "Signature")
        submission = self._require(submission_id)
        stamp = to_iso(now or now_utc())

        updated = replace(submission, employee_signature=signature, employee_approved_at=stamp)
        updated = self._store_signed(updated)

        email = updated.employee_email or updated.evaluation_data.get("employeeEmail")
        if email:
            self._approvals.put(
                email,
                updated.id,
                {
                    "id": updated.id,
                    "approvedAt": stamp,
                    "employeeSignature": signature,
                    "employeeName": employee_name or updated.employee_name,
                    "employeeEmail": email,
                },
            )
        return updated

    def sign_as_evaluator(self, submission_id: int, *, signature: str, now: Optional[datetime] = None) -> Submission:
        signature = require_non_empty(signature, "Signature")
        submission = self._merge_acknowledgement(self._require(submission_id))
        updated = replace(submission, evaluator_signature=signature, evaluator_approved_at=to_iso(now or now_utc()))
        return self._store_signed(updated)

    def _store_signed(self, submission: Submission) -> Submission:
        status = status_for_submission(submission)
        was_full = submission.approval_status == ApprovalStatus.FULLY_APPROVED.value
        submission = replace(submission, approval_status=status.value)
        self._submissions.put(submission)

        if status == ApprovalStatus.FULLY_APPROVED and not was_full and self._notifications:
            self._notifications.create(
                message=f"Evaluation for {submission.employee_name} is fully approved",
                roles=(Role.HR.value, Role.ADMIN.value),
                type=NotificationType.SUCCESS,
            )
        return submission

    def delete_submission(self, *, submission_id: int, actor_email: str, password: str) -> None:
        self._password_gate.confirm(actor_email=actor_email, password=password)
        if not self._submissions.delete(submission_id):
            raise NotFoundError("Evaluation record not found")
        logger.info("Submission %s deleted by %s", submission_id, actor_email)

    def _require(self, submission_id: int) -> Submission:
        submission = self._submissions.get(submission_id)
        if not submission:
            raise NotFoundError("Evaluation record not found")
        return submission

    # ---- seen tracking ----

    def mark_seen(self, submission_id: int) -> bool:
        return self._seen.add(submission_id)

    def seen_ids(self) -> set[str]:
        return self._seen.all()

    # ---- records table ----

    def to_record(
        self,
        submission: Submission,
        *,
        seen_ids: set[str],
        view: ApprovalView = ApprovalView.RECORDS,
        now: Optional[datetime] = None,
    ) -> EvaluationRecord:
        status = status_for_submission(submission, view=view)
        rating = submission_rating(submission)
        return EvaluationRecord(
            submission=submission,
            approval_status=status,
            highlight=classify_highlight(submission.submitted_at, submission.id, status, seen_ids, now=now),
            quarter=quarter_from_evaluation(submission.evaluation_data, submission.submitted_at),
            rating=rating,
            rating_label=rating_label(rating),
            time_ago=time_ago(submission.submitted_at, now=now),
        )

    def records_view(
        self,
        *,
        search: str = "",
        approval_status: Optional[ApprovalStatus] = None,
        quarter: Optional[str] = None,
        evaluator_id: Optional[int] = None,
        view: ApprovalView = ApprovalView.RECORDS,
        now: Optional[datetime] = None,
    ) -> Sequence[EvaluationRecord]:
        """Filtered records, newest first."""
        now = now or now_utc()
        needle = (search or "").strip().lower()
        seen = self.seen_ids()

        rows = []
        for submission in self._submissions.list():
            if evaluator_id is not None and not same_id(submission.evaluator_id, evaluator_id):
                continue
            submission = self._merge_acknowledgement(submission)
            record = self.to_record(submission, seen_ids=seen, view=view, now=now)
            if approval_status is not None and record.approval_status != approval_status:
                continue
            if quarter and not record.quarter.startswith(quarter):
                continue
            if needle:
                haystack = (
                    submission.employee_name,
                    submission.evaluator_display_name,
                    submission.evaluation_data.get("department") or "",
                    submission.evaluation_data.get("position") or "",
                )
                if not any(needle in (h or "").lower() for h in haystack):
                    continue
            rows.append(replace(record, submission=replace(submission, approval_status=record.approval_status.value)))

        rows.sort(key=lambda r: parse_iso(r.submission.submitted_at) or _EPOCH, reverse=True)
        return rows


_EPOCH = parse_iso("1970-01-01T00:00:00Z")
