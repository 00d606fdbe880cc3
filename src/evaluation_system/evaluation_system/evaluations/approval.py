from __future__ import annotations

from typing import Any

from ..common.validators import has_text
from ..core.enums import ApprovalStatus, ApprovalView
from .model import Submission


def derive_approval_status(
    employee_signature: Any,
    evaluator_signature: Any,
    *,
    employee_approved_at: Any = None,
    evaluator_approved_at: Any = None,
    employee_only_is_full: bool = False,
) -> ApprovalStatus:
    """Approval state from signature presence alone.

    An approval timestamp counts as evidence the party signed. Blank strings
    are treated as missing. Whatever status was stored before is ignored.
    """
    employee_signed = has_text(employee_signature) or has_text(employee_approved_at)
    evaluator_signed = has_text(evaluator_signature) or has_text(evaluator_approved_at)

    if employee_signed and evaluator_signed:
        return ApprovalStatus.FULLY_APPROVED
    if employee_signed:
        return ApprovalStatus.FULLY_APPROVED if employee_only_is_full else ApprovalStatus.EMPLOYEE_APPROVED
    return ApprovalStatus.PENDING


def status_for_submission(submission: Submission, *, view: ApprovalView = ApprovalView.RECORDS) -> ApprovalStatus:
    """Derive the status the given screen shows for a submission.

    The employee history screen counts an employee signature on its own as
    fully approved; every other screen waits for the evaluator too.
    """
    return derive_approval_status(
        submission.employee_signature,
        submission.effective_evaluator_signature,
        employee_approved_at=submission.employee_approved_at,
        evaluator_approved_at=submission.evaluator_approved_at,
        employee_only_is_full=view == ApprovalView.EMPLOYEE_HISTORY,
    )
