from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for authorization."""

    ADMIN = "admin"
    HR = "hr"
    EVALUATOR = "evaluator"
    EMPLOYEE = "employee"


class ApprovalStatus(str, Enum):
    """Derived countersignature state of an evaluation.

    REJECTED is accepted when read back from storage but never derived.
    """

    PENDING = "pending"
    EMPLOYEE_APPROVED = "employee_approved"
    FULLY_APPROVED = "fully_approved"
    REJECTED = "rejected"


class ApprovalView(str, Enum):
    """Call sites that derive approval status."""

    RECORDS = "records"
    EMPLOYEE_HISTORY = "employee_history"


class Highlight(str, Enum):
    APPROVED = "approved"
    NEW = "new"
    RECENT = "recent"
    OLD = "old"


class SuspensionStatus(str, Enum):
    SUSPENDED = "suspended"
    PENDING_REVIEW = "pending_review"
    REINSTATED = "reinstated"


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    APPROVED = "approved"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"
