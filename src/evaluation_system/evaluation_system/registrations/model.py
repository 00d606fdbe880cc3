from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.records import record_from_row, record_to_row
from ..core.enums import RegistrationStatus


@dataclass(frozen=True)
class PendingRegistration:
    """Self-service sign-up waiting for an admin decision."""

    id: int
    name: str
    email: str
    position: Optional[str] = None
    department: Optional[str] = None
    branch: Optional[str] = None
    hire_date: Optional[str] = None
    role: str = "employee"
    status: RegistrationStatus = RegistrationStatus.PENDING
    submitted_at: Optional[str] = None
    signature: Optional[str] = None
    username: Optional[str] = None
    contact: Optional[str] = None
    password: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, row: dict) -> "PendingRegistration":
        try:
            status = RegistrationStatus(row.get("status") or RegistrationStatus.PENDING.value)
        except ValueError:
            status = RegistrationStatus.PENDING
        return record_from_row(
            cls,
            row,
            name=row.get("name") or "",
            email=row.get("email") or "",
            role=row.get("role") or "employee",
            status=status,
        )

    def to_dict(self) -> dict:
        return record_to_row(self)

    def public_dict(self) -> dict:
        row = self.to_dict()
        row.pop("password", None)
        return row


@dataclass(frozen=True)
class RegistrationOutcome:
    success: bool
    message: str
    account_id: Optional[int] = None
    employee_id: Optional[int] = None

    def to_dict(self) -> dict:
        out = {"success": self.success, "message": self.message}
        if self.account_id is not None:
            out["accountId"] = self.account_id
        if self.employee_id is not None:
            out["employeeId"] = self.employee_id
        return out
