from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.records import record_from_row, record_to_row


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object; storage rows use camelCase keys.
    """

    id: int
    name: str
    email: str
    position: Optional[str] = None
    department: Optional[str] = None
    branch: Optional[str] = None
    role: Optional[str] = None
    hire_date: Optional[str] = None
    is_active: bool = True
    avatar: Optional[str] = None
    bio: Optional[str] = None
    contact: Optional[str] = None
    signature: Optional[str] = None
    username: Optional[str] = None
    updated_at: Optional[str] = None
    approved_date: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, row: dict) -> "Employee":
        is_active = row.get("isActive")
        return record_from_row(
            cls,
            row,
            name=row.get("name") or "",
            email=row.get("email") or "",
            is_active=True if is_active is None else bool(is_active),
        )

    def to_dict(self) -> dict:
        return record_to_row(self)


@dataclass(frozen=True)
class Account:
    """Login account; admin accounts have no employee_id."""

    id: int
    email: str
    password: Optional[str] = None
    role: str = "employee"
    employee_id: Optional[int] = None
    username: Optional[str] = None
    name: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    branch: Optional[str] = None
    is_active: bool = True
    contact: Optional[str] = None
    hire_date: Optional[str] = None
    signature: Optional[str] = None
    is_suspended: bool = False
    suspension_reason: Optional[str] = None
    suspended_at: Optional[str] = None
    suspended_by: Optional[str] = None
    last_login: Optional[str] = None
    approved_date: Optional[str] = None
    updated_at: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def person_id(self) -> int:
        """Id of the employee this account logs in as."""
        return self.employee_id or self.id

    @property
    def display_name(self) -> str:
        return self.name or self.username or self.email

    @classmethod
    def from_dict(cls, row: dict) -> "Account":
        is_active = row.get("isActive")
        return record_from_row(
            cls,
            row,
            email=row.get("email") or "",
            role=row.get("role") or "employee",
            is_active=True if is_active is None else bool(is_active),
            is_suspended=bool(row.get("isSuspended", False)),
        )

    def to_dict(self) -> dict:
        return record_to_row(self)
