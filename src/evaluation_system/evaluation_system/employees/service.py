from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc, to_iso
from ..core.exceptions import NotFoundError, ValidationError
from ..suspensions.repository import SuspensionRepository
from ..users.service import PasswordGate
from .model import Account, Employee
from .repository import AccountRepository, EmployeeRepository

logger = logging.getLogger(__name__)

# Fields an edit may copy onto the matching login account.
_ACCOUNT_SYNC_FIELDS = (
    "name",
    "email",
    "position",
    "department",
    "branch",
    "role",
    "username",
    "contact",
    "hire_date",
    "is_active",
    "signature",
)

_EDITABLE_FIELDS = {f.name for f in fields(Employee)} - {"id", "extra", "updated_at"}


class EmployeeService:
    """Use case: list / edit / soft-delete employees."""

    def __init__(
        self,
        employees: EmployeeRepository,
        accounts: AccountRepository,
        suspensions: SuspensionRepository,
        password_gate: PasswordGate,
    ):
        self._employees = employees
        self._accounts = accounts
        self._suspensions = suspensions
        self._password_gate = password_gate

    def list_employees(self, *, include_deleted: bool = False) -> list[Employee]:
        employees = list(self._employees.list())
        if include_deleted:
            return employees
        deleted = {str(i) for i in self._employees.deleted_ids()}
        return [e for e in employees if str(e.id) not in deleted]

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        employee = self._employees.get(int(employee_id))
        if not employee:
            return None
        if not employee.signature:
            account = self._accounts.get_for_employee(employee.id)
            if account and account.signature:
                return replace(employee, signature=account.signature)
        return employee

    def update_employee(self, employee_id: int, updates: dict[str, Any], *, now: Optional[datetime] = None) -> Employee:
        employee = self._employees.get(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        unknown = set(updates) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown employee fields: {', '.join(sorted(unknown))}")
        if "name" in updates and not str(updates["name"] or "").strip():
            raise ValidationError("Name is required")

        stamp = to_iso(now or now_utc())
        updated = replace(employee, **updates, updated_at=stamp)
        self._employees.put(updated)

        account = self._accounts.get_for_employee(employee.id)
        if account:
            self._accounts.put(self._sync_account(account, updates, stamp))
        return updated

    @staticmethod
    def _sync_account(account: Account, updates: dict[str, Any], stamp: str) -> Account:
        changes = {k: v for k, v in updates.items() if k in _ACCOUNT_SYNC_FIELDS and v is not None}
        return replace(account, **changes, updated_at=stamp)

    def delete_employee(self, *, employee_id: int, actor_email: str, password: str) -> None:
        """Soft delete: the id goes on the deleted list, the row stays."""
        self._password_gate.confirm(actor_email=actor_email, password=password)

        employee = self._employees.get(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        self._employees.mark_deleted(employee.id)
        logger.info("Employee %s deleted by %s", employee.id, actor_email)

    def is_effectively_active(self, employee: Employee, *, suspended_ids: Optional[set[int]] = None) -> bool:
        if not employee.is_active:
            return False
        if suspended_ids is None:
            record = self._suspensions.get(employee.id)
            return not (record and record.is_active_suspension)
        return employee.id not in suspended_ids

    def filter_employees(
        self,
        *,
        search: str = "",
        department: Optional[str] = None,
        branch: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Sequence[Employee]:
        needle = (search or "").strip().lower()
        out = []
        for e in self.list_employees():
            if department and (e.department or "") != department:
                continue
            if branch and (e.branch or "") != branch:
                continue
            if role and (e.role or "") != role:
                continue
            if needle and not any(needle in (v or "").lower() for v in (e.name, e.email, e.position)):
                continue
            out.append(e)
        out.sort(key=lambda e: e.name.lower())
        return out
