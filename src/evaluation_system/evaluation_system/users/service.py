from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, to_iso
from ..common.passwords import verify_password
from ..core.exceptions import AccountSuspendedError, AuthenticationError, PasswordConfirmationError
from ..employees.repository import AccountRepository, EmployeeRepository
from ..suspensions.repository import SuspensionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    id: int
    name: str
    email: str
    role: str
    position: Optional[str] = None
    department: Optional[str] = None
    branch: Optional[str] = None
    contact: Optional[str] = None
    hire_date: Optional[str] = None
    signature: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "position": self.position,
            "department": self.department,
            "branch": self.branch,
            "contact": self.contact,
            "hireDate": self.hire_date,
            "signature": self.signature,
        }


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, accounts: AccountRepository, employees: EmployeeRepository, suspensions: SuspensionRepository):
        self._accounts = accounts
        self._employees = employees
        self._suspensions = suspensions

    def login(self, email: str, password: str, *, now: Optional[datetime] = None) -> SessionUser:
        account = self._accounts.get_by_email(email)
        if not account or not verify_password(account.password, password):
            raise AuthenticationError("Invalid credentials")

        if account.is_suspended:
            raise AccountSuspendedError(
                reason=account.suspension_reason or "No reason provided",
                suspended_at=account.suspended_at or to_iso(now or now_utc()),
                suspended_by=account.suspended_by or "System Administrator",
                account_name=account.display_name,
            )

        record = self._suspensions.find_by_email(account.email)
        if record and record.is_active_suspension:
            raise AccountSuspendedError(
                reason=record.suspension_reason or "No reason provided",
                suspended_at=record.suspension_date or to_iso(now or now_utc()),
                suspended_by=record.suspended_by or "System Administrator",
                account_name=record.name or account.display_name,
            )

        self._accounts.put(replace(account, last_login=to_iso(now or now_utc())))

        if not account.employee_id:
            return SessionUser(
                id=account.id,
                name=account.display_name,
                email=account.email,
                role=account.role,
                position=account.position or "System Administrator",
                department=account.department or "IT",
                branch=account.branch or "head-office",
                contact=account.contact or "",
                hire_date=account.hire_date,
                signature=account.signature,
            )

        employee = self._employees.get(account.employee_id)
        if not employee:
            raise AuthenticationError("Employee not found")

        return SessionUser(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            role=account.role,
            position=employee.position,
            department=employee.department,
            branch=employee.branch,
            contact=employee.contact,
            hire_date=employee.hire_date,
            signature=account.signature or employee.signature,
        )


class PasswordGate:
    """Re-confirm the acting user's password before a destructive action.

    A convenience check against the stored account password, not a security
    boundary.
    """

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def confirm(self, *, actor_email: str, password: str) -> None:
        if not password or not password.strip():
            raise PasswordConfirmationError("Password is required to delete records")

        account = self._accounts.get_by_email(actor_email)
        if not account:
            raise PasswordConfirmationError("User account not found. Please refresh and try again.")

        if not verify_password(account.password, password):
            logger.warning("Password confirmation failed for %s", actor_email)
            raise PasswordConfirmationError("Incorrect password. Please try again.")

