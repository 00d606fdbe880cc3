from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_utc, timestamp_id, to_iso
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import FIRST_EMPLOYEE_ID
from ..core.enums import NotificationType, RegistrationStatus, Role
from ..core.exceptions import ValidationError
from ..employees.model import Account, Employee
from ..employees.repository import AccountRepository, EmployeeRepository
from ..notifications.service import NotificationService
from .model import PendingRegistration, RegistrationOutcome
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


class RegistrationService:
    """Use case: register -> admin approves (account + employee) or rejects."""

    def __init__(
        self,
        registrations: RegistrationRepository,
        accounts: AccountRepository,
        employees: EmployeeRepository,
        notifications: Optional[NotificationService] = None,
    ):
        self._registrations = registrations
        self._accounts = accounts
        self._employees = employees
        self._notifications = notifications

    def list_pending(self) -> Sequence[PendingRegistration]:
        return [r for r in self._registrations.list() if r.status == RegistrationStatus.PENDING]

    def create_pending_registration(
        self,
        *,
        name: str,
        email: str,
        password: str,
        position: Optional[str] = None,
        department: Optional[str] = None,
        branch: Optional[str] = None,
        hire_date: Optional[str] = None,
        role: str = Role.EMPLOYEE.value,
        signature: Optional[str] = None,
        username: Optional[str] = None,
        contact: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PendingRegistration:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", 6)

        if self._accounts.get_by_email(email):
            raise ValidationError("Email already registered")
        if any(r.email.lower() == email for r in self._registrations.list()):
            raise ValidationError("A registration for this email is already pending")

        now = now or now_utc()
        registration_id = timestamp_id(now)
        taken = {r.id for r in self._registrations.list()}
        while registration_id in taken:
            registration_id += 1

        registration = PendingRegistration(
            id=registration_id,
            name=name,
            email=email,
            position=position,
            department=department,
            branch=branch,
            hire_date=hire_date,
            role=role or Role.EMPLOYEE.value,
            status=RegistrationStatus.PENDING,
            submitted_at=to_iso(now),
            signature=signature,
            username=username,
            contact=contact,
            password=generate_password_hash(password),
        )
        self._registrations.put(registration)
        logger.info("Registration %s created for %s", registration.id, email)
        return registration

    def approve_registration(self, registration_id: int, *, now: Optional[datetime] = None) -> RegistrationOutcome:
        registration = self._registrations.get(registration_id)
        if not registration:
            return RegistrationOutcome(False, "Registration not found")

        accounts = self._accounts.list()
        account_id = max([a.id for a in accounts] + [0]) + 1
        employee_id = max([a.employee_id for a in accounts if a.employee_id is not None] + [FIRST_EMPLOYEE_ID]) + 1
        stamp = to_iso(now or now_utc())

        self._accounts.put(
            Account(
                id=account_id,
                employee_id=employee_id,
                email=registration.email,
                password=registration.password,
                role=registration.role,
                username=registration.username,
                name=registration.name,
                position=registration.position,
                department=registration.department,
                branch=registration.branch,
                contact=registration.contact or "",
                hire_date=registration.hire_date,
                signature=registration.signature,
                is_active=True,
                approved_date=stamp,
                updated_at=stamp,
            )
        )
        self._employees.put(
            Employee(
                id=employee_id,
                name=registration.name,
                email=registration.email,
                position=registration.position,
                department=registration.department,
                branch=registration.branch,
                role=registration.role,
                hire_date=registration.hire_date,
                contact=registration.contact or "",
                signature=registration.signature,
                username=registration.username,
                is_active=True,
                approved_date=stamp,
                updated_at=stamp,
            )
        )
        self._registrations.delete(registration.id)
        self._registrations.record_approved(registration.id)

        if self._notifications:
            self._notifications.create(
                message=f"Registration approved for {registration.name}",
                roles=(Role.ADMIN.value, Role.HR.value),
                type=NotificationType.SUCCESS,
            )
        logger.info("Registration %s approved as account %s", registration.id, account_id)
        return RegistrationOutcome(True, "Registration approved successfully", account_id, employee_id)

    def reject_registration(self, registration_id: int) -> RegistrationOutcome:
        removed = self._registrations.delete(registration_id)
        self._registrations.record_rejected(registration_id)
        if removed:
            logger.info("Registration %s rejected", registration_id)
        return RegistrationOutcome(True, "Registration rejected")
