from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import require_non_empty
from ..core.enums import SuspensionStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import SuspendedEmployee
from .repository import SuspensionRepository

logger = logging.getLogger(__name__)


class SuspensionService:
    """Use case: suspend / review / reinstate employees.

    Records transition in place and are only removed by delete_permanently.
    """

    def __init__(self, suspensions: SuspensionRepository, employees: EmployeeRepository):
        self._suspensions = suspensions
        self._employees = employees

    def suspend(
        self,
        *,
        employee_id: int,
        reason: str,
        duration: Optional[str],
        suspended_by: str,
        now: Optional[datetime] = None,
    ) -> SuspendedEmployee:
        reason = require_non_empty(reason, "Suspension reason")
        employee = self._employees.get(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        record = SuspendedEmployee(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            position=employee.position,
            department=employee.department,
            branch=employee.branch,
            status=SuspensionStatus.SUSPENDED,
            suspension_date=to_iso(now or now_utc()),
            suspension_reason=reason,
            suspension_duration=(duration or "").strip() or None,
            suspended_by=suspended_by,
        )
        self._suspensions.put(record)
        logger.info("Employee %s suspended by %s", employee.id, suspended_by)
        return record

    def _require(self, employee_id: int) -> SuspendedEmployee:
        record = self._suspensions.get(int(employee_id))
        if not record:
            raise NotFoundError("Suspension record not found")
        return record

    def mark_pending_review(self, *, employee_id: int) -> SuspendedEmployee:
        record = self._require(employee_id)
        if record.status != SuspensionStatus.SUSPENDED:
            raise ValidationError("Only suspended employees can be sent for review")
        updated = replace(record, status=SuspensionStatus.PENDING_REVIEW)
        return self._suspensions.put(updated)

    def reinstate(self, *, employee_id: int, reinstated_by: str, now: Optional[datetime] = None) -> SuspendedEmployee:
        record = self._require(employee_id)
        if record.status == SuspensionStatus.REINSTATED:
            raise ValidationError("Employee is already reinstated")
        updated = replace(
            record,
            status=SuspensionStatus.REINSTATED,
            reinstated_date=to_iso(now or now_utc()),
            reinstated_by=reinstated_by,
        )
        self._suspensions.put(updated)
        logger.info("Employee %s reinstated by %s", record.id, reinstated_by)
        return updated

    def delete_permanently(self, *, employee_id: int) -> None:
        if not self._suspensions.delete(int(employee_id)):
            raise NotFoundError("Suspension record not found")

    def is_suspended(self, *, employee_id: Optional[int] = None, email: Optional[str] = None) -> bool:
        record = None
        if employee_id is not None:
            record = self._suspensions.get(int(employee_id))
        if record is None and email:
            record = self._suspensions.find_by_email(email)
        return bool(record and record.is_active_suspension)

    def suspended_ids(self) -> set[int]:
        return {r.id for r in self._suspensions.list() if r.is_active_suspension}

    def list(self, *, status: Optional[SuspensionStatus] = None, search: str = "") -> Sequence[SuspendedEmployee]:
        needle = (search or "").strip().lower()
        out = []
        for r in self._suspensions.list():
            if status is not None and r.status != status:
                continue
            if needle and needle not in r.name.lower() and needle not in r.email.lower():
                continue
            out.append(r)
        return out
