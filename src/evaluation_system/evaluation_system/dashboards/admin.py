from __future__ import annotations

from typing import Sequence

from ..core.constants import StorageKeys
from ..core.enums import SubmissionStatus, SuspensionStatus
from ..employees.service import EmployeeService
from ..evaluations.service import SubmissionService
from ..registrations.service import RegistrationService
from ..suspensions.service import SuspensionService
from .cache import ViewCache

_PEOPLE_KEYS = (StorageKeys.EMPLOYEES, StorageKeys.DELETED_EMPLOYEES, StorageKeys.SUSPENDED_EMPLOYEES)


class AdminDashboard:
    """Admin overview, user management and suspension lists."""

    def __init__(
        self,
        employees: EmployeeService,
        suspensions: SuspensionService,
        registrations: RegistrationService,
        submissions: SubmissionService,
        cache: ViewCache,
    ):
        self._employees = employees
        self._suspensions = suspensions
        self._registrations = registrations
        self._submissions = submissions
        self._cache = cache

    def overview(self) -> dict:
        return self._cache.get_or_compute(
            "admin.overview",
            _PEOPLE_KEYS + (StorageKeys.PENDING_REGISTRATIONS, StorageKeys.SUBMISSIONS),
            self._compute_overview,
        )

    def _compute_overview(self) -> dict:
        employees = self._employees.list_employees()
        suspended = self._suspensions.suspended_ids()
        active = [e for e in employees if self._employees.is_effectively_active(e, suspended_ids=suspended)]
        submissions = self._submissions.list_submissions()
        return {
            "totalEmployees": len(employees),
            "activeEmployees": len(active),
            "suspendedEmployees": sum(1 for e in employees if e.id in suspended),
            "pendingRegistrations": len(self._registrations.list_pending()),
            "totalSubmissions": len(submissions),
            "completedEvaluations": sum(1 for s in submissions if s.status == SubmissionStatus.COMPLETED.value),
        }

    def users(self) -> Sequence[dict]:
        return self._cache.get_or_compute("admin.users", _PEOPLE_KEYS, self._compute_users)

    def _compute_users(self) -> list[dict]:
        suspended = self._suspensions.suspended_ids()
        out = []
        for e in self._employees.filter_employees():
            if e.id in suspended:
                status = "suspended"
            elif self._employees.is_effectively_active(e, suspended_ids=suspended):
                status = "active"
            else:
                status = "inactive"
            row = e.to_dict()
            row["effectiveStatus"] = status
            out.append(row)
        return out

    def suspension_lists(self) -> dict:
        return self._cache.get_or_compute(
            "admin.suspensions",
            (StorageKeys.SUSPENDED_EMPLOYEES,),
            lambda: {
                "suspended": [r.to_dict() for r in self._suspensions.list(status=SuspensionStatus.SUSPENDED)],
                "pendingReview": [r.to_dict() for r in self._suspensions.list(status=SuspensionStatus.PENDING_REVIEW)],
                "reinstated": [r.to_dict() for r in self._suspensions.list(status=SuspensionStatus.REINSTATED)],
            },
        )
