from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Mapping, Optional

from ..common.records import attribute_updates
from ..core.enums import SubmissionStatus
from ..core.exceptions import AccountSuspendedError, DomainError
from ..dashboards.admin import AdminDashboard
from ..employees.repository import AccountRepository
from ..employees.service import EmployeeService
from ..evaluations.scoring import submission_rating
from ..evaluations.service import SubmissionService
from ..fixtures.loader import FixtureLoader
from ..fixtures.seed import force_reinitialize_accounts, reset_all_data
from ..notifications.service import NotificationService
from ..registrations.service import RegistrationService
from ..storage.base import LocalStorage
from ..users.service import AuthService

logger = logging.getLogger(__name__)


def best_effort(default: Callable[[], Any]):
    """Log any failure and return a fresh default instead of raising."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except DomainError as e:
                logger.warning("%s rejected: %s", fn.__name__, e)
                return default()
            except Exception:
                logger.exception("%s failed", fn.__name__)
                return default()

        return wrapper

    return decorator


def _failure(message: str = "Operation failed") -> Callable[[], dict]:
    return lambda: {"success": False, "message": message}


def _public_account(row: dict) -> dict:
    row = dict(row)
    row.pop("password", None)
    return row


class ClientDataService:
    """Backend-shaped facade over storage and fixtures.

    Returns camelCase dicts. Nothing here raises: errors are logged and the
    caller gets an empty list, None, or a {"success": False} dict.
    """

    def __init__(
        self,
        *,
        storage: LocalStorage,
        fixtures: FixtureLoader,
        accounts: AccountRepository,
        auth: AuthService,
        employees: EmployeeService,
        submissions: SubmissionService,
        registrations: RegistrationService,
        notifications: NotificationService,
        admin_dashboard: AdminDashboard,
    ):
        self._storage = storage
        self._fixtures = fixtures
        self._accounts = accounts
        self._auth = auth
        self._employees = employees
        self._submissions = submissions
        self._registrations = registrations
        self._notifications = notifications
        self._admin_dashboard = admin_dashboard

    # Employees

    @best_effort(list)
    def get_employees(self) -> list[dict]:
        return [e.to_dict() for e in self._employees.list_employees()]

    @best_effort(lambda: None)
    def get_employee(self, employee_id: int) -> Optional[dict]:
        employee = self._employees.get_employee(employee_id)
        return employee.to_dict() if employee else None

    @best_effort(lambda: None)
    def update_employee(self, employee_id: int, updates: Mapping[str, Any]) -> Optional[dict]:
        return self._employees.update_employee(employee_id, attribute_updates(updates)).to_dict()

    # Submissions

    @best_effort(list)
    def get_submissions(self) -> list[dict]:
        return [s.to_dict() for s in self._submissions.list_submissions()]

    @best_effort(lambda: None)
    def create_submission(self, submission: Mapping[str, Any]) -> Optional[dict]:
        data = attribute_updates(submission)
        created = self._submissions.create_submission(
            employee_name=data.get("employee_name") or "",
            evaluation_data=data.get("evaluation_data") or {},
            employee_id=data.get("employee_id"),
            employee_email=data.get("employee_email"),
            evaluator_id=data.get("evaluator_id"),
            evaluator_name=data.get("evaluator_name") or data.get("evaluator"),
            period=data.get("period"),
            category=data.get("category"),
        )
        return created.to_dict()

    @best_effort(lambda: None)
    def update_submission(self, submission_id: int, updates: Mapping[str, Any]) -> Optional[dict]:
        updated = self._submissions.update_submission(submission_id, attribute_updates(updates))
        return updated.to_dict() if updated else None

    # Static data

    @best_effort(list)
    def get_branches(self) -> list[dict]:
        return self._fixtures.branches()

    @best_effort(list)
    def get_branch_codes(self) -> list[dict]:
        return self._fixtures.branch_codes()

    @best_effort(list)
    def get_departments(self) -> list[dict]:
        return self._fixtures.departments()

    @best_effort(list)
    def get_positions(self) -> list[dict]:
        return self._fixtures.positions()

    # Registrations

    @best_effort(list)
    def get_pending_registrations(self) -> list[dict]:
        return [r.public_dict() for r in self._registrations.list_pending()]

    @best_effort(lambda: None)
    def create_pending_registration(self, registration: Mapping[str, Any]) -> Optional[dict]:
        data = attribute_updates(registration)
        created = self._registrations.create_pending_registration(
            name=data.get("name") or "",
            email=data.get("email") or "",
            password=data.get("password") or "",
            position=data.get("position"),
            department=data.get("department"),
            branch=data.get("branch"),
            hire_date=data.get("hire_date"),
            role=data.get("role") or "employee",
            signature=data.get("signature"),
            username=data.get("username"),
            contact=data.get("contact"),
        )
        return created.public_dict()

    @best_effort(_failure("Failed to approve registration"))
    def approve_registration(self, registration_id: int) -> dict:
        return self._registrations.approve_registration(registration_id).to_dict()

    @best_effort(_failure("Failed to reject registration"))
    def reject_registration(self, registration_id: int) -> dict:
        return self._registrations.reject_registration(registration_id).to_dict()

    # Accounts / auth

    @best_effort(list)
    def get_accounts(self) -> list[dict]:
        return [_public_account(a.to_dict()) for a in self._accounts.list()]

    def login(self, email: str, password: str) -> dict:
        try:
            user = self._auth.login(email, password)
        except AccountSuspendedError as e:
            return {"success": False, "message": str(e), "suspended": True, "suspensionData": e.to_dict()}
        except DomainError as e:
            return {"success": False, "message": str(e)}
        except Exception:
            logger.exception("login failed")
            return {"success": False, "message": "Login failed"}
        return {"success": True, "user": user.to_dict()}

    # Dashboards

    @best_effort(dict)
    def get_dashboard_data(self) -> dict:
        overview = self._admin_dashboard.overview()
        return {
            "totalEmployees": overview["totalEmployees"],
            "totalSubmissions": overview["totalSubmissions"],
            "pendingRegistrations": overview["pendingRegistrations"],
            "completedEvaluations": overview["completedEvaluations"],
        }

    @best_effort(lambda: {"totalEvaluations": 0, "averageRating": 0.0, "completedEvaluations": 0})
    def get_employee_metrics(self) -> dict:
        submissions = self._submissions.list_submissions()
        ratings = [submission_rating(s) for s in submissions]
        return {
            "totalEvaluations": len(submissions),
            "averageRating": sum(ratings) / len(ratings) if ratings else 0.0,
            "completedEvaluations": sum(1 for s in submissions if s.status == SubmissionStatus.COMPLETED.value),
        }

    # Notifications

    @best_effort(list)
    def get_notifications(self, role: str) -> list[dict]:
        return [n.to_dict() for n in self._notifications.list_for_role(role)]

    @best_effort(lambda: None)
    def create_notification(self, notification: Mapping[str, Any]) -> Optional[dict]:
        created = self._notifications.create(
            message=notification.get("message") or "",
            roles=notification.get("roles") or (),
            type=notification.get("type") or "info",
            action_url=notification.get("actionUrl"),
        )
        return created.to_dict()

    # Maintenance

    @best_effort(lambda: False)
    def reset_all_data(self) -> bool:
        reset_all_data(self._storage, self._fixtures)
        return True

    @best_effort(lambda: False)
    def force_reinitialize_accounts(self) -> bool:
        force_reinitialize_accounts(self._storage, self._fixtures)
        return True
