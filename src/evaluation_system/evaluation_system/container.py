from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .client_data.service import ClientDataService
from .dashboards.admin import AdminDashboard
from .dashboards.cache import ViewCache
from .dashboards.evaluator import EvaluatorDashboard
from .dashboards.hr import HRDashboard
from .database.connection import DBConfig, DatabaseConnection
from .employees.service import EmployeeService
from .employees.storage_repository import StorageAccountRepository, StorageEmployeeRepository
from .evaluations.service import SubmissionService
from .evaluations.storage_repository import (
    StorageApprovalDataRepository,
    StorageSeenSubmissionRepository,
    StorageSubmissionRepository,
)
from .fixtures.loader import FixtureLoader
from .notifications.service import NotificationService
from .notifications.storage_repository import StorageNotificationRepository
from .registrations.service import RegistrationService
from .registrations.storage_repository import StorageRegistrationRepository
from .storage.base import LocalStorage
from .storage.json_file import JsonFileStorage
from .storage.memory import MemoryStorage
from .storage.mysql_storage import MySQLStorage
from .suspensions.service import SuspensionService
from .suspensions.storage_repository import StorageSuspensionRepository
from .users.service import AuthService, PasswordGate


@dataclass(frozen=True)
class Container:
    storage: LocalStorage
    fixtures: FixtureLoader

    employees_repo: StorageEmployeeRepository
    accounts_repo: StorageAccountRepository
    submissions_repo: StorageSubmissionRepository
    suspensions_repo: StorageSuspensionRepository
    registrations_repo: StorageRegistrationRepository
    notifications_repo: StorageNotificationRepository

    password_gate: PasswordGate
    auth_service: AuthService
    employee_service: EmployeeService
    suspension_service: SuspensionService
    notification_service: NotificationService
    registration_service: RegistrationService
    submission_service: SubmissionService

    view_cache: ViewCache
    admin_dashboard: AdminDashboard
    hr_dashboard: HRDashboard
    evaluator_dashboard: EvaluatorDashboard

    client_data: ClientDataService


def build_storage(*, backend: str = "memory", path: Optional[str] = None, db_config: Optional[dict] = None) -> LocalStorage:
    backend = (backend or "memory").strip().lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "json":
        if not path:
            raise ValueError("STORAGE_PATH is required for the json storage backend")
        return JsonFileStorage(path)
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLStorage(conn)
    raise ValueError(f"Unknown storage backend: {backend}")


def build_container(
    *,
    storage: Optional[LocalStorage] = None,
    storage_backend: str = "memory",
    storage_path: Optional[str] = None,
    db_config: Optional[dict] = None,
    fixtures_dir: Optional[str] = None,
) -> Container:
    if storage is None:
        storage = build_storage(backend=storage_backend, path=storage_path, db_config=db_config)
    fixtures = FixtureLoader(fixtures_dir)

    employees_repo = StorageEmployeeRepository(storage)
    accounts_repo = StorageAccountRepository(storage)
    submissions_repo = StorageSubmissionRepository(storage)
    suspensions_repo = StorageSuspensionRepository(storage)
    registrations_repo = StorageRegistrationRepository(storage)
    notifications_repo = StorageNotificationRepository(storage)

    password_gate = PasswordGate(accounts_repo)
    auth_service = AuthService(accounts_repo, employees_repo, suspensions_repo)
    employee_service = EmployeeService(employees_repo, accounts_repo, suspensions_repo, password_gate)
    suspension_service = SuspensionService(suspensions_repo, employees_repo)
    notification_service = NotificationService(notifications_repo)
    registration_service = RegistrationService(registrations_repo, accounts_repo, employees_repo, notification_service)
    submission_service = SubmissionService(
        submissions_repo,
        StorageSeenSubmissionRepository(storage),
        StorageApprovalDataRepository(storage),
        password_gate,
        notification_service,
    )

    view_cache = ViewCache(storage)
    admin_dashboard = AdminDashboard(
        employee_service, suspension_service, registration_service, submission_service, view_cache
    )
    hr_dashboard = HRDashboard(employee_service, submission_service, view_cache)
    evaluator_dashboard = EvaluatorDashboard(submission_service, view_cache)

    client_data = ClientDataService(
        storage=storage,
        fixtures=fixtures,
        accounts=accounts_repo,
        auth=auth_service,
        employees=employee_service,
        submissions=submission_service,
        registrations=registration_service,
        notifications=notification_service,
        admin_dashboard=admin_dashboard,
    )

    return Container(
        storage=storage,
        fixtures=fixtures,
        employees_repo=employees_repo,
        accounts_repo=accounts_repo,
        submissions_repo=submissions_repo,
        suspensions_repo=suspensions_repo,
        registrations_repo=registrations_repo,
        notifications_repo=notifications_repo,
        password_gate=password_gate,
        auth_service=auth_service,
        employee_service=employee_service,
        suspension_service=suspension_service,
        notification_service=notification_service,
        registration_service=registration_service,
        submission_service=submission_service,
        view_cache=view_cache,
        admin_dashboard=admin_dashboard,
        hr_dashboard=hr_dashboard,
        evaluator_dashboard=evaluator_dashboard,
        client_data=client_data,
    )
