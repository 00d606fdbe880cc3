from __future__ import annotations

import pytest

from src.evaluation_system.evaluation_system.core.constants import StorageKeys
from src.evaluation_system.evaluation_system.core.exceptions import (
    NotFoundError,
    PasswordConfirmationError,
    ValidationError,
)
from src.evaluation_system.evaluation_system.storage.base import read_json


def test_seeded_employees_exclude_admin(container):
    names = sorted(e.name for e in container.employee_service.list_employees())
    assert "System Administrator" not in names
    assert "John Doe" in names


def test_update_stamps_and_syncs_account(container, fixed_now):
    service = container.employee_service
    updated = service.update_employee(1003, {"position": "Senior Sales Associate", "signature": "sig"}, now=fixed_now)

    assert updated.position == "Senior Sales Associate"
    assert updated.updated_at == "2024-03-15T12:00:00.000Z"
    account = container.accounts_repo.get_for_employee(1003)
    assert account.position == "Senior Sales Associate"
    assert account.signature == "sig"


def test_update_rejects_unknown_fields_and_missing_employee(container):
    with pytest.raises(ValidationError):
        container.employee_service.update_employee(1003, {"salary": 1})
    with pytest.raises(NotFoundError):
        container.employee_service.update_employee(9999, {"name": "Nobody"})


def test_get_employee_falls_back_to_account_signature(container):
    account = container.accounts_repo.get_for_employee(1004)
    from dataclasses import replace

    container.accounts_repo.put(replace(account, signature="acct-sig"))
    assert container.employee_service.get_employee(1004).signature == "acct-sig"


def test_soft_delete_is_password_gated_and_idempotent(container):
    service = container.employee_service
    with pytest.raises(PasswordConfirmationError, match="Incorrect password"):
        service.delete_employee(employee_id=1004, actor_email="admin@smct.com", password="nope")

    service.delete_employee(employee_id=1004, actor_email="admin@smct.com", password="admin123")
    service.delete_employee(employee_id=1004, actor_email="admin@smct.com", password="admin123")

    assert read_json(container.storage, StorageKeys.DELETED_EMPLOYEES, []) == [1004]
    assert 1004 not in [e.id for e in service.list_employees()]
    assert 1004 in [e.id for e in service.list_employees(include_deleted=True)]


def test_delete_unknown_actor(container):
    with pytest.raises(PasswordConfirmationError, match="User account not found"):
        container.employee_service.delete_employee(employee_id=1004, actor_email="ghost@smct.com", password="x")


def test_effective_active_combines_flag_and_suspension(container, fixed_now):
    service = container.employee_service
    john = service.get_employee(1003)
    mark = service.get_employee(1005)

    assert service.is_effectively_active(john)
    assert not service.is_effectively_active(mark)

    container.suspension_service.suspend(
        employee_id=1003, reason="Policy violation", duration="7 days", suspended_by="Admin", now=fixed_now
    )
    assert not service.is_effectively_active(john)

    container.suspension_service.reinstate(employee_id=1003, reinstated_by="Admin", now=fixed_now)
    assert service.is_effectively_active(john)


def test_filter_employees(container):
    service = container.employee_service
    assert [e.name for e in service.filter_employees(branch="cebu")] == ["John Doe", "Jose Reyes"]
    assert [e.name for e in service.filter_employees(search="SMITH")] == ["Jane Smith"]
    assert [e.name for e in service.filter_employees(role="hr")] == ["Maria Santos"]
    assert service.filter_employees(department="Nope") == []
