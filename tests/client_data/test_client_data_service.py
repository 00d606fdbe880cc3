from __future__ import annotations

from src.evaluation_system.evaluation_system.core.constants import StorageKeys
from src.evaluation_system.evaluation_system.storage.base import read_json, write_json


def test_static_data(container):
    data = container.client_data
    assert data.get_departments()[0] == {"id": "1", "name": "Human Resources"}
    assert {"id": "cebu", "name": "Cebu Branch"} in data.get_branches()
    assert data.get_branch_codes()[0] == {"id": "HO-001", "name": "HO-001"}
    assert {"id": "HR Manager", "name": "HR Manager"} in data.get_positions()


def test_accounts_never_expose_passwords(container):
    accounts = container.client_data.get_accounts()
    assert len(accounts) == 6
    assert all("password" not in a for a in accounts)


def test_login_success_and_failures(container):
    data = container.client_data
    result = data.login("hr@smct.com", "hr123")
    assert result["success"] is True
    assert result["user"]["name"] == "Maria Santos"

    assert data.login("hr@smct.com", "nope") == {"success": False, "message": "Invalid credentials"}

    container.suspension_service.suspend(employee_id=1003, reason="Audit", duration=None, suspended_by="Maria Santos")
    blocked = data.login("john.doe@smct.com", "emp123")
    assert blocked["suspended"] is True
    assert blocked["suspensionData"]["reason"] == "Audit"


def test_employee_reads_and_updates(container):
    data = container.client_data
    assert len(data.get_employees()) == 5
    assert data.get_employee(1003)["email"] == "john.doe@smct.com"
    assert data.get_employee(4242) is None

    updated = data.update_employee(1003, {"position": "Senior Sales Associate"})
    assert updated["position"] == "Senior Sales Associate"
    assert data.update_employee(4242, {"position": "x"}) is None


def test_submissions_round_trip(container):
    data = container.client_data
    created = data.create_submission(
        {"employeeName": "Jane Smith", "employeeId": 1004, "evaluatorId": 1002, "evaluationData": {}}
    )
    assert created["overallRating"] == "0.0"
    assert created["category"] == "Performance Review"
    assert len(data.get_submissions()) == 2

    assert data.update_submission(created["id"], {"period": "2024-03"})["period"] == "2024-03"
    assert data.update_submission(1, {"period": "2024-03"}) is None
    assert data.update_submission(created["id"], {"bogusField": 1}) is None


def test_invalid_input_returns_none_instead_of_raising(container):
    assert container.client_data.create_submission({"employeeName": ""}) is None
    assert container.client_data.create_pending_registration({"name": "x", "email": "bad", "password": "secret1"}) is None


def test_registration_flow(container):
    data = container.client_data
    created = data.create_pending_registration(
        {"name": "Liza Tan", "email": "liza@smct.com", "password": "secret1", "branch": "davao"}
    )
    assert "password" not in created
    assert len(data.get_pending_registrations()) == 2

    assert data.approve_registration(created["id"])["success"] is True
    assert data.approve_registration(created["id"]) == {"success": False, "message": "Registration not found"}
    assert data.reject_registration(1706745600000) == {"success": True, "message": "Registration rejected"}
    assert data.get_pending_registrations() == []


def test_dashboard_and_metrics(container):
    data = container.client_data
    assert data.get_dashboard_data() == {
        "totalEmployees": 5,
        "totalSubmissions": 1,
        "pendingRegistrations": 1,
        "completedEvaluations": 1,
    }
    metrics = data.get_employee_metrics()
    assert metrics["totalEvaluations"] == 1
    assert metrics["completedEvaluations"] == 1
    assert 4.0 <= metrics["averageRating"] <= 4.2


def test_notifications(container):
    data = container.client_data
    created = data.create_notification({"message": "Quarterly reviews open", "roles": ["all"], "type": "info"})
    assert created["message"] == "Quarterly reviews open"
    assert [n["message"] for n in data.get_notifications("employee")] == ["Quarterly reviews open"]
    assert data.create_notification({"message": "", "roles": ["hr"]}) is None


def test_reset_restores_fixtures(container):
    data = container.client_data
    data.update_employee(1003, {"position": "Changed"})
    data.reject_registration(1706745600000)

    assert data.reset_all_data() is True
    assert data.get_employee(1003)["position"] == "Sales Associate"
    assert len(data.get_pending_registrations()) == 1


def test_force_reinitialize_accounts(container):
    container.storage.set_item(StorageKeys.ACCOUNTS, "[]")
    assert container.client_data.get_accounts() == []

    assert container.client_data.force_reinitialize_accounts() is True
    assert len(read_json(container.storage, StorageKeys.ACCOUNTS, [])) == 6


def test_corrupt_storage_degrades(container):
    container.storage.set_item(StorageKeys.EMPLOYEES, "{not json")
    assert container.client_data.get_employees() == []


def test_rows_without_id_are_skipped(container):
    employees = read_json(container.storage, StorageKeys.EMPLOYEES, [])
    write_json(container.storage, StorageKeys.EMPLOYEES, employees + [{"name": "No Id"}])
    submissions = read_json(container.storage, StorageKeys.SUBMISSIONS, [])
    write_json(container.storage, StorageKeys.SUBMISSIONS, submissions + [{"employeeName": "No Id"}])

    assert len(container.client_data.get_employees()) == 5
    assert [s["id"] for s in container.client_data.get_submissions()] == [1704067200000]
    assert container.admin_dashboard.overview()["totalSubmissions"] == 1
