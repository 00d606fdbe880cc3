from __future__ import annotations

from datetime import timedelta

import pytest

from src.evaluation_system.evaluation_system.container import build_container
from src.evaluation_system.evaluation_system.core.constants import StorageKeys
from src.evaluation_system.evaluation_system.evaluations.model import EvaluationScores
from src.evaluation_system.evaluation_system.fixtures.seed import seed_storage
from src.evaluation_system.evaluation_system.storage.base import write_json
from src.evaluation_system.evaluation_system.storage.json_file import JsonFileStorage


def _scores(value: float, **extra) -> dict:
    data = EvaluationScores.uniform(value).to_mapping()
    data.update(extra)
    return data


@pytest.fixture
def empty_submissions(container):
    write_json(container.storage, StorageKeys.SUBMISSIONS, [])
    return container


def test_admin_overview(container):
    overview = container.admin_dashboard.overview()
    assert overview == {
        "totalEmployees": 5,
        "activeEmployees": 4,
        "suspendedEmployees": 0,
        "pendingRegistrations": 1,
        "totalSubmissions": 1,
        "completedEvaluations": 1,
    }


def test_admin_overview_recomputes_after_suspension(container):
    container.admin_dashboard.overview()
    assert "admin.overview" in container.view_cache

    container.suspension_service.suspend(employee_id=1003, reason="Policy", duration="7 days", suspended_by="HR")

    assert "admin.overview" not in container.view_cache
    overview = container.admin_dashboard.overview()
    assert overview["suspendedEmployees"] == 1
    assert overview["activeEmployees"] == 3


def test_admin_users_effective_status(container):
    container.suspension_service.suspend(employee_id=1004, reason="Policy", duration=None, suspended_by="HR")
    statuses = {u["name"]: u["effectiveStatus"] for u in container.admin_dashboard.users()}
    assert statuses["Jane Smith"] == "suspended"
    assert statuses["Mark Cruz"] == "inactive"
    assert statuses["John Doe"] == "active"


def test_hr_overview(empty_submissions, fixed_now):
    c = empty_submissions
    service = c.submission_service
    john = service.create_submission(
        employee_name="John Doe",
        employee_id=1003,
        employee_email="john.doe@smct.com",
        evaluator_id=1002,
        evaluation_data=_scores(4, evaluatorSignature="sig-eval"),
        now=fixed_now - timedelta(hours=2),
    )
    service.create_submission(
        employee_name="Jane Smith",
        employee_id=1004,
        evaluator_id=1002,
        evaluation_data=_scores(3),
        now=fixed_now - timedelta(days=3),
    )
    service.sign_as_employee(john.id, signature="sig-john", now=fixed_now)

    assert c.hr_dashboard.overview(now=fixed_now) == {
        "totalEmployees": 5,
        "newSubmissions": 1,
        "averageRating": 3.5,
        "fullyApproved": 1,
    }


def test_department_breakdown_follows_submissions(empty_submissions, fixed_now):
    c = empty_submissions
    before = {g["name"]: g for g in c.hr_dashboard.department_breakdown()}
    assert before["Sales"] == {"name": "Sales", "employees": 1, "averageRating": 0.0}
    assert "hr.departments" in c.view_cache

    c.submission_service.create_submission(
        employee_name="John Doe", employee_id=1003, evaluation_data=_scores(4.5), now=fixed_now
    )

    assert "hr.departments" not in c.view_cache
    after = {g["name"]: g for g in c.hr_dashboard.department_breakdown()}
    assert after["Sales"]["averageRating"] == 4.5
    assert [g["name"] for g in c.hr_dashboard.department_breakdown()] == [
        "Customer Service",
        "Finance",
        "Human Resources",
        "Operations",
        "Sales",
    ]


def test_branch_breakdown(container):
    branches = {g["name"]: g["employees"] for g in container.hr_dashboard.branch_breakdown()}
    assert branches == {"cebu": 2, "davao": 1, "head-office": 2}


def test_performance_reviews_best_first(empty_submissions, fixed_now):
    service = empty_submissions.submission_service
    service.create_submission(employee_name="Low", evaluation_data=_scores(2), now=fixed_now)
    service.create_submission(employee_name="High", evaluation_data=_scores(5), now=fixed_now)
    service.create_submission(employee_name="Unrated", evaluation_data={}, now=fixed_now)

    reviews = empty_submissions.hr_dashboard.performance_reviews(now=fixed_now)
    assert [r.submission.employee_name for r in reviews] == ["High", "Low"]


def test_evaluator_quarterly_performance(empty_submissions, fixed_now):
    c = empty_submissions
    service = c.submission_service
    q1 = {"reviewTypeRegularQ1": True, "coverageFrom": "2024-01-10"}
    service.create_submission(employee_name="John Doe", evaluator_id=1002, evaluation_data=_scores(4, **q1), now=fixed_now)
    service.create_submission(employee_name="John Doe", evaluator_id=1002, evaluation_data=_scores(5, **q1), now=fixed_now)
    service.create_submission(employee_name="Jane Smith", evaluator_id=1002, evaluation_data=_scores(3), now=fixed_now)
    service.create_submission(employee_name="Other", evaluator_id=9999, evaluation_data=_scores(1), now=fixed_now)

    quarterly = c.evaluator_dashboard.quarterly_performance(1002)
    assert quarterly == {"Jane Smith": {"Q1 2024": 3.0}, "John Doe": {"Q1 2024": 4.5}}
    assert "evaluator.quarterly.1002" in c.view_cache


def test_evaluator_new_count(empty_submissions, fixed_now):
    service = empty_submissions.submission_service
    fresh = service.create_submission(
        employee_name="John Doe", evaluator_id=1002, evaluation_data=_scores(4), now=fixed_now - timedelta(hours=1)
    )
    service.create_submission(
        employee_name="Jane Smith", evaluator_id=1002, evaluation_data=_scores(4), now=fixed_now - timedelta(hours=30)
    )
    board = empty_submissions.evaluator_dashboard
    assert board.new_count(1002, now=fixed_now) == 1

    service.mark_seen(fresh.id)
    assert board.new_count(1002, now=fixed_now) == 0


def test_view_cache_recomputes_when_backend_changes_underneath(tmp_path):
    from src.evaluation_system.evaluation_system.dashboards.cache import ViewCache

    path = tmp_path / "local_storage.json"
    ours, theirs = JsonFileStorage(path), JsonFileStorage(path)
    ours.set_item("k", "1")
    cache = ViewCache(ours)
    calls = []

    def compute():
        calls.append(1)
        return ours.get_item("k")

    assert cache.get_or_compute("v", ("k",), compute) == "1"
    assert cache.get_or_compute("v", ("k",), compute) == "1"
    assert len(calls) == 1

    theirs.set_item("k", "2")
    assert cache.get_or_compute("v", ("k",), compute) == "2"
    assert len(calls) == 2


def test_dashboards_follow_writes_from_another_worker(tmp_path, fixed_now):
    path = tmp_path / "local_storage.json"
    worker_a = build_container(storage=JsonFileStorage(path))
    seed_storage(worker_a.storage, worker_a.fixtures)
    worker_b = build_container(storage=JsonFileStorage(path))

    assert worker_b.admin_dashboard.overview()["totalSubmissions"] == 1
    assert list(worker_b.evaluator_dashboard.quarterly_performance(1002)) == ["John Doe"]

    worker_a.submission_service.create_submission(
        employee_name="Jane Smith", employee_id=1004, evaluator_id=1002, evaluation_data=_scores(4), now=fixed_now
    )
    worker_a.suspension_service.suspend(employee_id=1005, reason="Audit", duration=None, suspended_by="HR")

    overview = worker_b.admin_dashboard.overview()
    assert overview["totalSubmissions"] == 2
    assert overview["suspendedEmployees"] == 1
    assert list(worker_b.evaluator_dashboard.quarterly_performance(1002)) == ["Jane Smith", "John Doe"]
