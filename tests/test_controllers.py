from __future__ import annotations

SEEDED_SUBMISSION = 1704067200000


def test_login_me_logout(client, login):
    res = login("hr@smct.com", "hr123")
    assert res.status_code == 200
    assert res.get_json()["data"]["name"] == "Maria Santos"

    me = client.get("/api/auth/me").get_json()
    assert me["data"]["role"] == "hr"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_bad_login(login):
    res = login("hr@smct.com", "wrong")
    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Invalid credentials"}


def test_suspended_login_is_forbidden(client, container, login):
    container.suspension_service.suspend(employee_id=1004, reason="Audit", duration=None, suspended_by="HR")
    res = login("jane.smith@smct.com", "emp123")
    assert res.status_code == 403
    body = res.get_json()
    assert body["suspended"] is True
    assert body["suspensionData"]["reason"] == "Audit"


def test_endpoints_require_session(client):
    assert client.get("/api/submissions").status_code == 401
    assert client.get("/api/dashboard/hr").status_code == 401


def test_role_checks(client, login):
    login("john.doe@smct.com", "emp123")
    assert client.get("/api/dashboard/admin").status_code == 403
    assert client.post("/api/submissions", json={"employeeName": "x"}).status_code == 403
    assert client.post("/api/admin/reset").status_code == 403


def test_employee_sees_and_signs_own_evaluation(client, login):
    login("john.doe@smct.com", "emp123")
    rows = client.get("/api/submissions").get_json()["data"]
    assert [r["id"] for r in rows] == [SEEDED_SUBMISSION]
    assert rows[0]["approvalStatus"] == "pending"

    signed = client.post(f"/api/submissions/{SEEDED_SUBMISSION}/sign", json={"signature": "sig-john"})
    assert signed.status_code == 200
    assert signed.get_json()["data"]["approvalStatus"] == "fully_approved"


def test_employee_cannot_sign_someone_elses_evaluation(client, login):
    login("jane.smith@smct.com", "emp123")
    res = client.post(f"/api/submissions/{SEEDED_SUBMISSION}/sign", json={"signature": "sig"})
    assert res.status_code == 404


def test_hr_records_and_filters(client, login):
    login("hr@smct.com", "hr123")
    rows = client.get("/api/submissions").get_json()["data"]
    assert rows[0]["quarter"] == "Q1 2024"
    assert rows[0]["highlight"] in {"old", "new", "recent"}

    assert client.get("/api/submissions?status=fully_approved").get_json()["data"] == []
    assert client.get("/api/submissions?status=bogus").status_code == 400
    assert len(client.get("/api/submissions?search=jose").get_json()["data"]) == 1


def test_submission_detail_and_missing(client, login):
    login("evaluator@smct.com", "eval123")
    detail = client.get(f"/api/submissions/{SEEDED_SUBMISSION}").get_json()["data"]
    assert set(detail["categoryScores"]) == {
        "job_knowledge",
        "quality_of_work",
        "adaptability",
        "teamwork",
        "reliability",
        "ethical",
        "customer_service",
    }
    assert len(detail["breakdown"]) == 7
    assert detail["ratingLabel"] == "Exceeds Expectations"
    assert client.get("/api/submissions/1").status_code == 404


def test_evaluator_creates_and_deletes_submission(client, login):
    login("evaluator@smct.com", "eval123")
    res = client.post(
        "/api/submissions",
        json={"employeeName": "Jane Smith", "employeeId": 1004, "evaluationData": {"jobKnowledgeScore1": 5}},
    )
    assert res.status_code == 201
    created = res.get_json()["data"]
    assert created["evaluatorId"] == 1002
    assert created["overallRating"] == "1.0"

    wrong = client.post(f"/api/submissions/{created['id']}/delete", json={"password": "nope"})
    assert wrong.status_code == 403
    deleted = client.post(f"/api/submissions/{created['id']}/delete", json={"password": "eval123"})
    assert deleted.status_code == 200


def test_static_data_is_public(client):
    departments = client.get("/api/data/departments").get_json()["data"]
    assert departments[0]["name"] == "Human Resources"
    assert len(client.get("/api/data/branch-codes").get_json()["data"]) == 4


def test_registration_flow(client, login):
    res = client.post(
        "/api/registrations",
        json={"name": "Liza Tan", "email": "liza@smct.com", "password": "secret1", "hireDate": "2024-03-01"},
    )
    assert res.status_code == 201
    registration_id = res.get_json()["data"]["id"]

    login("admin@smct.com", "admin123")
    pending = client.get("/api/registrations").get_json()["data"]
    assert {r["name"] for r in pending} == {"Ana Lopez", "Liza Tan"}

    approved = client.post(f"/api/registrations/{registration_id}/approve").get_json()
    assert approved["success"] is True
    assert approved["employeeId"] == 1006
    assert client.post(f"/api/registrations/{registration_id}/approve").status_code == 404

    client.post("/api/auth/logout")
    assert login("liza@smct.com", "secret1").status_code == 200


def test_notifications_for_role(client, login):
    login("hr@smct.com", "hr123")
    created = client.post("/api/notifications", json={"message": "Reviews due Friday", "roles": ["all"]})
    assert created.status_code == 201
    notification_id = created.get_json()["data"]["id"]

    listing = client.get("/api/notifications").get_json()
    assert listing["unread"] == 1
    client.post(f"/api/notifications/{notification_id}/read")
    assert client.get("/api/notifications").get_json()["unread"] == 0


def test_dashboards(client, login):
    login("admin@smct.com", "admin123")
    admin = client.get("/api/dashboard/admin").get_json()["data"]
    assert admin["overview"]["totalEmployees"] == 5

    hr = client.get("/api/dashboard/hr").get_json()["data"]
    assert {g["name"] for g in hr["branches"]} == {"cebu", "davao", "head-office"}

    client.post("/api/auth/logout")
    login("evaluator@smct.com", "eval123")
    evaluator = client.get("/api/dashboard/evaluator").get_json()["data"]
    assert [r["id"] for r in evaluator["submissions"]] == [SEEDED_SUBMISSION]
    assert list(evaluator["quarterlyPerformance"]) == ["John Doe"]


def test_employee_update_and_soft_delete(client, login):
    login("hr@smct.com", "hr123")
    res = client.patch("/api/employees/1003", json={"position": "Team Lead"})
    assert res.get_json()["data"]["position"] == "Team Lead"
    assert client.patch("/api/employees/1003", json={"salary": 1}).status_code == 400

    assert client.post("/api/employees/1004/delete", json={"password": ""}).status_code == 403
    assert client.post("/api/employees/1004/delete", json={"password": "hr123"}).status_code == 200
    names = [e["name"] for e in client.get("/api/employees").get_json()["data"]]
    assert "Jane Smith" not in names


def test_admin_reset(client, container, login):
    login("admin@smct.com", "admin123")
    container.submission_service.delete_submission(
        submission_id=SEEDED_SUBMISSION, actor_email="admin@smct.com", password="admin123"
    )
    assert client.post("/api/admin/reset").get_json() == {"success": True}
    assert container.submission_service.get(SEEDED_SUBMISSION) is not None


def test_employee_cannot_read_someone_elses_evaluation(client, login):
    login("jane.smith@smct.com", "emp123")
    assert client.get(f"/api/submissions/{SEEDED_SUBMISSION}").status_code == 404

    client.post("/api/auth/logout")
    login("john.doe@smct.com", "emp123")
    assert client.get(f"/api/submissions/{SEEDED_SUBMISSION}").status_code == 200


def test_only_the_authoring_evaluator_countersigns(client, container, login):
    other = container.submission_service.create_submission(
        employee_name="Jane Smith", employee_id=1004, evaluator_id=1001, evaluation_data={}
    )
    login("evaluator@smct.com", "eval123")
    assert client.post(f"/api/submissions/{other.id}/sign", json={"signature": "sig"}).status_code == 403
    assert container.submission_service.get(other.id).evaluator_signature is None

    own = client.post(f"/api/submissions/{SEEDED_SUBMISSION}/sign", json={"signature": "sig-eval-2"})
    assert own.status_code == 200

    client.post("/api/auth/logout")
    login("hr@smct.com", "hr123")
    assert client.post(f"/api/submissions/{other.id}/sign", json={"signature": "sig-hr"}).status_code == 200


def test_hr_evaluation_records(client, login):
    login("hr@smct.com", "hr123")
    rows = client.get("/api/dashboard/hr/records?quarter=Q1").get_json()["data"]
    assert [r["id"] for r in rows] == [SEEDED_SUBMISSION]
    assert rows[0]["approvalStatus"] == "pending"

    assert client.get("/api/dashboard/hr/records?status=fully_approved").get_json()["data"] == []
    assert client.get("/api/dashboard/hr/records?search=nobody").get_json()["data"] == []
    assert client.get("/api/dashboard/hr/records?status=bogus").status_code == 400

    client.post("/api/auth/logout")
    login("evaluator@smct.com", "eval123")
    assert client.get("/api/dashboard/hr/records").status_code == 403
