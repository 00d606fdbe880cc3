from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user, json_body, json_errors, login_required, ok, role_required
from ..container import Container
from ..core.enums import ApprovalStatus, ApprovalView, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..storage.collection import same_id
from .model import Submission
from .scoring import calculate_category_scores, rating_label, submission_rating, weighted_breakdown

_STAFF = (Role.ADMIN, Role.HR, Role.EVALUATOR)


def _enum_arg(enum_cls, name: str):
    value = request.args.get(name)
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value}")


def _is_subject(submission: Submission, user: dict) -> bool:
    owner_email = (submission.employee_email or submission.evaluation_data.get("employeeEmail") or "").lower()
    return owner_email == (user.get("email") or "").lower() or same_id(submission.employee_id, user.get("id"))


def register(app: Flask, container: Container) -> None:
    service = container.submission_service

    @app.route("/api/submissions", endpoint="submissions_list")
    @login_required
    @json_errors
    def submissions_list():
        user = current_user()
        if user["role"] == Role.EMPLOYEE.value:
            own = service.list_for_employee(email=user["email"], employee_id=user["id"])
            return ok([s.to_dict() for s in own])

        records = service.records_view(
            search=request.args.get("search", ""),
            approval_status=_enum_arg(ApprovalStatus, "status"),
            quarter=request.args.get("quarter") or None,
            evaluator_id=user["id"] if user["role"] == Role.EVALUATOR.value else None,
            view=_enum_arg(ApprovalView, "view") or ApprovalView.RECORDS,
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/submissions/<int:submission_id>", endpoint="submission_detail")
    @login_required
    @json_errors
    def submission_detail(submission_id: int):
        user = current_user()
        submission = service.get(submission_id)
        if not submission:
            raise NotFoundError("Evaluation record not found")
        if user["role"] == Role.EMPLOYEE.value and not _is_subject(submission, user):
            raise NotFoundError("Evaluation record not found")
        rating = submission_rating(submission)
        data = submission.to_dict()
        data["categoryScores"] = calculate_category_scores(submission.scores)
        data["breakdown"] = weighted_breakdown(submission.scores)
        data["rating"] = rating
        data["ratingLabel"] = rating_label(rating)
        return ok(data)

    @app.route("/api/submissions", methods=["POST"], endpoint="submission_create")
    @role_required(*_STAFF)
    @json_errors
    def submission_create():
        body = json_body()
        user = current_user()
        submission = service.create_submission(
            employee_name=body.get("employeeName", ""),
            evaluation_data=body.get("evaluationData") or {},
            employee_id=body.get("employeeId"),
            employee_email=body.get("employeeEmail"),
            evaluator_id=user["id"],
            evaluator_name=user["name"],
            period=body.get("period"),
            category=body.get("category"),
        )
        return ok(submission.to_dict(), 201)

    @app.route("/api/submissions/<int:submission_id>/sign", methods=["POST"], endpoint="submission_sign")
    @login_required
    @json_errors
    def submission_sign(submission_id: int):
        user = current_user()
        signature = json_body().get("signature") or user.get("signature") or ""
        if user["role"] == Role.EMPLOYEE.value:
            submission = service.get(submission_id, view=ApprovalView.EMPLOYEE_HISTORY)
            if not submission or not _is_subject(submission, user):
                raise NotFoundError("Evaluation record not found")
            signed = service.sign_as_employee(submission_id, signature=signature, employee_name=user["name"])
        else:
            if user["role"] == Role.EVALUATOR.value:
                submission = service.get(submission_id)
                if not submission:
                    raise NotFoundError("Evaluation record not found")
                if not same_id(submission.evaluator_id, user["id"]):
                    raise AuthorizationError("Only the evaluator who wrote this evaluation can sign it")
            signed = service.sign_as_evaluator(submission_id, signature=signature)
        return ok(signed.to_dict())

    @app.route("/api/submissions/<int:submission_id>/seen", methods=["POST"], endpoint="submission_seen")
    @login_required
    @json_errors
    def submission_seen(submission_id: int):
        return ok(marked=service.mark_seen(submission_id))

    @app.route("/api/submissions/<int:submission_id>/delete", methods=["POST"], endpoint="submission_delete")
    @role_required(*_STAFF)
    @json_errors
    def submission_delete(submission_id: int):
        service.delete_submission(
            submission_id=submission_id,
            actor_email=current_user()["email"],
            password=json_body().get("password", ""),
        )
        return ok(message="Evaluation record deleted")
