from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user, json_errors, ok, role_required
from ..container import Container
from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/admin", endpoint="dashboard_admin")
    @role_required(Role.ADMIN)
    @json_errors
    def dashboard_admin():
        board = container.admin_dashboard
        return ok(
            {
                "overview": board.overview(),
                "users": board.users(),
                "suspensions": board.suspension_lists(),
            }
        )

    @app.route("/api/dashboard/hr", endpoint="dashboard_hr")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def dashboard_hr():
        board = container.hr_dashboard
        return ok(
            {
                "overview": board.overview(),
                "departments": board.department_breakdown(),
                "branches": board.branch_breakdown(),
                "performanceReviews": [r.to_dict() for r in board.performance_reviews()],
            }
        )

    @app.route("/api/dashboard/hr/records", endpoint="dashboard_hr_records")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def dashboard_hr_records():
        status_s = request.args.get("status")
        try:
            status = ApprovalStatus(status_s) if status_s else None
        except ValueError:
            raise ValidationError(f"Invalid status: {status_s}")
        records = container.hr_dashboard.evaluation_records(
            search=request.args.get("search", ""),
            approval_status=status,
            quarter=request.args.get("quarter") or None,
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/dashboard/evaluator", endpoint="dashboard_evaluator")
    @role_required(Role.EVALUATOR, Role.HR, Role.ADMIN)
    @json_errors
    def dashboard_evaluator():
        board = container.evaluator_dashboard
        evaluator_id = current_user()["id"]
        records = board.submissions(evaluator_id)
        return ok(
            {
                "submissions": [r.to_dict() for r in records],
                "newCount": board.new_count(evaluator_id),
                "quarterlyPerformance": board.quarterly_performance(evaluator_id),
            }
        )
