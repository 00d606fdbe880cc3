from __future__ import annotations

from flask import Flask, request

from ..common.web import current_user, json_body, json_errors, ok, role_required
from ..container import Container
from ..core.enums import Role, SuspensionStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.suspension_service

    @app.route("/api/suspensions", endpoint="suspensions_list")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def suspensions_list():
        status_s = request.args.get("status")
        try:
            status = SuspensionStatus(status_s) if status_s else None
        except ValueError:
            raise ValidationError("Invalid suspension status")
        records = service.list(status=status, search=request.args.get("search", ""))
        return ok([r.to_dict() for r in records])

    @app.route("/api/suspensions", methods=["POST"], endpoint="suspend_employee")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def suspend_employee():
        body = json_body()
        record = service.suspend(
            employee_id=int(body.get("employeeId") or 0),
            reason=body.get("reason", ""),
            duration=body.get("duration"),
            suspended_by=current_user()["name"],
        )
        return ok(record.to_dict(), 201)

    @app.route("/api/suspensions/<int:employee_id>/review", methods=["POST"], endpoint="suspension_review")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def suspension_review(employee_id: int):
        return ok(service.mark_pending_review(employee_id=employee_id).to_dict())

    @app.route("/api/suspensions/<int:employee_id>/reinstate", methods=["POST"], endpoint="suspension_reinstate")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def suspension_reinstate(employee_id: int):
        record = service.reinstate(employee_id=employee_id, reinstated_by=current_user()["name"])
        return ok(record.to_dict())

    @app.route("/api/suspensions/<int:employee_id>", methods=["DELETE"], endpoint="suspension_delete")
    @role_required(Role.ADMIN)
    @json_errors
    def suspension_delete(employee_id: int):
        service.delete_permanently(employee_id=employee_id)
        return ok(message="Suspension record deleted")
