from __future__ import annotations

from flask import Flask, request

from ..common.records import attribute_updates
from ..common.web import current_user, json_body, json_errors, login_required, ok, role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", endpoint="employees_list")
    @login_required
    @json_errors
    def employees_list():
        employees = service.filter_employees(
            search=request.args.get("search", ""),
            department=request.args.get("department") or None,
            branch=request.args.get("branch") or None,
            role=request.args.get("role") or None,
        )
        suspended = container.suspension_service.suspended_ids()
        rows = []
        for e in employees:
            row = e.to_dict()
            row["effectiveActive"] = service.is_effectively_active(e, suspended_ids=suspended)
            rows.append(row)
        return ok(rows)

    @app.route("/api/employees/<int:employee_id>", endpoint="employee_detail")
    @login_required
    @json_errors
    def employee_detail(employee_id: int):
        employee = service.get_employee(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return ok(employee.to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="employee_update")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def employee_update(employee_id: int):
        updated = service.update_employee(employee_id, attribute_updates(json_body()))
        return ok(updated.to_dict())

    @app.route("/api/employees/<int:employee_id>/delete", methods=["POST"], endpoint="employee_delete")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def employee_delete(employee_id: int):
        service.delete_employee(
            employee_id=employee_id,
            actor_email=current_user()["email"],
            password=json_body().get("password", ""),
        )
        return ok(message="Employee deleted")
