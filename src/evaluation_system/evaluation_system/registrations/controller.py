from __future__ import annotations

from flask import Flask

from ..common.records import attribute_updates
from ..common.web import json_body, json_errors, ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.registration_service

    @app.route("/api/registrations", methods=["POST"], endpoint="registration_create")
    @json_errors
    def registration_create():
        data = attribute_updates(json_body())
        registration = service.create_pending_registration(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            position=data.get("position"),
            department=data.get("department"),
            branch=data.get("branch"),
            hire_date=data.get("hire_date"),
            signature=data.get("signature"),
            username=data.get("username"),
            contact=data.get("contact"),
        )
        return ok(registration.public_dict(), 201)

    @app.route("/api/registrations", endpoint="registrations_list")
    @role_required(Role.ADMIN)
    @json_errors
    def registrations_list():
        return ok([r.public_dict() for r in service.list_pending()])

    @app.route("/api/registrations/<int:registration_id>/approve", methods=["POST"], endpoint="registration_approve")
    @role_required(Role.ADMIN)
    @json_errors
    def registration_approve(registration_id: int):
        outcome = service.approve_registration(registration_id)
        return outcome.to_dict(), 200 if outcome.success else 404

    @app.route("/api/registrations/<int:registration_id>/reject", methods=["POST"], endpoint="registration_reject")
    @role_required(Role.ADMIN)
    @json_errors
    def registration_reject(registration_id: int):
        return service.reject_registration(registration_id).to_dict(), 200
