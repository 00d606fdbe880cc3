from __future__ import annotations

from flask import Flask

from ..common.web import current_user, json_body, json_errors, login_required, ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/api/notifications", endpoint="notifications_list")
    @login_required
    @json_errors
    def notifications_list():
        role = current_user()["role"]
        notifications = [n.to_dict() for n in service.list_for_role(role)]
        return ok(notifications, unread=service.unread_count(role))

    @app.route("/api/notifications", methods=["POST"], endpoint="notification_create")
    @role_required(Role.ADMIN, Role.HR)
    @json_errors
    def notification_create():
        body = json_body()
        notification = service.create(
            message=body.get("message", ""),
            roles=body.get("roles") or (),
            type=body.get("type") or "info",
            action_url=body.get("actionUrl"),
        )
        return ok(notification.to_dict(), 201)

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="notification_read")
    @login_required
    @json_errors
    def notification_read(notification_id: int):
        return ok(service.mark_read(notification_id).to_dict())

    @app.route("/api/notifications/read-all", methods=["POST"], endpoint="notifications_read_all")
    @login_required
    @json_errors
    def notifications_read_all():
        return ok(updated=service.mark_all_read(current_user()["role"]))

    @app.route("/api/notifications/<int:notification_id>", methods=["DELETE"], endpoint="notification_delete")
    @login_required
    @json_errors
    def notification_delete(notification_id: int):
        return ok(deleted=service.delete(notification_id))
