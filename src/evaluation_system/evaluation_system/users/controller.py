from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.web import current_user, fail, json_body, json_errors, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AccountSuspendedError


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        body = json_body()
        try:
            user = container.auth_service.login(body.get("email", ""), body.get("password", ""))
        except AccountSuspendedError as e:
            return fail(str(e), 403, suspended=True, suspensionData=e.to_dict())

        session.clear()
        session.permanent = bool(body.get("rememberMe"))
        session["user"] = user.to_dict()
        return ok(user.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me():
        return ok(current_user())
