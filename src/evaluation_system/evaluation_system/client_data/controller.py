from __future__ import annotations

from flask import Flask

from ..common.web import ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    data = container.client_data

    @app.route("/api/data/departments", endpoint="data_departments")
    def data_departments():
        return ok(data.get_departments())

    @app.route("/api/data/positions", endpoint="data_positions")
    def data_positions():
        return ok(data.get_positions())

    @app.route("/api/data/branches", endpoint="data_branches")
    def data_branches():
        return ok(data.get_branches())

    @app.route("/api/data/branch-codes", endpoint="data_branch_codes")
    def data_branch_codes():
        return ok(data.get_branch_codes())

    @app.route("/api/admin/reset", methods=["POST"], endpoint="admin_reset")
    @role_required(Role.ADMIN)
    def admin_reset():
        return {"success": data.reset_all_data()}, 200

    @app.route("/api/admin/reinitialize-accounts", methods=["POST"], endpoint="admin_reinitialize_accounts")
    @role_required(Role.ADMIN)
    def admin_reinitialize_accounts():
        return {"success": data.force_reinitialize_accounts()}, 200
