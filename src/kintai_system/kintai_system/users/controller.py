from __future__ import annotations

import logging

from flask import Flask

from ..common.guards import build_guards, current_user
from ..common.request_utils import json_body
from ..common.responses import ok
from ..common.validators import optional_int, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    guards = build_guards(container.token_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        result = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        return ok(result.to_dict(), message="Logged in")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @guards.login_required
    def logout():
        # Tokens are stateless; the client discards them.
        return ok(None, message="Logged out")

    @app.route("/api/auth/refresh", methods=["POST"], endpoint="auth_refresh")
    def refresh():
        data = json_body()
        token = container.auth_service.refresh(data.get("refresh_token", ""))
        return ok({"token": token}, message="Token refreshed")

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @guards.login_required
    def me():
        user = container.auth_service.get_current_user(current_user().user_id)
        return ok(user.to_dict())

    @app.route("/api/auth/forgot-password", methods=["POST"], endpoint="auth_forgot_password")
    def forgot_password():
        data = json_body()
        require_non_empty(data.get("email"), "Email")
        # Same answer whether or not the account exists.
        logger.info("password reset requested")
        return ok(None, message="Password reset instructions have been sent by email")

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @guards.admin_required
    def admin_employees():
        return ok(list(container.user_service.list_admin_view()))

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_add_employee")
    @guards.admin_required
    def admin_add_employee():
        data = json_body()
        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Role is invalid")

        user = container.user_service.create_account(
            employee_code=data.get("employee_code", ""),
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=role,
            dept_id=optional_int(data.get("dept_id"), "dept_id"),
        )
        return ok(user.to_dict(), message="Employee created", status=201)
