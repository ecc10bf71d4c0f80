from __future__ import annotations

import logging

from flask import Flask, g, session

from ..common.web import admin_required, current_user, device_id, json_body, json_error, json_ok, login_required, text_field
from ..container import Container
from ..core.constants import ADMIN_USER_ID
from .service import SessionUser

log = logging.getLogger(__name__)


def _company_ids(data: dict) -> list[str]:
    raw = data.get("assigned_company_ids") or []
    if not isinstance(raw, list):
        return []
    return [str(c) for c in raw]


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def _refresh_session_user():
        # Blocking, deleting or reassigning an employee takes effect on their next request.
        data = session.get("user")
        if not data or int(data.get("user_id", ADMIN_USER_ID)) == ADMIN_USER_ID:
            return None
        user = container.users_repo.get_by_id(int(data["user_id"]))
        if not user or user.is_blocked:
            log.info("Ending session of user %s (missing or blocked)", data["user_id"])
            session.pop("user", None)
            return None
        refreshed = SessionUser.from_user(user)
        if refreshed.to_session() != data:
            session["user"] = refreshed.to_session()
        g.user = refreshed
        return None

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.login(text_field(data, "access_code"))
        session.clear()
        session["user"] = s_user.to_session()
        return json_ok(user=s_user.to_session())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        if "user" in session:
            # Logging out discards this device's timer slot, running or not.
            container.timer_engine(current_user().user_id, device_id()).reset()
        session.clear()
        return json_ok(message="Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return json_ok(user=current_user().to_session())

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        users = container.user_service.list_users(current_user())
        return json_ok(users=[u.to_admin_view() for u in users])

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        user_id = container.user_service.create_employee(
            current_user(),
            name=text_field(data, "name"),
            title=text_field(data, "title"),
            access_code=text_field(data, "access_code"),
            assigned_company_ids=_company_ids(data),
        )
        return json_ok(id=user_id, message="Employee created successfully"), 201

    @app.route("/api/admin/users/<int:user_id>", methods=["PATCH"], endpoint="edit_user")
    @admin_required
    def edit_user(user_id: int):
        data = json_body()
        container.user_service.update_employee(
            current_user(),
            user_id,
            name=text_field(data, "name"),
            title=text_field(data, "title"),
            access_code=text_field(data, "access_code"),
            assigned_company_ids=_company_ids(data),
        )
        return json_ok(message="Employee updated successfully")

    @app.route("/api/admin/users/<int:user_id>/block", methods=["POST"], endpoint="toggle_block_user")
    @admin_required
    def toggle_block_user(user_id: int):
        blocked = container.user_service.toggle_block(current_user(), user_id)
        return json_ok(is_blocked=blocked, message="Employee blocked" if blocked else "Employee unblocked")

    @app.route("/api/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        if user_id == ADMIN_USER_ID:
            return json_error("The built-in administrator cannot be deleted", 400)
        container.user_service.delete_user(current_user(), user_id)
        return json_ok(message="Employee deleted")
