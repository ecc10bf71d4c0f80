from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_user, json_body, json_ok, login_required, text_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/entries", methods=["GET"], endpoint="my_entries")
    @login_required
    def my_entries():
        entries = container.entry_service.list_own(current_user())
        return json_ok(entries=[e.to_view() for e in entries])

    @app.route("/api/entries/<int:entry_id>", methods=["PATCH"], endpoint="edit_entry")
    @login_required
    def edit_entry(entry_id: int):
        data = json_body()
        entry = container.entry_service.update_entry(
            current_user(),
            entry_id,
            description=text_field(data, "description"),
            hours=data.get("hours", 0),
            minutes=data.get("minutes", 0),
        )
        return json_ok(entry=entry.to_view(), message="Entry updated successfully")

    @app.route("/api/entries/<int:entry_id>", methods=["DELETE"], endpoint="delete_entry")
    @login_required
    def delete_entry(entry_id: int):
        container.entry_service.delete_entry(current_user(), entry_id)
        return json_ok(message="Entry deleted")

    @app.route("/api/admin/entries", methods=["GET"], endpoint="admin_entries")
    @admin_required
    def admin_entries():
        entries = container.entry_service.list_all(current_user())
        return json_ok(entries=[e.to_view() for e in entries])
