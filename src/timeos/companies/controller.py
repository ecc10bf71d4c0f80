from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_user, json_body, json_ok, login_required, text_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/companies", methods=["GET"], endpoint="companies")
    @login_required
    def companies():
        items = container.company_service.list_for_user(current_user())
        return json_ok(companies=[c.to_view() for c in items])

    @app.route("/api/admin/companies", methods=["GET"], endpoint="admin_companies")
    @admin_required
    def admin_companies():
        return json_ok(companies=[c.to_view() for c in container.company_service.list_all()])

    @app.route("/api/admin/companies", methods=["POST"], endpoint="add_company")
    @admin_required
    def add_company():
        data = json_body()
        company_id = container.company_service.create_company(
            current_user(),
            name=text_field(data, "name"),
            client_reference=text_field(data, "client_reference", None),
            client_email=text_field(data, "client_email", None),
        )
        return json_ok(id=company_id, message="Company added successfully"), 201

    @app.route("/api/admin/companies/<company_id>", methods=["PATCH"], endpoint="edit_company")
    @admin_required
    def edit_company(company_id: str):
        data = json_body()
        container.company_service.update_company(
            current_user(),
            company_id,
            name=text_field(data, "name"),
            client_reference=text_field(data, "client_reference", None),
            client_email=text_field(data, "client_email", None),
        )
        return json_ok(message="Company updated successfully")

    @app.route("/api/admin/companies/<company_id>", methods=["DELETE"], endpoint="delete_company")
    @admin_required
    def delete_company(company_id: str):
        container.company_service.delete_company(current_user(), company_id)
        return json_ok(message="Company deleted")
