from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_user, json_body, json_ok, text_field
from ..container import Container
from .csv_export import ALL_COMPANIES


def register(app: Flask, container: Container) -> None:
    def company_arg() -> str:
        return (request.args.get("company") or ALL_COMPANIES).strip() or ALL_COMPANIES

    @app.route("/api/admin/reports/summary", methods=["GET"], endpoint="report_summary")
    @admin_required
    def report_summary():
        return json_ok(summary=container.report_service.summary(current_user(), company_arg()))

    @app.route("/api/admin/reports/export.csv", methods=["GET"], endpoint="report_csv")
    @admin_required
    def report_csv():
        filename, text = container.report_service.export_csv(current_user(), company_arg())
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.route("/api/admin/reports/timesheet.html", methods=["GET"], endpoint="report_timesheet")
    @admin_required
    def report_timesheet():
        html = container.report_service.timesheet_html(current_user(), company_arg())
        return app.response_class(html, mimetype="text/html")

    @app.route("/api/admin/reports/send", methods=["POST"], endpoint="report_send")
    @admin_required
    def report_send():
        data = json_body()
        company = text_field(data, "company").strip()
        recipient = container.report_service.send_to_client(current_user(), company)
        return json_ok(message=f"Timesheet sent to {recipient}")

    @app.route("/api/admin/reports/ai-summary", methods=["POST"], endpoint="report_ai_summary")
    @admin_required
    def report_ai_summary():
        data = json_body()
        company = text_field(data, "company", ALL_COMPANIES).strip() or ALL_COMPANIES
        return json_ok(summary=container.report_service.ai_summary(current_user(), company))
