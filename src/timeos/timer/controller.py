from __future__ import annotations

from flask import Flask

from ..common.web import current_user, device_id, json_body, json_ok, login_required, text_field
from ..container import Container
from .service import TimeTracker


def register(app: Flask, container: Container) -> None:
    def tracker() -> TimeTracker:
        user = current_user()
        engine = container.timer_engine(user.user_id, device_id())
        engine.restore()
        return TimeTracker(
            engine,
            container.entry_submission,
            user,
            known_companies=container.company_service.list_for_user(user),
            ai=container.ai_client,
            tick_interval_ms=container.tick_interval_ms,
        )

    @app.route("/api/timer", methods=["GET"], endpoint="timer_status")
    @login_required
    def timer_status():
        return json_ok(timer=tracker().status())

    @app.route("/api/timer/start", methods=["POST"], endpoint="timer_start")
    @login_required
    def timer_start():
        data = json_body()
        company_id = data.get("company_id")
        timer = tracker().start(
            None if company_id in (None, "") else str(company_id),
            text_field(data, "label", None),
        )
        return json_ok(timer=timer)

    @app.route("/api/timer", methods=["PATCH"], endpoint="timer_update")
    @login_required
    def timer_update():
        data = json_body()
        changes = {}
        if "company_id" in data:
            company_id = data.get("company_id")
            changes["resource_id"] = None if company_id in (None, "") else str(company_id)
        if "label" in data:
            changes["label"] = text_field(data, "label", None)
        return json_ok(timer=tracker().update(**changes))

    @app.route("/api/timer/stop", methods=["POST"], endpoint="timer_stop")
    @login_required
    def timer_stop():
        outcome = tracker().stop()
        return json_ok(**outcome.to_view())

    @app.route("/api/timer/enhance", methods=["POST"], endpoint="timer_enhance")
    @login_required
    def timer_enhance():
        data = json_body()
        enhanced = tracker().enhance_label(text_field(data, "label", None))
        return json_ok(label=enhanced)
