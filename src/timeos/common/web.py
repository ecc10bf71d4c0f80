"""Flask helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
import uuid
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.constants import DEVICE_COOKIE, DEVICE_COOKIE_MAX_AGE
from ..core.enums import Role
from ..core.exceptions import (
    AIServiceError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    EmailDeliveryError,
    NotFoundError,
    PersistenceError,
    TimerStateError,
    ValidationError,
)
from ..users.service import SessionUser

log = logging.getLogger(__name__)

# Checked in order; first match wins.
ERROR_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (TimerStateError, 409),
    (AIServiceError, 502),
    (EmailDeliveryError, 502),
    (PersistenceError, 503),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_ok(**payload):
    return jsonify({"success": True, **payload})


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def text_field(data: dict, key: str, default: Optional[str] = "") -> Optional[str]:
    value = data.get(key)
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def current_user() -> SessionUser:
    if "user" not in g:
        g.user = SessionUser.from_session(session["user"])
    return g.user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user" not in session:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user" not in session:
            return json_error("Please log in to continue", 401)
        if session["user"].get("role") != Role.ADMIN.value:
            return json_error("Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def device_id() -> str:
    """Per-browser key for the timer slot, issued on first use."""

    if "device_id" not in g:
        value = request.cookies.get(DEVICE_COOKIE, "")
        if not value or not value.isalnum() or len(value) > 64:
            value = uuid.uuid4().hex
            g.issue_device_cookie = True
        g.device_id = value
    return g.device_id


def init_web(app: Flask) -> None:
    @app.after_request
    def _set_device_cookie(response):
        if g.get("issue_device_cookie"):
            response.set_cookie(
                DEVICE_COOKIE,
                g.device_id,
                max_age=DEVICE_COOKIE_MAX_AGE,
                httponly=True,
                samesite="Lax",
            )
        return response

    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        for exc_type, status in ERROR_STATUS:
            if isinstance(e, exc_type):
                if status >= 500:
                    log.error("%s on %s %s: %s", type(e).__name__, request.method, request.path, e, exc_info=e)
                return json_error(str(e), status)
        return json_error(str(e), 400)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return json_error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return json_error(f"Internal error: {e}", 500)
        return json_error("Internal server error", 500)
