from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import current_app, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PasswordConfirmationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (PasswordConfirmationError, 403),
    (ValidationError, 400),
)


def ok(data: Any = None, status: int = 200, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def fail(message: str, status: int = 400, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user() -> Optional[dict]:
    return session.get("user")


def json_errors(view):
    """Turn domain errors into JSON responses; anything else is a logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            for error_type, status in _STATUS_BY_ERROR:
                if isinstance(e, error_type):
                    return fail(str(e), status)
            return fail(str(e), 400)
        except Exception as e:
            logger.exception("Unhandled error in %s", view.__name__)
            if current_app.config.get("DEBUG"):
                return fail(f"System error: {e}", 500)
            return fail("System error", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def role_required(*roles: str):
    allowed = {getattr(r, "value", r) for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = session.get("user")
            if not user:
                return fail("Please log in to continue", 401)
            if user.get("role") not in allowed:
                return fail("You do not have permission to perform this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
