"""Shared helpers for the JSON controllers."""

from __future__ import annotations

from functools import wraps
from typing import Any, Dict

from flask import g, jsonify, request

from .core.exceptions import AuthorizationError, ValidationError

USER_HEADER = "X-User-Id"
_MISSING = object()


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(data: Any = _MISSING, status: int = 200, **extra):
    payload: Dict[str, Any] = {"success": True}
    if data is not _MISSING:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload), status


def parse_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def make_guards(container):
    """Build the login_required / admin_required decorators bound to the user service.

    The acting user is resolved from the X-User-Id header set by the upstream auth layer
    and stored on flask.g.current_user.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            raw = request.headers.get(USER_HEADER)
            if not raw:
                raise AuthorizationError("Authentication required")
            g.current_user = container.user_service.get_user(parse_int(raw, USER_HEADER))
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @login_required
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not g.current_user.is_admin:
                raise AuthorizationError("Admin permission required")
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required
