from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .serialization import to_jsonable

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 400),
)


def json_ok(payload: Any, status: int = 200):
    return jsonify(to_jsonable(payload)), status


def json_error(message: str, status: int):
    return jsonify({"message": message}), status


def error_response(exc: Exception):
    """Map a domain exception to a JSON response; anything else is a 500."""
    if isinstance(exc, DomainError):
        for exc_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, exc_type):
                return json_error(str(exc), status)
        return json_error(str(exc), 400)

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return json_error("Internal server error", 500)


def request_json() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        # Plain form posts.
        return request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def user_required(auth_service, *roles: Role):
    """Require a logged-in user (optionally with one of `roles`) and pass it as `current_user`.

    The user is reloaded on every request, so role changes apply without a new login.
    """
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Unauthorized", 401)

            user = auth_service.get_current_user(session.get("user_id"))
            if not user:
                session.clear()
                return json_error("Unauthorized", 401)
            if allowed and user.role.value not in allowed:
                return json_error("Access denied", 403)

            session["role"] = user.role.value
            return view(*args, current_user=user, **kwargs)

        return wrapper

    return decorator
