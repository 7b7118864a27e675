"""JSON helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Mapping, Optional

from flask import jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; first isinstance match wins.
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (RateLimitedError, 429),
    (ValidationError, 400),
    (DomainError, 400),
)


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, *, code: str, status: int, **extra: Any):
    payload = {"success": False, "error": message, "code": code}
    payload.update(extra)
    return jsonify(payload), status


def error_response(exc: Exception):
    if isinstance(exc, DomainError):
        status = next(s for cls, s in _STATUS_BY_ERROR if isinstance(exc, cls))
        extra = {}
        if isinstance(exc, RateLimitedError):
            extra["remainingMinutes"] = exc.remaining_minutes
            extra["minIntervalHours"] = exc.interval_hours
        return fail(str(exc), code=exc.code, status=status, **extra)

    if isinstance(exc, InfrastructureError):
        logger.error("Infrastructure failure: %s", exc)
    else:
        logger.exception("Unexpected error")
    return fail("Internal server error", code=InfrastructureError.code, status=500)


def json_api(view):
    """Turn engine exceptions into the JSON error envelope."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except Exception as exc:  # noqa: BLE001
            return error_response(exc)

    return wrapper


def current_actor(container):
    user_id = session.get("user_id")
    if not user_id:
        raise AuthenticationError("Not authenticated")
    actor = container.directory_repo.get_by_id(str(user_id))
    if not actor or not actor.is_active:
        raise AuthenticationError("Not authenticated")
    return actor


def pick(body: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """First present key among ``names`` (camelCase and snake_case both accepted)."""
    for name in names:
        if name in body and body[name] is not None:
            return body[name]
    return default


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_strict_true(value: Any) -> bool:
    """Only a JSON ``true`` counts; ``"true"``, ``1`` and ``"yes"`` do not."""
    return value is True


def as_optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
