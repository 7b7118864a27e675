from __future__ import annotations

from typing import Any

from ..core.exceptions import MissingRequiredFieldError, ValidationError


def require_fields(**values: Any) -> None:
    """Raise one MissingRequiredFieldError naming every empty field."""
    missing = [name for name, value in values.items() if value is None or not str(value).strip()]
    if missing:
        raise MissingRequiredFieldError(*missing)


def require_int_between(value: Any, field_name: str, low: int, high: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    if parsed < low or parsed > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return parsed


def require_float_between(value: Any, field_name: str, low: float, high: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    if parsed != parsed or parsed < low or parsed > high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    return parsed
