from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError

HOURS_EXPONENT = -2


def require_str(value, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_non_empty(value: str | None, field_name: str) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    return require_str(value, field_name).strip()


def optional_text(value, field_name: str) -> str:
    if value is None:
        return ""
    return require_str(value, field_name).strip()


def require_bool(value, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value


def require_min_length(value: str | None, field_name: str, min_len: int) -> str:
    if value is not None:
        require_str(value, field_name)
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_int(value, field_name: str) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_positive_hours(value, field_name: str = "hours") -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        hours = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not hours.is_finite() or hours <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    if hours.normalize().as_tuple().exponent < HOURS_EXPONENT:
        raise ValidationError(f"{field_name} must have at most 2 decimal places")
    return hours


def optional_non_negative_int(value, field_name: str) -> int | None:
    result = optional_int(value, field_name)
    if result is not None and result < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return result
