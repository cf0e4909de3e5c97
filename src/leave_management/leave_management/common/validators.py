from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.constants import MAX_STUDENT_YEAR, MIN_STUDENT_YEAR
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_text(value, field_name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")


def require_non_empty(value: str, field_name: str) -> str:
    require_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    require_text(value, field_name)
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_enum(enum_cls: Type[E], value, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not valid: {value!r}")


def optional_enum(enum_cls: Type[E], value, field_name: str) -> Optional[E]:
    if value is None or value == "":
        return None
    return require_enum(enum_cls, value, field_name)


def require_year(value, field_name: str = "Year") -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not MIN_STUDENT_YEAR <= year <= MAX_STUDENT_YEAR:
        raise ValidationError(f"{field_name} must be between {MIN_STUDENT_YEAR} and {MAX_STUDENT_YEAR}")
    return year


def optional_year(value, field_name: str = "Year") -> Optional[int]:
    if value is None or value == "":
        return None
    return require_year(value, field_name)


def optional_text(value: Optional[str], field_name: str = "Value") -> Optional[str]:
    require_text(value, field_name)
    v = (value or "").strip()
    return v or None
