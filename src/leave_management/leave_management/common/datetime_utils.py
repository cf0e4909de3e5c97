from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or a full ISO timestamp) into a date."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")
    v = (value or "").strip()
    try:
        if len(v) > 10:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return datetime.strptime(v, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Naive local time; submission and review timestamps use it."""
    return datetime.now()
