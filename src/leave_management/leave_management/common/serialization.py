"""Turn domain dataclasses into JSON-ready dicts for the API layer."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any

# Never leave the process through the API.
_PRIVATE_FIELDS = frozenset({"password_hash"})


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.name not in _PRIVATE_FIELDS
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items() if k not in _PRIVATE_FIELDS}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
