from __future__ import annotations

from typing import Optional

from ...core.enums import Department
from .base import VisibilityPolicy


class AdminVisibility(VisibilityPolicy):
    """Everything, including students with no department/year on record."""

    def allows(self, department: Optional[Department], year: Optional[int]) -> bool:
        return True
