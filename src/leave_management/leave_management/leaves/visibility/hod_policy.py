from __future__ import annotations

from typing import Optional

from ...core.enums import Department
from .base import VisibilityPolicy


class HodVisibility(VisibilityPolicy):
    """Every year of the HOD's own department."""

    def __init__(self, department: Optional[Department]):
        self._department = department

    def allows(self, department: Optional[Department], year: Optional[int]) -> bool:
        if self._department is None or department is None:
            return False
        return department == self._department
