from __future__ import annotations

from typing import Iterable, Optional

from ...core.enums import Department
from .base import VisibilityPolicy


class AdvisorVisibility(VisibilityPolicy):
    """Only the (department, year) cohorts the teacher advises."""

    def __init__(self, cohorts: Iterable[tuple[Department, int]]):
        self._cohorts = frozenset(cohorts)

    @property
    def cohorts(self) -> frozenset[tuple[Department, int]]:
        return self._cohorts

    def allows(self, department: Optional[Department], year: Optional[int]) -> bool:
        if department is None or year is None:
            return False
        return (department, int(year)) in self._cohorts
