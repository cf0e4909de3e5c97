from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Department
from .model import AssignmentDetails, DepartmentAssignment


class AssignmentRepository(Protocol):
    def get_by_id(self, assignment_id: str) -> Optional[DepartmentAssignment]:
        raise NotImplementedError

    def get_for_cohort(self, department: Department, year: int) -> Optional[DepartmentAssignment]:
        raise NotImplementedError

    def list_for_advisor(self, class_advisor_id: str) -> Sequence[DepartmentAssignment]:
        raise NotImplementedError

    def list_details(self) -> Sequence[AssignmentDetails]:
        """Every assignment joined with its class advisor and HOD."""

        raise NotImplementedError

    def create(
        self,
        *,
        department: Department,
        year: int,
        class_advisor_id: Optional[str],
        hod_id: Optional[str],
    ) -> DepartmentAssignment:
        raise NotImplementedError

    def update(self, assignment_id: str, **fields) -> Optional[DepartmentAssignment]:
        raise NotImplementedError
