from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Department
from ..users.model import UserSummary


@dataclass(frozen=True)
class DepartmentAssignment:
    """Reviewers for one (department, year) cohort."""

    assignment_id: str
    department: Department
    year: int
    class_advisor_id: Optional[str] = None
    hod_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def cohort(self) -> tuple[Department, int]:
        return (self.department, self.year)


@dataclass(frozen=True)
class AssignmentDetails:
    assignment: DepartmentAssignment
    class_advisor: Optional[UserSummary] = None
    hod: Optional[UserSummary] = None
