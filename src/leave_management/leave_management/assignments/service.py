from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_enum, require_year
from ..core.enums import Department, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import AssignmentDetails, DepartmentAssignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Use cases: admins map (department, year) cohorts to class advisors and HODs."""

    def __init__(self, assignments: AssignmentRepository, users: UserRepository):
        self._assignments = assignments
        self._users = users

    def _check_reviewer(self, user_id: Optional[str], role: Role, field_name: str) -> Optional[str]:
        user_id = optional_text(user_id)
        if user_id is None:
            return None
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError(f"{field_name} does not exist")
        if user.role != role:
            raise ValidationError(f"{field_name} must have role {role.value}")
        return user.user_id

    def list_all(self, *, current_user: User) -> Sequence[AssignmentDetails]:
        if current_user.role != Role.ADMIN:
            raise AuthorizationError("Access denied")
        return self._assignments.list_details()

    def get(self, department, year) -> Optional[DepartmentAssignment]:
        return self._assignments.get_for_cohort(require_enum(Department, department, "Department"), require_year(year))

    def list_for_advisor(self, class_advisor_id: str) -> Sequence[DepartmentAssignment]:
        return self._assignments.list_for_advisor(str(class_advisor_id))

    def create(
        self,
        *,
        current_user: User,
        department,
        year,
        class_advisor_id: Optional[str] = None,
        hod_id: Optional[str] = None,
    ) -> DepartmentAssignment:
        if current_user.role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        dept = require_enum(Department, department, "Department")
        year_i = require_year(year)
        advisor = self._check_reviewer(class_advisor_id, Role.TEACHER, "Class advisor")
        hod = self._check_reviewer(hod_id, Role.HOD, "HOD")

        if self._assignments.get_for_cohort(dept, year_i):
            raise ConflictError(f"An assignment for {dept.value} year {year_i} already exists")

        created = self._assignments.create(department=dept, year=year_i, class_advisor_id=advisor, hod_id=hod)
        logger.info("Assignment %s created for %s/%s", created.assignment_id, dept.value, year_i)
        return created

    def update(self, *, current_user: User, assignment_id: str, changes: dict) -> DepartmentAssignment:
        if current_user.role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        existing = self._assignments.get_by_id(str(assignment_id))
        if not existing:
            raise NotFoundError("Assignment not found")

        fields: dict = {}
        if "department" in changes:
            fields["department"] = require_enum(Department, changes["department"], "Department")
        if "year" in changes:
            fields["year"] = require_year(changes["year"])
        if "class_advisor_id" in changes:
            fields["class_advisor_id"] = self._check_reviewer(changes["class_advisor_id"], Role.TEACHER, "Class advisor")
        if "hod_id" in changes:
            fields["hod_id"] = self._check_reviewer(changes["hod_id"], Role.HOD, "HOD")

        cohort = (fields.get("department", existing.department), fields.get("year", existing.year))
        if cohort != existing.cohort:
            clash = self._assignments.get_for_cohort(*cohort)
            if clash and clash.assignment_id != existing.assignment_id:
                raise ConflictError(f"An assignment for {cohort[0].value} year {cohort[1]} already exists")

        updated = self._assignments.update(existing.assignment_id, **fields)
        if not updated:
            raise NotFoundError("Assignment not found")
        logger.info("Assignment %s updated (%s)", updated.assignment_id, ", ".join(sorted(fields)) or "no changes")
        return updated
