from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from ...assignments.model import DepartmentAssignment
from ...core.enums import Role
from ...users.model import User
from .admin_policy import AdminVisibility
from .advisor_policy import AdvisorVisibility
from .base import NoVisibility, VisibilityPolicy
from .hod_policy import HodVisibility

PolicyBuilder = Callable[[User, Iterable[DepartmentAssignment]], VisibilityPolicy]


def _admin(reviewer: User, assignments: Iterable[DepartmentAssignment]) -> VisibilityPolicy:
    return AdminVisibility()


def _hod(reviewer: User, assignments: Iterable[DepartmentAssignment]) -> VisibilityPolicy:
    return HodVisibility(reviewer.department)


def _teacher(reviewer: User, assignments: Iterable[DepartmentAssignment]) -> VisibilityPolicy:
    return AdvisorVisibility(a.cohort for a in assignments if a.class_advisor_id == reviewer.user_id)


_BUILDERS: Mapping[Role, PolicyBuilder] = {
    Role.ADMIN: _admin,
    Role.HOD: _hod,
    Role.TEACHER: _teacher,
}


@dataclass
class VisibilityPolicyFactory:
    """Factory Pattern: one policy per reviewer role.

    Roles missing from the table get NoVisibility.
    """

    def for_reviewer(
        self,
        reviewer: User,
        advisor_assignments: Iterable[DepartmentAssignment] = (),
    ) -> VisibilityPolicy:
        builder = _BUILDERS.get(reviewer.role)
        if builder is None:
            return NoVisibility()
        return builder(reviewer, advisor_assignments)
