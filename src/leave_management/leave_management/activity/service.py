from __future__ import annotations

from datetime import datetime
from typing import List

from ..assignments.repository import AssignmentRepository
from ..core.enums import Role
from ..leaves.visibility.factory import VisibilityPolicyFactory
from ..users.model import User
from .model import ActivityLogEntry
from .repository import ActivityLogRepository


class ActivityLogService:
    """Shared audit trail: HODs and class advisors see every decision in their scope,
    whoever made it."""

    def __init__(
        self,
        logs: ActivityLogRepository,
        assignments: AssignmentRepository,
        *,
        policy_factory: VisibilityPolicyFactory | None = None,
    ):
        self._logs = logs
        self._assignments = assignments
        self._factory = policy_factory or VisibilityPolicyFactory()

    def list_for_reviewer(self, *, reviewer: User) -> List[ActivityLogEntry]:
        advisor_assignments = ()
        if reviewer.role == Role.TEACHER:
            advisor_assignments = self._assignments.list_for_advisor(reviewer.user_id)

        policy = self._factory.for_reviewer(reviewer, advisor_assignments)
        visible = [e for e in self._logs.list_entries() if policy.allows(e.log.department, e.log.year)]
        return sorted(visible, key=lambda e: (e.log.action_at or datetime.min, e.log.log_id), reverse=True)
