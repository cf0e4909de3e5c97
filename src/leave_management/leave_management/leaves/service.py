from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_enum, require_non_empty
from ..core.constants import DEFAULT_RECENT_DAYS
from ..core.enums import REVIEWER_ROLES, LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.model import User
from .model import LeaveRequest, LeaveRequestWithStudent, StatusUpdateResult, UpdateOutcome
from .repository import LeaveRequestRepository
from .visibility.factory import VisibilityPolicyFactory
from .visibility.resolver import OrderBy, resolve_visible_requests

logger = logging.getLogger(__name__)

_DECISIONS = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRequestRepository,
        assignments: AssignmentRepository,
        *,
        policy_factory: Optional[VisibilityPolicyFactory] = None,
        log_activity: bool = True,
        strict_review: bool = True,
    ):
        self._leaves = leaves
        self._assignments = assignments
        self._factory = policy_factory or VisibilityPolicyFactory()
        self._log_activity = bool(log_activity)
        self._strict_review = bool(strict_review)

    def submit(
        self,
        *,
        current_user: User,
        leave_type,
        from_date: date,
        to_date: date,
        reason: str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        if current_user.role != Role.STUDENT:
            raise AuthorizationError("Only students can submit leave requests")

        leave_type = require_enum(LeaveType, leave_type, "Leave type")
        if to_date < from_date:
            raise ValidationError("End date must be on or after the start date")
        reason = require_non_empty(reason, "Reason")

        created = self._leaves.create(
            student_id=current_user.user_id,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            submitted_at=now or now_local(),
        )
        logger.info(
            "Leave request %s submitted by %s (%s, %s..%s)",
            created.request_id,
            current_user.username,
            leave_type.value,
            from_date,
            to_date,
        )
        return created

    def list_mine(self, *, current_user: User) -> Sequence[LeaveRequest]:
        return self._leaves.list_by_student(current_user.user_id)

    def list_pending_for_reviewer(self, *, reviewer: User) -> List[LeaveRequestWithStudent]:
        if reviewer.role not in REVIEWER_ROLES:
            return []

        advisor_assignments = ()
        if reviewer.role == Role.TEACHER:
            advisor_assignments = self._assignments.list_for_advisor(reviewer.user_id)
            if not advisor_assignments:
                return []

        return resolve_visible_requests(
            reviewer,
            self._leaves.list_with_students(status=RequestStatus.PENDING),
            advisor_assignments=advisor_assignments,
            status=RequestStatus.PENDING,
            order_by=OrderBy.SUBMITTED,
            factory=self._factory,
        )

    def list_recent_for_reviewer(
        self,
        *,
        reviewer: User,
        days: int = DEFAULT_RECENT_DAYS,
        now: Optional[datetime] = None,
    ) -> List[LeaveRequestWithStudent]:
        """Requests this reviewer decided, submitted within the last `days` days."""
        if reviewer.role not in REVIEWER_ROLES:
            return []

        since = (now or now_local()) - timedelta(days=int(days))
        rows = self._leaves.list_with_students(reviewed_by=reviewer.user_id, submitted_since=since)
        rows = [r for r in rows if r.request.reviewed_by == reviewer.user_id and r.request.submitted_at >= since]
        return sorted(
            rows,
            key=lambda r: (r.request.reviewed_at or datetime.min, r.request.request_id),
            reverse=True,
        )

    def update_status(
        self,
        *,
        request_id: str,
        status,
        reviewer: User,
        comments: Optional[str] = None,
        require_pending: Optional[bool] = None,
        now: Optional[datetime] = None,
    ) -> StatusUpdateResult:
        status = require_enum(RequestStatus, status, "Status")
        if status not in _DECISIONS:
            raise ValidationError("Status must be approved or rejected")
        if reviewer.role not in REVIEWER_ROLES:
            raise AuthorizationError("Access denied")

        strict = self._strict_review if require_pending is None else bool(require_pending)

        existing = self._leaves.get_by_id(str(request_id))
        if not existing:
            raise NotFoundError("Request not found")
        if strict and existing.status != RequestStatus.PENDING:
            raise ConflictError(f"Request was already {existing.status.value}")

        written = self._leaves.update_status(
            request_id=existing.request_id,
            status=status,
            reviewed_by=reviewer.user_id,
            reviewed_at=now or now_local(),
            comments=optional_text(comments),
            only_if_pending=strict,
            log_activity=self._log_activity,
        )
        if not written:
            current = self._leaves.get_by_id(existing.request_id)
            if not current:
                raise NotFoundError("Request not found")
            if strict:
                # Another reviewer got there between our read and our write.
                raise ConflictError(f"Request was already {current.status.value}")

        updated = self._leaves.get_by_id(existing.request_id)
        if not updated:
            raise NotFoundError("Request not found")

        outcome = UpdateOutcome.UPDATED
        if existing.status != RequestStatus.PENDING:
            outcome = UpdateOutcome.OVERWRITTEN
            logger.warning(
                "Leave request %s re-reviewed: %s by %s overwritten with %s by %s",
                existing.request_id,
                existing.status.value,
                existing.reviewed_by,
                status.value,
                reviewer.user_id,
            )
        else:
            logger.info("Leave request %s %s by %s", existing.request_id, status.value, reviewer.username)

        return StatusUpdateResult(
            outcome=outcome,
            request=updated,
            previous_status=existing.status,
            previous_reviewer_id=existing.reviewed_by,
        )
