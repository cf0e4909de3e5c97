from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveRequest, LeaveRequestWithStudent


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        student_id: str,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
        submitted_at: datetime,
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_by_student(self, student_id: str) -> Sequence[LeaveRequest]:
        """Newest submission first."""

        raise NotImplementedError

    def list_with_students(
        self,
        *,
        status: Optional[RequestStatus] = None,
        reviewed_by: Optional[str] = None,
        submitted_since: Optional[datetime] = None,
    ) -> Sequence[LeaveRequestWithStudent]:
        """Candidate rows for the visibility resolver (unordered, unscoped)."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        comments: Optional[str] = None,
        only_if_pending: bool = True,
        log_activity: bool = True,
    ) -> bool:
        """Write the review decision (and its activity log row) in one transaction.

        Returns False when no row was written: the request is missing or, with
        only_if_pending, it is no longer pending.
        """

        raise NotImplementedError
