from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..core.enums import LeaveType, RequestStatus
from ..users.model import UserSummary


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    student_id: str
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: str
    status: RequestStatus
    submitted_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    comments: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1


@dataclass(frozen=True)
class LeaveRequestWithStudent:
    """A leave request joined with the identity of the student who filed it."""

    request: LeaveRequest
    student: UserSummary


class UpdateOutcome(str, Enum):
    UPDATED = "updated"
    # The request had already been reviewed and the new decision replaced the old one.
    OVERWRITTEN = "overwritten"


@dataclass(frozen=True)
class StatusUpdateResult:
    outcome: UpdateOutcome
    request: LeaveRequest
    previous_status: RequestStatus
    previous_reviewer_id: Optional[str] = None
