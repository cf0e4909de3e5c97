from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ActivityAction, Department
from ..leaves.model import LeaveRequest
from ..users.model import UserSummary


@dataclass(frozen=True)
class ActivityLog:
    """One review decision. Department/year are the student's at decision time."""

    log_id: str
    leave_request_id: str
    action_by_id: str
    action: ActivityAction
    department: Optional[Department]
    year: Optional[int]
    action_at: datetime


@dataclass(frozen=True)
class ActivityLogEntry:
    log: ActivityLog
    leave_request: LeaveRequest
    action_by: UserSummary
    student: UserSummary
