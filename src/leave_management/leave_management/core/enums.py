from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    STUDENT = "student"
    TEACHER = "teacher"
    HOD = "hod"
    ADMIN = "admin"


REVIEWER_ROLES = frozenset({Role.TEACHER, Role.HOD, Role.ADMIN})


class Department(str, Enum):
    CSE = "CSE"
    AIDS = "AIDS"
    IT = "IT"
    ECE = "ECE"
    EEE = "EEE"
    MECH = "MECH"
    CIVIL = "CIVIL"


class LeaveType(str, Enum):
    SICK = "sick"
    PERSONAL = "personal"
    EMERGENCY = "emergency"
    MEDICAL = "medical"


class RequestStatus(str, Enum):
    """Review workflow state. PENDING is the only state a request starts in."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ActivityAction(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def for_status(cls, status: RequestStatus) -> "ActivityAction":
        return cls(status.value)
