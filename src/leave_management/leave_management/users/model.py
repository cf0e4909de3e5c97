from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Department, Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access code here.
    """

    user_id: str
    username: str
    name: str
    password_hash: str
    role: Role
    department: Optional[Department] = None
    year: Optional[int] = None
    email: Optional[str] = None
    sin_number: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class UserSummary:
    """Identity fields embedded into leave requests, assignments and logs."""

    user_id: str
    username: str
    name: str
    role: Role
    department: Optional[Department] = None
    year: Optional[int] = None
    email: Optional[str] = None
    sin_number: Optional[str] = None

    @classmethod
    def of(cls, user: User) -> "UserSummary":
        return cls(
            user_id=user.user_id,
            username=user.username,
            name=user.name,
            role=user.role,
            department=user.department,
            year=user.year,
            email=user.email,
            sin_number=user.sin_number,
        )
