from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Department, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        name: str,
        password_hash: str,
        role: Role,
        department: Optional[Department] = None,
        year: Optional[int] = None,
        email: Optional[str] = None,
        sin_number: Optional[str] = None,
    ) -> User:
        raise NotImplementedError

    def update_role(self, user_id: str, role: Role) -> Optional[User]:
        raise NotImplementedError

    def update_profile(self, user_id: str, **fields) -> Optional[User]:
        """Update any of name/department/year/email/sin_number; None if user is missing."""

        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
