from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    optional_enum,
    optional_text,
    optional_year,
    require_enum,
    require_min_length,
    require_non_empty,
    require_year,
)
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Department, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role


def _require_admin(current_user: User) -> None:
    if current_user.role != Role.ADMIN:
        raise AuthorizationError("Access denied")


def _check_cohort(role: Role, department, year) -> None:
    """Students belong to a (department, year) cohort; nobody else carries a year."""
    if role == Role.STUDENT and (department is None or year is None):
        raise ValidationError("Students need a department and a year")
    if role != Role.STUDENT and year is not None:
        raise ValidationError("Only students have a year")


class AuthService:
    """Use cases: student self-registration, login, resolving the session user."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register_student(
        self,
        *,
        name: str,
        sin_number: str,
        password: str,
        department,
        year,
        email: Optional[str] = None,
        confirm_password: Optional[str] = None,
    ) -> User:
        name = require_non_empty(name, "Name")
        sin_number = require_non_empty(sin_number, "SIN number")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if confirm_password is not None and confirm_password != password:
            raise ValidationError("Passwords do not match")
        dept = require_enum(Department, department, "Department")
        year_i = require_year(year)

        # Students log in with their SIN number.
        if self._users.get_by_username(sin_number):
            raise ConflictError("Username already exists")

        user = self._users.create_user(
            username=sin_number,
            name=name,
            password_hash=generate_password_hash(password),
            role=Role.STUDENT,
            department=dept,
            year=year_i,
            email=optional_text(email),
            sin_number=sin_number,
        )
        logger.info("Registered student %s (%s/%s)", user.username, dept.value, year_i)
        return user

    def authenticate(self, username: str, password: str) -> User:
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid username or password")

        user = self._users.get_by_username(username.strip())
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return user

    def session_user(self, user: User) -> SessionUser:
        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)

    def get_current_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self._users.get_by_id(str(user_id))


class UserService:
    """Use cases: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, current_user: User) -> Sequence[User]:
        _require_admin(current_user)
        return self._users.list_all()

    def create_account(
        self,
        *,
        current_user: User,
        name: str,
        username: str,
        password: str,
        role,
        department=None,
        year=None,
        email: Optional[str] = None,
    ) -> User:
        _require_admin(current_user)
        name = require_non_empty(name, "Name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = require_enum(Role, role, "Role")
        dept = optional_enum(Department, department, "Department")
        year_i = optional_year(year)

        if role == Role.STUDENT and (dept is None or year_i is None):
            raise ValidationError("Students need a department and a year")

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user = self._users.create_user(
            username=username,
            name=name,
            password_hash=generate_password_hash(password),
            role=role,
            department=dept,
            year=year_i if role == Role.STUDENT else None,
            email=optional_text(email),
        )
        logger.info("Admin %s created %s account %s", current_user.username, role.value, username)
        return user

    def _get(self, user_id: str) -> User:
        user = self._users.get_by_id(str(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_role(self, *, current_user: User, user_id: str, role) -> User:
        _require_admin(current_user)
        role = require_enum(Role, role, "Role")

        existing = self._get(user_id)
        _check_cohort(role, existing.department, existing.year if role == Role.STUDENT else None)

        user = self._users.update_role(existing.user_id, role)
        if not user:
            raise NotFoundError("User not found")
        if role != Role.STUDENT and user.year is not None:
            # Year only scopes students; drop it when someone leaves that role.
            user = self._users.update_profile(user.user_id, year=None) or user
        logger.info("Admin %s set role of %s to %s", current_user.username, user.username, role.value)
        return user

    def update_profile(self, *, current_user: User, user_id: str, changes: dict) -> User:
        _require_admin(current_user)
        existing = self._get(user_id)

        fields: dict = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "Name")
        if "department" in changes:
            fields["department"] = optional_enum(Department, changes["department"], "Department")
        if "year" in changes:
            fields["year"] = optional_year(changes["year"])
        if "email" in changes:
            fields["email"] = optional_text(changes["email"], "Email")
        if "sin_number" in changes:
            fields["sin_number"] = optional_text(changes["sin_number"], "SIN number")

        _check_cohort(
            existing.role,
            fields.get("department", existing.department),
            fields.get("year", existing.year),
        )

        user = self._users.update_profile(existing.user_id, **fields)
        if not user:
            raise NotFoundError("User not found")
        return user
