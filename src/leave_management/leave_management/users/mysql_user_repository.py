from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import Department, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, department_or_none, fetchall, fetchone, int_or_none
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, username, name, password_hash, role, department, year, email, sin_number, created_at"

_PROFILE_FIELDS = ("name", "department", "year", "email", "sin_number")


def user_from_row(r: dict, prefix: str = "") -> User:
    department = r.get(f"{prefix}department")
    year = r.get(f"{prefix}year")
    return User(
        user_id=str(r[f"{prefix}user_id"]),
        username=r[f"{prefix}username"],
        name=r[f"{prefix}name"],
        password_hash=r.get(f"{prefix}password_hash") or "",
        role=Role(r[f"{prefix}role"]),
        department=department_or_none(department),
        year=int_or_none(year),
        email=r.get(f"{prefix}email"),
        sin_number=r.get(f"{prefix}sin_number"),
        created_at=r.get(f"{prefix}created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (str(user_id),))
            row = fetchone(cur)
            return user_from_row(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return user_from_row(row) if row else None

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
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, username, name, password_hash, role, department, year, email, sin_number)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    username,
                    name,
                    password_hash,
                    role.value,
                    department.value if department else None,
                    year,
                    email,
                    sin_number,
                ),
            )
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            return user_from_row(fetchone(cur))

    def update_role(self, user_id: str, role: Role) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET role=%s WHERE user_id=%s", (role.value, str(user_id)))
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (str(user_id),))
            row = fetchone(cur)
            return user_from_row(row) if row else None

    def update_profile(self, user_id: str, **fields) -> Optional[User]:
        sets: list[str] = []
        params: list[object] = []
        for name in _PROFILE_FIELDS:
            if name not in fields:
                continue
            value = fields[name]
            sets.append(f"{name}=%s")
            params.append(value.value if isinstance(value, Department) else value)

        with db_cursor(self._conn_factory) as (_, cur):
            if sets:
                cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE user_id=%s", tuple(params + [str(user_id)]))
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (str(user_id),))
            row = fetchone(cur)
            return user_from_row(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at DESC, username")
            return [user_from_row(r) for r in fetchall(cur)]
