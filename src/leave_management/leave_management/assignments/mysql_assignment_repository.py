from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import Department, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, department_or_none, fetchall, fetchone
from ..users.model import UserSummary
from .model import AssignmentDetails, DepartmentAssignment
from .repository import AssignmentRepository

_COLUMNS = "assignment_id, department, year, class_advisor_id, hod_id, created_at"

_UPDATABLE = ("department", "year", "class_advisor_id", "hod_id")


def _from_row(r: dict) -> DepartmentAssignment:
    return DepartmentAssignment(
        assignment_id=str(r["assignment_id"]),
        department=Department(r["department"]),
        year=int(r["year"]),
        class_advisor_id=r.get("class_advisor_id"),
        hod_id=r.get("hod_id"),
        created_at=r.get("created_at"),
    )


def _summary(r: dict, prefix: str) -> Optional[UserSummary]:
    if not r.get(f"{prefix}user_id"):
        return None
    department = r.get(f"{prefix}department")
    return UserSummary(
        user_id=str(r[f"{prefix}user_id"]),
        username=r[f"{prefix}username"],
        name=r[f"{prefix}name"],
        role=Role(r[f"{prefix}role"]),
        department=department_or_none(department),
        email=r.get(f"{prefix}email"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, assignment_id: str) -> Optional[DepartmentAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM department_assignments WHERE assignment_id=%s", (str(assignment_id),))
            row = fetchone(cur)
            return _from_row(row) if row else None

    def get_for_cohort(self, department: Department, year: int) -> Optional[DepartmentAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM department_assignments WHERE department=%s AND year=%s",
                (department.value, int(year)),
            )
            row = fetchone(cur)
            return _from_row(row) if row else None

    def list_for_advisor(self, class_advisor_id: str) -> Sequence[DepartmentAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM department_assignments WHERE class_advisor_id=%s",
                (str(class_advisor_id),),
            )
            return [_from_row(r) for r in fetchall(cur)]

    def list_details(self) -> Sequence[AssignmentDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.assignment_id, a.department, a.year, a.class_advisor_id, a.hod_id, a.created_at,
                       ca.user_id AS ca_user_id, ca.username AS ca_username, ca.name AS ca_name,
                       ca.role AS ca_role, ca.department AS ca_department, ca.email AS ca_email,
                       h.user_id AS h_user_id, h.username AS h_username, h.name AS h_name,
                       h.role AS h_role, h.department AS h_department, h.email AS h_email
                FROM department_assignments a
                LEFT JOIN users ca ON ca.user_id = a.class_advisor_id
                LEFT JOIN users h ON h.user_id = a.hod_id
                ORDER BY a.department, a.year
                """
            )
            return [
                AssignmentDetails(
                    assignment=_from_row(r),
                    class_advisor=_summary(r, "ca_"),
                    hod=_summary(r, "h_"),
                )
                for r in fetchall(cur)
            ]

    def create(
        self,
        *,
        department: Department,
        year: int,
        class_advisor_id: Optional[str],
        hod_id: Optional[str],
    ) -> DepartmentAssignment:
        assignment_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO department_assignments(assignment_id, department, year, class_advisor_id, hod_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (assignment_id, department.value, int(year), class_advisor_id, hod_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM department_assignments WHERE assignment_id=%s", (assignment_id,))
            return _from_row(fetchone(cur))

    def update(self, assignment_id: str, **fields) -> Optional[DepartmentAssignment]:
        sets: list[str] = []
        params: list[object] = []
        for name in _UPDATABLE:
            if name not in fields:
                continue
            value = fields[name]
            sets.append(f"{name}=%s")
            params.append(value.value if isinstance(value, Department) else value)

        with db_cursor(self._conn_factory) as (_, cur):
            if sets:
                cur.execute(
                    f"UPDATE department_assignments SET {', '.join(sets)} WHERE assignment_id=%s",
                    tuple(params + [str(assignment_id)]),
                )
            cur.execute(f"SELECT {_COLUMNS} FROM department_assignments WHERE assignment_id=%s", (str(assignment_id),))
            row = fetchone(cur)
            return _from_row(row) if row else None
