from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import ActivityAction, LeaveType, RequestStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, department_or_none, fetchall, fetchone, int_or_none, normalize_mysql_date
from ..users.model import UserSummary
from .model import LeaveRequest, LeaveRequestWithStudent
from .repository import LeaveRequestRepository

_COLUMNS = (
    "r.request_id, r.student_id, r.leave_type, r.from_date, r.to_date, r.reason, "
    "r.status, r.reviewed_by, r.reviewed_at, r.comments, r.submitted_at"
)


def leave_from_row(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(r["request_id"]),
        student_id=str(r["student_id"]),
        leave_type=LeaveType(r["leave_type"]),
        from_date=normalize_mysql_date(r["from_date"]),
        to_date=normalize_mysql_date(r["to_date"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        submitted_at=r["submitted_at"],
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        comments=r.get("comments"),
    )


def student_from_row(r: dict) -> UserSummary:
    department = r.get("s_department")
    year = r.get("s_year")
    return UserSummary(
        user_id=str(r["s_user_id"]),
        username=r["s_username"],
        name=r["s_name"],
        role=Role(r["s_role"]),
        department=department_or_none(department),
        year=int_or_none(year),
        email=r.get("s_email"),
        sin_number=r.get("s_sin_number"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        request_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(request_id, student_id, leave_type, from_date, to_date, reason, status, submitted_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_id,
                    str(student_id),
                    leave_type.value,
                    from_date,
                    to_date,
                    reason,
                    RequestStatus.PENDING.value,
                    submitted_at,
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests r WHERE r.request_id=%s", (request_id,))
            return leave_from_row(fetchone(cur))

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests r WHERE r.request_id=%s", (str(request_id),))
            row = fetchone(cur)
            return leave_from_row(row) if row else None

    def list_by_student(self, student_id: str) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests r
                WHERE r.student_id=%s
                ORDER BY r.submitted_at DESC
                """,
                (str(student_id),),
            )
            return [leave_from_row(r) for r in fetchall(cur)]

    def list_with_students(
        self,
        *,
        status: Optional[RequestStatus] = None,
        reviewed_by: Optional[str] = None,
        submitted_since: Optional[datetime] = None,
    ) -> Sequence[LeaveRequestWithStudent]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if reviewed_by is not None:
            clauses.append("r.reviewed_by=%s")
            params.append(str(reviewed_by))
        if submitted_since is not None:
            clauses.append("r.submitted_at>=%s")
            params.append(submitted_since)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                       u.user_id AS s_user_id, u.username AS s_username, u.name AS s_name,
                       u.role AS s_role, u.department AS s_department, u.year AS s_year,
                       u.email AS s_email, u.sin_number AS s_sin_number
                FROM leave_requests r
                JOIN users u ON u.user_id = r.student_id
                WHERE {where}
                """,
                tuple(params),
            )
            return [
                LeaveRequestWithStudent(request=leave_from_row(r), student=student_from_row(r))
                for r in fetchall(cur)
            ]

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
        sql = """
            UPDATE leave_requests
            SET status=%s, reviewed_by=%s, reviewed_at=%s, comments=%s
            WHERE request_id=%s
        """
        params: list[object] = [status.value, str(reviewed_by), reviewed_at, comments, str(request_id)]
        if only_if_pending:
            sql += " AND status=%s"
            params.append(RequestStatus.PENDING.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            if cur.rowcount <= 0:
                return False

            if log_activity:
                # Snapshot the student's cohort as it is right now.
                cur.execute(
                    """
                    INSERT INTO activity_logs(log_id, leave_request_id, action_by_id, action, department, year, action_at)
                    SELECT %s, r.request_id, %s, %s, u.department, u.year, %s
                    FROM leave_requests r
                    JOIN users u ON u.user_id = r.student_id
                    WHERE r.request_id=%s
                    """,
                    (
                        str(uuid.uuid4()),
                        str(reviewed_by),
                        ActivityAction.for_status(status).value,
                        reviewed_at,
                        str(request_id),
                    ),
                )
            return True
