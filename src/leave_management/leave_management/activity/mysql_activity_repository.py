from __future__ import annotations

from typing import Sequence

from ..core.enums import ActivityAction, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, department_or_none, fetchall, int_or_none
from ..leaves.mysql_leave_repository import leave_from_row, student_from_row
from ..users.model import UserSummary
from .model import ActivityLog, ActivityLogEntry
from .repository import ActivityLogRepository


def _actor_from_row(r: dict) -> UserSummary:
    department = r.get("a_department")
    return UserSummary(
        user_id=str(r["a_user_id"]),
        username=r["a_username"],
        name=r["a_name"],
        role=Role(r["a_role"]),
        department=department_or_none(department),
        email=r.get("a_email"),
    )


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_entries(self) -> Sequence[ActivityLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT l.log_id, l.leave_request_id, l.action_by_id, l.action,
                       l.department AS log_department, l.year AS log_year, l.action_at,
                       r.request_id, r.student_id, r.leave_type, r.from_date, r.to_date, r.reason,
                       r.status, r.reviewed_by, r.reviewed_at, r.comments, r.submitted_at,
                       a.user_id AS a_user_id, a.username AS a_username, a.name AS a_name,
                       a.role AS a_role, a.department AS a_department, a.email AS a_email,
                       s.user_id AS s_user_id, s.username AS s_username, s.name AS s_name,
                       s.role AS s_role, s.department AS s_department, s.year AS s_year,
                       s.email AS s_email, s.sin_number AS s_sin_number
                FROM activity_logs l
                JOIN leave_requests r ON r.request_id = l.leave_request_id
                JOIN users a ON a.user_id = l.action_by_id
                JOIN users s ON s.user_id = r.student_id
                """
            )
            out: list[ActivityLogEntry] = []
            for r in fetchall(cur):
                department = r.get("log_department")
                year = r.get("log_year")
                out.append(
                    ActivityLogEntry(
                        log=ActivityLog(
                            log_id=str(r["log_id"]),
                            leave_request_id=str(r["leave_request_id"]),
                            action_by_id=str(r["action_by_id"]),
                            action=ActivityAction(r["action"]),
                            department=department_or_none(department),
                            year=int_or_none(year),
                            action_at=r["action_at"],
                        ),
                        leave_request=leave_from_row(r),
                        action_by=_actor_from_row(r),
                        student=student_from_row(r),
                    )
                )
            return out
