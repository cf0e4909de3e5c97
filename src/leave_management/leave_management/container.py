from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activity.mysql_activity_repository import MySQLActivityLogRepository
from .activity.repository import ActivityLogRepository
from .activity.service import ActivityLogService
from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .leaves.repository import LeaveRequestRepository
from .leaves.service import LeaveService
from .leaves.visibility.factory import VisibilityPolicyFactory
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    assignments_repo: AssignmentRepository
    leaves_repo: LeaveRequestRepository
    activity_repo: ActivityLogRepository

    auth_service: AuthService
    user_service: UserService
    assignment_service: AssignmentService
    leave_service: LeaveService
    activity_service: ActivityLogService


def wire(
    *,
    users_repo: UserRepository,
    assignments_repo: AssignmentRepository,
    leaves_repo: LeaveRequestRepository,
    activity_repo: ActivityLogRepository,
    conn: Optional[DatabaseConnection] = None,
    log_activity: bool = True,
    strict_review: bool = True,
) -> Container:
    """Build every service on top of the given repositories."""
    policy_factory = VisibilityPolicyFactory()

    return Container(
        conn=conn,
        users_repo=users_repo,
        assignments_repo=assignments_repo,
        leaves_repo=leaves_repo,
        activity_repo=activity_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        assignment_service=AssignmentService(assignments_repo, users_repo),
        leave_service=LeaveService(
            leaves_repo,
            assignments_repo,
            policy_factory=policy_factory,
            log_activity=log_activity,
            strict_review=strict_review,
        ),
        activity_service=ActivityLogService(activity_repo, assignments_repo, policy_factory=policy_factory),
    )


def build_container(*, db_config: dict, log_activity: bool = True, strict_review: bool = True) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        leaves_repo=MySQLLeaveRequestRepository(conn),
        activity_repo=MySQLActivityLogRepository(conn),
        log_activity=log_activity,
        strict_review=strict_review,
    )
