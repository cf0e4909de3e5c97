from __future__ import annotations

import dataclasses
from datetime import date, datetime

import pytest
from werkzeug.security import generate_password_hash

from src.leave_management.leave_management.activity.model import ActivityLog, ActivityLogEntry
from src.leave_management.leave_management.assignments.model import AssignmentDetails, DepartmentAssignment
from src.leave_management.leave_management.container import wire
from src.leave_management.leave_management.core.enums import ActivityAction, Department, LeaveType, RequestStatus, Role
from src.leave_management.leave_management.leaves.model import LeaveRequest, LeaveRequestWithStudent
from src.leave_management.leave_management.users.model import User, UserSummary

PASSWORD = "secret123"


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[str, User] = {}
        self._next = 1

    def get_by_id(self, user_id):
        return self.by_id.get(str(user_id))

    def get_by_username(self, username):
        return next((u for u in self.by_id.values() if u.username == username), None)

    def create_user(self, *, username, name, password_hash, role, department=None, year=None, email=None, sin_number=None):
        user = User(
            user_id=f"u{self._next}",
            username=username,
            name=name,
            password_hash=password_hash,
            role=role,
            department=department,
            year=year,
            email=email,
            sin_number=sin_number,
            created_at=datetime(2026, 1, 1, 8, 0),
        )
        self._next += 1
        self.by_id[user.user_id] = user
        return user

    def update_role(self, user_id, role):
        user = self.by_id.get(str(user_id))
        if not user:
            return None
        self.by_id[user.user_id] = dataclasses.replace(user, role=role)
        return self.by_id[user.user_id]

    def update_profile(self, user_id, **fields):
        user = self.by_id.get(str(user_id))
        if not user:
            return None
        self.by_id[user.user_id] = dataclasses.replace(user, **fields)
        return self.by_id[user.user_id]

    def list_all(self):
        return list(self.by_id.values())


class InMemoryAssignments:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.by_id: dict[str, DepartmentAssignment] = {}
        self._next = 1

    def get_by_id(self, assignment_id):
        return self.by_id.get(str(assignment_id))

    def get_for_cohort(self, department, year):
        return next((a for a in self.by_id.values() if a.cohort == (department, int(year))), None)

    def list_for_advisor(self, class_advisor_id):
        return [a for a in self.by_id.values() if a.class_advisor_id == class_advisor_id]

    def list_details(self):
        def summary(user_id):
            user = self._users.get_by_id(user_id) if user_id else None
            return UserSummary.of(user) if user else None

        return [
            AssignmentDetails(assignment=a, class_advisor=summary(a.class_advisor_id), hod=summary(a.hod_id))
            for a in self.by_id.values()
        ]

    def create(self, *, department, year, class_advisor_id, hod_id):
        a = DepartmentAssignment(
            assignment_id=f"a{self._next}",
            department=department,
            year=int(year),
            class_advisor_id=class_advisor_id,
            hod_id=hod_id,
        )
        self._next += 1
        self.by_id[a.assignment_id] = a
        return a

    def update(self, assignment_id, **fields):
        a = self.by_id.get(str(assignment_id))
        if not a:
            return None
        self.by_id[a.assignment_id] = dataclasses.replace(a, **fields)
        return self.by_id[a.assignment_id]


class InMemoryLeaves:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.by_id: dict[str, LeaveRequest] = {}
        self.logs: list[ActivityLog] = []
        self._next = 1

    def create(self, *, student_id, leave_type, from_date, to_date, reason, submitted_at):
        r = LeaveRequest(
            request_id=f"r{self._next}",
            student_id=student_id,
            leave_type=leave_type,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            status=RequestStatus.PENDING,
            submitted_at=submitted_at,
        )
        self._next += 1
        self.by_id[r.request_id] = r
        return r

    def get_by_id(self, request_id):
        return self.by_id.get(str(request_id))

    def list_by_student(self, student_id):
        rows = [r for r in self.by_id.values() if r.student_id == student_id]
        return sorted(rows, key=lambda r: r.submitted_at, reverse=True)

    def list_with_students(self, *, status=None, reviewed_by=None, submitted_since=None):
        out = []
        for r in self.by_id.values():
            if status is not None and r.status != status:
                continue
            if reviewed_by is not None and r.reviewed_by != reviewed_by:
                continue
            if submitted_since is not None and r.submitted_at < submitted_since:
                continue
            out.append(LeaveRequestWithStudent(request=r, student=UserSummary.of(self._users.get_by_id(r.student_id))))
        return out

    def update_status(self, *, request_id, status, reviewed_by, reviewed_at, comments=None, only_if_pending=True, log_activity=True):
        r = self.by_id.get(str(request_id))
        if not r or (only_if_pending and r.status != RequestStatus.PENDING):
            return False
        self.by_id[r.request_id] = dataclasses.replace(
            r, status=status, reviewed_by=reviewed_by, reviewed_at=reviewed_at, comments=comments
        )
        if log_activity:
            student = self._users.get_by_id(r.student_id)
            self.logs.append(
                ActivityLog(
                    log_id=f"l{len(self.logs) + 1}",
                    leave_request_id=r.request_id,
                    action_by_id=reviewed_by,
                    action=ActivityAction.for_status(status),
                    department=student.department,
                    year=student.year,
                    action_at=reviewed_at,
                )
            )
        return True


class InMemoryActivity:
    def __init__(self, users: InMemoryUsers, leaves: InMemoryLeaves):
        self._users = users
        self._leaves = leaves

    def list_entries(self):
        out = []
        for log in self._leaves.logs:
            request = self._leaves.get_by_id(log.leave_request_id)
            out.append(
                ActivityLogEntry(
                    log=log,
                    leave_request=request,
                    action_by=UserSummary.of(self._users.get_by_id(log.action_by_id)),
                    student=UserSummary.of(self._users.get_by_id(request.student_id)),
                )
            )
        return out


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def assignments_repo(users_repo) -> InMemoryAssignments:
    return InMemoryAssignments(users_repo)


@pytest.fixture
def leaves_repo(users_repo) -> InMemoryLeaves:
    return InMemoryLeaves(users_repo)


@pytest.fixture
def activity_repo(users_repo, leaves_repo) -> InMemoryActivity:
    return InMemoryActivity(users_repo, leaves_repo)


@pytest.fixture
def people(users_repo, assignments_repo) -> dict[str, User]:
    """Demo college: teacher advises CSE/3, hod heads CSE, hod_aids heads AIDS."""
    pw = generate_password_hash(PASSWORD)

    def add(username, role, department=None, year=None) -> User:
        return users_repo.create_user(
            username=username,
            name=username.title(),
            password_hash=pw,
            role=role,
            department=department,
            year=year,
            sin_number=username if role == Role.STUDENT else None,
        )

    people = {
        "admin": add("admin", Role.ADMIN),
        "hod": add("hod_cse", Role.HOD, Department.CSE),
        "hod_aids": add("hod_aids", Role.HOD, Department.AIDS),
        "hod_nodept": add("hod_nodept", Role.HOD),
        "teacher": add("teacher_cse3", Role.TEACHER, Department.CSE),
        "teacher_idle": add("teacher_idle", Role.TEACHER, Department.CSE),
        "cse3": add("E23CS001", Role.STUDENT, Department.CSE, 3),
        "cse1": add("E25CS001", Role.STUDENT, Department.CSE, 1),
        "ece2": add("E24EC001", Role.STUDENT, Department.ECE, 2),
        "aids1": add("E25AI001", Role.STUDENT, Department.AIDS, 1),
        "aids4": add("E22AI001", Role.STUDENT, Department.AIDS, 4),
        "nodept": add("LEGACY01", Role.STUDENT),
    }
    assignments_repo.create(
        department=Department.CSE,
        year=3,
        class_advisor_id=people["teacher"].user_id,
        hod_id=people["hod"].user_id,
    )
    return people


@pytest.fixture
def file_leave(leaves_repo):
    """Insert a pending request directly, bypassing the service rules."""

    def _file(student: User, submitted_at: datetime, leave_type: LeaveType = LeaveType.SICK) -> LeaveRequest:
        return leaves_repo.create(
            student_id=student.user_id,
            leave_type=leave_type,
            from_date=date(2026, 2, 10),
            to_date=date(2026, 2, 11),
            reason="Fever",
            submitted_at=submitted_at,
        )

    return _file


@pytest.fixture
def container(users_repo, assignments_repo, leaves_repo, activity_repo):
    return wire(
        users_repo=users_repo,
        assignments_repo=assignments_repo,
        leaves_repo=leaves_repo,
        activity_repo=activity_repo,
    )

