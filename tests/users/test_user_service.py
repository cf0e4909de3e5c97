import pytest

from src.leave_management.leave_management.core.enums import Department, Role
from src.leave_management.leave_management.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.leave_management.leave_management.users.service import AuthService, UserService

PASSWORD = "secret123"


def test_register_student_uses_sin_as_username(users_repo):
    auth = AuthService(users_repo)

    user = auth.register_student(
        name="Asha",
        sin_number="E23IT010",
        password="abcdef",
        department="IT",
        year="2",
        email="asha@example.edu",
    )

    assert user.username == "E23IT010"
    assert user.sin_number == "E23IT010"
    assert user.role == Role.STUDENT
    assert (user.department, user.year) == (Department.IT, 2)
    assert user.password_hash != "abcdef"


def test_registered_student_can_log_in(users_repo):
    auth = AuthService(users_repo)
    auth.register_student(name="Asha", sin_number="E23IT010", password="abcdef", department="IT", year=2)

    user = auth.authenticate("E23IT010", "abcdef")

    session_user = auth.session_user(user)
    assert session_user.role == Role.STUDENT
    assert auth.get_current_user(session_user.user_id) == user


def test_register_duplicate_sin_conflicts(people, users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(ConflictError):
        auth.register_student(name="Dup", sin_number="E23CS001", password="abcdef", department="CSE", year=3)


@pytest.mark.parametrize(
    "password, department, year",
    [
        ("abc", "CSE", 1),
        ("abcdef", "PHYSICS", 1),
        ("abcdef", "CSE", 5),
        ("abcdef", "CSE", 0),
        ("abcdef", "CSE", "first"),
    ],
)
def test_register_validation(users_repo, password, department, year):
    auth = AuthService(users_repo)

    with pytest.raises(ValidationError):
        auth.register_student(name="X", sin_number="S1", password=password, department=department, year=year)
    assert users_repo.by_id == {}


def test_authenticate_rejects_bad_credentials(people, users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "wrong-password")
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody", PASSWORD)


def test_authenticate_tolerates_placeholder_hash(users_repo):
    users_repo.create_user(username="legacy", name="Legacy", password_hash="CHANGE_ME", role=Role.ADMIN)

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("legacy", "CHANGE_ME")


def test_current_user_without_session_is_none(users_repo):
    assert AuthService(users_repo).get_current_user(None) is None


def test_admin_updates_role(people, users_repo):
    svc = UserService(users_repo)

    updated = svc.update_role(current_user=people["admin"], user_id=people["teacher_idle"].user_id, role="hod")

    assert updated.role == Role.HOD
    assert users_repo.get_by_id(people["teacher_idle"].user_id).role == Role.HOD


def test_update_role_unknown_user_is_not_found(people, users_repo):
    with pytest.raises(NotFoundError):
        UserService(users_repo).update_role(current_user=people["admin"], user_id="nope", role="teacher")


def test_update_role_unknown_role_is_invalid(people, users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).update_role(
            current_user=people["admin"], user_id=people["teacher"].user_id, role="dean"
        )


@pytest.mark.parametrize("who", ["hod", "teacher", "cse3"])
def test_user_management_is_admin_only(people, users_repo, who):
    svc = UserService(users_repo)

    with pytest.raises(AuthorizationError):
        svc.list_users(current_user=people[who])
    with pytest.raises(AuthorizationError):
        svc.update_role(current_user=people[who], user_id=people["cse1"].user_id, role="admin")


def test_admin_updates_profile_fields(people, users_repo):
    svc = UserService(users_repo)

    updated = svc.update_profile(
        current_user=people["admin"],
        user_id=people["cse1"].user_id,
        changes={"year": 2, "email": "  e25@example.edu ", "unknown": "ignored"},
    )

    assert updated.year == 2
    assert updated.email == "e25@example.edu"
    assert updated.name == people["cse1"].name


def test_admin_creates_staff_account(people, users_repo):
    svc = UserService(users_repo)

    created = svc.create_account(
        current_user=people["admin"],
        name="Ravi",
        username="teacher_ece2",
        password="abcdef",
        role="teacher",
        department="ECE",
        year=2,
    )

    assert created.role == Role.TEACHER
    assert created.department == Department.ECE
    assert created.year is None
    assert AuthService(users_repo).authenticate("teacher_ece2", "abcdef") == created


def test_student_accounts_need_cohort(people, users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).create_account(
            current_user=people["admin"], name="S", username="s1", password="abcdef", role="student"
        )


def test_register_requires_matching_confirmation(users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(ValidationError):
        auth.register_student(
            name="Asha", sin_number="E23IT010", password="abcdef", confirm_password="abcdeg", department="IT", year=2
        )
    assert users_repo.by_id == {}

    user = auth.register_student(
        name="Asha", sin_number="E23IT010", password="abcdef", confirm_password="abcdef", department="IT", year=2
    )
    assert user.username == "E23IT010"


@pytest.mark.parametrize("password", [123456, None, ["abcdef"]])
def test_register_rejects_non_string_password(users_repo, password):
    with pytest.raises(ValidationError):
        AuthService(users_repo).register_student(
            name="Asha", sin_number="E23IT010", password=password, department="IT", year=2
        )


@pytest.mark.parametrize("username, password", [(12345, PASSWORD), ("admin", 123456), (None, None)])
def test_authenticate_non_string_credentials_fail(people, users_repo, username, password):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate(username, password)


@pytest.mark.parametrize("changes", [{"department": None}, {"year": None}, {"department": None, "year": None}])
def test_student_profile_keeps_cohort(people, users_repo, changes):
    with pytest.raises(ValidationError):
        UserService(users_repo).update_profile(
            current_user=people["admin"], user_id=people["cse3"].user_id, changes=changes
        )

    stored = users_repo.get_by_id(people["cse3"].user_id)
    assert (stored.department, stored.year) == (Department.CSE, 3)


def test_staff_profile_cannot_take_a_year(people, users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).update_profile(
            current_user=people["admin"], user_id=people["teacher"].user_id, changes={"year": 2}
        )

    assert users_repo.get_by_id(people["teacher"].user_id).year is None


def test_update_profile_unknown_user_is_not_found(people, users_repo):
    with pytest.raises(NotFoundError):
        UserService(users_repo).update_profile(current_user=people["admin"], user_id="nope", changes={"name": "X"})


def test_teacher_without_year_cannot_become_student(people, users_repo):
    with pytest.raises(ValidationError):
        UserService(users_repo).update_role(
            current_user=people["admin"], user_id=people["teacher"].user_id, role="student"
        )

    assert users_repo.get_by_id(people["teacher"].user_id).role == Role.TEACHER


def test_student_promoted_to_staff_loses_year(people, users_repo):
    updated = UserService(users_repo).update_role(
        current_user=people["admin"], user_id=people["cse3"].user_id, role="teacher"
    )

    assert updated.role == Role.TEACHER
    assert updated.department == Department.CSE
    assert updated.year is None
