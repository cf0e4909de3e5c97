from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import error_response, json_ok, request_json, user_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    def _start_session(user, remember: bool) -> None:
        s_user = auth.session_user(user)
        session.clear()
        session.permanent = bool(remember)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_student():
        try:
            data = request_json()
            user = auth.register_student(
                name=data.get("name", ""),
                sin_number=data.get("sin_number") or data.get("username") or "",
                password=data.get("password", ""),
                department=data.get("department"),
                year=data.get("year"),
                email=data.get("email"),
                confirm_password=data.get("confirm_password"),
            )
            _start_session(user, remember=False)
            return json_ok(user, 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = request_json()
            user = auth.authenticate(data.get("username", ""), data.get("password", ""))
            app.permanent_session_lifetime = timedelta(
                days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS))
            )
            _start_session(user, remember=bool(data.get("remember_me")))
            return json_ok(user)
        except Exception as e:
            return error_response(e)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return json_ok({"message": "Logged out"})

    @app.route("/api/user", methods=["GET"], endpoint="current_user")
    @user_required(auth)
    def me(current_user):
        return json_ok(current_user)

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @user_required(auth, Role.ADMIN)
    def list_users(current_user):
        try:
            return json_ok(container.user_service.list_users(current_user=current_user))
        except Exception as e:
            return error_response(e)

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @user_required(auth, Role.ADMIN)
    def create_user(current_user):
        try:
            data = request_json()
            user = container.user_service.create_account(
                current_user=current_user,
                name=data.get("name", ""),
                username=data.get("username", ""),
                password=data.get("password", ""),
                role=data.get("role", Role.TEACHER.value),
                department=data.get("department"),
                year=data.get("year"),
                email=data.get("email"),
            )
            return json_ok(user, 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/users/<user_id>/role", methods=["PATCH"], endpoint="update_user_role")
    @user_required(auth, Role.ADMIN)
    def update_role(user_id: str, current_user):
        try:
            data = request_json()
            user = container.user_service.update_role(
                current_user=current_user,
                user_id=user_id,
                role=data.get("role"),
            )
            return json_ok(user)
        except Exception as e:
            return error_response(e)

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    @user_required(auth, Role.ADMIN)
    def update_user(user_id: str, current_user):
        try:
            user = container.user_service.update_profile(
                current_user=current_user,
                user_id=user_id,
                changes=request_json(),
            )
            return json_ok(user)
        except Exception as e:
            return error_response(e)
