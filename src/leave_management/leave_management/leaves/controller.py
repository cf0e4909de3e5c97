from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, json_ok, request_json, user_required
from ..common.serialization import to_jsonable
from ..core.constants import DEFAULT_RECENT_DAYS
from ..core.enums import Role
from ..container import Container
from .model import LeaveRequestWithStudent


def _with_student(item: LeaveRequestWithStudent) -> dict:
    return {**to_jsonable(item.request), "student": to_jsonable(item.student)}


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    reviewers = user_required(auth, Role.TEACHER, Role.HOD, Role.ADMIN)

    @app.route("/api/leave-requests", methods=["POST"], endpoint="submit_leave")
    @user_required(auth, Role.STUDENT)
    def submit_leave(current_user):
        try:
            data = request_json()
            created = container.leave_service.submit(
                current_user=current_user,
                leave_type=data.get("type") or data.get("leave_type"),
                from_date=parse_iso_date(data.get("from_date") or ""),
                to_date=parse_iso_date(data.get("to_date") or ""),
                reason=data.get("reason", ""),
            )
            return json_ok(created, 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave-requests/my", methods=["GET"], endpoint="my_leaves")
    @user_required(auth)
    def my_leaves(current_user):
        try:
            return json_ok(container.leave_service.list_mine(current_user=current_user))
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave-requests/pending", methods=["GET"], endpoint="pending_leaves")
    @reviewers
    def pending_leaves(current_user):
        try:
            items = container.leave_service.list_pending_for_reviewer(reviewer=current_user)
            return json_ok([_with_student(i) for i in items])
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave-requests/recent", methods=["GET"], endpoint="recent_leaves")
    @reviewers
    def recent_leaves(current_user):
        try:
            items = container.leave_service.list_recent_for_reviewer(
                reviewer=current_user,
                days=int(app.config.get("RECENT_DAYS", DEFAULT_RECENT_DAYS)),
            )
            return json_ok([_with_student(i) for i in items])
        except Exception as e:
            return error_response(e)

    @app.route("/api/leave-requests/<request_id>/status", methods=["PATCH"], endpoint="update_leave_status")
    @reviewers
    def update_leave_status(request_id: str, current_user):
        try:
            data = request_json()
            result = container.leave_service.update_status(
                request_id=request_id,
                status=data.get("status"),
                reviewer=current_user,
                comments=data.get("comments"),
            )
            return json_ok(
                {
                    **to_jsonable(result.request),
                    "outcome": result.outcome,
                    "previous_status": result.previous_status,
                    "previous_reviewer_id": result.previous_reviewer_id,
                }
            )
        except Exception as e:
            return error_response(e)
