from __future__ import annotations

from flask import Flask

from ..common.http import error_response, json_ok, user_required
from ..common.serialization import to_jsonable
from ..core.enums import Role
from ..container import Container
from .model import ActivityLogEntry


def _entry(e: ActivityLogEntry) -> dict:
    return {
        **to_jsonable(e.log),
        "leave_request": to_jsonable(e.leave_request),
        "action_by": to_jsonable(e.action_by),
        "student": to_jsonable(e.student),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/activity-logs", methods=["GET"], endpoint="activity_logs")
    @user_required(container.auth_service, Role.TEACHER, Role.HOD, Role.ADMIN)
    def activity_logs(current_user):
        try:
            entries = container.activity_service.list_for_reviewer(reviewer=current_user)
            return json_ok([_entry(e) for e in entries])
        except Exception as e:
            return error_response(e)
