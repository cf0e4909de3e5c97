from __future__ import annotations

from flask import Flask

from ..common.http import error_response, json_ok, request_json, user_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_only = user_required(container.auth_service, Role.ADMIN)

    @app.route("/api/department-assignments", methods=["GET"], endpoint="list_assignments")
    @admin_only
    def list_assignments(current_user):
        try:
            details = container.assignment_service.list_all(current_user=current_user)
            return json_ok(
                [
                    {
                        **_flat(d.assignment),
                        "class_advisor": d.class_advisor,
                        "hod": d.hod,
                    }
                    for d in details
                ]
            )
        except Exception as e:
            return error_response(e)

    @app.route("/api/department-assignments", methods=["POST"], endpoint="create_assignment")
    @admin_only
    def create_assignment(current_user):
        try:
            data = request_json()
            created = container.assignment_service.create(
                current_user=current_user,
                department=data.get("department"),
                year=data.get("year"),
                class_advisor_id=data.get("class_advisor_id"),
                hod_id=data.get("hod_id"),
            )
            return json_ok(created, 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/department-assignments/<assignment_id>", methods=["PATCH"], endpoint="update_assignment")
    @admin_only
    def update_assignment(assignment_id: str, current_user):
        try:
            updated = container.assignment_service.update(
                current_user=current_user,
                assignment_id=assignment_id,
                changes=request_json(),
            )
            return json_ok(updated)
        except Exception as e:
            return error_response(e)


def _flat(assignment) -> dict:
    return {
        "assignment_id": assignment.assignment_id,
        "department": assignment.department,
        "year": assignment.year,
        "class_advisor_id": assignment.class_advisor_id,
        "hod_id": assignment.hod_id,
        "created_at": assignment.created_at,
    }
