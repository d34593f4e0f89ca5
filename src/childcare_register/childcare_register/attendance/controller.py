from __future__ import annotations

from flask import Flask

from ..common.http import attendance_to_dict, error_response, json_body, ok, query_arg
from ..common.validators import require_id
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in():
        try:
            data = json_body()
            child_id = require_id(data.get("child_id"), "child_id")
            record = service.check_in(child_id, data.get("notes"))
            return ok(attendance_to_dict(record), 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    def api_check_out():
        try:
            data = json_body()
            attendance_id = require_id(data.get("attendance_id"), "attendance_id")
            # Only a missing "notes" key keeps the check-in notes.
            if "notes" in data and data["notes"] is None:
                raise ValidationError("notes must be a string when provided")
            record = service.check_out(attendance_id, data.get("notes"))
            return ok(attendance_to_dict(record))
        except Exception as e:
            return error_response(e)

    @app.route("/api/children/<int:child_id>/attendance", methods=["GET"], endpoint="api_child_attendance")
    def api_child_attendance(child_id: int):
        try:
            records = service.get_child_attendance(child_id, query_arg("date"))
            return ok([attendance_to_dict(r) for r in records])
        except Exception as e:
            return error_response(e)

    @app.route("/api/children/<int:child_id>/attendance/open", methods=["GET"], endpoint="api_child_open_session")
    def api_child_open_session(child_id: int):
        try:
            record = service.get_open_session(child_id)
            return ok(attendance_to_dict(record) if record else None)
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/current", methods=["GET"], endpoint="api_current_attendance")
    def api_current_attendance():
        try:
            return ok([attendance_to_dict(r) for r in service.get_current_attendance()])
        except Exception as e:
            return error_response(e)
