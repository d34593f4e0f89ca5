from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from flask import jsonify, request

from ..attendance.model import AttendanceRecord
from ..children.model import Child
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..meals.model import DailyMealRow, MealRecord

logger = logging.getLogger(__name__)

_ERROR_STATUS = {
    ValidationError: (400, "validation_error"),
    NotFoundError: (404, "not_found"),
    ConflictError: (409, "conflict"),
}


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def child_to_dict(child: Child) -> dict:
    return {
        "id": child.id,
        "name": child.name,
        "parent_name": child.parent_name,
        "parent_phone": child.parent_phone,
        "parent_email": child.parent_email,
        "created_at": _jsonable(child.created_at),
    }


def attendance_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "child_id": r.child_id,
        "check_in_time": _jsonable(r.check_in_time),
        "check_out_time": _jsonable(r.check_out_time),
        "notes": r.notes,
        "created_at": _jsonable(r.created_at),
    }


def meal_to_dict(m: MealRecord) -> dict:
    return {
        "id": m.id,
        "child_id": m.child_id,
        "meal_type": _jsonable(m.meal_type),
        "description": m.description,
        "consumed_amount": m.consumed_amount,
        "consumed_label": m.consumed_label,
        "meal_date": _jsonable(m.meal_date),
        "notes": m.notes,
        "created_at": _jsonable(m.created_at),
    }


def daily_meal_to_dict(row: DailyMealRow) -> dict:
    out = meal_to_dict(row.meal)
    out["child_name"] = row.child_name
    out["child_parent_name"] = row.child_parent_name
    return out


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def error_response(exc: Exception):
    """Map an exception to the JSON error envelope.

    Domain errors are surfaced verbatim; anything else is an opaque 500.
    """
    for exc_type, (status, code) in _ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return jsonify({"success": False, "error": code, "message": str(exc)}), status

    logger.exception("Unhandled error while serving %s %s", request.method, request.path)
    return jsonify({"success": False, "error": "internal_error", "message": "Internal server error"}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_arg(name: str) -> Optional[str]:
    value = request.args.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()
