from __future__ import annotations

from flask import Flask

from ..common.http import daily_meal_to_dict, error_response, json_body, meal_to_dict, ok, query_arg
from ..common.validators import require_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.meal_service

    @app.route("/api/meals", methods=["POST"], endpoint="api_record_meal")
    def api_record_meal():
        try:
            data = json_body()
            meal = service.record_meal(
                require_id(data.get("child_id"), "child_id"),
                data.get("meal_type"),
                data.get("description"),
                data.get("consumed_amount"),
                meal_date=data.get("meal_date"),
                notes=data.get("notes"),
            )
            return ok(meal_to_dict(meal), 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/children/<int:child_id>/meals", methods=["GET"], endpoint="api_child_meals")
    def api_child_meals(child_id: int):
        try:
            meals = service.get_child_meals(child_id, query_arg("date"), query_arg("meal_type"))
            return ok([meal_to_dict(m) for m in meals])
        except Exception as e:
            return error_response(e)

    @app.route("/api/meals/daily", methods=["GET"], endpoint="api_daily_meals")
    def api_daily_meals():
        try:
            rows = service.get_daily_meals(query_arg("date"))
            return ok([daily_meal_to_dict(r) for r in rows])
        except Exception as e:
            return error_response(e)
