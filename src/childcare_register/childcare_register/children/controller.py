from __future__ import annotations

from datetime import datetime, timezone

from flask import Flask

from ..common.http import child_to_dict, error_response, ok
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    children = container.children_repo

    @app.route("/api/healthcheck", methods=["GET"], endpoint="api_healthcheck")
    def api_healthcheck():
        return ok({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.route("/api/children", methods=["GET"], endpoint="api_children")
    def api_children():
        try:
            return ok([child_to_dict(c) for c in children.list_all()])
        except Exception as e:
            return error_response(e)

    @app.route("/api/children/<int:child_id>", methods=["GET"], endpoint="api_child")
    def api_child(child_id: int):
        try:
            child = children.get_by_id(child_id)
            if not child:
                raise NotFoundError(f"Child with id {child_id} not found")
            return ok(child_to_dict(child))
        except Exception as e:
            return error_response(e)
