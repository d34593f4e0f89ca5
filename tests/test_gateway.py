from __future__ import annotations

from datetime import datetime

import pytest

from src.childcare_register.childcare_register.main import create_app


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="config.testing")
    return app.test_client()


def test_healthcheck(client):
    resp = client.get("/api/healthcheck")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "ok"


def test_list_and_get_children(client):
    resp = client.get("/api/children")
    assert [c["name"] for c in resp.get_json()["data"]] == ["Ava Cole", "Mia Tran", "Noah Ford"]

    assert client.get("/api/children/1").get_json()["data"]["parent_name"] == "Lan Tran"

    missing = client.get("/api/children/404")
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "not_found"


def test_check_in_and_out_over_http(client):
    resp = client.post("/api/attendance/check-in", json={"child_id": 1, "notes": "Sleepy"})
    assert resp.status_code == 201
    record = resp.get_json()["data"]
    assert record["check_out_time"] is None
    assert record["notes"] == "Sleepy"

    dup = client.post("/api/attendance/check-in", json={"child_id": 1})
    assert dup.status_code == 409
    assert dup.get_json() == {
        "success": False,
        "error": "conflict",
        "message": "Child with id 1 is already checked in",
    }

    current = client.get("/api/attendance/current").get_json()["data"]
    assert [r["id"] for r in current] == [record["id"]]

    out = client.post("/api/attendance/check-out", json={"attendance_id": record["id"]})
    assert out.status_code == 200
    body = out.get_json()["data"]
    assert body["notes"] == "Sleepy"
    assert datetime.fromisoformat(body["check_out_time"]) >= datetime.fromisoformat(body["check_in_time"])

    again = client.post("/api/attendance/check-out", json={"attendance_id": record["id"]})
    assert again.status_code == 409


def test_check_in_validation_and_not_found(client):
    assert client.post("/api/attendance/check-in", json={}).status_code == 400
    assert client.post("/api/attendance/check-in", json={"child_id": True}).status_code == 400
    assert client.post("/api/attendance/check-in", json=[1]).status_code == 400

    resp = client.post("/api/attendance/check-in", json={"child_id": 99})
    assert resp.status_code == 404
    assert "99" in resp.get_json()["message"]


def test_check_out_unknown_record(client):
    resp = client.post("/api/attendance/check-out", json={"attendance_id": 5, "notes": "x"})
    assert resp.status_code == 404


def test_check_out_null_notes_is_rejected(client, attendance_repo):
    record = client.post("/api/attendance/check-in", json={"child_id": 2, "notes": "Cough"}).get_json()["data"]

    resp = client.post("/api/attendance/check-out", json={"attendance_id": record["id"], "notes": None})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"
    assert attendance_repo.get_by_id(record["id"]).is_open

    cleared = client.post("/api/attendance/check-out", json={"attendance_id": record["id"], "notes": ""})
    assert cleared.status_code == 200
    assert cleared.get_json()["data"]["notes"] == ""


def test_child_attendance_query(client, container):
    rec = container.attendance_service.check_in(2, now=datetime(2026, 3, 2, 8, 0))

    day = client.get("/api/children/2/attendance?date=2026-03-02").get_json()["data"]
    other = client.get("/api/children/2/attendance?date=2026-03-03").get_json()["data"]

    assert [r["id"] for r in day] == [rec.id]
    assert other == []
    assert client.get("/api/children/2/attendance?date=03/02/2026").status_code == 400
    assert client.get("/api/children/2/attendance/open").get_json()["data"]["id"] == rec.id


def test_record_and_query_meals(client):
    resp = client.post(
        "/api/meals",
        json={
            "child_id": 1,
            "meal_type": "lunch",
            "description": "Chicken and rice",
            "consumed_amount": "half",
            "meal_date": "2026-03-02T12:00:00",
        },
    )
    assert resp.status_code == 201
    meal = resp.get_json()["data"]
    assert meal["consumed_label"] == "Half"
    assert meal["notes"] is None

    client.post(
        "/api/meals",
        json={
            "child_id": 1,
            "meal_type": "snack",
            "description": "Pear",
            "consumed_amount": "full",
            "meal_date": "2026-03-02T15:00:00",
        },
    )

    lunches = client.get("/api/children/1/meals?date=2026-03-02&meal_type=lunch").get_json()["data"]
    assert [m["id"] for m in lunches] == [meal["id"]]

    daily = client.get("/api/meals/daily?date=2026-03-02").get_json()["data"]
    assert [m["description"] for m in daily] == ["Chicken and rice", "Pear"]
    assert daily[0]["child_name"] == "Mia Tran"
    assert daily[0]["child_parent_name"] == "Lan Tran"


def test_record_meal_errors(client):
    bad_type = client.post(
        "/api/meals",
        json={"child_id": 1, "meal_type": "brunch", "description": "Eggs", "consumed_amount": "full"},
    )
    assert bad_type.status_code == 400
    assert bad_type.get_json()["error"] == "validation_error"

    missing_child = client.post(
        "/api/meals",
        json={"child_id": 50, "meal_type": "lunch", "description": "Eggs", "consumed_amount": "full"},
    )
    assert missing_child.status_code == 404


def test_unexpected_errors_are_opaque(client, attendance_repo, monkeypatch):
    def boom():
        raise RuntimeError("db password is hunter2")

    monkeypatch.setattr(attendance_repo, "list_open", boom)

    resp = client.get("/api/attendance/current")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "internal_error"
    assert "hunter2" not in resp.get_data(as_text=True)
