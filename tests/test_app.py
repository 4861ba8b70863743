from __future__ import annotations

import io
from datetime import date, timedelta

import pytest
from openpyxl import load_workbook

from src.attendance_ledger.attendance_ledger.attendance import engine
from src.attendance_ledger.attendance_ledger.common.datetime_utils import now_local
from src.attendance_ledger.attendance_ledger.ledger.store import LedgerStore
from src.attendance_ledger.attendance_ledger.main import create_app, get_container
from src.attendance_ledger.attendance_ledger.storage.mysql_storage import MySQLKeyValueStorage


@pytest.fixture
def client():
    app = create_app("config.testing")
    return app.test_client()


def login(client, user_id):
    res = client.post("/api/session", json={"userId": user_id})
    assert res.status_code == 200
    return res.get_json()["user"]


def test_users_are_seeded_and_session_is_required(client):
    users = client.get("/api/users").get_json()

    assert [u["name"] for u in users] == ["Alex Rivera", "Sarah Chen", "Jordan Smith"]
    assert client.post("/api/checkin").status_code == 401
    assert client.get("/api/session").get_json() == {"user": None}


def test_check_in_and_out_flow(client):
    login(client, "u1")

    res = client.post("/api/checkin")
    assert res.status_code == 201
    log = res.get_json()["log"]
    assert log["status"] == "active"
    assert log["event"] == "CHECKED_IN"

    assert client.post("/api/checkin").status_code == 409

    today = client.get("/api/me/today").get_json()
    assert today["activeLog"]["id"] == log["id"]

    res = client.post("/api/checkout")
    assert res.status_code == 200
    closed = res.get_json()["log"]
    assert closed["id"] == log["id"]
    assert closed["status"] == "completed"
    assert closed["event"] == "CHECKED_OUT"
    assert closed["durationMinutes"] == 0

    assert client.post("/api/checkout").status_code == 409
    assert [l["id"] for l in client.get("/api/me/logs").get_json()] == [log["id"]]


def test_manual_entry_validation(client):
    login(client, "u1")

    bad = client.post(
        "/api/logs/manual",
        json={"date": "2026-02-02", "type": "OFFICE_WORK", "startTime": "17:00", "endTime": "09:00"},
    )
    assert bad.status_code == 400

    ok = client.post("/api/logs/manual", json={"date": "2026-02-03", "type": "CASUAL_LEAVE", "notes": "Errand"})
    assert ok.status_code == 201
    assert ok.get_json()["log"]["remarks"] == "Errand"
    assert ok.get_json()["log"]["event"] is None


def test_hr_only_routes(client):
    login(client, "u1")
    assert client.get("/api/logs").status_code == 403
    assert client.post("/api/users", json={"name": "X", "email": "x@example.com"}).status_code == 403

    login(client, "u2")
    res = client.post("/api/users", json={"name": "Dana Lee", "email": "dana@example.com", "department": "Ops"})
    assert res.status_code == 201
    new_id = res.get_json()["user"]["id"]
    assert client.delete(f"/api/users/{new_id}").status_code == 200
    assert client.delete(f"/api/users/{new_id}").status_code == 404


def test_report_export_download(client):
    login(client, "u1")
    client.post("/api/checkin")
    client.post("/api/checkout")
    login(client, "u2")

    start = (date.today() - timedelta(days=6)).isoformat()
    end = date.today().isoformat()
    res = client.get(f"/reports/export.xlsx?start={start}&end={end}")

    assert res.status_code == 200
    assert f"filename=Attendance_Report_{start}_to_{end}.xlsx" in res.headers["Content-Disposition"]
    wb = load_workbook(io.BytesIO(res.data))
    assert wb.sheetnames == ["Alex Rivera"]
    assert wb["Alex Rivera"].max_row == 8

    assert client.get("/reports/export.xlsx?start=&end=").status_code == 400


def test_insights_without_key_returns_placeholder(client):
    login(client, "u2")

    res = client.post("/api/insights")

    assert res.status_code == 200
    assert "missing" in res.get_json()["insight"]


def test_theme_toggle(client):
    assert client.get("/api/theme").get_json() == {"theme": "dark"}
    assert client.put("/api/theme", json={}).get_json() == {"theme": "light"}
    assert client.put("/api/theme", json={"theme": "dark"}).get_json() == {"theme": "dark"}
    assert client.put("/api/theme", json={"theme": "sepia"}).status_code == 400


def test_container_is_exposed(client):
    container = get_container(client.application)
    assert container.session_service.current_user() is None


def test_requests_pick_up_writes_from_other_processes(kv_db, alex):
    app = create_app("config.testing", storage=MySQLKeyValueStorage(kv_db))
    delivered = []
    get_container(app).bus.subscribe(delivered.append)
    other = LedgerStore(MySQLKeyValueStorage(kv_db))

    checkin = engine.start_work(alex, now_local())
    other.save_log(checkin)
    app.test_client().get("/api/users")

    assert delivered == [checkin]
