from __future__ import annotations

import pytest

from team_scheduler.core.enums import Role
from team_scheduler.main import create_app


class FakeSheets:
    def list_sheet_names(self, spreadsheet_id):
        return ["202503"]

    def get_values(self, spreadsheet_id, cell_range):
        type_row = [""] * 34
        type_row[2 + 3] = "出社"
        return [["header"], ["Sato"], [], type_row]


class FakeCalendar:
    def create_calendar(self, *, access_token, summary, description, time_zone):
        return "team@group.calendar.google.com"

    def insert_event(self, *, access_token, calendar_id, body):
        return "evt"


class FakeSender:
    def __init__(self):
        self.sent = []

    def send(self, subscription, payload):
        self.sent.append((subscription.user_id, payload))


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def app(monkeypatch, sender):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(sheets=FakeSheets(), calendar=FakeCalendar(), push_sender=sender)
    users = app.extensions["container"].users_repo
    users.create_user(google_sub="sub-a", sheet_name="Yamada", name="Taro Yamada", email="a@example.com", role=Role.ADMIN)
    users.create_user(google_sub="sub-s", sheet_name="Sato", name="Hanako Sato", email="s@example.com", role=Role.MEMBER)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


ADMIN = {"X-User-Id": "1"}
MEMBER = {"X-User-Id": "2"}


def test_missing_user_header_is_forbidden(client):
    resp = client.get("/api/me")

    assert resp.status_code == 403
    assert resp.get_json() == {"success": False, "error": "Authentication required"}


def test_unknown_user_is_not_found(client):
    assert client.get("/api/me", headers={"X-User-Id": "99"}).status_code == 404


def test_me_returns_current_user(client):
    resp = client.get("/api/me", headers=MEMBER)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["email"] == "s@example.com"


def test_admin_routes_reject_members(client):
    resp = client.post("/api/users", json={"name": "New", "email": "n@example.com"}, headers=MEMBER)

    assert resp.status_code == 403


def test_pre_register_user(client):
    resp = client.post(
        "/api/users",
        json={"name": "New Person", "email": "new@example.com", "sheet_name": "New"},
        headers=ADMIN,
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["google_sub"].startswith("pre_registered_")


def test_event_lifecycle(client):
    created = client.post(
        "/api/events",
        json={
            "title": "Office",
            "start_time": "2025-03-03T09:00:00",
            "end_time": "2025-03-03T18:00:00",
            "work_type": "office",
        },
        headers=MEMBER,
    )
    assert created.status_code == 201
    event_id = created.get_json()["data"]["id"]

    listed = client.get("/api/events?user_id=2&start=2025-03-01&end=2025-03-31", headers=MEMBER)
    assert [e["id"] for e in listed.get_json()["data"]] == [event_id]

    assert client.delete(f"/api/events/{event_id}", headers=MEMBER).status_code == 200
    assert client.delete(f"/api/events/{event_id}", headers=MEMBER).status_code == 404


def test_validation_errors_return_400(client):
    resp = client.post(
        "/api/events",
        json={"title": "x", "start_time": "2025-03-03T18:00", "end_time": "2025-03-03T09:00", "work_type": "office"},
        headers=MEMBER,
    )

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_non_object_body_is_rejected(client):
    resp = client.post("/api/tasks", json=["not", "an", "object"], headers=MEMBER)

    assert resp.status_code == 400


def test_attendance_day_and_report_csv(client):
    saved = client.post(
        "/api/attendance",
        json={
            "date": "2025-03-03",
            "attendance_log": [
                {"type": "check_in", "time": "09:00"},
                {"type": "break_start", "time": "12:00"},
                {"type": "break_end", "time": "13:00"},
                {"type": "check_out", "time": "18:00"},
            ],
        },
        headers=MEMBER,
    )
    assert saved.status_code == 200
    assert saved.get_json()["data"]["work_time"]["actual_work_minutes"] == 480

    resp = client.get("/api/attendance/report.csv?start=2025-03-01&end=2025-03-31", headers=ADMIN)
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_report_20250301_20250331.csv" in resp.headers["Content-Disposition"]
    assert "Hanako Sato" in resp.data.decode("utf-8-sig")


def test_members_cannot_read_other_attendance(client):
    assert client.get("/api/attendance?user_id=1", headers=MEMBER).status_code == 403


def test_sheet_import_through_api(client, app):
    resp = client.post(
        "/api/admin/import-sheets",
        json={"spreadsheet_id": "sheet-1", "sheet_name": "202503"},
        headers=ADMIN,
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["imported"] == 1
    events = app.extensions["container"].events_repo.list_events(user_id=2)
    assert [e.start_time.isoformat() for e in events] == ["2025-03-03T09:00:00"]


def test_export_calendar_requires_token(client):
    resp = client.post("/api/export-calendar", json={}, headers=MEMBER)

    assert resp.status_code == 403


def test_export_calendar_with_token(client):
    resp = client.post("/api/export-calendar", json={"access_token": "tok", "days": 5}, headers=MEMBER)

    assert resp.status_code == 200
    assert resp.get_json()["data"]["calendarId"] == "team@group.calendar.google.com"


def test_push_subscribe_and_send(client, sender):
    assert client.get("/api/push/vapid-public-key").get_json()["data"] == {"publicKey": "test-vapid-public-key"}

    subscription = {"endpoint": "https://push.example.com/1", "keys": {"p256dh": "k", "auth": "a"}}
    assert client.post("/api/push/subscribe", json={"subscription": subscription}, headers=MEMBER).status_code == 201

    assert client.post("/api/push/send", json={"user_id": 2, "title": "Hi"}, headers=ADMIN).status_code == 200
    assert sender.sent[0][0] == 2


def test_members_cannot_push_to_others(client):
    resp = client.post("/api/push/send", json={"user_id": 1, "title": "Hi"}, headers=MEMBER)

    assert resp.status_code == 403


def test_unknown_route_returns_json_404(client):
    resp = client.get("/api/nope", headers=MEMBER)

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_attendance_entry_with_numeric_time_is_dropped(client):
    resp = client.post(
        "/api/attendance",
        json={"date": "2025-03-03", "attendance_log": [{"type": "check_in", "time": 930}]},
        headers=MEMBER,
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["attendance_log"] == []


def test_event_with_numeric_start_time_is_rejected(client):
    resp = client.post(
        "/api/events",
        json={"title": "x", "start_time": 1700000000, "end_time": "2025-03-03T18:00", "work_type": "office"},
        headers=MEMBER,
    )

    assert resp.status_code == 400


def test_export_calendar_rejects_non_string_token(client):
    resp = client.post("/api/export-calendar", json={"access_token": 123}, headers=MEMBER)

    assert resp.status_code == 400


def test_export_calendar_flags_must_be_booleans(client):
    resp = client.post(
        "/api/export-calendar",
        json={"access_token": "tok", "include_events": "false"},
        headers=MEMBER,
    )

    assert resp.status_code == 400


def test_notify_admin_requires_an_admin_recipient(client, sender):
    subscription = {"endpoint": "https://push.example.com/2", "keys": {"p256dh": "k", "auth": "a"}}
    client.post("/api/push/subscribe", json={"subscription": subscription}, headers=MEMBER)

    resp = client.post(
        "/api/push/notify-admin",
        json={"admin_id": 2, "user_name": "New", "user_email": "new@example.com"},
        headers=MEMBER,
    )

    assert resp.status_code == 400
    assert sender.sent == []
