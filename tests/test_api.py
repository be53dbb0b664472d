from __future__ import annotations

from datetime import date, datetime

import pytest

from src.kintai_system.kintai_system.analytics.model import TagTotal
from src.kintai_system.kintai_system.analytics.service import AnalyticsService
from src.kintai_system.kintai_system.attendance.service import AttendanceService
from src.kintai_system.kintai_system.container import Container
from src.kintai_system.kintai_system.core.enums import AttendanceStatus, Role
from src.kintai_system.kintai_system.main import create_app
from src.kintai_system.kintai_system.reports.service import DailyReportService
from src.kintai_system.kintai_system.tags.model import Tag
from src.kintai_system.kintai_system.tags.service import TagService
from src.kintai_system.kintai_system.tags.sync_service import TagSyncService
from src.kintai_system.kintai_system.users.service import AuthService, UserService
from src.kintai_system.kintai_system.users.tokens import TokenService
from tests.fakes import (
    PASSWORD,
    FakeAnalyticsRepo,
    FakeAttendanceRepo,
    FakeDepartmentRepo,
    FakeNotionClient,
    FakeReportRepo,
    FakeSettingRepo,
    FakeTagRepo,
    FakeUserRepo,
    fixed_clock,
    make_user,
    notion_page,
)

NOW = datetime(2024, 1, 15, 9, 15, 0)


@pytest.fixture
def fakes():
    users = FakeUserRepo(
        [
            make_user(1, email="user@company.com", employee_code="E001"),
            make_user(2, role=Role.ADMIN, email="admin@company.com", employee_code="A001"),
        ]
    )
    tags = FakeTagRepo(
        [
            Tag(tag_id=1, name="Project A", notion_id="p-1", is_active=True),
            Tag(tag_id=2, name="Project B", notion_id="p-2", is_active=True),
        ]
    )
    return {
        "users": users,
        "attendance": FakeAttendanceRepo(users),
        "tags": tags,
        "reports": FakeReportRepo(tags),
        "settings": FakeSettingRepo(),
        "analytics": FakeAnalyticsRepo(tag_rows=[TagTotal(tag_id=1, tag_name="Project A", total_hours=4.0)]),
        "notion": FakeNotionClient([notion_page("p-9", "Project Z")]),
    }


@pytest.fixture
def client(fakes):
    tokens = TokenService(secret="test-jwt-secret", refresh_secret="test-jwt-refresh-secret")
    clock = fixed_clock(NOW)
    container = Container(
        conn=None,
        token_service=tokens,
        auth_service=AuthService(fakes["users"], tokens),
        user_service=UserService(fakes["users"], FakeDepartmentRepo()),
        attendance_service=AttendanceService(
            fakes["attendance"], fakes["users"], clock=clock, timezone="Asia/Tokyo"
        ),
        report_service=DailyReportService(fakes["reports"], fakes["tags"]),
        analytics_service=AnalyticsService(fakes["analytics"], today=lambda: NOW.date()),
        tag_service=TagService(fakes["tags"]),
        tag_sync_service=TagSyncService(
            fakes["tags"], fakes["settings"], client_factory=lambda: fakes["notion"], clock=clock
        ),
    )
    app = create_app(container)
    return app.test_client()


def _login(client, email):
    resp = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['data']['token']}"}


@pytest.fixture
def user_headers(client):
    return _login(client, "user@company.com")


@pytest.fixture
def admin_headers(client):
    return _login(client, "admin@company.com")


def test_health(client):
    resp = client.get("/health")
    assert resp.get_json() == {"success": True, "data": {"status": "ok"}, "message": None}


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/nope")
    body = resp.get_json()
    assert resp.status_code == 404
    assert body["success"] is False
    assert body["message"] == "Route /api/nope not found"


def test_login_failure(client):
    resp = client.post("/api/auth/login", json={"email": "user@company.com", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_missing_and_invalid_tokens(client):
    assert client.get("/api/attendance/today").status_code == 401
    assert client.get("/api/attendance/today", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_refresh_and_me(client):
    login = client.post("/api/auth/login", json={"email": "user@company.com", "password": PASSWORD}).get_json()
    refreshed = client.post("/api/auth/refresh", json={"refresh_token": login["data"]["refresh_token"]})
    assert refreshed.status_code == 200

    headers = {"Authorization": f"Bearer {refreshed.get_json()['data']['token']}"}
    me = client.get("/api/auth/me", headers=headers).get_json()
    assert me["data"]["email"] == "user@company.com"


def test_forgot_password(client):
    assert client.post("/api/auth/forgot-password", json={}).status_code == 400
    assert client.post("/api/auth/forgot-password", json={"email": "ghost@company.com"}).status_code == 200


def test_admin_routes_require_admin(client, user_headers, admin_headers):
    assert client.get("/api/admin/employees", headers=user_headers).status_code == 403
    resp = client.get("/api/admin/employees", headers=admin_headers)
    assert resp.status_code == 200
    assert [u["employee_code"] for u in resp.get_json()["data"]] == ["A001", "E001"]


def test_clock_in_and_out_flow(client, user_headers):
    today = client.get("/api/attendance/today", headers=user_headers).get_json()
    assert today["data"] is None

    resp = client.post("/api/attendance/clock-in", headers=user_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == AttendanceStatus.LATE.value
    assert resp.get_json()["message"] == "Clocked in (late)"

    again = client.post("/api/attendance/clock-in", headers=user_headers)
    assert again.status_code == 400

    out = client.post("/api/attendance/clock-out", headers=user_headers, json={"break_minutes": 30})
    assert out.status_code == 200
    assert out.get_json()["data"]["clock_out"] == NOW.isoformat()
    assert out.get_json()["message"] == "Clocked out"


def test_clock_out_rejects_negative_break(client, user_headers):
    client.post("/api/attendance/clock-in", headers=user_headers)
    resp = client.post("/api/attendance/clock-out", headers=user_headers, json={"break_minutes": -5})
    assert resp.status_code == 400


def test_daily_report_create_and_over_limit(client, user_headers, fakes):
    ok = client.post(
        "/api/reports/daily",
        headers=user_headers,
        json={
            "date": "2024-01-15",
            "work_content": "Worked",
            "tag_efforts": [{"tag_id": 1, "hours": 3}, {"tag_id": 2, "hours": 5}],
        },
    )
    assert ok.status_code == 201
    assert ok.get_json()["data"]["total_hours"] == 8.0

    too_much = client.post(
        "/api/reports/daily",
        headers=user_headers,
        json={
            "date": "2024-01-16",
            "work_content": "Worked",
            "tag_efforts": [{"tag_id": 1, "hours": 5}, {"tag_id": 2, "hours": 4}],
        },
    )
    assert too_much.status_code == 400
    assert len(fakes["reports"].reports) == 1

    fetched = client.get("/api/reports/daily?date=2024-01-15", headers=user_headers).get_json()
    assert [e["tag_name"] for e in fetched["data"]["tag_efforts"]] == ["Project A", "Project B"]


def test_daily_report_requires_date_query(client, user_headers):
    assert client.get("/api/reports/daily", headers=user_headers).status_code == 400
    assert client.get("/api/reports/daily?date=15-01-2024", headers=user_headers).status_code == 400


def test_report_update_by_other_user_is_forbidden(client, user_headers, admin_headers):
    created = client.post(
        "/api/reports/daily", headers=user_headers, json={"date": "2024-01-15", "work_content": "Mine"}
    ).get_json()["data"]

    resp = client.put(
        f"/api/reports/daily/{created['report_id']}", headers=admin_headers, json={"work_content": "Hijack"}
    )
    assert resp.status_code == 403


def test_effort_summary(client, user_headers):
    resp = client.get("/api/reports/efforts/summary?start_date=2024-01-01&end_date=2024-01-31", headers=user_headers)
    assert resp.get_json()["data"][0]["percentage"] == 100.0
    assert client.get("/api/reports/efforts/summary", headers=user_headers).status_code == 400


def test_tag_search_and_admin_sync(client, user_headers, admin_headers, fakes):
    found = client.get("/api/tags/search", query_string={"q": "project b"}, headers=user_headers).get_json()["data"]
    assert [t["name"] for t in found] == ["Project B"]
    assert client.get("/api/tags/search", headers=user_headers).status_code == 400

    assert client.post("/api/tags/sync", headers=user_headers).status_code == 403
    synced = client.post("/api/admin/tags/sync", headers=admin_headers).get_json()["data"]
    assert synced["new_tags"] == 1

    status = client.get("/api/admin/tags/sync-status", headers=admin_headers).get_json()["data"]
    assert status == synced


def test_admin_tag_create_and_update(client, admin_headers):
    assert client.post("/api/admin/tags", headers=admin_headers, json={"name": " "}).status_code == 400

    created = client.post("/api/admin/tags", headers=admin_headers, json={"name": "Internal"}).get_json()["data"]
    updated = client.put(
        f"/api/admin/tags/{created['tag_id']}", headers=admin_headers, json={"is_active": False}
    ).get_json()["data"]
    assert updated["name"] == "Internal"
    assert updated["is_active"] is False


def test_admin_attendance_update_and_export(client, admin_headers, fakes):
    record = fakes["attendance"].add(user_id=1, work_date=date(2024, 1, 15), status=AttendanceStatus.PRESENT)

    resp = client.put(
        f"/api/admin/attendance/{record.attendance_id}",
        headers=admin_headers,
        json={"clock_in": "2024-01-15T09:00:00", "clock_out": "2024-01-15T18:30:00", "break_minutes": 60},
    )
    assert resp.get_json()["data"]["total_hours"] == 8.5

    listed = client.get("/api/admin/attendance/all?date=2024-01-15", headers=admin_headers).get_json()["data"]
    assert listed[0]["user"]["employee_code"] == "E001"

    csv_resp = client.get(
        "/api/admin/attendance/export.csv?start=2024-01-01&end=2024-01-31", headers=admin_headers
    )
    assert csv_resp.mimetype == "text/csv"
    text = csv_resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("work_date,user_id,employee_code")
    assert "E001" in text


def test_admin_monthly_report(client, admin_headers):
    data = client.get("/api/admin/reports/monthly?year=2024&month=2", headers=admin_headers).get_json()["data"]
    assert data["period"] == {"start_date": "2024-02-01", "end_date": "2024-02-29"}


def test_login_rejects_non_string_credentials(client):
    resp = client.post("/api/auth/login", json={"email": 123, "password": "x"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert client.post("/api/auth/login", json={"email": "user@company.com", "password": 123}).status_code == 400
    assert client.post("/api/auth/forgot-password", json={"email": 123}).status_code == 400


def test_report_create_rejects_non_string_notes(client, user_headers, fakes):
    resp = client.post(
        "/api/reports/daily",
        headers=user_headers,
        json={"date": "2024-01-15", "work_content": "Worked", "notes": 5},
    )
    assert resp.status_code == 400
    assert fakes["reports"].reports == {}


def test_report_hours_with_three_decimals_are_rejected(client, user_headers, fakes):
    resp = client.post(
        "/api/reports/daily",
        headers=user_headers,
        json={
            "date": "2024-01-15",
            "work_content": "Worked",
            "tag_efforts": [{"tag_id": 1, "hours": 4.005}, {"tag_id": 2, "hours": 3.995}],
        },
    )
    assert resp.status_code == 400
    assert fakes["reports"].reports == {}


def test_admin_tag_is_active_must_be_boolean(client, admin_headers, fakes):
    created = client.post("/api/admin/tags", headers=admin_headers, json={"name": "Ops", "is_active": "false"})
    assert created.status_code == 400
    assert [t.name for t in fakes["tags"].tags.values()] == ["Project A", "Project B"]

    resp = client.put("/api/admin/tags/1", headers=admin_headers, json={"is_active": "false"})
    assert resp.status_code == 400
    assert fakes["tags"].tags[1].is_active is True


def test_admin_attendance_update_converts_offsets_to_local_time(client, admin_headers, fakes):
    record = fakes["attendance"].add(user_id=1, work_date=date(2024, 1, 15), status=AttendanceStatus.PRESENT)

    resp = client.put(
        f"/api/admin/attendance/{record.attendance_id}",
        headers=admin_headers,
        json={"clock_in": "2024-01-15T00:00:00Z", "clock_out": "2024-01-15T18:30:00+09:00", "break_minutes": 60},
    )
    data = resp.get_json()["data"]
    assert data["clock_in"] == "2024-01-15T09:00:00"
    assert data["clock_out"] == "2024-01-15T18:30:00"
    assert data["total_hours"] == 8.5
