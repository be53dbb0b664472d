from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.guards import build_guards, current_user
from ..common.request_utils import json_body, query_date, query_int
from ..common.responses import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = build_guards(container.token_service)
    reports = container.report_service
    analytics = container.analytics_service

    @app.route("/api/reports/daily", methods=["GET"], endpoint="reports_daily_get")
    @guards.login_required
    def get_daily():
        report = reports.get(current_user().user_id, query_date("date", required=True))
        return ok(report.to_dict() if report else None)

    @app.route("/api/reports/daily", methods=["POST"], endpoint="reports_daily_create")
    @guards.login_required
    def create_daily():
        data = json_body()
        raw_date = data.get("date")
        report = reports.create(
            current_user().user_id,
            report_date=parse_iso_date(raw_date) if raw_date else None,
            work_content=data.get("work_content"),
            notes=data.get("notes"),
            tag_efforts=data.get("tag_efforts"),
        )
        return ok(report.to_dict(), message="Report saved", status=201)

    @app.route("/api/reports/daily/<int:report_id>", methods=["PUT"], endpoint="reports_daily_update")
    @guards.login_required
    def update_daily(report_id: int):
        data = json_body()
        report = reports.update(
            current_user().user_id,
            report_id,
            work_content=data.get("work_content"),
            notes=data.get("notes"),
            tag_efforts=data.get("tag_efforts"),
        )
        return ok(report.to_dict(), message="Report updated")

    @app.route("/api/reports/daily/list", methods=["GET"], endpoint="reports_daily_list")
    @guards.login_required
    def list_daily():
        rows = reports.list(
            current_user().user_id,
            start=query_date("start_date"),
            end=query_date("end_date"),
            limit=query_int("limit"),
        )
        return ok([r.to_dict() for r in rows])

    @app.route("/api/reports/efforts/summary", methods=["GET"], endpoint="reports_efforts_summary")
    @guards.login_required
    def efforts_summary():
        rows = analytics.employee_effort_summary(
            current_user().user_id,
            start=query_date("start_date", required=True),
            end=query_date("end_date", required=True),
        )
        return ok(rows)
