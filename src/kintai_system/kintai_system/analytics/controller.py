from __future__ import annotations

from flask import Flask

from ..common.guards import build_guards
from ..common.request_utils import query_date, query_int
from ..common.responses import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = build_guards(container.token_service)
    analytics = container.analytics_service

    @app.route("/api/admin/reports/monthly", methods=["GET"], endpoint="admin_reports_monthly")
    @guards.admin_required
    def monthly_report():
        return ok(analytics.monthly_report(year=query_int("year"), month=query_int("month")))

    @app.route("/api/admin/tags/efforts", methods=["GET"], endpoint="admin_tags_efforts")
    @guards.admin_required
    def tag_efforts():
        data = analytics.admin_tag_efforts_summary(
            start=query_date("start_date", required=True),
            end=query_date("end_date", required=True),
            user_id=query_int("user_id"),
        )
        return ok(data)
