from __future__ import annotations

import csv
import io

from flask import Flask

from ..common.datetime_utils import parse_iso_datetime
from ..common.guards import build_guards, current_user
from ..common.request_utils import json_body, query_date, query_int
from ..common.responses import ok
from ..common.validators import optional_non_negative_int
from ..container import Container
from .model import AttendanceReportRow

_CSV_FIELDS = [
    "work_date",
    "user_id",
    "employee_code",
    "full_name",
    "dept_name",
    "clock_in",
    "clock_out",
    "break_minutes",
    "total_hours",
    "status",
]


def _csv_row(r: AttendanceReportRow) -> dict:
    return {
        "work_date": r.work_date.isoformat(),
        "user_id": r.user_id,
        "employee_code": r.employee_code,
        "full_name": r.full_name,
        "dept_name": r.dept_name or "",
        "clock_in": r.clock_in.strftime("%H:%M:%S") if r.clock_in else "",
        "clock_out": r.clock_out.strftime("%H:%M:%S") if r.clock_out else "",
        "break_minutes": r.break_minutes,
        "total_hours": f"{r.total_hours:.2f}",
        "status": r.status.value,
    }


def register(app: Flask, container: Container) -> None:
    guards = build_guards(container.token_service)
    service = container.attendance_service

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @guards.login_required
    def today():
        record = service.get_today(current_user().user_id)
        return ok(record.to_dict() if record else None)

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @guards.login_required
    def clock_in():
        result = service.clock_in(current_user().user_id)
        return ok(result.record.to_dict(), message=result.message)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @guards.login_required
    def clock_out():
        data = json_body()
        break_minutes = optional_non_negative_int(data.get("break_minutes"), "break_minutes")
        result = service.clock_out(current_user().user_id, break_minutes=break_minutes)
        return ok(result.record.to_dict(), message=result.message)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @guards.login_required
    def history():
        records = service.get_history(current_user().user_id, year=query_int("year"), month=query_int("month"))
        return ok([r.to_dict() for r in records])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @guards.login_required
    def summary():
        result = service.get_summary(current_user().user_id, year=query_int("year"), month=query_int("month"))
        return ok(result.to_dict())

    @app.route("/api/admin/attendance/all", methods=["GET"], endpoint="admin_attendance_all")
    @guards.admin_required
    def admin_attendance_all():
        rows = service.list_for_date(query_date("date"))
        return ok([r.to_dict() for r in rows])

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PUT"], endpoint="admin_attendance_update")
    @guards.admin_required
    def admin_attendance_update(attendance_id: int):
        data = json_body()
        record = service.admin_update(
            attendance_id,
            clock_in=parse_iso_datetime(data.get("clock_in"), service.timezone),
            clock_out=parse_iso_datetime(data.get("clock_out"), service.timezone),
            break_minutes=optional_non_negative_int(data.get("break_minutes"), "break_minutes"),
            status=data.get("status"),
        )
        return ok(record.to_dict(), message="Attendance updated")

    @app.route("/api/admin/attendance/export.csv", methods=["GET"], endpoint="admin_attendance_export")
    @guards.admin_required
    def admin_attendance_export():
        today = service.today()
        start = query_date("start") or today.replace(day=1)
        end = query_date("end") or today

        rows = service.export_rows(
            start=start,
            end=end,
            dept_id=query_int("dept_id"),
            user_id=query_int("user_id"),
        )
        filename = f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_csv(rows, filename=filename)

    def _write_csv(rows, *, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(_csv_row(row))

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
