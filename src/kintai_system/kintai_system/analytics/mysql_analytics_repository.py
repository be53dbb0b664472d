from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_float
from .model import DepartmentAttendance, TagTotal, UserTotal
from .repository import AnalyticsRepository


class MySQLAnalyticsRepository(AnalyticsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def tag_totals(self, *, start_date: date, end_date: date, user_id: Optional[int] = None) -> Sequence[TagTotal]:
        user_filter = "AND dr.user_id = %s" if user_id is not None else ""
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    t.tag_id, t.name AS tag_name,
                    COALESCE(SUM(te.hours), 0) AS total_hours,
                    COUNT(DISTINCT dr.user_id) AS user_count,
                    COUNT(te.tag_effort_id) AS entry_count
                FROM tags t
                JOIN tag_efforts te ON te.tag_id = t.tag_id
                JOIN daily_reports dr ON dr.report_id = te.report_id
                WHERE t.is_active = 1
                  AND dr.report_date BETWEEN %s AND %s
                  {user_filter}
                GROUP BY t.tag_id, t.name
                HAVING total_hours > 0
                ORDER BY total_hours DESC, t.tag_id ASC
                """,
                tuple(params),
            )
            return [
                TagTotal(
                    tag_id=int(r["tag_id"]),
                    tag_name=r["tag_name"],
                    total_hours=to_float(r["total_hours"]),
                    user_count=int(r.get("user_count") or 0),
                    entry_count=int(r.get("entry_count") or 0),
                )
                for r in fetchall(cur)
            ]

    def user_totals(self, *, start_date: date, end_date: date, user_id: Optional[int] = None) -> Sequence[UserTotal]:
        user_filter = "AND u.user_id = %s" if user_id is not None else ""
        params: list[object] = [start_date, end_date, Role.EMPLOYEE.value]
        if user_id is not None:
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    u.user_id, u.full_name, u.employee_code,
                    COALESCE(SUM(te.hours), 0) AS total_hours,
                    COUNT(DISTINCT dr.report_date) AS report_days
                FROM users u
                JOIN daily_reports dr ON dr.user_id = u.user_id
                    AND dr.report_date BETWEEN %s AND %s
                JOIN tag_efforts te ON te.report_id = dr.report_id
                WHERE u.role = %s
                  {user_filter}
                GROUP BY u.user_id, u.full_name, u.employee_code
                HAVING total_hours > 0
                ORDER BY total_hours DESC, u.employee_code ASC
                """,
                tuple(params),
            )
            return [
                UserTotal(
                    user_id=int(r["user_id"]),
                    full_name=r["full_name"],
                    employee_code=r["employee_code"],
                    total_hours=to_float(r["total_hours"]),
                    report_days=int(r.get("report_days") or 0),
                )
                for r in fetchall(cur)
            ]

    def department_attendance(self, *, start_date: date, end_date: date) -> Sequence[DepartmentAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    d.dept_id, d.dept_name,
                    COUNT(DISTINCT ar.user_id) AS employee_count,
                    AVG(ar.total_hours) AS average_hours,
                    COALESCE(SUM(ar.total_hours), 0) AS total_hours,
                    SUM(CASE WHEN ar.status = %s THEN 1 ELSE 0 END) AS late_count,
                    SUM(CASE WHEN ar.status = %s THEN 1 ELSE 0 END) AS absent_count
                FROM departments d
                LEFT JOIN users u ON u.dept_id = d.dept_id
                LEFT JOIN attendance_records ar ON ar.user_id = u.user_id
                    AND ar.work_date BETWEEN %s AND %s
                GROUP BY d.dept_id, d.dept_name
                ORDER BY d.dept_name ASC
                """,
                (AttendanceStatus.LATE.value, AttendanceStatus.ABSENT.value, start_date, end_date),
            )
            return [
                DepartmentAttendance(
                    dept_id=int(r["dept_id"]),
                    dept_name=r["dept_name"],
                    employee_count=int(r.get("employee_count") or 0),
                    average_hours=round(float(r["average_hours"]), 2) if r.get("average_hours") is not None else None,
                    total_hours=to_float(r.get("total_hours")),
                    late_count=int(r.get("late_count") or 0),
                    absent_count=int(r.get("absent_count") or 0),
                )
                for r in fetchall(cur)
            ]
