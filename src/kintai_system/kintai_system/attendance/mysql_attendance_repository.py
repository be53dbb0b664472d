from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import AttendanceRecord, AttendanceReportRow, AttendanceWithUser
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    ar.attendance_id, ar.user_id, ar.work_date, ar.clock_in, ar.clock_out,
    ar.break_minutes, ar.total_hours, ar.status
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        break_minutes=int(r.get("break_minutes") or 0),
        total_hours=to_float(r.get("total_hours")),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records ar WHERE ar.user_id=%s AND ar.work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date BETWEEN %s AND %s
                ORDER BY ar.work_date DESC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_clock_in(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        status: AttendanceStatus,
    ) -> None:
        # status is assigned before clock_in so it still sees the old clock_in.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, clock_in, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status = IF(clock_in IS NULL, VALUES(status), status),
                    clock_in = COALESCE(clock_in, VALUES(clock_in))
                """,
                (int(user_id), work_date, clock_in, status.value),
            )

    def update_clock_out(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        break_minutes: int,
        total_hours: float,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, break_minutes=%s, total_hours=%s, status=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (clock_out, int(break_minutes), total_hours, status.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        break_minutes: int,
        total_hours: float,
        status: AttendanceStatus,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, break_minutes=%s, total_hours=%s, status=%s
                WHERE attendance_id=%s
                """,
                (clock_in, clock_out, int(break_minutes), total_hours, status.value, int(attendance_id)),
            )

    def list_for_date(self, work_date: date) -> Sequence[AttendanceWithUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS},
                       u.employee_code, u.full_name, u.email, u.dept_id
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                WHERE ar.work_date=%s
                ORDER BY u.employee_code ASC
                """,
                (work_date,),
            )
            return [
                AttendanceWithUser(
                    record=_to_record(r),
                    employee_code=r["employee_code"],
                    full_name=r["full_name"],
                    email=r["email"],
                    dept_id=r.get("dept_id"),
                )
                for r in fetchall(cur)
            ]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        dept_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if dept_id is not None:
            clauses.append("u.dept_id=%s")
            params.append(int(dept_id))
        if user_id is not None:
            clauses.append("u.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    u.user_id, u.employee_code, u.full_name,
                    d.dept_name,
                    ar.work_date, ar.clock_in, ar.clock_out, ar.break_minutes, ar.total_hours, ar.status
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                LEFT JOIN departments d ON d.dept_id = u.dept_id
                WHERE {where}
                ORDER BY ar.work_date DESC, u.employee_code ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    user_id=int(r["user_id"]),
                    employee_code=r["employee_code"],
                    full_name=r["full_name"],
                    dept_name=r.get("dept_name"),
                    work_date=r["work_date"],
                    clock_in=r.get("clock_in"),
                    clock_out=r.get("clock_out"),
                    break_minutes=int(r.get("break_minutes") or 0),
                    total_hours=to_float(r.get("total_hours")),
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
