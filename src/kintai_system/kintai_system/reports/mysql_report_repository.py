from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from mysql.connector import IntegrityError, errorcode

from ..core.exceptions import DuplicateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, to_float
from .model import DailyReport, EffortInput, TagEffort
from .repository import DailyReportRepository

_COLUMNS = "report_id, user_id, report_date, work_content, notes, total_hours, created_at, updated_at"


def _to_report(r: dict, efforts: Sequence[TagEffort]) -> DailyReport:
    return DailyReport(
        report_id=int(r["report_id"]),
        user_id=int(r["user_id"]),
        report_date=r["report_date"],
        work_content=r["work_content"],
        notes=r.get("notes") or "",
        total_hours=to_float(r.get("total_hours")),
        tag_efforts=tuple(efforts),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _insert_efforts(cur, report_id: int, efforts: Sequence[EffortInput]) -> None:
    if not efforts:
        return
    cur.executemany(
        "INSERT INTO tag_efforts(report_id, tag_id, hours) VALUES(%s,%s,%s)",
        [(report_id, e.tag_id, e.hours) for e in efforts],
    )


class MySQLDailyReportRepository(DailyReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_efforts(self, cur, report_ids: List[int]) -> Dict[int, List[TagEffort]]:
        result: Dict[int, List[TagEffort]] = defaultdict(list)
        if not report_ids:
            return result

        cur.execute(
            f"""
            SELECT te.tag_effort_id, te.report_id, te.tag_id, t.name AS tag_name, te.hours
            FROM tag_efforts te
            JOIN tags t ON t.tag_id = te.tag_id
            WHERE te.report_id IN ({in_clause(report_ids)})
            ORDER BY te.tag_effort_id ASC
            """,
            tuple(report_ids),
        )
        for r in fetchall(cur):
            result[int(r["report_id"])].append(
                TagEffort(
                    tag_effort_id=int(r["tag_effort_id"]),
                    report_id=int(r["report_id"]),
                    tag_id=int(r["tag_id"]),
                    tag_name=r["tag_name"],
                    hours=to_float(r["hours"]),
                )
            )
        return result

    def _get_one(self, where: str, params: tuple) -> Optional[DailyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_reports WHERE {where}", params)
            r = fetchone(cur)
            if not r:
                return None
            efforts = self._load_efforts(cur, [int(r["report_id"])])
            return _to_report(r, efforts.get(int(r["report_id"]), []))

    def get_by_id(self, report_id: int) -> Optional[DailyReport]:
        return self._get_one("report_id=%s", (int(report_id),))

    def get_by_user_and_date(self, user_id: int, report_date: date) -> Optional[DailyReport]:
        return self._get_one("user_id=%s AND report_date=%s", (int(user_id), report_date))

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        limit: int,
    ) -> Sequence[DailyReport]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start_date is not None:
            clauses.append("report_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("report_date <= %s")
            params.append(end_date)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM daily_reports
                WHERE {" AND ".join(clauses)}
                ORDER BY report_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            efforts = self._load_efforts(cur, [int(r["report_id"]) for r in rows])
            return [_to_report(r, efforts.get(int(r["report_id"]), [])) for r in rows]

    def create_with_efforts(
        self,
        *,
        user_id: int,
        report_date: date,
        work_content: str,
        notes: str,
        total_hours: Decimal,
        efforts: Sequence[EffortInput],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO daily_reports(user_id, report_date, work_content, notes, total_hours)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), report_date, work_content, notes, total_hours),
                )
                report_id = int(cur.lastrowid)
                _insert_efforts(cur, report_id, efforts)
                return report_id
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateError("A report for this date already exists") from e
            raise

    def replace_with_efforts(
        self,
        report_id: int,
        *,
        work_content: str,
        notes: str,
        total_hours: Decimal,
        efforts: Sequence[EffortInput],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tag_efforts WHERE report_id=%s", (int(report_id),))
            cur.execute(
                "UPDATE daily_reports SET work_content=%s, notes=%s, total_hours=%s WHERE report_id=%s",
                (work_content, notes, total_hours, int(report_id)),
            )
            _insert_efforts(cur, int(report_id), efforts)
