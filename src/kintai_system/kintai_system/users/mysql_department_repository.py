from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .department_model import Department
from .department_repository import DepartmentRepository


def _to_department(r: dict) -> Department:
    return Department(dept_id=int(r["dept_id"]), dept_name=r["dept_name"], manager_id=r.get("manager_id"))


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name, manager_id FROM departments WHERE dept_id=%s", (dept_id,))
            r = fetchone(cur)
            return _to_department(r) if r else None
