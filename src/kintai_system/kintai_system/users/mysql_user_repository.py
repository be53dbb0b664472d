from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, employee_code, full_name, email, password_hash, role, dept_id, created_at, updated_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        employee_code=row["employee_code"],
        full_name=row["full_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        dept_id=row.get("dept_id"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_employee_code(self, employee_code: str) -> Optional[User]:
        return self._get_one("employee_code", employee_code)

    def create_user(
        self,
        *,
        employee_code: str,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        dept_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(employee_code, full_name, email, password_hash, role, dept_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (employee_code, full_name, email, password_hash, role.value, dept_id),
            )
            return int(cur.lastrowid)

    def list_admin_view(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.employee_code, u.full_name, u.email, u.role,
                       u.dept_id, d.dept_name, u.created_at, u.updated_at
                FROM users u
                LEFT JOIN departments d ON d.dept_id = u.dept_id
                ORDER BY u.employee_code ASC
                """
            )
            rows = fetchall(cur)
            return [
                {
                    "user_id": int(r["user_id"]),
                    "employee_code": r["employee_code"],
                    "full_name": r["full_name"],
                    "email": r["email"],
                    "role": r["role"],
                    "dept_id": r.get("dept_id"),
                    "dept_name": r.get("dept_name") or "-",
                    "created_at": r["created_at"].isoformat() if r.get("created_at") else None,
                    "updated_at": r["updated_at"].isoformat() if r.get("updated_at") else None,
                }
                for r in rows
            ]
