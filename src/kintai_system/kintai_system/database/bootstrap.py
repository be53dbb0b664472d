from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "kintai_db")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(_strip_comments(sql)):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _exec_sql_file(db_config, schema_path)
    logger.info("schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _exec_sql_file(db_config, seed_path)
    logger.info("seed applied from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert the demo accounts (password: password123) and department managers."""
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        def dept_id(name: str) -> int:
            cur.execute("SELECT dept_id FROM departments WHERE dept_name=%s", (name,))
            row = cur.fetchone()
            if not row:
                raise RuntimeError(f"Missing departments row for dept_name={name}")
            return int(row["dept_id"])

        dept_it = dept_id("IT")
        dept_sales = dept_id("Sales")

        def upsert_user(employee_code: str, full_name: str, email: str, role: str, dept: int) -> int:
            password_hash = generate_password_hash(DEMO_PASSWORD)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET employee_code=%s, full_name=%s, password_hash=%s, role=%s, dept_id=%s
                    WHERE user_id=%s
                    """,
                    (employee_code, full_name, password_hash, role, dept, existing["user_id"]),
                )
                return int(existing["user_id"])
            cur.execute(
                """
                INSERT INTO users (employee_code, full_name, email, password_hash, role, dept_id)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (employee_code, full_name, email, password_hash, role, dept),
            )
            return int(cur.lastrowid)

        admin_id = upsert_user("A001", "Administrator", "admin@company.com", "admin", dept_it)
        upsert_user("E001", "Taro Tanaka", "user@company.com", "employee", dept_it)
        upsert_user("E002", "Hanako Sato", "sato@company.com", "employee", dept_it)
        upsert_user("S001", "Ichiro Suzuki", "suzuki@company.com", "employee", dept_sales)

        cur.execute("UPDATE departments SET manager_id=%s WHERE manager_id IS NULL", (admin_id,))
        conn.commit()
        logger.info("demo users ready")
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
