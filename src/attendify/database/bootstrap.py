from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEMO_PASSWORD = "password123"

DEMO_ACCOUNTS = (
    {"name": "Admin User", "email": "admin@example.com", "role": "admin"},
    {
        "name": "Faculty User",
        "email": "faculty@example.com",
        "role": "faculty",
        "department": "Computer Science",
    },
    {
        "name": "Student User",
        "email": "student@example.com",
        "role": "student",
        "registration_number": "EN12345",
        "semester": "4th",
        "branch": "Computer Science",
        "section": "CS-301",
    },
)


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


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    sql = _strip_comments(_strip_create_db_and_use(sql))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s@%s/%s", target.user, target.host, target.database)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo admin/faculty/student accounts."""
    target = DBConfig.from_dict(db_config)

    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(account: dict) -> int:
            password_hash = generate_password_hash(DEMO_PASSWORD)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (account["email"],))
            existing = cur.fetchone()
            params = (
                account["name"],
                password_hash,
                account["role"],
                account.get("registration_number"),
                account.get("semester"),
                account.get("branch"),
                account.get("section"),
                account["email"],
            )
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password_hash=%s, role=%s, registration_number=%s,
                        semester=%s, branch=%s, section=%s, is_active=1
                    WHERE email=%s
                    """,
                    params,
                )
                return int(existing["user_id"])

            cur.execute(
                """
                INSERT INTO users (name, password_hash, role, registration_number, semester, branch, section, email)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                params,
            )
            return int(cur.lastrowid)

        for account in DEMO_ACCOUNTS:
            user_id = upsert_user(account)

            if account["role"] == "student":
                cur.execute(
                    "SELECT student_id FROM students WHERE registration_number=%s",
                    (account["registration_number"],),
                )
                if not cur.fetchone():
                    cur.execute(
                        """
                        INSERT INTO students (user_id, name, email, registration_number, semester, branch, section)
                        VALUES (%s, %s, %s, %s, %s, %s, %s)
                        """,
                        (
                            user_id,
                            account["name"],
                            account["email"],
                            account["registration_number"],
                            account["semester"],
                            account["branch"],
                            account["section"],
                        ),
                    )
            elif account["role"] == "faculty":
                cur.execute("SELECT faculty_id FROM faculty WHERE user_id=%s", (user_id,))
                if not cur.fetchone():
                    cur.execute(
                        "INSERT INTO faculty (user_id, name, email, department, subjects) VALUES (%s, %s, %s, %s, %s)",
                        (user_id, account["name"], account["email"], account["department"], "[]"),
                    )

        conn.commit()
    finally:
        conn.close()
    logger.info("demo accounts ready (%d)", len(DEMO_ACCOUNTS))


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
