from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, remote_write
from .model import Faculty
from .repository import FacultyRepository


def _load_subjects(raw) -> tuple[str, ...]:
    if not raw:
        return ()
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        # Tolerate comma separated values from manual inserts.
        return tuple(s.strip() for s in str(raw).split(",") if s.strip())
    return tuple(str(s) for s in value) if isinstance(value, list) else ()


class MySQLFacultyRepository(FacultyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT faculty_id, user_id, name, email, phone, department, subjects
                FROM faculty
                ORDER BY faculty_id ASC
                """
            )
            return [
                Faculty(
                    faculty_id=int(r["faculty_id"]),
                    user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
                    name=r["name"],
                    email=r.get("email") or "",
                    phone=r.get("phone") or "",
                    department=r.get("department") or "",
                    subjects=_load_subjects(r.get("subjects")),
                )
                for r in fetchall(cur)
            ]

    def create(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        department: str,
        subjects: Sequence[str],
        user_id: Optional[int] = None,
    ) -> Faculty:
        with remote_write("Add faculty"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO faculty(user_id, name, email, phone, department, subjects)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, name, email, phone, department, json.dumps(list(subjects))),
            )
            return Faculty(
                faculty_id=int(cur.lastrowid),
                user_id=user_id,
                name=name,
                email=email,
                phone=phone,
                department=department,
                subjects=tuple(subjects),
            )

    def delete_many(self, faculty_ids: Sequence[int]) -> int:
        ids = [int(fid) for fid in faculty_ids]
        if not ids:
            return 0
        with remote_write("Delete faculty"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM faculty WHERE faculty_id IN ({in_clause(ids)})", tuple(ids))
            return int(cur.rowcount)
