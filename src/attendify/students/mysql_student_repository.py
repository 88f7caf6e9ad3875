from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import RosterEntry
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, remote_write
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, user_id, name, email, registration_number, semester, branch, section"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["student_id"]),
        user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
        name=r["name"],
        email=r["email"],
        registration_number=r["registration_number"],
        semester=r["semester"],
        branch=r["branch"],
        section=r["section"],
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_roster(self, section: str) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, name, registration_number
                FROM students
                WHERE section=%s
                ORDER BY name ASC
                """,
                (section,),
            )
            return [
                RosterEntry(
                    student_id=str(r["student_id"]),
                    name=r["name"],
                    registration_number=r["registration_number"],
                )
                for r in fetchall(cur)
            ]

    def list_all(self, *, section: Optional[str] = None) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if section:
                cur.execute(f"SELECT {_COLUMNS} FROM students WHERE section=%s ORDER BY name", (section,))
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY section, name")
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_registration_number(self, registration_number: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE registration_number=%s", (registration_number,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(
        self,
        *,
        name: str,
        email: str,
        registration_number: str,
        semester: str,
        branch: str,
        section: str,
        user_id: Optional[int] = None,
    ) -> Student:
        with remote_write("Add student"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(user_id, name, email, registration_number, semester, branch, section)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, name, email, registration_number, semester, branch, section),
            )
            return Student(
                student_id=str(cur.lastrowid),
                user_id=user_id,
                name=name,
                email=email,
                registration_number=registration_number,
                semester=semester,
                branch=branch,
                section=section,
            )

    def delete_many(self, student_ids: Sequence[str]) -> int:
        ids = [int(sid) for sid in student_ids]
        if not ids:
            return 0
        with remote_write("Delete students"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM students WHERE student_id IN ({in_clause(ids)})", tuple(ids))
            return int(cur.rowcount)
