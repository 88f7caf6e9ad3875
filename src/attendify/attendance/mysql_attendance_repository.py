from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, remote_write
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        student_id=str(r["student_id"]),
        attend_date=r["attend_date"],
        present=bool(r["present"]),
        marked_by=int(r["marked_by"]),
        section=r["section"],
        subject=r.get("subject") or "",
        student_name=r.get("student_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_for_students(self, student_ids: Sequence[str], attend_date: date) -> Sequence[AttendanceRecord]:
        ids = [int(sid) for sid in student_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.record_id, a.student_id, a.attend_date, a.present, a.marked_by, a.section, a.subject,
                       s.name AS student_name
                FROM attendance a
                JOIN students s ON s.student_id = a.student_id
                WHERE a.attend_date=%s AND a.student_id IN ({in_clause(ids)})
                """,
                (attend_date, *ids),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_many(self, records: Sequence[AttendanceRecord]) -> None:
        if not records:
            return

        # Single statement batch inside one transaction; the unique key
        # (student_id, attend_date) keeps one mark per student per day.
        with remote_write("Save attendance"), db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(student_id, attend_date, present, marked_by, section, subject)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    present=VALUES(present),
                    marked_by=VALUES(marked_by),
                    section=VALUES(section),
                    subject=VALUES(subject)
                """,
                [
                    (int(r.student_id), r.attend_date, 1 if r.present else 0, int(r.marked_by), r.section, r.subject)
                    for r in records
                ],
            )

    def list_records(
        self,
        *,
        section: Optional[str] = None,
        student_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if section:
            clauses.append("a.section=%s")
            params.append(section)
        if student_id is not None:
            clauses.append("a.student_id=%s")
            params.append(int(student_id))
        if start is not None:
            clauses.append("a.attend_date>=%s")
            params.append(start)
        if end is not None:
            clauses.append("a.attend_date<=%s")
            params.append(end)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.record_id, a.student_id, a.attend_date, a.present, a.marked_by, a.section, a.subject,
                       s.name AS student_name
                FROM attendance a
                JOIN students s ON s.student_id = a.student_id
                {where}
                ORDER BY a.attend_date DESC, s.name ASC
                {limit_sql}
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
