from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, remote_write, to_minute_of_day
from .model import LectureSlot
from .repository import TimetableRepository


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_slots(
        self,
        *,
        section: Optional[str] = None,
        day: Optional[Weekday] = None,
        created_by: Optional[int] = None,
    ) -> Sequence[LectureSlot]:
        clauses: list[str] = []
        params: list[object] = []
        if section:
            clauses.append("section=%s")
            params.append(section)
        if day is not None:
            clauses.append("day=%s")
            params.append(day.value)
        if created_by is not None:
            clauses.append("created_by=%s")
            params.append(int(created_by))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT slot_id, section, day, start_minute, end_minute, subject, room
                FROM timetable
                {where}
                ORDER BY section ASC, start_minute ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                LectureSlot(
                    slot_id=str(r["slot_id"]),
                    day=Weekday(r["day"]),
                    start_minute=to_minute_of_day(r["start_minute"]),
                    end_minute=to_minute_of_day(r["end_minute"]),
                    subject=r["subject"],
                    room=r["room"],
                    section=r["section"],
                )
                for r in rows
            ]

    def insert(self, slot: LectureSlot, *, created_by: Optional[int] = None) -> LectureSlot:
        with remote_write("Insert lecture slot"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetable(section, day, start_minute, end_minute, subject, room, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    slot.section,
                    slot.day.value,
                    int(slot.start_minute),
                    int(slot.end_minute),
                    slot.subject,
                    slot.room,
                    created_by,
                ),
            )
            return slot.with_id(str(cur.lastrowid))
