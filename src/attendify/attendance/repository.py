from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def fetch_for_students(self, student_ids: Sequence[str], attend_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert_many(self, records: Sequence[AttendanceRecord]) -> None:
        """Insert or replace marks keyed on (student_id, attend_date), atomically."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        section: Optional[str] = None,
        student_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
