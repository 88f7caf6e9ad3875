from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    EmptyRosterError,
    IncompleteAttendanceError,
    SubmissionInProgressError,
    ValidationError,
)
from ..students.repository import StudentRepository
from .model import AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository
from .tracker import AttendanceTracker

logger = logging.getLogger(__name__)

MARKING_ROLES = (Role.ADMIN, Role.FACULTY)


class AttendanceService:
    """Use cases: start a marking session, submit it, and read history with stats."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students
        self._lock = threading.Lock()
        self._in_flight: set[tuple[str, date]] = set()

    def start_session(self, *, current_role: Role, section: str, attend_date: date, subject: str = "") -> AttendanceTracker:
        if current_role not in MARKING_ROLES:
            raise AuthorizationError("You do not have permission to mark attendance")

        section = require_non_empty(section, "Section")
        roster = self._students.fetch_roster(section)
        return AttendanceTracker(
            section=section,
            attend_date=attend_date,
            subject=(subject or "").strip(),
            roster=roster,
        )

    def existing_marks(self, tracker: AttendanceTracker) -> Sequence[AttendanceRecord]:
        """Marks already stored for this roster and date (a submit supersedes them)."""
        return self._attendance.fetch_for_students([e.student_id for e in tracker.roster], tracker.attend_date)

    @contextmanager
    def _submission_slot(self, key: tuple[str, date]) -> Iterator[None]:
        with self._lock:
            if key in self._in_flight:
                raise SubmissionInProgressError("Attendance for this class is already being submitted")
            self._in_flight.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._in_flight.discard(key)

    def submit(self, *, current_role: Role, tracker: AttendanceTracker, marked_by: int) -> AttendanceStats:
        """Persist the session; on any failure the tracker is left untouched."""
        if current_role not in MARKING_ROLES:
            raise AuthorizationError("You do not have permission to mark attendance")
        if tracker.is_empty:
            raise EmptyRosterError("No students found in this class")

        pending = tracker.pending()
        if pending:
            raise IncompleteAttendanceError(pending)

        with self._submission_slot((tracker.section, tracker.attend_date)):
            records = tracker.build_records(marked_by)
            self._attendance.upsert_many(records)

        stats = AttendanceStats.from_records(records)
        logger.info(
            "attendance submitted: section=%s date=%s subject=%s present=%d/%d",
            tracker.section,
            tracker.attend_date,
            tracker.subject,
            stats.present,
            stats.total,
        )
        tracker.reset()
        return stats

    def history(
        self,
        *,
        section: Optional[str] = None,
        student_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> tuple[list[dict], AttendanceStats]:
        if start and end and start > end:
            raise ValidationError("Start date must not be after end date")

        # Stats cover every matching record; only the rows shown are capped.
        records = list(self._attendance.list_records(section=section, student_id=student_id, start=start, end=end))
        return [self._to_ui(r) for r in records[:limit]], AttendanceStats.from_records(records)

    def stats(self, *, section: Optional[str] = None, student_id: Optional[str] = None) -> AttendanceStats:
        return AttendanceStats.from_records(self._attendance.list_records(section=section, student_id=student_id))

    def _to_ui(self, r: AttendanceRecord) -> dict:
        label = {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.ABSENT: "Absent",
        }[r.status]

        return {
            "date": r.attend_date.strftime("%Y-%m-%d"),
            "display_date": r.attend_date.strftime("%b %d, %Y"),
            "student_id": r.student_id,
            "student_name": r.student_name or "",
            "subject": r.subject,
            "section": r.section,
            "status": r.status.value,
            "label": label,
        }
