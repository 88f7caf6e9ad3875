from __future__ import annotations

import uuid
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, RosterEntry

_NEXT_STATUS = {
    AttendanceStatus.PENDING: AttendanceStatus.PRESENT,
    AttendanceStatus.PRESENT: AttendanceStatus.ABSENT,
    AttendanceStatus.ABSENT: AttendanceStatus.PRESENT,
}


class AttendanceTracker:
    """Marking session for one section, date and subject.

    Every roster member starts PENDING. Toggling cycles
    PENDING -> PRESENT -> ABSENT -> PRESENT -> ...; it never goes back to PENDING.
    """

    def __init__(
        self,
        *,
        section: str,
        attend_date: date,
        subject: str,
        roster: Sequence[RosterEntry],
        token: Optional[str] = None,
        statuses: Optional[Mapping[str, AttendanceStatus]] = None,
    ):
        self.section = section
        self.attend_date = attend_date
        self.subject = subject
        self.roster = tuple(roster)
        self.token = token or uuid.uuid4().hex
        self._statuses: dict[str, AttendanceStatus] = {e.student_id: AttendanceStatus.PENDING for e in self.roster}
        for student_id, status in (statuses or {}).items():
            if student_id in self._statuses:
                self._statuses[student_id] = AttendanceStatus(status)

    @property
    def is_empty(self) -> bool:
        return not self.roster

    @property
    def statuses(self) -> dict[str, AttendanceStatus]:
        return dict(self._statuses)

    def status_of(self, student_id: str) -> AttendanceStatus:
        try:
            return self._statuses[str(student_id)]
        except KeyError:
            raise ValidationError(f"Student {student_id} is not in {self.section}")

    def toggle(self, student_id: str) -> AttendanceStatus:
        new_status = _NEXT_STATUS[self.status_of(student_id)]
        self._statuses[str(student_id)] = new_status
        return new_status

    def mark_all_present(self) -> None:
        for student_id in self._statuses:
            self._statuses[student_id] = AttendanceStatus.PRESENT

    def pending(self) -> list[str]:
        return [sid for sid, status in self._statuses.items() if status == AttendanceStatus.PENDING]

    def reset(self) -> None:
        for student_id in self._statuses:
            self._statuses[student_id] = AttendanceStatus.PENDING

    def build_records(self, marked_by: int) -> list[AttendanceRecord]:
        """One record per roster member; callers must check pending() first."""
        return [
            AttendanceRecord(
                student_id=entry.student_id,
                attend_date=self.attend_date,
                present=self._statuses[entry.student_id] == AttendanceStatus.PRESENT,
                marked_by=int(marked_by),
                section=self.section,
                subject=self.subject,
                student_name=entry.name,
            )
            for entry in self.roster
        ]

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "section": self.section,
            "date": self.attend_date.strftime("%Y-%m-%d"),
            "subject": self.subject,
            "students": [
                {
                    "student_id": e.student_id,
                    "name": e.name,
                    "registration_number": e.registration_number,
                    "status": self._statuses[e.student_id].value,
                }
                for e in self.roster
            ],
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "AttendanceTracker":
        students = list(data.get("students") or [])
        return cls(
            section=str(data["section"]),
            attend_date=parse_iso_date(str(data["date"])),
            subject=str(data.get("subject") or ""),
            roster=[
                RosterEntry(
                    student_id=str(s["student_id"]),
                    name=str(s.get("name") or ""),
                    registration_number=str(s.get("registration_number") or ""),
                )
                for s in students
            ],
            token=str(data.get("token") or "") or None,
            statuses={str(s["student_id"]): AttendanceStatus(s.get("status") or "pending") for s in students},
        )
