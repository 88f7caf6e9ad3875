from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class RosterEntry:
    """A student as seen by the marking screen."""

    student_id: str
    name: str
    registration_number: str


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one stored attendance mark (at most one per student per day)."""

    student_id: str
    attend_date: date
    present: bool
    marked_by: int
    section: str
    subject: str = ""
    record_id: Optional[str] = None
    student_name: Optional[str] = None

    @property
    def status(self) -> AttendanceStatus:
        return AttendanceStatus.PRESENT if self.present else AttendanceStatus.ABSENT


def round_half_up_percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    # Integer form of floor(100 * part / whole + 0.5).
    return (200 * part + whole) // (2 * whole)


@dataclass(frozen=True)
class AttendanceStats:
    """Derived on every read, never stored."""

    total: int
    present: int
    absent: int
    percentage: int

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "AttendanceStats":
        total = present = 0
        for r in records:
            total += 1
            if r.present:
                present += 1
        return cls(
            total=total,
            present=present,
            absent=total - present,
            percentage=round_half_up_percent(present, total),
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "percentage": self.percentage,
        }
