from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..common.time_format import format_minutes, minutes_to_12_hour
from ..core.enums import Weekday


@dataclass(frozen=True)
class LectureSlot:
    """Domain entity: one weekly lecture of a section.

    Times are minutes since midnight; the slot covers [start_minute, end_minute).
    A slot without slot_id is a candidate that has not been stored yet.
    """

    day: Weekday
    start_minute: int
    end_minute: int
    subject: str
    room: str
    section: str
    slot_id: Optional[str] = None

    @property
    def start_time(self) -> str:
        return format_minutes(self.start_minute)

    @property
    def end_time(self) -> str:
        return format_minutes(self.end_minute)

    @property
    def display_range(self) -> str:
        return f"{minutes_to_12_hour(self.start_minute)} - {minutes_to_12_hour(self.end_minute)}"

    def overlaps(self, other: "LectureSlot") -> bool:
        # Half-open intervals: 10:00-11:00 and 11:00-12:00 do not overlap.
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute

    def with_id(self, slot_id: str) -> "LectureSlot":
        return replace(self, slot_id=str(slot_id))

    def to_dict(self) -> dict:
        return {
            "id": self.slot_id,
            "day": self.day.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "display": self.display_range,
            "subject": self.subject,
            "room": self.room,
            "section": self.section,
        }


@dataclass(frozen=True)
class DaySchedule:
    """Read-model: the slots of one section on one day, ordered by start."""

    day: Weekday
    slots: tuple[LectureSlot, ...]

    def to_dict(self) -> dict:
        return {"day": self.day.value, "slots": [s.to_dict() for s in self.slots]}
