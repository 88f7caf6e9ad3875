from __future__ import annotations

import logging
from typing import Optional

from ..common.time_format import parse_minutes
from ..common.validators import require_fields, require_non_empty
from ..core.enums import Role, Weekday
from ..core.exceptions import AuthorizationError, ConflictError, DomainError, InvalidRangeError, ValidationError
from .conflicts import find_conflict
from .form import LectureForm
from .model import DaySchedule, LectureSlot
from .repository import TimetableRepository

logger = logging.getLogger(__name__)

EDITOR_ROLES = (Role.ADMIN, Role.FACULTY)


def parse_weekday(value: str) -> Weekday:
    try:
        return Weekday(str(value).strip().capitalize())
    except ValueError:
        raise ValidationError(f"Invalid day: {value!r}")


class TimetableService:
    """Use cases: weekly timetable per section (view, add class)."""

    def __init__(self, timetable: TimetableRepository):
        self._timetable = timetable

    def build_candidate(self, form: LectureForm) -> LectureSlot:
        """Validate the form fields in order; the first failure wins.

        1. required fields, 2. end after start, 3. no overlap in the section's day.
        """
        values = require_fields(
            {
                "subject": form.subject,
                "room": form.room,
                "start_time": form.start_time,
                "end_time": form.end_time,
            }
        )
        day = parse_weekday(form.day)
        section = require_non_empty(form.section, "Section")
        start = parse_minutes(values["start_time"])
        end = parse_minutes(values["end_time"])

        if end <= start:
            raise InvalidRangeError("End time must be after start time.")

        candidate = LectureSlot(
            day=day,
            start_minute=start,
            end_minute=end,
            subject=values["subject"],
            room=values["room"],
            section=section,
        )

        conflict = find_conflict(candidate, self._timetable.list_slots(section=section, day=day))
        if conflict:
            raise ConflictError(
                f"There is already a class scheduled for {day.value} in {section} at this time slot "
                f"({conflict.subject}, {conflict.display_range}).",
                conflicting=conflict,
            )
        return candidate

    def add_class(self, *, current_role: Role, form: LectureForm, created_by: Optional[int] = None) -> LectureSlot:
        if current_role not in EDITOR_ROLES:
            raise AuthorizationError("You do not have permission to edit the timetable")

        form.begin_validation()
        try:
            candidate = self.build_candidate(form)
            slot = self._timetable.insert(candidate, created_by=created_by)
        except DomainError as e:
            form.reject(str(e))
            raise

        logger.info("lecture added: %s %s %s %s", slot.section, slot.day.value, slot.display_range, slot.subject)
        form.accept()
        return slot

    def timetable_for(self, section: str) -> list[DaySchedule]:
        """Section slots grouped by day (Monday..Saturday), empty days omitted."""
        slots = self._timetable.list_slots(section=section)
        out: list[DaySchedule] = []
        for day in Weekday:
            day_slots = sorted((s for s in slots if s.day == day), key=lambda s: (s.start_minute, s.end_minute))
            if day_slots:
                out.append(DaySchedule(day=day, slots=tuple(day_slots)))
        return out

    def classes_on(self, day: Optional[Weekday], *, section: Optional[str] = None, created_by: Optional[int] = None):
        if day is None:
            return []
        slots = self._timetable.list_slots(section=section, day=day, created_by=created_by)
        return sorted(slots, key=lambda s: (s.start_minute, s.section))

    def classes_for_creator(self, created_by: int) -> list[LectureSlot]:
        return list(self._timetable.list_slots(created_by=created_by))

    def count_slots(self, *, created_by: Optional[int] = None) -> int:
        return len(self._timetable.list_slots(created_by=created_by))
