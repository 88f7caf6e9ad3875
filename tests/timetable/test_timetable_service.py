from __future__ import annotations

import pytest

from attendify.core.enums import Role, Weekday
from attendify.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidRangeError,
    MissingFieldsError,
    RemoteWriteError,
    ValidationError,
)
from attendify.timetable.form import FormState, LectureForm
from attendify.timetable.service import TimetableService


def _form(start: str, end: str, subject="Data Structures", room="A-101", day="Monday", section="CS-301") -> LectureForm:
    return LectureForm(day=day, section=section, start_time=start, end_time=end, subject=subject, room=room)


@pytest.fixture
def service(timetable_repo):
    return TimetableService(timetable_repo)


def test_back_to_back_slots_then_overlap_rejected(service, timetable_repo):
    service.add_class(current_role=Role.FACULTY, form=_form("09:00", "10:00"))
    service.add_class(current_role=Role.FACULTY, form=_form("10:00", "11:00", subject="Algorithms"))

    form = _form("09:30", "10:30", subject="Networks")
    with pytest.raises(ConflictError) as exc:
        service.add_class(current_role=Role.FACULTY, form=form)

    assert "Monday" in str(exc.value) and "CS-301" in str(exc.value)
    assert exc.value.conflicting.subject == "Data Structures"
    assert form.state == FormState.REJECTED
    assert form.subject == "Networks"
    assert len(timetable_repo.slots) == 2


def test_accepted_form_keeps_day_and_section(service):
    form = _form("02:00 PM", "03:00 PM", day="Wednesday", section="IT-501")
    slot = service.add_class(current_role=Role.ADMIN, form=form, created_by=4)

    assert slot.slot_id == "1"
    assert (slot.start_minute, slot.end_minute) == (840, 900)
    assert slot.display_range == "02:00 PM - 03:00 PM"
    assert form.state == FormState.IDLE
    assert (form.day, form.section) == ("Wednesday", "IT-501")
    assert (form.subject, form.room, form.start_time, form.end_time) == ("", "", "", "")


def test_missing_fields_listed_before_range_check(service):
    with pytest.raises(MissingFieldsError) as exc:
        service.add_class(current_role=Role.FACULTY, form=_form("10:00", "09:00", subject="", room=" "))
    assert set(exc.value.fields) == {"subject", "room"}


def test_end_must_be_after_start(service):
    with pytest.raises(InvalidRangeError):
        service.add_class(current_role=Role.FACULTY, form=_form("10:00", "10:00"))


def test_sunday_is_not_a_teaching_day(service):
    with pytest.raises(ValidationError):
        service.add_class(current_role=Role.FACULTY, form=_form("09:00", "10:00", day="Sunday"))


def test_students_cannot_add_classes(service, timetable_repo):
    with pytest.raises(AuthorizationError):
        service.add_class(current_role=Role.STUDENT, form=_form("09:00", "10:00"))
    assert timetable_repo.slots == []


def test_store_failure_keeps_form_values(service, timetable_repo):
    timetable_repo.fail_writes = True
    form = _form("09:00", "10:00")
    with pytest.raises(RemoteWriteError):
        service.add_class(current_role=Role.FACULTY, form=form)

    assert form.state == FormState.REJECTED
    assert form.subject == "Data Structures"

    form.edit(room="B-202")
    assert form.state == FormState.EDITING
    assert form.error is None


def test_timetable_grouped_by_day_and_sorted(service):
    service.add_class(current_role=Role.FACULTY, form=_form("11:00", "12:00", day="Friday"))
    service.add_class(current_role=Role.FACULTY, form=_form("10:00", "11:00", day="Friday"))
    service.add_class(current_role=Role.FACULTY, form=_form("09:00", "10:00", day="Monday"))
    service.add_class(current_role=Role.FACULTY, form=_form("09:00", "10:00", section="EC-101"))

    days = service.timetable_for("CS-301")
    assert [d.day for d in days] == [Weekday.MONDAY, Weekday.FRIDAY]
    assert [s.start_time for s in days[1].slots] == ["10:00", "11:00"]


def test_classes_on_filters_by_creator(service):
    service.add_class(current_role=Role.FACULTY, form=_form("09:00", "10:00"), created_by=2)
    service.add_class(current_role=Role.FACULTY, form=_form("10:00", "11:00"), created_by=3)

    assert [s.start_time for s in service.classes_on(Weekday.MONDAY, created_by=2)] == ["09:00"]
    assert service.classes_on(None) == []
    assert service.count_slots() == 2
    assert service.count_slots(created_by=3) == 1
