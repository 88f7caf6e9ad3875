from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Union

from ..attendance.model import AttendanceStats
from ..attendance.service import AttendanceService
from ..common.datetime_utils import greeting_for, weekday_of
from ..core.enums import Role
from ..faculty.service import FacultyService
from ..students.service import StudentService
from ..timetable.model import LectureSlot
from ..timetable.service import TimetableService
from ..users.session import SessionUser


@dataclass(frozen=True)
class StatCard:
    title: str
    value: Union[int, str]
    description: str

    def to_dict(self) -> dict:
        return {"title": self.title, "value": self.value, "description": self.description}


def _slots(slots) -> list[dict]:
    return [s.to_dict() for s in slots]


@dataclass(frozen=True)
class AdminDashboard:
    greeting: str
    cards: tuple[StatCard, ...]

    def to_dict(self) -> dict:
        return {"role": Role.ADMIN.value, "greeting": self.greeting, "cards": [c.to_dict() for c in self.cards]}


@dataclass(frozen=True)
class FacultyDashboard:
    greeting: str
    cards: tuple[StatCard, ...]
    todays_classes: tuple[LectureSlot, ...]

    def to_dict(self) -> dict:
        return {
            "role": Role.FACULTY.value,
            "greeting": self.greeting,
            "cards": [c.to_dict() for c in self.cards],
            "todays_classes": _slots(self.todays_classes),
        }


@dataclass(frozen=True)
class StudentDashboard:
    greeting: str
    stats: AttendanceStats
    todays_classes: tuple[LectureSlot, ...]

    def to_dict(self) -> dict:
        return {
            "role": Role.STUDENT.value,
            "greeting": self.greeting,
            "stats": self.stats.to_dict(),
            "todays_classes": _slots(self.todays_classes),
        }


Dashboard = Union[AdminDashboard, FacultyDashboard, StudentDashboard]


class DashboardService:
    """Builds the per-role landing page; the role is dispatched once in build()."""

    def __init__(
        self,
        *,
        students: StudentService,
        faculty: FacultyService,
        timetable: TimetableService,
        attendance: AttendanceService,
    ):
        self._students = students
        self._faculty = faculty
        self._timetable = timetable
        self._attendance = attendance

    def build(self, user: SessionUser, *, now: datetime) -> Dashboard:
        builders: dict[Role, Callable[[SessionUser, datetime], Dashboard]] = {
            Role.ADMIN: self._admin,
            Role.FACULTY: self._faculty_view,
            Role.STUDENT: self._student,
        }
        return builders[user.role](user, now)

    def _admin(self, user: SessionUser, now: datetime) -> AdminDashboard:
        faculty = self._faculty.search(current_role=Role.ADMIN)
        departments = {f.department for f in faculty if f.department}
        stats = self._attendance.stats()
        return AdminDashboard(
            greeting=greeting_for(now),
            cards=(
                StatCard("Total Students", self._students.count(), "Enrolled students"),
                StatCard("Faculty Members", len(faculty), "Active faculty"),
                StatCard("Departments", len(departments), "Active departments"),
                StatCard("Total Classes", self._timetable.count_slots(), "Across all courses"),
                StatCard("Average Attendance", f"{stats.percentage}%", "Overall attendance rate"),
            ),
        )

    def _faculty_view(self, user: SessionUser, now: datetime) -> FacultyDashboard:
        sections = {s.section for s in self._timetable.classes_for_creator(user.user_id)}
        students = sum(self._students.count(section=section) for section in sorted(sections))
        todays = self._timetable.classes_on(weekday_of(now.date()), created_by=user.user_id)
        return FacultyDashboard(
            greeting=greeting_for(now),
            cards=(
                StatCard("My Classes", self._timetable.count_slots(created_by=user.user_id), "Classes assigned"),
                StatCard("Students", students, "Across all classes"),
                StatCard("Today's Classes", len(todays), "Scheduled today"),
            ),
            todays_classes=tuple(todays),
        )

    def _student(self, user: SessionUser, now: datetime) -> StudentDashboard:
        if user.student_id:
            stats = self._attendance.stats(student_id=user.student_id)
        else:
            stats = AttendanceStats.from_records([])
        todays = self._timetable.classes_on(weekday_of(now.date()), section=user.section) if user.section else []
        return StudentDashboard(greeting=greeting_for(now), stats=stats, todays_classes=tuple(todays))
