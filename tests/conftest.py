from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from attendify.attendance.model import AttendanceRecord, RosterEntry
from attendify.container import wire
from attendify.core.enums import Role
from attendify.core.exceptions import RemoteWriteError
from attendify.faculty.model import Faculty
from attendify.main import create_app
from attendify.students.model import Student
from attendify.timetable.model import LectureSlot
from attendify.users.model import User

PASSWORD = "password123"


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._next_id = 1

    def add(self, *, name: str, email: str, role: Role, section: Optional[str] = None, is_active: bool = True) -> User:
        user_id = self.create_user(
            name=name, email=email, password_hash=generate_password_hash(PASSWORD), role=role, section=section
        )
        if not is_active:
            self.by_id[user_id] = replace(self.by_id[user_id], is_active=False)
        return self.by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def delete_user(self, user_id: int) -> None:
        self.by_id.pop(user_id, None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, registration_number=None, semester=None, branch=None, section=None) -> int:
        user_id = self._next_id
        self._next_id += 1
        self.by_id[user_id] = User(
            user_id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            registration_number=registration_number,
            semester=semester,
            branch=branch,
            section=section,
        )
        return user_id


class InMemoryStudents:
    def __init__(self):
        self.students: dict[str, Student] = {}
        self._next_id = 1
        self.fail_writes = False

    def fetch_roster(self, section: str):
        return [s.to_roster_entry() for s in sorted(self.list_all(section=section), key=lambda s: s.name)]

    def list_all(self, *, section: Optional[str] = None):
        return [s for s in self.students.values() if section is None or s.section == section]

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        return next((s for s in self.students.values() if s.user_id == user_id), None)

    def get_by_registration_number(self, registration_number: str) -> Optional[Student]:
        return next((s for s in self.students.values() if s.registration_number == registration_number), None)

    def create(self, *, name, email, registration_number, semester, branch, section, user_id=None) -> Student:
        if self.fail_writes:
            raise RemoteWriteError("Add student failed: duplicate registration number")
        student = Student(
            student_id=str(self._next_id),
            name=name,
            email=email,
            registration_number=registration_number,
            semester=semester,
            branch=branch,
            section=section,
            user_id=user_id,
        )
        self._next_id += 1
        self.students[student.student_id] = student
        return student

    def delete_many(self, student_ids) -> int:
        deleted = 0
        for sid in student_ids:
            if self.students.pop(str(sid), None):
                deleted += 1
        return deleted


class InMemoryFaculty:
    def __init__(self):
        self.members: dict[int, Faculty] = {}
        self._next_id = 1

    def list_all(self):
        return sorted(self.members.values(), key=lambda f: f.name)

    def create(self, *, name, email="", phone="", department="", subjects=(), user_id=None) -> Faculty:
        member = Faculty(
            faculty_id=self._next_id,
            name=name,
            email=email,
            phone=phone,
            department=department,
            subjects=tuple(subjects),
            user_id=user_id,
        )
        self._next_id += 1
        self.members[member.faculty_id] = member
        return member

    def delete_many(self, faculty_ids) -> int:
        return sum(1 for fid in faculty_ids if self.members.pop(int(fid), None))


class InMemoryTimetable:
    def __init__(self):
        self.slots: list[LectureSlot] = []
        self.created_by: dict[str, Optional[int]] = {}
        self.fail_writes = False

    def list_slots(self, *, section=None, day=None, created_by=None):
        return [
            s
            for s in self.slots
            if (section is None or s.section == section)
            and (day is None or s.day == day)
            and (created_by is None or self.created_by.get(s.slot_id) == created_by)
        ]

    def insert(self, slot: LectureSlot, *, created_by=None) -> LectureSlot:
        if self.fail_writes:
            raise RemoteWriteError("Insert lecture slot failed: connection lost")
        stored = slot.with_id(str(len(self.slots) + 1))
        self.slots.append(stored)
        self.created_by[stored.slot_id] = created_by
        return stored


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[tuple[str, date], AttendanceRecord] = {}
        self.fail_writes = False
        self.write_calls = 0
        self.on_write = None

    def fetch_for_students(self, student_ids, attend_date):
        return [self.records[(sid, attend_date)] for sid in student_ids if (sid, attend_date) in self.records]

    def upsert_many(self, records) -> None:
        self.write_calls += 1
        if self.on_write:
            self.on_write()
        if self.fail_writes:
            raise RemoteWriteError("Save attendance failed: connection lost")
        for r in records:
            self.records[(r.student_id, r.attend_date)] = replace(r, record_id=f"{r.student_id}:{r.attend_date}")

    def list_records(self, *, section=None, student_id=None, start=None, end=None, limit=None):
        out = [
            r
            for r in self.records.values()
            if (section is None or r.section == section)
            and (student_id is None or r.student_id == student_id)
            and (start is None or r.attend_date >= start)
            and (end is None or r.attend_date <= end)
        ]
        out.sort(key=lambda r: (r.attend_date, r.student_id), reverse=True)
        return out[:limit] if limit else out


def add_student(repo: InMemoryStudents, name: str, reg: str, section: str = "CS-301", user_id=None) -> Student:
    return repo.create(
        name=name,
        email=f"{reg.lower()}@example.com",
        registration_number=reg,
        semester="4th",
        branch="Computer Science",
        section=section,
        user_id=user_id,
    )


def roster(*names: str) -> list[RosterEntry]:
    return [RosterEntry(student_id=str(i), name=n, registration_number=f"EN{i:05d}") for i, n in enumerate(names, 1)]


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def students_repo():
    return InMemoryStudents()


@pytest.fixture
def faculty_repo():
    return InMemoryFaculty()


@pytest.fixture
def timetable_repo():
    return InMemoryTimetable()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def container(users_repo, students_repo, faculty_repo, timetable_repo, attendance_repo):
    return wire(
        users_repo=users_repo,
        students_repo=students_repo,
        faculty_repo=faculty_repo,
        timetable_repo=timetable_repo,
        attendance_repo=attendance_repo,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="attendify.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, users_repo):
    """Create an account with the given role and log the test client in as it."""

    def _login(role: Role, *, section: Optional[str] = None) -> User:
        user = users_repo.add(name=f"{role.value.title()} User", email=f"{role.value}@example.com", role=role, section=section)
        resp = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert resp.status_code == 200
        return user

    return _login
