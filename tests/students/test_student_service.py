from __future__ import annotations

import pytest

from attendify.core.enums import Role
from attendify.core.exceptions import AuthorizationError, MissingFieldsError, ValidationError
from attendify.students.service import StudentService
from conftest import add_student


@pytest.fixture
def service(students_repo):
    return StudentService(students_repo)


def test_search_over_name_email_and_registration(service, students_repo):
    add_student(students_repo, "John Smith", "EN12345")
    add_student(students_repo, "Priya Nair", "EN22222", section="IT-501")

    assert [s.name for s in service.search(current_role=Role.FACULTY, term="smith")] == ["John Smith"]
    assert [s.name for s in service.search(current_role=Role.FACULTY, term="en222")] == ["Priya Nair"]
    assert [s.name for s in service.search(current_role=Role.ADMIN, term="", section="IT-501")] == ["Priya Nair"]
    assert len(service.search(current_role=Role.ADMIN, section="all")) == 2


def test_add_requires_all_fields(service):
    with pytest.raises(MissingFieldsError) as exc:
        service.add_student(
            current_role=Role.ADMIN,
            name="A",
            email="",
            registration_number="EN1",
            semester="",
            branch="CS",
            section="CS-301",
        )
    assert set(exc.value.fields) == {"email", "semester"}


def test_duplicate_registration_number(service, students_repo):
    add_student(students_repo, "A", "EN1")
    with pytest.raises(ValidationError):
        service.add_student(
            current_role=Role.ADMIN,
            name="B",
            email="b@example.com",
            registration_number="EN1",
            semester="1st",
            branch="CS",
            section="CS-301",
        )


def test_bulk_delete(service, students_repo):
    a = add_student(students_repo, "A", "EN1")
    add_student(students_repo, "B", "EN2")

    assert service.delete_selected(current_role=Role.FACULTY, student_ids=[]) == 0
    assert service.delete_selected(current_role=Role.FACULTY, student_ids=[a.student_id, "404"]) == 1
    assert service.count() == 1


def test_students_cannot_manage_roster(service):
    with pytest.raises(AuthorizationError):
        service.search(current_role=Role.STUDENT)
