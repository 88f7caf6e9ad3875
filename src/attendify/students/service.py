from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_fields
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

MANAGER_ROLES = (Role.ADMIN, Role.FACULTY)


class StudentService:
    """Use case: manage the student roster (admin/faculty)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def _require_manager(self, current_role: Role) -> None:
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("You do not have permission to manage students")

    def search(self, *, current_role: Role, term: str = "", section: Optional[str] = None) -> list[Student]:
        self._require_manager(current_role)
        section = section if section and section != "all" else None
        return [s for s in self._students.list_all(section=section) if s.matches(term)]

    def count(self, *, section: Optional[str] = None) -> int:
        return len(self._students.list_all(section=section))

    def find_by_user(self, user_id: int) -> Optional[Student]:
        return self._students.get_by_user_id(user_id)

    def ensure_registration_available(self, registration_number: str) -> None:
        if self._students.get_by_registration_number(registration_number.strip()):
            raise ValidationError("Registration number already exists")

    def add_student(
        self,
        *,
        current_role: Role,
        name: str,
        email: str,
        registration_number: str,
        semester: str,
        branch: str,
        section: str,
        user_id: Optional[int] = None,
    ) -> Student:
        self._require_manager(current_role)
        return self.register(
            name=name,
            email=email,
            registration_number=registration_number,
            semester=semester,
            branch=branch,
            section=section,
            user_id=user_id,
        )

    def register(
        self,
        *,
        name: str,
        email: str,
        registration_number: str,
        semester: str,
        branch: str,
        section: str,
        user_id: Optional[int] = None,
    ) -> Student:
        """Create the roster row; also used by student signup."""
        values = require_fields(
            {
                "name": name,
                "email": email,
                "registration_number": registration_number,
                "semester": semester,
                "branch": branch,
                "section": section,
            }
        )
        if "@" not in values["email"]:
            raise ValidationError("Invalid email address")
        self.ensure_registration_available(values["registration_number"])

        student = self._students.create(user_id=user_id, **values)
        logger.info("student added: %s (%s)", student.registration_number, student.section)
        return student

    def delete_selected(self, *, current_role: Role, student_ids: Sequence[str]) -> int:
        self._require_manager(current_role)
        ids = [str(sid) for sid in student_ids if str(sid).strip()]
        if not ids:
            return 0
        deleted = self._students.delete_many(ids)
        logger.info("students deleted: %d of %d selected", deleted, len(ids))
        return deleted
