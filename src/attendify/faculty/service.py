from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..core.enums import Department, Role
from ..core.exceptions import AuthorizationError, MissingFieldsError, ValidationError
from .model import Faculty
from .repository import FacultyRepository

logger = logging.getLogger(__name__)


def normalize_subjects(subjects: Iterable[str]) -> tuple[str, ...]:
    """Strip blanks and drop repeats (case-insensitive), keeping first spelling and order."""
    seen: set[str] = set()
    out: list[str] = []
    for s in subjects:
        s = (s or "").strip()
        if s and s.lower() not in seen:
            seen.add(s.lower())
            out.append(s)
    return tuple(out)


class FacultyService:
    """Use case: manage faculty members (admin only)."""

    def __init__(self, faculty: FacultyRepository):
        self._faculty = faculty

    def _require_admin(self, current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage faculty")

    def search(self, *, current_role: Role, term: str = "") -> list[Faculty]:
        self._require_admin(current_role)
        return [f for f in self._faculty.list_all() if f.matches(term)]

    def count(self) -> int:
        return len(self._faculty.list_all())

    def add_faculty(
        self,
        *,
        current_role: Role,
        name: str,
        email: str = "",
        phone: str = "",
        department: str = "",
        subjects: Sequence[str] = (),
        user_id: Optional[int] = None,
    ) -> Faculty:
        self._require_admin(current_role)
        return self.register(
            name=name, email=email, phone=phone, department=department, subjects=subjects, user_id=user_id
        )

    def register(
        self,
        *,
        name: str,
        email: str = "",
        phone: str = "",
        department: str = "",
        subjects: Sequence[str] = (),
        user_id: Optional[int] = None,
    ) -> Faculty:
        if not name or not name.strip():
            raise MissingFieldsError(["name"])
        name = name.strip()

        department = (department or "").strip()
        if department:
            try:
                department = Department(department).value
            except ValueError:
                raise ValidationError(f"Unknown department: {department}")

        email = (email or "").strip()
        if email and "@" not in email:
            raise ValidationError("Invalid email address")

        faculty = self._faculty.create(
            name=name,
            email=email,
            phone=(phone or "").strip(),
            department=department,
            subjects=normalize_subjects(subjects),
            user_id=user_id,
        )
        logger.info("faculty added: %s", faculty.name)
        return faculty

    def delete_selected(self, *, current_role: Role, faculty_ids: Sequence[int]) -> int:
        self._require_admin(current_role)
        ids: list[int] = []
        for fid in faculty_ids:
            try:
                ids.append(int(fid))
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid faculty id: {fid!r}")
        if not ids:
            return 0
        return self._faculty.delete_many(ids)
