from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import RosterEntry


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student."""

    student_id: str
    name: str
    email: str
    registration_number: str
    semester: str
    branch: str
    section: str
    user_id: Optional[int] = None

    def to_roster_entry(self) -> RosterEntry:
        return RosterEntry(student_id=self.student_id, name=self.name, registration_number=self.registration_number)

    def matches(self, term: str) -> bool:
        term = (term or "").strip().lower()
        if not term:
            return True
        return (
            term in self.name.lower()
            or term in self.email.lower()
            or term in self.registration_number.lower()
        )

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "registration_number": self.registration_number,
            "semester": self.semester,
            "branch": self.branch,
            "section": self.section,
        }
