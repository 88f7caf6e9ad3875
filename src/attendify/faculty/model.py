from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Faculty:
    """Domain entity: a faculty member."""

    faculty_id: int
    name: str
    email: str = ""
    phone: str = ""
    department: str = ""
    subjects: tuple[str, ...] = field(default_factory=tuple)
    user_id: Optional[int] = None

    def matches(self, term: str) -> bool:
        term = (term or "").strip().lower()
        if not term:
            return True
        return term in self.name.lower() or term in self.email.lower() or term in self.department.lower()

    def to_dict(self) -> dict:
        return {
            "id": self.faculty_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "department": self.department,
            "subjects": list(self.subjects),
        }
