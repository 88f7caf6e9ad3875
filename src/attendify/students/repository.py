from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import RosterEntry
from .model import Student


class StudentRepository(Protocol):
    def fetch_roster(self, section: str) -> Sequence[RosterEntry]:
        raise NotImplementedError

    def list_all(self, *, section: Optional[str] = None) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_registration_number(self, registration_number: str) -> Optional[Student]:
        raise NotImplementedError

    def create(
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
        raise NotImplementedError

    def delete_many(self, student_ids: Sequence[str]) -> int:
        """Returns number of deleted rows."""

        raise NotImplementedError
