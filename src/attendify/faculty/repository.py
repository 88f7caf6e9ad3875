from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Faculty


class FacultyRepository(Protocol):
    def list_all(self) -> Sequence[Faculty]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        phone: str,
        department: str,
        subjects: Sequence[str],
        user_id: Optional[int] = None,
    ) -> Faculty:
        raise NotImplementedError

    def delete_many(self, faculty_ids: Sequence[int]) -> int:
        raise NotImplementedError
