from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import LectureSlot


class TimetableRepository(Protocol):
    def list_slots(
        self,
        *,
        section: Optional[str] = None,
        day: Optional[Weekday] = None,
        created_by: Optional[int] = None,
    ) -> Sequence[LectureSlot]:
        raise NotImplementedError

    def insert(self, slot: LectureSlot, *, created_by: Optional[int] = None) -> LectureSlot:
        """Store a candidate slot.

        Returns the slot with its assigned slot_id.
        """

        raise NotImplementedError
