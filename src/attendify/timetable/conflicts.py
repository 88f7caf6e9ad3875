from __future__ import annotations

from typing import Iterable, Optional

from .model import LectureSlot


def find_conflict(candidate: LectureSlot, existing: Iterable[LectureSlot]) -> Optional[LectureSlot]:
    """First slot of the same section and day whose interval overlaps the candidate."""
    for slot in existing:
        if slot.day != candidate.day or slot.section != candidate.section:
            continue
        # Replacing a slot must not collide with its own previous version.
        if candidate.slot_id is not None and slot.slot_id == candidate.slot_id:
            continue
        if candidate.overlaps(slot):
            return slot
    return None


def has_conflict(candidate: LectureSlot, existing: Iterable[LectureSlot]) -> bool:
    return find_conflict(candidate, existing) is not None
