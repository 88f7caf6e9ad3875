from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.constants import DEFAULT_SECTION
from ..core.enums import Weekday


class FormState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    REJECTED = "rejected"
    IDLE = "idle"


@dataclass
class LectureForm:
    """Add-class form.

    EDITING -> VALIDATING -> REJECTED (back to EDITING on the next edit)
                          -> IDLE (accepted; day and section are kept)
    """

    day: str = Weekday.MONDAY.value
    section: str = DEFAULT_SECTION
    start_time: str = ""
    end_time: str = ""
    subject: str = ""
    room: str = ""
    state: FormState = FormState.EDITING
    error: Optional[str] = None

    def edit(self, **changes: str) -> None:
        for name, value in changes.items():
            if name in ("state", "error") or not hasattr(self, name):
                raise AttributeError(f"Unknown form field: {name}")
            setattr(self, name, value)
        self.state = FormState.EDITING
        self.error = None

    def begin_validation(self) -> None:
        self.state = FormState.VALIDATING
        self.error = None

    def reject(self, reason: str) -> None:
        self.state = FormState.REJECTED
        self.error = reason

    def accept(self) -> None:
        # Sticky fields: day and section survive for the next entry.
        self.start_time = ""
        self.end_time = ""
        self.subject = ""
        self.room = ""
        self.state = FormState.IDLE
        self.error = None

    @classmethod
    def from_payload(cls, payload: dict) -> "LectureForm":
        return cls(
            day=str(payload.get("day") or Weekday.MONDAY.value),
            section=str(payload.get("section") or DEFAULT_SECTION),
            start_time=str(payload.get("start_time") or ""),
            end_time=str(payload.get("end_time") or ""),
            subject=str(payload.get("subject") or ""),
            room=str(payload.get("room") or ""),
        )

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "section": self.section,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "subject": self.subject,
            "room": self.room,
            "state": self.state.value,
            "error": self.error,
        }
