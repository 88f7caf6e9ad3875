"""Conversions between 24-hour input, 12-hour display and minute-of-day.

Slots are compared and stored as minutes since midnight. Text in either
"HH:MM" or "hh:mm AM/PM" form is normalised through parse_minutes before any
comparison.
"""

from __future__ import annotations

import re

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(?:([AaPp])[Mm])?\s*$")


def _split(text: str) -> tuple[int, int, str | None]:
    m = _TIME_RE.match(text or "")
    if not m:
        raise ValidationError(f"Invalid time: {text!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    meridiem = m.group(3).upper() + "M" if m.group(3) else None
    if minute > 59:
        raise ValidationError(f"Invalid time: {text!r}")
    if meridiem is None and hour > 23:
        raise ValidationError(f"Invalid time: {text!r}")
    if meridiem is not None and not 1 <= hour <= 12:
        raise ValidationError(f"Invalid time: {text!r}")
    return hour, minute, meridiem


def parse_minutes(text: str) -> int:
    """Minute of day for "HH:MM" or "hh:mm AM/PM"."""
    hour, minute, meridiem = _split(text)
    if meridiem is not None:
        hour = hour % 12 + (12 if meridiem == "PM" else 0)
    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Minute of day -> "HH:MM"."""
    if not 0 <= int(minutes) < MINUTES_PER_DAY:
        raise ValidationError(f"Minute of day out of range: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_12_hour(time24: str) -> str:
    """Convert "HH:MM" to "hh:mm AM/PM".

    0 -> 12 AM, 12 -> 12 PM, 13..23 -> 1..11 PM, 1..11 -> AM.
    """
    hour, minute, meridiem = _split(time24)
    if meridiem is not None:
        raise ValidationError(f"Expected 24-hour time: {time24!r}")

    suffix = "AM"
    if hour == 0:
        hour = 12
    elif hour == 12:
        suffix = "PM"
    elif hour > 12:
        hour -= 12
        suffix = "PM"
    return f"{hour:02d}:{minute:02d} {suffix}"


def to_24_hour(time12: str) -> str:
    """Convert "hh:mm AM/PM" to "HH:MM"."""
    _, _, meridiem = _split(time12)
    if meridiem is None:
        raise ValidationError(f"Expected 12-hour time: {time12!r}")
    return format_minutes(parse_minutes(time12))


def minutes_to_12_hour(minutes: int) -> str:
    return to_12_hour(format_minutes(minutes))
