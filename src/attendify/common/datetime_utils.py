from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.enums import Weekday
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def weekday_of(value: date) -> Optional[Weekday]:
    """Timetable day for a calendar date, None on Sunday."""
    days = list(Weekday)
    idx = value.weekday()
    return days[idx] if idx < len(days) else None


def greeting_for(now: datetime) -> str:
    if now.hour < 12:
        return "Good Morning"
    if now.hour < 18:
        return "Good Afternoon"
    return "Good Evening"
