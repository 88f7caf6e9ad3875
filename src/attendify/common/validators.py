from __future__ import annotations

from typing import Mapping, Optional

from ..core.exceptions import MissingFieldsError, ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_fields(values: Mapping[str, Optional[str]], message: Optional[str] = None) -> dict[str, str]:
    """Check every field at once and report all missing ones together."""
    missing = [name for name, value in values.items() if not value or not str(value).strip()]
    if missing:
        raise MissingFieldsError(missing, message)
    return {name: str(value).strip() for name, value in values.items()}
