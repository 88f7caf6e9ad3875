from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Note: Plain data object (no DB access code here).
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    registration_number: Optional[str] = None
    semester: Optional[str] = None
    branch: Optional[str] = None
    section: Optional[str] = None
    is_active: bool = True
