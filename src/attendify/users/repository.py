from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        registration_number: Optional[str] = None,
        semester: Optional[str] = None,
        branch: Optional[str] = None,
        section: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def delete_user(self, user_id: int) -> None:
        raise NotImplementedError
