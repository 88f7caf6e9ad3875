from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, MutableMapping, Optional

from ..core.enums import Role
from ..core.exceptions import AuthenticationError

SESSION_USER_KEY = "user"


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    section: Optional[str] = None
    student_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SessionUser":
        return cls(
            user_id=int(data["user_id"]),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            role=Role(data["role"]),
            section=data.get("section"),
            student_id=data.get("student_id"),
        )


class SessionState(str, Enum):
    INIT = "init"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"
    TORN_DOWN = "torn_down"


class AuthSession:
    """Identity for one request, passed explicitly to whoever needs it.

    INIT -> (load) AUTHENTICATED | UNAUTHENTICATED -> (logout) TORN_DOWN
    """

    def __init__(self, store: MutableMapping[str, Any]):
        self._store = store
        self.state = SessionState.INIT
        self.user: Optional[SessionUser] = None

    @classmethod
    def load(cls, store: MutableMapping[str, Any]) -> "AuthSession":
        auth = cls(store)
        data = store.get(SESSION_USER_KEY)
        if data:
            try:
                auth.user = SessionUser.from_dict(data)
            except (KeyError, TypeError, ValueError):
                # Stale cookie from an older layout; treat as logged out.
                store.pop(SESSION_USER_KEY, None)
        auth.state = SessionState.AUTHENTICATED if auth.user else SessionState.UNAUTHENTICATED
        return auth

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    def login(self, user: SessionUser) -> None:
        self._store.clear()
        self._store[SESSION_USER_KEY] = user.to_dict()
        self.user = user
        self.state = SessionState.AUTHENTICATED

    def logout(self) -> None:
        self._store.clear()
        self.user = None
        self.state = SessionState.TORN_DOWN

    def require_user(self) -> SessionUser:
        if not self.is_authenticated or self.user is None:
            raise AuthenticationError("Please log in to continue")
        return self.user
