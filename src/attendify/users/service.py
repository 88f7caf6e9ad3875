from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_fields, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from ..faculty.service import FacultyService
from ..students.service import StudentService
from .repository import UserRepository
from .session import SessionUser

logger = logging.getLogger(__name__)

SIGNUP_ROLES = (Role.FACULTY, Role.STUDENT)


class AuthService:
    """Use cases: authenticate (login) and create an account (signup)."""

    def __init__(self, users: UserRepository, students: StudentService, faculty: FacultyService):
        self._users = users
        self._students = students
        self._faculty = faculty

    def _session_user(self, user) -> SessionUser:
        student_id: Optional[str] = None
        if user.role == Role.STUDENT:
            student = self._students.find_by_user(user.user_id)
            student_id = student.student_id if student else None

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            section=user.section,
            student_id=student_id,
        )

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email) if email else None
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        return self._session_user(user)

    def signup(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role,
        registration_number: str = "",
        semester: str = "",
        branch: str = "",
        section: str = "",
    ) -> SessionUser:
        values = require_fields({"name": name, "email": email, "password": password})
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        email = values["email"].lower()
        if "@" not in email:
            raise ValidationError("Invalid email address")

        if role not in SIGNUP_ROLES:
            raise ValidationError("Admin accounts cannot be created from signup")

        student_fields: dict[str, str] = {}
        if role == Role.STUDENT:
            student_fields = require_fields(
                {
                    "registration_number": registration_number,
                    "semester": semester,
                    "branch": branch,
                    "section": section,
                },
                "Please fill in all student details",
            )
            self._students.ensure_registration_available(student_fields["registration_number"])

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user_id = self._users.create_user(
            name=values["name"],
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            registration_number=student_fields.get("registration_number"),
            semester=student_fields.get("semester"),
            branch=student_fields.get("branch"),
            section=student_fields.get("section"),
        )

        try:
            if role == Role.STUDENT:
                self._students.register(name=values["name"], email=email, user_id=user_id, **student_fields)
            else:
                self._faculty.register(name=values["name"], email=email, user_id=user_id)
        except DomainError:
            # No login account without its roster row.
            logger.warning("signup for %s failed after account creation; removing account %d", email, user_id)
            self._users.delete_user(user_id)
            raise

        logger.info("account created: %s (%s)", email, role.value)
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Account could not be loaded after signup")
        return self._session_user(user)


def parse_role(value: Optional[str]) -> Role:
    try:
        return Role(require_non_empty(value, "Role").lower())
    except ValueError:
        raise ValidationError("Invalid account type")
