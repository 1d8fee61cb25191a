from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    display_name: str


class AuthService:
    """Use cases: sign up and authenticate (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def signup(self, *, username: str, password: str, display_name: Optional[str] = None) -> SessionUser:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        display_name = (display_name or "").strip() or None

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            display_name=display_name,
        )
        return SessionUser(user_id=user_id, username=username, display_name=display_name or username)

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, username=user.username, display_name=user.name)

    def get_session_user(self, user_id: int) -> SessionUser:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("Session user no longer exists")
        return SessionUser(user_id=user.user_id, username=user.username, display_name=user.name)
