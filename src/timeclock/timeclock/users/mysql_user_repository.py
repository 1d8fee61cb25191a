from __future__ import annotations

from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import from_db_datetime
from .model import User
from .repository import UserRepository

_SELECT_USER = "SELECT user_id, username, password_hash, display_name, created_at FROM users"


def _to_user(r: Optional[dict[str, Any]]) -> Optional[User]:
    if not r:
        return None
    return User(
        user_id=int(r["user_id"]),
        username=r["username"],
        password_hash=r["password_hash"],
        display_name=r.get("display_name"),
        created_at=from_db_datetime(r["created_at"]) if r.get("created_at") else None,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._db.cursor() as cur:
            cur.execute(f"{_SELECT_USER} WHERE user_id=%s", (int(user_id),))
            return _to_user(cur.fetchone())

    def get_by_username(self, username: str) -> Optional[User]:
        with self._db.cursor() as cur:
            cur.execute(f"{_SELECT_USER} WHERE username=%s", (username,))
            return _to_user(cur.fetchone())

    def create_user(self, *, username: str, password_hash: str, display_name: Optional[str]) -> int:
        with self._db.cursor() as cur:
            cur.execute(
                "INSERT INTO users(username, password_hash, display_name, created_at) VALUES(%s,%s,%s,UTC_TIMESTAMP(3))",
                (username, password_hash, display_name),
            )
            return int(cur.lastrowid)
