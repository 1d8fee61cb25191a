from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from src.timeclock.timeclock.core.enums import PunchKind, PunchSource
from src.timeclock.timeclock.core.exceptions import RecordNotFoundError
from src.timeclock.timeclock.punches.model import ClassifiedPunch, Punch
from src.timeclock.timeclock.users.model import User

JST = timezone(timedelta(hours=9))


def jst(y: int, m: int, d: int, hh: int = 0, mm: int = 0, ss: int = 0, ms: int = 0) -> datetime:
    """Reference-civil (JST) wall time -> aware UTC instant."""
    return datetime(y, m, d, hh, mm, ss, ms * 1000, tzinfo=JST).astimezone(timezone.utc)


class InMemoryPunches:
    def __init__(self, punches=()):
        self._by_id: dict[int, Punch] = {}
        self._id = 0
        for p in punches:
            self._by_id[p.punch_id] = p
            self._id = max(self._id, p.punch_id)

    @property
    def all(self) -> list[Punch]:
        return list(self._by_id.values())

    def find_in_range(self, user_id: int, start: datetime, end: datetime):
        return [p for p in self._by_id.values() if p.user_id == user_id and start <= p.timestamp <= end]

    def get_for_user(self, punch_id: int, user_id: int) -> Optional[Punch]:
        p = self._by_id.get(punch_id)
        return p if p and p.user_id == user_id else None

    def create(self, *, user_id, timestamp, kind, source, is_edited=False, comment=None) -> Punch:
        self._id += 1
        p = Punch(
            punch_id=self._id,
            user_id=user_id,
            timestamp=timestamp,
            kind=kind,
            source=source,
            is_edited=is_edited,
            comment=comment,
        )
        self._by_id[p.punch_id] = p
        return p

    def update(self, punch_id, *, timestamp, kind, is_edited, comment=None) -> Punch:
        p = self._by_id.get(punch_id)
        if not p:
            raise RecordNotFoundError(f"Punch {punch_id} not found")
        p = replace(p, timestamp=timestamp, kind=kind, is_edited=is_edited, comment=comment)
        self._by_id[punch_id] = p
        return p

    def delete(self, punch_id) -> bool:
        return self._by_id.pop(punch_id, None) is not None


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def create_user(self, *, username, password_hash, display_name) -> int:
        user_id = len(self._by_id) + 1
        self._by_id[user_id] = User(
            user_id=user_id, username=username, password_hash=password_hash, display_name=display_name
        )
        return user_id


class RecordingNotifier:
    def __init__(self):
        self.sent: list[tuple[ClassifiedPunch, str]] = []

    def notify(self, record: ClassifiedPunch, display_name: str) -> bool:
        self.sent.append((record, display_name))
        return True


@pytest.fixture
def make_punch():
    """Factory for punches with auto-incrementing ids (insertion order)."""
    counter = {"id": 0}

    def _make(timestamp: datetime, kind: PunchKind = PunchKind.WORK, *, punch_id: int | None = None, user_id: int = 1, **kw):
        if punch_id is None:
            counter["id"] += 1
            punch_id = counter["id"]
        return Punch(
            punch_id=punch_id,
            user_id=user_id,
            timestamp=timestamp,
            kind=kind,
            source=kw.pop("source", PunchSource.WEB),
            **kw,
        )

    return _make


@pytest.fixture
def punch_repo():
    return InMemoryPunches()


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def notifier():
    return RecordingNotifier()
