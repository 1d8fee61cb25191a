from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import PunchKind, PunchSource
from ..core.exceptions import RecordNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import from_db_datetime, to_db_datetime
from .model import Punch
from .repository import PunchRepository

_COLUMNS = "punch_id, user_id, punched_at, kind, source, is_edited, comment"


def _to_punch(r: dict[str, Any]) -> Punch:
    return Punch(
        punch_id=int(r["punch_id"]),
        user_id=int(r["user_id"]),
        timestamp=from_db_datetime(r["punched_at"]),
        kind=PunchKind(r["kind"]),
        source=PunchSource(r["source"]),
        is_edited=bool(r.get("is_edited")),
        comment=r.get("comment"),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def find_in_range(self, user_id: int, start: datetime, end: datetime) -> Sequence[Punch]:
        with self._db.cursor() as cur:
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE user_id=%s AND punched_at BETWEEN %s AND %s
                ORDER BY punched_at ASC, punch_id ASC
                """,
                (int(user_id), to_db_datetime(start), to_db_datetime(end)),
            )
            return [_to_punch(r) for r in cur.fetchall()]

    def get_for_user(self, punch_id: int, user_id: int) -> Optional[Punch]:
        with self._db.cursor() as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM punches WHERE punch_id=%s AND user_id=%s",
                (int(punch_id), int(user_id)),
            )
            r = cur.fetchone()
            return _to_punch(r) if r else None

    def _get(self, cur, punch_id: int) -> Punch:
        cur.execute(f"SELECT {_COLUMNS} FROM punches WHERE punch_id=%s", (int(punch_id),))
        r = cur.fetchone()
        if not r:
            raise RecordNotFoundError(f"Punch {punch_id} not found")
        return _to_punch(r)

    def create(
        self,
        *,
        user_id: int,
        timestamp: datetime,
        kind: PunchKind,
        source: PunchSource,
        is_edited: bool = False,
        comment: Optional[str] = None,
    ) -> Punch:
        with self._db.cursor() as cur:
            cur.execute(
                """
                INSERT INTO punches(user_id, punched_at, kind, source, is_edited, comment)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), to_db_datetime(timestamp), kind.value, source.value, int(is_edited), comment),
            )
            return self._get(cur, int(cur.lastrowid))

    def update(
        self,
        punch_id: int,
        *,
        timestamp: datetime,
        kind: PunchKind,
        is_edited: bool,
        comment: Optional[str] = None,
    ) -> Punch:
        with self._db.cursor() as cur:
            cur.execute(
                """
                UPDATE punches
                SET punched_at=%s, kind=%s, is_edited=%s, comment=%s
                WHERE punch_id=%s
                """,
                (to_db_datetime(timestamp), kind.value, int(is_edited), comment, int(punch_id)),
            )
            return self._get(cur, punch_id)

    def delete(self, punch_id: int) -> bool:
        with self._db.cursor() as cur:
            cur.execute("DELETE FROM punches WHERE punch_id=%s", (int(punch_id),))
            return cur.rowcount > 0
