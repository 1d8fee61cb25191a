from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchKind, PunchSource
from .model import Punch


class PunchRepository(Protocol):
    """Punch store. Range queries include both endpoints."""

    def find_in_range(self, user_id: int, start: datetime, end: datetime) -> Sequence[Punch]:
        raise NotImplementedError

    def get_for_user(self, punch_id: int, user_id: int) -> Optional[Punch]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(
        self,
        punch_id: int,
        *,
        timestamp: datetime,
        kind: PunchKind,
        is_edited: bool,
        comment: Optional[str] = None,
    ) -> Punch:
        raise NotImplementedError

    def delete(self, punch_id: int) -> bool:
        raise NotImplementedError
