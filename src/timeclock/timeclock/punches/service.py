from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import ensure_utc, now_utc
from ..core.enums import PunchKind, PunchSource
from ..core.exceptions import RecordNotFoundError, ValidationError
from ..ledger.aggregator import LedgerAggregator
from ..ledger.classifier import classify, find_classified
from ..notifications.webhook import Notifier
from .model import ClassifiedPunch, LedgerStatus, MonthAggregate
from .repository import PunchRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyRecords:
    records: list[ClassifiedPunch]
    stats: MonthAggregate


class PunchService:
    """Use cases: punch, edit, delete, status and monthly listing.

    Types are never stored; every read reloads the business day (or month)
    and classifies it again, so an edit or delete reclassifies later punches.
    """

    def __init__(
        self,
        punches: PunchRepository,
        *,
        aggregator: LedgerAggregator | None = None,
        notifier: Notifier | None = None,
    ):
        self._punches = punches
        self._aggregator = aggregator or LedgerAggregator()
        self._notifier = notifier

    @property
    def calendar(self):
        return self._aggregator.calendar

    def _classified_day_of(self, user_id: int, instant: datetime) -> list[ClassifiedPunch]:
        cal = self.calendar
        day = self._punches.find_in_range(user_id, cal.day_start(instant), cal.day_end(instant))
        return classify(day)

    def clock(
        self,
        user_id: int,
        *,
        kind: PunchKind = PunchKind.WORK,
        source: PunchSource = PunchSource.WEB,
        timestamp: Optional[datetime] = None,
        display_name: str = "",
    ) -> ClassifiedPunch:
        # an explicit timestamp means the user back-filled the punch
        at = ensure_utc(timestamp) if timestamp else now_utc()
        punch = self._punches.create(
            user_id=user_id,
            timestamp=at,
            kind=kind,
            source=source,
            is_edited=timestamp is not None,
        )

        record = find_classified(self._classified_day_of(user_id, punch.timestamp), punch.punch_id)
        self._notify(record, display_name)
        return record

    def _notify(self, record: ClassifiedPunch, display_name: str) -> None:
        if not self._notifier:
            return
        try:
            self._notifier.notify(record, display_name)
        except Exception:
            logger.exception("Notification dispatch failed for punch %s", record.punch_id)

    def update_punch(
        self,
        user_id: int,
        punch_id: int,
        *,
        timestamp: Optional[datetime],
        comment: Optional[str] = None,
        kind: Optional[PunchKind] = None,
    ) -> ClassifiedPunch:
        if timestamp is None:
            raise ValidationError("Timestamp is required")

        self._require_owned(user_id, punch_id)
        updated = self._punches.update(
            punch_id,
            timestamp=ensure_utc(timestamp),
            kind=kind or PunchKind.WORK,
            is_edited=True,
            comment=(comment or "").strip() or None,
        )
        return find_classified(self._classified_day_of(user_id, updated.timestamp), punch_id)

    def delete_punch(self, user_id: int, punch_id: int) -> None:
        self._require_owned(user_id, punch_id)
        if not self._punches.delete(punch_id):
            raise RecordNotFoundError(f"Punch {punch_id} not found")

    def _require_owned(self, user_id: int, punch_id: int) -> None:
        if not self._punches.get_for_user(punch_id, user_id):
            raise RecordNotFoundError(f"Punch {punch_id} not found")

    def current_status(self, user_id: int, *, now: Optional[datetime] = None) -> LedgerStatus:
        now = now or now_utc()
        cal = self.calendar
        today = self._punches.find_in_range(user_id, cal.day_start(now), cal.day_end(now))
        return self._aggregator.status_of(today)

    def monthly_records(self, user_id: int, *, year: int, month: int) -> MonthlyRecords:
        start, end = self.calendar.month_range(year, month)
        punches = self._punches.find_in_range(user_id, start, end)
        return MonthlyRecords(
            records=self._aggregator.classify_by_day(punches),
            stats=self._aggregator.monthly_stats(punches),
        )
