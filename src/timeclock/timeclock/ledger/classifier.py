from __future__ import annotations

from typing import Iterable, Sequence

from ..common.datetime_utils import ensure_utc
from ..core.enums import PunchKind, PunchType
from ..core.exceptions import InconsistentStateError
from ..punches.model import ClassifiedPunch, Punch

_TYPES_BY_KIND = {
    PunchKind.WORK: (PunchType.CLOCK_IN, PunchType.CLOCK_OUT),
    PunchKind.BREAK: (PunchType.BREAK_START, PunchType.BREAK_END),
}


def chronological(punches: Iterable[Punch]) -> list[Punch]:
    """Sort by (timestamp, punch_id); the id breaks ties between equal timestamps."""
    return sorted(punches, key=lambda p: (ensure_utc(p.timestamp), p.punch_id))


def classify(punches: Iterable[Punch]) -> list[ClassifiedPunch]:
    """Label one business day's punches by their ordinal within their own kind.

    Even ordinals are starts (clock_in / break_start), odd ordinals are ends.
    Work and break punches are counted independently, so inserting a break
    punch never shifts a work punch's type. Precondition: every punch belongs
    to the same business day.
    """
    ordinals = {PunchKind.WORK: 0, PunchKind.BREAK: 0}
    out: list[ClassifiedPunch] = []

    for punch in chronological(punches):
        start_type, end_type = _TYPES_BY_KIND[punch.kind]
        n = ordinals[punch.kind]
        out.append(ClassifiedPunch(punch=punch, type=start_type if n % 2 == 0 else end_type))
        ordinals[punch.kind] = n + 1

    return out


def find_classified(classified: Sequence[ClassifiedPunch], punch_id: int) -> ClassifiedPunch:
    for c in classified:
        if c.punch_id == punch_id:
            return c
    raise InconsistentStateError(f"Punch {punch_id} missing from its classified day")
