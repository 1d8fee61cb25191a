"""Chat payloads for a classified punch (Slack attachments, Discord embeds)."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import NOTIFICATION_FOOTER
from ..core.enums import PunchSource, PunchType
from ..ledger.boundaries import DEFAULT_CALENDAR, BusinessCalendar
from ..ledger.formatting import format_datetime
from ..punches.model import ClassifiedPunch


@dataclass(frozen=True)
class EventStyle:
    emoji: str
    action: str
    color: str


EVENT_STYLES = {
    PunchType.CLOCK_IN: EventStyle(":large_green_circle:", "clocked in", "#36a64f"),
    PunchType.CLOCK_OUT: EventStyle(":red_circle:", "clocked out", "#ff0000"),
    PunchType.BREAK_START: EventStyle(":coffee:", "started a break", "#ffa500"),
    PunchType.BREAK_END: EventStyle(":muscle:", "ended a break", "#0000ff"),
}

SOURCE_LABELS = {
    PunchSource.WEB: "Web",
    PunchSource.EXTERNAL: "External",
}


def build_slack_message(
    record: ClassifiedPunch, display_name: str, calendar: BusinessCalendar = DEFAULT_CALENDAR
) -> dict:
    style = EVENT_STYLES[record.type]
    fields = [
        {"title": "Time", "value": format_datetime(record.timestamp, calendar), "short": True},
        {"title": "Source", "value": SOURCE_LABELS[record.punch.source], "short": True},
    ]
    if record.punch.comment:
        fields.append({"title": "Comment", "value": record.punch.comment, "short": False})

    return {
        "text": f"{style.emoji} {display_name} {style.action}",
        "attachments": [
            {
                "color": style.color,
                "fields": fields,
                "footer": NOTIFICATION_FOOTER,
                "ts": int(record.timestamp.timestamp()),
            }
        ],
    }


def build_discord_message(
    record: ClassifiedPunch, display_name: str, calendar: BusinessCalendar = DEFAULT_CALENDAR
) -> dict:
    style = EVENT_STYLES[record.type]
    fields = [
        {"name": "Time", "value": format_datetime(record.timestamp, calendar), "inline": True},
        {"name": "Source", "value": SOURCE_LABELS[record.punch.source], "inline": True},
    ]
    if record.punch.comment:
        fields.append({"name": "Comment", "value": record.punch.comment, "inline": False})

    return {
        "embeds": [
            {
                "title": f"{display_name} {style.action}",
                "color": int(style.color.lstrip("#"), 16),
                "fields": fields,
                "timestamp": record.timestamp.isoformat(),
                "footer": {"text": NOTIFICATION_FOOTER},
            }
        ]
    }
