from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .core.constants import DEFAULT_DAY_START_HOUR, DEFAULT_NOTIFY_TIMEOUT_SECONDS, DEFAULT_UTC_OFFSET_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .ledger.aggregator import LedgerAggregator
from .ledger.boundaries import BusinessCalendar
from .notifications.messages import build_discord_message, build_slack_message
from .notifications.webhook import BackgroundNotifier, Notifier, NotifierGroup, WebhookNotifier
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchService
from .reports.service import MonthlyReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    punches_repo: PunchRepository

    aggregator: LedgerAggregator
    auth_service: AuthService
    punch_service: PunchService
    report_service: MonthlyReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    users_repo: UserRepository,
    punches_repo: PunchRepository,
    *,
    calendar: Optional[BusinessCalendar] = None,
    notifier: Optional[Notifier] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    aggregator = LedgerAggregator(calendar)
    return Container(
        users_repo=users_repo,
        punches_repo=punches_repo,
        aggregator=aggregator,
        auth_service=AuthService(users_repo),
        punch_service=PunchService(punches_repo, aggregator=aggregator, notifier=notifier),
        report_service=MonthlyReportService(punches_repo, aggregator=aggregator),
        conn=conn,
    )


def build_notifier(
    *,
    slack_webhook_url: Optional[str] = None,
    discord_webhook_url: Optional[str] = None,
    timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
    calendar: Optional[BusinessCalendar] = None,
) -> Optional[Notifier]:
    calendar = calendar or BusinessCalendar()
    notifiers = [
        WebhookNotifier("Slack", slack_webhook_url, lambda r, n: build_slack_message(r, n, calendar), timeout=timeout),
        WebhookNotifier(
            "Discord", discord_webhook_url, lambda r, n: build_discord_message(r, n, calendar), timeout=timeout
        ),
    ]
    enabled = [n for n in notifiers if n.enabled]
    if not enabled:
        return None
    # delivery runs off the request thread
    return BackgroundNotifier(NotifierGroup(enabled))


def build_container(
    *,
    db_config: dict,
    utc_offset_hours: float = DEFAULT_UTC_OFFSET_HOURS,
    day_start_hour: int = DEFAULT_DAY_START_HOUR,
    slack_webhook_url: Optional[str] = None,
    discord_webhook_url: Optional[str] = None,
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    calendar = BusinessCalendar(utc_offset=timedelta(hours=utc_offset_hours), day_start_hour=int(day_start_hour))
    notifier = build_notifier(
        slack_webhook_url=slack_webhook_url,
        discord_webhook_url=discord_webhook_url,
        timeout=notify_timeout,
        calendar=calendar,
    )

    return wire(
        MySQLUserRepository(conn),
        MySQLPunchRepository(conn),
        calendar=calendar,
        notifier=notifier,
        conn=conn,
    )
