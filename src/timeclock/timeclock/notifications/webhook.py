from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol, Sequence

import requests

from ..core.constants import DEFAULT_NOTIFY_TIMEOUT_SECONDS
from ..punches.model import ClassifiedPunch

logger = logging.getLogger(__name__)

MessageBuilder = Callable[[ClassifiedPunch, str], dict]


class Notifier(Protocol):
    def notify(self, record: ClassifiedPunch, display_name: str) -> bool:
        raise NotImplementedError


class WebhookNotifier:
    """Posts a chat message for a punch to an incoming-webhook URL.

    Delivery is best effort: failures are logged and reported as ``False``,
    never raised, so a punch is never rejected because chat is down.
    """

    def __init__(
        self,
        name: str,
        url: Optional[str],
        build_message: MessageBuilder,
        *,
        timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.name = name
        self._url = (url or "").strip()
        self._build_message = build_message
        self._timeout = timeout
        self._http = session or requests

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    def notify(self, record: ClassifiedPunch, display_name: str) -> bool:
        if not self.enabled:
            logger.debug("%s webhook URL not configured, skipping notification", self.name)
            return False

        payload = self._build_message(record, display_name)
        try:
            response = self._http.post(self._url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("%s notification failed for punch %s: %s", self.name, record.punch_id, e)
            return False

        logger.info("%s notification sent for punch %s", self.name, record.punch_id)
        return True


class NotifierGroup:
    """Fans a punch out to every configured notifier."""

    def __init__(self, notifiers: Sequence[Notifier] = ()):
        self._notifiers = list(notifiers)

    def notify(self, record: ClassifiedPunch, display_name: str) -> bool:
        results = [n.notify(record, display_name) for n in self._notifiers]
        return any(results)


class BackgroundNotifier:
    """Hands notifications to a worker pool so punches never wait on chat.

    ``notify`` returns as soon as the delivery is queued.
    """

    def __init__(self, notifier: Notifier, *, executor: Optional[Executor] = None, max_workers: int = 2):
        self._notifier = notifier
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")

    def notify(self, record: ClassifiedPunch, display_name: str) -> bool:
        future = self._executor.submit(self._notifier.notify, record, display_name)
        future.add_done_callback(lambda f: self._log_failure(f, record))
        return True

    @staticmethod
    def _log_failure(future: Future, record: ClassifiedPunch) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Background notification failed for punch %s", record.punch_id, exc_info=exc)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
