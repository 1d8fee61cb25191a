from __future__ import annotations

import threading
from concurrent.futures import Executor, Future

import requests

from conftest import jst
from src.timeclock.timeclock.container import build_notifier
from src.timeclock.timeclock.core.enums import PunchSource, PunchType
from src.timeclock.timeclock.notifications.messages import build_discord_message, build_slack_message
from src.timeclock.timeclock.notifications.webhook import BackgroundNotifier, NotifierGroup, WebhookNotifier
from src.timeclock.timeclock.punches.model import ClassifiedPunch


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def clock_in(make_punch, **kw):
    return ClassifiedPunch(make_punch(jst(2025, 1, 15, 9, 5), **kw), PunchType.CLOCK_IN)


def test_slack_message(make_punch):
    msg = build_slack_message(clock_in(make_punch, comment="train delay"), "Aiko")

    assert msg["text"] == ":large_green_circle: Aiko clocked in"
    (attachment,) = msg["attachments"]
    assert attachment["color"] == "#36a64f"
    assert attachment["fields"][0]["value"] == "2025/01/15 09:05:00"
    assert attachment["fields"][1]["value"] == "Web"
    assert attachment["fields"][2]["value"] == "train delay"


def test_discord_message(make_punch):
    record = ClassifiedPunch(make_punch(jst(2025, 1, 15, 12), source=PunchSource.EXTERNAL), PunchType.BREAK_START)

    (embed,) = build_discord_message(record, "Aiko")["embeds"]

    assert embed["title"] == "Aiko started a break"
    assert embed["color"] == 0xFFA500
    assert [f["name"] for f in embed["fields"]] == ["Time", "Source"]
    assert embed["fields"][1]["value"] == "External"


def test_notify_posts_payload(make_punch):
    http = FakeSession()
    notifier = WebhookNotifier("Slack", "https://hooks.example/abc", build_slack_message, timeout=3, session=http)

    assert notifier.notify(clock_in(make_punch), "Aiko") is True
    (call,) = http.calls
    assert call["url"] == "https://hooks.example/abc"
    assert call["timeout"] == 3
    assert call["json"]["text"].endswith("Aiko clocked in")


def test_notify_without_url_is_disabled(make_punch):
    http = FakeSession()
    notifier = WebhookNotifier("Slack", "  ", build_slack_message, session=http)

    assert notifier.enabled is False
    assert notifier.notify(clock_in(make_punch), "Aiko") is False
    assert http.calls == []


def test_notify_swallows_http_errors(make_punch):
    notifier = WebhookNotifier(
        "Discord", "https://hooks.example/x", build_discord_message, session=FakeSession(FakeResponse(500))
    )
    assert notifier.notify(clock_in(make_punch), "Aiko") is False


def test_notify_swallows_connection_errors(make_punch):
    http = FakeSession(error=requests.ConnectionError("down"))
    notifier = WebhookNotifier("Discord", "https://hooks.example/x", build_discord_message, session=http)
    assert notifier.notify(clock_in(make_punch), "Aiko") is False


def test_notify_uses_requests_by_default(make_punch, monkeypatch):
    sent = []
    monkeypatch.setattr(requests, "post", lambda url, json=None, timeout=None: sent.append(url) or FakeResponse())

    notifier = WebhookNotifier("Slack", "https://hooks.example/abc", build_slack_message)

    assert notifier.notify(clock_in(make_punch), "Aiko") is True
    assert sent == ["https://hooks.example/abc"]


def test_group_fans_out(make_punch):
    a, b = FakeSession(), FakeSession(error=requests.Timeout("slow"))
    group = NotifierGroup(
        [
            WebhookNotifier("Slack", "https://a", build_slack_message, session=a),
            WebhookNotifier("Discord", "https://b", build_discord_message, session=b),
        ]
    )

    assert group.notify(clock_in(make_punch), "Aiko") is True
    assert len(a.calls) == len(b.calls) == 1


def test_empty_group_reports_nothing_sent(make_punch):
    assert NotifierGroup().notify(clock_in(make_punch), "Aiko") is False


class ImmediateExecutor(Executor):
    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class ExplodingNotifier:
    def notify(self, record, display_name):
        raise RuntimeError("boom")


def test_background_notifier_returns_before_delivery(make_punch):
    gate = threading.Event()
    delivered = []

    class SlowNotifier:
        def notify(self, record, display_name):
            gate.wait(timeout=5)
            delivered.append(display_name)
            return True

    bg = BackgroundNotifier(SlowNotifier(), max_workers=1)
    assert bg.notify(clock_in(make_punch), "Aiko") is True
    assert delivered == []

    gate.set()
    bg.shutdown(wait=True)
    assert delivered == ["Aiko"]


def test_background_notifier_logs_failures(make_punch, caplog):
    bg = BackgroundNotifier(ExplodingNotifier(), executor=ImmediateExecutor())

    assert bg.notify(clock_in(make_punch), "Aiko") is True
    assert "Background notification failed" in caplog.text


def test_build_notifier_only_when_a_url_is_configured():
    assert build_notifier(slack_webhook_url="", discord_webhook_url=None) is None
    assert isinstance(build_notifier(slack_webhook_url="https://hooks.example/abc"), BackgroundNotifier)
