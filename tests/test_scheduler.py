# tests/test_scheduler.py
import asyncio
from datetime import datetime, time

import pytz

from kiosk.application.scheduler import DailyReportScheduler, next_run_after, parse_report_time

TZ = pytz.timezone("Asia/Jerusalem")

class FakeGenerator:
    def __init__(self, message):
        self.message = message
        self.calls = 0

    def generate(self):
        self.calls += 1
        return self.message

class FakeHub:
    def __init__(self, connected):
        self.connected_count = connected
        self.sent = []

    async def broadcast(self, event, payload=None):
        self.sent.append((event, payload))

class FakeSender:
    def __init__(self):
        self.reports = []

    def send_report(self, message):
        self.reports.append(message)
        return 0

def _scheduler(message, connected):
    generator, hub, sender = FakeGenerator(message), FakeHub(connected), FakeSender()
    scheduler = DailyReportScheduler(generator, hub, sender, at="19:30", timezone="Asia/Jerusalem")
    return scheduler, generator, hub, sender

def test_fire_broadcasts_link_when_clients_connected():
    scheduler, generator, hub, sender = _scheduler("report text", connected=2)
    assert asyncio.run(scheduler.run_once()) == "report text"
    assert generator.calls == 1
    assert sender.reports == ["report text"]
    assert hub.sent == [("daily_report_ready", {
        "message": "Daily report is ready!",
        "url": "/send-daily-whatsapp",
    })]

def test_fire_without_clients_skips_broadcast():
    scheduler, _, hub, sender = _scheduler("report text", connected=0)
    asyncio.run(scheduler.run_once())
    assert hub.sent == []
    assert sender.reports == ["report text"]

def test_unavailable_report_sends_nothing():
    scheduler, _, hub, sender = _scheduler(None, connected=3)
    assert asyncio.run(scheduler.run_once()) is None
    assert hub.sent == []
    assert sender.reports == []

def test_parse_report_time():
    assert parse_report_time("19:30") == time(19, 30)
    assert parse_report_time(" 07:05 ") == time(7, 5)

def test_next_run_later_today():
    now = TZ.localize(datetime(2026, 10, 17, 10, 0))
    assert next_run_after(now, time(19, 30), TZ) == TZ.localize(datetime(2026, 10, 17, 19, 30))

def test_next_run_tomorrow_once_passed():
    at = time(19, 30)
    for now in (TZ.localize(datetime(2026, 10, 17, 19, 30)), TZ.localize(datetime(2026, 10, 17, 23, 0))):
        assert next_run_after(now, at, TZ) == TZ.localize(datetime(2026, 10, 18, 19, 30))

def test_next_run_accepts_utc_now():
    # 17:00 UTC is 20:00 in Jerusalem (IDT, UTC+3), past today's slot
    now = pytz.utc.localize(datetime(2026, 8, 1, 17, 0))
    assert next_run_after(now, time(19, 30), TZ) == TZ.localize(datetime(2026, 8, 2, 19, 30))
