import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import Optional

import pytz

from kiosk.application.report_generator import ReportGenerator
from kiosk.core.config import settings
from kiosk.infrastructure.notification_hub import NotificationHub, DAILY_REPORT_READY
from kiosk.infrastructure.whatsapp_service import WhatsAppReportSender

logger = logging.getLogger(__name__)

REPORT_READY_NOTICE = "Daily report is ready!"
REPORT_PAGE_URL = "/send-daily-whatsapp"

def parse_report_time(value: str) -> time:
    hours, minutes = value.strip().split(":")
    return time(int(hours), int(minutes))

def next_run_after(now: datetime, at: time, tz) -> datetime:
    """Next moment the wall clock in `tz` reads `at`, strictly after `now`."""
    local_now = now.astimezone(tz)
    candidate = tz.localize(datetime.combine(local_now.date(), at))
    if candidate <= local_now:
        candidate = tz.localize(datetime.combine(local_now.date() + timedelta(days=1), at))
    return candidate

class DailyReportScheduler:
    """
    Fires the daily report once a day at REPORT_TIME (REPORT_TIMEZONE).

    A fire missed while the process was down is simply lost.
    """

    def __init__(self, generator: ReportGenerator, hub: NotificationHub,
                 sender: Optional[WhatsAppReportSender] = None,
                 at: str = None, timezone: str = None):
        self.generator = generator
        self.hub = hub
        self.sender = sender
        self.at = parse_report_time(at or settings.REPORT_TIME)
        self.tz = pytz.timezone(timezone or settings.REPORT_TIMEZONE)
        self._task: Optional[asyncio.Task] = None

    async def run_once(self) -> Optional[str]:
        logger.info("⏰ Generating the automatic daily report...")
        message = await asyncio.to_thread(self.generator.generate)
        if not message:
            logger.warning("⚠️ Daily report unavailable, nothing to send.")
            return None

        logger.info("✅ Daily report generated.")
        if self.sender is not None:
            await asyncio.to_thread(self.sender.send_report, message)

        if self.hub.connected_count > 0:
            await self.hub.broadcast(DAILY_REPORT_READY, {
                "message": REPORT_READY_NOTICE,
                "url": REPORT_PAGE_URL,
            })
            logger.info(f"📢 Report notice sent to {self.hub.connected_count} connected clients")
        return message

    async def _loop(self):
        last_fire = None
        while True:
            now = datetime.now(pytz.utc)
            # an early wake-up must not fire the same slot twice
            fire_at = next_run_after(max(now, last_fire) if last_fire else now, self.at, self.tz)
            last_fire = fire_at
            delay = (fire_at - datetime.now(pytz.utc)).total_seconds()
            logger.info(f"🗓️ Next daily report at {fire_at.isoformat()}")
            await asyncio.sleep(max(delay, 0))
            try:
                await self.run_once()
            except Exception as e:
                # one bad fire must not kill tomorrow's
                logger.error(f"❌ Daily report job failed: {e}", exc_info=True)

    def start(self):
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
