import logging
from typing import List
from urllib.parse import quote

from twilio.rest import Client

from kiosk.core.config import settings

logger = logging.getLogger(__name__)

def whatsapp_link(phone_number: str, message: str) -> str:
    """Click-to-send link that opens WhatsApp with the message pre-filled."""
    return f"https://wa.me/{phone_number.lstrip('+')}?text={quote(message)}"

def _whatsapp_address(number: str) -> str:
    # Twilio requires the "whatsapp:" prefix
    if number.startswith("whatsapp:"):
        return number
    return f"whatsapp:+{number.lstrip('+')}"

class WhatsAppReportSender:
    def __init__(self, recipients: List[str] = None):
        self.recipients = list(settings.REPORT_PHONE_NUMBERS if recipients is None else recipients)
        self.client = None
        self.enabled = False

        # Only initialize if credentials exist in .env
        if settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.TWILIO_FROM_NUMBER:
            try:
                self.client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
                self.enabled = True
                logger.info("✅ WhatsAppReportSender: Twilio client initialized")
            except Exception as e:
                logger.error(f"❌ Failed to initialize Twilio client: {e}")
        else:
            logger.info("⚠️ WhatsAppReportSender: Twilio credentials missing. Only share links will be produced.")

    def links_for(self, message: str) -> List[str]:
        return [whatsapp_link(number, message) for number in self.recipients]

    def send_report(self, message: str) -> int:
        """Logs a share link per recipient and, with Twilio configured, sends the text. Returns messages sent."""
        for link in self.links_for(message):
            logger.info(f"📱 Report link: {link}")

        if not self.enabled:
            return 0

        sent = 0
        for number in self.recipients:
            try:
                self.client.messages.create(
                    from_=_whatsapp_address(settings.TWILIO_FROM_NUMBER),
                    body=message,
                    to=_whatsapp_address(number)
                )
                sent += 1
                logger.info(f"✅ Daily report sent to {number}")
            except Exception as e:
                logger.error(f"❌ Failed to send daily report to {number}: {e}")
        return sent
