from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Required Fields (with local defaults) ---
    PROJECT_NAME: str = "Kiosk_Backend"
    DATABASE_URL: str = "sqlite:///./kiosk.db"
    PORT: int = 5001
    LOG_LEVEL: str = "INFO"

    # --- Catalog ---
    IMAGES_DIR: str = "public/images"
    DEFAULT_CATEGORY: str = "General"
    CURRENCY_SYMBOL: str = "₪"

    # --- Daily Report ---
    REPORT_TIME: str = "19:30"  # HH:MM, local to REPORT_TIMEZONE
    REPORT_TIMEZONE: str = "Asia/Jerusalem"
    REPORT_DATE_FORMAT: str = "%d.%m.%Y"
    REPORT_PHONE_NUMBERS: List[str] = []
    SCHEDULER_ENABLED: bool = True

    # --- Optional WhatsApp delivery (Twilio) ---
    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_FROM_NUMBER: str | None = None

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # ignore unrelated variables in .env instead of crashing
    )

settings = Settings()
