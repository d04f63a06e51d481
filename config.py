"""
Configuration module for the salon scheduler.
Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (in-memory storage is used when not configured)
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None

    # Telegram bot used to deliver reminders to the salon owner
    bot_token: Optional[str] = None
    owner_telegram_id: Optional[int] = None

    # Salon
    timezone: str = "Europe/Prague"
    default_business_start_hour: int = 8
    default_business_end_hour: int = 18
    default_slot_interval_minutes: int = 30

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    environment: str = "development"  # development, staging, production

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def supabase_enabled(self) -> bool:
        """True when both Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)

    @property
    def reminders_enabled(self) -> bool:
        """True when reminders can be delivered over Telegram."""
        return bool(self.bot_token and self.owner_telegram_id)

    def validate_all_required(self) -> None:
        """
        Validate that the configured values are usable.

        Raises:
            ValueError: If credentials are half-configured or placeholders
        """
        problems = []

        if bool(self.supabase_url) != bool(self.supabase_key):
            problems.append("supabase_url and supabase_key must be set together")

        for field in ("supabase_url", "supabase_key", "bot_token"):
            value = getattr(self, field, None)
            if value and str(value).lower().startswith("your_"):
                problems.append(f"{field} is a placeholder")

        if not (0 <= self.default_business_start_hour < self.default_business_end_hour <= 23):
            problems.append("default business hours must satisfy 0 <= start < end <= 23")

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                f"Please check your .env file."
            )


# Global settings instance
settings = Settings()
