"""
Business settings management.

Reads and validates the salon configuration that drives slot generation.
Every change is validated before it is persisted; an invalid change leaves
the stored configuration untouched.
"""

import datetime as dt
import logging

from pydantic import ValidationError as PydanticValidationError

from config import settings as app_settings
from db.base import SettingsStore
from models.settings import BusinessConfiguration, BusinessHours, ReminderSettings
from utils.constants import SLOT_INTERVALS
from utils.datetime_utils import parse_iso_date, utc_now
from utils.exceptions import ValidationError

from .hooks import ConfigProvider

logger = logging.getLogger(__name__)


def default_configuration() -> BusinessConfiguration:
    """Configuration used until the owner saves their own."""
    now = utc_now()
    return BusinessConfiguration(
        business_hours=BusinessHours(
            start=app_settings.default_business_start_hour,
            end=app_settings.default_business_end_hour,
        ),
        slot_interval_minutes=app_settings.default_slot_interval_minutes,
        created_at=now,
        updated_at=now,
    )


class SettingsService(ConfigProvider):
    """ConfigProvider backed by a SettingsStore."""

    def __init__(self, store: SettingsStore):
        self.store = store

    async def get_business_configuration(self) -> BusinessConfiguration:
        """Current configuration; defaults are persisted on first read."""
        config = await self.store.load_settings()
        if config is None:
            config = await self.store.save_settings(default_configuration())
            logger.info("Saved default business configuration")
        return config

    async def _apply(self, **changes) -> BusinessConfiguration:
        current = await self.get_business_configuration()
        data = current.model_dump()
        data.update(changes)
        data["updated_at"] = utc_now()
        try:
            updated = BusinessConfiguration.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid settings: {e}") from e
        return await self.store.save_settings(updated)

    async def update_business_hours(self, start: int, end: int) -> BusinessConfiguration:
        """
        Change opening and closing hour.

        Raises:
            ValidationError: If an hour is outside 0-23 or start >= end
        """
        if not (0 <= start <= 23 and 0 <= end <= 23):
            raise ValidationError("Business hours must be between 0 and 23")
        if start >= end:
            raise ValidationError("Opening hour must be before closing hour")

        config = await self._apply(business_hours={"start": start, "end": end})
        logger.info(f"Business hours updated to {start}:00-{end}:00")
        return config

    async def update_slot_interval(self, minutes: int) -> BusinessConfiguration:
        """Change the slot grid interval (15, 30, 45 or 60 minutes)."""
        if minutes not in SLOT_INTERVALS:
            raise ValidationError(
                f"Slot interval must be one of {', '.join(map(str, SLOT_INTERVALS))}"
            )
        return await self._apply(slot_interval_minutes=minutes)

    async def add_holiday(self, date: dt.date) -> BusinessConfiguration:
        """Mark a date as closed. Adding an existing holiday is a no-op."""
        day = self._parse_date(date)
        config = await self.get_business_configuration()
        if config.is_holiday(day):
            return config
        return await self._apply(holidays=config.holidays + [day])

    async def remove_holiday(self, date: dt.date) -> BusinessConfiguration:
        """Reopen a date previously marked as holiday."""
        day = self._parse_date(date)
        config = await self.get_business_configuration()
        return await self._apply(holidays=[h for h in config.holidays if h != day])

    async def is_holiday(self, date: dt.date) -> bool:
        config = await self.get_business_configuration()
        return config.is_holiday(self._parse_date(date))

    async def update_reminder_settings(self, **changes) -> BusinessConfiguration:
        """Merge changes into the reminder settings."""
        config = await self.get_business_configuration()
        unknown = set(changes) - set(ReminderSettings.model_fields)
        if unknown:
            raise ValidationError(f"Unknown reminder settings: {', '.join(sorted(unknown))}")
        merged = config.reminder_settings.model_dump()
        merged.update(changes)
        return await self._apply(reminder_settings=merged)

    async def reset_to_defaults(self) -> BusinessConfiguration:
        logger.info("Business configuration reset to defaults")
        return await self.store.save_settings(default_configuration())

    @staticmethod
    def _parse_date(value) -> dt.date:
        try:
            return parse_iso_date(value)
        except ValueError as e:
            raise ValidationError(str(e)) from e
