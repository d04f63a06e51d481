"""Business configuration models: hours, slot grid, holidays, reminders."""

import datetime as dt
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from utils.constants import (
    DEFAULT_BUSINESS_END_HOUR,
    DEFAULT_BUSINESS_START_HOUR,
    DEFAULT_REMINDER_OFFSET,
    DEFAULT_SLOT_INTERVAL_MINUTES,
)

SlotInterval = Literal[15, 30, 45, 60]
ReminderOffset = Union[Literal[5, 30, 60, 120], Literal["day_before"]]


class BusinessHours(BaseModel):
    """Opening and closing hour of the salon (whole hours, 0-23)."""

    start: int = Field(DEFAULT_BUSINESS_START_HOUR, ge=0, le=23)
    end: int = Field(DEFAULT_BUSINESS_END_HOUR, ge=0, le=23)

    @model_validator(mode="after")
    def check_order(self) -> "BusinessHours":
        """Opening hour must come before closing hour."""
        if self.start >= self.end:
            raise ValueError(
                f"Business hours start ({self.start}) must be before end ({self.end})"
            )
        return self


class ReminderSettings(BaseModel):
    """Reminder preferences of the salon owner."""

    appointment_reminders_enabled: bool = False
    reminder_offset: ReminderOffset = DEFAULT_REMINDER_OFFSET
    daily_morning_reminder_enabled: bool = False
    daily_evening_reminder_enabled: bool = False


class BusinessConfiguration(BaseModel):
    """Configuration that drives slot generation."""

    business_hours: BusinessHours = Field(default_factory=BusinessHours)
    slot_interval_minutes: SlotInterval = DEFAULT_SLOT_INTERVAL_MINUTES
    holidays: List[dt.date] = Field(default_factory=list)
    reminder_settings: ReminderSettings = Field(default_factory=ReminderSettings)
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @field_validator("holidays")
    @classmethod
    def normalize_holidays(cls, v: List[dt.date]) -> List[dt.date]:
        """Keep holidays sorted and unique."""
        return sorted(set(v))

    def is_holiday(self, day: dt.date) -> bool:
        """Check whether the salon is closed on the given date."""
        return day in self.holidays

    class Config:
        json_schema_extra = {
            "example": {
                "business_hours": {"start": 8, "end": 18},
                "slot_interval_minutes": 30,
                "holidays": ["2024-12-25"],
                "reminder_settings": {
                    "appointment_reminders_enabled": True,
                    "reminder_offset": 30,
                },
            }
        }
