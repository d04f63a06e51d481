"""Recurrence models for repeating bookings."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field


class RecurrenceInterval(str, Enum):
    """Spacing between appointments of a series."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    EVERY_3_WEEKS = "3weeks"
    MONTHLY = "monthly"


class RecurrenceRequest(BaseModel):
    """Anchor date plus count additional dates spaced by interval."""

    anchor: dt.date
    interval: RecurrenceInterval
    count: int = Field(..., ge=0)
