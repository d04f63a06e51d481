"""Slot models for bookable start times."""

from pydantic import BaseModel, Field


class TimeSlot(BaseModel):
    """Candidate start time on the day's grid. Derived, never stored."""

    time: str = Field(..., description="HH:MM")
    available: bool = True

    class Config:
        json_schema_extra = {"example": {"time": "10:30", "available": True}}
