"""Appointment models."""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from utils.validation import validate_time_string


class AttendanceStatus(str, Enum):
    """Attendance of a past appointment. Unset is represented by None."""

    CONFIRMED = "confirmed"
    MISSED = "missed"


def check_time_format(value: str) -> str:
    """Reject anything that is not a zero-padded 24-hour HH:MM string."""
    if not validate_time_string(value):
        raise ValueError(f"Time must be HH:MM (24-hour), got {value!r}")
    return value


class Appointment(BaseModel):
    """
    Appointment model.

    service_name and service_duration_minutes are a snapshot of the service
    taken at creation; end_time is stored, never recomputed.
    """

    id: str
    client_name: str
    client_id: Optional[str] = None
    service_id: str
    service_name: str
    service_duration_minutes: int = Field(..., gt=0)
    date: dt.date
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    recurrence_group_id: Optional[str] = None
    attendance_status: Optional[AttendanceStatus] = None
    calendar_event_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v: str) -> str:
        """Validate HH:MM format."""
        return check_time_format(v)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "uuid-here",
                "client_name": "Maria Silva",
                "service_id": "uuid-here",
                "service_name": "Gel Manicure",
                "service_duration_minutes": 60,
                "date": "2024-01-15",
                "start_time": "10:00",
                "end_time": "11:00",
            }
        }


class AppointmentCreate(BaseModel):
    """Appointment creation request."""

    client_name: str
    client_id: Optional[str] = None
    service_id: str
    date: dt.date
    start_time: str
    recurrence_group_id: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: str) -> str:
        """Validate HH:MM format."""
        return check_time_format(v)
