"""Pydantic models for data validation and serialization."""

from .appointment import Appointment, AppointmentCreate, AttendanceStatus
from .client import Client, ClientCreate, ClientTier, ClientUpdate
from .recurrence import RecurrenceInterval, RecurrenceRequest
from .result import OperationResult, SeriesResult
from .service import Service, ServiceCreate, ServiceUpdate
from .settings import BusinessConfiguration, BusinessHours, ReminderSettings
from .slot import TimeSlot

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AttendanceStatus",
    "BusinessConfiguration",
    "BusinessHours",
    "Client",
    "ClientCreate",
    "ClientTier",
    "ClientUpdate",
    "OperationResult",
    "RecurrenceInterval",
    "RecurrenceRequest",
    "ReminderSettings",
    "SeriesResult",
    "Service",
    "ServiceCreate",
    "ServiceUpdate",
    "TimeSlot",
]
