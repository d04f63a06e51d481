"""
Post-commit collaborators of the appointment scheduler.

Both are best-effort: the scheduler calls them only after an appointment is
stored, and their failures are logged without affecting the booking.
"""

from abc import ABC, abstractmethod
from typing import Optional

from models.appointment import Appointment
from models.settings import BusinessConfiguration, ReminderOffset


class ConfigProvider(ABC):
    """Source of the current business configuration."""

    @abstractmethod
    async def get_business_configuration(self) -> BusinessConfiguration:
        """Latest committed configuration."""


class CalendarLinker(ABC):
    """External calendar integration."""

    @abstractmethod
    async def create_event(self, appointment: Appointment) -> Optional[str]:
        """Create an event for the appointment; returns the event id or None."""

    @abstractmethod
    async def delete_event(self, event_id: str) -> bool:
        ...


class ReminderService(ABC):
    """Reminder scheduling for individual appointments."""

    @abstractmethod
    async def schedule_for_appointment(
        self, appointment: Appointment, offset: ReminderOffset
    ) -> bool:
        """Schedule a reminder; False when nothing was scheduled."""

    @abstractmethod
    async def cancel_for_appointment(self, appointment_id: str) -> None:
        ...
