"""Appointment booking: slot grid, conflict checks, recurrence and settings."""

from typing import Optional

from db import Store, get_db_client

from .appointments import AppointmentScheduler
from .catalog import ClientRegistry, ServiceCatalog
from .hooks import CalendarLinker, ConfigProvider, ReminderService
from .settings import SettingsService, default_configuration


def create_scheduler(
    store: Optional[Store] = None,
    calendar_linker: Optional[CalendarLinker] = None,
    reminder_service: Optional[ReminderService] = None,
) -> AppointmentScheduler:
    """Wire an AppointmentScheduler to a store (the configured one by default)."""
    store = store or get_db_client()
    return AppointmentScheduler(
        appointment_store=store,
        service_store=store,
        config_provider=SettingsService(store),
        calendar_linker=calendar_linker,
        reminder_service=reminder_service,
    )


__all__ = [
    "AppointmentScheduler",
    "CalendarLinker",
    "ClientRegistry",
    "ConfigProvider",
    "ReminderService",
    "ServiceCatalog",
    "SettingsService",
    "create_scheduler",
    "default_configuration",
]
