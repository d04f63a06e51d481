"""
Pytest configuration and shared fixtures.
"""

import datetime as dt
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from booking.appointments import AppointmentScheduler
from booking.hooks import CalendarLinker, ReminderService
from booking.settings import SettingsService
from db.memory_store import InMemoryStore
from models.appointment import Appointment, AppointmentCreate
from models.service import Service

# A Monday, far enough ahead to stay in the future
BOOKING_DAY = dt.date(2030, 3, 11)
TODAY = dt.datetime(2030, 3, 1, 12, 0)


def _make_appointment(
    start_time: str = "10:00",
    end_time: str = "11:00",
    date: dt.date = BOOKING_DAY,
    appointment_id: str = "appt_1",
    **extra,
) -> Appointment:
    """Build a stored appointment without going through the scheduler."""
    data = {
        "id": appointment_id,
        "client_name": "Maria Silva",
        "service_id": "svc_manicure",
        "service_name": "Gel Manicure",
        "service_duration_minutes": 60,
        "date": date,
        "start_time": start_time,
        "end_time": end_time,
    }
    data.update(extra)
    return Appointment(**data)


def _make_request(
    start_time: str = "10:00",
    date: dt.date = BOOKING_DAY,
    service_id: str = "svc_manicure",
    client_name: str = "Maria Silva",
) -> AppointmentCreate:
    return AppointmentCreate(
        client_name=client_name,
        service_id=service_id,
        date=date,
        start_time=start_time,
    )


@pytest.fixture
def make_appointment():
    """Factory for stored appointments."""
    return _make_appointment


@pytest.fixture
def make_request():
    """Factory for appointment creation requests."""
    return _make_request


@pytest.fixture
def store():
    """Fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def settings_service(store):
    return SettingsService(store)


@pytest_asyncio.fixture
async def service(store):
    """A 60 minute service stored in the catalog."""
    return await store.insert_service(
        Service(id="svc_manicure", name="Gel Manicure", duration_minutes=60)
    )


@pytest_asyncio.fixture
async def short_service(store):
    """A 30 minute service stored in the catalog."""
    return await store.insert_service(
        Service(id="svc_polish", name="Nail Polish", duration_minutes=30)
    )


@pytest.fixture
def mock_calendar():
    """Calendar linker that always succeeds."""
    calendar = MagicMock(spec=CalendarLinker)
    calendar.create_event = AsyncMock(return_value="event_123")
    calendar.delete_event = AsyncMock(return_value=True)
    return calendar


@pytest.fixture
def mock_reminders():
    """Reminder service recording calls."""
    reminders = MagicMock(spec=ReminderService)
    reminders.schedule_for_appointment = AsyncMock(return_value=True)
    reminders.cancel_for_appointment = AsyncMock(return_value=None)
    return reminders


@pytest.fixture
def scheduler(store, settings_service):
    """AppointmentScheduler without side-effect hooks."""
    return AppointmentScheduler(
        appointment_store=store,
        service_store=store,
        config_provider=settings_service,
        clock=lambda: TODAY,
    )


@pytest.fixture
def scheduler_with_hooks(store, settings_service, mock_calendar, mock_reminders):
    """AppointmentScheduler with calendar and reminder hooks attached."""
    return AppointmentScheduler(
        appointment_store=store,
        service_store=store,
        config_provider=settings_service,
        calendar_linker=mock_calendar,
        reminder_service=mock_reminders,
        clock=lambda: TODAY,
    )


@pytest.fixture
def mock_bot():
    """Mock Telegram bot."""
    bot = MagicMock()
    bot.send_message = AsyncMock()
    return bot


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = MagicMock()
    mock_table = MagicMock()
    mock_client.table.return_value = mock_table
    return mock_client, mock_table
