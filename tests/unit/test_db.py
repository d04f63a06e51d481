"""
Unit tests for the in-memory store and backend selection.
"""

import datetime as dt
from unittest.mock import MagicMock, patch

import pytest

from db.memory_store import InMemoryStore
from models.appointment import AttendanceStatus
from models.settings import BusinessConfiguration

DAY = dt.date(2030, 3, 11)


@pytest.mark.asyncio
async def test_appointments_sorted_by_date_and_time(store, make_appointment):
    await store.insert_appointment(make_appointment("14:00", "15:00", appointment_id="c"))
    await store.insert_appointment(
        make_appointment("09:00", "10:00", date=DAY + dt.timedelta(days=1), appointment_id="d")
    )
    await store.insert_appointment(make_appointment("09:00", "10:00", appointment_id="a"))

    all_ids = [a.id for a in await store.list_appointments()]
    day_ids = [a.id for a in await store.list_appointments_by_date(DAY)]

    assert all_ids == ["a", "c", "d"]
    assert day_ids == ["a", "c"]


@pytest.mark.asyncio
async def test_returned_records_are_copies(store, make_appointment):
    inserted = await store.insert_appointment(make_appointment())
    inserted.client_name = "Changed"

    fetched = await store.get_appointment("appt_1")
    fetched.start_time = "12:00"

    stored = await store.get_appointment("appt_1")
    assert stored.client_name == "Maria Silva"
    assert stored.start_time == "10:00"


@pytest.mark.asyncio
async def test_update_appointment_fields(store, make_appointment):
    await store.insert_appointment(make_appointment())

    updated = await store.update_appointment_fields(
        "appt_1", {"attendance_status": AttendanceStatus.MISSED}
    )

    assert updated.attendance_status == AttendanceStatus.MISSED
    assert await store.update_appointment_fields("missing", {"client_name": "X"}) is None


@pytest.mark.asyncio
async def test_delete_appointment(store, make_appointment):
    await store.insert_appointment(make_appointment())

    assert await store.delete_appointment("appt_1") is True
    assert await store.delete_appointment("appt_1") is False


@pytest.mark.asyncio
async def test_settings_round_trip(store):
    assert await store.load_settings() is None

    config = BusinessConfiguration(holidays=[DAY])
    await store.save_settings(config)

    assert await store.load_settings() == config


def test_get_db_client_falls_back_to_memory():
    """Test in-memory storage is used when Supabase is not configured."""
    with patch("db.supabase_client.settings") as mock_settings, patch(
        "db.supabase_client._db_client", None
    ):
        mock_settings.supabase_enabled = False
        from db.supabase_client import get_db_client

        client = get_db_client()
        assert isinstance(client, InMemoryStore)
        assert get_db_client() is client


def test_get_db_client_uses_supabase_when_configured():
    with patch("db.supabase_client.settings") as mock_settings, patch(
        "db.supabase_client._db_client", None
    ), patch("db.supabase_client.create_client", return_value=MagicMock()) as mock_create:
        mock_settings.supabase_enabled = True
        mock_settings.supabase_url = "https://test.supabase.co"
        mock_settings.supabase_key = "test_key"
        from db.supabase_client import SupabaseClient, get_db_client

        client = get_db_client()
        assert isinstance(client, SupabaseClient)
        mock_create.assert_called_once_with("https://test.supabase.co", "test_key")
