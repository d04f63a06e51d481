"""
Unit tests for business settings management.
"""

import datetime as dt

import pytest

from booking.settings import SettingsService, default_configuration
from models.settings import BusinessConfiguration, BusinessHours
from utils.exceptions import ValidationError


@pytest.mark.asyncio
async def test_defaults_persisted_on_first_read(settings_service, store):
    assert await store.load_settings() is None

    config = await settings_service.get_business_configuration()

    assert config.business_hours.start == 8
    assert config.business_hours.end == 18
    assert config.slot_interval_minutes == 30
    assert config.holidays == []
    assert config.reminder_settings.appointment_reminders_enabled is False
    assert await store.load_settings() is not None


def test_default_configuration_matches_constants():
    config = default_configuration()

    assert config.business_hours == BusinessHours(start=8, end=18)
    assert config.slot_interval_minutes == 30


@pytest.mark.asyncio
async def test_update_business_hours(settings_service):
    config = await settings_service.update_business_hours(9, 17)

    assert config.business_hours.start == 9
    assert config.business_hours.end == 17
    assert (await settings_service.get_business_configuration()).business_hours.end == 17


@pytest.mark.asyncio
@pytest.mark.parametrize("start,end", [(10, 10), (18, 8), (-1, 10), (8, 24)])
async def test_invalid_business_hours_rejected(settings_service, start, end):
    with pytest.raises(ValidationError):
        await settings_service.update_business_hours(start, end)

    config = await settings_service.get_business_configuration()
    assert config.business_hours == BusinessHours(start=8, end=18)


@pytest.mark.asyncio
async def test_update_slot_interval(settings_service):
    config = await settings_service.update_slot_interval(15)

    assert config.slot_interval_minutes == 15


@pytest.mark.asyncio
async def test_invalid_slot_interval_rejected(settings_service):
    with pytest.raises(ValidationError):
        await settings_service.update_slot_interval(20)


@pytest.mark.asyncio
async def test_holidays_sorted_and_unique(settings_service):
    await settings_service.add_holiday(dt.date(2030, 12, 25))
    await settings_service.add_holiday("2030-01-01")
    config = await settings_service.add_holiday(dt.date(2030, 12, 25))

    assert config.holidays == [dt.date(2030, 1, 1), dt.date(2030, 12, 25)]
    assert await settings_service.is_holiday("2030-12-25") is True
    assert await settings_service.is_holiday(dt.date(2030, 12, 24)) is False


@pytest.mark.asyncio
async def test_remove_holiday(settings_service):
    await settings_service.add_holiday(dt.date(2030, 12, 25))

    config = await settings_service.remove_holiday(dt.date(2030, 12, 25))

    assert config.holidays == []


@pytest.mark.asyncio
async def test_invalid_holiday_date(settings_service):
    with pytest.raises(ValidationError):
        await settings_service.add_holiday("25.12.2030")


@pytest.mark.asyncio
async def test_update_reminder_settings(settings_service):
    config = await settings_service.update_reminder_settings(
        appointment_reminders_enabled=True, reminder_offset="day_before"
    )

    assert config.reminder_settings.appointment_reminders_enabled is True
    assert config.reminder_settings.reminder_offset == "day_before"
    assert config.reminder_settings.daily_morning_reminder_enabled is False


@pytest.mark.asyncio
async def test_invalid_reminder_offset_rejected(settings_service):
    with pytest.raises(ValidationError):
        await settings_service.update_reminder_settings(reminder_offset=45)


@pytest.mark.asyncio
async def test_unknown_reminder_setting_rejected(settings_service):
    with pytest.raises(ValidationError):
        await settings_service.update_reminder_settings(sms_enabled=True)


@pytest.mark.asyncio
async def test_reset_to_defaults(settings_service):
    await settings_service.update_business_hours(10, 20)
    await settings_service.add_holiday(dt.date(2030, 12, 25))

    config = await settings_service.reset_to_defaults()

    assert config.business_hours == BusinessHours(start=8, end=18)
    assert config.holidays == []


@pytest.mark.asyncio
async def test_settings_service_is_config_provider(store):
    """Test a saved configuration is returned as-is."""
    saved = BusinessConfiguration(
        business_hours=BusinessHours(start=10, end=16), slot_interval_minutes=45
    )
    await store.save_settings(saved)

    config = await SettingsService(store).get_business_configuration()

    assert config == saved
