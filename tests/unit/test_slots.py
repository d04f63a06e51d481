"""
Unit tests for slot generation.
"""

import datetime as dt
import random

import pytest

from booking.slots import generate_slots, selectable_slots
from booking.time_math import to_minutes
from models.settings import BusinessConfiguration, BusinessHours

DAY = dt.date(2030, 3, 11)


def make_config(start=8, end=18, interval=30, holidays=None):
    return BusinessConfiguration(
        business_hours=BusinessHours(start=start, end=end),
        slot_interval_minutes=interval,
        holidays=holidays or [],
    )


def test_first_and_last_slot_for_one_hour_service():
    slots = generate_slots(DAY, [], 60, make_config())

    times = [s.time for s in slots]
    assert times[0] == "08:00"
    assert times[-1] == "17:00"
    assert "17:30" not in times
    assert len(slots) == 19
    assert all(s.available for s in slots)


def test_slot_ending_exactly_at_closing_is_kept():
    slots = generate_slots(DAY, [], 30, make_config(interval=30))
    assert slots[-1].time == "17:30"

    # One minute longer and the 17:30 candidate would end at 18:01
    slots = generate_slots(DAY, [], 31, make_config(interval=30))
    assert slots[-1].time == "17:00"


def test_existing_appointment_marks_overlapping_slots(make_appointment):
    appointment = make_appointment("10:00", "11:00", date=DAY)

    slots = {s.time: s.available for s in generate_slots(DAY, [appointment], 30, make_config())}

    assert slots["09:00"] is True
    assert slots["09:30"] is True  # ends 10:00, touching
    assert slots["10:00"] is False
    assert slots["10:30"] is False
    assert slots["11:00"] is True


def test_longer_service_blocks_earlier_candidates(make_appointment):
    appointment = make_appointment("10:00", "11:00", date=DAY)

    slots = {s.time: s.available for s in generate_slots(DAY, [appointment], 60, make_config())}

    assert slots["09:00"] is True
    assert slots["09:30"] is False
    assert slots["10:30"] is False
    assert slots["11:00"] is True


def test_appointments_on_other_dates_ignored(make_appointment):
    other_day = make_appointment("10:00", "11:00", date=DAY + dt.timedelta(days=1))

    slots = generate_slots(DAY, [other_day], 30, make_config())

    assert all(s.available for s in slots)


def test_holiday_has_no_slots(make_appointment):
    config = make_config(holidays=[DAY])

    assert generate_slots(DAY, [], 30, config) == []
    assert generate_slots(DAY, [make_appointment(date=DAY)], 60, config) == []


def test_service_longer_than_business_day():
    assert generate_slots(DAY, [], 11 * 60, make_config()) == []


@pytest.mark.parametrize("duration", [0, -15])
def test_non_positive_duration_rejected(duration):
    with pytest.raises(ValueError):
        generate_slots(DAY, [], duration, make_config())


@pytest.mark.parametrize("interval", [15, 30, 45, 60])
def test_slots_ordered_and_evenly_spaced(interval):
    rng = random.Random(interval)
    for _ in range(20):
        start = rng.randint(0, 20)
        end = rng.randint(start + 1, 23)
        duration = rng.randint(5, 120)
        slots = generate_slots(DAY, [], duration, make_config(start, end, interval))

        minutes = [to_minutes(s.time) for s in slots]
        assert minutes == sorted(minutes)
        assert all(b - a == interval for a, b in zip(minutes, minutes[1:]))
        assert all(m + duration <= end * 60 for m in minutes)


def test_selectable_slots(make_appointment):
    appointment = make_appointment("08:00", "09:00", date=DAY)
    slots = generate_slots(DAY, [appointment], 60, make_config(8, 10, 60))

    assert [s.time for s in slots] == ["08:00", "09:00"]
    assert [s.time for s in selectable_slots(slots)] == ["09:00"]
