"""
Slot Generation

Generates the day's grid of candidate start times for a service, considering:
- Holidays (no slots at all)
- Business hours and slot interval
- Service duration (must end by closing time)
- Existing appointments (marks overlapping candidates unavailable)
"""

import datetime as dt
from typing import Iterable, List

from models.appointment import Appointment
from models.settings import BusinessConfiguration
from models.slot import TimeSlot

from .time_math import from_minutes, overlaps


def generate_slots(
    date: dt.date,
    appointments: Iterable[Appointment],
    service_duration_minutes: int,
    config: BusinessConfiguration,
) -> List[TimeSlot]:
    """
    Generate candidate slots for a day.

    Args:
        date: day to generate slots for
        appointments: existing appointments (other dates are ignored)
        service_duration_minutes: duration of the service being booked
        config: business configuration

    Returns:
        list[TimeSlot] in chronological order; occupied candidates are
        included with available=False

    Algorithm:
        1. Holiday -> []
        2. Step from opening time by slot_interval_minutes while before closing
        3. Skip candidates that would end after closing
        4. Mark candidates overlapping an appointment as unavailable
    """
    if service_duration_minutes <= 0:
        raise ValueError("Service duration must be positive")

    if config.is_holiday(date):
        return []

    day_appointments = [a for a in appointments if a.date == date]

    opening = config.business_hours.start * 60
    closing = config.business_hours.end * 60
    step = config.slot_interval_minutes

    slots = []
    candidate = opening

    while candidate < closing:
        end = candidate + service_duration_minutes

        # May end exactly at closing, never after
        if end <= closing:
            start_str = from_minutes(candidate)
            end_str = from_minutes(end)
            occupied = any(
                overlaps(start_str, end_str, a.start_time, a.end_time)
                for a in day_appointments
            )
            slots.append(TimeSlot(time=start_str, available=not occupied))

        candidate += step

    return slots


def selectable_slots(slots: Iterable[TimeSlot]) -> List[TimeSlot]:
    """Filter slots down to the ones a client can pick."""
    return [slot for slot in slots if slot.available]
