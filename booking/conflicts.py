"""
Overlap Detection

Authoritative double-booking guard, re-run at commit time. The available
flag on generated slots is only advisory.
"""

import datetime as dt
from typing import Iterable, List, Optional

from models.appointment import Appointment

from .time_math import overlaps


def find_conflicts(
    date: dt.date,
    start_time: str,
    end_time: str,
    appointments: Iterable[Appointment],
    exclude_id: Optional[str] = None,
) -> List[Appointment]:
    """
    Return the appointments on date whose interval overlaps [start_time, end_time).

    Args:
        date: day of the proposed appointment
        start_time: proposed start (HH:MM)
        end_time: proposed end (HH:MM)
        appointments: candidate appointments, any date
        exclude_id: appointment to ignore (the one being edited)
    """
    return [
        a
        for a in appointments
        if a.date == date
        and a.id != exclude_id
        and overlaps(start_time, end_time, a.start_time, a.end_time)
    ]


def has_conflict(
    date: dt.date,
    start_time: str,
    end_time: str,
    appointments: Iterable[Appointment],
    exclude_id: Optional[str] = None,
) -> bool:
    """True if the proposed interval overlaps any appointment on the same date."""
    for a in appointments:
        if a.date != date or (exclude_id and a.id == exclude_id):
            continue
        if overlaps(start_time, end_time, a.start_time, a.end_time):
            return True
    return False
