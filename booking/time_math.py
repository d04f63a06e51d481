"""
Time-of-day arithmetic on HH:MM strings.

Appointments never span midnight, so every value stays inside 00:00-23:59.
"""

from utils.constants import MINUTES_IN_DAY
from utils.validation import validate_time_string


def to_minutes(time_str: str) -> int:
    """
    Convert HH:MM to minutes since midnight.

    Raises:
        ValueError: If time_str is not a valid 24-hour HH:MM value
    """
    if not validate_time_string(time_str):
        raise ValueError(f"Invalid time: {time_str!r}")
    hours, minutes = time_str.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    """
    Convert minutes since midnight to zero-padded HH:MM.

    Raises:
        ValueError: If total falls outside the same day
    """
    if total < 0 or total >= MINUTES_IN_DAY:
        raise ValueError(f"{total} minutes is outside a single day")
    hours, minutes = divmod(total, 60)
    return f"{hours:02d}:{minutes:02d}"


def add_minutes(time_str: str, minutes: int) -> str:
    """
    Advance a time of day by the given number of minutes.

    Raises:
        ValueError: If the result would cross midnight
    """
    total = to_minutes(time_str) + minutes
    if total < 0 or total >= MINUTES_IN_DAY:
        raise ValueError(
            f"{time_str} + {minutes} min crosses midnight, which is not supported"
        )
    return from_minutes(total)


def overlaps(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """
    Half-open interval overlap test for [a_start, a_end) and [b_start, b_end).

    Touching endpoints (one ends when the other starts) do not overlap.
    """
    return to_minutes(a_start) < to_minutes(b_end) and to_minutes(a_end) > to_minutes(b_start)
