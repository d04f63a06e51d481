"""
Recurrence expansion for repeating bookings.

Pure date arithmetic: no conflict or holiday checks happen here. "Monthly"
is a fixed 28 days, not calendar months; stored series depend on it.
"""

import datetime as dt
from typing import List

from models.recurrence import RecurrenceInterval, RecurrenceRequest

RECURRENCE_DAYS = {
    RecurrenceInterval.WEEKLY: 7,
    RecurrenceInterval.BIWEEKLY: 14,
    RecurrenceInterval.EVERY_3_WEEKS: 21,
    RecurrenceInterval.MONTHLY: 28,
}


def interval_days(interval: RecurrenceInterval) -> int:
    """Number of days between two appointments of a series."""
    return RECURRENCE_DAYS[RecurrenceInterval(interval)]


def expand(anchor: dt.date, interval: RecurrenceInterval, count: int) -> List[dt.date]:
    """
    Dates following the anchor: anchor + k * interval_days for k = 1..count.

    The anchor itself is not included.

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"Recurrence count must not be negative, got {count}")
    step = interval_days(interval)
    return [anchor + dt.timedelta(days=k * step) for k in range(1, count + 1)]


def expand_request(request: RecurrenceRequest) -> List[dt.date]:
    """Expand a RecurrenceRequest into anchor plus following dates."""
    return [request.anchor] + expand(request.anchor, request.interval, request.count)
