"""
Calendar-day helpers for the one-entry-per-day rule.

A day is keyed by its local midnight, stored as a naive datetime. Two moments
fall on the same day when both land in the half-open window
[midnight, midnight + 24h).
"""
from datetime import date, datetime, time, timedelta
from typing import Tuple, Union

import pytz

DAY = timedelta(hours=24)


def normalize_day(moment: Union[datetime, date], timezone_name: str) -> datetime:
    """
    Truncate a moment to local midnight of its calendar day.

    Aware datetimes are first converted into the owner's timezone; naive
    datetimes and plain dates are taken as already local.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(pytz.timezone(timezone_name))
        moment = moment.date()
    return datetime.combine(moment, time.min)


def day_window(day: datetime) -> Tuple[datetime, datetime]:
    """Return the half-open [start, end) window for a normalized day."""
    start = datetime.combine(day.date(), time.min)
    return start, start + DAY


def is_within_day(moment: datetime, day: datetime) -> bool:
    start, end = day_window(day)
    return start <= moment < end


def is_valid_timezone(timezone_name: str) -> bool:
    return timezone_name in pytz.all_timezones_set
