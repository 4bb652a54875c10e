# rotation_dates.py

import logging
import math
from datetime import date, timedelta
from typing import List, Optional

from holiday_index import HolidayIndex
from models import DateLike, as_date

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
}

ONE_WEEK = timedelta(days=7)


def first_weekday_on_or_after(start: date, weekday: int) -> date:
    """weekday uses ISO numbering, 1 = Monday."""
    return start + timedelta(days=(weekday - start.isoweekday()) % 7)


def generate(start: DateLike,
             end: DateLike,
             weekday: int,
             holidays: Optional[HolidayIndex] = None) -> List[date]:
    """
    All dates falling on `weekday` within [start, end] that are not holidays,
    in chronological order. An empty list is a valid result.
    """
    if weekday not in WEEKDAY_NAMES:
        raise ValueError(f"weekday must be 1..5, got {weekday}")
    start, end = as_date(start), as_date(end)
    if holidays is None:
        holidays = HolidayIndex()

    dates = []
    skipped = 0
    current = first_weekday_on_or_after(start, weekday)
    while current <= end:
        if holidays.is_holiday(current):
            skipped += 1
        else:
            dates.append(current)
        current += ONE_WEEK

    logger.info(f"Generated {len(dates)} rotation dates ({WEEKDAY_NAMES[weekday]}) "
                f"between {start} and {end}, {skipped} skipped as holidays")
    return dates


def week_number(day: DateLike) -> int:
    """
    Week of the year counted from the week containing January 1st,
    weeks starting on Sunday.
    """
    d = as_date(day)
    jan_first = date(d.year, 1, 1)
    past_days = (d - jan_first).days
    return math.ceil((past_days + jan_first.isoweekday() % 7 + 1) / 7)


def week_label(day: DateLike) -> str:
    return f"KW{week_number(day)}"


def display_date(day: DateLike) -> str:
    return as_date(day).strftime("%d.%m.%y")
