import calendar
import datetime
from typing import Optional


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap years included."""
    return calendar.monthrange(year, month)[1]


def week_offset(month_start: datetime.date, monday_first: bool) -> int:
    """Blank cells before day 1 in the first week row."""
    if monday_first:
        return month_start.weekday()
    return month_start.isoweekday() % 7


def weeks_in_month(month_start: datetime.date, monday_first: bool) -> int:
    days = days_in_month(month_start.year, month_start.month)
    return (week_offset(month_start, monday_first) + days + 6) // 7


def week_start_day(month_start: datetime.date, week: int, monday_first: bool) -> int:
    """
    Day number shown in the first cell of week row `week` (0-based).
    Can be <= 0 or past the end of the month for partial rows.
    """
    return week * 7 - week_offset(month_start, monday_first) + 1


def is_empty_week(month_start: datetime.date, week: int, monday_first: bool) -> bool:
    start = week_start_day(month_start, week, monday_first)
    days = days_in_month(month_start.year, month_start.month)
    return start > days or start + 6 < 1


def week_number(month_start: datetime.date, week: int, monday_first: bool) -> Optional[int]:
    """ISO week number of the first in-month day of a week row, None for empty rows."""
    if is_empty_week(month_start, week, monday_first):
        return None
    start = max(week_start_day(month_start, week, monday_first), 1)
    return month_start.replace(day=start).isocalendar()[1]
