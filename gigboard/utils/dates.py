"""Calendar helpers for the availability grid.

All dates here are plain calendar dates. "Today" is resolved once, in the
configured timezone, and every past-date check compares against that value.
"""
import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

from gigboard.core.config import settings
from gigboard.schemas.availability import MonthCursor

DATE_KEY_FORMAT = "%Y-%m-%d"
WEEK_DAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

def local_today(tz: Optional[str] = None) -> date:
    """Current local calendar date in the configured timezone."""
    return datetime.now(ZoneInfo(tz or settings.TIMEZONE)).date()

def month_grid(cursor: MonthCursor) -> List[date]:
    """Every date of the cursor's month, first to last, ascending."""
    _, days_in_month = calendar.monthrange(cursor.year, cursor.month)
    first = date(cursor.year, cursor.month, 1)
    return [first + timedelta(days=offset) for offset in range(days_in_month)]

def leading_blanks(cursor: MonthCursor) -> int:
    """Empty cells before day 1 in a Sunday-first week row."""
    # date.weekday() is Monday=0
    return (date(cursor.year, cursor.month, 1).weekday() + 1) % 7

def date_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"

def parse_date_key(value: str) -> date:
    """Parse a YYYY-MM-DD key, raising ValueError for anything else."""
    parsed = datetime.strptime(value, DATE_KEY_FORMAT).date()
    if date_key(parsed) != value:
        # strptime accepts unpadded fields such as 2025-3-1
        raise ValueError(f"Not a canonical date key: {value!r}")
    return parsed

def is_past(day: date, today: date) -> bool:
    return day < today

def month_title(cursor: MonthCursor) -> str:
    return f"{calendar.month_name[cursor.month]} {cursor.year}"

def add_months(day: date, months: int) -> date:
    """Same day of month, months later, clamped to the target month's last day."""
    target = MonthCursor.containing(day).shift(months)
    _, days_in_month = calendar.monthrange(target.year, target.month)
    return date(target.year, target.month, min(day.day, days_in_month))
