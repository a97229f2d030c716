from datetime import date
from typing import Optional
import logging

from gigboard.schemas.availability import (
    CalendarDay,
    DayStatus,
    DayTone,
    MonthCursor,
    MonthView,
    NavigationDirection,
    ToggleOutcome,
)
from gigboard.services.availability_store import AvailabilityStore
from gigboard.utils.dates import (
    WEEK_DAYS,
    date_key,
    is_past,
    leading_blanks,
    month_grid,
    month_title,
)

logger = logging.getLogger(__name__)

STATUS_TONES = {
    DayStatus.AVAILABLE: DayTone.AFFIRMATIVE,
    DayStatus.BLOCKED: DayTone.WARNING,
    DayStatus.BOOKED: DayTone.ALERT,
}

def tone_for(status: DayStatus, past: bool) -> DayTone:
    if past:
        return DayTone.DIMMED
    return STATUS_TONES[status]

class AvailabilityCalendar:
    """
    Month grid over an AvailabilityStore.

    The cursor is the only state the calendar owns. Statuses are always read
    from the store, and day activations are passed to the store's toggle.
    """

    def __init__(self, store: AvailabilityStore, cursor: MonthCursor, read_only: bool = False):
        self.store = store
        self.cursor = cursor
        self.read_only = read_only or store.read_only

    def navigate(self, direction: NavigationDirection) -> MonthCursor:
        self.cursor = self.cursor.shift(NavigationDirection(direction).value)
        return self.cursor

    def render(self, today: date) -> MonthView:
        days = []
        for day in month_grid(self.cursor):
            status = self.store.status_of(day)
            past = is_past(day, today)
            days.append(CalendarDay(
                date=day,
                dateKey=date_key(day),
                day=day.day,
                status=status,
                tone=tone_for(status, past),
                isPast=past,
                isToday=day == today,
                interactive=not (self.read_only or past or status is DayStatus.BOOKED),
            ))

        return MonthView(
            uid=self.store.uid,
            year=self.cursor.year,
            month=self.cursor.month,
            title=month_title(self.cursor),
            readOnly=self.read_only,
            weekDays=WEEK_DAYS,
            leadingBlanks=leading_blanks(self.cursor),
            days=days,
        )

    async def on_day_activate(self, day: date, today: date) -> Optional[ToggleOutcome]:
        if self.read_only or is_past(day, today):
            return None
        return await self.store.toggle(day, today)

    def close(self) -> None:
        self.store.detach()
