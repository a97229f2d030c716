from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import date
from enum import Enum

class DayStatus(str, Enum):
    AVAILABLE = "available"
    BLOCKED = "blocked"
    BOOKED = "booked"  # only ever set by the booking process

class CalendarAccess(str, Enum):
    OWNER = "owner"
    READ_ONLY = "readOnly"

class NavigationDirection(int, Enum):
    BACK = -1
    FORWARD = 1

class DayTone(str, Enum):
    AFFIRMATIVE = "affirmative"
    WARNING = "warning"
    ALERT = "alert"
    DIMMED = "dimmed"

class RejectionReason(str, Enum):
    PAST_DATE = "pastDate"
    BOOKED = "booked"

class MonthCursor(BaseModel):
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)

    class Config:
        frozen = True

    @classmethod
    def containing(cls, day: date) -> "MonthCursor":
        return cls(year=day.year, month=day.month)

    def shift(self, months: int) -> "MonthCursor":
        """Move the cursor by a number of months, rolling over year boundaries."""
        index = self.year * 12 + (self.month - 1) + months
        return MonthCursor(year=index // 12, month=index % 12 + 1)

# Toggle effects
class Persist(BaseModel):
    dateKey: str
    status: DayStatus

class Rejected(BaseModel):
    reason: RejectionReason

ToggleEffect = Union[Persist, Rejected]

class ToggleOutcome(BaseModel):
    dateKey: str
    status: DayStatus  # status held in memory once the toggle settled
    applied: bool
    rejection: Optional[RejectionReason] = None

class CalendarDay(BaseModel):
    date: date
    dateKey: str
    day: int
    status: DayStatus
    tone: DayTone
    isPast: bool
    isToday: bool
    interactive: bool

class MonthView(BaseModel):
    uid: str
    year: int
    month: int
    title: str  # e.g. "March 2025"
    readOnly: bool
    weekDays: List[str]
    leadingBlanks: int
    days: List[CalendarDay]

class AvailabilitySummary(BaseModel):
    start: date
    windowDays: int
    available: int
    booked: int
    other: int  # blocked days, derived as windowDays - available - booked
