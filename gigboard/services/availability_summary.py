from datetime import date, timedelta
from typing import Mapping, Optional

from gigboard.schemas.availability import AvailabilitySummary, DayStatus
from gigboard.services.availability_store import load_availability, status_of

# (minimum available days, label), checked in order
AVAILABILITY_LABELS = [
    (5, "Highly Available"),
    (3, "Available"),
    (1, "Limited Availability"),
]
BUSY_LABEL = "Busy"
UNKNOWN_LABEL = "Unknown"

def summarize(availability: Mapping[str, DayStatus], today: date, window_days: int) -> AvailabilitySummary:
    """
    Count available and booked days in [today, today + window_days).
    Everything else in the window is blocked and reported as other.
    """
    available = 0
    booked = 0
    for offset in range(window_days):
        status = status_of(availability, today + timedelta(days=offset))
        if status is DayStatus.AVAILABLE:
            available += 1
        elif status is DayStatus.BOOKED:
            booked += 1

    return AvailabilitySummary(
        start=today,
        windowDays=window_days,
        available=available,
        booked=booked,
        other=window_days - available - booked,
    )

def availability_label(raw_availability: Optional[Mapping], today: date, window_days: int = 7) -> str:
    """Badge shown on discovery listings for the coming week."""
    if raw_availability is None:
        return UNKNOWN_LABEL

    available = summarize(load_availability(raw_availability), today, window_days).available
    for minimum, label in AVAILABILITY_LABELS:
        if available >= minimum:
            return label
    return BUSY_LABEL
