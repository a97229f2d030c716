from fastapi import APIRouter, HTTPException, Depends, Query, Path, status
from typing import Any, Dict, Optional
from datetime import date
import logging

from gigboard.api.deps import get_current_musician, get_today
from gigboard.core.auth import get_profile_repository
from gigboard.core.config import settings
from gigboard.core.errors import AvailabilityError, error_to_http
from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.availability import (
    AvailabilitySummary,
    CalendarAccess,
    MonthCursor,
    MonthView,
    RejectionReason,
    ToggleOutcome,
)
from gigboard.services.availability_store import AvailabilityStore
from gigboard.services.availability_summary import summarize
from gigboard.services.availability_view import AvailabilityCalendar
from gigboard.utils.dates import parse_date_key

router = APIRouter()
logger = logging.getLogger(__name__)

def _parse_day(value: str) -> date:
    try:
        return parse_date_key(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid date format. Use YYYY-MM-DD"
        )

def _cursor(year: Optional[int], month: Optional[int], today: date) -> MonthCursor:
    return MonthCursor(year=year or today.year, month=month or today.month)

def _notify_failure(message: str) -> None:
    logger.warning(message)

@router.get("/me/calendar", response_model=MonthView)
async def get_my_calendar(
    year: Optional[int] = Query(None, ge=1, le=9999, description="Year (e.g., 2025)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month (1-12)"),
    current_user: Dict[str, Any] = Depends(get_current_musician),
    repository: ProfileRepository = Depends(get_profile_repository),
    today: date = Depends(get_today),
):
    """
    Get the current musician's calendar for a month, with toggleable days marked interactive
    """
    store = AvailabilityStore(
        current_user["uid"],
        current_user.get("availability"),
        repository,
        access=CalendarAccess.OWNER,
    )
    calendar = AvailabilityCalendar(store, _cursor(year, month, today))
    return calendar.render(today)

@router.post("/me/{day}/toggle", response_model=ToggleOutcome)
async def toggle_my_availability(
    day: str = Path(..., title="Date in YYYY-MM-DD format"),
    current_user: Dict[str, Any] = Depends(get_current_musician),
    repository: ProfileRepository = Depends(get_profile_repository),
    today: date = Depends(get_today),
):
    """
    Toggle one day between available and blocked for the current musician.

    Past and booked days are left unchanged and reported through `rejection`.
    """
    parsed = _parse_day(day)
    store = AvailabilityStore(
        current_user["uid"],
        current_user.get("availability"),
        repository,
        access=CalendarAccess.OWNER,
        on_failure=_notify_failure,
    )
    calendar = AvailabilityCalendar(store, MonthCursor.containing(parsed))

    try:
        outcome = await calendar.on_day_activate(parsed, today)
    except AvailabilityError as e:
        logger.info(f"Availability toggle for {current_user['uid']} on {day} failed: {e.detail}")
        raise error_to_http(e)
    except Exception as e:
        logger.error(f"Error in toggle_my_availability: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred while updating availability"
        )
    finally:
        calendar.close()

    if outcome is None:
        # The calendar ignores past days
        return ToggleOutcome(
            dateKey=day,
            status=store.status_of(parsed),
            applied=False,
            rejection=RejectionReason.PAST_DATE,
        )
    return outcome

@router.get("/{uid}/calendar", response_model=MonthView)
async def get_profile_calendar(
    uid: str = Path(..., title="The uid of the musician"),
    year: Optional[int] = Query(None, ge=1, le=9999, description="Year (e.g., 2025)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month (1-12)"),
    repository: ProfileRepository = Depends(get_profile_repository),
    today: date = Depends(get_today),
):
    """
    Get a read-only month view of a musician's availability
    """
    try:
        store = await AvailabilityStore.load(repository, uid)
    except AvailabilityError as e:
        raise error_to_http(e)

    calendar = AvailabilityCalendar(store, _cursor(year, month, today), read_only=True)
    return calendar.render(today)

@router.get("/{uid}/summary", response_model=AvailabilitySummary)
async def get_availability_summary(
    uid: str = Path(..., title="The uid of the musician"),
    days: int = Query(settings.SUMMARY_WINDOW_DAYS, ge=1, le=90, description="Window size in days, starting today"),
    repository: ProfileRepository = Depends(get_profile_repository),
    today: date = Depends(get_today),
):
    """
    Count available, booked and blocked days from today over the next `days` days
    """
    try:
        store = await AvailabilityStore.load(repository, uid)
    except AvailabilityError as e:
        raise error_to_http(e)

    return summarize(store.availability, today, days)
