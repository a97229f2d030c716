from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from typing import Any, Dict, List, Optional
from datetime import date
import logging

from gigboard.api.deps import get_current_event_manager, get_current_musician, get_event_repository, get_today
from gigboard.core.auth import get_current_user, get_profile_repository
from gigboard.core.errors import EventNotFound, GigBoardError, error_to_http
from gigboard.db.events import EventRepository
from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.event import (
    ApplicationCreate,
    ApplicationDecision,
    ApplicationResponse,
    DateRange,
    EventApplications,
    EventCreate,
    EventResponse,
    EventUpdate,
)
from gigboard.services import event_service

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_in: EventCreate,
    current_user: Dict[str, Any] = Depends(get_current_event_manager),
    repository: EventRepository = Depends(get_event_repository),
    today: date = Depends(get_today),
):
    """
    Post a new event; it opens for applications immediately
    """
    try:
        return await event_service.create_event(repository, event_in, current_user, today)
    except GigBoardError as e:
        raise error_to_http(e)

@router.get("/", response_model=List[EventResponse])
async def list_events(
    search: Optional[str] = Query(None, description="Matches title, description or location"),
    genre: Optional[str] = Query(None),
    instrument: Optional[str] = Query(None, description="Matches any role's instrument"),
    location: Optional[str] = Query(None, description="Case-insensitive partial match"),
    dateRange: Optional[DateRange] = Query(None, description="today, week or month from today"),
    repository: EventRepository = Depends(get_event_repository),
    today: date = Depends(get_today),
):
    """
    Browse open events, newest first
    """
    try:
        return await event_service.list_events(
            repository,
            today,
            search=search,
            genre=genre,
            instrument=instrument,
            location=location,
            date_range=dateRange,
        )
    except Exception as e:
        logger.error(f"Error in list_events: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred while retrieving events"
        )

@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str = Path(..., title="The ID of the event"),
    repository: EventRepository = Depends(get_event_repository),
):
    event = await repository.get_event(event_id)
    if not event:
        raise error_to_http(EventNotFound())
    return event

@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_update: EventUpdate,
    event_id: str = Path(..., title="The ID of the event"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    repository: EventRepository = Depends(get_event_repository),
):
    """
    Close or reopen an event (creator only)
    """
    try:
        return await event_service.update_event(repository, event_id, event_update, current_user["uid"])
    except GigBoardError as e:
        raise error_to_http(e)

@router.post("/{event_id}/applications", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_event(
    application_in: ApplicationCreate,
    event_id: str = Path(..., title="The ID of the event"),
    current_user: Dict[str, Any] = Depends(get_current_musician),
    repository: EventRepository = Depends(get_event_repository),
    today: date = Depends(get_today),
):
    """
    Apply to an open event as the current musician
    """
    try:
        return await event_service.apply_to_event(
            repository, event_id, current_user, today, message=application_in.message
        )
    except GigBoardError as e:
        raise error_to_http(e)

@router.get("/{event_id}/applications", response_model=EventApplications)
async def get_event_applications(
    event_id: str = Path(..., title="The ID of the event"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    repository: EventRepository = Depends(get_event_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """
    List applications to an event with applicant profiles and counts (creator only)
    """
    try:
        return await event_service.get_event_applications(repository, profiles, event_id, current_user["uid"])
    except GigBoardError as e:
        raise error_to_http(e)

@router.put("/{event_id}/applications/{application_id}", response_model=ApplicationResponse)
async def decide_application(
    decision: ApplicationDecision,
    event_id: str = Path(..., title="The ID of the event"),
    application_id: str = Path(..., title="The ID of the application"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    repository: EventRepository = Depends(get_event_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    """
    Accept or decline a pending application (creator only).

    Accepting marks the event date as booked on the musician's calendar.
    """
    try:
        return await event_service.decide_application(
            repository, profiles, event_id, application_id, decision, current_user["uid"]
        )
    except GigBoardError as e:
        logger.info(f"Decision on application {application_id} failed: {e.detail}")
        raise error_to_http(e)
