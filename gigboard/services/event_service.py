"""Event posting, gig applications and the accept/decline decision.

Accepting an application marks the event date as booked on the musician's
calendar. That is the only place a ``booked`` status is written.
"""
from typing import Dict, Any, List, Optional
from datetime import date, datetime, timedelta
import logging

from gigboard.core.errors import (
    ApplicationNotFound,
    EventError,
    EventNotFound,
    MSG_ALREADY_APPLIED,
    MSG_APPLICATION_DECIDED,
    MSG_EVENT_CLOSED,
    MSG_EVENT_IN_PAST,
    MSG_INVALID_DECISION,
    NotEventOwner,
    PersistenceFailure,
)
from gigboard.db.events import EventRepository
from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.availability import DayStatus
from gigboard.schemas.event import (
    ApplicationCounts,
    ApplicationDecision,
    ApplicationStatus,
    DateRange,
    EventCreate,
    EventStatus,
    EventUpdate,
)
from gigboard.utils.dates import add_months, parse_date_key

logger = logging.getLogger(__name__)

# Profile fields shown to an event manager reviewing applications
PROFILE_PREVIEW_FIELDS = ("uid", "name", "bio", "genres", "instruments", "location", "experience", "portfolio")

def _contains(value: Optional[str], term: str) -> bool:
    return term in (value or "").lower()

def _event_date(event: Dict[str, Any]) -> Optional[date]:
    try:
        return parse_date_key(event.get("date") or "")
    except ValueError:
        return None

def date_range_end(today: date, date_range: DateRange) -> date:
    """Last date (inclusive) covered by a date range filter starting today."""
    if date_range is DateRange.WEEK:
        return today + timedelta(days=7)
    if date_range is DateRange.MONTH:
        return add_months(today, 1)
    return today

def matches_filters(
    event: Dict[str, Any],
    today: date,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    instrument: Optional[str] = None,
    location: Optional[str] = None,
    date_range: Optional[DateRange] = None,
) -> bool:
    """
    Apply the listing filters to a single event
    """
    if search:
        term = search.lower()
        if not (
            _contains(event.get("title"), term)
            or _contains(event.get("description"), term)
            or _contains(event.get("location"), term)
        ):
            return False

    if genre and event.get("genre") != genre:
        return False

    if location and not _contains(event.get("location"), location.lower()):
        return False

    if instrument and not any(role.get("instrument") == instrument for role in event.get("roles") or []):
        return False

    if date_range:
        event_date = _event_date(event)
        if event_date is None or not today <= event_date <= date_range_end(today, date_range):
            return False

    return True

async def list_events(
    repository: EventRepository,
    today: date,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    instrument: Optional[str] = None,
    location: Optional[str] = None,
    date_range: Optional[DateRange] = None,
) -> List[Dict[str, Any]]:
    events = await repository.list_open_events()
    return [
        event for event in events
        if matches_filters(event, today, search, genre, instrument, location, date_range)
    ]

async def create_event(
    repository: EventRepository, event_in: EventCreate, manager: Dict[str, Any], today: date
) -> Dict[str, Any]:
    """
    Post a new open event on behalf of an event manager
    """
    if event_in.date < today:
        raise EventError(MSG_EVENT_IN_PAST)

    event_data = event_in.model_dump(mode="json")
    event_data["createdBy"] = manager["uid"]
    event_data["createdByName"] = manager.get("name", "")
    event_data["createdAt"] = datetime.utcnow()
    event_data["status"] = EventStatus.OPEN.value
    event_data["applicationsCount"] = 0

    event = await repository.create_event(event_data)
    logger.info(f"Event {event['id']} posted by {manager['uid']}")
    return event

async def get_owned_event(repository: EventRepository, event_id: str, manager_uid: str) -> Dict[str, Any]:
    event = await repository.get_event(event_id)
    if not event:
        raise EventNotFound()
    if event["createdBy"] != manager_uid:
        raise NotEventOwner()
    return event

async def update_event(
    repository: EventRepository, event_id: str, event_update: EventUpdate, manager_uid: str
) -> Dict[str, Any]:
    """
    Update an event's status; only its creator may do so
    """
    event = await get_owned_event(repository, event_id, manager_uid)

    update_data = event_update.model_dump(exclude_unset=True, mode="json")
    if not update_data:
        return event
    return await repository.update_event(event_id, update_data)

async def apply_to_event(
    repository: EventRepository,
    event_id: str,
    musician: Dict[str, Any],
    today: date,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Submit a pending application from a musician to an open event
    """
    event = await repository.get_event(event_id)
    if not event:
        raise EventNotFound()

    event_date = _event_date(event)
    if event.get("status") != EventStatus.OPEN.value or event_date is None or event_date < today:
        raise EventError(MSG_EVENT_CLOSED)

    if await repository.find_application(event_id, musician["uid"]):
        raise EventError(MSG_ALREADY_APPLIED)

    if not message:
        skills = ", ".join(musician.get("instruments") or []) or "music"
        message = (
            f"Hi! I'm interested in performing at {event['title']}. "
            f"I believe my skills in {skills} would be a great fit for this event."
        )

    application_data = {
        "eventId": event_id,
        "eventTitle": event["title"],
        "eventDate": event["date"],
        "musicianId": musician["uid"],
        "musicianName": musician.get("name", ""),
        "musicianEmail": musician.get("email", ""),
        "eventManagerId": event["createdBy"],
        "status": ApplicationStatus.PENDING.value,
        "appliedAt": datetime.utcnow(),
        "message": message,
    }

    application = await repository.create_application(application_data)
    logger.info(f"Musician {musician['uid']} applied to event {event_id}")
    return application

def count_applications(applications: List[Dict[str, Any]]) -> ApplicationCounts:
    counts = ApplicationCounts()
    for application in applications:
        status = application.get("status")
        if status == ApplicationStatus.ACCEPTED.value:
            counts.accepted += 1
        elif status == ApplicationStatus.DECLINED.value:
            counts.declined += 1
        else:
            counts.pending += 1
    return counts

def _profile_preview(profile: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not profile:
        return None
    return {field: profile[field] for field in PROFILE_PREVIEW_FIELDS if field in profile}

async def get_event_applications(
    repository: EventRepository,
    profiles: ProfileRepository,
    event_id: str,
    manager_uid: str,
) -> Dict[str, Any]:
    """
    Applications to an event, each with the applicant's profile, plus the counts by status
    """
    event = await get_owned_event(repository, event_id, manager_uid)
    applications = await repository.list_applications(event_id)

    for application in applications:
        application["musicianProfile"] = _profile_preview(
            await profiles.fetch_profile(application["musicianId"])
        )

    return {
        "event": event,
        "applications": applications,
        "counts": count_applications(applications),
    }

async def decide_application(
    repository: EventRepository,
    profiles: ProfileRepository,
    event_id: str,
    application_id: str,
    decision: ApplicationDecision,
    manager_uid: str,
) -> Dict[str, Any]:
    """
    Accept or decline a pending application.

    Accepting books the event date on the musician's calendar first; when
    that write is refused the application stays pending.
    """
    event = await get_owned_event(repository, event_id, manager_uid)

    application = await repository.get_application(application_id)
    if not application or application["eventId"] != event_id:
        raise ApplicationNotFound()

    if decision.status is ApplicationStatus.PENDING:
        raise EventError(MSG_INVALID_DECISION)
    if application["status"] != ApplicationStatus.PENDING.value:
        raise EventError(MSG_APPLICATION_DECIDED)

    if decision.status is ApplicationStatus.ACCEPTED:
        booked = await profiles.persist_availability(
            application["musicianId"], event["date"], DayStatus.BOOKED
        )
        if not booked:
            logger.error(f"Could not book {event['date']} for {application['musicianId']} on event {event_id}")
            raise PersistenceFailure(event["date"])

    updated = await repository.update_application_status(application_id, decision.status.value)
    logger.info(f"Application {application_id} to event {event_id} {decision.status.value}")
    return updated
