"""
Domain error types and their HTTP mapping.
Routes call error_to_http so the status codes and messages stay in one place.
"""
from typing import Optional

from fastapi import HTTPException, status

# User-facing messages
MSG_AVAILABILITY_UPDATE_FAILED = "Failed to update availability"
MSG_PROFILE_NOT_FOUND = "Profile not found"
MSG_MUSICIAN_NOT_FOUND = "Musician not found"
MSG_READ_ONLY_CALENDAR = "Only the owning musician can change this calendar"
MSG_EVENT_NOT_FOUND = "Event not found"
MSG_APPLICATION_NOT_FOUND = "Application not found"
MSG_EVENT_CLOSED = "This event is no longer accepting applications"
MSG_ALREADY_APPLIED = "You have already applied to this event"
MSG_NOT_EVENT_OWNER = "Only the event creator can manage its applications"
MSG_EVENT_IN_PAST = "Event date cannot be in the past"
MSG_APPLICATION_DECIDED = "Application has already been decided"
MSG_INVALID_DECISION = "Applications can only be accepted or declined"


class GigBoardError(Exception):
    """Base class for errors raised by the services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class AvailabilityError(GigBoardError):
    """Base class for availability calendar errors."""


class PersistenceFailure(AvailabilityError):
    """The profile repository did not accept an availability write."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = MSG_AVAILABILITY_UPDATE_FAILED

    def __init__(self, date_key: str, detail: Optional[str] = None):
        super().__init__(detail)
        self.date_key = date_key


class ProfileNotFound(AvailabilityError):
    status_code = status.HTTP_404_NOT_FOUND
    message = MSG_PROFILE_NOT_FOUND


class AccessDenied(AvailabilityError):
    status_code = status.HTTP_403_FORBIDDEN
    message = MSG_READ_ONLY_CALENDAR


class EventError(GigBoardError):
    """Base class for event and application errors."""

    status_code = status.HTTP_400_BAD_REQUEST


class EventNotFound(EventError):
    status_code = status.HTTP_404_NOT_FOUND
    message = MSG_EVENT_NOT_FOUND


class ApplicationNotFound(EventError):
    status_code = status.HTTP_404_NOT_FOUND
    message = MSG_APPLICATION_NOT_FOUND


class NotEventOwner(EventError):
    status_code = status.HTTP_403_FORBIDDEN
    message = MSG_NOT_EVENT_OWNER


def error_to_http(exc: GigBoardError) -> HTTPException:
    """Map a domain error onto the HTTPException a route should raise."""
    return HTTPException(status_code=exc.status_code, detail=exc.detail)
