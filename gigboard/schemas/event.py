from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from enum import Enum

class EventStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"

class CompensationType(str, Enum):
    FIXED = "fixed"
    HOURLY = "hourly"
    PERCENTAGE = "percentage"
    NEGOTIABLE = "negotiable"

class DateRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

class EventRole(BaseModel):
    instrument: str = Field(..., min_length=1)
    count: int = Field(1, ge=1)
    description: str = ""

class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    date: date
    time: str = ""
    duration: str = ""
    location: str = Field(..., min_length=1)
    venue: str = ""
    genre: str = ""
    roles: List[EventRole] = Field(..., min_length=1)
    compensation: str = ""
    compensationType: CompensationType = CompensationType.FIXED
    applicationDeadline: Optional[date] = None
    requirements: str = ""
    contactInfo: str = ""

class EventUpdate(BaseModel):
    status: Optional[EventStatus] = None

class EventResponse(EventCreate):
    id: str
    createdBy: str
    createdByName: str = ""
    status: EventStatus = EventStatus.OPEN
    applicationsCount: int = 0
    createdAt: datetime
    updatedAt: Optional[datetime] = None

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda dt: dt.isoformat()
        }

class ApplicationCreate(BaseModel):
    message: Optional[str] = None

class ApplicationDecision(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    eventId: str
    eventTitle: str
    eventDate: date
    musicianId: str
    musicianName: str = ""
    musicianEmail: str = ""
    eventManagerId: str
    status: ApplicationStatus = ApplicationStatus.PENDING
    message: str = ""
    appliedAt: datetime
    updatedAt: Optional[datetime] = None
    musicianProfile: Optional[Dict[str, Any]] = None

class ApplicationCounts(BaseModel):
    accepted: int = 0
    pending: int = 0
    declined: int = 0

class EventApplications(BaseModel):
    event: EventResponse
    applications: List[ApplicationResponse]
    counts: ApplicationCounts
