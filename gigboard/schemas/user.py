from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Dict, List
from datetime import datetime
from enum import Enum

from gigboard.schemas.availability import AvailabilitySummary

class UserRole(str, Enum):
    MUSICIAN = "musician"
    EVENT_MANAGER = "event_manager"

class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"

class UserBase(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    role: UserRole
    bio: str = ""

class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    # Musician-only fields
    genres: List[str] = []
    instruments: List[str] = []
    portfolio: str = ""
    location: str = ""
    experience: Optional[ExperienceLevel] = None

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class ProfileResponse(UserBase):
    uid: str
    genres: List[str] = []
    instruments: List[str] = []
    portfolio: str = ""
    location: str = ""
    experience: Optional[ExperienceLevel] = None
    availability: Optional[Dict[str, str]] = None
    createdAt: datetime

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda dt: dt.isoformat()
        }

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: ProfileResponse

class MusicianListing(BaseModel):
    uid: str
    name: str
    bio: str = ""
    genres: List[str] = []
    instruments: List[str] = []
    location: str = ""
    experience: Optional[ExperienceLevel] = None
    availabilityLabel: str

class MusicianDetail(ProfileResponse):
    summary: AvailabilitySummary
