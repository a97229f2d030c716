from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from datetime import date
import logging

from gigboard.api.deps import get_today
from gigboard.core.auth import get_profile_repository
from gigboard.core.config import settings
from gigboard.core.errors import MSG_MUSICIAN_NOT_FOUND
from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.user import ExperienceLevel, MusicianDetail, MusicianListing, UserRole
from gigboard.services.availability_store import load_availability
from gigboard.services.availability_summary import summarize
from gigboard.services.musician_service import discover_musicians

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/", response_model=List[MusicianListing])
async def list_musicians(
    search: Optional[str] = Query(None, description="Matches name, bio, genres or instruments"),
    genre: Optional[str] = Query(None),
    instrument: Optional[str] = Query(None),
    location: Optional[str] = Query(None, description="Case-insensitive partial match"),
    experience: Optional[ExperienceLevel] = Query(None),
    repository: ProfileRepository = Depends(get_profile_repository),
    today: date = Depends(get_today),
):
    """
    Browse musicians with optional filters
    """
    try:
        return await discover_musicians(
            repository,
            today,
            search=search,
            genre=genre,
            instrument=instrument,
            location=location,
            experience=experience.value if experience else None,
        )
    except Exception as e:
        logger.error(f"Error in list_musicians: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred while retrieving musicians"
        )

@router.get("/{uid}", response_model=MusicianDetail)
async def get_musician(
    uid: str,
    repository: ProfileRepository = Depends(get_profile_repository),
    today: date = Depends(get_today),
):
    """
    Get a musician profile with its availability summary
    """
    musician = await repository.fetch_profile(uid)
    if not musician or musician.get("role") != UserRole.MUSICIAN.value:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=MSG_MUSICIAN_NOT_FOUND
        )

    musician["summary"] = summarize(
        load_availability(musician.get("availability")), today, settings.SUMMARY_WINDOW_DAYS
    )
    return musician
