from typing import Dict, Any, List, Optional
from datetime import date

from gigboard.core.config import settings
from gigboard.db.profiles import ProfileRepository
from gigboard.services.availability_summary import availability_label

def _contains(value: Optional[str], term: str) -> bool:
    return term in (value or "").lower()

def matches_filters(
    musician: Dict[str, Any],
    search: Optional[str] = None,
    genre: Optional[str] = None,
    instrument: Optional[str] = None,
    location: Optional[str] = None,
    experience: Optional[str] = None,
) -> bool:
    """
    Apply the discovery filters to a single musician profile
    """
    genres = musician.get("genres") or []
    instruments = musician.get("instruments") or []

    if search:
        term = search.lower()
        if not (
            _contains(musician.get("name"), term)
            or _contains(musician.get("bio"), term)
            or any(term in g.lower() for g in genres)
            or any(term in i.lower() for i in instruments)
        ):
            return False

    if genre and genre not in genres:
        return False

    if instrument and instrument not in instruments:
        return False

    # Location filtering - case insensitive partial match
    if location and not _contains(musician.get("location"), location.lower()):
        return False

    if experience and musician.get("experience") != experience:
        return False

    return True

async def discover_musicians(
    repository: ProfileRepository,
    today: date,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    instrument: Optional[str] = None,
    location: Optional[str] = None,
    experience: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List musicians matching the filters, each tagged with its availability label
    for the coming week
    """
    musicians = await repository.list_musicians()

    listings = []
    for musician in musicians:
        if not matches_filters(musician, search, genre, instrument, location, experience):
            continue
        listing = dict(musician)
        listing["availabilityLabel"] = availability_label(
            musician.get("availability"), today, settings.DISCOVERY_WINDOW_DAYS
        )
        listings.append(listing)

    return listings
