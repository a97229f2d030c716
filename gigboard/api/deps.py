from datetime import date
from typing import Any, Dict

from fastapi import Depends, HTTPException, status

from gigboard.core.auth import get_current_user
from gigboard.db.events import EventRepository
from gigboard.db.mongodb import db
from gigboard.schemas.user import UserRole
from gigboard.utils.dates import local_today

def get_today() -> date:
    """Today's calendar date in the configured timezone; overridden in tests."""
    return local_today()

async def get_current_musician(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if current_user.get("role") != UserRole.MUSICIAN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only musicians have an availability calendar"
        )
    return current_user

async def get_current_event_manager(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if current_user.get("role") != UserRole.EVENT_MANAGER.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only event managers can post events"
        )
    return current_user

def get_event_repository() -> EventRepository:
    return EventRepository(db.db)
