from fastapi import APIRouter, HTTPException, status, Depends
from typing import Any, Dict
from datetime import timedelta
import logging

from gigboard.core.auth import create_access_token, get_current_user, get_profile_repository
from gigboard.core.config import settings
from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.user import ProfileResponse, Token, UserCreate, UserLogin
from gigboard.services.user_service import authenticate_user, create_user

router = APIRouter()
logger = logging.getLogger(__name__)

def _issue_token(user: Dict[str, Any]) -> Dict[str, Any]:
    access_token = create_access_token(
        data={"sub": user["uid"], "role": user["role"]},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return {"access_token": access_token, "token_type": "bearer", "user": user}

@router.post("/register", response_model=Token)
async def register(
    user_in: UserCreate,
    repository: ProfileRepository = Depends(get_profile_repository),
) -> Any:
    """Register a musician or event manager

    Musician profiles are created with an empty availability calendar.
    """
    if await repository.get_profile_by_email(user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An account with this email already exists"
        )

    user = await create_user(repository, user_in)
    logger.info(f"Registered {user['role']} {user['uid']}")
    return _issue_token(user)

@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    repository: ProfileRepository = Depends(get_profile_repository),
) -> Any:
    """Exchange email and password for a bearer token"""
    user = await authenticate_user(repository, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_token(user)

@router.get("/me", response_model=ProfileResponse)
async def read_users_me(current_user: Dict[str, Any] = Depends(get_current_user)):
    """Get current user profile"""
    return current_user
