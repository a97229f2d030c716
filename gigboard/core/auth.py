from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from gigboard.core.config import settings
from gigboard.db.mongodb import db
from gigboard.db.profiles import ProfileRepository

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

def get_profile_repository() -> ProfileRepository:
    """Repository over the connected database; overridden in tests."""
    return ProfileRepository(db.db)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hashed password."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )

    return encoded_jwt

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    repository: ProfileRepository = Depends(get_profile_repository),
) -> Dict[str, Any]:
    """Get the current profile from a bearer token.

    Tokens carry { sub: <uid>, role: <musician|event_manager> }. The role in
    the token is informational; the stored profile is authoritative.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        uid: Optional[str] = payload.get("sub")
        if uid is None:
            raise credentials_exception
    except JWTError as jwt_error:
        logger.info(f"JWT decode error: {jwt_error}")
        raise credentials_exception

    try:
        user = await repository.fetch_profile(uid)
    except Exception as db_error:
        logger.error(f"Database error while resolving {uid}: {db_error}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving user data"
        )

    if user is None:
        logger.info(f"User not found for uid: {uid}")
        raise credentials_exception

    return user
