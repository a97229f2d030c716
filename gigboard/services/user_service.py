from typing import Dict, Any, Optional
from datetime import datetime

from gigboard.core.auth import get_password_hash, verify_password
from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.user import UserCreate, UserRole

MUSICIAN_FIELDS = ("genres", "instruments", "portfolio", "location", "experience")

async def create_user(repository: ProfileRepository, user_in: UserCreate) -> Dict[str, Any]:
    """
    Create a new profile. Musicians start with an empty availability map.
    """
    user_data = user_in.model_dump(mode="json")
    user_data["password"] = get_password_hash(user_data["password"])
    user_data["createdAt"] = datetime.utcnow()

    if user_in.role == UserRole.MUSICIAN:
        user_data["genres"] = [g.strip() for g in user_in.genres if g.strip()]
        user_data["instruments"] = [i.strip() for i in user_in.instruments if i.strip()]
        user_data["availability"] = {}
    else:
        for field in MUSICIAN_FIELDS:
            user_data.pop(field, None)

    return await repository.create_profile(user_data)

async def authenticate_user(
    repository: ProfileRepository, email: str, password: str
) -> Optional[Dict[str, Any]]:
    """
    Return the profile when the credentials match, otherwise None
    """
    user = await repository.get_profile_by_email(email)
    if not user or not verify_password(password, user.get("password", "")):
        return None
    return await repository.fetch_profile(user["uid"])
