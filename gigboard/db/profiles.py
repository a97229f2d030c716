from typing import List, Dict, Any, Optional
from datetime import datetime
import logging

from bson import ObjectId
from pymongo.errors import PyMongoError

from gigboard.schemas.availability import DayStatus

logger = logging.getLogger(__name__)

class ProfileRepository:
    """Profile documents stored in the users collection, addressed by uid."""

    def __init__(self, database):
        self.collection = database.users

    async def fetch_profile(self, uid: str) -> Optional[Dict[str, Any]]:
        """Get a profile by uid"""
        profile = await self.collection.find_one({"uid": uid})
        if profile:
            profile["id"] = str(profile["_id"])
        return profile

    async def get_profile_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"email": email})

    async def create_profile(self, profile_data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new profile; uid is the string form of the generated _id"""
        profile_id = ObjectId()
        profile_data["_id"] = profile_id
        profile_data["uid"] = str(profile_id)
        profile_data.setdefault("createdAt", datetime.utcnow())

        await self.collection.insert_one(profile_data)
        return await self.fetch_profile(profile_data["uid"])

    async def list_musicians(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({"role": "musician"}).sort("createdAt", -1)
        musicians = await cursor.to_list(length=None)
        for musician in musicians:
            musician["id"] = str(musician["_id"])
        return musicians

    async def persist_availability(self, uid: str, date_key: str, status: DayStatus) -> bool:
        """Merge one day's status into the profile's availability map.

        Only the availability.<date_key> field is written, so other days
        stored on the profile are left untouched.
        """
        try:
            result = await self.collection.update_one(
                {"uid": uid},
                {"$set": {
                    f"availability.{date_key}": DayStatus(status).value,
                    "updatedAt": datetime.utcnow(),
                }}
            )
        except PyMongoError as e:
            logger.error(f"Failed to persist availability {date_key} for {uid}: {e}", exc_info=True)
            return False

        if result.matched_count == 0:
            logger.warning(f"No profile matched uid {uid} while persisting {date_key}")
            return False
        return result.acknowledged
