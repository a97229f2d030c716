from typing import List, Dict, Any, Optional
from datetime import datetime
import logging

from bson import ObjectId
from bson.errors import InvalidId

logger = logging.getLogger(__name__)

def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None

def _with_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if document:
        document["id"] = str(document["_id"])
    return document

class EventRepository:
    """Events and the applications made to them."""

    def __init__(self, database):
        self.events = database.events
        self.applications = database.applications

    async def create_event(self, event_data: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.events.insert_one(event_data)
        return _with_id(await self.events.find_one({"_id": result.inserted_id}))

    async def get_event(self, event_id: str) -> Optional[Dict[str, Any]]:
        """Get an event by ID; malformed IDs read as missing"""
        object_id = _object_id(event_id)
        if object_id is None:
            return None
        return _with_id(await self.events.find_one({"_id": object_id}))

    async def list_open_events(self) -> List[Dict[str, Any]]:
        """Open events, newest first"""
        cursor = self.events.find({"status": "open"}).sort("createdAt", -1)
        return [_with_id(event) for event in await cursor.to_list(length=None)]

    async def update_event(self, event_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        object_id = _object_id(event_id)
        if object_id is None:
            return None
        update_data["updatedAt"] = datetime.utcnow()
        await self.events.update_one({"_id": object_id}, {"$set": update_data})
        return await self.get_event(event_id)

    async def create_application(self, application_data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an application and bump the event's applicationsCount"""
        result = await self.applications.insert_one(application_data)
        await self.events.update_one(
            {"_id": ObjectId(application_data["eventId"])},
            {"$inc": {"applicationsCount": 1}}
        )
        return _with_id(await self.applications.find_one({"_id": result.inserted_id}))

    async def find_application(self, event_id: str, musician_id: str) -> Optional[Dict[str, Any]]:
        return _with_id(await self.applications.find_one({"eventId": event_id, "musicianId": musician_id}))

    async def get_application(self, application_id: str) -> Optional[Dict[str, Any]]:
        object_id = _object_id(application_id)
        if object_id is None:
            return None
        return _with_id(await self.applications.find_one({"_id": object_id}))

    async def list_applications(self, event_id: str) -> List[Dict[str, Any]]:
        cursor = self.applications.find({"eventId": event_id}).sort("appliedAt", -1)
        return [_with_id(application) for application in await cursor.to_list(length=None)]

    async def update_application_status(self, application_id: str, status: str) -> Optional[Dict[str, Any]]:
        await self.applications.update_one(
            {"_id": ObjectId(application_id)},
            {"$set": {"status": status, "updatedAt": datetime.utcnow()}}
        )
        return await self.get_application(application_id)
