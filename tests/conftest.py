import copy
from datetime import date, datetime

import pytest

from gigboard.schemas.availability import DayStatus

TODAY = date(2025, 3, 1)


class InMemoryProfileRepository:
    """Dict-backed stand-in for ProfileRepository."""

    def __init__(self):
        self.profiles = {}
        self.fail_keys = set()
        self.writes = []

    def add(self, uid, role="musician", availability=None, **fields):
        profile = {
            "uid": uid,
            "email": f"{uid}@gigboard.io",
            "name": uid.title(),
            "role": role,
            "bio": "",
            "createdAt": datetime(2025, 1, 1),
            **fields,
        }
        if availability is not None:
            profile["availability"] = dict(availability)
        self.profiles[uid] = profile
        return profile

    async def fetch_profile(self, uid):
        profile = self.profiles.get(uid)
        if profile is None:
            return None
        profile = copy.deepcopy(profile)
        return profile

    async def get_profile_by_email(self, email):
        for profile in self.profiles.values():
            if profile["email"] == email:
                return copy.deepcopy(profile)
        return None

    async def create_profile(self, profile_data):
        uid = f"user-{len(self.profiles) + 1}"
        profile_data["uid"] = uid
        self.profiles[uid] = copy.deepcopy(profile_data)
        return await self.fetch_profile(uid)

    async def list_musicians(self):
        return [copy.deepcopy(p) for p in self.profiles.values() if p["role"] == "musician"]

    async def persist_availability(self, uid, date_key, status):
        self.writes.append((uid, date_key, DayStatus(status)))
        if date_key in self.fail_keys or uid not in self.profiles:
            return False
        self.profiles[uid].setdefault("availability", {})[date_key] = DayStatus(status).value
        return True


class InMemoryEventRepository:
    """Dict-backed stand-in for EventRepository."""

    def __init__(self):
        self.events = {}
        self.applications = {}

    def add_event(self, event_id, created_by="eve", **fields):
        event = {
            "id": event_id,
            "title": f"Gig {event_id}",
            "description": "",
            "date": "2025-03-20",
            "location": "Chicago, IL",
            "genre": "Jazz",
            "roles": [{"instrument": "Piano", "count": 1, "description": ""}],
            "createdBy": created_by,
            "createdByName": created_by.title(),
            "status": "open",
            "applicationsCount": 0,
            "createdAt": datetime(2025, 1, 1),
            **fields,
        }
        self.events[event_id] = event
        return event

    async def create_event(self, event_data):
        event_id = f"event-{len(self.events) + 1}"
        self.events[event_id] = {**copy.deepcopy(event_data), "id": event_id}
        return copy.deepcopy(self.events[event_id])

    async def get_event(self, event_id):
        return copy.deepcopy(self.events.get(event_id))

    async def list_open_events(self):
        events = [copy.deepcopy(e) for e in self.events.values() if e["status"] == "open"]
        return sorted(events, key=lambda e: e["createdAt"], reverse=True)

    async def update_event(self, event_id, update_data):
        if event_id not in self.events:
            return None
        self.events[event_id].update(update_data, updatedAt=datetime(2025, 3, 1))
        return await self.get_event(event_id)

    async def create_application(self, application_data):
        application_id = f"application-{len(self.applications) + 1}"
        self.applications[application_id] = {**copy.deepcopy(application_data), "id": application_id}
        self.events[application_data["eventId"]]["applicationsCount"] += 1
        return copy.deepcopy(self.applications[application_id])

    async def find_application(self, event_id, musician_id):
        for application in self.applications.values():
            if application["eventId"] == event_id and application["musicianId"] == musician_id:
                return copy.deepcopy(application)
        return None

    async def get_application(self, application_id):
        return copy.deepcopy(self.applications.get(application_id))

    async def list_applications(self, event_id):
        return [copy.deepcopy(a) for a in self.applications.values() if a["eventId"] == event_id]

    async def update_application_status(self, application_id, status):
        self.applications[application_id].update(status=status, updatedAt=datetime(2025, 3, 1))
        return await self.get_application(application_id)


@pytest.fixture
def repository():
    return InMemoryProfileRepository()


@pytest.fixture
def event_repository():
    return InMemoryEventRepository()


@pytest.fixture
def app(repository, event_repository):
    from main import app as fastapi_app
    from gigboard.api.deps import get_event_repository, get_today
    from gigboard.core.auth import get_profile_repository

    fastapi_app.dependency_overrides[get_profile_repository] = lambda: repository
    fastapi_app.dependency_overrides[get_today] = lambda: TODAY
    fastapi_app.dependency_overrides[get_event_repository] = lambda: event_repository
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def login_as(app, repository):
    """Make requests run as the given uid without issuing a token."""
    from gigboard.core.auth import get_current_user

    def _login(uid):
        async def _current_user():
            return await repository.fetch_profile(uid)
        app.dependency_overrides[get_current_user] = _current_user

    return _login
