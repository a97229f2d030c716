import pytest
from httpx import ASGITransport, AsyncClient

new_event = {
    "title": "Spring Gala",
    "description": "Evening reception, two sets",
    "date": "2025-03-20",
    "time": "19:00",
    "location": "Chicago, IL",
    "venue": "Lakeview Hall",
    "genre": "Jazz",
    "roles": [{"instrument": "Piano", "count": 1, "description": "Lead"}],
    "compensation": "400",
    "compensationType": "fixed",
}


def client_for(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def people(repository):
    repository.add("ada", availability={"2025-03-20": "blocked"}, instruments=["Piano"], genres=["Jazz"])
    repository.add("bo", instruments=["Drums"])
    repository.add("eve", role="event_manager")
    repository.add("max", role="event_manager")


@pytest.mark.asyncio
async def test_event_manager_posts_event(app, event_repository, people, login_as):
    login_as("eve")

    async with client_for(app) as client:
        response = await client.post("/api/v1/events/", json=new_event)

    body = response.json()
    assert response.status_code == 201
    assert (body["status"], body["createdBy"], body["applicationsCount"]) == ("open", "eve", 0)
    assert body["date"] == "2025-03-20"
    assert event_repository.events[body["id"]]["createdByName"] == "Eve"


@pytest.mark.asyncio
async def test_musician_cannot_post_event(app, event_repository, people, login_as):
    login_as("ada")

    async with client_for(app) as client:
        response = await client.post("/api/v1/events/", json=new_event)

    assert response.status_code == 403
    assert event_repository.events == {}


@pytest.mark.asyncio
async def test_event_in_the_past_is_refused(app, people, login_as):
    login_as("eve")

    async with client_for(app) as client:
        response = await client.post("/api/v1/events/", json={**new_event, "date": "2025-02-20"})
        no_roles = await client.post("/api/v1/events/", json={**new_event, "roles": []})

    assert response.status_code == 400
    assert response.json()["detail"] == "Event date cannot be in the past"
    assert no_roles.status_code == 422


@pytest.fixture
def listings(event_repository):
    event_repository.add_event("gala", title="Spring Gala", date="2025-03-20")
    event_repository.add_event(
        "rock", title="Garage Night", genre="Rock", location="Austin, TX", date="2025-03-05",
        roles=[{"instrument": "Drums", "count": 1}],
    )
    event_repository.add_event("old", title="Winter Ball", status="closed")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, {"gala", "rock"}),
        ({"search": "garage"}, {"rock"}),
        ({"genre": "Jazz"}, {"gala"}),
        ({"instrument": "Drums"}, {"rock"}),
        ({"location": "austin"}, {"rock"}),
        ({"dateRange": "week"}, {"rock"}),
        ({"dateRange": "month"}, {"gala", "rock"}),
    ],
)
async def test_list_open_events_with_filters(app, listings, params, expected):
    async with client_for(app) as client:
        response = await client.get("/api/v1/events/", params=params)

    assert response.status_code == 200
    assert {event["id"] for event in response.json()} == expected


@pytest.mark.asyncio
async def test_event_detail(app, listings):
    async with client_for(app) as client:
        found = await client.get("/api/v1/events/gala")
        missing = await client.get("/api/v1/events/nope")

    assert found.json()["title"] == "Spring Gala"
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Event not found"


@pytest.mark.asyncio
async def test_musician_applies_once(app, event_repository, people, listings, login_as):
    login_as("ada")

    async with client_for(app) as client:
        first = await client.post("/api/v1/events/gala/applications", json={})
        second = await client.post("/api/v1/events/gala/applications", json={"message": "Again"})

    application = first.json()
    assert first.status_code == 201
    assert application["status"] == "pending"
    assert application["eventManagerId"] == "eve"
    assert "Piano" in application["message"]
    assert event_repository.events["gala"]["applicationsCount"] == 1

    assert second.status_code == 400
    assert second.json()["detail"] == "You have already applied to this event"


@pytest.mark.asyncio
async def test_cannot_apply_to_closed_event(app, people, listings, login_as):
    login_as("ada")

    async with client_for(app) as client:
        response = await client.post("/api/v1/events/old/applications", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "This event is no longer accepting applications"


@pytest.mark.asyncio
async def test_event_manager_cannot_apply(app, people, listings, login_as):
    login_as("max")

    async with client_for(app) as client:
        response = await client.post("/api/v1/events/gala/applications", json={})

    assert response.status_code == 403


@pytest.fixture
def applied(event_repository, people, listings):
    event_repository.applications["app-ada"] = {
        "id": "app-ada", "eventId": "gala", "eventTitle": "Spring Gala", "eventDate": "2025-03-20",
        "musicianId": "ada", "musicianName": "Ada", "musicianEmail": "ada@gigboard.io",
        "eventManagerId": "eve", "status": "pending", "message": "Hi", "appliedAt": "2025-02-25T10:00:00",
    }
    event_repository.applications["app-bo"] = {
        **event_repository.applications["app-ada"],
        "id": "app-bo", "musicianId": "bo", "musicianName": "Bo", "status": "declined",
    }


@pytest.mark.asyncio
async def test_creator_reviews_applications(app, applied, login_as):
    login_as("eve")

    async with client_for(app) as client:
        response = await client.get("/api/v1/events/gala/applications")

    body = response.json()
    assert response.status_code == 200
    assert body["counts"] == {"accepted": 0, "pending": 1, "declined": 1}
    profiles = {a["musicianId"]: a["musicianProfile"] for a in body["applications"]}
    assert profiles["ada"]["instruments"] == ["Piano"]
    assert "password" not in profiles["ada"] and "email" not in profiles["ada"]


@pytest.mark.asyncio
async def test_only_creator_sees_applications(app, applied, login_as):
    login_as("max")

    async with client_for(app) as client:
        response = await client.get("/api/v1/events/gala/applications")
        decision = await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "accepted"})

    assert response.status_code == 403
    assert decision.status_code == 403


@pytest.mark.asyncio
async def test_accepting_books_the_event_date(app, repository, event_repository, applied, login_as):
    login_as("eve")

    async with client_for(app) as client:
        response = await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "accepted"})
        again = await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "declined"})
        calendar = await client.get("/api/v1/availability/ada/calendar", params={"year": 2025, "month": 3})

    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    assert repository.profiles["ada"]["availability"] == {"2025-03-20": "booked"}

    assert again.status_code == 400
    assert again.json()["detail"] == "Application has already been decided"

    day = calendar.json()["days"][19]
    assert (day["status"], day["tone"], day["interactive"]) == ("booked", "alert", False)


@pytest.mark.asyncio
async def test_booked_day_cannot_be_toggled_by_musician(app, repository, applied, login_as):
    login_as("eve")
    async with client_for(app) as client:
        await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "accepted"})

    login_as("ada")
    async with client_for(app) as client:
        response = await client.post("/api/v1/availability/me/2025-03-20/toggle")

    assert response.json()["rejection"] == "booked"
    assert repository.profiles["ada"]["availability"] == {"2025-03-20": "booked"}


@pytest.mark.asyncio
async def test_declining_leaves_calendar_alone(app, repository, event_repository, applied, login_as):
    login_as("eve")

    async with client_for(app) as client:
        response = await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "declined"})
        pending = await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "pending"})

    assert response.json()["status"] == "declined"
    assert repository.writes == []
    assert pending.status_code == 400


@pytest.mark.asyncio
async def test_acceptance_fails_when_booking_is_refused(app, repository, event_repository, applied, login_as):
    repository.fail_keys.add("2025-03-20")
    login_as("eve")

    async with client_for(app) as client:
        response = await client.put("/api/v1/events/gala/applications/app-ada", json={"status": "accepted"})

    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to update availability"
    assert event_repository.applications["app-ada"]["status"] == "pending"
    assert repository.profiles["ada"]["availability"] == {"2025-03-20": "blocked"}


@pytest.mark.asyncio
async def test_unknown_application(app, applied, login_as):
    login_as("eve")

    async with client_for(app) as client:
        response = await client.put("/api/v1/events/gala/applications/nope", json={"status": "accepted"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Application not found"


@pytest.mark.asyncio
async def test_creator_closes_event(app, people, listings, login_as):
    login_as("eve")

    async with client_for(app) as client:
        closed = await client.put("/api/v1/events/gala", json={"status": "closed"})
        remaining = await client.get("/api/v1/events/")

    assert closed.status_code == 200
    assert closed.json()["status"] == "closed"
    assert {event["id"] for event in remaining.json()} == {"rock"}
