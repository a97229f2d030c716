from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from gigboard.db.profiles import ProfileRepository
from gigboard.schemas.availability import DayStatus


def make_repository(update_result=None, update_error=None):
    collection = MagicMock()
    collection.update_one = AsyncMock(return_value=update_result, side_effect=update_error)
    collection.find_one = AsyncMock(return_value=None)
    return ProfileRepository(SimpleNamespace(users=collection)), collection


@pytest.mark.asyncio
async def test_persist_availability_merges_single_key():
    repository, collection = make_repository(
        SimpleNamespace(matched_count=1, acknowledged=True)
    )

    assert await repository.persist_availability("ada", "2025-03-10", DayStatus.BLOCKED)

    query, update = collection.update_one.await_args.args
    assert query == {"uid": "ada"}
    assert set(update) == {"$set"}
    assert update["$set"]["availability.2025-03-10"] == "blocked"
    assert "availability" not in update["$set"]


@pytest.mark.asyncio
async def test_persist_availability_reports_missing_profile():
    repository, _ = make_repository(SimpleNamespace(matched_count=0, acknowledged=True))
    assert not await repository.persist_availability("ghost", "2025-03-10", DayStatus.AVAILABLE)


@pytest.mark.asyncio
async def test_persist_availability_reports_driver_errors():
    repository, _ = make_repository(update_error=ServerSelectionTimeoutError("no servers"))
    assert not await repository.persist_availability("ada", "2025-03-10", DayStatus.BLOCKED)


@pytest.mark.asyncio
async def test_fetch_profile_returns_stored_fields_only():
    repository, collection = make_repository()
    collection.find_one.return_value = {"_id": "abc", "uid": "eve", "role": "event_manager"}

    profile = await repository.fetch_profile("eve")

    collection.find_one.assert_awaited_once_with({"uid": "eve"})
    assert "availability" not in profile
    assert profile["id"] == "abc"


@pytest.mark.asyncio
async def test_fetch_profile_missing():
    repository, _ = make_repository()
    assert await repository.fetch_profile("nobody") is None
