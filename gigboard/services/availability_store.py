"""Availability map ownership and the toggle rules.

A musician's availability is a sparse map of ``YYYY-MM-DD`` keys to
:class:`DayStatus`. Missing keys read as ``available``. The pure functions
below hold the rules. :class:`AvailabilityStore` wraps one profile's map
and runs each toggle as two phases: an optimistic in-memory update, then
a commit or a rollback once the repository has answered.
"""
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union
import logging

from pydantic import BaseModel

from gigboard.core.errors import (
    AccessDenied,
    MSG_AVAILABILITY_UPDATE_FAILED,
    MSG_MUSICIAN_NOT_FOUND,
    PersistenceFailure,
    ProfileNotFound,
)
from gigboard.schemas.availability import (
    CalendarAccess,
    DayStatus,
    Persist,
    Rejected,
    RejectionReason,
    ToggleEffect,
    ToggleOutcome,
)
from gigboard.utils.dates import date_key, is_past, parse_date_key

logger = logging.getLogger(__name__)

AvailabilityMap = Dict[str, DayStatus]

def load_availability(raw: Optional[Mapping[str, Any]]) -> AvailabilityMap:
    """Build a typed map from a stored profile field, dropping malformed entries."""
    availability: AvailabilityMap = {}
    for key, value in (raw or {}).items():
        try:
            parse_date_key(key)
            availability[key] = DayStatus(value)
        except (TypeError, ValueError):
            logger.warning(f"Skipping invalid availability entry {key!r}: {value!r}")
    return availability

def status_of(availability: Mapping[str, DayStatus], day: date) -> DayStatus:
    return DayStatus(availability.get(date_key(day), DayStatus.AVAILABLE))

def toggle(
    availability: Mapping[str, DayStatus], day: date, today: date
) -> Tuple[Mapping[str, DayStatus], ToggleEffect]:
    """Flip one day between available and blocked.

    The input map is never mutated. Past days and booked days come back
    unchanged with a Rejected effect; otherwise a new map is returned
    together with the Persist effect the caller must forward.
    """
    if is_past(day, today):
        return availability, Rejected(reason=RejectionReason.PAST_DATE)

    current = status_of(availability, day)
    if current is DayStatus.BOOKED:
        return availability, Rejected(reason=RejectionReason.BOOKED)

    new_status = DayStatus.BLOCKED if current is DayStatus.AVAILABLE else DayStatus.AVAILABLE
    key = date_key(day)
    updated = dict(availability)
    updated[key] = new_status
    return updated, Persist(dateKey=key, status=new_status)

class PendingToggle(BaseModel):
    dateKey: str
    status: DayStatus
    previous: Optional[DayStatus] = None  # None when the key was absent
    seq: int = 0

class AvailabilityStore:
    """In-memory availability for one profile, persisted through a ProfileRepository."""

    def __init__(
        self,
        uid: str,
        availability: Optional[Mapping[str, Any]],
        repository,
        access: CalendarAccess = CalendarAccess.READ_ONLY,
        on_failure: Optional[Callable[[str], None]] = None,
    ):
        self.uid = uid
        self.access = access
        self._availability: AvailabilityMap = load_availability(availability)
        self._repository = repository
        self._on_failure = on_failure
        self._detached = False
        self._seq = 0
        self._latest_seq: Dict[str, int] = {}

    @classmethod
    async def load(
        cls,
        repository,
        uid: str,
        viewer_uid: Optional[str] = None,
        on_failure: Optional[Callable[[str], None]] = None,
    ) -> "AvailabilityStore":
        """Fetch a profile and open its calendar for the given viewer.

        Only musician profiles have a calendar, and only the musician who
        owns it gets owner access.
        """
        profile = await repository.fetch_profile(uid)
        if not profile:
            raise ProfileNotFound()
        if profile.get("role") != "musician":
            raise ProfileNotFound(MSG_MUSICIAN_NOT_FOUND)

        is_owner = viewer_uid == uid
        access = CalendarAccess.OWNER if is_owner else CalendarAccess.READ_ONLY
        return cls(uid, profile.get("availability"), repository, access, on_failure)

    @property
    def availability(self) -> AvailabilityMap:
        return dict(self._availability)

    @property
    def read_only(self) -> bool:
        return self.access is not CalendarAccess.OWNER

    @property
    def detached(self) -> bool:
        return self._detached

    def status_of(self, day: date) -> DayStatus:
        return status_of(self._availability, day)

    def begin_toggle(self, day: date, today: date) -> Union[PendingToggle, Rejected]:
        """Apply a toggle in memory and return the pending write, or the rejection."""
        if self.read_only:
            raise AccessDenied()

        key = date_key(day)
        previous = self._availability.get(key)
        updated, effect = toggle(self._availability, day, today)
        if isinstance(effect, Rejected):
            logger.debug(f"Toggle of {key} for {self.uid} rejected: {effect.reason.value}")
            return effect

        self._availability = dict(updated)
        self._seq += 1
        self._latest_seq[key] = self._seq
        return PendingToggle(dateKey=effect.dateKey, status=effect.status, previous=previous, seq=self._seq)

    def commit(self, pending: PendingToggle) -> None:
        logger.debug(f"Availability {pending.dateKey} for {self.uid} confirmed as {pending.status.value}")

    def rollback(self, pending: PendingToggle) -> None:
        """Restore the pre-toggle value of this pending write's day only."""
        if self._latest_seq.get(pending.dateKey) != pending.seq:
            # A later toggle on the same day owns the key now
            return

        updated = dict(self._availability)
        if pending.previous is None:
            updated.pop(pending.dateKey, None)
        else:
            updated[pending.dateKey] = pending.previous
        self._availability = updated
        logger.info(f"Rolled back availability {pending.dateKey} for {self.uid}")

    async def toggle(self, day: date, today: date) -> ToggleOutcome:
        """Toggle a day and reconcile the in-memory map with the repository.

        Raises PersistenceFailure after rolling back when the write is refused.
        Once the store is detached, late outcomes are dropped without rollback
        or notification.
        """
        started = self.begin_toggle(day, today)
        if isinstance(started, Rejected):
            return ToggleOutcome(
                dateKey=date_key(day),
                status=self.status_of(day),
                applied=False,
                rejection=started.reason,
            )

        persisted = await self._repository.persist_availability(self.uid, started.dateKey, started.status)

        if self._detached:
            logger.debug(f"Dropping outcome for {started.dateKey}; calendar for {self.uid} is closed")
            return ToggleOutcome(dateKey=started.dateKey, status=started.status, applied=persisted)

        if not persisted:
            self.rollback(started)
            if self._on_failure:
                self._on_failure(MSG_AVAILABILITY_UPDATE_FAILED)
            raise PersistenceFailure(started.dateKey)

        self.commit(started)
        return ToggleOutcome(dateKey=started.dateKey, status=started.status, applied=True)

    def detach(self) -> None:
        self._detached = True
