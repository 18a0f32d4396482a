"""
Business logic for the event catalog.

The ``EventCatalog`` reads event records through an ``EventProvider``
and keeps the most recent listing in a time‑boxed ``EventCache``.  All
queries are served from that listing; registration is the only
operation that changes data, and it invalidates the cache so the next
read reflects the new attendee count.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from eventease_api.app.core.errors import CatalogUnavailableError
from eventease_api.app.schemas.event import EventRead
from eventease_api.app.schemas.registration import RegistrationResult, RegistrationStatus
from eventease_api.app.services.event_cache import EventCache, utcnow
from eventease_api.app.services.event_provider import EventProvider

logger = logging.getLogger(__name__)

DEFAULT_CACHE_LIFETIME = timedelta(minutes=5)


class EventCatalog:
    """Query and registration surface over a set of event records.

    Callers always receive copies of the stored records.  Registrations
    are serialized with a lock so the capacity check and the increment
    cannot interleave with another registration.
    """

    def __init__(
        self,
        provider: EventProvider,
        cache_lifetime: timedelta = DEFAULT_CACHE_LIFETIME,
        registration_delay: float = 0.2,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._provider = provider
        self._cache: EventCache[List[EventRead]] = EventCache(cache_lifetime)
        self._registration_delay = registration_delay
        self._clock = clock
        self._registration_lock = asyncio.Lock()

    @property
    def cache(self) -> EventCache[List[EventRead]]:
        return self._cache

    async def _fetch_events(self) -> List[EventRead]:
        try:
            return await self._provider.load_events()
        except Exception as exc:
            logger.exception("Failed to load events from %s", type(self._provider).__name__)
            raise CatalogUnavailableError("Event data is unavailable") from exc

    async def _load_events(self) -> List[EventRead]:
        now = self._clock()
        cached = self._cache.get(now)
        if cached is not None:
            return cached
        generation = self._cache.generation
        events = await self._fetch_events()
        # A registration invalidated the cache while we were loading; these
        # rows may predate it.
        if self._cache.generation != generation:
            logger.debug("Cache invalidated during load; not caching %d events", len(events))
            return events
        self._cache.set(events, now)
        logger.info("Cached %d events until %s", len(events), self._cache.expires_at)
        return events

    def invalidate_cache(self) -> None:
        self._cache.invalidate()

    async def list_events(self) -> List[EventRead]:
        """Return every event record, including inactive ones.

        Repeated calls inside the cache lifetime are answered from the
        cached listing without querying the provider.
        """
        return [event.model_copy() for event in await self._load_events()]

    async def get_event_by_id(self, event_id: int) -> Optional[EventRead]:
        """Return the active event with ``event_id`` or ``None``."""
        for event in await self._load_events():
            if event.id == event_id and event.is_active:
                return event.model_copy()
        return None

    async def get_events_by_category(self, category: Optional[str]) -> List[EventRead]:
        """Return active events whose category matches ``category``.

        Matching ignores case.  A blank ``category`` is not an error: it
        returns every active event.
        """
        events = [event for event in await self._load_events() if event.is_active]
        if category is None or not category.strip():
            return [event.model_copy() for event in events]
        wanted = category.casefold()
        return [event.model_copy() for event in events if event.category.casefold() == wanted]

    async def list_categories(self) -> List[str]:
        """Return the distinct non‑blank categories in ordinal order."""
        categories = {event.category for event in await self._load_events() if event.category.strip()}
        return sorted(categories)

    async def register_for_event(self, event_id: int, attendee_contact: str) -> RegistrationResult:
        """Register an attendee for an event.

        The request is refused with ``invalid_request`` before any data is
        read if ``event_id`` is not positive or ``attendee_contact`` is
        blank.  Otherwise, after the simulated processing delay, the
        event is read from the provider (not the cache) and must exist and
        be active, have a free spot and start
        strictly after the current time.  On success the attendee count
        is incremented by one, written back through the provider and the
        cache is invalidated.  A refused registration changes nothing.
        """
        if event_id <= 0 or not (attendee_contact or "").strip():
            logger.info("Rejected registration for event %s: invalid request", event_id)
            return RegistrationResult(event_id=event_id, status=RegistrationStatus.INVALID_REQUEST)

        await asyncio.sleep(self._registration_delay)

        async with self._registration_lock:
            # Read past the cache: the written record must start from the
            # stored count, not from a listing cached earlier.
            events = await self._fetch_events()
            event = next((e for e in events if e.id == event_id), None)

            refusal: Optional[RegistrationStatus] = None
            if event is None:
                refusal = RegistrationStatus.NOT_FOUND
            elif not event.is_active:
                refusal = RegistrationStatus.INACTIVE
            elif event.is_full:
                refusal = RegistrationStatus.FULL
            elif event.date <= self._clock():
                refusal = RegistrationStatus.EXPIRED

            if refusal is not None:
                logger.info("Rejected registration for event %s: %s", event_id, refusal.value)
                return RegistrationResult(
                    event_id=event_id,
                    status=refusal,
                    current_attendees=event.current_attendees if event else None,
                )

            updated = event.model_copy(update={"current_attendees": event.current_attendees + 1})
            try:
                await self._provider.save_event(updated)
            except Exception as exc:
                logger.exception("Failed to store registration for event %s", event_id)
                raise CatalogUnavailableError(f"Could not register for event {event_id}") from exc
            self._cache.invalidate()

        logger.info(
            "Registration for event %s accepted (%d/%d)",
            event_id,
            updated.current_attendees,
            updated.max_attendees,
        )
        logger.debug("Registered %s for event %s", attendee_contact, event_id)
        return RegistrationResult(
            event_id=event_id,
            status=RegistrationStatus.REGISTERED,
            current_attendees=updated.current_attendees,
        )
