"""Tests for the event catalog queries, cache and registration rules."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
import unittest

from eventease_api.app.core.errors import CatalogUnavailableError
from eventease_api.app.schemas.event import EventRead
from eventease_api.app.schemas.registration import RegistrationStatus
from eventease_api.app.services.event_catalog import EventCatalog
from eventease_api.app.services.event_provider import SampleEventProvider

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
CONTACT = "a@b.com"


class CountingProvider(SampleEventProvider):
    """Sample provider that records how often it is queried."""

    def __init__(self) -> None:
        super().__init__(now=NOW, load_delay=0)
        self.loads = 0

    async def load_events(self) -> list[EventRead]:
        self.loads += 1
        return await super().load_events()


class SnapshotThenWaitProvider(SampleEventProvider):
    """Copies its rows before waiting, like a remote store would.

    The first load blocks until ``release`` is set; later loads return
    immediately.
    """

    def __init__(self) -> None:
        super().__init__(now=NOW, load_delay=0)
        self.release = asyncio.Event()
        self._first_load = True

    async def load_events(self) -> list[EventRead]:
        rows = [event.model_copy() for event in self._events.values()]
        if self._first_load:
            self._first_load = False
            await self.release.wait()
        return rows

    def stored(self, event_id: int) -> EventRead:
        return self._events[event_id]


class FailingProvider(SampleEventProvider):
    def __init__(self, fail_load: bool = True) -> None:
        super().__init__(now=NOW, load_delay=0)
        self.fail_load = fail_load

    async def load_events(self) -> list[EventRead]:
        if self.fail_load:
            raise RuntimeError("backend down")
        return await super().load_events()

    async def save_event(self, event: EventRead) -> None:
        raise RuntimeError("backend read-only")


class CatalogTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.now = NOW
        self.provider = CountingProvider()
        self.catalog = EventCatalog(
            self.provider,
            cache_lifetime=timedelta(minutes=5),
            registration_delay=0,
            clock=lambda: self.now,
        )


class QueryTests(CatalogTestCase):
    """Validate list, lookup, category and category-list queries."""

    async def test_list_events_returns_all_records(self) -> None:
        events = await self.catalog.list_events()
        self.assertEqual([event.id for event in events], [1, 2, 3, 4, 5, 6, 7, 8])

    async def test_get_event_by_id(self) -> None:
        event = await self.catalog.get_event_by_id(1)
        self.assertIsNotNone(event)
        assert event is not None
        self.assertEqual(event.name, "Tech Innovation Summit 2024")
        self.assertEqual(event.current_attendees, 287)

    async def test_get_unknown_event_returns_none(self) -> None:
        self.assertIsNone(await self.catalog.get_event_by_id(999))

    async def test_get_inactive_event_returns_none(self) -> None:
        event = (await self.provider.load_events())[2]
        await self.provider.save_event(event.model_copy(update={"is_active": False}))

        self.assertIsNone(await self.catalog.get_event_by_id(3))

    async def test_events_by_category_ignores_case(self) -> None:
        for category in ("Technology", "technology", "TECHNOLOGY"):
            events = await self.catalog.get_events_by_category(category)
            self.assertEqual([event.id for event in events], [1, 7])
            self.assertTrue(all(event.category.lower() == "technology" for event in events))

    async def test_events_by_category_only_active(self) -> None:
        event = (await self.provider.load_events())[0]
        await self.provider.save_event(event.model_copy(update={"is_active": False}))

        events = await self.catalog.get_events_by_category("Technology")
        self.assertEqual([event.id for event in events], [7])

    async def test_blank_category_returns_all_active_events(self) -> None:
        for category in ("", "   ", None):
            events = await self.catalog.get_events_by_category(category)
            self.assertEqual(len(events), 8)

    async def test_unknown_category_returns_empty_list(self) -> None:
        self.assertEqual(await self.catalog.get_events_by_category("Sports"), [])

    async def test_list_categories_sorted_distinct_non_blank(self) -> None:
        categories = await self.catalog.list_categories()
        self.assertEqual(categories, ["Arts", "Business", "Charity", "Food", "Health", "Technology"])
        self.assertEqual(len(categories), len(set(categories)))

    async def test_list_categories_uses_ordinal_case_sensitive_order(self) -> None:
        event = (await self.provider.load_events())[4]
        await self.provider.save_event(event.model_copy(update={"category": "arts"}))

        categories = await self.catalog.list_categories()
        self.assertEqual(categories, ["Arts", "Business", "Charity", "Food", "Technology", "arts"])

    async def test_callers_receive_copies(self) -> None:
        event = await self.catalog.get_event_by_id(1)
        assert event is not None
        event.current_attendees = 0
        listed = await self.catalog.list_events()
        listed[0].name = "changed"

        again = await self.catalog.get_event_by_id(1)
        assert again is not None
        self.assertEqual(again.current_attendees, 287)
        self.assertEqual(again.name, "Tech Innovation Summit 2024")


class CacheTests(CatalogTestCase):
    """Validate the cache validity window and invalidation."""

    async def test_repeated_reads_within_window_hit_cache(self) -> None:
        await self.catalog.list_events()
        await self.catalog.get_event_by_id(1)
        await self.catalog.list_categories()
        self.now = NOW + timedelta(minutes=4, seconds=59)
        await self.catalog.get_events_by_category("Arts")

        self.assertEqual(self.provider.loads, 1)

    async def test_cache_expires_after_window(self) -> None:
        await self.catalog.list_events()
        self.now = NOW + timedelta(minutes=5)
        await self.catalog.list_events()

        self.assertEqual(self.provider.loads, 2)

    async def test_successful_registration_invalidates_cache(self) -> None:
        await self.catalog.list_events()
        self.assertTrue(await self.catalog.register_for_event(2, CONTACT))
        self.assertFalse(self.catalog.cache.is_valid(self.now))

        events = await self.catalog.list_events()
        self.assertEqual(events[1].current_attendees, 90)
        # listing, registration lookup, listing after invalidation
        self.assertEqual(self.provider.loads, 3)

    async def test_failed_registration_keeps_cache(self) -> None:
        await self.catalog.list_events()
        self.assertFalse(await self.catalog.register_for_event(7, CONTACT))

        self.assertTrue(self.catalog.cache.is_valid(self.now))
        await self.catalog.list_events()
        self.assertEqual(self.provider.loads, 2)

    async def test_registration_reads_stored_count_not_cached_listing(self) -> None:
        await self.catalog.list_events()
        event = (await self.provider.load_events())[0]
        await self.provider.save_event(event.model_copy(update={"current_attendees": 300}))

        result = await self.catalog.register_for_event(1, CONTACT)

        self.assertEqual(result.current_attendees, 301)
        self.assertEqual((await self.provider.load_events())[0].current_attendees, 301)

    async def test_load_overlapping_registration_is_not_cached(self) -> None:
        provider = SnapshotThenWaitProvider()
        catalog = EventCatalog(provider, registration_delay=0, clock=lambda: NOW)

        listing = asyncio.create_task(catalog.list_events())
        await asyncio.sleep(0)  # Let the listing take its snapshot.
        self.assertTrue(await catalog.register_for_event(1, CONTACT))
        after_first = await catalog.get_event_by_id(1)
        self.assertTrue(await catalog.register_for_event(1, CONTACT))

        provider.release.set()
        stale = await listing
        self.assertEqual(stale[0].current_attendees, 287)

        assert after_first is not None
        self.assertEqual(after_first.current_attendees, 288)
        event = await catalog.get_event_by_id(1)
        assert event is not None
        self.assertEqual(event.current_attendees, 289)
        self.assertEqual(provider.stored(1).current_attendees, 289)

    async def test_invalidate_cache_forces_reload(self) -> None:
        await self.catalog.list_events()
        self.catalog.invalidate_cache()
        await self.catalog.list_events()

        self.assertEqual(self.provider.loads, 2)


class RegistrationTests(CatalogTestCase):
    """Validate the registration rules and their outcomes."""

    async def test_successful_registration_increments_by_one(self) -> None:
        result = await self.catalog.register_for_event(1, CONTACT)

        self.assertTrue(result)
        self.assertEqual(result.status, RegistrationStatus.REGISTERED)
        self.assertEqual(result.current_attendees, 288)
        event = await self.catalog.get_event_by_id(1)
        assert event is not None
        self.assertEqual(event.current_attendees, 288)

    async def test_contact_is_logged_only_at_debug(self) -> None:
        with self.assertLogs("eventease_api.app.services.event_catalog", level="DEBUG") as logs:
            self.assertTrue(await self.catalog.register_for_event(1, CONTACT))

        info = [record.getMessage() for record in logs.records if record.levelno >= 20]
        debug = [record.getMessage() for record in logs.records if record.levelno < 20]
        self.assertIn("Registration for event 1 accepted (288/500)", info)
        self.assertFalse(any(CONTACT in message for message in info))
        self.assertTrue(any(CONTACT in message for message in debug))

    async def test_invalid_input_is_rejected_before_reading_data(self) -> None:
        for event_id, contact in ((0, ""), (0, CONTACT), (-3, CONTACT), (1, ""), (1, "   ")):
            result = await self.catalog.register_for_event(event_id, contact)
            self.assertFalse(result)
            self.assertEqual(result.status, RegistrationStatus.INVALID_REQUEST)
            self.assertIsNone(result.current_attendees)

        self.assertEqual(self.provider.loads, 0)

    async def test_past_event_is_refused(self) -> None:
        result = await self.catalog.register_for_event(7, CONTACT)

        self.assertFalse(result)
        self.assertEqual(result.status, RegistrationStatus.EXPIRED)
        self.assertEqual(result.current_attendees, 95)
        events = await self.catalog.list_events()
        self.assertEqual(events[6].current_attendees, 95)

    async def test_event_starting_now_is_refused(self) -> None:
        self.now = NOW + timedelta(days=5)
        result = await self.catalog.register_for_event(3, CONTACT)

        self.assertEqual(result.status, RegistrationStatus.EXPIRED)

    async def test_unknown_event_is_refused(self) -> None:
        result = await self.catalog.register_for_event(999, CONTACT)

        self.assertFalse(result)
        self.assertEqual(result.status, RegistrationStatus.NOT_FOUND)
        self.assertIsNone(result.current_attendees)

    async def test_inactive_event_is_refused(self) -> None:
        event = (await self.provider.load_events())[1]
        await self.provider.save_event(event.model_copy(update={"is_active": False}))

        result = await self.catalog.register_for_event(2, CONTACT)
        self.assertEqual(result.status, RegistrationStatus.INACTIVE)
        self.assertEqual((await self.provider.load_events())[1].current_attendees, 89)

    async def test_full_event_is_refused_and_unchanged(self) -> None:
        for expected in (48, 49, 50):
            result = await self.catalog.register_for_event(6, CONTACT)
            self.assertTrue(result)
            self.assertEqual(result.current_attendees, expected)

        result = await self.catalog.register_for_event(6, CONTACT)
        self.assertFalse(result)
        self.assertEqual(result.status, RegistrationStatus.FULL)
        self.assertEqual(result.current_attendees, 50)

    async def test_malformed_event_is_refused(self) -> None:
        result = await self.catalog.register_for_event(8, CONTACT)

        self.assertFalse(result)
        self.assertEqual(result.status, RegistrationStatus.EXPIRED)

    async def test_concurrent_registrations_respect_capacity(self) -> None:
        results = await asyncio.gather(
            *(self.catalog.register_for_event(6, f"user{i}@example.com") for i in range(6))
        )

        self.assertEqual(sum(1 for result in results if result), 3)
        self.assertEqual(
            sum(1 for result in results if result.status is RegistrationStatus.FULL), 3
        )
        event = await self.catalog.get_event_by_id(6)
        assert event is not None
        self.assertEqual(event.current_attendees, 50)


class ProviderFailureTests(unittest.IsolatedAsyncioTestCase):
    """Validate that provider faults surface as CatalogUnavailableError."""

    async def test_load_failure_is_logged_and_raised(self) -> None:
        catalog = EventCatalog(FailingProvider(), registration_delay=0, clock=lambda: NOW)

        with self.assertLogs("eventease_api.app.services.event_catalog", level="ERROR"):
            with self.assertRaises(CatalogUnavailableError):
                await catalog.list_events()

    async def test_load_failure_is_not_cached(self) -> None:
        provider = FailingProvider()
        catalog = EventCatalog(provider, registration_delay=0, clock=lambda: NOW)
        with self.assertLogs("eventease_api.app.services.event_catalog", level="ERROR"):
            with self.assertRaises(CatalogUnavailableError):
                await catalog.get_event_by_id(1)

        provider.fail_load = False
        self.assertIsNotNone(await catalog.get_event_by_id(1))

    async def test_save_failure_leaves_data_unchanged(self) -> None:
        catalog = EventCatalog(FailingProvider(fail_load=False), registration_delay=0, clock=lambda: NOW)

        with self.assertLogs("eventease_api.app.services.event_catalog", level="ERROR"):
            with self.assertRaises(CatalogUnavailableError):
                await catalog.register_for_event(1, CONTACT)

        event = await catalog.get_event_by_id(1)
        assert event is not None
        self.assertEqual(event.current_attendees, 287)


if __name__ == "__main__":
    unittest.main()
