"""
Record providers for the event catalog.

``EventProvider`` is the interface the catalog reads and writes event
records through.  ``SampleEventProvider`` serves a fixed set of
demonstration events held in memory; replace it with a provider backed
by a database or a remote API for production use.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from eventease_api.app.core.errors import EventNotFoundError
from eventease_api.app.schemas.event import EventRead
from eventease_api.app.services.event_cache import utcnow

logger = logging.getLogger(__name__)


class EventProvider(ABC):
    """Interface for event record storage."""

    @abstractmethod
    async def load_events(self) -> List[EventRead]:
        """Return every stored event, ordered by ``id``."""
        ...

    @abstractmethod
    async def save_event(self, event: EventRead) -> None:
        """Replace the stored record with the same ``id``.

        Raises ``EventNotFoundError`` if no such record exists.
        """
        ...


class SampleEventProvider(EventProvider):
    """In‑memory provider seeded with sample events.

    Event dates are computed relative to ``now`` (the construction time
    by default), so the upcoming events stay in the future and the
    expired one stays in the past.  The seed set deliberately contains
    an expired event (id 7) and a malformed row (id 8) for exercising
    the catalog's refusal paths.

    Every load waits ``load_delay`` seconds to emulate a network round
    trip.
    """

    def __init__(self, now: Optional[datetime] = None, load_delay: float = 0.1) -> None:
        self.load_delay = load_delay
        self._events: Dict[int, EventRead] = {
            event.id: event for event in build_sample_events(now or utcnow())
        }

    async def load_events(self) -> List[EventRead]:
        if self.load_delay > 0:
            await asyncio.sleep(self.load_delay)
        logger.debug("Serving %d sample events", len(self._events))
        return [event.model_copy() for event in self._events.values()]

    async def save_event(self, event: EventRead) -> None:
        if event.id not in self._events:
            raise EventNotFoundError(event.id)
        self._events[event.id] = event.model_copy()


def build_sample_events(now: datetime) -> List[EventRead]:
    """Return the demonstration events, dated relative to ``now``."""
    return [
        EventRead(
            id=1,
            name="Tech Innovation Summit 2024",
            description=(
                "Join industry leaders and innovators for a day of cutting-edge technology "
                "discussions, networking, and hands-on workshops. Explore the latest trends "
                "in AI, cloud computing, and digital transformation."
            ),
            date=now + timedelta(days=15),
            location="San Francisco Convention Center, CA",
            category="Technology",
            max_attendees=500,
            current_attendees=287,
            price=Decimal("299.99"),
            image_url="/images/tech-summit.jpg",
        ),
        EventRead(
            id=2,
            name="Business Leadership Workshop",
            description=(
                "Develop your leadership skills with renowned business coaches and successful "
                "entrepreneurs. Learn practical strategies for team management, decision-making, "
                "and organizational growth."
            ),
            date=now + timedelta(days=8),
            location="New York Business Center, NY",
            category="Business",
            max_attendees=150,
            current_attendees=89,
            price=Decimal("175.00"),
            image_url="/images/business-workshop.jpg",
        ),
        EventRead(
            id=3,
            name="Contemporary Art Exhibition Opening",
            description=(
                "Experience an exclusive preview of groundbreaking contemporary art from emerging "
                "and established artists. Enjoy wine, networking, and inspiring conversations "
                "about modern artistic expression."
            ),
            date=now + timedelta(days=5),
            location="Modern Art Gallery, Los Angeles, CA",
            category="Arts",
            max_attendees=200,
            current_attendees=156,
            price=Decimal("45.00"),
            image_url="/images/art-exhibition.jpg",
        ),
        EventRead(
            id=4,
            name="Annual Charity Gala for Education",
            description=(
                "Support local education initiatives at our elegant charity gala. Enjoy fine "
                "dining, live entertainment, and silent auctions while making a difference in "
                "children's lives."
            ),
            date=now + timedelta(days=30),
            location="Grand Ballroom, Chicago, IL",
            category="Charity",
            max_attendees=300,
            current_attendees=198,
            price=Decimal("125.00"),
            image_url="/images/charity-gala.jpg",
        ),
        EventRead(
            id=5,
            name="Fitness and Wellness Expo",
            description=(
                "Discover the latest in fitness equipment, healthy nutrition, and wellness "
                "practices. Participate in group fitness classes, health screenings, and meet "
                "wellness experts."
            ),
            date=now + timedelta(days=12),
            location="Sports Complex, Austin, TX",
            category="Health",
            max_attendees=400,
            current_attendees=145,
            price=Decimal("35.00"),
            image_url="/images/fitness-expo.jpg",
        ),
        EventRead(
            id=6,
            name="Culinary Masterclass Series",
            description=(
                "Learn from world-renowned chefs in this intensive culinary workshop. Master "
                "advanced cooking techniques, plating presentations, and create "
                "restaurant-quality dishes."
            ),
            date=now + timedelta(days=20),
            location="Culinary Institute, Seattle, WA",
            category="Food",
            max_attendees=50,
            current_attendees=47,
            price=Decimal("225.00"),
            image_url="/images/culinary-class.jpg",
        ),
        EventRead(
            id=7,
            name="Past Conference (Expired)",
            description="This event has already occurred and is used for testing expired event handling.",
            date=now - timedelta(days=5),
            location="Test Location",
            category="Technology",
            max_attendees=100,
            current_attendees=95,
            price=Decimal("50.00"),
            image_url="/images/test.jpg",
        ),
        # Malformed row: blank text, earliest possible date, negative
        # counts and price.
        EventRead(
            id=8,
            name="",
            description="",
            date=datetime.min.replace(tzinfo=timezone.utc),
            location="",
            category="",
            max_attendees=0,
            current_attendees=-5,
            price=Decimal("-100.00"),
            image_url="",
        ),
    ]
