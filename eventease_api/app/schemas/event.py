"""
Pydantic models for event data.

``EventBase`` holds the descriptive fields of an event; ``EventRead``
adds the identifier and is the record type stored by the catalog and
returned to callers.  The models do not reject negative counts or
prices: stored rows are tolerated as they are and the registration
rules in ``EventCatalog`` guard the capacity invariant instead.

``spots_left``, ``is_full`` and ``is_free`` are derived from the stored
fields and included in serialized output.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, computed_field

DEFAULT_IMAGE_URL = "/images/default-event.jpg"


class EventBase(BaseModel):
    name: str = Field("", examples=["Tech Innovation Summit 2024"])
    description: str = Field("", examples=["A day of technology talks and workshops"])
    date: datetime = Field(..., examples=["2025-09-01T10:00:00Z"])
    location: str = Field("", examples=["San Francisco Convention Center, CA"])
    category: str = Field("", examples=["Technology"])
    max_attendees: int = Field(0, examples=[500])
    current_attendees: int = Field(0, examples=[287])
    # Ticket price; zero for free events.
    price: Decimal = Field(Decimal("0"), examples=["299.99"])
    image_url: str = Field(DEFAULT_IMAGE_URL, examples=["/images/tech-summit.jpg"])
    # Whether the event is listed and accepting registrations.
    is_active: bool = True

    @computed_field
    @property
    def spots_left(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)

    @computed_field
    @property
    def is_full(self) -> bool:
        return self.current_attendees >= self.max_attendees

    @computed_field
    @property
    def is_free(self) -> bool:
        return self.price == 0


class EventRead(EventBase):
    """Schema for an event record as stored and returned by the catalog."""

    id: int

    model_config = {
        "from_attributes": True,
    }
