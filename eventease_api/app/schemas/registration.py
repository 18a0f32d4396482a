"""
Pydantic models for event registrations.

A registration attempt always produces a ``RegistrationResult``.  The
``status`` field tells the caller why an attempt was refused; the
result is truthy only for a successful registration so it can stand
in wherever a plain success flag is expected.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RegistrationStatus(str, Enum):
    REGISTERED = "registered"
    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    FULL = "full"
    EXPIRED = "expired"


class RegistrationCreate(BaseModel):
    """Schema for registering an attendee.

    ``attendee_contact`` is usually an e‑mail address.  Blank values are
    accepted here and refused by the catalog, so every caller gets the
    same ``invalid_request`` outcome.
    """

    attendee_contact: str = Field(..., examples=["attendee@example.com"])


class RegistrationResult(BaseModel):
    event_id: int
    status: RegistrationStatus
    # Attendee count after the attempt; ``None`` when the event is unknown
    # or the request was rejected before the lookup.
    current_attendees: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status is RegistrationStatus.REGISTERED

    def __bool__(self) -> bool:
        return self.succeeded
