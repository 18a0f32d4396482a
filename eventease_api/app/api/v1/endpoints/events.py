"""
Event endpoints for API v1.

These routes expose the read queries of the ``EventCatalog`` and the
registration operation.  Refused registrations are reported with an
HTTP error whose status code reflects the refusal reason; a provider
failure is reported as 503.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from eventease_api.app.api.deps import get_catalog
from eventease_api.app.core.errors import CatalogUnavailableError
from eventease_api.app.schemas.event import EventRead
from eventease_api.app.schemas.registration import (
    RegistrationCreate,
    RegistrationResult,
    RegistrationStatus,
)
from eventease_api.app.services.event_catalog import EventCatalog


router = APIRouter()

_REFUSAL_STATUS_CODES = {
    RegistrationStatus.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    RegistrationStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RegistrationStatus.INACTIVE: status.HTTP_409_CONFLICT,
    RegistrationStatus.FULL: status.HTTP_409_CONFLICT,
    RegistrationStatus.EXPIRED: status.HTTP_409_CONFLICT,
}

_REFUSAL_MESSAGES = {
    RegistrationStatus.INVALID_REQUEST: "A positive event id and a non-blank attendee contact are required",
    RegistrationStatus.NOT_FOUND: "Event {event_id} not found",
    RegistrationStatus.INACTIVE: "Event {event_id} is not accepting registrations",
    RegistrationStatus.FULL: "Event {event_id} is full",
    RegistrationStatus.EXPIRED: "Event {event_id} has already taken place",
}


def _unavailable(exc: CatalogUnavailableError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.get("/", response_model=List[EventRead])
async def list_events(
    category: Optional[str] = Query(None, description="Case-insensitive category filter"),
    catalog: EventCatalog = Depends(get_catalog),
) -> List[EventRead]:
    """List events.

    Without ``category`` every event is returned.  With ``category``,
    only active events in that category are returned; a blank value
    returns all active events.
    """
    try:
        if category is None:
            return await catalog.list_events()
        return await catalog.get_events_by_category(category)
    except CatalogUnavailableError as e:
        raise _unavailable(e) from e


@router.get("/categories", response_model=List[str])
async def list_categories(catalog: EventCatalog = Depends(get_catalog)) -> List[str]:
    """Return the distinct event categories in ascending order."""
    try:
        return await catalog.list_categories()
    except CatalogUnavailableError as e:
        raise _unavailable(e) from e


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: int, catalog: EventCatalog = Depends(get_catalog)) -> EventRead:
    """Retrieve a single active event by its ID.

    Raises 404 if the event does not exist or is inactive.
    """
    try:
        event = await catalog.get_event_by_id(event_id)
    except CatalogUnavailableError as e:
        raise _unavailable(e) from e
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Event {event_id} not found")
    return event


@router.post(
    "/{event_id}/registrations",
    response_model=RegistrationResult,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_event(
    event_id: int,
    registration: RegistrationCreate,
    catalog: EventCatalog = Depends(get_catalog),
) -> RegistrationResult:
    """Register an attendee for an event.

    Returns the updated attendee count on success.  Invalid input is
    answered with 400, an unknown event with 404 and an inactive, full
    or past event with 409.
    """
    try:
        result = await catalog.register_for_event(event_id, registration.attendee_contact)
    except CatalogUnavailableError as e:
        raise _unavailable(e) from e
    if not result:
        raise HTTPException(
            status_code=_REFUSAL_STATUS_CODES[result.status],
            detail=_REFUSAL_MESSAGES[result.status].format(event_id=event_id),
        )
    return result
