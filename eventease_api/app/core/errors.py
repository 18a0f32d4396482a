"""Exception hierarchy for the event catalog."""


class CatalogError(RuntimeError):
    """Base class for catalog errors."""


class EventNotFoundError(CatalogError, LookupError):
    """Raised by a record provider asked to update an unknown event."""

    def __init__(self, event_id: int) -> None:
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class CatalogUnavailableError(CatalogError):
    """Raised when the record provider fails to load or store events."""
