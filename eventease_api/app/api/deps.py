"""Shared FastAPI dependencies."""

from fastapi import Request

from eventease_api.app.services.event_catalog import EventCatalog


def get_catalog(request: Request) -> EventCatalog:
    """Return the catalog owned by the running application."""
    return request.app.state.catalog
