"""
Main entrypoint for the EventEase API.

This module assembles the FastAPI application, sets up logging, builds
the event catalog and includes versioned routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn eventease_api.app.main:app --reload
"""

from datetime import timedelta
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .services.event_catalog import EventCatalog
from .services.event_provider import EventProvider, SampleEventProvider


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[EventProvider] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the environment‑derived defaults.
    provider : Optional[EventProvider]
        Record provider for the catalog.  Defaults to the in‑memory
        sample events.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  Its catalog is
        available as ``app.state.catalog``.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    if provider is None:
        provider = SampleEventProvider(load_delay=settings.load_delay_ms / 1000)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.catalog = EventCatalog(
        provider,
        cache_lifetime=timedelta(seconds=settings.cache_lifetime_seconds),
        registration_delay=settings.registration_delay_ms / 1000,
    )

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
