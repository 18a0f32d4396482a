"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service runs out of the box against the built‑in sample events.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "EventEase API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # How long a computed event listing is served from the catalog cache
    # before the record provider is queried again.
    cache_lifetime_seconds: int = int(os.getenv("CACHE_LIFETIME_SECONDS", "300"))

    # Simulated latencies, in milliseconds.  ``load_delay_ms`` is applied
    # by the sample provider on every load; ``registration_delay_ms`` by
    # the catalog before it processes a valid registration.
    load_delay_ms: int = int(os.getenv("LOAD_DELAY_MS", "100"))
    registration_delay_ms: int = int(os.getenv("REGISTRATION_DELAY_MS", "200"))

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
