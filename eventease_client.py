"""EventEase API client.

This module defines a small client wrapper around the EventEase REST
API together with a command line front‑end.  The client uses the
``requests`` library internally to make HTTP calls and exposes one
method per catalog operation:

* :meth:`EventEaseClient.list_events` – return all events, optionally
  filtered by category.
* :meth:`EventEaseClient.get_event` – fetch a single event by its
  identifier.
* :meth:`EventEaseClient.list_categories` – return the event categories.
* :meth:`EventEaseClient.register_for_event` – register an attendee.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with keys ``status_code`` and ``message``.

Command line usage::

    python eventease_client.py events --category technology
    python eventease_client.py register 1 someone@example.com
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"

Error = Dict[str, Any]


class EventEaseClient:
    """Client for the EventEase API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the versioned API, e.g.
                ``http://localhost:8000/api/v1``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/events/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Event operations
    # ------------------------------------------------------------------
    def list_events(self, category: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve events, optionally only the active ones in ``category``."""
        params = {"category": category} if category is not None else None
        data, error = self._request("GET", "/events/", params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_event(self, event_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single event by ID."""
        return self._request("GET", f"/events/{event_id}")

    def list_categories(self) -> Tuple[List[str], Optional[Error]]:
        """Retrieve the distinct event categories."""
        data, error = self._request("GET", "/events/categories")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def register_for_event(self, event_id: int, attendee_contact: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register ``attendee_contact`` for an event.

        Returns:
            A tuple ``(result, error)``.  ``result`` carries the
            registration status and the updated attendee count.
        """
        return self._request(
            "POST",
            f"/events/{event_id}/registrations",
            json_body={"attendee_contact": attendee_contact},
        )


# ----------------------------------------------------------------------
# Command line interface
# ----------------------------------------------------------------------
def format_event(event: Dict[str, Any]) -> str:
    price = "free" if event.get("is_free") else f"price {event.get('price')}"
    return (
        f"[{event.get('id')}] {event.get('name') or '(untitled)'}\n"
        f"    {event.get('date')} @ {event.get('location') or '-'}\n"
        f"    {event.get('category') or '-'} | {event.get('current_attendees')}/{event.get('max_attendees')} "
        f"attendees ({event['spots_left']} spots left) | {price}"
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="eventease", description="Browse and register for EventEase events.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("EVENTEASE_API_URL", DEFAULT_BASE_URL),
        help="API base URL (default: $EVENTEASE_API_URL or %(default)s)",
    )
    ap.add_argument("--json", action="store_true", help="Print raw JSON instead of formatted text")
    sub = ap.add_subparsers(dest="command", required=True)

    events = sub.add_parser("events", help="List events")
    events.add_argument("--category", help="Only active events in this category")

    show = sub.add_parser("show", help="Show a single event")
    show.add_argument("event_id", type=int)

    sub.add_parser("categories", help="List event categories")

    register = sub.add_parser("register", help="Register for an event")
    register.add_argument("event_id", type=int)
    register.add_argument("contact", help="Attendee contact, e.g. an e-mail address")
    return ap


def main(argv: Optional[List[str]] = None, client: Optional[EventEaseClient] = None) -> int:
    args = build_parser().parse_args(argv)
    client = client or EventEaseClient(base_url=args.base_url)

    if args.command == "events":
        data, error = client.list_events(args.category)
    elif args.command == "show":
        data, error = client.get_event(args.event_id)
    elif args.command == "categories":
        data, error = client.list_categories()
    else:
        data, error = client.register_for_event(args.event_id, args.contact)

    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    elif args.command == "events":
        for event in data:
            print(format_event(event))
    elif args.command == "show":
        print(format_event(data))
        if data.get("description"):
            print(f"    {data['description']}")
    elif args.command == "categories":
        for category in data:
            print(category)
    else:
        print(f"[+] Registered for event {data['event_id']} ({data['current_attendees']} attendees)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
