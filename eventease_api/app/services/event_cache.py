"""Time‑boxed cache slot used by the event catalog."""

from datetime import datetime, timedelta, timezone
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class EventCache(Generic[T]):
    """A single cached value with an expiry timestamp.

    The cache never reads the clock itself; callers pass ``now`` so the
    catalog's injected clock governs expiry.

    ``generation`` increases on every ``invalidate``.  A caller that
    loads a value asynchronously records the generation before the load
    and stores the result only if it is unchanged afterwards, so data
    read before an invalidation is never cached after it.
    """

    def __init__(self, lifetime: timedelta) -> None:
        self.lifetime = lifetime
        self._value: Optional[T] = None
        self._expires_at: Optional[datetime] = None
        self._generation = 0

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    @property
    def generation(self) -> int:
        return self._generation

    def is_valid(self, now: datetime) -> bool:
        return self._value is not None and self._expires_at is not None and now < self._expires_at

    def get(self, now: datetime) -> Optional[T]:
        """Return the cached value, or ``None`` if it is missing or expired."""
        if not self.is_valid(now):
            return None
        return self._value

    def set(self, value: T, now: datetime) -> None:
        self._value = value
        self._expires_at = now + self.lifetime

    def invalidate(self) -> None:
        self._value = None
        self._expires_at = None
        self._generation += 1
