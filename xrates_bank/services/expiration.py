"""Time-to-live expiration state for cached rates."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import datetime

from xrates_bank.utils.datetime import ensure_utc, seconds_from, utc_now

Clock = Callable[[], datetime]


class ExpirationPolicy:
    """TTL plus the instant at which cached rates expire.

    A policy may be shared by several banks; resetting it after one bank
    flushes moves the deadline for all of them. A TTL of ``None`` disables
    expiration entirely.
    """

    def __init__(self, ttl_seconds: float | None = None, *, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._ttl_seconds: float | None = None
        self._expires_at: datetime | None = None
        self.set_ttl(ttl_seconds)

    @property
    def ttl_seconds(self) -> float | None:
        return self._ttl_seconds

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    @property
    def enabled(self) -> bool:
        return self._ttl_seconds is not None

    def now(self) -> datetime:
        return ensure_utc(self._clock())

    def set_ttl(self, ttl_seconds: float | None) -> datetime | None:
        """Set the TTL and restart the expiration window from now.

        Raises:
            ValueError: If the TTL is negative or not finite.
        """

        if ttl_seconds is not None and not math.isfinite(ttl_seconds):
            raise ValueError("TTL must be a finite number of seconds.")
        if ttl_seconds is not None and ttl_seconds < 0:
            raise ValueError("TTL must be zero or a positive number of seconds.")

        self._ttl_seconds = ttl_seconds
        if ttl_seconds is None:
            self._expires_at = None
            return None
        return self.refresh()

    def refresh(self) -> datetime:
        """Recompute the expiration instant as now + TTL."""

        if self._ttl_seconds is None:
            raise RuntimeError("Cannot refresh expiration while the TTL is disabled.")
        self._expires_at = seconds_from(self.now(), self._ttl_seconds)
        return self._expires_at

    def is_expired(self, now: datetime | None = None) -> bool:
        if self._ttl_seconds is None or self._expires_at is None:
            return False
        current = ensure_utc(now) if now is not None else self.now()
        return current >= self._expires_at
