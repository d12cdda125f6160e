"""Observable per-client call state."""

from __future__ import annotations

import threading


class StatusTracker:
    """Tracks the last HTTP status and the number of auth exchanges."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_status_code: int | None = None
        self._auth_exchange_count = 0

    @property
    def last_status_code(self) -> int | None:
        """Status of the most recent network call, None before any call."""
        return self._last_status_code

    @property
    def auth_exchange_count(self) -> int:
        """Number of auth exchanges performed so far."""
        return self._auth_exchange_count

    def record(self, status_code: int) -> None:
        """Record the status of a resource call."""
        with self._lock:
            self._last_status_code = status_code

    def record_auth_exchange(self, status_code: int) -> None:
        """Record the status of an auth exchange."""
        with self._lock:
            self._last_status_code = status_code
            self._auth_exchange_count += 1
