"""Credential store owned by a single client instance."""

from __future__ import annotations

import threading

from ..models import Credential


class CredentialStore:
    """Thread-safe holder of the current access credential."""

    def __init__(self, credential: Credential | None = None) -> None:
        self._credential = credential
        self._lock = threading.RLock()

    def get(self) -> Credential | None:
        """Get the current credential, if any."""
        with self._lock:
            return self._credential

    def set(self, credential: Credential) -> None:
        """Replace the current credential."""
        with self._lock:
            self._credential = credential

    def clear(self) -> None:
        """Forget the current credential."""
        with self._lock:
            self._credential = None

    def is_valid(self, now: float) -> bool:
        """Check that a credential is present and not expired at ``now``."""
        with self._lock:
            return self._credential is not None and self._credential.is_valid(now)

    @property
    def token(self) -> str | None:
        """Get the current token, if any."""
        credential = self.get()
        return credential.token if credential else None

    @property
    def expires_at(self) -> float:
        """Get the expiry instant, ``0`` when no credential is held."""
        credential = self.get()
        return credential.expires_at if credential else 0
