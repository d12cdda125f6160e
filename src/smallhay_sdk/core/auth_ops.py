"""Auth exchange logic shared by the sync and async authenticators."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ..http import build_timeout
from ..models import AuthResponse, Credential
from ..telemetry import get_logger

if TYPE_CHECKING:
    from ..clock import Clock
    from ..config import ClientIdentity, SmallHayConfig
    from .http_executor import RawResponse
    from .status import StatusTracker
    from .store import CredentialStore


class AuthOperations:
    """Builds the auth exchange and applies its result to the store.

    This class holds everything about authentication that does not depend
    on whether the transport is synchronous or asynchronous.
    """

    def __init__(
        self,
        config: SmallHayConfig,
        identity: ClientIdentity,
        store: CredentialStore,
        status: StatusTracker,
        clock: Clock,
    ) -> None:
        self.config = config
        self.identity = identity
        self.store = store
        self.status = status
        self.clock = clock
        self._logger = get_logger()

    def has_valid_credential(self) -> bool:
        """Check whether the store holds a usable credential right now."""
        return self.store.is_valid(self.clock())

    def build_auth_request(self) -> dict[str, Any]:
        """Build keyword arguments for the ``POST /auth`` exchange.

        Returns:
            Request arguments for ``httpx.Client.request``.
        """
        return {
            "method": "POST",
            "url": self.config.auth_endpoint,
            "headers": {
                "Authorization": f"Basic {self.identity.basic_credential()}",
                "Content-Type": "application/json",
                "Content-Length": "0",
            },
            "timeout": build_timeout(self.config.connect_timeout, self.config.timeout),
        }

    def process_auth_response(self, raw: RawResponse) -> bool:
        """Record the exchange and store the new credential on success.

        Args:
            raw: Result of the auth exchange.

        Returns:
            True if a usable credential is now held.
        """
        self.status.record_auth_exchange(raw.status_code)
        now = self.clock()

        if raw.status_code != 200:
            self._logger.warning(
                "Authentication rejected",
                status_code=raw.status_code,
                client_id=self.identity.client_id,
            )
            return self.store.is_valid(now)

        response = self._parse(raw.content)
        if response is None:
            return self.store.is_valid(now)

        # expires <= created is already expired, whatever the local clock says
        if response.lifetime <= 0:
            self._logger.warning(
                "Authentication returned an expired credential",
                client_id=self.identity.client_id,
                lifetime=response.lifetime,
            )
            return False

        self.store.set(Credential.from_response(response, now=now))
        return self.store.is_valid(now)

    def _parse(self, content: bytes) -> AuthResponse | None:
        try:
            return AuthResponse.model_validate(json.loads(content))
        except (ValueError, ValidationError) as e:
            self._logger.warning("Malformed auth response", error=str(e))
            return None
