"""SmallHay API client (sync).

Authorization is handled automatically: the client obtains a credential on
first use, reuses it while valid and refreshes it once it expires.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Self

import httpx
from pydantic import ValidationError

from . import endpoints
from .clock import Clock, default_clock
from .config import ClientIdentity, Environment, SmallHayConfig
from .core.auth_ops import AuthOperations
from .core.authenticator import Authenticator
from .core.dispatcher import RequestDispatcher
from .core.http_executor import SyncHTTPExecutor
from .core.status import StatusTracker
from .core.store import CredentialStore
from .errors import InvalidConfigError
from .http import create_http_client
from .telemetry import configure_telemetry

if TYPE_CHECKING:
    from .models import CallOutcome, EndpointCall, Verb


class BaseSmallHayClient:
    """State and configuration surface shared by the sync and async clients."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        test: bool = False,
        *,
        config: SmallHayConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize client state.

        Args:
            client_id: Client id of the SmallHay account.
            client_secret: Client secret of the SmallHay account.
            test: Use the test environment.
            config: Optional configuration; copied, never shared. Its
                telemetry settings are applied to the SDK logger and tracer.
            clock: Optional clock returning epoch seconds.
        """
        self.config = (config or SmallHayConfig()).model_copy(deep=True)
        if test:
            self.config.environment = Environment.TEST
        if config is not None:
            configure_telemetry(self.config.telemetry)

        self.identity = ClientIdentity(client_id=client_id, client_secret=client_secret)
        self._clock = clock or default_clock
        self._store = CredentialStore()
        self._status = StatusTracker()
        self._auth_ops = AuthOperations(
            self.config, self.identity, self._store, self._status, self._clock
        )

    @property
    def client_id(self) -> str:
        return self.identity.client_id

    @property
    def client_secret(self) -> str:
        return self.identity.client_secret.get_secret_value()

    @property
    def test(self) -> bool:
        """Whether the client targets the test environment."""
        return self.config.is_test

    @property
    def environment(self) -> Environment:
        return self.config.environment

    @property
    def connect_timeout(self) -> float:
        """Connect timeout in seconds."""
        return self.config.connect_timeout

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self.config.timeout

    def set_connect_timeout(self, seconds: float) -> None:
        """Set the connect timeout, applied from the next call on."""
        self._set_config("connect_timeout", seconds)

    def set_timeout(self, seconds: float) -> None:
        """Set the request timeout, applied from the next call on."""
        self._set_config("timeout", seconds)

    def _set_config(self, field: str, value: Any) -> None:
        try:
            setattr(self.config, field, value)
        except ValidationError as e:
            msg = f"Invalid {field}: {value!r}"
            raise InvalidConfigError(msg, field=field) from e

    @property
    def last_status_code(self) -> int | None:
        """HTTP status of the most recent call, ``0`` after a transport failure."""
        return self._status.last_status_code

    @property
    def auth_exchange_count(self) -> int:
        """Number of auth exchanges performed by this client."""
        return self._status.auth_exchange_count

    @property
    def access_token(self) -> str | None:
        """Current access token, None before the first successful exchange."""
        return self._store.token

    @property
    def access_token_expires(self) -> float:
        """Expiry of the current token in epoch seconds, ``0`` when unset."""
        return self._store.expires_at


class SmallHayClient(BaseSmallHayClient):
    """Synchronous SmallHay API client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        test: bool = False,
        *,
        config: SmallHayConfig | None = None,
        http_client: httpx.Client | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize sync client.

        Args:
            client_id: Client id of the SmallHay account.
            client_secret: Client secret of the SmallHay account.
            test: Use the test environment.
            config: Optional configuration.
            http_client: Optional HTTP client; the caller keeps ownership.
            clock: Optional clock returning epoch seconds.
        """
        super().__init__(client_id, client_secret, test, config=config, clock=clock)
        self._owns_http = http_client is None
        self._http = http_client or create_http_client()
        executor = SyncHTTPExecutor(self._http)
        self._authenticator = Authenticator(self._auth_ops, executor)
        self._dispatcher = RequestDispatcher(
            self.config, self._authenticator, executor, self._store, self._status
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            self._http.close()

    def ensure_valid(self) -> bool:
        """Ensure a usable credential is held; True if authorized."""
        return self._authenticator.ensure_valid()

    def send(self, verb: Verb | str, endpoint: str, body: Any = None) -> Any | Literal[False]:
        """Send a call to an endpoint path relative to the base URL.

        Returns:
            ``False`` if unauthorized, ``None`` if the response was not JSON,
            otherwise the decoded response (which may be an error envelope;
            check ``last_status_code``).
        """
        return self._dispatcher.send(verb, endpoint, body)

    def dispatch(self, verb: Verb | str, endpoint: str, body: Any = None) -> CallOutcome:
        """Send a call and return its full outcome."""
        return self._dispatcher.dispatch(verb, endpoint, body)

    def _call(self, call: EndpointCall) -> Any | Literal[False]:
        return self._dispatcher.send(call.verb, call.path, call.body)

    # Pages

    def create_pages(self, payload: Any) -> Any | Literal[False]:
        """Create one or more pages."""
        return self._call(endpoints.create_pages(payload))

    def get_pages(self, offset: int = 0, limit: int = 100) -> Any | Literal[False]:
        """List pages."""
        return self._call(endpoints.get_pages(offset, limit))

    def update_pages(self, payload: Any) -> Any | Literal[False]:
        """Update one or more pages."""
        return self._call(endpoints.update_pages(payload))

    def delete_pages(self, payload: Any) -> Any | Literal[False]:
        """Delete one or more pages."""
        return self._call(endpoints.delete_pages(payload))

    def get_page(self, page_id: int | str) -> Any | Literal[False]:
        return self._call(endpoints.get_page(page_id))

    def update_page(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return self._call(endpoints.update_page(page_id, payload))

    def delete_page(self, page_id: int | str) -> Any | Literal[False]:
        return self._call(endpoints.delete_page(page_id))

    # Page assets

    def create_page_assets(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        """Create one or more page assets."""
        return self._call(endpoints.create_page_assets(page_id, payload))

    def get_page_assets(
        self,
        page_id: int | str,
        asset_type: str = "all",
        offset: int = 0,
        limit: int = 100,
    ) -> Any | Literal[False]:
        """List page assets, optionally filtered by asset type."""
        return self._call(endpoints.get_page_assets(page_id, asset_type, offset, limit))

    def update_page_assets(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return self._call(endpoints.update_page_assets(page_id, payload))

    def delete_page_assets(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return self._call(endpoints.delete_page_assets(page_id, payload))

    def get_page_asset(self, page_id: int | str, asset_id: int | str) -> Any | Literal[False]:
        return self._call(endpoints.get_page_asset(page_id, asset_id))

    def update_page_asset(
        self,
        page_id: int | str,
        asset_id: int | str,
        payload: Any,
    ) -> Any | Literal[False]:
        return self._call(endpoints.update_page_asset(page_id, asset_id, payload))

    def delete_page_asset(self, page_id: int | str, asset_id: int | str) -> Any | Literal[False]:
        return self._call(endpoints.delete_page_asset(page_id, asset_id))
