"""SmallHay API client (async).

Mirrors ``SmallHayClient`` with awaitable operations. Credential refreshes
are serialized with an ``asyncio.Lock`` so concurrent tasks share a single
auth exchange.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Self

import httpx

from . import endpoints
from .client import BaseSmallHayClient
from .core.authenticator import AsyncAuthenticator
from .core.dispatcher import AsyncRequestDispatcher
from .core.http_executor import AsyncHTTPExecutor
from .http import create_async_http_client

if TYPE_CHECKING:
    from .clock import Clock
    from .config import SmallHayConfig
    from .models import CallOutcome, EndpointCall, Verb


class AsyncSmallHayClient(BaseSmallHayClient):
    """Asynchronous SmallHay API client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        test: bool = False,
        *,
        config: SmallHayConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize async client.

        Args:
            client_id: Client id of the SmallHay account.
            client_secret: Client secret of the SmallHay account.
            test: Use the test environment.
            config: Optional configuration.
            http_client: Optional async HTTP client; the caller keeps ownership.
            clock: Optional clock returning epoch seconds.
        """
        super().__init__(client_id, client_secret, test, config=config, clock=clock)
        self._owns_http = http_client is None
        self._http = http_client or create_async_http_client()
        executor = AsyncHTTPExecutor(self._http)
        self._authenticator = AsyncAuthenticator(self._auth_ops, executor)
        self._dispatcher = AsyncRequestDispatcher(
            self.config, self._authenticator, executor, self._store, self._status
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def ensure_valid(self) -> bool:
        """Ensure a usable credential is held; True if authorized."""
        return await self._authenticator.ensure_valid()

    async def send(
        self,
        verb: Verb | str,
        endpoint: str,
        body: Any = None,
    ) -> Any | Literal[False]:
        """Send a call; ``False`` if unauthorized, ``None`` if not JSON."""
        return await self._dispatcher.send(verb, endpoint, body)

    async def dispatch(self, verb: Verb | str, endpoint: str, body: Any = None) -> CallOutcome:
        """Send a call and return its full outcome."""
        return await self._dispatcher.dispatch(verb, endpoint, body)

    async def _call(self, call: EndpointCall) -> Any | Literal[False]:
        return await self._dispatcher.send(call.verb, call.path, call.body)

    # Pages

    async def create_pages(self, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.create_pages(payload))

    async def get_pages(self, offset: int = 0, limit: int = 100) -> Any | Literal[False]:
        return await self._call(endpoints.get_pages(offset, limit))

    async def update_pages(self, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.update_pages(payload))

    async def delete_pages(self, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.delete_pages(payload))

    async def get_page(self, page_id: int | str) -> Any | Literal[False]:
        return await self._call(endpoints.get_page(page_id))

    async def update_page(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.update_page(page_id, payload))

    async def delete_page(self, page_id: int | str) -> Any | Literal[False]:
        return await self._call(endpoints.delete_page(page_id))

    # Page assets

    async def create_page_assets(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.create_page_assets(page_id, payload))

    async def get_page_assets(
        self,
        page_id: int | str,
        asset_type: str = "all",
        offset: int = 0,
        limit: int = 100,
    ) -> Any | Literal[False]:
        return await self._call(endpoints.get_page_assets(page_id, asset_type, offset, limit))

    async def update_page_assets(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.update_page_assets(page_id, payload))

    async def delete_page_assets(self, page_id: int | str, payload: Any) -> Any | Literal[False]:
        return await self._call(endpoints.delete_page_assets(page_id, payload))

    async def get_page_asset(self, page_id: int | str, asset_id: int | str) -> Any | Literal[False]:
        return await self._call(endpoints.get_page_asset(page_id, asset_id))

    async def update_page_asset(
        self,
        page_id: int | str,
        asset_id: int | str,
        payload: Any,
    ) -> Any | Literal[False]:
        return await self._call(endpoints.update_page_asset(page_id, asset_id, payload))

    async def delete_page_asset(
        self,
        page_id: int | str,
        asset_id: int | str,
    ) -> Any | Literal[False]:
        return await self._call(endpoints.delete_page_asset(page_id, asset_id))
