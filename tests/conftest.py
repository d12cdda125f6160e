"""
Shared test fixtures for SmallHay SDK tests.

Provides an in-memory SmallHay API mounted with ``respx``, a controllable
clock, and client fixtures wired to both.
"""

from __future__ import annotations

import base64
import itertools
import json
import threading
import time
from typing import Any, Callable, Iterator

import httpx
import pytest
import respx

from smallhay_sdk import AsyncSmallHayClient, SmallHayClient, SmallHayConfig
from smallhay_sdk.config import TEST_BASE_URL, TelemetryConfig

START_TIME = 1_700_000_000.0
SERVER_TIME = 1_600_000_000
TOKEN_LIFETIME = 3600


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def error_envelope(code: str, title: str, status: int) -> httpx.Response:
    return httpx.Response(
        status,
        json={
            "error_code": code,
            "error_title": title,
            "error_message": f"{title}.",
            "error_ref": f"ref-{code}",
            "documentation": "https://api.smallhay.com/v1/",
        },
    )


def mount_fake_api(fake_api: FakeSmallHayAPI) -> respx.MockRouter:
    """Mock transport-level calls to the test environment with the fake API."""
    router = respx.mock(base_url=TEST_BASE_URL, assert_all_called=False, using="httpx")
    router.route().mock(side_effect=fake_api)
    return router


class FakeSmallHayAPI:
    """In-memory stand-in for the SmallHay API.

    Counts auth exchanges and resource calls separately so tests can assert
    on network behaviour.
    """

    def __init__(
        self,
        client_id: str = "demo",
        client_secret: str = "demo",
        *,
        lifetime: int = TOKEN_LIFETIME,
        auth_delay: float = 0.0,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.lifetime = lifetime
        self.auth_delay = auth_delay
        self.auth_body: Callable[[], Any] | None = None
        self.resource_handler: Callable[[httpx.Request], httpx.Response] | None = None

        self.auth_calls = 0
        self.resource_calls = 0
        self.requests: list[httpx.Request] = []
        self.tokens: set[str] = set()
        self.pages: dict[str, dict[str, Any]] = {}
        self.assets: dict[str, dict[str, dict[str, Any]]] = {}

        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    # Transport entry point

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1").strip("/")

        if path == "auth":
            return self._auth(request)

        with self._lock:
            self.resource_calls += 1

        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        if token not in self.tokens:
            return error_envelope("SH-v1-003", "Unauthorized", 401)

        if self.resource_handler is not None:
            return self.resource_handler(request)

        return self._route(request, path.split("/"))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    # Auth

    def _auth(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.auth_calls += 1
            count = self.auth_calls
        if self.auth_delay:
            time.sleep(self.auth_delay)

        expected = base64.b64encode(
            f"{self.client_id}:{self.client_secret}".encode()
        ).decode()
        if request.headers.get("Authorization") != f"Basic {expected}":
            return error_envelope("SH-v1-001", "Invalid client credentials", 401)

        if self.auth_body is not None:
            body = self.auth_body()
            if isinstance(body, (str, bytes)):
                return httpx.Response(200, content=body)
            return httpx.Response(200, json=body)

        token = f"token-{count}"
        self.tokens.add(token)
        return httpx.Response(
            200,
            json={
                "access_token": token,
                "created": SERVER_TIME,
                "expires": SERVER_TIME + self.lifetime,
            },
        )

    # Resources

    def _route(self, request: httpx.Request, parts: list[str]) -> httpx.Response:
        method = request.method
        if parts == ["pages"]:
            return self._pages(request, method)

        page_id = parts[1]
        if page_id not in self.pages:
            return error_envelope("SH-v1-011", "Not found", 404)

        if len(parts) == 2:
            return self._page(request, method, page_id)
        if len(parts) == 3:
            return self._assets(request, method, page_id)
        return self._asset(request, method, page_id, parts[3])

    def _body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)

    def _pages(self, request: httpx.Request, method: str) -> httpx.Response:
        if method == "GET":
            offset = int(request.url.params.get("offset", 0))
            limit = int(request.url.params.get("limit", 100))
            page_ids = list(self.pages)[offset : offset + limit]
            base = f"{TEST_BASE_URL}/pages"
            return httpx.Response(
                200,
                json={
                    "pages": {pid: self.pages[pid] for pid in page_ids},
                    "links": {
                        "previous": f"{base}?offset={max(offset - limit, 0)}&limit={limit}",
                        "current": f"{base}?offset={offset}&limit={limit}",
                        "next": f"{base}?offset={offset + limit}&limit={limit}",
                    },
                },
            )

        try:
            payload = self._body(request)
        except ValueError:
            return error_envelope("SH-v1-008", "Invalid JSON", 500)

        if method == "POST":
            if not payload or not all(
                isinstance(p, str) and p.startswith("/") for p in payload
            ):
                return error_envelope("SH-v1-009", "Invalid data", 500)
            created = {}
            for page_path in payload:
                page_id = str(next(self._ids))
                self.pages[page_id] = {
                    "id": int(page_id),
                    "path": page_path,
                    "created": SERVER_TIME,
                }
                created[page_id] = self.pages[page_id]
            return httpx.Response(200, json={"pages": created})

        if method == "PUT":
            updated = {}
            for page_id, page in payload.get("pages", {}).items():
                if page_id in self.pages:
                    self.pages[page_id]["path"] = page["path"]
                    updated[page_id] = self.pages[page_id]
            return httpx.Response(200, json={"pages": updated})

        if method == "DELETE":
            removed = {
                str(pid): self.pages.pop(str(pid)) for pid in payload if str(pid) in self.pages
            }
            return httpx.Response(200, json={"pages": removed})

        return httpx.Response(405)

    def _page(self, request: httpx.Request, method: str, page_id: str) -> httpx.Response:
        if method == "GET":
            return httpx.Response(200, json={"pages": {page_id: self.pages[page_id]}})
        if method == "DELETE":
            page = self.pages.pop(page_id)
            self.assets.pop(page_id, None)
            return httpx.Response(200, json={"pages": {page_id: page}})
        if method == "PUT":
            try:
                payload = self._body(request)
            except ValueError:
                return error_envelope("SH-v1-008", "Invalid JSON", 500)
            if not isinstance(payload.get("path"), str):
                return error_envelope("SH-v1-009", "Invalid data", 500)
            self.pages[page_id]["path"] = payload["path"]
            return httpx.Response(200, json={"pages": {page_id: self.pages[page_id]}})
        return httpx.Response(405)

    def _assets(self, request: httpx.Request, method: str, page_id: str) -> httpx.Response:
        page_assets = self.assets.setdefault(page_id, {})
        if method == "GET":
            asset_type = request.url.params.get("type", "all")
            selected = {
                aid: asset
                for aid, asset in page_assets.items()
                if asset_type == "all" or asset["type"] == asset_type
            }
            return httpx.Response(200, json={"assets": selected, "links": {}})
        if method == "POST":
            created = {}
            for asset in self._body(request)["assets"]:
                asset_id = str(next(self._ids))
                page_assets[asset_id] = {"id": int(asset_id), **asset}
                created[asset_id] = page_assets[asset_id]
            return httpx.Response(200, json={"assets": created})
        return httpx.Response(405)

    def _asset(
        self,
        request: httpx.Request,
        method: str,
        page_id: str,
        asset_id: str,
    ) -> httpx.Response:
        page_assets = self.assets.get(page_id, {})
        if asset_id not in page_assets:
            return error_envelope("SH-v1-011", "Not found", 404)
        if method == "GET":
            return httpx.Response(200, json={"assets": {asset_id: page_assets[asset_id]}})
        if method == "DELETE":
            return httpx.Response(200, json={"assets": {asset_id: page_assets.pop(asset_id)}})
        return httpx.Response(405)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeSmallHayAPI:
    """Provide the in-memory SmallHay API."""
    return FakeSmallHayAPI()


@pytest.fixture
def base_config() -> SmallHayConfig:
    """Provide a basic SDK configuration for testing."""
    return SmallHayConfig(telemetry=TelemetryConfig(enabled=False))


@pytest.fixture
def mocked_api(fake_api: FakeSmallHayAPI) -> Iterator[respx.MockRouter]:
    """Route every call to the test environment to the fake API."""
    with mount_fake_api(fake_api) as router:
        yield router


@pytest.fixture
def http_client(mocked_api: respx.MockRouter) -> Iterator[httpx.Client]:
    """Provide a caller-owned HTTP client."""
    client = httpx.Client()
    yield client
    client.close()


@pytest.fixture
def client(
    http_client: httpx.Client,
    clock: FakeClock,
    base_config: SmallHayConfig,
) -> SmallHayClient:
    """Provide a demo client on the test environment."""
    return SmallHayClient(
        "demo", "demo", True, config=base_config, http_client=http_client, clock=clock
    )


@pytest.fixture
def bad_client(http_client: httpx.Client, clock: FakeClock) -> SmallHayClient:
    """Provide a client with an identity the fake API rejects."""
    return SmallHayClient("bad_demo", "bad_demo", True, http_client=http_client, clock=clock)


@pytest.fixture
def make_async_client(
    clock: FakeClock, mocked_api: respx.MockRouter
) -> Callable[..., AsyncSmallHayClient]:
    """Provide a factory for async clients over a caller-owned HTTP client."""

    def factory(
        http: httpx.AsyncClient,
        client_id: str = "demo",
        client_secret: str = "demo",
    ) -> AsyncSmallHayClient:
        return AsyncSmallHayClient(
            client_id, client_secret, True, http_client=http, clock=clock
        )

    return factory
