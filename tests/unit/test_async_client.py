"""Unit tests for the async client."""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx

from smallhay_sdk import AsyncSmallHayClient

from ..conftest import TOKEN_LIFETIME, FakeSmallHayAPI


class TestAsyncClient:
    """Tests for the async credential lifecycle and dispatch."""

    def test_create_and_delete_page(self, fake_api: FakeSmallHayAPI, make_async_client) -> None:
        async def scenario() -> None:
            async with httpx.AsyncClient() as http:
                client = make_async_client(http)

                created = await client.create_pages(["/test"])
                assert client.last_status_code == 200
                ((page_id, page),) = created["pages"].items()
                assert page["path"] == "/test"

                deleted = await client.delete_page(page_id)
                assert client.last_status_code == 200
                assert deleted == created

        asyncio.run(scenario())
        assert fake_api.auth_calls == 1

    def test_unauthenticated_returns_false(
        self, fake_api: FakeSmallHayAPI, make_async_client
    ) -> None:
        async def scenario() -> None:
            async with httpx.AsyncClient() as http:
                client = make_async_client(http, "bad_demo", "bad_demo")

                assert await client.ensure_valid() is False
                assert await client.get_pages() is False
                assert client.access_token is None

        asyncio.run(scenario())
        assert fake_api.resource_calls == 0

    def test_refresh_after_expiry(
        self, fake_api: FakeSmallHayAPI, make_async_client, clock
    ) -> None:
        async def scenario() -> None:
            async with httpx.AsyncClient() as http:
                client = make_async_client(http)

                await client.get_pages()
                await client.get_pages()
                assert client.auth_exchange_count == 1

                clock.advance(TOKEN_LIFETIME)
                response = await client.send("get", "pages?offset=0&limit=100")
                assert set(response["links"]) == {"previous", "current", "next"}
                assert client.auth_exchange_count == 2

        asyncio.run(scenario())

    def test_concurrent_tasks_share_one_exchange(
        self, fake_api: FakeSmallHayAPI, make_async_client
    ) -> None:
        async def scenario() -> list[bool]:
            async with httpx.AsyncClient() as http:
                client = make_async_client(http)
                return await asyncio.gather(*(client.ensure_valid() for _ in range(5)))

        assert asyncio.run(scenario()) == [True] * 5
        assert fake_api.auth_calls == 1

    def test_dispatch_outcome(self, fake_api: FakeSmallHayAPI, make_async_client) -> None:
        async def scenario() -> None:
            async with httpx.AsyncClient() as http:
                client = make_async_client(http)

                outcome = await client.dispatch("get", "pages/42")
                assert outcome.status_code == 404
                assert outcome.server_error.error_code == "SH-v1-011"

        asyncio.run(scenario())

    def test_context_manager_closes_owned_client(self) -> None:
        async def scenario() -> None:
            with patch("smallhay_sdk.async_client.create_async_http_client") as mock_create:
                mock_http = AsyncMock()
                mock_create.return_value = mock_http

                async with AsyncSmallHayClient("demo", "demo") as client:
                    assert client is not None

                mock_http.aclose.assert_awaited_once()

        asyncio.run(scenario())
