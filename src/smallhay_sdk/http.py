"""HTTP client utilities for the SmallHay SDK.

Clients carry no base URL or fixed timeout: both are read from the live
configuration on every call.
"""

from __future__ import annotations

import httpx

USER_AGENT = "smallhay-sdk/1.0.0 Python"


def build_timeout(connect_timeout: float, timeout: float) -> httpx.Timeout:
    """Build an httpx timeout from the connect and overall request timeouts."""
    return httpx.Timeout(
        connect=connect_timeout,
        read=timeout,
        write=timeout,
        pool=timeout,
    )


def create_http_client() -> httpx.Client:
    """Create configured sync HTTP client.

    Returns:
        Configured httpx.Client.
    """
    return httpx.Client(
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        },
        follow_redirects=False,
    )


def create_async_http_client() -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        },
        follow_redirects=False,
    )
