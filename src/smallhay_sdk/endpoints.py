"""Endpoint table of the SmallHay API.

Each function resolves one API operation into an ``EndpointCall``. Payloads
are passed through untouched; validation happens server-side.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from .models import EndpointCall, Verb

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 100
DEFAULT_ASSET_TYPE = "all"


def _page(page_id: int | str) -> str:
    return f"pages/{page_id}"


def _assets(page_id: int | str) -> str:
    return f"{_page(page_id)}/assets"


def _asset(page_id: int | str, asset_id: int | str) -> str:
    return f"{_assets(page_id)}/{asset_id}"


# Pages


def create_pages(payload: Any) -> EndpointCall:
    """Create one or more pages from a list of paths."""
    return EndpointCall(verb=Verb.POST, path="pages", body=payload)


def get_pages(offset: int = DEFAULT_OFFSET, limit: int = DEFAULT_LIMIT) -> EndpointCall:
    """List pages."""
    query = urlencode({"offset": offset, "limit": limit})
    return EndpointCall(verb=Verb.GET, path=f"pages?{query}")


def update_pages(payload: Any) -> EndpointCall:
    """Update one or more pages."""
    return EndpointCall(verb=Verb.PUT, path="pages", body=payload)


def delete_pages(payload: Any) -> EndpointCall:
    """Delete one or more pages by id."""
    return EndpointCall(verb=Verb.DELETE, path="pages", body=payload)


def get_page(page_id: int | str) -> EndpointCall:
    return EndpointCall(verb=Verb.GET, path=_page(page_id))


def update_page(page_id: int | str, payload: Any) -> EndpointCall:
    return EndpointCall(verb=Verb.PUT, path=_page(page_id), body=payload)


def delete_page(page_id: int | str) -> EndpointCall:
    return EndpointCall(verb=Verb.DELETE, path=_page(page_id))


# Page assets


def create_page_assets(page_id: int | str, payload: Any) -> EndpointCall:
    """Create one or more assets on a page."""
    return EndpointCall(verb=Verb.POST, path=_assets(page_id), body=payload)


def get_page_assets(
    page_id: int | str,
    asset_type: str = DEFAULT_ASSET_TYPE,
    offset: int = DEFAULT_OFFSET,
    limit: int = DEFAULT_LIMIT,
) -> EndpointCall:
    """List the assets of a page, optionally filtered by type."""
    query = urlencode({"type": asset_type, "offset": offset, "limit": limit})
    return EndpointCall(verb=Verb.GET, path=f"{_assets(page_id)}?{query}")


def update_page_assets(page_id: int | str, payload: Any) -> EndpointCall:
    return EndpointCall(verb=Verb.PUT, path=_assets(page_id), body=payload)


def delete_page_assets(page_id: int | str, payload: Any) -> EndpointCall:
    return EndpointCall(verb=Verb.DELETE, path=_assets(page_id), body=payload)


def get_page_asset(page_id: int | str, asset_id: int | str) -> EndpointCall:
    return EndpointCall(verb=Verb.GET, path=_asset(page_id, asset_id))


def update_page_asset(page_id: int | str, asset_id: int | str, payload: Any) -> EndpointCall:
    return EndpointCall(verb=Verb.PUT, path=_asset(page_id, asset_id), body=payload)


def delete_page_asset(page_id: int | str, asset_id: int | str) -> EndpointCall:
    return EndpointCall(verb=Verb.DELETE, path=_asset(page_id, asset_id))
