"""HTTP executors for the SmallHay SDK.

Each executor performs exactly one transport call. Transport exceptions,
and requests httpx cannot encode, are converted into a ``RawResponse``
carrying a synthetic status and the SDK error instead of being raised; no
retries are attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from ..models import TRANSPORT_FAILURE_STATUS
from ..telemetry import get_logger, trace_operation
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..errors import SmallHayError


@dataclass(frozen=True)
class RawResponse:
    """Status and payload of a single transport call."""

    status_code: int
    content: bytes = b""
    error: SmallHayError | None = None


# Raised by httpx while sending, or while building a request it cannot encode
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError)


def _timeout_seconds(kwargs: dict[str, Any]) -> float | None:
    timeout = kwargs.get("timeout")
    if isinstance(timeout, httpx.Timeout):
        return timeout.read
    return timeout


def _transport_failure(
    logger: Any,
    method: str,
    url: str,
    exc: Exception,
    kwargs: dict[str, Any],
) -> RawResponse:
    error = ErrorFactory.from_exception(exc, timeout_seconds=_timeout_seconds(kwargs))
    logger.warning(
        "Request failed",
        method=method,
        url=url,
        code=error.code,
        error=str(exc),
        correlation_id=error.correlation_id,
    )
    return RawResponse(status_code=TRANSPORT_FAILURE_STATUS, error=error)


class SyncHTTPExecutor:
    """Synchronous single-attempt HTTP executor."""

    def __init__(self, client: httpx.Client) -> None:
        """Initialize sync HTTP executor.

        Args:
            client: HTTP client.
        """
        self._client = client
        self._logger = get_logger()

    def execute(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> RawResponse:
        """Execute HTTP request.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            **kwargs: Additional request arguments.

        Returns:
            Raw response; transport failures carry status ``0`` and an error.
        """
        with trace_operation(
            "http_request",
            attributes={"http.method": method, "http.url": url},
        ) as span:
            try:
                response = self._client.request(method, url, **kwargs)
            except _REQUEST_ERRORS as e:
                return _transport_failure(self._logger, method, url, e, kwargs)
            span.set_attribute("http.status_code", response.status_code)
            return RawResponse(status_code=response.status_code, content=response.content)


class AsyncHTTPExecutor:
    """Asynchronous single-attempt HTTP executor."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize async HTTP executor.

        Args:
            client: Async HTTP client.
        """
        self._client = client
        self._logger = get_logger()

    async def execute(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> RawResponse:
        """Execute async HTTP request.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            **kwargs: Additional request arguments.

        Returns:
            Raw response; transport failures carry status ``0`` and an error.
        """
        with trace_operation(
            "http_request",
            attributes={"http.method": method, "http.url": url},
        ) as span:
            try:
                response = await self._client.request(method, url, **kwargs)
            except _REQUEST_ERRORS as e:
                return _transport_failure(self._logger, method, url, e, kwargs)
            span.set_attribute("http.status_code", response.status_code)
            return RawResponse(status_code=response.status_code, content=response.content)
