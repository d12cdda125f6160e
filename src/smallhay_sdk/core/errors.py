"""Centralized error factory for the SmallHay SDK.

Provides consistent error creation from transport exceptions and undecodable
payloads.
"""

from __future__ import annotations

import uuid

import httpx

from ..errors import (
    AuthenticationError,
    DecodeError,
    ErrorCode,
    SmallHayError,
    TimeoutError,
    TransportError,
)

# Longest payload excerpt kept on a DecodeError
_SNIPPET_LENGTH = 200


class ErrorFactory:
    """Centralized error creation with consistent structure."""

    @staticmethod
    def generate_correlation_id() -> str:
        """Generate a unique correlation ID."""
        return str(uuid.uuid4())

    @staticmethod
    def from_exception(
        exc: Exception,
        *,
        correlation_id: str | None = None,
        timeout_seconds: float | None = None,
    ) -> SmallHayError:
        """Create SDK error from a transport exception.

        Args:
            exc: Original exception.
            correlation_id: Optional correlation ID for tracing.
            timeout_seconds: Timeout in effect when the call was made.

        Returns:
            Appropriate SmallHayError subclass.
        """
        correlation_id = correlation_id or ErrorFactory.generate_correlation_id()

        if isinstance(exc, SmallHayError):
            if exc.correlation_id is None:
                exc.correlation_id = correlation_id
            return exc

        if isinstance(exc, httpx.TimeoutException):
            return TimeoutError(
                f"Request timed out: {exc}",
                correlation_id=correlation_id,
                timeout_seconds=timeout_seconds,
                cause=exc,
            )

        if isinstance(exc, httpx.ConnectError):
            return TransportError(
                f"Connection failed: {exc}",
                code=ErrorCode.CONNECTION_ERROR,
                correlation_id=correlation_id,
                cause=exc,
            )

        if isinstance(exc, httpx.HTTPError):
            return TransportError(
                f"HTTP error: {exc}",
                correlation_id=correlation_id,
                cause=exc,
            )

        # httpx.InvalidURL, or a header value that is not ASCII
        return TransportError(
            f"Request could not be built: {exc}",
            correlation_id=correlation_id,
            cause=exc,
        )

    @staticmethod
    def decode_error(
        content: bytes,
        *,
        status_code: int,
        correlation_id: str | None = None,
    ) -> DecodeError:
        """Create decode error for a payload that is not valid JSON."""
        snippet = content[:_SNIPPET_LENGTH].decode("utf-8", errors="replace")
        return DecodeError(
            "Response is not valid JSON" if content else "Response body is empty",
            status_code=status_code,
            correlation_id=correlation_id or ErrorFactory.generate_correlation_id(),
            snippet=snippet or None,
        )

    @staticmethod
    def unauthorized(*, status_code: int | None = None) -> AuthenticationError:
        """Create error for a call refused locally for lack of a credential."""
        return AuthenticationError(
            "No valid credential; the call was not sent",
            status_code=status_code,
            correlation_id=ErrorFactory.generate_correlation_id(),
        )
