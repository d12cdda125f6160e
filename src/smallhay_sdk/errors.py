"""Error classes for the SmallHay SDK.

Structured error hierarchy with error codes and correlation IDs. The
dispatch layer never raises these for call failures; it returns them inside
a ``CallOutcome`` so callers can inspect or raise them on demand.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the SmallHay SDK."""

    # Authentication errors (1xxx)
    AUTH_FAILED = "AUTH_1001"
    UNAUTHORIZED = "AUTH_1002"

    # Network errors (3xxx)
    TRANSPORT_ERROR = "NET_3001"
    TIMEOUT_ERROR = "NET_3002"
    CONNECTION_ERROR = "NET_3003"

    # Decoding errors (4xxx)
    DECODE_ERROR = "DEC_4001"

    # Server errors (5xxx)
    SERVER_ERROR = "SRV_5001"

    # Configuration errors (6xxx)
    INVALID_CONFIG = "CFG_6001"


class SmallHayError(Exception):
    """Base error for the SmallHay SDK with structured error information."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if isinstance(code, str) else code.value
        self.status_code = status_code
        self.correlation_id = correlation_id
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "correlation_id": self.correlation_id,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class AuthenticationError(SmallHayError):
    """The auth exchange did not yield a valid, non-expired credential."""

    def __init__(
        self,
        message: str = "Authentication failed",
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.AUTH_FAILED,
            status_code=status_code,
            correlation_id=correlation_id,
        )


class TransportError(SmallHayError):
    """The request could not be completed by the transport."""

    def __init__(
        self,
        message: str = "Network request failed",
        *,
        code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
        correlation_id: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            correlation_id=correlation_id,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class TimeoutError(TransportError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        correlation_id: str | None = None,
        timeout_seconds: float | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.TIMEOUT_ERROR,
            correlation_id=correlation_id,
            cause=cause,
        )
        if timeout_seconds:
            self.details["timeout_seconds"] = timeout_seconds


class DecodeError(SmallHayError):
    """Response payload was not valid JSON."""

    def __init__(
        self,
        message: str = "Response is not valid JSON",
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
        snippet: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.DECODE_ERROR,
            status_code=status_code,
            correlation_id=correlation_id,
            details={"snippet": snippet} if snippet else None,
        )


class ServerReportedError(SmallHayError):
    """The server answered with an error envelope."""

    def __init__(
        self,
        message: str = "Server reported an error",
        *,
        status_code: int = 500,
        error_code: str | None = None,
        error_ref: str | None = None,
        documentation: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if error_code:
            details["error_code"] = error_code
        if error_ref:
            details["error_ref"] = error_ref
        if documentation:
            details["documentation"] = documentation
        super().__init__(
            message,
            ErrorCode.SERVER_ERROR,
            status_code=status_code,
            correlation_id=correlation_id,
            details=details,
        )
        self.error_code = error_code


class InvalidConfigError(SmallHayError):
    """Invalid SDK configuration."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_CONFIG,
            details={"field": field} if field else None,
        )
