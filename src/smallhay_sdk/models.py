"""Pydantic models for the SmallHay SDK."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
)

from .errors import ServerReportedError, SmallHayError

# Status recorded when the transport never produced an HTTP response
TRANSPORT_FAILURE_STATUS = 0


class Verb(StrEnum):
    """HTTP verbs used by the SmallHay API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class AuthResponse(BaseModel):
    """Body of a successful ``POST /auth`` exchange."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(
        ...,
        min_length=1,
        pattern=r"^[\x21-\x7e]+$",
        validation_alias=AliasChoices("access_token", "bearer_token", "token"),
    )
    created: int = Field(..., description="Issued at (Unix timestamp)")
    expires: int = Field(..., description="Expiration time (Unix timestamp)")

    @property
    def lifetime(self) -> int:
        """Seconds between issue and expiry, as reported by the server."""
        return self.expires - self.created


class Credential(BaseModel):
    """Access credential with its local expiry instant.

    ``expires_at`` is in local epoch seconds; ``0`` means it never expires.
    """

    model_config = ConfigDict(frozen=True)

    token: str
    expires_at: float = 0

    @classmethod
    def from_response(cls, response: AuthResponse, *, now: float) -> Self:
        """Create a credential, rebasing the server lifetime onto the local clock."""
        return cls(token=response.access_token, expires_at=now + response.lifetime)

    def is_valid(self, now: float) -> bool:
        """Check whether the credential may be attached to a call at ``now``."""
        return self.expires_at == 0 or self.expires_at > now


class ServerErrorEnvelope(BaseModel):
    """Error body returned by the SmallHay API."""

    model_config = ConfigDict(frozen=True, extra="allow")

    error_code: str
    error_title: str | None = None
    error_message: str | None = None
    error_ref: str | None = None
    documentation: str | None = None

    @classmethod
    def parse(cls, value: Any) -> Self | None:
        """Parse a decoded body, returning None when it is not an error envelope."""
        if not isinstance(value, dict):
            return None
        try:
            return cls.model_validate(value)
        except ValidationError:
            return None

    def to_error(self, status_code: int) -> ServerReportedError:
        """Build the SDK error reported by this envelope."""
        return ServerReportedError(
            self.error_message or self.error_title or self.error_code,
            status_code=status_code,
            error_code=self.error_code,
            error_ref=self.error_ref,
            documentation=self.documentation,
        )


class DecodedBody(BaseModel):
    """Result of decoding a response payload."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    value: Any = None
    error: SmallHayError | None = None

    @classmethod
    def success(cls, value: Any) -> Self:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: SmallHayError) -> Self:
        return cls(ok=False, error=error)


class EndpointCall(BaseModel):
    """A resolved endpoint operation: verb, relative path and optional body."""

    model_config = ConfigDict(frozen=True)

    verb: Verb
    path: str
    body: Any = None


class CallOutcome(BaseModel):
    """Outcome of one dispatched call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status_code: int
    body: DecodedBody
    authorized: bool = True

    @property
    def is_success(self) -> bool:
        """True for an authorized 2xx response with a decodable body."""
        return self.authorized and 200 <= self.status_code < 300 and self.body.ok

    @property
    def value(self) -> Any:
        """Decoded value, or None when decoding failed."""
        return self.body.value if self.body.ok else None

    @property
    def server_error(self) -> ServerReportedError | None:
        """Error envelope reported by the server, if any."""
        if not self.body.ok or 200 <= self.status_code < 300:
            return None
        envelope = ServerErrorEnvelope.parse(self.body.value)
        if envelope is None:
            return None
        return envelope.to_error(self.status_code)

    @property
    def error(self) -> SmallHayError | None:
        """Local or server-reported error of this call, if any."""
        if self.body.error is not None:
            return self.body.error
        return self.server_error

    def raise_for_error(self) -> Self:
        """Raise the call's error, if any; otherwise return self."""
        error = self.error
        if error is not None:
            raise error
        return self
