"""Resource request building and response decoding."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ..http import build_timeout
from ..models import CallOutcome, DecodedBody
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..config import SmallHayConfig
    from ..models import Credential, EndpointCall
    from .http_executor import RawResponse


def encode_body(body: Any) -> bytes:
    """Encode a request body.

    ``str`` and ``bytes`` are treated as already-encoded JSON and sent
    verbatim; anything else is serialized with ``json.dumps``.
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body).encode("utf-8")


def decode_response(raw: RawResponse) -> DecodedBody:
    """Decode a raw response into an explicit success or failure."""
    if raw.error is not None:
        return DecodedBody.failure(raw.error)
    try:
        return DecodedBody.success(json.loads(raw.content))
    except ValueError:
        return DecodedBody.failure(
            ErrorFactory.decode_error(raw.content, status_code=raw.status_code)
        )


class RequestOperations:
    """Builds authenticated resource requests from endpoint calls."""

    def __init__(self, config: SmallHayConfig) -> None:
        self.config = config

    def build_request(self, call: EndpointCall, credential: Credential) -> dict[str, Any]:
        """Build keyword arguments for a resource call.

        Args:
            call: Resolved endpoint call.
            credential: Valid credential to attach.

        Returns:
            Request arguments for ``httpx.Client.request``.
        """
        headers = {"Authorization": f"Bearer {credential.token}"}
        request: dict[str, Any] = {
            "method": call.verb.value,
            "url": self.config.endpoint_url(call.path),
            "headers": headers,
            "timeout": build_timeout(self.config.connect_timeout, self.config.timeout),
        }

        if call.body is not None:
            request["content"] = encode_body(call.body)
            headers["Content-Type"] = "application/json"
        else:
            headers["Content-Length"] = "0"

        return request

    @staticmethod
    def build_outcome(raw: RawResponse) -> CallOutcome:
        """Turn a raw response into a call outcome."""
        return CallOutcome(status_code=raw.status_code, body=decode_response(raw))

    @staticmethod
    def unauthorized_outcome(status_code: int | None) -> CallOutcome:
        """Outcome of a call refused locally for lack of a credential."""
        return CallOutcome(
            status_code=status_code if status_code is not None else 0,
            body=DecodedBody.failure(ErrorFactory.unauthorized(status_code=status_code)),
            authorized=False,
        )
