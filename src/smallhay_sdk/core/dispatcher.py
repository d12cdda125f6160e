"""Request dispatchers attaching the credential to every resource call."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from ..models import CallOutcome, EndpointCall, Verb
from ..telemetry import get_logger, trace_operation
from .request_ops import RequestOperations

if TYPE_CHECKING:
    from ..config import SmallHayConfig
    from .authenticator import AsyncAuthenticator, Authenticator
    from .http_executor import AsyncHTTPExecutor, SyncHTTPExecutor
    from .status import StatusTracker
    from .store import CredentialStore


def resolve_call(verb: Verb | str, endpoint: str, body: Any) -> EndpointCall:
    """Normalize ``(verb, endpoint, body)`` arguments into an EndpointCall."""
    return EndpointCall(verb=Verb(verb.upper()), path=endpoint, body=body)


class RequestDispatcher:
    """Synchronous request dispatcher."""

    def __init__(
        self,
        config: SmallHayConfig,
        authenticator: Authenticator,
        executor: SyncHTTPExecutor,
        store: CredentialStore,
        status: StatusTracker,
    ) -> None:
        self._ops = RequestOperations(config)
        self._authenticator = authenticator
        self._executor = executor
        self._store = store
        self._status = status
        self._logger = get_logger()

    def dispatch(
        self,
        verb: Verb | str,
        endpoint: str,
        body: Any = None,
    ) -> CallOutcome:
        """Authenticate if needed, then perform one resource call.

        Args:
            verb: HTTP verb.
            endpoint: Path relative to the base URL, query string included.
            body: Optional request body.

        Returns:
            Outcome with the status and the explicit decode result.
        """
        call = resolve_call(verb, endpoint, body)

        if not self._authenticator.ensure_valid():
            self._logger.info("Call skipped, not authenticated", path=call.path)
            return self._ops.unauthorized_outcome(self._status.last_status_code)

        credential = self._store.get()
        with trace_operation(
            "smallhay.request",
            attributes={"smallhay.verb": call.verb.value, "smallhay.path": call.path},
        ):
            raw = self._executor.execute(**self._ops.build_request(call, credential))

        self._status.record(raw.status_code)
        return self._ops.build_outcome(raw)

    def send(
        self,
        verb: Verb | str,
        endpoint: str,
        body: Any = None,
    ) -> Any | Literal[False]:
        """Perform a call and return its decoded body.

        Returns:
            ``False`` when no credential could be obtained, ``None`` when the
            response could not be decoded, otherwise the decoded JSON value.
        """
        outcome = self.dispatch(verb, endpoint, body)
        if not outcome.authorized:
            return False
        return outcome.value


class AsyncRequestDispatcher:
    """Asynchronous request dispatcher."""

    def __init__(
        self,
        config: SmallHayConfig,
        authenticator: AsyncAuthenticator,
        executor: AsyncHTTPExecutor,
        store: CredentialStore,
        status: StatusTracker,
    ) -> None:
        self._ops = RequestOperations(config)
        self._authenticator = authenticator
        self._executor = executor
        self._store = store
        self._status = status
        self._logger = get_logger()

    async def dispatch(
        self,
        verb: Verb | str,
        endpoint: str,
        body: Any = None,
    ) -> CallOutcome:
        """Authenticate if needed, then perform one resource call."""
        call = resolve_call(verb, endpoint, body)

        if not await self._authenticator.ensure_valid():
            self._logger.info("Call skipped, not authenticated", path=call.path)
            return self._ops.unauthorized_outcome(self._status.last_status_code)

        credential = self._store.get()
        with trace_operation(
            "smallhay.request",
            attributes={"smallhay.verb": call.verb.value, "smallhay.path": call.path},
        ):
            raw = await self._executor.execute(**self._ops.build_request(call, credential))

        self._status.record(raw.status_code)
        return self._ops.build_outcome(raw)

    async def send(
        self,
        verb: Verb | str,
        endpoint: str,
        body: Any = None,
    ) -> Any | Literal[False]:
        """Perform a call and return its decoded body, or ``False``."""
        outcome = await self.dispatch(verb, endpoint, body)
        if not outcome.authorized:
            return False
        return outcome.value
