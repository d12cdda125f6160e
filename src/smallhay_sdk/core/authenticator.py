"""Authenticators guaranteeing a valid credential before resource calls."""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

from ..telemetry import trace_operation

if TYPE_CHECKING:
    from .auth_ops import AuthOperations
    from .http_executor import AsyncHTTPExecutor, SyncHTTPExecutor


class Authenticator:
    """Synchronous authenticator.

    Refreshes are serialized with a lock and the validity check is repeated
    once the lock is held, so concurrent callers share one exchange.
    """

    def __init__(self, ops: AuthOperations, executor: SyncHTTPExecutor) -> None:
        self._ops = ops
        self._executor = executor
        self._lock = threading.Lock()

    def ensure_valid(self) -> bool:
        """Ensure a usable credential is held, exchanging identity if needed.

        Returns:
            True if a usable credential is available. Never raises for
            rejected identities, malformed responses or transport failures.
        """
        if self._ops.has_valid_credential():
            return True

        with self._lock:
            if self._ops.has_valid_credential():
                return True

            with trace_operation(
                "smallhay.auth",
                attributes={"smallhay.client_id": self._ops.identity.client_id},
            ):
                raw = self._executor.execute(**self._ops.build_auth_request())
                return self._ops.process_auth_response(raw)


class AsyncAuthenticator:
    """Asynchronous authenticator."""

    def __init__(self, ops: AuthOperations, executor: AsyncHTTPExecutor) -> None:
        self._ops = ops
        self._executor = executor
        self._lock = asyncio.Lock()

    async def ensure_valid(self) -> bool:
        """Ensure a usable credential is held, exchanging identity if needed."""
        if self._ops.has_valid_credential():
            return True

        async with self._lock:
            if self._ops.has_valid_credential():
                return True

            with trace_operation(
                "smallhay.auth",
                attributes={"smallhay.client_id": self._ops.identity.client_id},
            ):
                raw = await self._executor.execute(**self._ops.build_auth_request())
                return self._ops.process_auth_response(raw)
