"""Core components for the SmallHay SDK.

Authentication and dispatch logic shared between the sync and async
clients.
"""

from __future__ import annotations

from .errors import ErrorFactory
from .store import CredentialStore
from .status import StatusTracker
from .auth_ops import AuthOperations
from .request_ops import RequestOperations
from .authenticator import Authenticator, AsyncAuthenticator
from .dispatcher import RequestDispatcher, AsyncRequestDispatcher
from .http_executor import SyncHTTPExecutor, AsyncHTTPExecutor, RawResponse

__all__ = [
    "ErrorFactory",
    "CredentialStore",
    "StatusTracker",
    "AuthOperations",
    "RequestOperations",
    "Authenticator",
    "AsyncAuthenticator",
    "RequestDispatcher",
    "AsyncRequestDispatcher",
    "SyncHTTPExecutor",
    "AsyncHTTPExecutor",
    "RawResponse",
]
