"""SmallHay API Python SDK."""

from .client import SmallHayClient
from .async_client import AsyncSmallHayClient
from .config import ClientIdentity, Environment, SmallHayConfig, TelemetryConfig
from .errors import (
    SmallHayError,
    AuthenticationError,
    TransportError,
    TimeoutError,
    DecodeError,
    ServerReportedError,
    InvalidConfigError,
)
from .models import CallOutcome, Credential, DecodedBody, EndpointCall, Verb
from .telemetry import configure_telemetry

__all__ = [
    "SmallHayClient",
    "AsyncSmallHayClient",
    "ClientIdentity",
    "Environment",
    "SmallHayConfig",
    "TelemetryConfig",
    "SmallHayError",
    "AuthenticationError",
    "TransportError",
    "TimeoutError",
    "DecodeError",
    "ServerReportedError",
    "InvalidConfigError",
    "CallOutcome",
    "Credential",
    "DecodedBody",
    "EndpointCall",
    "Verb",
    "configure_telemetry",
]

__version__ = "1.0.0"
