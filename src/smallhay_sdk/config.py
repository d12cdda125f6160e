"""Configuration for the SmallHay SDK.

Uses Pydantic v2 for validation. ``SmallHayConfig`` stays mutable (with
validation on assignment) because timeouts can be changed on a live client
and are read at call time.
"""

from __future__ import annotations

import base64
import os
from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    field_validator,
)

from .errors import InvalidConfigError

PRODUCTION_BASE_URL = "https://api.smallhay.com/v1"
TEST_BASE_URL = "https://test-api.smallhay.com/v1"

DEFAULT_CONNECT_TIMEOUT = 2.0
DEFAULT_TIMEOUT = 4.0


class Environment(StrEnum):
    """SmallHay API environments."""

    PRODUCTION = "production"
    TEST = "test"

    @property
    def base_url(self) -> str:
        """Base URL for this environment."""
        if self is Environment.TEST:
            return TEST_BASE_URL
        return PRODUCTION_BASE_URL


class TelemetryConfig(BaseModel):
    """Logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "smallhay-sdk"
    trace_requests: bool = True
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unsupported log level: {v}"
            raise ValueError(msg)
        return level


class ClientIdentity(BaseModel):
    """Client credentials of a SmallHay account."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: SecretStr

    def basic_credential(self) -> str:
        """Get the HTTP Basic credential ``base64(client_id:client_secret)``."""
        raw = f"{self.client_id}:{self.client_secret.get_secret_value()}"
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")

    @classmethod
    def from_env(cls, prefix: str = "SMALLHAY_") -> Self:
        """Create identity from environment variables."""
        client_id = os.environ.get(f"{prefix}CLIENT_ID")
        if not client_id:
            msg = f"{prefix}CLIENT_ID environment variable is required"
            raise InvalidConfigError(msg, field="client_id")

        client_secret = os.environ.get(f"{prefix}CLIENT_SECRET")
        if client_secret is None:
            msg = f"{prefix}CLIENT_SECRET environment variable is required"
            raise InvalidConfigError(msg, field="client_secret")

        return cls(client_id=client_id, client_secret=client_secret)


class SmallHayConfig(BaseModel):
    """Main configuration for the SmallHay SDK."""

    model_config = ConfigDict(validate_assignment=True, validate_default=True)

    environment: Environment = Environment.PRODUCTION

    # Overrides the environment's base URL when set
    base_url: HttpUrl | None = None

    # HTTP settings, in seconds
    connect_timeout: Annotated[float, Field(gt=0, le=300)] = DEFAULT_CONNECT_TIMEOUT
    timeout: Annotated[float, Field(gt=0, le=600)] = DEFAULT_TIMEOUT

    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @property
    def base_url_str(self) -> str:
        """Get base URL as string without trailing slash."""
        if self.base_url is not None:
            return str(self.base_url).rstrip("/")
        return self.environment.base_url

    @property
    def auth_endpoint(self) -> str:
        """Get the auth exchange URL."""
        return f"{self.base_url_str}/auth"

    @property
    def is_test(self) -> bool:
        """Whether the test environment is selected."""
        return self.environment is Environment.TEST

    def endpoint_url(self, path: str) -> str:
        """Build the absolute URL of a relative endpoint path."""
        return f"{self.base_url_str}/{path.lstrip('/')}"

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "SMALLHAY_") -> Self:
        """Create config from environment variables."""

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        environment = get_env("ENVIRONMENT", Environment.PRODUCTION.value).lower()
        if environment not in {e.value for e in Environment}:
            msg = f"{prefix}ENVIRONMENT must be one of: production, test"
            raise InvalidConfigError(msg, field="environment")

        try:
            connect_timeout = float(get_env("CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT))
            timeout = float(get_env("TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError as e:
            msg = f"Invalid timeout value: {e}"
            raise InvalidConfigError(msg, field="timeout") from e

        return cls(
            environment=Environment(environment),
            base_url=get_env("BASE_URL") or None,
            connect_timeout=connect_timeout,
            timeout=timeout,
        )
