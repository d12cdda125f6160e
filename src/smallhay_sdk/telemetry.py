"""OpenTelemetry and structlog integration for the SmallHay SDK.

Provides tracing spans and structured logging for the auth exchange and
resource calls. Configuration only touches the SDK's own tracer and logger;
the host application's structlog setup is left alone.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Generator

    from .config import TelemetryConfig

SDK_NAME = "smallhay-sdk"
SDK_VERSION = "1.0.0"

_LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

# Set by configure_telemetry; None falls back to the global providers
_tracer: trace.Tracer | None = None
_logger: structlog.typing.FilteringBoundLogger | None = None


def get_tracer() -> trace.Tracer:
    """Get the SDK tracer."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SDK_NAME, SDK_VERSION)
    return _tracer


def get_logger() -> Any:
    """Get the SDK logger."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(SDK_NAME)
    return _logger


def _build_logger(config: TelemetryConfig) -> structlog.typing.FilteringBoundLogger:
    # The SDK never logs at CRITICAL, so disabled telemetry is silent
    level = _LOG_LEVELS[config.log_level] if config.enabled else _LOG_LEVELS["CRITICAL"]
    logger = structlog.wrap_logger(
        structlog.PrintLogger(),
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
    )
    return logger.bind(service=config.service_name)


def configure_telemetry(config: TelemetryConfig) -> None:
    """Configure the SDK tracer and logger.

    Components pick up the logger when they are created, so call this
    before building a client. Clients given an explicit ``SmallHayConfig``
    call it with ``config.telemetry``.

    Args:
        config: Telemetry configuration.
    """
    global _tracer, _logger

    if config.enabled and config.trace_requests:
        _tracer = trace.get_tracer(config.service_name, SDK_VERSION)
    else:
        _tracer = trace.NoOpTracer()

    _logger = _build_logger(config)


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Run the enclosed block inside a span, recording any exception on it."""
    with get_tracer().start_as_current_span(name, attributes=attributes) as span:
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
