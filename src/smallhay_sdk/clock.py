"""Clock abstraction for credential expiry decisions.

All time-based decisions in the SDK depend on an injected ``Clock`` rather
than calling ``time.time()`` directly, so expiry can be driven in tests.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Callable protocol returning seconds since the UNIX epoch."""

    def __call__(self) -> float: ...


def default_clock() -> float:
    """Default implementation that delegates to ``time.time()``."""
    return time.time()
