r"""Time sources used by the request executor.

The executor never calls ``time`` directly. It reads the time and
waits through a ``Clock`` so the retry loop can be driven by a fake
clock, without real delays.
"""

from __future__ import annotations

__all__ = ["Clock", "SystemClock"]

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Read a monotonic time and block for a duration."""

    def monotonic(self) -> float:
        """Return a monotonic time in seconds."""

    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds."""


class SystemClock:
    """Clock backed by ``time.monotonic`` and ``time.sleep``.

    Example:
        ```pycon
        >>> from reqresp.clock import SystemClock
        >>> clock = SystemClock()
        >>> clock.monotonic() > 0
        True

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
