r"""Sawtooth backoff strategy."""

from __future__ import annotations

__all__ = ["SawtoothBackoff"]

from reqresp.backoff.base import BaseBackoffStrategy
from reqresp.core.config import DEFAULT_BASE_DELAY, DEFAULT_MAX_DELAY


class SawtoothBackoff(BaseBackoffStrategy):
    """Doubling backoff that resets once it would exceed a ceiling.

    The delay starts at ``base_delay`` and doubles after each retry.
    When the next value would exceed ``max_delay`` it goes back to
    ``base_delay``, producing a repeating sawtooth instead of unbounded
    exponential growth. Retries stay prompt under sustained outages;
    callers needing jitter can wrap this strategy.

    Args:
        base_delay: The first delay in seconds (default: 1.0).
        max_delay: The ceiling in seconds (default: 10.0).

    Example:
        ```pycon
        >>> from reqresp.backoff import SawtoothBackoff
        >>> backoff = SawtoothBackoff()
        >>> [backoff.calculate(attempt) for attempt in range(6)]
        [1.0, 2.0, 4.0, 8.0, 1.0, 2.0]
        >>> backoff.period
        4

        ```
    """

    def __init__(
        self, base_delay: float = DEFAULT_BASE_DELAY, max_delay: float = DEFAULT_MAX_DELAY
    ) -> None:
        if base_delay <= 0:
            msg = f"base_delay must be positive, got {base_delay}"
            raise ValueError(msg)
        if max_delay < base_delay:
            msg = f"max_delay must be >= base_delay ({base_delay}), got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

        # Number of distinct delays in one tooth
        period, delay = 1, base_delay
        while delay * 2 <= max_delay:
            delay *= 2
            period += 1
        self.period = period

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_delay={self.base_delay}, max_delay={self.max_delay})"

    def calculate(self, attempt: int) -> float:
        """Calculate the sawtooth backoff delay.

        Args:
            attempt: The retry number (0-indexed).

        Returns:
            ``base_delay * 2 ** (attempt % period)``.
        """
        return self.base_delay * (2 ** (attempt % self.period))
