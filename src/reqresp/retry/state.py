r"""Mutable state of one request execution."""

from __future__ import annotations

__all__ = ["AttemptState"]

from dataclasses import dataclass, field


@dataclass
class AttemptState:
    """Track the progress of one logical request.

    Each call to ``RequestExecutor.execute`` owns a private instance, so
    concurrent executions never share it.

    Attributes:
        attempts_remaining: Number of attempts that can still be made.
        started_at: Clock reading captured once when the call started.
        attempt: Number of attempts already sent.
        retries: Number of retries already scheduled.
        next_wait: The last computed backoff delay in seconds.
        last_error: The last transient transport error, if any.
    """

    attempts_remaining: int
    started_at: float
    attempt: int = 0
    retries: int = 0
    next_wait: float = 0.0
    last_error: Exception | None = field(default=None, repr=False)

    def elapsed(self, now: float) -> float:
        """Return the seconds elapsed since the call started."""
        return now - self.started_at

    def remaining(self, now: float, deadline: float) -> float:
        """Return the seconds left before the deadline."""
        return deadline - self.elapsed(now)

    def expires_at(self, deadline: float) -> float:
        """Return the clock reading at which the deadline passes."""
        return self.started_at + deadline

    def deadline_exceeded(self, now: float, deadline: float) -> bool:
        """Indicate if the deadline has passed."""
        return self.elapsed(now) > deadline

    def record_transient_failure(self, error: Exception) -> None:
        """Record a transient failure and consume one attempt."""
        self.last_error = error
        self.attempts_remaining -= 1
