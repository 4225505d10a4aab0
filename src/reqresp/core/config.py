r"""Configuration defaults and dataclass for the request executor.

This module provides named configuration constants and a dataclass-based
configuration object shared by ``RequestExecutor`` instances. Defaults
are plain constants and are never mutated at runtime, so one caller's
override cannot leak into another caller's request.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_CONNECTIONS",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_KEEPALIVE_CONNECTIONS",
    "DEFAULT_METHOD",
    "DEFAULT_TIMEOUT",
    "ExecutorConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from reqresp.core.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from reqresp.backoff.base import BaseBackoffStrategy
    from reqresp.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo


# HTTP method used when the caller does not specify one
DEFAULT_METHOD = "GET"

# Total budget in seconds for a request, including all retries
DEFAULT_TIMEOUT = 30.0

# Maximum number of attempts, including the initial one
# Bounds the retries even when the deadline is very large
DEFAULT_MAX_ATTEMPTS = 30

# Sawtooth backoff: 1s, 2s, 4s, 8s, then back to 1s
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 10.0

# Connection pool limits
DEFAULT_MAX_CONNECTIONS = 100
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 100


@dataclass
class ExecutorConfig:
    """Configuration for the retry behavior of a ``RequestExecutor``.

    Note:
        The deadline is NOT part of this config. It belongs to each
        ``RequestDescriptor`` because it bounds one logical call.

    Args:
        max_attempts: Maximum number of attempts, including the initial
            one. Must be >= 1.
        backoff_strategy: Strategy computing the wait before each retry.
            Defaults to ``SawtoothBackoff()``.
        retry_if: Optional predicate deciding whether a transport error
            is transient. Defaults to ``is_transient_error``.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each retry sleep.
        on_success: Optional callback called when a response is accepted.
        on_failure: Optional callback called when the request fails.

    Example:
        ```pycon
        >>> from reqresp.core.config import ExecutorConfig
        >>> config = ExecutorConfig()
        >>> config.max_attempts
        30
        >>> merged = config.merge(max_attempts=5)
        >>> merged.max_attempts
        5
        >>> config.max_attempts
        30

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    backoff_strategy: BaseBackoffStrategy | None = None
    retry_if: Callable[[Exception], bool] | None = None
    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        validate_retry_params(max_attempts=self.max_attempts)

    def merge(self, **overrides: Any) -> ExecutorConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ExecutorConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
