r"""Configuration and validation shared by the request executor."""

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
    "validate_pool_limits",
    "validate_retry_params",
    "validate_timeout",
]

from reqresp.core.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
    DEFAULT_METHOD,
    DEFAULT_TIMEOUT,
    ExecutorConfig,
)
from reqresp.core.validation import (
    validate_pool_limits,
    validate_retry_params,
    validate_timeout,
)
