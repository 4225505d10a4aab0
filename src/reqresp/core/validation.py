r"""Parameter validation utilities for the request executor.

This module provides validation functions for timeout and retry
parameters to ensure they meet the required constraints before being
used by the retry loop.
"""

from __future__ import annotations

__all__ = ["validate_pool_limits", "validate_retry_params", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate the overall deadline of a request.

    Args:
        timeout: Total wall-clock budget in seconds for all the
            attempts of a request. Must be >= 0. A value of 0 allows a
            single attempt and no retry.

    Raises:
        ValueError: If timeout is negative.

    Example:
        ```pycon
        >>> from reqresp.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)
        >>> validate_timeout(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be >= 0, got -1

        ```
    """
    if timeout < 0:
        msg = f"timeout must be >= 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(max_attempts: int) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Maximum number of attempts for a request,
            including the initial one. Must be >= 1.

    Raises:
        ValueError: If max_attempts is lower than 1.

    Example:
        ```pycon
        >>> from reqresp.core.validation import validate_retry_params
        >>> validate_retry_params(max_attempts=30)
        >>> validate_retry_params(max_attempts=0)  # doctest: +SKIP

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)


def validate_pool_limits(max_connections: int, max_keepalive_connections: int) -> None:
    """Validate the connection limits of a transport pool.

    Args:
        max_connections: Maximum number of concurrent connections.
            Must be >= 1.
        max_keepalive_connections: Maximum number of idle connections
            kept open. Must be >= 0 and <= max_connections.

    Raises:
        ValueError: If a limit is out of range.
    """
    if max_connections < 1:
        msg = f"max_connections must be >= 1, got {max_connections}"
        raise ValueError(msg)
    if not 0 <= max_keepalive_connections <= max_connections:
        msg = (
            f"max_keepalive_connections must be in [0, {max_connections}], "
            f"got {max_keepalive_connections}"
        )
        raise ValueError(msg)
