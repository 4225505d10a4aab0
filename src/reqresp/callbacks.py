r"""Callback types and manager for observing request executions.

The callback system provides four lifecycle hooks:
- on_request: Called before each attempt
- on_retry: Called before sleeping ahead of a retry
- on_success: Called when a response is accepted
- on_failure: Called when the request fails for good

Example:
    ```pycon
    >>> from reqresp import RequestExecutor
    >>> from reqresp.callbacks import RetryInfo
    >>> from reqresp.core import ExecutorConfig
    >>> def log_retry(retry_info: RetryInfo) -> None:
    ...     print(f"Attempt {retry_info.attempt}/{retry_info.max_attempts}")
    ...
    >>> executor = RequestExecutor(config=ExecutorConfig(on_retry=log_retry))  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "CallbackManager",
    "FailureInfo",
    "RequestInfo",
    "ResponseInfo",
    "RetryInfo",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from reqresp.core.config import ExecutorConfig
    from reqresp.response import Response


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The attempt number (1-indexed).
        max_attempts: Maximum number of attempts configured.
    """

    url: str
    method: str
    attempt: int
    max_attempts: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The number of the upcoming attempt (1-indexed). The
            first retry is attempt 2.
        max_attempts: Maximum number of attempts configured.
        wait_time: The sleep time in seconds before this retry.
        error: The transient error that triggered the retry.
    """

    url: str
    method: str
    attempt: int
    max_attempts: int
    wait_time: float
    error: Exception


@dataclass
class ResponseInfo:
    """Information passed to on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The attempt number that succeeded (1-indexed).
        max_attempts: Maximum number of attempts configured.
        response: The accepted response.
        total_time: Total time spent including backoff (seconds).
    """

    url: str
    method: str
    attempt: int
    max_attempts: int
    response: Response
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The number of attempts sent.
        max_attempts: Maximum number of attempts configured.
        error: The error raised to the caller.
        status_code: The HTTP status code, if a response was received.
        total_time: Total time spent including backoff (seconds).
    """

    url: str
    method: str
    attempt: int
    max_attempts: int
    error: Exception
    status_code: int | None
    total_time: float


class CallbackManager:
    """Invoke the user-defined callbacks of an ``ExecutorConfig``.

    Callbacks that are not configured are skipped.

    Args:
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each retry.
        on_success: Optional callback called when a response is accepted.
        on_failure: Optional callback called when the request fails.
    """

    def __init__(
        self,
        on_request: Callable[[RequestInfo], None] | None = None,
        on_retry: Callable[[RetryInfo], None] | None = None,
        on_success: Callable[[ResponseInfo], None] | None = None,
        on_failure: Callable[[FailureInfo], None] | None = None,
    ) -> None:
        self._on_request = on_request
        self._on_retry = on_retry
        self._on_success = on_success
        self._on_failure = on_failure

    @classmethod
    def from_config(cls, config: ExecutorConfig) -> CallbackManager:
        return cls(
            on_request=config.on_request,
            on_retry=config.on_retry,
            on_success=config.on_success,
            on_failure=config.on_failure,
        )

    def on_request(self, url: str, method: str, attempt: int, max_attempts: int) -> None:
        if self._on_request is not None:
            self._on_request(
                RequestInfo(url=url, method=method, attempt=attempt, max_attempts=max_attempts)
            )

    def on_retry(
        self,
        url: str,
        method: str,
        attempt: int,
        max_attempts: int,
        wait_time: float,
        error: Exception,
    ) -> None:
        if self._on_retry is not None:
            self._on_retry(
                RetryInfo(
                    url=url,
                    method=method,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    wait_time=wait_time,
                    error=error,
                )
            )

    def on_success(
        self,
        url: str,
        method: str,
        attempt: int,
        max_attempts: int,
        response: Response,
        total_time: float,
    ) -> None:
        if self._on_success is not None:
            self._on_success(
                ResponseInfo(
                    url=url,
                    method=method,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    response=response,
                    total_time=total_time,
                )
            )

    def on_failure(
        self,
        url: str,
        method: str,
        attempt: int,
        max_attempts: int,
        error: Exception,
        status_code: int | None,
        total_time: float,
    ) -> None:
        if self._on_failure is not None:
            self._on_failure(
                FailureInfo(
                    url=url,
                    method=method,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    error=error,
                    status_code=status_code,
                    total_time=total_time,
                )
            )
