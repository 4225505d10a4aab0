r"""Exceptions raised while executing HTTP requests.

Every error carries the HTTP method, the target URL and, when
available, the status code, the response and the underlying cause, so
it can be logged or displayed without further inspection.
"""

from __future__ import annotations

__all__ = [
    "BodyEncodingError",
    "BodyReadError",
    "DeadlineExceededError",
    "FatalTransportError",
    "HttpRequestError",
    "InvalidTargetError",
    "RequestCancelledError",
    "TransientTransportError",
    "UnacceptedStatusError",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reqresp.response import Response


class HttpRequestError(RuntimeError):
    r"""Base class of all the errors raised by ``reqresp``.

    Args:
        method: The HTTP method of the failed request.
        url: The target URL of the failed request.
        message: A human readable description of the failure.
        status_code: The HTTP status code, if a response was received.
        response: The materialized response, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from reqresp.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET", url="https://api.example.com", message="boom"
        ... )
        >>> str(error)
        'boom'
        >>> error.method
        'GET'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        args: dict[str, Any] = {"method": self.method, "url": self.url}
        if self.status_code is not None:
            args["status_code"] = self.status_code
        details = ", ".join(f"{key}={value!r}" for key, value in args.items())
        return f"{self.__class__.__qualname__}({details})"


class InvalidTargetError(HttpRequestError, ValueError):
    r"""Raised when the target URL is missing or malformed.

    This error is raised when the request is described, before any I/O.
    """


class BodyEncodingError(HttpRequestError):
    r"""Raised when the request body cannot be serialized."""


class TransientTransportError(HttpRequestError):
    r"""Raised when a retryable transport failure persists after the
    attempts or the deadline are exhausted.

    Only the last transient failure is kept as ``cause``.
    """


class FatalTransportError(HttpRequestError):
    r"""Raised when a transport failure is not retryable."""


class UnacceptedStatusError(HttpRequestError):
    r"""Raised when the status code is not accepted for the HTTP method.

    The message embeds the status line and the response body text.
    """


class BodyReadError(HttpRequestError):
    r"""Raised when the response body cannot be read."""


class DeadlineExceededError(HttpRequestError):
    r"""Raised when the deadline expires before any request could be
    sent."""


class RequestCancelledError(HttpRequestError):
    r"""Raised when the caller cancels the request between two
    attempts."""
