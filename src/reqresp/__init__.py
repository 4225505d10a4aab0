r"""reqresp - Resilient HTTP request executor.

This package sends HTTP requests with ``httpx``, retries transient
transport failures with a sawtooth backoff, enforces an overall deadline
across all the attempts and returns responses whose body is read once.

Key Features:
    - Retries on connection refused, handshake, i/o and header timeouts
      and unexpected end-of-stream
    - Sawtooth backoff (1s, 2s, 4s, 8s, then back to 1s)
    - One deadline for the whole operation, including the retries
    - Per-method status acceptance (GET: 200, POST: 200/201,
      DELETE: 200/204)
    - Shared, thread-safe connection pool, replaceable for testing
    - Injectable clock for deterministic tests

Example:
    ```pycon
    >>> from reqresp import RequestDescriptor, RequestExecutor
    >>> executor = RequestExecutor()
    >>> response = executor.execute(
    ...     RequestDescriptor("https://api.example.com/items", method="POST", body={"x": 1})
    ... )  # doctest: +SKIP
    >>> response.status_code  # doctest: +SKIP
    201

    ```
"""

from __future__ import annotations

__all__ = [
    "BodyEncodingError",
    "BodyReadError",
    "DeadlineExceededError",
    "ExecutorConfig",
    "FatalTransportError",
    "HttpMethod",
    "HttpRequestError",
    "InvalidTargetError",
    "RequestCancelledError",
    "RequestDescriptor",
    "RequestExecutor",
    "Response",
    "TransientTransportError",
    "TransportPool",
    "UnacceptedStatusError",
    "__version__",
    "delete",
    "get",
    "post",
    "request",
]

from importlib.metadata import PackageNotFoundError, version

from reqresp.api import delete, get, post, request
from reqresp.core.config import ExecutorConfig
from reqresp.exceptions import (
    BodyEncodingError,
    BodyReadError,
    DeadlineExceededError,
    FatalTransportError,
    HttpRequestError,
    InvalidTargetError,
    RequestCancelledError,
    TransientTransportError,
    UnacceptedStatusError,
)
from reqresp.executor import RequestExecutor
from reqresp.request import HttpMethod, RequestDescriptor
from reqresp.response import Response
from reqresp.transport import TransportPool

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
