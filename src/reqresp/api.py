r"""Convenience functions executing one request with the shared pool.

Each function describes the request, executes it with a
``RequestExecutor`` and returns the accepted response.
"""

from __future__ import annotations

__all__ = ["delete", "get", "post", "request"]

from typing import TYPE_CHECKING, Any

from reqresp.core.config import DEFAULT_METHOD, DEFAULT_TIMEOUT
from reqresp.executor import RequestExecutor
from reqresp.request import HttpMethod

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reqresp.clock import Clock
    from reqresp.core.config import ExecutorConfig
    from reqresp.response import Response
    from reqresp.transport import TransportPool


def request(
    url: str,
    method: HttpMethod | str = DEFAULT_METHOD,
    *,
    headers: Mapping[str, str] | None = None,
    body: Any = None,
    timeout: float = DEFAULT_TIMEOUT,
    pool: TransportPool | None = None,
    config: ExecutorConfig | None = None,
    clock: Clock | None = None,
) -> Response:
    r"""Send an HTTP request with automatic retries.

    Args:
        url: The absolute target URL.
        method: The HTTP method. Defaults to ``GET``.
        headers: Optional request headers. Empty values are dropped.
        body: Optional JSON-serializable payload, only sent with ``POST``.
        timeout: Total budget in seconds, including all retries.
        pool: Optional connection pool. Defaults to the shared pool.
        config: Optional retry configuration.
        clock: Optional time source.

    Returns:
        The accepted response, with its body already read.

    Raises:
        HttpRequestError: If the request fails.

    Example:
        ```pycon
        >>> from reqresp import request
        >>> response = request("https://api.example.com/data")  # doctest: +SKIP
        >>> response.text  # doctest: +SKIP

        ```
    """
    executor = RequestExecutor(pool=pool, config=config, clock=clock)
    return executor.request(method, url, headers=headers, body=body, timeout=timeout)


def get(url: str, **kwargs: Any) -> Response:
    r"""Send an HTTP GET request with automatic retries.

    The accepted status code is 200. See ``request`` for the arguments.
    """
    return request(url, HttpMethod.GET, **kwargs)


def post(url: str, body: Any = None, **kwargs: Any) -> Response:
    r"""Send an HTTP POST request with automatic retries.

    The body is sent as JSON. The accepted status codes are 200 and 201.
    See ``request`` for the arguments.

    Example:
        ```pycon
        >>> from reqresp import post
        >>> response = post("https://api.example.com/items", body={"x": 1})  # doctest: +SKIP

        ```
    """
    return request(url, HttpMethod.POST, body=body, **kwargs)


def delete(url: str, **kwargs: Any) -> Response:
    r"""Send an HTTP DELETE request with automatic retries.

    The accepted status codes are 200 and 204. See ``request`` for the
    arguments.
    """
    return request(url, HttpMethod.DELETE, **kwargs)
