r"""Connection pool shared by request executors.

A ``TransportPool`` owns one ``httpx.Client``. The client keeps idle
connections open up to fixed limits, so repeated requests to the same
host reuse them. It is safe to share a pool between threads. Proxy
settings are read from the environment.
"""

from __future__ import annotations

__all__ = ["TransportPool", "close_default_pool", "get_default_pool"]

import logging
import threading
from typing import TYPE_CHECKING, Any

import httpx

from reqresp.core.config import (
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
)
from reqresp.core.validation import validate_pool_limits

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


class TransportPool:
    r"""Long-lived pool of HTTP connections.

    Args:
        max_connections: Maximum number of concurrent connections.
        max_keepalive_connections: Maximum number of idle connections
            kept open.
        keepalive_expiry: Optional number of seconds after which an idle
            connection is closed.
        trust_env: Whether to read the proxy configuration from the
            environment.
        verify: TLS verification setting passed to ``httpx.Client``.
        transport: Optional transport, e.g. ``httpx.MockTransport``, used
            instead of the default network transport.

    Example:
        ```pycon
        >>> from reqresp.transport import TransportPool
        >>> with TransportPool(max_connections=10) as pool:
        ...     pool.is_closed
        ...
        False
        >>> pool.is_closed
        True

        ```
    """

    def __init__(
        self,
        *,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry: float | None = None,
        trust_env: bool = True,
        verify: Any = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        validate_pool_limits(max_connections, max_keepalive_connections)
        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
            keepalive_expiry=keepalive_expiry,
        )
        self._client = httpx.Client(
            limits=self.limits,
            trust_env=trust_env,
            verify=verify,
            transport=transport,
            follow_redirects=True,
        )
        self._lock = threading.Lock()
        logger.debug(
            f"Transport pool created: max_connections={max_connections}, "
            f"max_keepalive_connections={max_keepalive_connections}"
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_connections={self.limits.max_connections}, "
            f"max_keepalive_connections={self.limits.max_keepalive_connections}, "
            f"is_closed={self.is_closed})"
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def client(self) -> httpx.Client:
        return self._client

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def build_request(self, method: str, url: httpx.URL | str, **kwargs: Any) -> httpx.Request:
        r"""Build a request bound to this pool.

        Args:
            method: The HTTP method.
            url: The target URL.
            **kwargs: Keyword arguments passed to
                ``httpx.Client.build_request``.

        Returns:
            The request.
        """
        return self._client.build_request(method, url, **kwargs)

    def send(self, request: httpx.Request) -> httpx.Response:
        r"""Send a request and return the response without reading its
        body.

        The caller must close the returned response to give the
        connection back to the pool.

        Args:
            request: The request to send.

        Returns:
            The streamed response.

        Raises:
            httpx.TransportError: If the request cannot be sent.
        """
        return self._client.send(request, stream=True)

    def close(self) -> None:
        r"""Close all the pooled connections.

        Closing an already closed pool does nothing.
        """
        with self._lock:
            if not self._client.is_closed:
                self._client.close()
                logger.debug("Transport pool closed")


_DEFAULT_POOL: TransportPool | None = None
_DEFAULT_POOL_LOCK = threading.Lock()


def get_default_pool() -> TransportPool:
    r"""Return the process-wide pool, creating it on first use.

    Returns:
        The shared pool.
    """
    global _DEFAULT_POOL  # noqa: PLW0603
    with _DEFAULT_POOL_LOCK:
        if _DEFAULT_POOL is None or _DEFAULT_POOL.is_closed:
            _DEFAULT_POOL = TransportPool()
        return _DEFAULT_POOL


def close_default_pool() -> None:
    r"""Close the process-wide pool, if any.

    The next call to ``get_default_pool`` creates a new pool.
    """
    global _DEFAULT_POOL  # noqa: PLW0603
    with _DEFAULT_POOL_LOCK:
        if _DEFAULT_POOL is not None:
            _DEFAULT_POOL.close()
            _DEFAULT_POOL = None
