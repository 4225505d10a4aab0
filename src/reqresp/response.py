r"""Materialized HTTP response.

This module wraps a streamed ``httpx.Response``. The body is read at
most once and cached, and the underlying stream is closed exactly once,
whatever the outcome and however many times the body is requested.
"""

from __future__ import annotations

__all__ = ["Response"]

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from reqresp.clock import SystemClock
from reqresp.exceptions import BodyReadError

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from reqresp.clock import Clock

logger: logging.Logger = logging.getLogger(__name__)


class Response:
    r"""HTTP response whose body is buffered once.

    Args:
        raw: The streamed ``httpx.Response``. Its body must not have
            been read yet.
        method: The HTTP method of the request.
        url: The target URL of the request.

    Example:
        ```pycon
        >>> import httpx
        >>> from reqresp.response import Response
        >>> response = Response(
        ...     httpx.Response(200, content=b"ok"), method="GET", url="https://example.com"
        ... )
        >>> response.status_code
        200
        >>> response.text
        'ok'
        >>> response.is_closed
        True

        ```
    """

    def __init__(self, raw: httpx.Response, *, method: str, url: str) -> None:
        self._raw = raw
        self.method = method
        self.url = url
        self._content: bytes | None = None
        self._text: str | None = None
        self._closed = False

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} [{self.status_line}]>"

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
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def reason_phrase(self) -> str:
        return self._raw.reason_phrase

    @property
    def status_line(self) -> str:
        r"""The status code followed by the reason phrase, e.g.
        ``404 Not Found``."""
        return f"{self.status_code} {self.reason_phrase}".rstrip()

    @property
    def headers(self) -> httpx.Headers:
        return self._raw.headers

    @property
    def is_read(self) -> bool:
        return self._content is not None

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def content(self) -> bytes:
        r"""The response body as bytes, read on first access."""
        if self._content is None:
            self.read()
        return self._content

    @property
    def text(self) -> str:
        r"""The response body as text, read on first access."""
        if self._text is None:
            self.read()
        return self._text

    def read(self, *, deadline: float | None = None, clock: Clock | None = None) -> bytes:
        r"""Read and cache the whole body, then release the stream.

        Later calls return the cached body without reading again.

        Args:
            deadline: Optional clock reading after which the read is
                abandoned. It is checked after each received chunk, so
                a server sending the body slowly cannot hold the call
                open past it.
            clock: The clock ``deadline`` refers to. Defaults to
                ``SystemClock()``.

        Returns:
            The response body.

        Raises:
            BodyReadError: If the body cannot be read or the deadline
                passes while reading. The stream is closed anyway.
        """
        if self._content is not None:
            return self._content
        clock = clock or SystemClock()
        try:
            chunks: list[bytes] = []
            for chunk in self._raw.iter_bytes():
                chunks.append(chunk)
                if deadline is not None and clock.monotonic() > deadline:
                    raise self._read_error("deadline exceeded")
        except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
            logger.debug(f"{self.method} request to {self.url}: failed to read body: {exc}")
            raise self._read_error(str(exc), cause=exc) from exc
        finally:
            self.close()
        content = b"".join(chunks)
        self._content = content
        self._text = content.decode(self._raw.encoding or "utf-8", errors="replace")
        return content

    def _read_error(self, reason: str, cause: Exception | None = None) -> BodyReadError:
        return BodyReadError(
            method=self.method,
            url=self.url,
            message=f"{self.method} request to {self.url}: error reading response body: {reason}",
            status_code=self.status_code,
            cause=cause,
        )

    def json(self, **kwargs: Any) -> Any:
        r"""Parse the body as JSON.

        Args:
            **kwargs: Keyword arguments passed to ``json.loads``.

        Returns:
            The decoded JSON document.
        """
        return json.loads(self.text, **kwargs)

    def close(self) -> None:
        r"""Release the underlying stream.

        Closing an already closed response does nothing.
        """
        if self._closed:
            return
        self._closed = True
        self._raw.close()
