r"""Immutable description of one HTTP request.

A ``RequestDescriptor`` is validated when it is created: a missing or
malformed target URL raises ``InvalidTargetError`` before any I/O.
"""

from __future__ import annotations

__all__ = ["HttpMethod", "RequestDescriptor"]

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from reqresp.core.config import DEFAULT_METHOD, DEFAULT_TIMEOUT
from reqresp.core.validation import validate_timeout
from reqresp.exceptions import BodyEncodingError, InvalidTargetError

if TYPE_CHECKING:
    from collections.abc import Mapping


class HttpMethod(str, Enum):
    r"""HTTP methods supported by the executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method: str | HttpMethod) -> HttpMethod:
        """Return the method matching a case-insensitive name.

        Args:
            method: The method name or value.

        Returns:
            The matching ``HttpMethod``.

        Raises:
            ValueError: If the method is not supported.

        Example:
            ```pycon
            >>> from reqresp.request import HttpMethod
            >>> HttpMethod.parse("post")
            <HttpMethod.POST: 'POST'>

            ```
        """
        if isinstance(method, cls):
            return method
        try:
            return cls(method.upper())
        except (AttributeError, ValueError):
            msg = f"unsupported HTTP method: {method!r}"
            raise ValueError(msg) from None


def _parse_target(url: str | httpx.URL | None, method: str) -> httpx.URL:
    if url is None or (isinstance(url, str) and not url.strip()):
        raise InvalidTargetError(method=method, url="", message="url is missing")
    try:
        target = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidTargetError(
            method=method, url=str(url), message=f"url is invalid: {exc}", cause=exc
        ) from exc
    if target.scheme not in ("http", "https") or not target.host:
        raise InvalidTargetError(
            method=method,
            url=str(url),
            message=f"url is invalid: {url!s} is not an absolute http(s) URL",
        )
    return target


@dataclass(frozen=True)
class RequestDescriptor:
    r"""Describe one logical HTTP request.

    Args:
        url: The absolute target URL.
        method: The HTTP method. Defaults to ``GET``.
        headers: Header names and values. Headers with an empty value
            are dropped. The order is preserved.
        body: Optional JSON-serializable payload. It is only sent with
            ``POST`` requests.
        timeout: Total budget in seconds for the request, including all
            retries. Must be >= 0.

    Raises:
        InvalidTargetError: If the URL is missing or malformed.
        ValueError: If the method is unsupported or the timeout negative.

    Example:
        ```pycon
        >>> from reqresp.request import RequestDescriptor
        >>> descriptor = RequestDescriptor(
        ...     "https://api.example.com/items",
        ...     method="post",
        ...     headers={"X-Trace": "abc", "X-Empty": ""},
        ...     body={"x": 1},
        ... )
        >>> descriptor.method
        <HttpMethod.POST: 'POST'>
        >>> descriptor.headers
        (('X-Trace', 'abc'),)
        >>> descriptor.encode_body()
        b'{"x":1}'

        ```
    """

    url: httpx.URL
    method: HttpMethod = HttpMethod(DEFAULT_METHOD)
    headers: tuple[tuple[str, str], ...] = field(default=())
    body: Any = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        method = HttpMethod.parse(self.method)
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "url", _parse_target(self.url, method.value))
        object.__setattr__(self, "headers", _normalize_headers(self.headers))
        validate_timeout(self.timeout)

    def encode_body(self) -> bytes | None:
        r"""Serialize the body to its wire encoding.

        Returns:
            The JSON encoded body for a ``POST`` request with a body,
            otherwise ``None``.

        Raises:
            BodyEncodingError: If the body cannot be serialized.
        """
        if self.method is not HttpMethod.POST or self.body is None:
            return None
        try:
            return json.dumps(self.body, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise BodyEncodingError(
                method=self.method.value,
                url=str(self.url),
                message=f"failed to convert request body data to JSON: {exc}",
                cause=exc,
            ) from exc


def _normalize_headers(
    headers: Mapping[str, str] | tuple[tuple[str, str], ...] | None,
) -> tuple[tuple[str, str], ...]:
    if not headers:
        return ()
    items = headers.items() if hasattr(headers, "items") else headers
    return tuple((name, value) for name, value in items if value)
