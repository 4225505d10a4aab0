r"""Classification of transport errors as transient or fatal.

A transport error is transient when its text contains one of a fixed
allow-list of markers. The whole matching strategy lives in
``is_transient_error`` so it can be replaced through
``ExecutorConfig.retry_if`` without touching the retry loop.
"""

from __future__ import annotations

__all__ = ["TRANSIENT_ERROR_MARKERS", "is_transient_error", "matches_transient_marker"]

import logging

import httpx

logger: logging.Logger = logging.getLogger(__name__)

# Substrings identifying transient transport failures
TRANSIENT_ERROR_MARKERS = (
    "connection refused",
    "no cached connection was available",
    "tls handshake timeout",
    "i/o timeout",
    "unexpected eof",
    "timeout exceeded while awaiting headers",
)


def matches_transient_marker(text: str) -> bool:
    """Indicate if an error text contains a transient marker.

    The comparison is case insensitive.

    Args:
        text: The error text.

    Returns:
        ``True`` if the text contains one of ``TRANSIENT_ERROR_MARKERS``.

    Example:
        ```pycon
        >>> from reqresp.retry.classifier import matches_transient_marker
        >>> matches_transient_marker("[Errno 111] Connection refused")
        True
        >>> matches_transient_marker("certificate verify failed")
        False

        ```
    """
    text = text.lower()
    return any(marker in text for marker in TRANSIENT_ERROR_MARKERS)


def is_transient_error(exc: Exception) -> bool:
    """Indicate if a transport error is worth retrying.

    httpx reports the i/o, TLS handshake and header timeouts as
    ``httpx.TimeoutException`` whose text does not always carry the
    marker, so these exceptions are transient too.

    Args:
        exc: The transport error raised while sending the request.

    Returns:
        ``True`` if the error is transient, otherwise ``False``.

    Example:
        ```pycon
        >>> import httpx
        >>> from reqresp.retry.classifier import is_transient_error
        >>> is_transient_error(httpx.ConnectError("[Errno 111] Connection refused"))
        True
        >>> is_transient_error(httpx.ConnectError("Name or service not known"))
        False

        ```
    """
    if isinstance(exc, httpx.TimeoutException):
        return True
    transient = matches_transient_marker(str(exc))
    if not transient:
        logger.debug(f"{type(exc).__name__} is not a transient transport error: {exc}")
    return transient
