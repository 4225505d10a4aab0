r"""Retry decision helpers for the request executor."""

from __future__ import annotations

__all__ = [
    "TRANSIENT_ERROR_MARKERS",
    "AttemptState",
    "is_transient_error",
    "matches_transient_marker",
]

from reqresp.retry.classifier import (
    TRANSIENT_ERROR_MARKERS,
    is_transient_error,
    matches_transient_marker,
)
from reqresp.retry.state import AttemptState
