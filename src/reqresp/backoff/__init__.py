r"""Backoff strategies computing the wait between two attempts."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "SawtoothBackoff"]

from reqresp.backoff.base import BaseBackoffStrategy
from reqresp.backoff.sawtooth import SawtoothBackoff
