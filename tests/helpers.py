r"""Shared test helpers.

This module contains a fake clock and a read-counting byte stream used
to drive the executor deterministically.
"""

from __future__ import annotations

__all__ = ["TEST_URL", "CountingStream", "FakeClock", "connection_refused"]

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable

TEST_URL = "https://api.example.com/data"


class FakeClock:
    """Clock whose time only moves when it sleeps."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now
        self.sleeps: list[float] = []
        self.on_sleep: Callable[[float], None] | None = None

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        if self.on_sleep is not None:
            self.on_sleep(seconds)


class CountingStream(httpx.SyncByteStream):
    """Byte stream counting how many times it is read and closed."""

    def __init__(
        self,
        chunks: Iterable[bytes] = (),
        error: Exception | None = None,
        on_chunk: Callable[[bytes], None] | None = None,
    ) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.on_chunk = on_chunk
        self.reads = 0
        self.closes = 0

    def __iter__(self) -> Generator[bytes, None, None]:
        self.reads += 1
        for chunk in self.chunks:
            if self.on_chunk is not None:
                self.on_chunk(chunk)
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.closes += 1


def connection_refused(request: httpx.Request | None = None) -> httpx.ConnectError:
    """Create the error raised when the server refuses the connection."""
    return httpx.ConnectError("[Errno 111] Connection refused", request=request)
