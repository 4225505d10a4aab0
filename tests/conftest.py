from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from reqresp.transport import TransportPool, close_default_pool
from tests.helpers import FakeClock

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at 0."""
    return FakeClock()


@pytest.fixture
def make_pool() -> Generator[Callable[[Callable[[httpx.Request], httpx.Response]], TransportPool], None, None]:
    """Create isolated pools answering with a handler, closed after the
    test."""
    pools: list[TransportPool] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> TransportPool:
        pool = TransportPool(transport=httpx.MockTransport(handler))
        pools.append(pool)
        return pool

    yield factory
    for pool in pools:
        pool.close()


@pytest.fixture
def default_pool_reset() -> Generator[None, None, None]:
    """Make sure each test starts and ends without a shared pool."""
    close_default_pool()
    yield
    close_default_pool()
