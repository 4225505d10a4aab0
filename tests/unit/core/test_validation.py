from __future__ import annotations

import pytest

from reqresp.core import validate_pool_limits, validate_retry_params, validate_timeout

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0, 0.5, 30, 1e6])
def test_validate_timeout_valid(timeout: float) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [-1, -0.1])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be >= 0"):
        validate_timeout(timeout)


###########################################
#     Tests for validate_retry_params     #
###########################################


@pytest.mark.parametrize("max_attempts", [1, 30])
def test_validate_retry_params_valid(max_attempts: int) -> None:
    validate_retry_params(max_attempts=max_attempts)


def test_validate_retry_params_invalid() -> None:
    with pytest.raises(ValueError, match=r"max_attempts must be >= 1, got 0"):
        validate_retry_params(max_attempts=0)


##########################################
#     Tests for validate_pool_limits     #
##########################################


@pytest.mark.parametrize(("max_connections", "max_keepalive"), [(1, 0), (100, 100), (10, 5)])
def test_validate_pool_limits_valid(max_connections: int, max_keepalive: int) -> None:
    validate_pool_limits(max_connections, max_keepalive)


def test_validate_pool_limits_invalid_max_connections() -> None:
    with pytest.raises(ValueError, match=r"max_connections must be >= 1, got 0"):
        validate_pool_limits(0, 0)


def test_validate_pool_limits_invalid_keepalive() -> None:
    with pytest.raises(ValueError, match=r"max_keepalive_connections must be in \[0, 10\], got 11"):
        validate_pool_limits(10, 11)
