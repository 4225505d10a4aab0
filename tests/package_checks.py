from __future__ import annotations

import logging
import sys

import reqresp
from reqresp.transport import TransportPool

logger: logging.Logger = logging.getLogger(__name__)

# Use httpbin.org for real HTTP testing
HTTPBIN_URL = "https://httpbin.org"


def check_get() -> None:
    logger.info("Checking get...")
    with TransportPool() as pool:
        response = reqresp.get(f"{HTTPBIN_URL}/get", pool=pool)
    assert response.status_code == 200


def check_post() -> None:
    logger.info("Checking post...")
    with TransportPool() as pool:
        response = reqresp.post(f"{HTTPBIN_URL}/post", body={"x": 1}, pool=pool)
    assert response.status_code == 200
    assert response.json()["json"] == {"x": 1}


def check_delete_not_found() -> None:
    logger.info("Checking delete with an unaccepted status...")
    with TransportPool() as pool:
        try:
            reqresp.delete(f"{HTTPBIN_URL}/status/404", pool=pool)
        except reqresp.UnacceptedStatusError as exc:
            assert exc.status_code == 404
        else:
            msg = "expected UnacceptedStatusError"
            raise AssertionError(msg)


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_get()
        check_post()
        check_delete_not_found()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
