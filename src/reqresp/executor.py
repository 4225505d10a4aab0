r"""Request executor with retries on transient transport failures.

The executor sends one logical request, retries a fixed allow-list of
transient transport failures with a sawtooth backoff, stops once either
the attempts or the deadline are exhausted, buffers the response body
and applies a per-method status acceptance policy.
"""

from __future__ import annotations

__all__ = [
    "ACCEPTED_STATUS_CODES",
    "MIN_ATTEMPT_TIMEOUT",
    "RequestExecutor",
    "accepted_status_codes",
]

import logging
from typing import TYPE_CHECKING, Any, NoReturn

import httpx

from reqresp.backoff.sawtooth import SawtoothBackoff
from reqresp.callbacks import CallbackManager
from reqresp.clock import SystemClock
from reqresp.core.config import DEFAULT_TIMEOUT, ExecutorConfig
from reqresp.exceptions import (
    BodyReadError,
    DeadlineExceededError,
    FatalTransportError,
    HttpRequestError,
    RequestCancelledError,
    TransientTransportError,
    UnacceptedStatusError,
)
from reqresp.request import HttpMethod, RequestDescriptor
from reqresp.response import Response
from reqresp.retry.classifier import is_transient_error
from reqresp.retry.state import AttemptState
from reqresp.transport import get_default_pool

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping

    from reqresp.clock import Clock
    from reqresp.transport import TransportPool

logger: logging.Logger = logging.getLogger(__name__)

# Status codes accepted as a success, per method
ACCEPTED_STATUS_CODES: dict[HttpMethod, frozenset[int]] = {
    HttpMethod.POST: frozenset({200, 201}),
    HttpMethod.DELETE: frozenset({200, 204}),
}
_DEFAULT_ACCEPTED_STATUS_CODES = frozenset({200})

# Lower bound of the per-attempt httpx timeout, in seconds
MIN_ATTEMPT_TIMEOUT = 0.001


def accepted_status_codes(method: HttpMethod | str) -> frozenset[int]:
    r"""Return the status codes accepted as a success for a method.

    Args:
        method: The HTTP method.

    Returns:
        The accepted status codes.

    Example:
        ```pycon
        >>> from reqresp.executor import accepted_status_codes
        >>> sorted(accepted_status_codes("POST"))
        [200, 201]
        >>> sorted(accepted_status_codes("GET"))
        [200]

        ```
    """
    return ACCEPTED_STATUS_CODES.get(HttpMethod.parse(method), _DEFAULT_ACCEPTED_STATUS_CODES)


class RequestExecutor:
    r"""Execute HTTP requests with retries and an overall deadline.

    An executor holds no per-request state: each call to ``execute``
    owns a private ``AttemptState``, so one executor can be used by
    several threads. Only the transport pool is shared.

    Args:
        pool: The connection pool. Defaults to the process-wide pool
            returned by ``get_default_pool``.
        config: The retry configuration. Defaults to ``ExecutorConfig()``.
        clock: The time source used to measure the deadline and to
            sleep between attempts. Defaults to ``SystemClock()``.

    Example:
        ```pycon
        >>> from reqresp import RequestDescriptor, RequestExecutor
        >>> executor = RequestExecutor()
        >>> response = executor.execute(
        ...     RequestDescriptor("https://api.example.com/data")
        ... )  # doctest: +SKIP
        >>> response.status_code, response.text  # doctest: +SKIP
        (200, '...')

        ```
    """

    def __init__(
        self,
        *,
        pool: TransportPool | None = None,
        config: ExecutorConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._pool = pool
        self.config: ExecutorConfig = config or ExecutorConfig()
        self.clock: Clock = clock or SystemClock()
        self.backoff_strategy = self.config.backoff_strategy or SawtoothBackoff()
        self.callbacks = CallbackManager.from_config(self.config)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config}, clock={self.clock})"

    @property
    def pool(self) -> TransportPool:
        r"""The connection pool, resolved lazily to the shared pool."""
        if self._pool is None:
            self._pool = get_default_pool()
        return self._pool

    def request(
        self,
        method: HttpMethod | str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        timeout: float = DEFAULT_TIMEOUT,
        cancel_event: threading.Event | None = None,
    ) -> Response:
        r"""Describe and execute a request.

        Args:
            method: The HTTP method.
            url: The absolute target URL.
            headers: Optional request headers.
            body: Optional JSON-serializable payload, sent with ``POST``.
            timeout: Total budget in seconds, including all retries.
            cancel_event: Optional event cancelling the request between
                two attempts.

        Returns:
            The accepted response, with its body already read.

        Raises:
            HttpRequestError: If the request fails.
        """
        descriptor = RequestDescriptor(
            url, method=method, headers=headers, body=body, timeout=timeout
        )
        return self.execute(descriptor, cancel_event=cancel_event)

    def get(self, url: str, **kwargs: Any) -> Response:
        r"""Execute a ``GET`` request. See ``request``."""
        return self.request(HttpMethod.GET, url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Response:
        r"""Execute a ``POST`` request. See ``request``."""
        return self.request(HttpMethod.POST, url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> Response:
        r"""Execute a ``DELETE`` request. See ``request``."""
        return self.request(HttpMethod.DELETE, url, **kwargs)

    def execute(
        self,
        descriptor: RequestDescriptor,
        *,
        cancel_event: threading.Event | None = None,
    ) -> Response:
        r"""Execute a described request.

        The body is encoded once and the same bytes are sent on every
        attempt. Between two attempts the loop stops as soon as the
        attempts are exhausted, the deadline has passed or the caller
        cancelled the request. Each attempt is sent with the remaining
        budget as its timeout, and the body read is abandoned once the
        deadline passes. A response is never retried, whatever its status
        code.

        Args:
            descriptor: The request to execute.
            cancel_event: Optional event checked before each attempt.

        Returns:
            The accepted response, with its body already read and its
            stream released.

        Raises:
            BodyEncodingError: If the body cannot be serialized.
            FatalTransportError: If the request fails with a transport
                error that is not transient.
            TransientTransportError: If transient transport errors
                persist until the attempts or the deadline are exhausted.
            DeadlineExceededError: If the deadline passed before the
                first attempt.
            RequestCancelledError: If ``cancel_event`` is set.
            UnacceptedStatusError: If the status code is not accepted for
                the method.
            BodyReadError: If the response body cannot be read.
        """
        method = descriptor.method.value
        url = str(descriptor.url)
        content = descriptor.encode_body()
        headers = list(descriptor.headers)
        if content is not None and not any(
            name.lower() == "content-type" for name, _ in headers
        ):
            headers.append(("Content-Type", "application/json"))

        state = AttemptState(
            attempts_remaining=self.config.max_attempts,
            started_at=self.clock.monotonic(),
        )
        while True:
            if cancel_event is not None and cancel_event.is_set():
                self._fail(
                    RequestCancelledError(
                        method=method,
                        url=url,
                        message=f"{method} request to {url} cancelled after {state.attempt} attempts",
                        cause=state.last_error,
                    ),
                    state,
                )
            now = self.clock.monotonic()
            if state.deadline_exceeded(now, descriptor.timeout):
                self._fail(self._deadline_error(descriptor, state), state)

            state.attempt += 1
            logger.debug(
                f"{method} request to {url} (attempt {state.attempt}/{self.config.max_attempts})"
            )
            self.callbacks.on_request(
                url=url, method=method, attempt=state.attempt, max_attempts=self.config.max_attempts
            )
            remaining = state.remaining(now, descriptor.timeout)
            request = self.pool.build_request(
                method,
                descriptor.url,
                headers=headers,
                content=content,
                timeout=max(remaining, MIN_ATTEMPT_TIMEOUT),
            )
            try:
                raw = self.pool.send(request)
            except httpx.HTTPError as exc:
                self._handle_transport_error(exc, descriptor, state)
                continue
            return self._materialize(raw, descriptor, state)

    def _handle_transport_error(
        self, exc: httpx.HTTPError, descriptor: RequestDescriptor, state: AttemptState
    ) -> None:
        r"""Sleep before the next attempt, or raise if the error is
        terminal."""
        method = descriptor.method.value
        url = str(descriptor.url)
        retry_if = self.config.retry_if or is_transient_error
        if not retry_if(exc):
            self._fail(
                FatalTransportError(
                    method=method,
                    url=url,
                    message=f"{method} request to {url} failed: {exc}",
                    cause=exc,
                ),
                state,
            )

        state.record_transient_failure(exc)
        logger.warning(
            f"{method} request to {url}: server failed to respond "
            f"(attempt {state.attempt}/{self.config.max_attempts}): {exc}"
        )
        if state.attempts_remaining <= 0:
            self._fail(self._transient_error(descriptor, state, "attempts exhausted"), state)

        state.next_wait = self.backoff_strategy.calculate(state.retries)
        if state.remaining(self.clock.monotonic(), descriptor.timeout) < state.next_wait:
            self._fail(self._transient_error(descriptor, state, "deadline exceeded"), state)

        self.callbacks.on_retry(
            url=url,
            method=method,
            attempt=state.attempt + 1,
            max_attempts=self.config.max_attempts,
            wait_time=state.next_wait,
            error=exc,
        )
        logger.debug(f"Waiting {state.next_wait:.2f}s before retry")
        self.clock.sleep(state.next_wait)
        state.retries += 1

    def _materialize(
        self, raw: httpx.Response, descriptor: RequestDescriptor, state: AttemptState
    ) -> Response:
        r"""Read the body and apply the status acceptance policy."""
        method = descriptor.method.value
        url = str(descriptor.url)
        response = Response(raw, method=method, url=url)
        try:
            response.read(deadline=state.expires_at(descriptor.timeout), clock=self.clock)
        except BodyReadError as exc:
            self._fail(exc, state)

        if response.status_code not in accepted_status_codes(descriptor.method):
            self._fail(
                UnacceptedStatusError(
                    method=method,
                    url=url,
                    message=f"{method} request to {url} failed: {response.status_line} {response.text}",
                    status_code=response.status_code,
                    response=response,
                ),
                state,
            )

        logger.debug(
            f"{method} request to {url} succeeded with status {response.status_code} "
            f"(attempt {state.attempt})"
        )
        self.callbacks.on_success(
            url=url,
            method=method,
            attempt=state.attempt,
            max_attempts=self.config.max_attempts,
            response=response,
            total_time=state.elapsed(self.clock.monotonic()),
        )
        return response

    def _transient_error(
        self, descriptor: RequestDescriptor, state: AttemptState, reason: str
    ) -> TransientTransportError:
        method = descriptor.method.value
        url = str(descriptor.url)
        return TransientTransportError(
            method=method,
            url=url,
            message=(
                f"{method} request to {url} failed after {state.attempt} attempts "
                f"({reason}): {state.last_error}"
            ),
            cause=state.last_error,
        )

    def _deadline_error(
        self, descriptor: RequestDescriptor, state: AttemptState
    ) -> HttpRequestError:
        if state.last_error is not None:
            return self._transient_error(descriptor, state, "deadline exceeded")
        method = descriptor.method.value
        url = str(descriptor.url)
        return DeadlineExceededError(
            method=method,
            url=url,
            message=f"{method} request to {url} not sent: deadline of {descriptor.timeout}s exceeded",
        )

    def _fail(self, error: HttpRequestError, state: AttemptState) -> NoReturn:
        r"""Notify the failure and raise the error, chained to its cause."""
        logger.debug(error.message)
        self.callbacks.on_failure(
            url=error.url,
            method=error.method,
            attempt=state.attempt,
            max_attempts=self.config.max_attempts,
            error=error,
            status_code=error.status_code,
            total_time=state.elapsed(self.clock.monotonic()),
        )
        raise error from error.cause
