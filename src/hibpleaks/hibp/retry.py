"""
Rate-limit aware request executor for the Have I Been Pwned API.

HIBP throttles aggressively and blocks addresses that keep requesting too
fast. Every request therefore schedules a delay that is applied *before*
the next one, so the first request of a session goes out immediately and
every following request is throttled. Throttled responses may carry a
``Retry-After`` header which replaces that delay.

The retry loop is driven by an explicit state machine (see ``TRANSITIONS``)
so backoff behavior can be tested with an injected ``sleep`` instead of
real waits.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re
import time
from enum import Enum
from typing import Any, Callable

import httpx

from hibpleaks.hibp.config import ClientConfig
from hibpleaks.hibp.errors import (
    DecodeError,
    HIBPError,
    MaxRetriesExceeded,
    NetworkError,
    RateLimited,
)
from hibpleaks.hibp.observers import LoggingObserver, RequestObserver

# Added to Retry-After to absorb clock skew and rounding
RETRY_AFTER_MARGIN = 1

# Longer waits are treated as unparseable
MAX_RETRY_AFTER = 86400

_RETRY_AFTER_RE = re.compile(r"[0-9]{1,12}")


class RequestState(str, Enum):
    """States of a single ``get_json`` call."""

    IDLE = "idle"
    SLEEPING = "sleeping"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class RequestEvent(str, Enum):
    """Inputs that move a request between states."""

    BACKOFF = "backoff"
    SEND = "send"
    OK = "ok"
    MISSING = "missing"
    THROTTLED = "throttled"
    NETWORK_ERROR = "network_error"
    BAD_BODY = "bad_body"
    EXHAUSTED = "exhausted"


TRANSITIONS: dict[tuple[RequestState, RequestEvent], RequestState] = {
    (RequestState.IDLE, RequestEvent.BACKOFF): RequestState.SLEEPING,
    (RequestState.IDLE, RequestEvent.SEND): RequestState.REQUESTING,
    (RequestState.IDLE, RequestEvent.EXHAUSTED): RequestState.FAILED,
    (RequestState.SLEEPING, RequestEvent.SEND): RequestState.REQUESTING,
    (RequestState.REQUESTING, RequestEvent.OK): RequestState.SUCCEEDED,
    (RequestState.REQUESTING, RequestEvent.MISSING): RequestState.NOT_FOUND,
    (RequestState.REQUESTING, RequestEvent.THROTTLED): RequestState.IDLE,
    (RequestState.REQUESTING, RequestEvent.NETWORK_ERROR): RequestState.IDLE,
    (RequestState.REQUESTING, RequestEvent.BAD_BODY): RequestState.FAILED,
}

TERMINAL_STATES = frozenset(
    {RequestState.SUCCEEDED, RequestState.NOT_FOUND, RequestState.FAILED}
)


def next_state(state: RequestState, event: RequestEvent) -> RequestState:
    """Look up the transition for ``event`` in ``state``.

    Raises:
        RuntimeError: If the transition is not defined
    """
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        raise RuntimeError(f"invalid transition: {event.value} in state {state.value}") from None


def parse_retry_after(value: str | None) -> int | None:
    """Parse a Retry-After header given in whole seconds.

    HTTP-date values, negative numbers, fractions and values above
    ``MAX_RETRY_AFTER`` are not accepted.
    """
    if value is None:
        return None
    value = value.strip()
    if not _RETRY_AFTER_RE.fullmatch(value):
        return None
    seconds = int(value)
    if seconds > MAX_RETRY_AFTER:
        return None
    return seconds


def backoff_for(retry_after: str | None, default: float) -> float:
    """Delay to apply before retrying a throttled request."""
    seconds = parse_retry_after(retry_after)
    if seconds is None:
        return default
    return float(seconds + RETRY_AFTER_MARGIN)


class RetryingExecutor:
    """Performs GET requests with throttling, retries and backoff.

    One executor is meant to be shared by every request in a session: the
    pending sleep carries over from one call to the next.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.Client,
        sleep: Callable[[float], None] = time.sleep,
        observer: RequestObserver | None = None,
    ):
        """Initialize the executor.

        Args:
            config: Client settings (retries, delay, timeout)
            http_client: HTTP client used for every request
            sleep: Blocking sleep function, replaced in tests
            observer: Receives request events (default: logs them)
        """
        self.config = config
        self.http_client = http_client
        self.observer = observer or LoggingObserver()
        self._sleep = sleep
        self._pending_sleep = 0.0
        self._state = RequestState.IDLE

    @property
    def pending_sleep(self) -> float:
        """Seconds to wait before the next outbound request."""
        return self._pending_sleep

    @property
    def state(self) -> RequestState:
        """State of the most recent ``get_json`` call."""
        return self._state

    def _fire(self, event: RequestEvent) -> None:
        self._state = next_state(self._state, event)

    def _schedule(self, seconds: float) -> None:
        self._pending_sleep = max(0.0, seconds)

    def get_json(self, url: str) -> Any | None:
        """GET ``url`` and decode its JSON body.

        Returns:
            The decoded body, or None when the API answered 404

        Raises:
            DecodeError: The response body could not be decoded, or a 200
                body is not JSON
            MaxRetriesExceeded: All ``max_retries + 1`` attempts failed
        """
        self._state = RequestState.IDLE
        last_error: HIBPError | None = None
        headers = {"User-Agent": self.config.user_agent}

        for attempt in range(1, self.config.max_retries + 2):
            if self._pending_sleep > 0:
                self._fire(RequestEvent.BACKOFF)
                self.observer.on_sleep(self._pending_sleep)
                self._sleep(self._pending_sleep)

            self._fire(RequestEvent.SEND)
            self.observer.on_request(url, attempt)

            response: httpx.Response | None = None
            transport_error: httpx.TransportError | None = None
            try:
                response = self.http_client.get(
                    url, headers=headers, timeout=self.config.timeout
                )
            except httpx.TransportError as e:
                transport_error = e
            except httpx.DecodingError as e:
                self._schedule(self.config.request_delay)
                self._fire(RequestEvent.BAD_BODY)
                raise DecodeError(url, f"could not decode response body: {e}") from e

            self._schedule(self.config.request_delay)

            if response is None:
                last_error = NetworkError(url, transport_error)
                self.observer.on_network_error(url, transport_error)
                self._fire(RequestEvent.NETWORK_ERROR)
                continue

            if response.status_code == 404:
                self.observer.on_not_found(url)
                self._fire(RequestEvent.MISSING)
                return None

            if response.status_code != 200:
                retry_after = response.headers.get("Retry-After")
                self._schedule(backoff_for(retry_after, self.config.request_delay))
                last_error = RateLimited(url, response.status_code, retry_after)
                self.observer.on_http_error(url, response.status_code, retry_after)
                self._fire(RequestEvent.THROTTLED)
                continue

            try:
                payload = response.json()
            except ValueError as e:
                self._fire(RequestEvent.BAD_BODY)
                raise DecodeError(url, str(e)) from e

            self.observer.on_success(url)
            self._fire(RequestEvent.OK)
            return payload

        self._fire(RequestEvent.EXHAUSTED)
        self.observer.on_give_up(url, self.config.max_retries)
        raise MaxRetriesExceeded(url, self.config.max_retries) from last_error
