"""
Observers notified by the request executor.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging

logger = logging.getLogger(__name__)


class RequestObserver:
    """Receives request lifecycle events. All hooks default to no-ops."""

    def on_sleep(self, seconds: float) -> None:
        """Called before waiting ``seconds`` ahead of the next attempt."""

    def on_request(self, url: str, attempt: int) -> None:
        """Called as attempt number ``attempt`` (from 1) is sent."""

    def on_network_error(self, url: str, error: Exception) -> None:
        """Called when an attempt failed without an HTTP response."""

    def on_http_error(self, url: str, status_code: int, retry_after: str | None) -> None:
        """Called for a response other than 200 or 404; it will be retried."""

    def on_not_found(self, url: str) -> None:
        """Called when the API answered 404 (no data for the account)."""

    def on_success(self, url: str) -> None:
        """Called when a 200 response was decoded."""

    def on_give_up(self, url: str, max_retries: int) -> None:
        """Called once every attempt for ``url`` has failed."""


class LoggingObserver(RequestObserver):
    """Default observer: writes every event to the module logger."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def on_sleep(self, seconds: float) -> None:
        self.log.info(f"sleeping {seconds:g}s")

    def on_request(self, url: str, attempt: int) -> None:
        self.log.info(f"requesting {url} (attempt {attempt})")

    def on_network_error(self, url: str, error: Exception) -> None:
        self.log.warning(f"network error for {url}: {error}")

    def on_http_error(self, url: str, status_code: int, retry_after: str | None) -> None:
        self.log.warning(
            f"got http error {status_code} for url {url} (Retry-After {retry_after or '-'})"
        )

    def on_not_found(self, url: str) -> None:
        self.log.debug(f"no data for {url}")

    def on_success(self, url: str) -> None:
        self.log.debug(f"got response for {url}")

    def on_give_up(self, url: str, max_retries: int) -> None:
        self.log.error(f"max retries exceeded ({max_retries}) for {url}")
