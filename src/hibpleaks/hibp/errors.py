"""
Exceptions raised by the Have I Been Pwned client.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class HIBPError(Exception):
    """Base class for all HIBP lookup failures."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class NetworkError(HIBPError):
    """Transport-level failure (connection refused, timeout, DNS, read)."""

    def __init__(self, url: str, cause: Exception):
        super().__init__(url, f"network error for {url}: {cause}")
        self.cause = cause


class RateLimited(HIBPError):
    """Non-200, non-404 response from the API."""

    def __init__(self, url: str, status_code: int, retry_after: str | None = None):
        super().__init__(
            url,
            f"got http error {status_code} for {url} (Retry-After {retry_after or '-'})",
        )
        self.status_code = status_code
        self.retry_after = retry_after


class DecodeError(HIBPError):
    """A 200 response whose body is not the expected JSON structure."""

    def __init__(self, url: str, reason: str):
        super().__init__(url, f"invalid response from {url}: {reason}")
        self.reason = reason


class MaxRetriesExceeded(HIBPError):
    """Every attempt for a URL failed."""

    def __init__(self, url: str, max_retries: int):
        super().__init__(url, f"max retries exceeded ({max_retries}) for {url}")
        self.max_retries = max_retries
