"""
Configuration for the Have I Been Pwned client.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from dataclasses import dataclass, replace

from hibpleaks import __version__

HIBP_BASE_URL = "https://haveibeenpwned.com"
DEFAULT_MAX_RETRIES = 10
DEFAULT_REQUEST_DELAY = 10.0  # seconds
DEFAULT_HTTP_TIMEOUT = 10.0  # seconds
DEFAULT_USER_AGENT = f"hibpleaks/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every request a client makes."""

    base_url: str = HIBP_BASE_URL
    max_retries: int = DEFAULT_MAX_RETRIES
    # HIBP blocks addresses that request too fast, so every request after the
    # first waits at least this long
    request_delay: float = DEFAULT_REQUEST_DELAY
    timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.request_delay < 0:
            raise ValueError(f"request_delay must be >= 0, got {self.request_delay}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from HIBPLEAKS_* environment variables."""
        return cls(
            base_url=os.environ.get("HIBPLEAKS_BASE_URL", HIBP_BASE_URL),
            max_retries=int(os.environ.get("HIBPLEAKS_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
            request_delay=float(os.environ.get("HIBPLEAKS_REQUEST_DELAY", DEFAULT_REQUEST_DELAY)),
            timeout=float(os.environ.get("HIBPLEAKS_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
            user_agent=os.environ.get("HIBPLEAKS_USER_AGENT", DEFAULT_USER_AGENT),
        )

    def with_overrides(self, **values) -> "ClientConfig":
        """Return a copy with every non-None value replaced."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})
