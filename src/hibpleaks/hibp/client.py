"""
Have I Been Pwned API client.

Looks up breaches and pastes for an account through the v2 account
endpoints. Requests are sequential and throttled by ``RetryingExecutor``.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import time
from typing import Any, Callable
from urllib.parse import quote

import httpx

from hibpleaks.hibp.config import ClientConfig
from hibpleaks.hibp.errors import DecodeError
from hibpleaks.hibp.models import Breach, Leaks, Paste, sort_breaches, sort_pastes
from hibpleaks.hibp.observers import RequestObserver
from hibpleaks.hibp.retry import RetryingExecutor

logger = logging.getLogger(__name__)

BREACHED_ACCOUNT_PATH = "/api/v2/breachedaccount/{account}"
PASTE_ACCOUNT_PATH = "/api/v2/pasteaccount/{account}"


def normalize_account(account: str) -> str:
    """Strip whitespace, rejecting empty accounts."""
    account = account.strip()
    if not account:
        raise ValueError("account must not be empty")
    return account


class HIBPClient:
    """Client for the Have I Been Pwned account endpoints.

    Example:
        with HIBPClient() as client:
            breaches, pastes = client.fetch_leaks("user@example.com")
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
        observer: RequestObserver | None = None,
    ):
        """Initialize HIBP client.

        Args:
            config: Client settings (default: ClientConfig())
            http_client: Pre-built HTTP client; closed by the caller
            sleep: Blocking sleep used for throttling
            observer: Receives request events (default: logging)
        """
        self.config = config or ClientConfig()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=httpx.Timeout(self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
        )
        self.executor = RetryingExecutor(
            self.config, self._http_client, sleep=sleep, observer=observer
        )

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "HIBPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _url(self, path_template: str, account: str) -> str:
        return self.config.base_url + path_template.format(account=quote(account, safe="@"))

    def _get_records(self, url: str) -> list[dict[str, Any]]:
        payload = self.executor.get_json(url)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise DecodeError(url, f"expected a JSON array, got {type(payload).__name__}")
        for record in payload:
            if not isinstance(record, dict):
                raise DecodeError(url, f"expected JSON objects, got {type(record).__name__}")
        return payload

    def fetch_breaches(self, account: str) -> list[Breach]:
        """Get breaches for an account, most recent first.

        Returns:
            List of breaches, empty when the account is not in any breach

        Raises:
            DecodeError: A record has fields of the wrong type
        """
        url = self._url(BREACHED_ACCOUNT_PATH, normalize_account(account))
        records = self._get_records(url)
        try:
            return sort_breaches([Breach.from_api_response(r) for r in records])
        except (ValueError, TypeError) as e:
            raise DecodeError(url, f"malformed breach record: {e}") from e

    def fetch_pastes(self, account: str) -> list[Paste]:
        """Get pastes mentioning an account, most recent first."""
        url = self._url(PASTE_ACCOUNT_PATH, normalize_account(account))
        records = self._get_records(url)
        try:
            return sort_pastes([Paste.from_api_response(r) for r in records])
        except (ValueError, TypeError) as e:
            raise DecodeError(url, f"malformed paste record: {e}") from e

    def fetch_leaks(self, account: str) -> Leaks:
        """Get breaches and pastes for an account.

        The breach lookup runs first; if it fails the paste lookup is not
        attempted. Any failure is raised without partial results.
        """
        breaches = self.fetch_breaches(account)
        pastes = self.fetch_pastes(account)
        logger.debug(f"{account}: {len(breaches)} breaches, {len(pastes)} pastes")
        return Leaks(breaches=breaches, pastes=pastes)
