"""
Have I Been Pwned (HIBP) integration module.

Looks up breaches and pastes for email accounts with throttled,
retrying requests against the HIBP API.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from hibpleaks.hibp.models import (
    Breach,
    Leaks,
    Paste,
)
from hibpleaks.hibp.config import ClientConfig
from hibpleaks.hibp.errors import (
    DecodeError,
    HIBPError,
    MaxRetriesExceeded,
    NetworkError,
    RateLimited,
)
from hibpleaks.hibp.client import HIBPClient
from hibpleaks.hibp.formatters import OutputFormat

__all__ = [
    "HIBPClient",
    "ClientConfig",
    "Breach",
    "Paste",
    "Leaks",
    "OutputFormat",
    "HIBPError",
    "NetworkError",
    "RateLimited",
    "DecodeError",
    "MaxRetriesExceeded",
]
