"""
Data models for Have I Been Pwned API responses.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, NamedTuple


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an HIBP ISO timestamp such as ``2017-03-08T23:49:53Z``."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _field(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Read an optional field, rejecting values of the wrong type."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise TypeError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Breach:
    """Represents a single data breach from HIBP."""

    name: str
    title: str
    domain: str
    # Kept as the API's YYYY-MM-DD string: lexical order is chronological
    breach_date: str
    added_date: datetime | None
    modified_date: datetime | None
    pwn_count: int
    description: str
    data_classes: tuple[str, ...]
    is_verified: bool
    is_fabricated: bool
    is_sensitive: bool
    is_retired: bool
    is_spam_list: bool
    logo_path: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Breach":
        """Create Breach from HIBP API response."""
        return cls(
            name=data.get("Name") or "",
            title=data.get("Title") or "",
            domain=data.get("Domain") or "",
            breach_date=_field(data, "BreachDate", str, ""),
            added_date=parse_timestamp(data.get("AddedDate")),
            modified_date=parse_timestamp(data.get("ModifiedDate")),
            pwn_count=int(data.get("PwnCount") or 0),
            description=data.get("Description") or "",
            data_classes=tuple(str(c) for c in _field(data, "DataClasses", list, [])),
            is_verified=bool(data.get("IsVerified", False)),
            is_fabricated=bool(data.get("IsFabricated", False)),
            is_sensitive=bool(data.get("IsSensitive", False)),
            is_retired=bool(data.get("IsRetired", False)),
            is_spam_list=bool(data.get("IsSpamList", False)),
            logo_path=data.get("LogoPath"),
        )

    @property
    def has_passwords(self) -> bool:
        """Whether passwords were part of the exposed data."""
        return "Passwords" in self.data_classes

    @property
    def year(self) -> str:
        """Year of the breach, "?" when the date is unknown."""
        return self.breach_date[:4] or "?"

    @property
    def label(self) -> str:
        """Domain when the breach has one, title otherwise."""
        return self.domain or self.title

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "title": self.title,
            "domain": self.domain,
            "breach_date": self.breach_date,
            "added_date": _isoformat(self.added_date),
            "modified_date": _isoformat(self.modified_date),
            "pwn_count": self.pwn_count,
            "description": self.description,
            "data_classes": list(self.data_classes),
            "is_verified": self.is_verified,
            "is_fabricated": self.is_fabricated,
            "is_sensitive": self.is_sensitive,
            "is_retired": self.is_retired,
            "is_spam_list": self.is_spam_list,
            "logo_path": self.logo_path,
        }


@dataclass(frozen=True)
class Paste:
    """Represents a paste containing the email address."""

    source: str
    id: str
    title: str | None
    date: datetime | None
    email_count: int

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Paste":
        """Create Paste from HIBP API response."""
        return cls(
            source=_field(data, "Source", str, ""),
            id=str(data.get("Id") or ""),
            title=data.get("Title"),
            date=parse_timestamp(data.get("Date")),
            email_count=int(data.get("EmailCount") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source,
            "id": self.id,
            "title": self.title,
            "date": _isoformat(self.date),
            "email_count": self.email_count,
        }


class Leaks(NamedTuple):
    """Breaches and pastes found for one account."""

    breaches: list[Breach]
    pastes: list[Paste]

    @property
    def is_empty(self) -> bool:
        return not self.breaches and not self.pastes


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def sort_breaches(breaches: list[Breach]) -> list[Breach]:
    """Most recent breach first."""
    return sorted(breaches, key=lambda b: b.breach_date, reverse=True)


def sort_pastes(pastes: list[Paste]) -> list[Paste]:
    """Most recent paste first; undated pastes last."""
    return sorted(pastes, key=lambda p: p.date or _OLDEST, reverse=True)
