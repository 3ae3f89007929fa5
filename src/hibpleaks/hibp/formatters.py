"""
Output formats for account leak results.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
from enum import Enum

from hibpleaks.hibp.models import Breach, Paste


def unique(items: list[str]) -> list[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def render_text(account: str, breaches: list[Breach], pastes: list[Paste]) -> str:
    """One-line human readable summary.

    Breaches are expected most recent first.
    """
    if not breaches and not pastes:
        return f"{account}: no leaks"

    if not breaches:
        summary = "no breaches"
    else:
        latest, oldest = breaches[0], breaches[-1]
        verified = "verified" if latest.is_verified else "unverified"
        exposure = "password" if latest.has_passwords else "account only"
        summary = (
            f"{len(breaches)} breaches between {oldest.year}-{latest.year}. "
            f"latest from {latest.label} [{verified} {exposure}]"
        )

    if pastes:
        sources = ",".join(unique([p.source for p in pastes]))
        summary += f" | {len(pastes)} pastes from {sources}"

    return f"{account}: {summary}"


def render_jsonl(account: str, breaches: list[Breach], pastes: list[Paste]) -> str:
    """One compact JSON object per account."""
    return json.dumps(
        {
            "account": account,
            "breaches": [b.to_dict() for b in breaches],
            "pastes": [p.to_dict() for p in pastes],
        },
        ensure_ascii=False,
    )


class OutputFormat(str, Enum):
    """Output modes selectable from the command line."""

    TEXT = "text"
    JSONL = "jsonl"

    def render(self, account: str, breaches: list[Breach], pastes: list[Paste]) -> str:
        """Render one account's results as a single line (no newline)."""
        if self is OutputFormat.JSONL:
            return render_jsonl(account, breaches, pastes)
        return render_text(account, breaches, pastes)
