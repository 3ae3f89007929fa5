"""
CLI commands for Have I Been Pwned account lookups.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, Iterator

import click
from rich.console import Console
from rich.markup import escape

from hibpleaks.hibp.client import HIBPClient
from hibpleaks.hibp.config import ClientConfig
from hibpleaks.hibp.errors import HIBPError
from hibpleaks.hibp.formatters import OutputFormat

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def read_accounts(lines: Iterable[str]) -> Iterator[str]:
    """Yield one account per non-blank line."""
    for line in lines:
        account = line.strip()
        if account:
            yield account


@click.command("check")
@click.option("--account", "-a", help="Account (email) to search leaks for")
@click.option(
    "--filename", "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input file of accounts to search, one per line",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write results to this file instead of stdout",
)
@click.option(
    "--format", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    show_default=True,
    help="Output format: text or jsonl (JSON lines)",
)
@click.option(
    "--request-delay", "-d",
    type=click.FloatRange(min=0),
    help="Seconds to wait between API calls (default: 10)",
)
@click.option("--max-retries", type=click.IntRange(min=0), help="Retries per request (default: 10)")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Per-request timeout in seconds (default: 10)",
)
@click.option("--base-url", help="API base URL")
def check(
    account: str | None,
    filename: Path | None,
    output: Path | None,
    output_format: str,
    request_delay: float | None,
    max_retries: int | None,
    timeout: float | None,
    base_url: str | None,
) -> None:
    """Search breaches and pastes for one account or a file of accounts.

    Accounts are looked up one at a time, in input order. The first failed
    lookup stops the run.

    Examples:
        hibpleaks check -a user@example.com
        hibpleaks check -f accounts.txt --format jsonl -o leaks.jsonl
        hibpleaks check -f accounts.txt -d 2
    """
    if (account is None) == (filename is None):
        raise click.UsageError("please choose either --account or --filename")
    if account is not None and not account.strip():
        raise click.BadParameter("account must not be empty", param_hint="--account")

    try:
        config = ClientConfig.from_env().with_overrides(
            base_url=base_url,
            max_retries=max_retries,
            request_delay=request_delay,
            timeout=timeout,
        )
    except ValueError as e:
        raise click.ClickException(f"invalid configuration: {e}")

    fmt = OutputFormat(output_format)

    if filename is not None:
        try:
            lines = filename.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise click.ClickException(f"cannot read {filename}: {e}")
        accounts = read_accounts(lines)
    else:
        accounts = read_accounts([account])

    with ExitStack() as stack:
        if output is not None:
            logger.info(f"writing results to {output}")
        out = stack.enter_context(
            click.open_file(str(output) if output else "-", "w", encoding="utf-8")
        )
        client = stack.enter_context(HIBPClient(config))

        checked = 0
        for current in accounts:
            try:
                breaches, pastes = client.fetch_leaks(current)
            except HIBPError as e:
                console.print(f"[red]Error:[/red] {escape(current)}: {escape(str(e))}", soft_wrap=True)
                raise SystemExit(1)

            click.echo(fmt.render(current, breaches, pastes), file=out)
            checked += 1

        logger.info(f"checked {checked} account(s)")
