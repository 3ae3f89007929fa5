"""
hibpleaks CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from hibpleaks import __version__
from hibpleaks.hibp.cli import check


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr through rich."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="hibpleaks")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """hibpleaks - Have I Been Pwned account leak lookups

    Searches the Have I Been Pwned API for breaches and pastes that
    mention the given accounts. Requests are throttled to stay under the
    API's rate limit.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose=verbose, quiet=quiet)


main.add_command(check)


if __name__ == "__main__":
    main()
