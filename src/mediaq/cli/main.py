"""mediaq CLI entry point: Click group with subcommands."""

import logging

import click

from mediaq import __version__
from mediaq.config import MediaqConfig


@click.group()
@click.version_option(version=__version__, prog_name="mediaq")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """mediaq - parse CSS media queries and evaluate them against a viewport."""
    config = MediaqConfig()
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from mediaq.cli.check import check  # noqa: E402
from mediaq.cli.inspect import inspect  # noqa: E402

cli.add_command(check)
cli.add_command(inspect)
