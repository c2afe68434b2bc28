"""declint CLI entry point: Click group with subcommands."""

import click

from declint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="declint")
def cli() -> None:
    """declint - find duplicate properties in CSS declaration blocks."""


# Import and register subcommands
from declint.cli.lint import lint  # noqa: E402
from declint.cli.inspect import inspect  # noqa: E402

cli.add_command(lint)
cli.add_command(inspect)
