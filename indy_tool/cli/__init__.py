"""
Unified CLI entry point for Indy Tool operations using Click.

This module provides the main CLI group and shared options.
"""

import sys
from typing import Optional

import click

from . import replay, seal
from .._version import __version__
from ..utils.constants import EXIT_USER_INTERRUPT, MAX_WORKERS


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="indy-tool")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a TOML config file whose [replay] section overrides staging directories and delays",
)
@click.option(
    "-d",
    "--debug",
    count=True,
    help="Increase verbosity (use -d for INFO, -dd for DEBUG, -ddd for DEBUG with HTTP logs)",
)
@click.option(
    "-w",
    "--workers",
    type=click.IntRange(1, MAX_WORKERS),
    default=None,
    help="Number of concurrent transfer workers; 1 runs sequentially (default: 1)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], debug: int, workers: Optional[int]) -> None:
    """Indy Tool - Replay and migrate tracked build artifacts between Indy instances."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["debug"] = debug
    ctx.obj["workers"] = workers


cli.add_command(replay.replay)
cli.add_command(seal.seal)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()  # pylint: disable=no-value-for-parameter  # Click handles parameters
    except KeyboardInterrupt:
        click.echo("\n\nOperation cancelled by user", err=True)
        sys.exit(EXIT_USER_INTERRUPT)


__all__ = ["cli", "main"]
