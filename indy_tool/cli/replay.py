"""
Replay command for Indy Tool CLI.

This module provides the replay command, which replays a tracked build on a
target Indy or, with ``--migrate-to``, migrates its downloads to another Indy.
"""

import logging
import sys
from typing import Optional, Tuple

import click
import httpx
from pydantic import ValidationError

from ..models.context import ReplayConfig, ReplayContext
from ..remap import generate_build_name
from ..services import ReplayService, load_folo_record
from ..utils import setup_logging
from ..utils.constants import EXIT_GENERAL_ERROR, SUPPORTED_PACKAGE_TYPES
from ..utils.error_handling import handle_generic_error, handle_http_error, log_and_exit


@click.command()
@click.argument("original_indy")
@click.argument("target_indy")
@click.argument("folo_id")
@click.argument("package_type", type=click.Choice(SUPPORTED_PACKAGE_TYPES))
@click.option("-p", "--proxy-url", help="Indy generic proxy URL; generic downloads go through it when set.")
@click.option(
    "-m",
    "--migrate-to",
    "migrate_to",
    help="Migrate the tracked downloads to this Indy instead of replaying the build.",
)
@click.option("-b", "--build-name", help="Name of the replayed build (default: random build-test-NNNNNN).")
@click.option(
    "-a",
    "--additional-repo",
    "additional_repos",
    multiple=True,
    help="Store key read directly instead of through the build group (repeatable).",
)
@click.option(
    "--folo-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Read the folo record from a saved JSON file instead of the original Indy.",
)
@click.option(
    "-c",
    "--clear-cache",
    is_flag=True,
    help="Clear cached built artifact files. This will force download from origin again.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print repo creation, downloads, uploads and deletes without really doing them.",
)
@click.pass_context
def replay(  # pylint: disable=too-many-positional-arguments,too-many-arguments
    ctx: click.Context,
    original_indy: str,
    target_indy: str,
    folo_id: str,
    package_type: str,
    proxy_url: Optional[str],
    migrate_to: Optional[str],
    build_name: Optional[str],
    additional_repos: Tuple[str, ...],
    folo_file: Optional[str],
    clear_cache: bool,
    dry_run: bool,
) -> None:
    """Replay the tracked build FOLO_ID of ORIGINAL_INDY on TARGET_INDY."""
    try:
        config = ReplayConfig.load(
            ctx.obj["config"],
            workers=ctx.obj["workers"],
            clear_cache=clear_cache or None,
            dry_run=dry_run or None,
        )
        context = ReplayContext(
            original_indy=original_indy,
            target_indy=target_indy,
            package_type=package_type,
            build_name=build_name or generate_build_name(),
            proxy_url=proxy_url,
            migrate_target_indy=migrate_to,
            additional_repos=list(additional_repos),
        )
    except (ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_GENERAL_ERROR)

    setup_logging(ctx.obj["debug"], use_wrapping=True, concurrent=config.workers > 1)
    logging.warning("Replaying %s as %s on %s", folo_id, context.build_name, context.target_indy)

    try:
        folo_record = load_folo_record(original_indy, folo_id, folo_file)
        succeeded = ReplayService(config).run(context, folo_record)
    except httpx.HTTPError as e:
        handle_http_error(e, "replay")
        sys.exit(EXIT_GENERAL_ERROR)
    except (OSError, ValueError) as e:
        handle_generic_error(e, "replay")
        sys.exit(EXIT_GENERAL_ERROR)

    if not succeeded:
        log_and_exit(f"Replay of {folo_id} as {context.build_name} failed", EXIT_GENERAL_ERROR)

    logging.warning("Replay of %s as %s finished successfully", folo_id, context.build_name)


__all__ = ["replay"]
