"""
Seal command for Indy Tool CLI.

Seals the folo record of a build, e.g. after a replay run with an earlier
seal failure.
"""

import sys

import click

from ..api import IndyClient
from ..transfer import log_seal_result
from ..utils import setup_logging
from ..utils.constants import EXIT_GENERAL_ERROR
from ..utils.error_handling import with_error_handling


@with_error_handling("sealing folo record", exit_on_error=True, exit_code=EXIT_GENERAL_ERROR)
def _seal(target_indy: str, build_name: str) -> bool:
    with IndyClient(target_indy) as client:
        return client.seal_folo_record(build_name)


@click.command()
@click.argument("target_indy")
@click.argument("build_name")
@click.pass_context
def seal(ctx: click.Context, target_indy: str, build_name: str) -> None:
    """Seal the folo record of BUILD_NAME on TARGET_INDY."""
    setup_logging(ctx.obj["debug"], use_wrapping=True)

    sealed = _seal(target_indy, build_name)

    log_seal_result(build_name, sealed)
    if not sealed:
        sys.exit(EXIT_GENERAL_ERROR)


__all__ = ["seal"]
