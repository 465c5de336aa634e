"""
Reporting utilities for replay and migration phases.

Phase banners and results are logged at WARNING level so they are visible
without ``--debug``.
"""

import logging

from ..models.results import BatchResult
from ..utils.constants import SEPARATOR_WIDTH

SEPARATOR = "=" * SEPARATOR_WIDTH


def log_phase_start(phase: str, job_count: int) -> None:
    """Log the banner opening a phase (``downloads``, ``uploads``, ``migration``)."""
    logging.warning("Start handling %s artifacts (%d).", phase, job_count)
    logging.warning(SEPARATOR)


def log_phase_result(phase: str, result: BatchResult, failure_reason: str) -> None:
    """
    Log the banner closing a phase.

    Args:
        phase: Phase name
        result: Outcome of the phase batch
        failure_reason: Failure wording, e.g. ``downloading``
    """
    logging.warning(SEPARATOR)
    if result.succeeded:
        logging.warning("%s artifacts handling finished: %d artifact(s).", phase.capitalize(), result.completed)
        return

    logging.error(
        "Build test failed due to some %s errors. Please see above logs to see the details.", failure_reason
    )
    logging.error(
        "%s: %d/%d successful, %d failed, %d not attempted",
        phase.capitalize(),
        result.completed,
        result.total,
        result.failed,
        result.skipped,
    )


def log_seal_result(build_name: str, sealed: bool) -> None:
    """Log the outcome of sealing the replayed build's folo record."""
    if sealed:
        logging.warning("Folo record sealing succeeded for %s", build_name)
    else:
        logging.warning("Warning: folo record sealing failed for %s", build_name)


__all__ = ["SEPARATOR", "log_phase_start", "log_phase_result", "log_seal_result"]
