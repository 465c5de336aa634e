"""Transfer job models.

Jobs are derived from a folo record for one run and discarded afterwards.
"""

import logging
from typing import Dict, List

from pydantic import ConfigDict, Field

from .base import IndyBaseModel


class TransferJob(IndyBaseModel):
    """
    Unit of work handed to the transfer executor.

    Attributes:
        checksum: Expected md5 of the transferred bytes
        source_url: Where the bytes are fetched from (empty for replay downloads)
        destination_url: Where the bytes are fetched from or pushed to, depending on the job
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    checksum: str = Field(min_length=1)
    source_url: str = ""
    destination_url: str = ""


class MigrationJob(TransferJob):
    """
    Migration job with the destination paths to purge before re-copying.

    Attributes:
        delete_urls: Destination URLs deleted before the copy, in deletion order
    """

    delete_urls: List[str] = Field(default_factory=list)


JobMap = Dict[str, TransferJob]


def add_job(jobs: Dict[str, TransferJob], path: str, job: TransferJob) -> None:
    """Add a job keyed by artifact path; a repeated path replaces the earlier job."""
    if path in jobs:
        logging.warning("Duplicate path %s in folo record, keeping the last entry", path)
    jobs[path] = job


__all__ = ["TransferJob", "MigrationJob", "JobMap", "add_job"]
