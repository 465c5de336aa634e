"""
Migration of tracked downloads to another Indy.

Every destination copy of every job is deleted before anything is copied, and
the copy itself runs strictly sequentially.
"""

import logging
import time
from typing import Mapping

from ..api import IndyClient
from ..models.jobs import MigrationJob
from ..models.results import BatchResult
from .executor import run_sequential
from .jobs import JobRunner


class MigrationOrchestrator:
    """Delete-then-recopy protocol for a batch of migration jobs."""

    def __init__(
        self,
        client: IndyClient,
        runner: JobRunner,
        delete_delay: float,
        settle_delay: float,
        dry_run: bool = False,
    ) -> None:
        """
        Args:
            client: Client used for deletes on the migration destination
            runner: Job runner performing the fetch, verify and upload of each job
            delete_delay: Pause after each delete, for the destination to index the removal
            settle_delay: Pause before copying, for the origin to finish handling its events
            dry_run: Log deletes and transfers without performing them
        """
        self.client = client
        self.runner = runner
        self.delete_delay = delete_delay
        self.settle_delay = settle_delay
        self.dry_run = dry_run

    def delete_artifact(self, url: str) -> bool:
        """Delete one destination copy. Failures are logged and reported, never raised."""
        logging.info("Deleting %s", url)
        if self.dry_run:
            logging.warning("Dry run delete, url: %s", url)
            return True

        deleted = self.client.delete_artifact(url)
        time.sleep(self.delete_delay)
        if not deleted:
            logging.warning("Deletion failed for %s", url)
        return deleted

    def delete_phase(self, jobs: Mapping[str, MigrationJob]) -> int:
        """
        Delete every destination copy of every job.

        A missing copy counts as deleted, so the phase can be repeated safely.

        Returns:
            Number of deletes that failed
        """
        failures = 0
        for path, job in jobs.items():
            if not job.delete_urls:
                logging.warning("No delete target for %s", path)
            for url in job.delete_urls:
                if not self.delete_artifact(url):
                    failures += 1
        if failures:
            logging.warning("%d deletion(s) failed, continuing with migration", failures)
        return failures

    def run(self, jobs: Mapping[str, MigrationJob]) -> BatchResult:
        """
        Purge destination copies, wait for the origin to settle, then copy sequentially.

        Returns:
            BatchResult of the copy phase; it stops at the first failed job
        """
        self.delete_phase(jobs)

        logging.warning("Waiting %ss for Indy events to be handled...", self.settle_delay)
        if not self.dry_run:
            time.sleep(self.settle_delay)

        return run_sequential(jobs, self.runner.migrate)


__all__ = ["MigrationOrchestrator"]
