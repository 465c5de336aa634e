"""
Replay service coordinating a whole replay or migration run.

This module wires the folo record, the remapping policies, the transfer
executor and the migration orchestrator together for one invocation.
"""

import logging
from typing import Callable, Optional

from ..api import IndyClient
from ..models.context import ReplayConfig, ReplayContext, decide_meta
from ..models.folo import TrackedContent
from ..remap import (
    prepare_download_entries,
    prepare_migrate_entries,
    prepare_upload_entries,
    validate_indy_url,
)
from ..transfer import (
    JobRunner,
    MigrationOrchestrator,
    log_phase_result,
    log_phase_start,
    log_seal_result,
    run_batch,
)
from ..utils.directories import prepare_down_upload_directories

ClientFactory = Callable[[str], IndyClient]


def load_folo_record(
    original_indy: str, folo_id: str, folo_file: Optional[str] = None, client_factory: ClientFactory = IndyClient
) -> TrackedContent:
    """
    Load the folo record to replay, from a saved JSON file or from the original Indy.

    Raises:
        httpx.HTTPError: If the record cannot be fetched
        OSError, ValueError: If the file cannot be read or parsed
    """
    if folo_file:
        logging.info("Loading folo record from file: %s", folo_file)
        return TrackedContent.from_json_file(folo_file)

    with client_factory(original_indy) as client:
        return client.get_folo_record(folo_id)


class ReplayService:
    """
    High-level service for replay and migration runs.

    A run either replays a build (downloads then uploads, then seal) or migrates
    its downloads to another Indy; it never does both.
    """

    def __init__(self, config: ReplayConfig, client_factory: ClientFactory = IndyClient) -> None:
        """
        Args:
            config: Run configuration, resolved once at startup
            client_factory: Builds the Indy client for a base URL
        """
        self.config = config
        self.client_factory = client_factory

    def run(self, context: ReplayContext, folo_record: TrackedContent) -> bool:
        """
        Replay or migrate a folo record.

        Returns:
            True on success, False when provisioning or any transfer batch failed

        Raises:
            ValueError: If an Indy URL is invalid
            OSError: If the staging directories cannot be prepared
        """
        validate_indy_url(context.original_indy)
        validate_indy_url(context.target_indy)
        migrate_host = None
        if context.migrate_enabled:
            migrate_host = validate_indy_url(context.migrate_target_indy or "")
            logging.warning("Migrate to host %s", migrate_host)

        config = self.config
        with self.client_factory(context.target_indy) as client:
            meta = decide_meta(context.package_type)
            if not client.prepare_indy_repos(context.build_name, meta, context.additional_repos, config.dry_run):
                logging.error("Failed to prepare Indy repositories for %s", context.build_name)
                return False

            download_dir, upload_dir = prepare_down_upload_directories(
                folo_record.tracking_key.id,
                config.download_dir,
                config.upload_dir,
                mount_path=config.mount_path,
                clear_cache=config.clear_cache,
                dry_run=config.dry_run,
            )
            runner = JobRunner(
                client,
                download_dir,
                upload_dir,
                build_name=context.build_name,
                proxy_url=context.proxy_url,
                proxy_password=config.proxy_password,
                dry_run=config.dry_run,
            )

            try:
                if migrate_host:
                    return self._migrate(client, runner, context, migrate_host, folo_record)
                return self._replay(client, runner, context, folo_record)
            finally:
                self._clean_generic_proxy_repos(client, context, folo_record)

    def _migrate(
        self,
        client: IndyClient,
        runner: JobRunner,
        context: ReplayContext,
        migrate_host: str,
        folo_record: TrackedContent,
    ) -> bool:
        jobs = prepare_migrate_entries(
            context.target_indy, migrate_host, context.package_type, context.build_name, folo_record
        )
        orchestrator = MigrationOrchestrator(
            client,
            runner,
            delete_delay=self.config.delete_delay,
            settle_delay=self.config.settle_delay,
            dry_run=self.config.dry_run,
        )

        log_phase_start("migration", len(jobs))
        result = orchestrator.run(jobs)
        log_phase_result("migration", result, "downloading")
        return result.succeeded

    def _replay(
        self, client: IndyClient, runner: JobRunner, context: ReplayContext, folo_record: TrackedContent
    ) -> bool:
        workers = self.config.workers

        downloads = prepare_download_entries(
            context.target_indy,
            context.build_name,
            context.package_type,
            folo_record,
            context.additional_repos,
            context.proxy_enabled,
        )
        if downloads:
            log_phase_start("downloads", len(downloads))
            result = run_batch(downloads, runner.download, workers)
            log_phase_result("downloads", result, "downloading")
            if not result.succeeded:
                return False

        uploads = prepare_upload_entries(context.original_indy, context.target_indy, context.build_name, folo_record)
        if uploads:
            log_phase_start("uploads", len(uploads))
            result = run_batch(uploads, runner.upload, workers)
            log_phase_result("uploads", result, "uploading")
            if not result.succeeded:
                return False

        if not self.config.dry_run:
            log_seal_result(context.build_name, client.seal_folo_record(context.build_name))
        return True

    def _clean_generic_proxy_repos(
        self, client: IndyClient, context: ReplayContext, folo_record: TrackedContent
    ) -> None:
        if not context.proxy_enabled:
            logging.info("No generic proxy repos to clean up. Proxy not enabled.")
            return
        if self.config.dry_run:
            logging.warning("Dry run clean up generic proxy repos for %s", context.build_name)
            return
        client.clean_generic_proxy_repos(context.build_name, folo_record)


__all__ = ["ReplayService", "load_folo_record", "ClientFactory"]
