"""
Per-job actions.

A job fetches bytes into a staging directory, verifies them against the md5
recorded by folo and, for uploads and migrations, pushes them to their
destination only once the checksum matched. Every failure is turned into a
``False`` result here, after logging which kind of failure it was.
"""

import logging
import os
from typing import Callable, Optional

import httpx

from ..api import IndyClient
from ..models.jobs import TransferJob
from ..utils.checksum import verify_md5
from ..utils.constants import DEFAULT_PROXY_PASSWORD, PROXY_PREFIX, TRACKING_SUFFIX
from ..utils.directories import staging_path
from ..utils.error_handling import ChecksumMismatchError, handle_http_error


class JobRunner:
    """Performs download, upload and migration jobs against an Indy client."""

    def __init__(
        self,
        client: IndyClient,
        download_dir: str,
        upload_dir: str,
        build_name: str = "",
        proxy_url: Optional[str] = None,
        proxy_password: str = DEFAULT_PROXY_PASSWORD,
        dry_run: bool = False,
    ) -> None:
        """
        Args:
            client: Client used for every transfer
            download_dir: Staging directory for downloads and migrations
            upload_dir: Cache directory for upload sources
            build_name: Replayed build; names the generic proxy tracking user
            proxy_url: Generic proxy URL for ``proxy-`` prefixed downloads
            proxy_password: Generic proxy password
            dry_run: Log actions instead of performing them
        """
        self.client = client
        self.download_dir = download_dir
        self.upload_dir = upload_dir
        self.build_name = build_name
        self.proxy_url = proxy_url
        self.proxy_password = proxy_password
        self.dry_run = dry_run

    def cache_path_for(self, original_url: str) -> str:
        """Upload cache file of an original artifact URL."""
        return staging_path(self.upload_dir, original_url)

    @staticmethod
    def _attempt(description: str, action: Callable[[], None]) -> bool:
        """Run an action, logging and swallowing the failures a job may hit."""
        try:
            action()
            return True
        except ChecksumMismatchError as e:
            logging.error("Integrity failure during %s: %s", description, e)
        except httpx.HTTPError as e:
            handle_http_error(e, description)
        except OSError as e:
            logging.error("Local I/O failure during %s: %s", description, e)
        except ValueError as e:
            logging.error("Invalid job during %s: %s", description, e)
        return False

    # ------------------------------------------------------------------------
    # Replay download
    # ------------------------------------------------------------------------

    def download(self, job: TransferJob) -> bool:
        """Fetch a recorded download from the target Indy (or the generic proxy) and verify it."""
        target_url = job.destination_url
        if self.dry_run:
            logging.warning("Dry run download, url: %s", target_url)
            return True
        return self._attempt(f"download of {target_url}", lambda: self._download(job))

    def _download(self, job: TransferJob) -> None:
        target_url = job.destination_url
        if target_url.startswith(PROXY_PREFIX):
            origin_url = target_url[len(PROXY_PREFIX) :]
            if not self.proxy_url:
                raise ValueError(f"No generic proxy configured for {origin_url}")
            file_loc = staging_path(self.download_dir, origin_url)
            self.client.download_file_by_proxy(
                origin_url, file_loc, self.proxy_url, self.build_name + TRACKING_SUFFIX, self.proxy_password
            )
        else:
            file_loc = staging_path(self.download_dir, target_url)
            self.client.download_file(target_url, file_loc)
        verify_md5(file_loc, job.checksum)

    # ------------------------------------------------------------------------
    # Replay upload
    # ------------------------------------------------------------------------

    def upload(self, job: TransferJob) -> bool:
        """Fetch (or reuse) a recorded upload from the original Indy, verify it, push it to the target."""
        if self.dry_run:
            logging.warning(
                "Dry run upload, originalArtiURL: %s, targetArtiURL: %s", job.source_url, job.destination_url
            )
            return True
        return self._attempt(f"upload of {job.destination_url}", lambda: self._upload(job))

    def _upload(self, job: TransferJob) -> None:
        cache_file = self.cache_path_for(job.source_url)
        if os.path.exists(cache_file):
            logging.info("File already downloaded, reuse cacheFile: %s", cache_file)
        else:
            self.client.download_file(job.source_url, cache_file)

        try:
            verify_md5(cache_file, job.checksum)
        except ChecksumMismatchError:
            # Bad cache entries are not kept
            os.remove(cache_file)
            raise

        self.client.upload_file(job.destination_url, cache_file)

    # ------------------------------------------------------------------------
    # Migration
    # ------------------------------------------------------------------------

    def migrate(self, job: TransferJob) -> bool:
        """Fetch an artifact from the target Indy, verify it, upload it to the migration destination."""
        if self.dry_run:
            logging.warning("Dry run download, url: %s", job.source_url)
            logging.warning("Dry run upload, url: %s", job.destination_url)
            return True
        return self._attempt(f"migration of {job.source_url}", lambda: self._migrate(job))

    def _migrate(self, job: TransferJob) -> None:
        file_loc = staging_path(self.download_dir, job.source_url)
        self.client.download_file(job.source_url, file_loc)
        verify_md5(file_loc, job.checksum)
        self.client.upload_file(job.destination_url, file_loc)


__all__ = ["JobRunner"]
