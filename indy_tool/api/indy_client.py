"""
Indy REST client.

This module provides the IndyClient class, which wraps the Indy endpoints a
replay needs:

    - folo record read and seal (``api/folo/admin``)
    - store provisioning and removal (``api/admin/stores``)
    - content transport: download, download through the generic proxy, upload
      and delete of single artifacts

Transport methods raise ``httpx.HTTPError`` and ``OSError`` so that the job
layer can tell transport failures from local I/O failures; bookkeeping calls
(seal, store deletion, artifact deletion) log and return a boolean.
"""

# Standard library imports
import logging
import os
import threading
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

# Third-party imports
import httpx

# Local imports
from ..models.context import BuildMeta
from ..models.folo import TrackedContent
from ..remap.paths import generic_repo_name, join_url_path, norm_indy_url
from ..utils import create_session_with_retry
from ..utils.constants import (
    FOLO_ADMIN_API_PATH,
    GENERIC_PACKAGE_TYPE,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    STORES_API_PATH,
)
from ..utils.error_handling import handle_http_error

# Streaming chunk size for downloads and uploads
CHUNK_SIZE = 65536

PARTIAL_SUFFIX = ".part"


def _iter_file(file_path: str) -> Iterator[bytes]:
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            yield chunk


class IndyClient:
    """Client for one Indy instance."""

    def __init__(self, base_url: str, session: Optional[httpx.Client] = None) -> None:
        """Initialize the client.

        Args:
            base_url: Indy base URL; ``http://`` is assumed when no scheme is given
            session: Optional preconfigured httpx client
        """
        self.base_url = norm_indy_url(base_url)
        self.session = session or create_session_with_retry()
        self._proxy_sessions: Dict[Tuple[str, str], httpx.Client] = {}
        self._proxy_lock = threading.Lock()

    def __enter__(self) -> "IndyClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the session and any proxy sessions."""
        self.session.close()
        with self._proxy_lock:
            for session in self._proxy_sessions.values():
                session.close()
            self._proxy_sessions.clear()

    def _url(self, *parts: str) -> str:
        return self.base_url + join_url_path(*parts)

    # ------------------------------------------------------------------------
    # Folo records
    # ------------------------------------------------------------------------

    def get_folo_record(self, build_id: str) -> TrackedContent:
        """
        Read the tracked-content report of a build.

        Raises:
            httpx.HTTPStatusError: If Indy has no record for the build
        """
        url = self._url(FOLO_ADMIN_API_PATH, build_id, "record")
        logging.info("Getting folo record %s", url)
        response = self.session.get(url)
        response.raise_for_status()
        return TrackedContent.model_validate(response.json())

    def seal_folo_record(self, build_id: str) -> bool:
        """Seal the track record of a build. Returns False when Indy refuses or is unreachable."""
        url = self._url(FOLO_ADMIN_API_PATH, build_id, "record")
        try:
            response = self.session.post(url)
        except httpx.HTTPError as e:
            handle_http_error(e, f"sealing folo record {build_id}")
            return False
        if not response.is_success:
            logging.error("Sealing folo record %s failed: HTTP %d", build_id, response.status_code)
            return False
        return True

    # ------------------------------------------------------------------------
    # Stores
    # ------------------------------------------------------------------------

    def create_store(self, package_type: str, store_type: str, name: str, **fields: Any) -> bool:
        """
        Create a hosted, remote or group store. An already existing store counts as created.

        Args:
            package_type: Package type of the store
            store_type: hosted, remote or group
            name: Store name
            **fields: Extra store definition fields (``constituents`` for groups)
        """
        url = self._url(STORES_API_PATH, package_type, store_type)
        body = {
            "key": f"{package_type}:{store_type}:{name}",
            "packageType": package_type,
            "type": store_type,
            "name": name,
            **fields,
        }
        try:
            response = self.session.post(url, json=body)
        except httpx.HTTPError as e:
            handle_http_error(e, f"creating store {body['key']}")
            return False
        if response.status_code == HTTP_STATUS_CONFLICT:
            logging.info("Store %s already exists", body["key"])
            return True
        if not response.is_success:
            logging.error("Creating store %s failed: HTTP %d %s", body["key"], response.status_code, response.text)
            return False
        logging.info("Created store %s", body["key"])
        return True

    def delete_store(self, package_type: str, store_type: str, name: str) -> bool:
        """Delete a store; a missing store counts as deleted."""
        url = self._url(STORES_API_PATH, package_type, store_type, name)
        try:
            response = self.session.delete(url)
        except httpx.HTTPError as e:
            handle_http_error(e, f"deleting store {package_type}:{store_type}:{name}")
            return False
        if response.is_success or response.status_code == HTTP_STATUS_NOT_FOUND:
            logging.info("Deleted store %s:%s:%s", package_type, store_type, name)
            return True
        logging.error("Deleting store %s:%s:%s failed: HTTP %d", package_type, store_type, name, response.status_code)
        return False

    def prepare_indy_repos(
        self, build_id: str, meta: BuildMeta, additional_repos: Optional[Sequence[str]] = None, dry_run: bool = False
    ) -> bool:
        """
        Create the hosted store and group a replayed build runs against.

        The group holds the build's hosted store, the build layout constituents
        and any additional repositories, in that order.
        """
        package_type = meta.package_type
        constituents: List[str] = [f"{package_type}:hosted:{build_id}"]
        for key in list(meta.constituents) + list(additional_repos or []):
            if key not in constituents:
                constituents.append(key)

        if dry_run:
            logging.warning("Dry run create hosted %s:hosted:%s", package_type, build_id)
            logging.warning("Dry run create group %s:group:%s with %s", package_type, build_id, constituents)
            return True

        return self.create_store(package_type, "hosted", build_id) and self.create_store(
            package_type, "group", build_id, constituents=constituents
        )

    def clean_generic_proxy_repos(self, build_id: str, folo_record: TrackedContent) -> None:
        """Remove the h-/r-/g- generic-http stores the generic proxy created for a replayed build."""
        logging.info("Clean up generic proxy repos.")
        cleaned = set()
        for down in folo_record.downloads:
            if not down.is_generic_proxy:
                continue
            host = generic_repo_name(down.origin_url)
            if not host or host in cleaned:
                continue
            cleaned.add(host)
            self.delete_store(GENERIC_PACKAGE_TYPE, "hosted", f"h-{host}-{build_id}")
            self.delete_store(GENERIC_PACKAGE_TYPE, "remote", f"r-{host}-{build_id}")
            self.delete_store(GENERIC_PACKAGE_TYPE, "group", f"g-{host}-{build_id}")

    # ------------------------------------------------------------------------
    # Content transport
    # ------------------------------------------------------------------------

    @staticmethod
    def _stream_to_file(session: httpx.Client, url: str, file_loc: str) -> str:
        partial = file_loc + PARTIAL_SUFFIX
        try:
            with session.stream("GET", url) as response:
                response.raise_for_status()
                with open(partial, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
            os.replace(partial, file_loc)
        finally:
            if os.path.exists(partial):
                os.remove(partial)
        return file_loc

    def download_file(self, url: str, file_loc: str) -> str:
        """
        Download a URL to a local file.

        The file only appears under its final name once complete, so a file found
        at ``file_loc`` is always a full download.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response
            OSError: If the file cannot be written
        """
        if not url:
            raise ValueError("Empty download URL")
        logging.info("Downloading %s", url)
        return self._stream_to_file(self.session, url, file_loc)

    def _proxy_session(self, proxy_url: str, user: str, password: str) -> httpx.Client:
        key = (proxy_url, user)
        with self._proxy_lock:
            if key not in self._proxy_sessions:
                self._proxy_sessions[key] = create_session_with_retry(proxy=proxy_url, proxy_auth=(user, password))
            return self._proxy_sessions[key]

    def download_file_by_proxy(self, url: str, file_loc: str, proxy_url: str, user: str, password: str) -> str:
        """
        Download an external URL through the Indy generic proxy.

        The proxy user names the tracking session the access is recorded under.
        """
        if not url:
            raise ValueError("Empty download URL")
        logging.info("Downloading %s through proxy %s", url, proxy_url)
        return self._stream_to_file(self._proxy_session(proxy_url, user, password), url, file_loc)

    def upload_file(self, url: str, file_loc: str) -> None:
        """
        Upload a local file with PUT.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response
            OSError: If the file cannot be read
        """
        if not url:
            raise ValueError("Empty upload URL")
        logging.info("Uploading %s", url)
        size = os.path.getsize(file_loc)
        response = self.session.put(url, content=_iter_file(file_loc), headers={"Content-Length": str(size)})
        response.raise_for_status()

    def delete_artifact(self, url: str) -> bool:
        """Delete one artifact; a missing artifact counts as deleted."""
        if not url:
            logging.error("Cannot delete artifact: empty URL")
            return False
        try:
            response = self.session.delete(url)
        except httpx.HTTPError as e:
            handle_http_error(e, f"deleting {url}")
            return False
        if response.status_code == HTTP_STATUS_NOT_FOUND:
            logging.debug("Nothing to delete at %s", url)
            return True
        if not response.is_success:
            logging.error("Deleting %s failed: HTTP %d", url, response.status_code)
            return False
        return True


__all__ = ["IndyClient"]
