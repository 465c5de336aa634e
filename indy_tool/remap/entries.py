"""
Remapping of folo entries into transfer jobs.

Each policy turns the entries of a folo record into a map of jobs keyed by
artifact path:

    - replay download: where the replayed build reads each dependency from
    - replay upload: where each build output is fetched from and pushed to
    - migration: where each dependency currently lives on the target Indy, where it
      goes on the migration destination, and which stale copies to purge first

No function in this module performs I/O.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.folo import StoreKey, TrackedContent, TrackedContentEntry
from ..models.jobs import MigrationJob, TransferJob, add_job
from ..utils.constants import (
    CONTENT_API_PATH,
    FOLO_TRACK_API_PATH,
    PNC_BUILD_STORE_PREFIX,
    PNC_BUILDS_PATH,
    PNC_BUILDS_PROMOTION_SOURCES,
    PROXY_PREFIX,
    SHARED_IMPORTS_PATH,
    SHARED_IMPORTS_PROMOTION_SOURCES,
    SHARED_IMPORTS_SUFFIX,
)
from .paths import (
    alter_upload_path,
    build_suffix,
    join_url_path,
    norm_indy_url,
    remote_to_hosted,
    set_hostname,
    store_key_to_path,
)


def _belongs_to(store_key: str, package_type: str) -> bool:
    try:
        return StoreKey.from_string(store_key).package_type == package_type
    except ValueError:
        return False


# ============================================================================
# Replay download policy
# ============================================================================


def download_url_for(
    target_indy: str,
    new_build_id: str,
    package_type: str,
    entry: TrackedContentEntry,
    additional_repos: Sequence[str] = (),
    proxy_enabled: bool = False,
) -> str:
    """
    URL the replayed build fetches one recorded download from.

    Args:
        target_indy: Normalized target Indy base URL
        new_build_id: Name of the replayed build
        package_type: Package type of the build
        entry: Recorded download
        additional_repos: Store keys read directly instead of through the build group
        proxy_enabled: Fetch generic proxy downloads through the generic proxy

    Returns:
        The target URL; generic proxy passthrough URLs carry the ``proxy-`` prefix
    """
    repo_path = store_key_to_path(entry.store_key)

    if entry.is_generic_proxy:
        if proxy_enabled:
            return f"{PROXY_PREFIX}{entry.origin_url}" if entry.origin_url else ""
        return target_indy + join_url_path(CONTENT_API_PATH, remote_to_hosted(repo_path), entry.path)

    # Builds may download across ecosystems (npm from maven or the reverse); such
    # entries and the explicitly requested stores are read from their own store
    if entry.store_key in additional_repos or not _belongs_to(entry.store_key, package_type):
        path = join_url_path(FOLO_TRACK_API_PATH, new_build_id, repo_path, entry.path)
    else:
        path = join_url_path(FOLO_TRACK_API_PATH, new_build_id, package_type, "group", new_build_id, entry.path)
    return target_indy + path


def prepare_download_entries(
    target_indy_url: str,
    new_build_id: str,
    package_type: str,
    folo_record: TrackedContent,
    additional_repos: Optional[Sequence[str]] = None,
    proxy_enabled: bool = False,
) -> Dict[str, TransferJob]:
    """
    Build the replay-download jobs of a folo record.

    The URL to read from is carried in ``destination_url``; ``source_url`` is empty.
    """
    target_indy = norm_indy_url(target_indy_url)
    repos = list(additional_repos or [])
    jobs: Dict[str, TransferJob] = {}
    for down in folo_record.downloads:
        url = download_url_for(target_indy, new_build_id, package_type, down, repos, proxy_enabled)
        add_job(jobs, down.path, TransferJob(checksum=down.md5, source_url="", destination_url=url))
    return jobs


# ============================================================================
# Replay upload policy
# ============================================================================


def create_upload_urls(
    original_indy: str, target_indy: str, new_build_id: str, up: TrackedContentEntry
) -> Tuple[str, str]:
    """
    Source and target URLs of one recorded upload.

    The source is the artifact in its original store on the original Indy. The
    target is the same store type under the new build's name, with the build
    number in the path swapped for the new build's suffix, written through the
    new build's tracking endpoint.

    Returns:
        Tuple of (original_url, target_url); target_url is empty when the store key is malformed
    """
    original_url = original_indy + join_url_path(CONTENT_API_PATH, store_key_to_path(up.store_key), up.path)

    try:
        store_key = StoreKey.from_string(up.store_key)
    except ValueError as e:
        logging.error("Cannot map upload %s: %s", up.path, e)
        return original_url, ""

    altered_path = alter_upload_path(up.path, up.store_key, build_suffix(new_build_id))
    target_store_path = join_url_path(store_key.package_type, store_key.store_type, new_build_id, altered_path)
    target_url = target_indy + join_url_path(FOLO_TRACK_API_PATH, new_build_id, target_store_path)
    return original_url, target_url


def prepare_upload_entries(
    original_indy_url: str, target_indy_url: str, new_build_id: str, folo_record: TrackedContent
) -> Dict[str, TransferJob]:
    """Build the replay-upload jobs of a folo record."""
    original_indy = norm_indy_url(original_indy_url)
    target_indy = norm_indy_url(target_indy_url)
    jobs: Dict[str, TransferJob] = {}
    for up in folo_record.uploads:
        original_url, target_url = create_upload_urls(original_indy, target_indy, new_build_id, up)
        add_job(jobs, up.path, TransferJob(checksum=up.md5, source_url=original_url, destination_url=target_url))
    return jobs


# ============================================================================
# Migration policy
# ============================================================================


def promotion_path(store_key: str) -> Optional[str]:
    """Hosted store the content of ``store_key`` is known to be promoted into, if any."""
    if store_key in SHARED_IMPORTS_PROMOTION_SOURCES:
        return SHARED_IMPORTS_PATH
    if store_key in PNC_BUILDS_PROMOTION_SOURCES or store_key.startswith(PNC_BUILD_STORE_PREFIX):
        return PNC_BUILDS_PATH
    return None


def migration_targets(
    migrate_target_host: str, package_type: str, entry: TrackedContentEntry
) -> Tuple[str, List[str]]:
    """
    Upload destination and delete targets of one migrated download.

    Returns:
        Tuple of (destination_url, delete_urls). The destination is the promoted
        copy when the store promotes, the host-substituted local URL otherwise.
    """
    migrate_base = norm_indy_url(migrate_target_host)
    primary = set_hostname(entry.local_url, migrate_target_host)
    if not primary:
        logging.error("Cannot map %s to %s: bad local URL %r", entry.path, migrate_target_host, entry.local_url)

    delete_urls = [primary] if primary else []

    if not entry.store_key.endswith(SHARED_IMPORTS_SUFFIX):
        shared = join_url_path(CONTENT_API_PATH, package_type, SHARED_IMPORTS_PATH, entry.path)
        delete_urls.append(migrate_base + shared)

    destination = primary
    promoted = promotion_path(entry.store_key)
    if promoted:
        destination = migrate_base + join_url_path(CONTENT_API_PATH, package_type, promoted, entry.path)
        if destination not in delete_urls:
            delete_urls.append(destination)

    return destination, delete_urls


def prepare_migrate_entries(
    target_indy_url: str,
    migrate_target_host: str,
    package_type: str,
    new_build_id: str,
    folo_record: TrackedContent,
) -> Dict[str, MigrationJob]:
    """
    Build the migration jobs of a folo record.

    ``source_url`` is the artifact's content URL on the target Indy and
    ``destination_url`` where it is uploaded on the migration destination.
    """
    target_indy = norm_indy_url(target_indy_url)
    jobs: Dict[str, MigrationJob] = {}
    for down in folo_record.downloads:
        repo_path = store_key_to_path(down.store_key)
        if down.is_generic_proxy:
            path = join_url_path(CONTENT_API_PATH, remote_to_hosted(repo_path), down.path)
        elif not _belongs_to(down.store_key, package_type):
            path = join_url_path(CONTENT_API_PATH, repo_path, down.path)
        else:
            path = join_url_path(CONTENT_API_PATH, package_type, "group", new_build_id, down.path)

        destination, delete_urls = migration_targets(migrate_target_host, package_type, down)
        job = MigrationJob(
            checksum=down.md5,
            source_url=target_indy + path,
            destination_url=destination,
            delete_urls=delete_urls,
        )
        add_job(jobs, down.path, job)  # type: ignore[arg-type]
    return jobs


__all__ = [
    "download_url_for",
    "prepare_download_entries",
    "create_upload_urls",
    "prepare_upload_entries",
    "promotion_path",
    "migration_targets",
    "prepare_migrate_entries",
]
