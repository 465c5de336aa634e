"""
Staging directory handling.

Downloads are staged in a scratch directory; upload sources are cached in a
second directory that may live on a persistent mount so that a re-run of the
same build can reuse what was already fetched from the original Indy.
"""

import hashlib
import logging
import os
import posixpath
import shutil
from typing import Optional, Tuple
from urllib.parse import urlsplit

from .constants import STAGING_DIR_MODE


def ensure_directory(directory: str, purpose: str) -> str:
    """
    Create a directory if needed.

    Args:
        directory: Directory to create
        purpose: Human readable purpose for the error message

    Returns:
        The directory path

    Raises:
        OSError: If the directory cannot be created
    """
    os.makedirs(directory, mode=STAGING_DIR_MODE, exist_ok=True)
    if not os.path.isdir(directory):
        raise OSError(f"Cannot create directory {directory} for {purpose}")
    return directory


def prepare_down_upload_directories(
    tracking_id: str,
    download_dir: str,
    upload_dir: str,
    mount_path: Optional[str] = None,
    clear_cache: bool = False,
    dry_run: bool = False,
) -> Tuple[str, str]:
    """
    Prepare the download staging directory and the upload cache directory.

    When ``mount_path`` is set the upload cache is ``<mount_path>/<tracking_id>/upload``,
    otherwise ``upload_dir`` is used. ``clear_cache`` purges the upload cache first,
    except in a dry run, where the purge is only logged.

    Returns:
        Tuple of (download_dir, upload_dir)

    Raises:
        OSError: If either directory cannot be created
    """
    ensure_directory(download_dir, "file downloading")

    if mount_path:
        upload_dir = os.path.join(mount_path, tracking_id, "upload")

    if clear_cache and os.path.isdir(upload_dir):
        if dry_run:
            logging.warning("Dry run clear cache, dir: %s", upload_dir)
        else:
            logging.info("Clearing upload cache %s", upload_dir)
            shutil.rmtree(upload_dir)

    ensure_directory(upload_dir, "caching uploading files")

    logging.info("Prepared download dir: %s, upload dir: %s", download_dir, upload_dir)
    return download_dir, upload_dir


def staging_path(directory: str, url: str) -> str:
    """
    Local staging file for a URL.

    The name combines a short digest of the URL's directory path and query with
    the base name, so artifacts sharing a file name under different stores do not collide
    while the same URL always maps to the same file (which is what makes the
    upload cache reusable across runs).

    Example:
        >>> staging_path("/tmp/download", "http://indy/api/content/maven/hosted/a/x/1.0/x-1.0.jar")  # doctest: +SKIP
        '/tmp/download/<16 hex chars>-x-1.0.jar'
    """
    parts = urlsplit(url) if "://" in url else None
    url_path = parts.path if parts else url
    base_name = posixpath.basename(url_path.rstrip("/")) or "index"
    parent = posixpath.dirname(url_path.rstrip("/"))
    if parts and parts.query:
        parent = f"{parent}?{parts.query}"
    digest = hashlib.sha256(parent.encode("utf-8")).hexdigest()[:16]
    return os.path.join(directory, f"{digest}-{base_name}")


__all__ = ["ensure_directory", "prepare_down_upload_directories", "staging_path"]
