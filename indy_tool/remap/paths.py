"""
URL and path helpers for remapping folo entries onto another Indy.

Everything here is pure string handling: no function performs I/O, and
malformed input degrades to an empty string rather than raising.
"""

import logging
import posixpath
import random
import re
from typing import Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from ..utils.constants import BUILD_TEST_PREFIX, GENERIC_HOSTED_PATH, GENERIC_REMOTE_PATH

# <release><sep>[<head>]<label>-<token>, e.g. 1.3.1.redhat-00001 or 1.0-buildId-old
_VERSION_RE = re.compile(
    r"^(?P<release>\d+(?:\.\d+)*)(?P<sep>[.-])(?P<head>[\w.-]*?)"
    r"(?P<label>[A-Za-z][A-Za-z0-9_]*)-(?P<token>[A-Za-z0-9_]+)$"
)

# npm tarballs carry the version in the file name: <name>-<version>.tgz
_NPM_TARBALL_RE = re.compile(r"^(?P<name>.+?)-(?P<version>\d+(?:\.\d+)*[.-].+)\.tgz$")


def norm_indy_url(indy_url: str) -> str:
    """
    Normalize an Indy base URL: ``http://`` when no scheme is given, trailing slash.

    Example:
        >>> norm_indy_url("indy.example.com")
        'http://indy.example.com/'
    """
    indy = indy_url.strip()
    if "://" not in indy:
        indy = "http://" + indy
    if not indy.endswith("/"):
        indy += "/"
    return indy


def validate_indy_url(indy_url: str) -> str:
    """
    Validate an Indy base URL and return its host (with port, if any).

    Raises:
        ValueError: If no host can be parsed from the URL
    """
    try:
        host = urlsplit(norm_indy_url(indy_url)).netloc
    except ValueError as e:
        raise ValueError(f"Invalid Indy URL {indy_url!r}: {e}") from e
    if not host:
        raise ValueError(f"Invalid Indy URL {indy_url!r}: no host")
    return host


def join_url_path(*parts: str) -> str:
    """
    Join relative URL path parts, dropping empty parts and duplicate slashes.

    Example:
        >>> join_url_path("api/content", "maven/hosted/a", "/org/x/x.pom")
        'api/content/maven/hosted/a/org/x/x.pom'
    """
    joined = "/".join(p.strip("/") for p in parts if p and p.strip("/"))
    return posixpath.normpath(joined) if joined else ""


def store_key_to_path(store_key: str) -> str:
    """``maven:hosted:build-1`` -> ``maven/hosted/build-1``."""
    return store_key.replace(":", "/")


def remote_to_hosted(repo_path: str) -> str:
    """Point a generic-http remote store path at the hosted store its content was promoted to."""
    return repo_path.replace(GENERIC_REMOTE_PATH, GENERIC_HOSTED_PATH, 1)


def set_hostname(addr: Optional[str], hostname: str) -> str:
    """
    Replace the host of a URL, keeping scheme, credentials, path and query.

    Returns:
        The rewritten URL, or an empty string when ``addr`` is missing or malformed
    """
    if not addr:
        return ""
    try:
        parts = urlsplit(addr)
    except ValueError:
        return ""
    if not parts.scheme or not parts.netloc:
        return ""
    userinfo, _, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}@{hostname}" if userinfo else hostname
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def generic_repo_name(origin_url: Optional[str]) -> str:
    """
    Repository name fragment Indy derives from a generic proxy origin.

    Example:
        >>> generic_repo_name("https://repo.example.org/file.zip")
        'repo-example-org'
    """
    if not origin_url:
        return ""
    try:
        host = urlsplit(origin_url).hostname or ""
    except ValueError:
        return ""
    return host.replace(".", "-")


def generate_build_name() -> str:
    """Random name for a replayed build, e.g. ``build-test-913413``."""
    return f"{BUILD_TEST_PREFIX}{random.randint(100000, 999999)}"  # nosec B311


def build_suffix(build_name: str) -> str:
    """Version suffix carried by a build name (``build-test-913413`` -> ``913413``)."""
    if build_name.startswith(BUILD_TEST_PREFIX):
        return build_name[len(BUILD_TEST_PREFIX) :]
    return build_name


def _alter_version(version: str, new_suffix: str) -> Optional[str]:
    """Swap the build qualifier of a version, or None when it has none.

    A suffix containing a dash replaces ``<label>-<token>``; a bare suffix only
    replaces ``<token>``.
    """
    match = _VERSION_RE.match(version)
    if not match:
        return None
    qualifier = new_suffix if "-" in new_suffix else f"{match['label']}-{new_suffix}"
    return f"{match['release']}{match['sep']}{match['head']}{qualifier}"


def _find_version(segments: list, store_key: str) -> Tuple[Optional[str], int]:
    """Locate the version-bearing segment: tarball name for npm, version directory otherwise."""
    if store_key.startswith("npm:"):
        match = _NPM_TARBALL_RE.match(segments[-1])
        if match and _VERSION_RE.match(match["version"]):
            return match["version"], len(segments) - 1
        return None, -1
    if len(segments) >= 2 and _VERSION_RE.match(segments[-2]):
        return segments[-2], len(segments) - 2
    return None, -1


def alter_upload_path(path: str, store_key: str, new_suffix: str) -> str:
    """
    Rewrite the build number carried by an uploaded artifact path.

    The version directory (and the file name under it) of a maven path, or the
    tarball name of an npm path, gets its build qualifier replaced. Every other
    segment is left untouched. This is a textual substitution: when no version
    with a qualifier is found the path is returned unchanged, and the upload
    lands where the checksum and the target will expose it.

    Example:
        >>> alter_upload_path("org/x/1.0-buildId-old/x-1.0-buildId-old.jar", "maven:hosted:build-1", "buildId-new")
        'org/x/1.0-buildId-new/x-1.0-buildId-new.jar'
        >>> alter_upload_path("org/x/1.3.redhat-00001/x-1.3.redhat-00001.pom", "maven:hosted:build-1", "913413")
        'org/x/1.3.redhat-913413/x-1.3.redhat-913413.pom'
    """
    segments = path.split("/")
    old_version, index = _find_version(segments, store_key)
    if old_version is None:
        logging.warning("No build-bearing version found in %s, upload path left unchanged", path)
        return path

    new_version = _alter_version(old_version, new_suffix)
    if new_version is None:
        return path

    altered = segments[:index] + [segment.replace(old_version, new_version) for segment in segments[index:]]
    return "/".join(altered)


__all__ = [
    "norm_indy_url",
    "validate_indy_url",
    "join_url_path",
    "store_key_to_path",
    "remote_to_hosted",
    "set_hostname",
    "generic_repo_name",
    "generate_build_name",
    "build_suffix",
    "alter_upload_path",
]
