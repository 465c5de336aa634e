"""
Test fixtures and mock data for indy-tool tests.

This module provides common fixtures, sample folo records and staging
directories for testing the indy-tool package.
"""

import hashlib
import json
from pathlib import Path
from typing import Any, Dict

import pytest
import respx

from indy_tool.models import ReplayConfig, TrackedContent

ORIGINAL_INDY = "http://indy-origin.example.com/"
TARGET_INDY = "http://indy-target.example.com/"
MIGRATE_HOST = "indy-migrate.example.com"

JAR_CONTENT = b"jar bytes"
POM_CONTENT = b"<project/>"
ZIP_CONTENT = b"zip bytes"


def md5_of(content: bytes) -> str:
    """md5 hex digest of some bytes."""
    return hashlib.md5(content, usedforsecurity=False).hexdigest()


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking."""
    with respx.mock:
        yield respx


@pytest.fixture
def folo_record_data() -> Dict[str, Any]:
    """Folo record as returned by ``api/folo/admin/{id}/record``."""
    return {
        "key": {"id": "build-1234"},
        "uploads": [
            {
                "storeKey": "maven:hosted:build-1234",
                "path": "org/foo/bar/1.0.redhat-00001/bar-1.0.redhat-00001.jar",
                "md5": md5_of(JAR_CONTENT),
                "localUrl": ORIGINAL_INDY
                + "api/content/maven/hosted/build-1234/org/foo/bar/1.0.redhat-00001/bar-1.0.redhat-00001.jar",
                "accessChannel": "NATIVE",
            }
        ],
        "downloads": [
            {
                "storeKey": "maven:remote:central",
                "path": "org/dep/dep/2.0/dep-2.0.pom",
                "md5": md5_of(POM_CONTENT),
                "originUrl": "https://repo.maven.apache.org/maven2/org/dep/dep/2.0/dep-2.0.pom",
                "localUrl": ORIGINAL_INDY + "api/content/maven/remote/central/org/dep/dep/2.0/dep-2.0.pom",
                "accessChannel": "NATIVE",
            },
            {
                "storeKey": "generic-http:remote:r-downloads-example-org-build-1234",
                "path": "tools/tool.zip",
                "md5": md5_of(ZIP_CONTENT),
                "originUrl": "https://downloads.example.org/tools/tool.zip",
                "localUrl": ORIGINAL_INDY
                + "api/content/generic-http/remote/r-downloads-example-org-build-1234/tools/tool.zip",
                "accessChannel": "GENERIC_PROXY",
            },
        ],
    }


@pytest.fixture
def folo_record(folo_record_data) -> TrackedContent:
    """Parsed sample folo record."""
    return TrackedContent.model_validate(folo_record_data)


@pytest.fixture
def folo_file(tmp_path, folo_record_data) -> str:
    """Sample folo record saved as a JSON file."""
    path = tmp_path / "folo.json"
    path.write_text(json.dumps(folo_record_data))
    return str(path)


@pytest.fixture
def staging_dirs(tmp_path):
    """Download and upload staging directories."""
    download_dir = tmp_path / "download"
    upload_dir = tmp_path / "upload"
    download_dir.mkdir()
    upload_dir.mkdir()
    return str(download_dir), str(upload_dir)


@pytest.fixture
def replay_config(tmp_path) -> ReplayConfig:
    """Replay configuration staging under tmp_path, without delays."""
    return ReplayConfig(
        download_dir=str(tmp_path / "download"),
        upload_dir=str(tmp_path / "upload"),
        delete_delay=0,
        settle_delay=0,
    )


@pytest.fixture
def temp_file(tmp_path) -> Path:
    """A small file holding JAR_CONTENT."""
    path = tmp_path / "artifact.jar"
    path.write_bytes(JAR_CONTENT)
    return path
