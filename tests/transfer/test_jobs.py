"""Tests for download, upload and migration jobs."""

import os
from pathlib import Path
from unittest.mock import Mock

import httpx
import pytest

from conftest import JAR_CONTENT, md5_of

from indy_tool.api import IndyClient
from indy_tool.models import MigrationJob, TransferJob
from indy_tool.transfer import JobRunner

SOURCE_URL = "http://indy-origin.example.com/api/content/maven/hosted/build-1234/org/x/1.0/x-1.0.jar"
TARGET_URL = "http://indy-target.example.com/api/folo/track/build-test-1/maven/hosted/build-test-1/org/x/1.0/x-1.0.jar"


def writes(content):
    """side_effect for download_file writing ``content`` to the requested location."""

    def _download(url, file_loc, *args):
        Path(file_loc).write_bytes(content)
        return file_loc

    return _download


@pytest.fixture
def client():
    """Mocked Indy client."""
    return Mock(spec=IndyClient)


@pytest.fixture
def runner(client, staging_dirs):
    """Job runner staging into temporary directories."""
    download_dir, upload_dir = staging_dirs
    return JobRunner(client, download_dir, upload_dir, build_name="build-test-1", proxy_url="http://proxy:8081")


class TestDownloadJob:
    """Test replay download jobs."""

    def test_download_verified(self, runner, client):
        """Test a download with a matching checksum succeeds."""
        client.download_file.side_effect = writes(JAR_CONTENT)
        job = TransferJob(checksum=md5_of(JAR_CONTENT), destination_url=TARGET_URL)

        assert runner.download(job) is True
        url, file_loc = client.download_file.call_args.args
        assert url == TARGET_URL
        assert file_loc.startswith(runner.download_dir)
        assert file_loc.endswith("-x-1.0.jar")

    def test_download_checksum_mismatch(self, runner, client, caplog):
        """Test a download with another checksum fails the job."""
        client.download_file.side_effect = writes(b"tampered")
        job = TransferJob(checksum=md5_of(JAR_CONTENT), destination_url=TARGET_URL)

        assert runner.download(job) is False
        assert "Integrity failure" in caplog.text

    def test_download_http_error(self, runner, client):
        """Test transport failures fail the job without raising."""
        client.download_file.side_effect = httpx.ConnectError("refused")
        job = TransferJob(checksum="abc", destination_url=TARGET_URL)
        assert runner.download(job) is False

    def test_download_through_proxy(self, runner, client):
        """Test proxy- prefixed URLs are fetched through the generic proxy as the tracking user."""
        client.download_file_by_proxy.side_effect = writes(JAR_CONTENT)
        job = TransferJob(checksum=md5_of(JAR_CONTENT), destination_url="proxy-https://downloads.example.org/x.jar")

        assert runner.download(job) is True
        client.download_file.assert_not_called()
        url, _, proxy_url, user, password = client.download_file_by_proxy.call_args.args
        assert url == "https://downloads.example.org/x.jar"
        assert proxy_url == "http://proxy:8081"
        assert user == "build-test-1+tracking"
        assert password == "pass"

    def test_proxy_download_without_proxy(self, client, staging_dirs):
        """Test a proxy- URL fails when no proxy is configured."""
        runner = JobRunner(client, *staging_dirs, build_name="build-test-1")
        job = TransferJob(checksum="abc", destination_url="proxy-https://downloads.example.org/x.jar")

        assert runner.download(job) is False
        client.download_file_by_proxy.assert_not_called()

    def test_download_empty_url(self, runner, client):
        """Test an unmapped entry fails as an invalid job."""
        client.download_file.side_effect = ValueError("Empty download URL")
        assert runner.download(TransferJob(checksum="abc")) is False


class TestUploadJob:
    """Test replay upload jobs."""

    def test_upload_after_download(self, runner, client):
        """Test the source is cached, verified then uploaded."""
        client.download_file.side_effect = writes(JAR_CONTENT)
        job = TransferJob(checksum=md5_of(JAR_CONTENT), source_url=SOURCE_URL, destination_url=TARGET_URL)

        assert runner.upload(job) is True
        cache_file = runner.cache_path_for(SOURCE_URL)
        client.download_file.assert_called_once_with(SOURCE_URL, cache_file)
        client.upload_file.assert_called_once_with(TARGET_URL, cache_file)

    def test_upload_reuses_cache(self, runner, client, caplog):
        """Test an already cached source is not downloaded again."""
        cache_file = runner.cache_path_for(SOURCE_URL)
        Path(cache_file).write_bytes(JAR_CONTENT)
        job = TransferJob(checksum=md5_of(JAR_CONTENT), source_url=SOURCE_URL, destination_url=TARGET_URL)

        with caplog.at_level("INFO"):
            assert runner.upload(job) is True

        client.download_file.assert_not_called()
        client.upload_file.assert_called_once_with(TARGET_URL, cache_file)
        assert "reuse cacheFile" in caplog.text

    def test_checksum_mismatch_blocks_upload(self, runner, client):
        """Test nothing is uploaded when the fetched bytes do not match, and the bad cache entry is dropped."""
        client.download_file.side_effect = writes(b"tampered")
        job = TransferJob(checksum=md5_of(JAR_CONTENT), source_url=SOURCE_URL, destination_url=TARGET_URL)

        assert runner.upload(job) is False
        client.upload_file.assert_not_called()
        assert not os.path.exists(runner.cache_path_for(SOURCE_URL))

    def test_upload_http_error(self, runner, client):
        """Test a rejected upload fails the job."""
        client.download_file.side_effect = writes(JAR_CONTENT)
        request = httpx.Request("PUT", TARGET_URL)
        client.upload_file.side_effect = httpx.HTTPStatusError(
            "forbidden", request=request, response=httpx.Response(403, request=request)
        )
        job = TransferJob(checksum=md5_of(JAR_CONTENT), source_url=SOURCE_URL, destination_url=TARGET_URL)

        assert runner.upload(job) is False


class TestMigrateJob:
    """Test migration jobs."""

    def test_migrate(self, runner, client):
        """Test the artifact is fetched from the target Indy and uploaded to the destination."""
        client.download_file.side_effect = writes(JAR_CONTENT)
        job = MigrationJob(
            checksum=md5_of(JAR_CONTENT),
            source_url=SOURCE_URL,
            destination_url="http://indy-migrate/api/content/maven/hosted/shared-imports/org/x/1.0/x-1.0.jar",
        )

        assert runner.migrate(job) is True
        file_loc = client.download_file.call_args.args[1]
        client.upload_file.assert_called_once_with(job.destination_url, file_loc)

    def test_migrate_checksum_mismatch(self, runner, client):
        """Test a mismatching artifact is never migrated."""
        client.download_file.side_effect = writes(b"tampered")
        job = MigrationJob(checksum=md5_of(JAR_CONTENT), source_url=SOURCE_URL, destination_url="http://m/x.jar")

        assert runner.migrate(job) is False
        client.upload_file.assert_not_called()

    def test_migrate_upload_failure(self, runner, client):
        """Test a failed upload fails the migration job."""
        client.download_file.side_effect = writes(JAR_CONTENT)
        client.upload_file.side_effect = httpx.ReadTimeout("timeout")
        job = MigrationJob(checksum=md5_of(JAR_CONTENT), source_url=SOURCE_URL, destination_url="http://m/x.jar")

        assert runner.migrate(job) is False


class TestDryRun:
    """Test dry-run jobs never touch the network or the disk."""

    @pytest.fixture
    def dry_runner(self, client, tmp_path):
        return JobRunner(client, str(tmp_path / "d"), str(tmp_path / "u"), dry_run=True)

    def test_dry_run_download(self, dry_runner, client, caplog):
        """Test dry-run downloads only log."""
        assert dry_runner.download(TransferJob(checksum="abc", destination_url=TARGET_URL)) is True
        assert f"Dry run download, url: {TARGET_URL}" in caplog.text
        assert client.method_calls == []

    def test_dry_run_upload(self, dry_runner, client, caplog):
        """Test dry-run uploads only log."""
        job = TransferJob(checksum="abc", source_url=SOURCE_URL, destination_url=TARGET_URL)
        assert dry_runner.upload(job) is True
        assert f"Dry run upload, originalArtiURL: {SOURCE_URL}, targetArtiURL: {TARGET_URL}" in caplog.text
        assert client.method_calls == []

    def test_dry_run_migrate(self, dry_runner, client, caplog, tmp_path):
        """Test dry-run migrations log both legs."""
        job = MigrationJob(checksum="abc", source_url=SOURCE_URL, destination_url="http://m/x.jar")
        assert dry_runner.migrate(job) is True
        assert f"Dry run download, url: {SOURCE_URL}" in caplog.text
        assert "Dry run upload, url: http://m/x.jar" in caplog.text
        assert client.method_calls == []
        assert list(tmp_path.iterdir()) == []
