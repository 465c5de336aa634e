"""Tests for the Indy REST client."""

import json
import os

import httpx
import pytest

from conftest import JAR_CONTENT

from indy_tool.api import IndyClient
from indy_tool.models import TrackedContent
from indy_tool.models.context import decide_meta

BASE = "http://indy.example.com/"


@pytest.fixture
def client(httpx_mock):
    """Indy client with HTTP mocked."""
    with IndyClient("indy.example.com") as client:
        yield client


class TestFoloRecords:
    """Test folo record read and seal."""

    def test_get_folo_record(self, client, httpx_mock, folo_record_data):
        """Test the record is read and parsed."""
        httpx_mock.get(BASE + "api/folo/admin/build-1234/record").mock(
            return_value=httpx.Response(200, json=folo_record_data)
        )

        record = client.get_folo_record("build-1234")

        assert isinstance(record, TrackedContent)
        assert record.tracking_key.id == "build-1234"
        assert len(record.downloads) == 2

    def test_get_folo_record_missing(self, client, httpx_mock):
        """Test a missing record raises."""
        httpx_mock.get(BASE + "api/folo/admin/nope/record").mock(return_value=httpx.Response(404))

        with pytest.raises(httpx.HTTPStatusError):
            client.get_folo_record("nope")

    def test_seal(self, client, httpx_mock):
        """Test sealing posts to the record endpoint."""
        route = httpx_mock.post(BASE + "api/folo/admin/build-test-1/record").mock(return_value=httpx.Response(200))

        assert client.seal_folo_record("build-test-1") is True
        assert route.called

    def test_seal_failure(self, client, httpx_mock):
        """Test a refused seal returns False."""
        httpx_mock.post(BASE + "api/folo/admin/build-test-1/record").mock(return_value=httpx.Response(500))
        assert client.seal_folo_record("build-test-1") is False

    def test_seal_unreachable(self, client, httpx_mock):
        """Test an unreachable Indy returns False."""
        httpx_mock.post(BASE + "api/folo/admin/build-test-1/record").mock(side_effect=httpx.ConnectError("refused"))
        assert client.seal_folo_record("build-test-1") is False


class TestStores:
    """Test store provisioning and cleanup."""

    def test_prepare_indy_repos(self, client, httpx_mock):
        """Test the hosted store then the build group are created."""
        hosted = httpx_mock.post(BASE + "api/admin/stores/maven/hosted").mock(return_value=httpx.Response(201))
        group = httpx_mock.post(BASE + "api/admin/stores/maven/group").mock(return_value=httpx.Response(201))

        assert client.prepare_indy_repos("build-test-1", decide_meta("maven"), ["maven:hosted:extra"]) is True

        assert json.loads(hosted.calls.last.request.content)["key"] == "maven:hosted:build-test-1"
        body = json.loads(group.calls.last.request.content)
        assert body["key"] == "maven:group:build-test-1"
        assert body["constituents"] == [
            "maven:hosted:build-test-1",
            "maven:hosted:shared-imports",
            "maven:remote:central",
            "maven:hosted:extra",
        ]

    def test_prepare_indy_repos_existing(self, client, httpx_mock):
        """Test existing stores count as created."""
        httpx_mock.post(BASE + "api/admin/stores/npm/hosted").mock(return_value=httpx.Response(409))
        httpx_mock.post(BASE + "api/admin/stores/npm/group").mock(return_value=httpx.Response(409))
        assert client.prepare_indy_repos("build-test-1", decide_meta("npm")) is True

    def test_prepare_indy_repos_failure(self, client, httpx_mock):
        """Test the group is not created when the hosted store fails."""
        hosted = httpx_mock.post(BASE + "api/admin/stores/maven/hosted").mock(return_value=httpx.Response(403))

        # No group route: an attempt to create the group would be an unmocked request
        assert client.prepare_indy_repos("build-test-1", decide_meta("maven")) is False
        assert hosted.call_count == 1

    def test_prepare_indy_repos_dry_run(self, client, httpx_mock, caplog):
        """Test dry run only logs the stores it would create."""
        assert client.prepare_indy_repos("build-test-1", decide_meta("maven"), dry_run=True) is True
        assert len(httpx_mock.calls) == 0
        assert "Dry run create group maven:group:build-test-1" in caplog.text

    def test_clean_generic_proxy_repos(self, client, httpx_mock, folo_record):
        """Test the h-, r- and g- stores of each proxied host are removed once."""
        prefix = BASE + "api/admin/stores/generic-http/"
        routes = [
            httpx_mock.delete(prefix + "hosted/h-downloads-example-org-build-test-1").mock(
                return_value=httpx.Response(204)
            ),
            httpx_mock.delete(prefix + "remote/r-downloads-example-org-build-test-1").mock(
                return_value=httpx.Response(404)
            ),
            httpx_mock.delete(prefix + "group/g-downloads-example-org-build-test-1").mock(
                return_value=httpx.Response(204)
            ),
        ]

        client.clean_generic_proxy_repos("build-test-1", folo_record)

        assert [route.call_count for route in routes] == [1, 1, 1]


class TestContentTransport:
    """Test artifact download, upload and delete."""

    def test_download_file(self, client, httpx_mock, tmp_path):
        """Test a download lands under its final name without a partial file."""
        url = BASE + "api/content/maven/hosted/a/x.jar"
        httpx_mock.get(url).mock(return_value=httpx.Response(200, content=JAR_CONTENT))
        target = tmp_path / "x.jar"

        assert client.download_file(url, str(target)) == str(target)
        assert target.read_bytes() == JAR_CONTENT
        assert not os.path.exists(str(target) + ".part")

    def test_download_file_error_leaves_nothing(self, client, httpx_mock, tmp_path):
        """Test a failed download leaves neither the file nor a partial file."""
        url = BASE + "api/content/maven/hosted/a/missing.jar"
        httpx_mock.get(url).mock(return_value=httpx.Response(404))
        target = tmp_path / "missing.jar"

        with pytest.raises(httpx.HTTPStatusError):
            client.download_file(url, str(target))
        assert list(tmp_path.iterdir()) == []

    def test_download_file_empty_url(self, client, tmp_path):
        """Test an empty URL is rejected."""
        with pytest.raises(ValueError):
            client.download_file("", str(tmp_path / "x"))

    def test_upload_file(self, client, httpx_mock, temp_file):
        """Test uploads are sent with PUT and their length."""
        url = BASE + "api/folo/track/build-test-1/maven/hosted/build-test-1/x.jar"
        route = httpx_mock.put(url).mock(return_value=httpx.Response(201))

        client.upload_file(url, str(temp_file))

        assert route.called
        assert route.calls.last.request.headers["Content-Length"] == str(len(JAR_CONTENT))

    def test_upload_file_rejected(self, client, httpx_mock, temp_file):
        """Test a rejected upload raises."""
        url = BASE + "api/folo/track/build-test-1/maven/hosted/build-test-1/x.jar"
        httpx_mock.put(url).mock(return_value=httpx.Response(400))

        with pytest.raises(httpx.HTTPStatusError):
            client.upload_file(url, str(temp_file))

    @pytest.mark.parametrize("status, expected", [(204, True), (200, True), (404, True), (500, False)])
    def test_delete_artifact(self, client, httpx_mock, status, expected):
        """Test deletes are idempotent and failures are reported."""
        url = "http://indy-migrate.example.com/api/content/maven/hosted/shared-imports/x.jar"
        httpx_mock.delete(url).mock(return_value=httpx.Response(status))
        assert client.delete_artifact(url) is expected

    def test_delete_artifact_empty_url(self, client):
        """Test an empty URL is reported as a failure."""
        assert client.delete_artifact("") is False

    def test_proxy_sessions_cached(self, client):
        """Test one proxy session per proxy and user."""
        first = client._proxy_session("http://proxy:8081", "build-test-1+tracking", "pass")
        second = client._proxy_session("http://proxy:8081", "build-test-1+tracking", "pass")
        other = client._proxy_session("http://proxy:8081", "build-test-2+tracking", "pass")

        assert first is second
        assert first is not other
