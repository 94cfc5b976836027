import pytest
from fastapi.testclient import TestClient

from artibridge.adapters.http.fastapi_server import create_app
from artibridge.kernel.bridge import ResourceBridge
from artibridge.kernel.errors import ArtifactSourceError
from tests.kernel.mocks import MockArtifactSource


@pytest.fixture
def bridge(repo_root, mock_source):
    return ResourceBridge(repo_root, mock_source, name="http-test")


@pytest.fixture
def client(bridge):
    return TestClient(create_app(bridge))


def test_health(client, bridge):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "name": "http-test", "root": bridge.root}


def test_serves_artifact(client, mock_source, foo_identifier):
    mock_source.add(foo_identifier, b"jar-bytes")
    response = client.get("/com/example/foo/1.2/foo-1.2.jar")
    assert response.status_code == 200
    assert response.content == b"jar-bytes"


def test_head_request(client, mock_source, foo_identifier):
    mock_source.add(foo_identifier, b"jar-bytes")
    response = client.head("/com/example/foo/1.2/foo-1.2.jar")
    assert response.status_code == 200
    assert response.headers["content-length"] == str(len(b"jar-bytes"))


def test_absent_artifact_is_404(client, repo_root):
    response = client.get("/com/example/foo/1.2/foo-1.2.jar")
    assert response.status_code == 404
    assert list(repo_root.iterdir()) == []


def test_metadata(repo_root, tmp_path):
    metadata = tmp_path / "md.xml"
    metadata.write_text("<metadata/>")
    bridge = ResourceBridge(repo_root, MockArtifactSource(metadata={("com.example", "foo"): metadata}))
    client = TestClient(create_app(bridge))

    assert client.get("/com/example/foo/maven-metadata.xml").text == "<metadata/>"
    assert client.get("/com/example/bar/maven-metadata.xml").status_code == 404


def test_directory_listing_is_404(client, repo_root):
    (repo_root / "com" / "example").mkdir(parents=True)
    assert client.get("/com/example/").status_code == 404


def test_plain_files_under_root_are_served(client, repo_root):
    (repo_root / "README.txt").write_text("hello")
    assert client.get("/README.txt").text == "hello"


def test_in_flight_staging_files_are_not_served(client, repo_root):
    version_dir = repo_root / "com" / "example" / "foo" / "1.2"
    version_dir.mkdir(parents=True)
    (version_dir / ".foo-1.2.jar.abc123.tmp").write_bytes(b"part")
    assert client.get("/com/example/foo/1.2/.foo-1.2.jar.abc123.tmp").status_code == 404


def test_files_under_hidden_directories_are_not_served(client, repo_root):
    (repo_root / ".cache").mkdir()
    (repo_root / ".cache" / "notes.txt").write_text("internal")
    assert client.get("/.cache/notes.txt").status_code == 404


def test_never_serves_files_outside_root(bridge, tmp_path):
    secret = tmp_path / "secret.txt"
    secret.write_text("do not serve")
    client = TestClient(create_app(bridge))

    # The encoded dots reach the handler without being collapsed by the client.
    response = client.get("/%2E%2E/secret.txt")
    assert response.status_code == 404


def test_source_failure_is_502(client, mock_source, foo_identifier, mocker):
    mocker.patch.object(mock_source, "get_artifact", side_effect=ArtifactSourceError("upstream down"))
    response = client.get("/com/example/foo/1.2/foo-1.2.jar")
    assert response.status_code == 502
    assert "upstream down" in response.json()["detail"]


def test_materialization_failure_is_500(client, mock_source, foo_identifier):
    artifact = mock_source.add(foo_identifier, b"0123456789")
    artifact.fail_after = 2
    response = client.get("/com/example/foo/1.2/foo-1.2.jar")
    assert response.status_code == 500

