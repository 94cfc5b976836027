import pytest

from artibridge.kernel.identifiers import ArtifactIdentifier
from tests.kernel.mocks import MockArtifactSource


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep app data (logs, default repository) out of the real home directory."""
    home = tmp_path / "artibridge_home"
    monkeypatch.setenv("ARTIBRIDGE_HOME", str(home))
    for name in ("ARTIBRIDGE_ROOT", "ARTIBRIDGE_UPSTREAM", "ARTIBRIDGE_SOURCE", "ARTIBRIDGE_METADATA_DIR",
                 "ARTIBRIDGE_LOG_LEVEL", "ARTIBRIDGE_PORT", "ARTIBRIDGE_HOST", "ARTIBRIDGE_NAME",
                 "ARTIBRIDGE_TIMEOUT", "ARTIBRIDGE_METADATA_FILE"):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def repo_root(tmp_path):
    root = tmp_path / "repository"
    root.mkdir()
    return root


@pytest.fixture
def foo_identifier():
    return ArtifactIdentifier(group="com.example", name="foo", version="1.2", extension="jar")


@pytest.fixture
def mock_source():
    return MockArtifactSource()
