import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from artibridge.adapters.storage_fs import FileSystemMaterializationCache, staging_file
from artibridge.kernel.errors import MaterializationError
from artibridge.kernel.identifiers import ArtifactIdentifier
from tests.kernel.mocks import MockArtifact


@pytest.fixture
def cache(repo_root):
    return FileSystemMaterializationCache(repo_root)


def _leftovers(directory):
    return [p.name for p in directory.iterdir() if p.name.endswith(".tmp")]


def test_get_path_is_derived_from_identifier(cache, repo_root, foo_identifier):
    assert cache.get_path(foo_identifier) == repo_root / "com" / "example" / "foo" / "1.2" / "foo-1.2.jar"
    classified = ArtifactIdentifier("com.example", "foo", "1.2", "sources")
    assert cache.get_path(classified).name == "foo-1.2-sources.jar"


def test_get_path_performs_no_io(cache, repo_root, foo_identifier):
    cache.get_path(foo_identifier)
    assert list(repo_root.iterdir()) == []


def test_materialize_writes_file(cache, foo_identifier):
    artifact = MockArtifact(foo_identifier, b"jar-bytes")
    path = cache.materialize(foo_identifier, artifact)
    assert path == cache.get_path(foo_identifier)
    assert path.read_bytes() == b"jar-bytes"
    assert artifact.write_calls == 1
    assert _leftovers(path.parent) == []


def test_materialize_is_idempotent(cache, foo_identifier):
    artifact = MockArtifact(foo_identifier, b"jar-bytes")
    first = cache.materialize(foo_identifier, artifact)
    mtime = first.stat().st_mtime_ns
    second = cache.materialize(foo_identifier, artifact)

    assert first == second
    assert second.read_bytes() == b"jar-bytes"
    assert second.stat().st_mtime_ns == mtime
    assert artifact.write_calls == 1


def test_existing_file_is_never_rewritten(cache, foo_identifier):
    target = cache.get_path(foo_identifier)
    target.parent.mkdir(parents=True)
    target.write_bytes(b"already here")

    artifact = MockArtifact(foo_identifier, b"new bytes")
    assert cache.materialize(foo_identifier, artifact) == target
    assert target.read_bytes() == b"already here"
    assert artifact.write_calls == 0


def test_absent_artifact_returns_unwritten_path(cache, repo_root, foo_identifier):
    artifact = MockArtifact(foo_identifier, present=False)
    path = cache.materialize(foo_identifier, artifact)
    assert path == cache.get_path(foo_identifier)
    assert not path.exists()
    assert artifact.write_calls == 0
    assert list(repo_root.iterdir()) == []


def test_write_failure_is_fatal_and_leaves_no_partial_file(cache, foo_identifier):
    artifact = MockArtifact(foo_identifier, b"0123456789")
    artifact.fail_after = 4

    with pytest.raises(MaterializationError) as excinfo:
        cache.materialize(foo_identifier, artifact)

    target = cache.get_path(foo_identifier)
    assert excinfo.value.identifier == foo_identifier
    assert excinfo.value.path == target
    assert isinstance(excinfo.value.__cause__, OSError)
    assert not target.exists()
    assert _leftovers(target.parent) == []


def test_failure_is_not_retried(cache, foo_identifier):
    artifact = MockArtifact(foo_identifier, b"0123456789")
    artifact.fail_after = 0
    with pytest.raises(MaterializationError):
        cache.materialize(foo_identifier, artifact)
    assert artifact.write_calls == 1


def test_unwritable_root_raises_materialization_error(tmp_path, foo_identifier):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("file in the way")
    cache = FileSystemMaterializationCache(blocker)

    with pytest.raises(MaterializationError):
        cache.materialize(foo_identifier, MockArtifact(foo_identifier, b"x"))


def test_published_file_is_world_readable(cache, foo_identifier):
    path = cache.materialize(foo_identifier, MockArtifact(foo_identifier, b"x"))
    assert path.stat().st_mode & 0o444 == 0o444


def test_get_path_never_leaves_the_root(cache, foo_identifier):
    escaping = ArtifactIdentifier("com.example", "foo", "1.2")
    # Bypass validation to model an identifier built from relative segments.
    object.__setattr__(escaping, "name", "..")
    object.__setattr__(escaping, "version", "..")
    with pytest.raises(ValueError):
        cache.get_path(escaping)
    with pytest.raises(ValueError):
        cache.materialize(escaping, MockArtifact(escaping, b"x"))
    assert not any(cache.root.parent.glob("*.jar"))


def test_falls_back_to_replace_without_hard_links(cache, foo_identifier, mocker):
    mocker.patch("artibridge.adapters.storage_fs.os.link", side_effect=PermissionError(1, "Operation not permitted"))
    path = cache.materialize(foo_identifier, MockArtifact(foo_identifier, b"linked"))
    assert path.read_bytes() == b"linked"
    assert _leftovers(path.parent) == []


# --- Concurrency ---

def test_concurrent_materialize_publishes_one_complete_file(cache, foo_identifier):
    payload = bytes(range(256)) * 4096  # 1 MiB
    artifact = MockArtifact(foo_identifier, payload, delay=0.05)
    workers = 8
    barrier = threading.Barrier(workers)

    def materialize():
        barrier.wait()
        return cache.materialize(foo_identifier, artifact)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        paths = list(pool.map(lambda _: materialize(), range(workers)))

    target = cache.get_path(foo_identifier)
    assert set(paths) == {target}
    assert target.read_bytes() == payload
    assert 1 <= artifact.write_calls <= workers
    assert _leftovers(target.parent) == []


def test_distinct_identifiers_do_not_collide(cache):
    identifiers = [
        ArtifactIdentifier("com.example", "foo", "1.2"),
        ArtifactIdentifier("com.example", "foo", "1.2", "sources"),
        ArtifactIdentifier("com.example", "foo", "1.2", None, "pom"),
        ArtifactIdentifier("com.example", "foo", "1.3"),
    ]
    with ThreadPoolExecutor(max_workers=4) as pool:
        paths = list(pool.map(
            lambda ident: cache.materialize(ident, MockArtifact(ident, str(ident).encode())),
            identifiers,
        ))

    assert len(set(paths)) == len(identifiers)
    for identifier, path in zip(identifiers, paths):
        assert path.read_bytes() == str(identifier).encode()


# --- Staging files ---

def test_staging_file_is_a_hidden_readable_sibling(repo_root):
    target = repo_root / "foo-1.2.jar"
    with staging_file(target) as temp_path:
        assert temp_path.parent == repo_root
        assert temp_path.name.startswith(".foo-1.2.jar.")
        assert temp_path.stat().st_mode & 0o444 == 0o444
    assert not temp_path.exists()


def test_staging_file_is_removed_when_the_writer_fails(repo_root):
    target = repo_root / "foo-1.2.jar"
    with pytest.raises(OSError):
        with staging_file(target) as temp_path:
            temp_path.write_bytes(b"partial")
            raise OSError("disk full")
    assert list(repo_root.iterdir()) == []


def test_staging_file_moved_into_place_is_kept(repo_root):
    target = repo_root / "foo-1.2.jar"
    with staging_file(target) as temp_path:
        temp_path.write_bytes(b"complete")
        temp_path.replace(target)
    assert target.read_bytes() == b"complete"
    assert _leftovers(repo_root) == []
