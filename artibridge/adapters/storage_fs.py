"""
A concrete implementation of the ArtifactCache that materializes artifacts
as files under a local repository root, in the same layout the router parses.
"""
import errno
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from artibridge.internal.logging import get_logger
from artibridge.kernel.artifacts import Artifact, ArtifactCache
from artibridge.kernel.errors import MaterializationError, MissingArtifactError
from artibridge.kernel.identifiers import ArtifactIdentifier

logger = get_logger(__name__)

# Filesystems that cannot hard link report one of these.
_NO_LINK_ERRNOS = {errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.EXDEV, errno.EMLINK}


@contextmanager
def staging_file(target: Path) -> Iterator[Path]:
    """
    Yields an empty, world-readable temporary sibling of `target`.

    The caller fills it and moves it into place; whatever is left behind is
    removed on exit, also when the caller fails halfway.
    """
    fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    os.close(fd)
    temp_path = Path(temp_name)
    try:
        # mkstemp creates files readable by the owner only
        os.chmod(temp_path, 0o644)
        yield temp_path
    finally:
        if temp_path.exists():
            temp_path.unlink()


class FileSystemMaterializationCache(ArtifactCache):
    """
    Writes each artifact at most once to `root/<identifier path>`.

    A file that exists at the derived path is trusted and never rewritten.
    New files are written to a temporary sibling and published atomically,
    so concurrent readers only ever see complete files. When two writers
    race, the first publish wins and the other discards its copy.
    """
    def __init__(self, root: Union[str, os.PathLike]):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def get_path(self, identifier: ArtifactIdentifier) -> Path:
        target = self._root.joinpath(*identifier.to_path().split("/"))
        root = os.path.normpath(self._root)
        if os.path.commonpath([root, os.path.normpath(target)]) != root:
            raise ValueError(f"{identifier} does not map to a path under {self._root}")
        return target

    def materialize(self, identifier: ArtifactIdentifier, artifact: Artifact) -> Path:
        target = self.get_path(identifier)
        if not artifact.is_present():
            return target
        if target.is_file():
            return target

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._write_and_publish(identifier, artifact, target)
        except (OSError, MissingArtifactError) as e:
            logger.error("Materialization failed", identifier=str(identifier), path=str(target), exc_info=e)
            raise MaterializationError(identifier, target, str(e)) from e
        return target

    def _write_and_publish(self, identifier: ArtifactIdentifier, artifact: Artifact, target: Path) -> None:
        with staging_file(target) as temp_path:
            with open(temp_path, "wb") as out:
                artifact.write_to(out)
                out.flush()
                os.fsync(out.fileno())

            if self._publish(temp_path, target):
                logger.debug("Artifact materialized", identifier=str(identifier), path=str(target))
            else:
                logger.debug("Artifact already published by another writer", identifier=str(identifier))

    def _publish(self, temp_path: Path, target: Path) -> bool:
        """Returns False if another writer got there first."""
        try:
            os.link(temp_path, target)
            return True
        except FileExistsError:
            return False
        except OSError as e:
            if e.errno not in _NO_LINK_ERRNOS:
                raise
        # No hard links here; replace is still atomic, just not exclusive.
        if target.exists():
            return False
        os.replace(temp_path, target)
        return True
