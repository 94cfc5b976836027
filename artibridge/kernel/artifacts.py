"""
Defines the abstract contracts for producing and caching artifacts.

This is a core part of the Kernel. It defines the 'ports' that artifact
backends and cache adapters must provide. The kernel never decides what
bytes an artifact has; it only asks a source for them and hands them to
a cache.
"""
from abc import abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional, Protocol

from artibridge.kernel.identifiers import ArtifactIdentifier


class Artifact(Protocol):
    """
    A lazily produced unit of content. Nothing is computed until
    `write_to` is called.
    """
    identifier: ArtifactIdentifier

    @abstractmethod
    def is_present(self) -> bool:
        """
        Whether the backend can produce bytes for this artifact at all.
        """
        ...

    @abstractmethod
    def write_to(self, out: BinaryIO) -> None:
        """
        Streams the artifact's bytes into `out`.

        Raises:
            MissingArtifactError: if the artifact is not present.
            OSError: on I/O failure while producing or writing the bytes.
        """
        ...


class ArtifactSource(Protocol):
    """
    The interface (port) for any backend that can produce artifacts and
    metadata documents on demand.
    """

    @abstractmethod
    def get_artifact(self, identifier: ArtifactIdentifier) -> Artifact:
        """
        Returns an artifact for the identifier. Must not raise for unknown
        identifiers; return an artifact whose `is_present()` is False instead.

        May be called more than once for the same identifier when several
        readers race for it.
        """
        ...

    @abstractmethod
    def get_maven_metadata(self, group: str, name: str) -> Optional[Path]:
        """
        Returns a local file holding the metadata document for a module,
        or None if there is none.
        """
        ...


class ArtifactCache(Protocol):
    """
    The interface (port) for turning artifacts into durable local files.
    """

    @abstractmethod
    def get_path(self, identifier: ArtifactIdentifier) -> Path:
        """
        Derived location of the identifier's file. Pure; performs no I/O.
        """
        ...

    @abstractmethod
    def materialize(self, identifier: ArtifactIdentifier, artifact: Artifact) -> Path:
        """
        Ensures the artifact's file exists and returns its path. Absent
        artifacts yield the derived path without writing anything.
        """
        ...
