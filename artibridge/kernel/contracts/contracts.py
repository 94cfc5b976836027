import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Protocol, Union

from artibridge.kernel.identifiers import ArtifactIdentifier


class ResourceKind(str, Enum):
    ARTIFACT = "artifact"
    METADATA = "metadata"
    PASS_THROUGH = "pass_through"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ResourceHandle:
    """
    The answer to a single resource read.
    This is a pure data contract; the host reads `location` like any file.

    `location` is None only for explicit not-found answers. A location that
    does not exist on disk is also observed by the host as not found.
    """
    path: str
    kind: ResourceKind
    location: Optional[Path]
    identifier: Optional[ArtifactIdentifier] = None

    @property
    def is_available(self) -> bool:
        return self.location is not None and self.location.is_file()

    def open(self) -> BinaryIO:
        if not self.is_available:
            raise FileNotFoundError(f"Resource not found: {self.path}")
        return open(self.location, "rb")


class ResourceRepository(Protocol):
    """
    The extension point a host registers: a read-only virtual filesystem
    mounted at `root`. Hosts interact with the bridge ONLY through this interface.
    """
    name: str
    root: str

    def resolve(self, requested: Union[str, os.PathLike]) -> ResourceHandle:
        """
        Resolve an absolute path (or `file://` URI) into a local file handle.
        """
        ...
