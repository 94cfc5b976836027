"""
This module defines the resource bridge, the component a host calls for
every resource read under the repository root.

It translates filesystem-style reads into artifact lookups against an
ArtifactSource, materializes the results through an ArtifactCache, and
hands back ordinary local files.
"""
import os
from pathlib import Path
from typing import Optional, Union

from artibridge.adapters.storage_fs import FileSystemMaterializationCache
from artibridge.internal.config import BridgeConfig
from artibridge.internal.constants import DEFAULT_BRIDGE_NAME
from artibridge.internal.logging import get_logger
from artibridge.internal.paths import clean_root, normalize_request
from artibridge.kernel.artifacts import ArtifactCache, ArtifactSource
from artibridge.kernel.contracts import ResourceHandle, ResourceKind, ResourceRepository
from artibridge.kernel.identifiers import ArtifactIdentifier
from artibridge.kernel.routing import (
    ArtifactRequest,
    DirectoryRequest,
    MetadataRequest,
    PathRouter,
)

logger = get_logger(__name__)


class ResourceBridge(ResourceRepository):
    """
    Read-only virtual repository mounted at `root`.

    The bridge holds no mutable state of its own; everything it writes goes
    through the cache, which is safe to call from many threads at once.
    """
    def __init__(
        self,
        root: Union[str, os.PathLike],
        source: ArtifactSource,
        cache: Optional[ArtifactCache] = None,
        router: Optional[PathRouter] = None,
        name: str = DEFAULT_BRIDGE_NAME,
    ):
        self.name = name
        self.root = clean_root(root)
        self.source = source
        self.cache = cache if cache is not None else FileSystemMaterializationCache(Path(self.root))
        self.router = router if router is not None else PathRouter()

    @classmethod
    def from_config(cls, config: BridgeConfig, source: ArtifactSource) -> "ResourceBridge":
        return cls(
            config.root,
            source,
            router=PathRouter(config.metadata_file_name),
            name=config.name,
        )

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.root})"

    def locate(self, relative_path: str) -> str:
        """Joins a repository-relative path onto the root."""
        return self.root + relative_path.lstrip("/")

    def resolve(self, requested: Union[str, os.PathLike]) -> ResourceHandle:
        path = normalize_request(requested)
        if not path.startswith(self.root):
            logger.info("Unknown root, passing through", bridge=self.name, path=path)
            return self._pass_through(path)

        relative = path[len(self.root):]
        route = self.router.route(relative)

        if isinstance(route, ArtifactRequest):
            return self._resolve_artifact(path, route.identifier)

        if isinstance(route, MetadataRequest):
            metadata = self.source.get_maven_metadata(route.group, route.name)
            if metadata is not None:
                return ResourceHandle(path=path, kind=ResourceKind.METADATA, location=Path(metadata))
            logger.debug("No metadata from source", group=route.group, name=route.name)
            return self._pass_through(path)

        if isinstance(route, DirectoryRequest):
            return ResourceHandle(path=path, kind=ResourceKind.NOT_FOUND, location=None)

        return self._pass_through(path)

    def get_artifact(self, identifier: ArtifactIdentifier) -> Optional[Path]:
        """
        Materializes an artifact directly by identifier, bypassing routing.
        Returns None if the source does not have it.
        """
        artifact = self.source.get_artifact(identifier)
        if not artifact.is_present():
            return None
        return self.cache.materialize(identifier, artifact)

    def _resolve_artifact(self, path: str, identifier: ArtifactIdentifier) -> ResourceHandle:
        artifact = self.source.get_artifact(identifier)
        location = self.cache.materialize(identifier, artifact)
        return ResourceHandle(
            path=path,
            kind=ResourceKind.ARTIFACT,
            location=location,
            identifier=identifier,
        )

    @staticmethod
    def _pass_through(path: str) -> ResourceHandle:
        return ResourceHandle(path=path, kind=ResourceKind.PASS_THROUGH, location=Path(path))

    def __repr__(self) -> str:
        return f"ResourceBridge({self.display_name})"
