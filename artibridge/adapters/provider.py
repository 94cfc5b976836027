"""
An ArtifactSource backed by plain Python callables.

This is the simplest way to plug custom generation logic into the bridge:

    def provide(identifier):
        if identifier.name == "generated":
            return StreamableArtifact.of_supplier(identifier, build_jar)
        return None

    source = ProviderArtifactSource(provide)
"""
from pathlib import Path
from typing import Callable, Optional

from artibridge.adapters.artifacts import MissingArtifact
from artibridge.internal.logging import get_logger
from artibridge.kernel.artifacts import Artifact, ArtifactSource
from artibridge.kernel.identifiers import ArtifactIdentifier

logger = get_logger(__name__)

ArtifactProvider = Callable[[ArtifactIdentifier], Optional[Artifact]]
MetadataProvider = Callable[[str, str], Optional[Path]]


class ProviderArtifactSource(ArtifactSource):
    def __init__(self, provider: ArtifactProvider, metadata_provider: Optional[MetadataProvider] = None):
        self._provider = provider
        self._metadata_provider = metadata_provider

    def get_artifact(self, identifier: ArtifactIdentifier) -> Artifact:
        artifact = self._provider(identifier)
        if artifact is None:
            logger.debug("Provider has no artifact", identifier=str(identifier))
            return MissingArtifact(identifier)
        return artifact

    def get_maven_metadata(self, group: str, name: str) -> Optional[Path]:
        if self._metadata_provider is None:
            return None
        return self._metadata_provider(group, name)
