from artibridge.kernel.artifacts import Artifact, ArtifactCache, ArtifactSource
from artibridge.kernel.contracts.contracts import ResourceHandle, ResourceKind, ResourceRepository
from artibridge.kernel.identifiers import ArtifactIdentifier

__all__ = [
    "Artifact",
    "ArtifactCache",
    "ArtifactIdentifier",
    "ArtifactSource",
    "ResourceHandle",
    "ResourceKind",
    "ResourceRepository",
]
