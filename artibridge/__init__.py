"""Serve computed artifacts as an ordinary Maven-layout repository."""
from artibridge.kernel.bridge import ResourceBridge
from artibridge.kernel.identifiers import ArtifactIdentifier

__version__ = "0.1.0"

__all__ = ["ArtifactIdentifier", "ResourceBridge", "__version__"]
