"""
Error types raised across the kernel and its adapters.

Absent artifacts and absent metadata are not errors: they surface as
not-found resource handles. Only failures that must reach the caller
are modeled here.
"""
from pathlib import Path
from typing import Optional


class BridgeError(Exception):
    """Base class for all artibridge errors."""


class MissingArtifactError(BridgeError):
    """Raised when bytes are requested from an artifact that is not present."""

    def __init__(self, identifier):
        super().__init__(f"Artifact is not present: {identifier}")
        self.identifier = identifier


class MaterializationError(BridgeError):
    """Raised when an artifact could not be written to its cache file."""

    def __init__(self, identifier, path: Path, reason: Optional[str] = None):
        message = f"Failed to materialize {identifier} at {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.identifier = identifier
        self.path = path


class ArtifactSourceError(BridgeError):
    """Raised by an artifact source when its backend fails."""


class PluginLoadError(BridgeError):
    """Raised when a custom artifact source factory cannot be loaded."""
