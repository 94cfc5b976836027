"""
Defines the value type that names an artifact in the repository.

An identifier is the bridge between the two worlds this package connects:
the filesystem view (`com/example/foo/1.2/foo-1.2.jar`) and the logical
view (`com.example:foo:1.2@jar`) that artifact sources work with.
"""
import re
from dataclasses import dataclass
from typing import Optional

from artibridge.internal.constants import DEFAULT_EXTENSION

_FORBIDDEN = re.compile(r"[/\s]")
_RELATIVE_SEGMENTS = (".", "..")


@dataclass(frozen=True)
class ArtifactIdentifier:
    """
    An immutable, structurally compared artifact name.

    `group` is always held in its logical, dot-separated form. The path form
    is derived on demand, so both encodings convert without loss.
    """
    group: str
    name: str
    version: str
    classifier: Optional[str] = None
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self):
        for field_name in ("group", "name", "version", "extension"):
            value = getattr(self, field_name)
            if not value:
                raise ValueError(f"{field_name} cannot be empty")
            if _FORBIDDEN.search(value):
                raise ValueError(f"{field_name} cannot contain '/' or whitespace: {value!r}")
            if value in _RELATIVE_SEGMENTS:
                raise ValueError(f"{field_name} cannot be a relative path segment: {value!r}")
        if self.classifier is not None:
            if not self.classifier:
                raise ValueError("classifier cannot be empty, use None instead")
            if _FORBIDDEN.search(self.classifier) or "." in self.classifier:
                raise ValueError(f"classifier cannot contain '/', '.' or whitespace: {self.classifier!r}")
        if any(not segment for segment in self.group.split(".")):
            raise ValueError(f"group has an empty segment: {self.group!r}")

    # ------------------------------------------------------------------
    # Path form
    # ------------------------------------------------------------------

    @property
    def group_path(self) -> str:
        return group_to_path(self.group)

    @property
    def file_name(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.name}-{self.version}{suffix}.{self.extension}"

    def to_path(self) -> str:
        """Repository-relative path, e.g. `com/example/foo/1.2/foo-1.2.jar`."""
        return f"{self.group_path}/{self.name}/{self.version}/{self.file_name}"

    # ------------------------------------------------------------------
    # Notation form
    # ------------------------------------------------------------------

    @property
    def notation(self) -> str:
        coordinates = [self.group, self.name, self.version]
        if self.classifier:
            coordinates.append(self.classifier)
        return ":".join(coordinates) + f"@{self.extension}"

    def __str__(self) -> str:
        return self.notation

    @classmethod
    def parse(cls, notation: str, default_extension: str = DEFAULT_EXTENSION) -> "ArtifactIdentifier":
        """
        Parses `group:name:version[:classifier][@extension]`.

        Raises:
            ValueError: if the notation does not have three or four coordinates.
        """
        coordinates, _, extension = notation.strip().partition("@")
        parts = coordinates.split(":")
        if len(parts) not in (3, 4):
            raise ValueError(f"Expected group:name:version[:classifier][@extension], got {notation!r}")
        classifier = parts[3] if len(parts) == 4 else None
        return cls(
            group=parts[0],
            name=parts[1],
            version=parts[2],
            classifier=classifier,
            extension=extension or default_extension,
        )


def group_to_path(group: str) -> str:
    return group.replace(".", "/")


def group_from_path(group_path: str) -> str:
    return group_path.replace("/", ".")
