"""
Classifies repository-relative paths.

Every read the host issues under the repository root is routed here first.
The router never touches the filesystem or the artifact source: it only
decides what kind of request a path is.

    <group-path>/<name>/<version>/<name>-<version>[-<classifier>].<extension>
    <group-path>/<name>/<metadata-file>
"""
import re
from dataclasses import dataclass
from typing import Union

from artibridge.internal.constants import METADATA_FILE_NAME
from artibridge.internal.logging import get_logger
from artibridge.kernel.identifiers import ArtifactIdentifier, group_from_path, group_to_path

logger = get_logger(__name__)

# `name` and `version` in the file name are back-references to the
# directories, so hyphens inside either never cause a false split.
URL_PATTERN = re.compile(
    r"^(?P<group>[^/\s]+(?:/[^/\s]+)*)/(?P<name>[^/\s]+)/(?P<version>[^/\s]+)/"
    r"(?P=name)-(?P=version)(?:-(?P<classifier>[^./\s]+))?\.(?P<extension>[^/\s]+)$"
)


@dataclass(frozen=True)
class ArtifactRequest:
    identifier: ArtifactIdentifier


@dataclass(frozen=True)
class MetadataRequest:
    group: str
    name: str


@dataclass(frozen=True)
class DirectoryRequest:
    path: str


@dataclass(frozen=True)
class Unroutable:
    path: str


RouteResult = Union[ArtifactRequest, MetadataRequest, DirectoryRequest, Unroutable]


def _is_lossless_group_path(group_path: str) -> bool:
    # A dot inside a group directory would not survive the trip to the
    # logical group id and back.
    return "." not in group_path


def metadata_path(group: str, name: str, file_name: str = METADATA_FILE_NAME) -> str:
    """Inverse of metadata routing: `com.example`, `foo` -> `com/example/foo/maven-metadata.xml`."""
    return f"{group_to_path(group)}/{name}/{file_name}"


class PathRouter:
    """
    Turns a path relative to the repository root into a RouteResult.

    Ambiguous or malformed paths fall through to `Unroutable` rather than
    being guessed at.
    """

    def __init__(self, metadata_file_name: str = METADATA_FILE_NAME):
        if not metadata_file_name or "/" in metadata_file_name:
            raise ValueError(f"Invalid metadata file name: {metadata_file_name!r}")
        self.metadata_file_name = metadata_file_name

    def route(self, relative_path: str) -> RouteResult:
        match = URL_PATTERN.match(relative_path)
        if match:
            return self._artifact_request(relative_path, match)

        if relative_path.endswith("/" + self.metadata_file_name):
            return self._metadata_request(relative_path)

        if not relative_path or relative_path.endswith("/"):
            logger.debug("Directory listing not supported", path=relative_path)
            return DirectoryRequest(relative_path)

        logger.info("Path did not match the repository layout", path=relative_path)
        return Unroutable(relative_path)

    def _artifact_request(self, relative_path: str, match: re.Match) -> RouteResult:
        group_path = match.group("group")
        if not _is_lossless_group_path(group_path):
            logger.info("Group path is not convertible to a group id", path=relative_path)
            return Unroutable(relative_path)
        try:
            identifier = ArtifactIdentifier(
                group=group_from_path(group_path),
                name=match.group("name"),
                version=match.group("version"),
                classifier=match.group("classifier"),
                extension=match.group("extension"),
            )
        except ValueError as e:
            logger.info("Path names an invalid identifier", path=relative_path, error=str(e))
            return Unroutable(relative_path)
        return ArtifactRequest(identifier)

    def _metadata_request(self, relative_path: str) -> RouteResult:
        module_path = relative_path[: -len(self.metadata_file_name) - 1]
        group_path, sep, name = module_path.rpartition("/")
        segments = group_path.split("/")
        if (
            not sep
            or not name
            or name in (".", "..")
            or any(not segment or segment.isspace() for segment in segments)
            or not _is_lossless_group_path(group_path)
        ):
            logger.info("Metadata path has no group/name directory", path=relative_path)
            return Unroutable(relative_path)
        return MetadataRequest(group=group_from_path(group_path), name=name)
