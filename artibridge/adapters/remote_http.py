"""
An ArtifactSource that fetches artifacts and metadata from an upstream
repository served over HTTP in the conventional Maven layout.
"""
from pathlib import Path
from typing import Optional

import requests

from artibridge.adapters.artifacts import UrlArtifact
from artibridge.adapters.storage_fs import staging_file
from artibridge.internal.constants import DOWNLOAD_CHUNK_SIZE, METADATA_FILE_NAME, REQUEST_TIMEOUT_SECONDS
from artibridge.internal.logging import get_logger
from artibridge.kernel.artifacts import Artifact, ArtifactSource
from artibridge.kernel.errors import ArtifactSourceError
from artibridge.kernel.identifiers import ArtifactIdentifier, group_to_path
from artibridge.kernel.routing import metadata_path

logger = get_logger(__name__)


class RemoteArtifactSource(ArtifactSource):
    """
    Artifacts are downloaded lazily by the cache. Metadata documents change
    upstream, so they are re-fetched on every request into `metadata_dir`,
    which must lie outside the bridge's repository root.
    """
    def __init__(
        self,
        base_url: str,
        metadata_dir: Path,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        metadata_file_name: str = METADATA_FILE_NAME,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url cannot be empty")
        self.base_url = base_url.rstrip("/")
        self._metadata_dir = Path(metadata_dir)
        self._metadata_file_name = metadata_file_name
        self._timeout = timeout
        self._session = session or requests.Session()

    def get_artifact(self, identifier: ArtifactIdentifier) -> Artifact:
        url = f"{self.base_url}/{identifier.to_path()}"
        return UrlArtifact(identifier, url, session=self._session, timeout=self._timeout)

    def get_maven_metadata(self, group: str, name: str) -> Optional[Path]:
        url = f"{self.base_url}/{metadata_path(group, name, self._metadata_file_name)}"
        target = self._metadata_dir / group_to_path(group) / name / self._metadata_file_name
        target.parent.mkdir(parents=True, exist_ok=True)

        try:
            with staging_file(target) as temp_path:
                with open(temp_path, "wb") as out, self._session.get(url, stream=True, timeout=self._timeout) as r:
                    if r.status_code == 404:
                        logger.info("Upstream has no metadata", group=group, name=name, url=url)
                        return None
                    r.raise_for_status()
                    for chunk in r.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        out.write(chunk)
                temp_path.replace(target)
            return target
        except requests.exceptions.RequestException as e:
            raise ArtifactSourceError(f"Metadata download failed for {url}: {e}") from e
