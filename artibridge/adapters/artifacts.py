"""
Ready-made Artifact implementations for artifact sources to hand out.
"""
import io
import shutil
from pathlib import Path
from typing import BinaryIO, Callable, Optional

import requests

from artibridge.internal.constants import DOWNLOAD_CHUNK_SIZE, REQUEST_TIMEOUT_SECONDS
from artibridge.kernel.artifacts import Artifact
from artibridge.kernel.errors import ArtifactSourceError, MissingArtifactError
from artibridge.kernel.identifiers import ArtifactIdentifier


class MissingArtifact(Artifact):
    """An artifact the source cannot produce."""
    def __init__(self, identifier: ArtifactIdentifier):
        self.identifier = identifier

    def is_present(self) -> bool:
        return False

    def write_to(self, out: BinaryIO) -> None:
        raise MissingArtifactError(self.identifier)

    def __repr__(self) -> str:
        return f"MissingArtifact({self.identifier})"


class StreamableArtifact(Artifact):
    """
    An artifact whose bytes come from a stream opener. The opener is only
    called when the artifact is materialized, so expensive generation is
    deferred until a reader actually asks for the file.
    """
    def __init__(
        self,
        identifier: ArtifactIdentifier,
        opener: Callable[[], BinaryIO],
        presence: Optional[Callable[[], bool]] = None,
    ):
        self.identifier = identifier
        self._opener = opener
        self._presence = presence

    @classmethod
    def of_bytes(cls, identifier: ArtifactIdentifier, data: bytes) -> "StreamableArtifact":
        return cls(identifier, lambda: io.BytesIO(data))

    @classmethod
    def of_supplier(cls, identifier: ArtifactIdentifier, supplier: Callable[[], bytes]) -> "StreamableArtifact":
        return cls(identifier, lambda: io.BytesIO(supplier()))

    @classmethod
    def of_file(cls, identifier: ArtifactIdentifier, path: Path) -> "StreamableArtifact":
        path = Path(path)
        return cls(identifier, lambda: open(path, "rb"), presence=path.is_file)

    def is_present(self) -> bool:
        return self._presence() if self._presence else True

    def write_to(self, out: BinaryIO) -> None:
        if not self.is_present():
            raise MissingArtifactError(self.identifier)
        with self._opener() as source:
            shutil.copyfileobj(source, out, DOWNLOAD_CHUNK_SIZE)

    def __repr__(self) -> str:
        return f"StreamableArtifact({self.identifier})"


class UrlArtifact(Artifact):
    """
    An artifact downloaded from a URL. Presence is checked with a HEAD
    request the first time it is asked for and remembered afterwards.
    """
    def __init__(
        self,
        identifier: ArtifactIdentifier,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.identifier = identifier
        self.url = url
        self._session = session or requests.Session()
        self._timeout = timeout
        self._present: Optional[bool] = None

    def is_present(self) -> bool:
        if self._present is None:
            try:
                response = self._session.head(self.url, allow_redirects=True, timeout=self._timeout)
            except requests.exceptions.RequestException as e:
                raise ArtifactSourceError(f"Could not reach {self.url}: {e}") from e
            if response.status_code == 404:
                self._present = False
            elif response.ok:
                self._present = True
            else:
                raise ArtifactSourceError(f"Unexpected status {response.status_code} for {self.url}")
        return self._present

    def write_to(self, out: BinaryIO) -> None:
        try:
            with self._session.get(self.url, stream=True, timeout=self._timeout) as r:
                if r.status_code == 404:
                    raise MissingArtifactError(self.identifier)
                r.raise_for_status()
                for chunk in r.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    out.write(chunk)
        except requests.exceptions.RequestException as e:
            # Surfaced as an I/O failure so the cache reports it as a failed write.
            raise OSError(f"Download failed for {self.url}: {e}") from e

    def __repr__(self) -> str:
        return f"UrlArtifact({self.identifier}, {self.url})"
