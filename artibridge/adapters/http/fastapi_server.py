"""
Exposes a resource bridge as a read-only HTTP repository.

Any resolution client that understands the conventional Maven layout can
use the served URL as a remote repository. This is the host extension
point: the client only sees plain HTTP, and nothing about its internals is
touched.
"""
import uvicorn
from fastapi import FastAPI, HTTPException, status
from fastapi.responses import FileResponse
from pydantic import BaseModel

from artibridge.internal.logging import get_logger
from artibridge.internal.paths import clean_root
from artibridge.kernel.contracts import ResourceKind, ResourceRepository
from artibridge.kernel.errors import ArtifactSourceError, BridgeError

logger = get_logger(__name__)


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str
    name: str
    root: str


# ---------------------------------------------------------------------
# App
# ---------------------------------------------------------------------

def create_app(bridge: ResourceRepository) -> FastAPI:
    app = FastAPI(title=f"{bridge.name} repository")

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", name=bridge.name, root=bridge.root)

    # Sync handlers run in the threadpool, so reads of the same artifact
    # can race into the cache; the cache publishes atomically.
    @app.api_route("/{resource_path:path}", methods=["GET", "HEAD"])
    def read_resource(resource_path: str):
        try:
            handle = bridge.resolve(bridge.root + resource_path)
        except ArtifactSourceError as e:
            logger.error("Artifact source failed", path=resource_path, error=str(e))
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
        except BridgeError as e:
            logger.exception("Resource resolution failed", path=resource_path)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

        if handle.kind is ResourceKind.PASS_THROUGH and not _is_public(handle.path, bridge.root):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        if not handle.is_available:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        return FileResponse(handle.location)

    return app


def _is_public(path: str, root: str) -> bool:
    """
    Plain files are served only from under the root, and never from hidden
    names such as the cache's in-flight staging files.
    """
    if not clean_root(path).startswith(root):
        return False
    return not any(part.startswith(".") for part in path[len(root):].split("/"))


# ---------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------

def serve(bridge: ResourceRepository, host: str, port: int) -> None:
    logger.info("Starting HTTP repository", name=bridge.name, root=bridge.root, host=host, port=port)
    uvicorn.run(
        create_app(bridge),
        host=host,
        port=port,
        workers=1,
        reload=False,
    )
