# ---------------------------------------------------------------------
# Repository layout
# ---------------------------------------------------------------------

METADATA_FILE_NAME = "maven-metadata.xml"
DEFAULT_EXTENSION = "jar"
DEFAULT_BRIDGE_NAME = "artibridge"

# ---------------------------------------------------------------------
# HTTP repository
# ---------------------------------------------------------------------

REPOSITORY_HOST = "127.0.0.1"
REPOSITORY_PORT = 8808
REQUEST_TIMEOUT_SECONDS = 60.0
DOWNLOAD_CHUNK_SIZE = 1024 * 1024
