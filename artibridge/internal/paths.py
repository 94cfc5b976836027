import os
import posixpath
from pathlib import Path
from typing import Union
from urllib.parse import unquote, urlparse


# ---------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------

def get_app_data_dir() -> Path:
    """
    Returns the application data directory.

    - ARTIBRIDGE_HOME, if set
    - Windows: %APPDATA%\\artibridge
    - Linux/macOS: ~/.artibridge
    """
    override = os.environ.get("ARTIBRIDGE_HOME")
    if override:
        path = Path(override)
    elif os.name == "nt":  # Windows
        base = os.environ.get("APPDATA", str(Path.home()))
        path = Path(base) / "artibridge"
    else:  # Linux / macOS
        path = Path.home() / ".artibridge"

    path.mkdir(parents=True, exist_ok=True)
    return path


def get_repository_dir() -> Path:
    path = get_app_data_dir() / "repository"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_metadata_dir() -> Path:
    path = get_app_data_dir() / "metadata"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_file() -> Path:
    log_dir = get_app_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "artibridge.log.json"


# ---------------------------------------------------------------------
# Path normalization
# ---------------------------------------------------------------------

def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def clean_root(root: Union[str, os.PathLike]) -> str:
    """
    Absolute, normalized, `/`-separated root that always ends with `/`,
    so that a plain prefix test tells whether a path lies under it.
    """
    cleaned = to_posix(os.path.abspath(os.fspath(root)))
    cleaned = posixpath.normpath(cleaned)
    if not cleaned.endswith("/"):
        cleaned += "/"
    return cleaned


def normalize_request(requested: Union[str, os.PathLike]) -> str:
    """
    Normalizes a requested locator into a `/`-separated path.

    Accepts plain paths, path-like objects and `file://` URIs. `.` and `..`
    segments are collapsed; a trailing separator is kept because it marks
    a directory request.
    """
    raw = os.fspath(requested)
    if raw.startswith("file:"):
        raw = unquote(urlparse(raw).path)
    raw = to_posix(raw)
    if not raw:
        return raw
    trailing = raw.endswith("/")
    normalized = posixpath.normpath(raw)
    if trailing and not normalized.endswith("/"):
        normalized += "/"
    return normalized
