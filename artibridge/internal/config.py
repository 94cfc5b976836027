"""Centralized configuration for artibridge."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from artibridge.internal import paths
from artibridge.internal.constants import (
    DEFAULT_BRIDGE_NAME,
    METADATA_FILE_NAME,
    REPOSITORY_HOST,
    REPOSITORY_PORT,
    REQUEST_TIMEOUT_SECONDS,
)


@dataclass(slots=True)
class BridgeConfig:
    """All artibridge configuration in one place.

    Environment variables (all optional):
        ARTIBRIDGE_ROOT:          Repository root the bridge serves. Default <app data>/repository.
        ARTIBRIDGE_METADATA_DIR:  Where remote metadata documents are kept. Default <app data>/metadata.
        ARTIBRIDGE_UPSTREAM:      Base URL of an upstream Maven-layout repository.
        ARTIBRIDGE_SOURCE:        Custom artifact source factory, as "module:attribute".
        ARTIBRIDGE_METADATA_FILE: Metadata document file name. Default "maven-metadata.xml".
        ARTIBRIDGE_LOG_LEVEL:     Logging level. Default "INFO".
        ARTIBRIDGE_HOST:          HTTP repository bind address. Default 127.0.0.1.
        ARTIBRIDGE_PORT:          HTTP repository port. Default 8808.
        ARTIBRIDGE_TIMEOUT:       Upstream request timeout in seconds. Default 60.
        ARTIBRIDGE_NAME:          Display name of the bridge. Default "artibridge".
    """

    root: Path = field(default_factory=paths.get_repository_dir)
    metadata_dir: Path = field(default_factory=paths.get_metadata_dir)
    upstream_url: Optional[str] = None
    source: Optional[str] = None
    metadata_file_name: str = METADATA_FILE_NAME
    log_level: str = "INFO"
    host: str = REPOSITORY_HOST
    port: int = REPOSITORY_PORT
    timeout: float = REQUEST_TIMEOUT_SECONDS
    name: str = DEFAULT_BRIDGE_NAME

    @classmethod
    def from_env(cls, **overrides) -> "BridgeConfig":
        """Build config from environment variables + explicit overrides.

        Overrides whose value is None are ignored, so CLI options that were
        not given fall back to the environment.
        """
        env = os.environ
        values = {
            "root": Path(env["ARTIBRIDGE_ROOT"]) if env.get("ARTIBRIDGE_ROOT") else None,
            "metadata_dir": Path(env["ARTIBRIDGE_METADATA_DIR"]) if env.get("ARTIBRIDGE_METADATA_DIR") else None,
            "upstream_url": env.get("ARTIBRIDGE_UPSTREAM") or None,
            "source": env.get("ARTIBRIDGE_SOURCE") or None,
            "metadata_file_name": env.get("ARTIBRIDGE_METADATA_FILE") or None,
            "log_level": env.get("ARTIBRIDGE_LOG_LEVEL") or None,
            "host": env.get("ARTIBRIDGE_HOST") or None,
            "port": int(env["ARTIBRIDGE_PORT"]) if env.get("ARTIBRIDGE_PORT") else None,
            "timeout": float(env["ARTIBRIDGE_TIMEOUT"]) if env.get("ARTIBRIDGE_TIMEOUT") else None,
            "name": env.get("ARTIBRIDGE_NAME") or None,
        }
        unknown = set(overrides) - set(values)
        if unknown:
            raise TypeError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**{key: value for key, value in values.items() if value is not None})
