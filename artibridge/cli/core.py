"""
Core, reusable logic for CLI commands, decoupled from Typer.
"""
from pathlib import Path
from typing import Optional

from artibridge.internal import paths
from artibridge.internal.config import BridgeConfig
from artibridge.internal.logging import get_logger, setup_logging
from artibridge.internal.plugins import create_source
from artibridge.kernel.bridge import ResourceBridge

logger = get_logger(__name__)


def load_config(
    root: Optional[Path] = None,
    upstream: Optional[str] = None,
    source: Optional[str] = None,
    metadata_dir: Optional[Path] = None,
    log_level: Optional[str] = None,
    verbose: bool = False,
    **overrides,
) -> BridgeConfig:
    """Builds the config from env + options and configures logging once."""
    config = BridgeConfig.from_env(
        root=root,
        upstream_url=upstream,
        source=source,
        metadata_dir=metadata_dir,
        log_level=log_level,
        **overrides,
    )
    setup_logging(
        log_level_name=config.log_level,
        log_file_path=paths.get_log_file(),
        console_output=verbose,
    )
    return config


def build_bridge(config: BridgeConfig) -> ResourceBridge:
    """Selects the artifact source once and mounts a bridge on the configured root."""
    source = create_source(config)
    bridge = ResourceBridge.from_config(config, source)
    logger.info("Bridge ready", bridge=bridge.display_name)
    return bridge
