"""
Loading of custom artifact sources.

A custom backend is any importable callable that returns an ArtifactSource
when called with the active BridgeConfig:

    # mypackage/backend.py
    def create_source(config):
        return ProviderArtifactSource(my_provider)

    $ artibridge serve --source mypackage.backend:create_source
"""
import importlib

from artibridge.internal.config import BridgeConfig
from artibridge.internal.logging import get_logger
from artibridge.internal.paths import clean_root
from artibridge.kernel.artifacts import ArtifactSource
from artibridge.kernel.errors import PluginLoadError

logger = get_logger(__name__)


def load_source_factory(spec: str):
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise PluginLoadError(f"Expected 'module:attribute', got {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise PluginLoadError(f"Could not import {module_name!r}: {e}") from e

    target = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise PluginLoadError(f"{module_name!r} has no attribute {attribute!r}") from e
    if not callable(target):
        raise PluginLoadError(f"{spec!r} is not callable")
    return target


def create_source(config: BridgeConfig) -> ArtifactSource:
    """
    Picks the artifact source once, at startup: a custom factory if one is
    configured, otherwise the upstream HTTP repository.
    """
    if config.source:
        factory = load_source_factory(config.source)
        source = factory(config)
        for method in ("get_artifact", "get_maven_metadata"):
            if not callable(getattr(source, method, None)):
                raise PluginLoadError(f"{config.source!r} returned an object without {method}()")
        logger.info("Using custom artifact source", source=config.source)
        return source

    if config.upstream_url:
        if _is_within(config.metadata_dir, config.root):
            raise ValueError(f"Metadata directory {config.metadata_dir} must not lie under the repository root {config.root}")
        # Imported here so a custom source does not pull in the HTTP stack.
        from artibridge.adapters.remote_http import RemoteArtifactSource

        logger.info("Using upstream repository", upstream=config.upstream_url)
        return RemoteArtifactSource(
            config.upstream_url,
            metadata_dir=config.metadata_dir,
            timeout=config.timeout,
            metadata_file_name=config.metadata_file_name,
        )

    raise PluginLoadError("No artifact source configured. Set ARTIBRIDGE_UPSTREAM or ARTIBRIDGE_SOURCE.")


def _is_within(path, root) -> bool:
    return clean_root(path).startswith(clean_root(root))
