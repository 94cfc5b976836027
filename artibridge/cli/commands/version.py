import importlib.metadata

import typer

from artibridge.internal.logging import get_logger

logger = get_logger(__name__)


def version():
    """
    Show the artibridge version.
    """
    try:
        # Read version from pyproject.toml via installed package metadata
        package_version = importlib.metadata.version("artibridge")
        typer.echo(f"artibridge version: {package_version}")
    except importlib.metadata.PackageNotFoundError:
        typer.echo("artibridge is not installed or version metadata not found.")
        typer.echo("Please install the package first (e.g., pip install . or pip install -e .)")
        logger.warning("artibridge package version not found.")
        raise typer.Exit(1)
