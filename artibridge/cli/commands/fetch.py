from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from artibridge.cli import core
from artibridge.kernel.errors import BridgeError
from artibridge.kernel.identifiers import ArtifactIdentifier

console = Console()


def fetch(
    notation: str = typer.Argument(..., help="Artifact as group:name:version[:classifier][@extension]."),
    root: Optional[Path] = typer.Option(None, "--root", help="Repository root. Defaults to ARTIBRIDGE_ROOT."),
    upstream: Optional[str] = typer.Option(None, "--upstream", help="Upstream repository URL."),
    source: Optional[str] = typer.Option(None, "--source", help="Custom artifact source factory as module:attribute."),
    metadata_dir: Optional[Path] = typer.Option(None, "--metadata-dir", help="Where fetched metadata documents are kept."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to the console."),
):
    """
    Materialize an artifact by its coordinates and print the local file.
    """
    try:
        identifier = ArtifactIdentifier.parse(notation)
        config = core.load_config(root=root, upstream=upstream, source=source, metadata_dir=metadata_dir, verbose=verbose)
        location = core.build_bridge(config).get_artifact(identifier)
    except (BridgeError, ValueError) as exc:
        console.print(f"[red]Fetch failed:[/red] {exc}")
        raise typer.Exit(1)

    if location is None:
        console.print(f"[yellow]Not found:[/yellow] {identifier}")
        raise typer.Exit(1)

    typer.echo(str(location))
