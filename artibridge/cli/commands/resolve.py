from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from artibridge.cli import core
from artibridge.kernel.errors import BridgeError

console = Console()


def resolve(
    path: str = typer.Argument(..., help="Repository path, relative to the root or absolute."),
    root: Optional[Path] = typer.Option(None, "--root", help="Repository root. Defaults to ARTIBRIDGE_ROOT."),
    upstream: Optional[str] = typer.Option(None, "--upstream", help="Upstream repository URL."),
    source: Optional[str] = typer.Option(None, "--source", help="Custom artifact source factory as module:attribute."),
    metadata_dir: Optional[Path] = typer.Option(None, "--metadata-dir", help="Where fetched metadata documents are kept."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to the console."),
):
    """
    Resolve one repository path through the bridge and print the local file.
    """
    try:
        config = core.load_config(root=root, upstream=upstream, source=source, metadata_dir=metadata_dir, verbose=verbose)
        bridge = core.build_bridge(config)
        requested = path if Path(path).is_absolute() else bridge.locate(path)
        handle = bridge.resolve(requested)
    except (BridgeError, ValueError) as exc:
        console.print(f"[red]Resolution failed:[/red] {exc}")
        raise typer.Exit(1)

    if not handle.is_available:
        console.print(f"[yellow]Not found[/yellow] ({handle.kind.value}): {handle.path}")
        raise typer.Exit(1)

    typer.echo(str(handle.location))
