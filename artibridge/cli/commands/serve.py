from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from artibridge.adapters.http import fastapi_server
from artibridge.cli import core
from artibridge.kernel.errors import BridgeError

console = Console()


def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Address to bind. Defaults to ARTIBRIDGE_HOST or 127.0.0.1."),
    port: Optional[int] = typer.Option(None, "--port", help="Port to bind. Defaults to ARTIBRIDGE_PORT or 8808."),
    root: Optional[Path] = typer.Option(None, "--root", help="Repository root. Defaults to ARTIBRIDGE_ROOT."),
    upstream: Optional[str] = typer.Option(None, "--upstream", help="Upstream repository URL."),
    source: Optional[str] = typer.Option(None, "--source", help="Custom artifact source factory as module:attribute."),
    metadata_dir: Optional[Path] = typer.Option(None, "--metadata-dir", help="Where fetched metadata documents are kept."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log to the console."),
):
    """
    Serve the bridge as a read-only HTTP repository.
    """
    try:
        config = core.load_config(
            root=root,
            upstream=upstream,
            source=source,
            metadata_dir=metadata_dir,
            verbose=verbose,
            host=host,
            port=port,
        )
        bridge = core.build_bridge(config)
    except (BridgeError, ValueError) as exc:
        console.print(f"[red]Could not start the repository:[/red] {exc}")
        raise typer.Exit(1)

    console.print(f"Serving [cyan]{bridge.display_name}[/cyan] on http://{config.host}:{config.port}/")
    fastapi_server.serve(bridge, config.host, config.port)
