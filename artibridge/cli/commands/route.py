import typer
from rich.console import Console
from rich.table import Table

from artibridge.internal.constants import METADATA_FILE_NAME
from artibridge.kernel.routing import (
    ArtifactRequest,
    DirectoryRequest,
    MetadataRequest,
    PathRouter,
)

console = Console()


def route(
    path: str = typer.Argument(..., help="Path relative to the repository root."),
    metadata_file: str = typer.Option(METADATA_FILE_NAME, "--metadata-file", help="Metadata document file name."),
):
    """
    Show how a repository path is classified. Performs no I/O.
    """
    result = PathRouter(metadata_file).route(path)

    table = Table(title=f"Route for {path!r}")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    if isinstance(result, ArtifactRequest):
        identifier = result.identifier
        table.add_row("kind", "artifact")
        table.add_row("group", identifier.group)
        table.add_row("name", identifier.name)
        table.add_row("version", identifier.version)
        table.add_row("classifier", identifier.classifier or "-")
        table.add_row("extension", identifier.extension)
        table.add_row("notation", identifier.notation)
    elif isinstance(result, MetadataRequest):
        table.add_row("kind", "metadata")
        table.add_row("group", result.group)
        table.add_row("name", result.name)
    elif isinstance(result, DirectoryRequest):
        table.add_row("kind", "directory")
    else:
        table.add_row("kind", "unroutable")

    console.print(table)
