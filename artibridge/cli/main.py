import typer

from artibridge.cli.commands import (
    fetch,
    resolve,
    route,
    serve,
    version,
)

app = typer.Typer(
    name="artibridge",
    help="Serve computed artifacts as an ordinary Maven-layout repository.",
    no_args_is_help=True,
)

app.command("serve")(serve.serve)
app.command("resolve")(resolve.resolve)
app.command("fetch")(fetch.fetch)
app.command("route")(route.route)
app.command("version")(version.version)

if __name__ == "__main__":
    app()
