"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from batl import __version__
from batl.cli.commands import dependency, link, repository, setup, upgrade, workspace

# Create main Typer app
app = typer.Typer(
    name="batl",
    help="Battalion: manage repositories and workspaces.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"batl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """batl - Battalion repository and workspace manager.

    Repositories and workspaces live under the Battalion root, found via
    BATL_ROOT, a .batlrc marker above the working directory, or ~/battalion.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(setup.app, name="setup")
app.add_typer(upgrade.app, name="upgrade")
app.command("add")(dependency.add)
app.command("remove")(dependency.remove)
app.add_typer(repository.app, name="repository")
app.add_typer(workspace.app, name="workspace")
app.add_typer(link.app, name="link")


if __name__ == "__main__":
    app()
