"""Workspace commands.

Lists, creates, deletes, and locates workspaces.
"""

from typing import Annotated

import typer

from batl.cli.types import handle_errors, parse_resource_name
from batl.core.resources import Workspace, list_resources
from batl.models.types import ResourceKind
from batl.utils.formatting import print_success

app = typer.Typer(
    help="Manage workspaces.",
    no_args_is_help=True,
)


@app.command("ls")
def ls(
    prefix: Annotated[
        str | None,
        typer.Argument(help="Only list names starting with this prefix."),
    ] = None,
) -> None:
    """List workspaces."""
    with handle_errors():
        names = list_resources(ResourceKind.WORKSPACE, prefix)
    for name in names:
        typer.echo(str(name))


@app.command("init")
def init(
    name: Annotated[str, typer.Argument(help="Workspace name (e.g. team/app).")],
) -> None:
    """Create a new workspace.

    Examples:
        batl workspace init team/app
    """
    resource_name = parse_resource_name(name)
    with handle_errors():
        Workspace.create(resource_name)
    print_success(f"Workspace {resource_name} initialized")


@app.command("delete")
def delete(
    name: Annotated[str, typer.Argument(help="Workspace name.")],
) -> None:
    """Delete a workspace. Linked repositories are left untouched."""
    resource_name = parse_resource_name(name)
    with handle_errors():
        Workspace.load(resource_name).destroy()
    print_success(f"Workspace {resource_name} deleted")


@app.command("which")
def which(
    name: Annotated[str, typer.Argument(help="Workspace name.")],
) -> None:
    """Print the directory of a workspace."""
    resource_name = parse_resource_name(name)
    with handle_errors():
        workspace = Workspace.load(resource_name)
    typer.echo(str(workspace.path))
