"""Link commands.

Manages the repository links of the workspace containing the working
directory. Each link is an alias recorded in the workspace's batl.toml
plus a directory symlink of the same name.
"""

from pathlib import Path
from typing import Annotated

import typer

from batl.cli.types import check_link_alias, handle_errors, parse_resource_name
from batl.core.resources import Repository, Workspace
from batl.utils.formatting import console, create_table, print_error, print_info, print_success
from batl.utils.shell import run_interactive

app = typer.Typer(
    help="Manage links in the current workspace.",
    no_args_is_help=True,
)


def _current_workspace() -> Workspace:
    """Load the workspace containing the working directory, or exit with code 1."""
    with handle_errors():
        workspace = Workspace.locate_then_load(Path.cwd())
    if workspace is None:
        print_error("Not inside a workspace")
        raise typer.Exit(code=1)
    return workspace


@app.command("ls")
def ls() -> None:
    """List links of the current workspace."""
    workspace = _current_workspace()
    links = workspace.links
    if not links:
        print_info(f"Workspace {workspace.name} has no links")
        return

    table = create_table(f"Links in {workspace.name}", "Link", "Repository")
    for alias in sorted(links):
        table.add_row(alias, str(links[alias]))
    console.print(table)


@app.command("init")
def init(
    repository: Annotated[str, typer.Argument(help="Repository to link (e.g. team/lib).")],
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Link alias. Defaults to the repository's last name segment.",
        ),
    ] = None,
) -> None:
    """Link a repository into the current workspace.

    Examples:
        batl link init infra/tools
        batl link init infra/tools -n tools
    """
    repository_name = parse_resource_name(repository)
    alias = check_link_alias(name if name is not None else repository_name.leaf)
    workspace = _current_workspace()

    with handle_errors():
        repo = Repository.load(repository_name)
        workspace.create_link(alias, repo)
    print_success(f"Initialized link {alias}")


@app.command("delete")
def delete(
    name: Annotated[str, typer.Argument(help="Link alias.")],
) -> None:
    """Remove a link from the current workspace."""
    workspace = _current_workspace()
    with handle_errors():
        workspace.unlink(name)
    print_success(f"Deleted link {name}")


@app.command(
    "run",
    context_settings={"ignore_unknown_options": True},
)
def run(
    name: Annotated[str, typer.Argument(help="Link alias.")],
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Command and arguments to run inside the link."),
    ] = None,
) -> None:
    """Run a command inside a linked repository.

    Examples:
        batl link run tools -- make test
    """
    workspace = _current_workspace()
    if name not in workspace.links:
        print_error(f"Link {name} does not exist")
        raise typer.Exit(code=1)
    if not args:
        print_error("No command given")
        raise typer.Exit(code=1)

    print_info(f"Running command for link {name}")
    try:
        returncode = run_interactive(args, cwd=workspace.path / name)
    except OSError as e:
        print_error(f"Cannot run {args[0]}: {e}")
        raise typer.Exit(code=1) from e

    if returncode != 0:
        print_error(f"Command failed: exit code {returncode}")
        raise typer.Exit(code=1)
    print_success("Command completed successfully")
