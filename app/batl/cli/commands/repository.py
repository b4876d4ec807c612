"""Repository commands.

Lists, creates, deletes, and locates repositories, and runs their scripts.
"""

from pathlib import Path
from typing import Annotated

import typer

from batl.cli.types import handle_errors, parse_resource_name
from batl.core.resources import Repository, list_resources
from batl.models.types import ResourceKind
from batl.utils.formatting import print_error, print_info, print_success
from batl.utils.shell import run_script

app = typer.Typer(
    help="Manage repositories.",
    no_args_is_help=True,
)


@app.command("ls")
def ls(
    prefix: Annotated[
        str | None,
        typer.Argument(help="Only list names starting with this prefix."),
    ] = None,
) -> None:
    """List repositories.

    Examples:
        batl repository ls
        batl repository ls infra/
    """
    with handle_errors():
        names = list_resources(ResourceKind.REPOSITORY, prefix)
    for name in names:
        typer.echo(str(name))


@app.command("init")
def init(
    name: Annotated[str, typer.Argument(help="Repository name (e.g. team/lib).")],
    git: Annotated[
        str | None,
        typer.Option(
            "--git",
            help="Record a git remote URL for the repository.",
        ),
    ] = None,
) -> None:
    """Create a new repository.

    Examples:
        batl repository init infra/tools
        batl repository init infra/tools --git https://example.com/tools.git
    """
    resource_name = parse_resource_name(name)
    with handle_errors():
        repository = Repository.create(resource_name, git_url=git)
    print_success(f"Initialized repository {repository.name}")


@app.command("delete")
def delete(
    name: Annotated[str, typer.Argument(help="Repository name.")],
) -> None:
    """Delete a repository and everything in it.

    Examples:
        batl repository delete infra/tools
    """
    resource_name = parse_resource_name(name)
    with handle_errors():
        Repository.load(resource_name).destroy()
    print_success(f"Deleted repository {resource_name}")


@app.command("which")
def which(
    name: Annotated[str, typer.Argument(help="Repository name.")],
) -> None:
    """Print the directory of a repository.

    Examples:
        cd "$(batl repository which infra/tools)"
    """
    resource_name = parse_resource_name(name)
    with handle_errors():
        repository = Repository.load(resource_name)
    typer.echo(str(repository.path))


@app.command("exec")
def exec_script(
    script: Annotated[str, typer.Argument(help="Script name from batl.toml.")],
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Repository name. Defaults to the repository containing the working directory.",
        ),
    ] = None,
) -> None:
    """Run a repository script with sh -c in the repository directory.

    Examples:
        batl repository exec build
        batl repository exec test -n infra/tools
    """
    with handle_errors():
        if name is not None:
            repository = Repository.load(parse_resource_name(name))
        else:
            repository = Repository.locate_then_load(Path.cwd())

    if repository is None:
        print_error("Repository does not exist")
        raise typer.Exit(code=1)

    command = repository.script(script)
    if command is None:
        print_error(f"Script not found: {script}")
        raise typer.Exit(code=1)

    print_info(f"Running script {script} for {repository.name}")
    returncode = run_script(command, cwd=repository.path)
    if returncode != 0:
        print_error(f"Script failed: exit code {returncode}")
        raise typer.Exit(code=1)
    print_success("Script completed successfully")
