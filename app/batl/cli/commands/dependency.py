"""Dependency commands.

Adds and removes dependencies in the nearest batl.toml, which may belong
to a repository or a workspace.
"""

from pathlib import Path
from typing import Annotated

import typer

from batl.cli.types import handle_errors, parse_resource_name
from batl.core.resources import DEFAULT_CONSTRAINT, add_dependency, remove_dependency
from batl.utils.formatting import print_info, print_success


def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Dependency name (e.g. team/lib).")],
    constraint: Annotated[
        str,
        typer.Option(
            "--constraint",
            "-c",
            help="Version constraint to record.",
        ),
    ] = DEFAULT_CONSTRAINT,
) -> None:
    """Add a dependency to the nearest batl.toml.

    Examples:
        batl add infra/lib
        batl add infra/lib --constraint "^1.2"
    """
    dependency = parse_resource_name(name)
    with handle_errors():
        path = add_dependency(Path.cwd(), dependency, constraint)

    if not (ctx.obj and ctx.obj.get("quiet")):
        print_info(f"Updated {path}")
    print_success(f"Added dependency {dependency}")


def remove(
    name: Annotated[str, typer.Argument(help="Dependency name (e.g. team/lib).")],
) -> None:
    """Remove a dependency from the nearest batl.toml.

    Examples:
        batl remove infra/lib
    """
    dependency = parse_resource_name(name)
    with handle_errors():
        remove_dependency(Path.cwd(), dependency)
    print_success(f"Removed dependency {dependency}")
