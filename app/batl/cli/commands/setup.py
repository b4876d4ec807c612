"""Setup command implementation.

Creates a new Battalion root directory.
"""

import typer

from batl.cli.types import handle_errors
from batl.core.setup import setup_root
from batl.utils.formatting import print_success

app = typer.Typer(
    help="Create the Battalion root directory.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def setup(ctx: typer.Context) -> None:
    """Create the Battalion root at ~/battalion.

    Fails if a root already resolves (BATL_ROOT, a .batlrc above the
    working directory, or an existing ~/battalion).

    Examples:
        batl setup
    """
    if ctx.invoked_subcommand is not None:
        return

    with handle_errors():
        root = setup_root()
    print_success(f"Battalion root directory created at {root}")
