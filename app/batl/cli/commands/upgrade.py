"""Upgrade command implementation.

Brings an existing Battalion root up to the current layout and rewrites
resource configs in the latest schema version.
"""

import typer

from batl.cli.types import handle_errors
from batl.core.paths import BATLRC_FILENAME
from batl.core.setup import upgrade_root
from batl.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Upgrade the Battalion root and resource configs.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def upgrade(ctx: typer.Context) -> None:
    """Upgrade the Battalion root to the current layout.

    Creates missing directories and .batlrc, then rewrites every resource
    config in the latest schema version. Resources that cannot be loaded
    are reported and left as they are.

    Examples:
        batl upgrade
    """
    if ctx.invoked_subcommand is not None:
        return

    with handle_errors():
        report = upgrade_root()

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet:
        for path in report.created_dirs:
            print_info(f"Created {path}")
        if report.created_batlrc:
            print_info(f"Created {report.root / BATLRC_FILENAME}")

    for kind, name, reason in report.failed:
        print_warning(f"Skipped {kind.value} {name}: {reason}")

    if not quiet:
        console.print(f"  Configs rewritten: [bold]{len(report.rewritten)}[/bold]")
    print_success(f"Battalion root at {report.root} is up to date")
