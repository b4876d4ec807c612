"""CLI package for batl.

This package contains the Typer application and all subcommands.
"""

from batl.cli.main import app

__all__ = ["app"]
