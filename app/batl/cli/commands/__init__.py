"""CLI commands for batl.

This package contains all subcommand implementations.
"""

from batl.cli.commands import dependency, link, repository, setup, upgrade, workspace

__all__ = ["dependency", "link", "repository", "setup", "upgrade", "workspace"]
