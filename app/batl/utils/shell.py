"""Subprocess execution for resource scripts and link commands."""

import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def run_interactive(
    args: list[str],
    *,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Execute a command interactively, inheriting the terminal.

    Output is not captured, so the subprocess talks to the user's
    terminal directly.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Additional environment variables (merged with current env).

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If command cannot be executed.
    """
    full_env = {**os.environ, **(env or {})}
    logger.debug("Running %s in %s", args, cwd)
    result = subprocess.run(
        args,
        check=False,
        cwd=cwd,
        env=full_env,
    )
    return result.returncode


def run_script(command: str, *, cwd: Path) -> int:
    """Run a shell command line with ``sh -c`` in a directory.

    Args:
        command: Shell command line (e.g. a script from batl.toml).
        cwd: Directory to run in.

    Returns:
        Exit code of the shell.
    """
    return run_interactive(["sh", "-c", command], cwd=cwd)
