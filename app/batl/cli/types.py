"""Shared types and utilities for CLI commands.

This module provides name validation and error reporting helpers used
across multiple CLI command modules.
"""

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager

import typer

from batl.core.errors import BatlError
from batl.models.name import ResourceName
from batl.utils.formatting import print_error

logger = logging.getLogger(__name__)

# Resource names: at least two lowercase segments, e.g. "team/lib"
RESOURCE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9\-_]*(/[a-z][a-z0-9\-_]*)+$")

# Workspace link aliases
LINK_ALIAS_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_\-]*$")


def parse_resource_name(value: str) -> ResourceName:
    """Validate a resource name argument.

    Prints an error and exits with code 1 if the syntax is invalid.

    Args:
        value: Raw name from the command line.

    Returns:
        The parsed ResourceName.
    """
    if not RESOURCE_NAME_PATTERN.match(value):
        print_error(f"Invalid name: {value}")
        raise typer.Exit(code=1)
    return ResourceName.parse(value)


def check_link_alias(value: str) -> str:
    """Validate a link alias argument, exiting with code 1 if invalid."""
    if not LINK_ALIAS_PATTERN.match(value):
        print_error(f"Invalid name: {value}")
        raise typer.Exit(code=1)
    return value


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report batl errors on stderr and exit with code 1."""
    try:
        yield
    except BatlError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(str(e))
        raise typer.Exit(code=1) from e
