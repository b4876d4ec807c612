"""Locate the nearest batl.toml above a directory.

Lookup walks from a start directory toward the filesystem root. A batl.toml
that cannot be read or parsed is skipped and the walk keeps ascending, so a
broken nested file never hides a valid outer resource.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from batl.core.config import CONFIG_FILENAME, read_any_config, read_config
from batl.core.errors import ConfigError
from batl.models.types import ResourceKind
from batl.schema import LatestConfig

logger = logging.getLogger(__name__)


def _candidates(start: Path) -> Iterator[Path]:
    """Yield every existing batl.toml from start upward, nearest first."""
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            yield candidate


def locate_possible(start: Path) -> Path | None:
    """Find the nearest directory holding a batl.toml, without parsing it.

    Args:
        start: Directory to start from (inclusive).

    Returns:
        The directory containing batl.toml, or None if the root is reached.
    """
    for candidate in _candidates(start):
        return candidate.parent
    return None


def locate_then_load(
    start: Path, kind: ResourceKind | None = None
) -> tuple[Path, LatestConfig] | None:
    """Find and load the nearest valid config at or above start.

    Args:
        start: Directory to start from (inclusive).
        kind: Only accept configs of this kind. If None, accept either.

    Returns:
        Tuple of (config file path, latest-shape config), or None if no
        valid config exists on the way up.
    """
    for candidate in _candidates(start):
        try:
            if kind is None:
                config = read_any_config(candidate)
            else:
                config = read_config(candidate, kind)
        except ConfigError as e:
            logger.debug("Skipping %s: %s", candidate, e)
            continue
        return candidate, config
    return None


def locate(start: Path, kind: ResourceKind | None = None) -> Path | None:
    """Find the nearest batl.toml that parses.

    Returns:
        Path of the config file, or None.
    """
    found = locate_then_load(start, kind)
    return None if found is None else found[0]


def load(start: Path, kind: ResourceKind | None = None) -> LatestConfig | None:
    """Load the nearest batl.toml that parses, upgraded to the latest shape.

    Returns:
        RepositoryConfig or WorkspaceConfig, or None.
    """
    found = locate_then_load(start, kind)
    return None if found is None else found[1]
