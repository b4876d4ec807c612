"""Battalion root setup and upgrade."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from batl.core.config import read_batlrc, write_batlrc
from batl.core.errors import (
    ConfigError,
    NotSetupError,
    ResourceError,
    ResourceExistsError,
    ResourceIOError,
    resource_error_from_config,
)
from batl.core.paths import (
    BATLRC_FILENAME,
    RootSearch,
    ensure_root_dirs,
    get_default_root_path,
    get_root,
)
from batl.core.resources import list_resources, resource_class
from batl.models.batlrc import BatlRc
from batl.models.name import ResourceName
from batl.models.types import ResourceKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpgradeReport:
    """Outcome of upgrading a root.

    Attributes:
        root: The upgraded root.
        created_dirs: Directories that were missing and got created.
        created_batlrc: True if .batlrc was missing and got written.
        rewritten: Resources whose config was rewritten in the latest shape.
        failed: Resources that could not be loaded, with the reason.
    """

    root: Path
    created_dirs: list[Path] = field(default_factory=list)
    created_batlrc: bool = False
    rewritten: list[tuple[ResourceKind, ResourceName]] = field(default_factory=list)
    failed: list[tuple[ResourceKind, ResourceName, str]] = field(default_factory=list)


def _ensure_batlrc(root: Path) -> bool:
    """Write a default .batlrc if none exists (an existing one is kept as is)."""
    path = root / BATLRC_FILENAME
    if path.exists():
        try:
            read_batlrc(path)
        except ConfigError as e:
            logger.warning("Existing %s is not valid: %s", path, e)
        return False
    try:
        write_batlrc(path, BatlRc())
    except ConfigError as e:
        raise resource_error_from_config(e) from e
    logger.info("Created %s", path)
    return True


def setup_root(search: RootSearch | None = None) -> Path:
    """Create a new root at ~/battalion.

    Args:
        search: Root resolution inputs. If None, uses the live process state.

    Returns:
        Path to the created root.

    Raises:
        ResourceExistsError: If a root already resolves.
        ResourceIOError: If the home directory is unknown or the layout cannot be created.
    """
    existing = get_root(search)
    if existing is not None:
        raise ResourceExistsError(f"Battalion is already set up at {existing}")

    root = get_default_root_path(search)
    if root is None:
        raise ResourceIOError("Cannot determine the home directory")

    try:
        ensure_root_dirs(root)
    except OSError as e:
        raise ResourceIOError(str(e)) from e
    _ensure_batlrc(root)
    logger.info("Created Battalion root %s", root)
    return root


def upgrade_root(search: RootSearch | None = None) -> UpgradeReport:
    """Bring an existing root up to the current layout and config shape.

    Missing directories and .batlrc are created, and every listed resource
    config is rewritten in the latest schema version. Resources that fail
    to load are reported and left untouched.

    Raises:
        NotSetupError: If no root can be resolved.
        ResourceIOError: If the layout cannot be created.
    """
    root = get_root(search)
    if root is None:
        raise NotSetupError()

    report = UpgradeReport(root=root)
    try:
        report.created_dirs = ensure_root_dirs(root)
    except OSError as e:
        raise ResourceIOError(str(e)) from e
    report.created_batlrc = _ensure_batlrc(root)

    for kind in ResourceKind:
        cls = resource_class(kind)
        for name in list_resources(kind, search=search):
            try:
                cls.load(name, search).save()
            except ResourceError as e:
                logger.warning("Cannot upgrade %s %s: %s", kind.value, name, e)
                report.failed.append((kind, name, str(e)))
                continue
            report.rewritten.append((kind, name))

    return report
