"""Battalion root resolution and resource path management.

The root directory is resolved fresh on every call, in this order:

1. The BATL_ROOT environment variable.
2. The nearest directory (from the working directory upward) holding .batlrc.
3. ~/battalion, if it already exists.

Layout under the root:
- workspaces/        Workspace resources
- repositories/      Repository resources
- gen/archives/      Generated archives
- .batlrc            Root marker and settings
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from batl.models.name import ResourceName
from batl.models.types import ResourceKind

# Environment variable naming the root directly
ROOT_ENV_VAR = "BATL_ROOT"

# Root marker file
BATLRC_FILENAME = ".batlrc"

# Directory name under the home directory used as fallback root
HOME_ROOT_DIRNAME = "battalion"

WORKSPACES_DIRNAME = "workspaces"
REPOSITORIES_DIRNAME = "repositories"
GEN_DIRNAME = "gen"
ARCHIVES_DIRNAME = "archives"


@dataclass(frozen=True, slots=True)
class RootSearch:
    """Inputs for root resolution.

    Any field left as None falls back to the live process state
    (os.environ, the working directory, the home directory).

    Attributes:
        environ: Environment mapping to read BATL_ROOT from.
        cwd: Directory to start the .batlrc search from.
        home: Home directory for the ~/battalion fallback.
    """

    environ: Mapping[str, str] | None = None
    cwd: Path | None = None
    home: Path | None = None

    def get_environ(self) -> Mapping[str, str]:
        """Environment mapping, defaulting to os.environ."""
        return os.environ if self.environ is None else self.environ

    def get_cwd(self) -> Path | None:
        """Search start directory, or None if the working directory is gone."""
        if self.cwd is not None:
            return self.cwd
        try:
            return Path.cwd()
        except OSError:
            return None

    def get_home(self) -> Path | None:
        """Home directory, or None if it cannot be determined."""
        if self.home is not None:
            return self.home
        try:
            return Path.home()
        except RuntimeError:
            return None


def _find_marker(start: Path) -> Path | None:
    """Walk from start upward to the first directory holding .batlrc."""
    current = start
    while True:
        if (current / BATLRC_FILENAME).exists():
            return current
        if current.parent == current:
            return None
        current = current.parent


def get_root(search: RootSearch | None = None) -> Path | None:
    """Resolve the Battalion root directory.

    Args:
        search: Resolution inputs. If None, uses the live process state.

    Returns:
        Path to the root, or None if Battalion is not set up.
    """
    search = search or RootSearch()

    override = search.get_environ().get(ROOT_ENV_VAR)
    if override:
        return Path(override)

    cwd = search.get_cwd()
    if cwd is not None:
        marked = _find_marker(cwd)
        if marked is not None:
            return marked

    home = search.get_home()
    if home is not None:
        home_root = home / HOME_ROOT_DIRNAME
        if home_root.exists():
            return home_root

    return None


def get_default_root_path(search: RootSearch | None = None) -> Path | None:
    """Get the location where setup creates a new root.

    Returns:
        Path to ~/battalion, or None if the home directory is unknown.
    """
    home = (search or RootSearch()).get_home()
    if home is None:
        return None
    return home / HOME_ROOT_DIRNAME


def get_workspace_root(search: RootSearch | None = None) -> Path | None:
    """Get the workspace root.

    Returns:
        Path to <root>/workspaces, or None if Battalion is not set up.
    """
    root = get_root(search)
    return None if root is None else root / WORKSPACES_DIRNAME


def get_repository_root(search: RootSearch | None = None) -> Path | None:
    """Get the repository root.

    Returns:
        Path to <root>/repositories, or None if Battalion is not set up.
    """
    root = get_root(search)
    return None if root is None else root / REPOSITORIES_DIRNAME


def get_gen_root(search: RootSearch | None = None) -> Path | None:
    """Get the generated-files root.

    Returns:
        Path to <root>/gen, or None if Battalion is not set up.
    """
    root = get_root(search)
    return None if root is None else root / GEN_DIRNAME


def get_archive_root(search: RootSearch | None = None) -> Path | None:
    """Get the archive root.

    Returns:
        Path to <root>/gen/archives, or None if Battalion is not set up.
    """
    gen_root = get_gen_root(search)
    return None if gen_root is None else gen_root / ARCHIVES_DIRNAME


def get_batlrc_path(search: RootSearch | None = None) -> Path | None:
    """Get the root settings file path.

    Returns:
        Path to <root>/.batlrc, or None if Battalion is not set up.
    """
    root = get_root(search)
    return None if root is None else root / BATLRC_FILENAME


def get_root_for(kind: ResourceKind, search: RootSearch | None = None) -> Path | None:
    """Get the root directory holding resources of a kind."""
    if kind is ResourceKind.REPOSITORY:
        return get_repository_root(search)
    return get_workspace_root(search)


def resource_path(
    kind: ResourceKind, name: ResourceName, search: RootSearch | None = None
) -> Path | None:
    """Compose the absolute directory of a named resource.

    Args:
        kind: Resource kind, selecting the root.
        name: Resource name to encode.
        search: Resolution inputs. If None, uses the live process state.

    Returns:
        Path such as <root>/repositories/@team/lib, or None if not set up.
    """
    root = get_root_for(kind, search)
    return None if root is None else root / name.to_path()


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        OSError: If the directory cannot be created. The message names the
            directory; errno and the exception type are preserved.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise type(e)(e.errno, f"Cannot create {name} directory", str(path)) from e
    return path


def ensure_root_dirs(root: Path) -> list[Path]:
    """Create the standard directory layout under a root.

    Args:
        root: The Battalion root.

    Returns:
        Directories that did not exist before.

    Raises:
        OSError: If a directory cannot be created.
    """
    archives = root / GEN_DIRNAME / ARCHIVES_DIRNAME
    wanted = [
        (root / WORKSPACES_DIRNAME, "workspaces"),
        (root / REPOSITORIES_DIRNAME, "repositories"),
        (archives / REPOSITORIES_DIRNAME, "repository archives"),
        (archives / WORKSPACES_DIRNAME, "workspace archives"),
    ]

    created: list[Path] = []
    for path, name in wanted:
        if not path.is_dir():
            ensure_dir(path, name)
            created.append(path)
    return created
