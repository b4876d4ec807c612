"""Repository and workspace resources.

A resource is a directory under the repository or workspace root whose
relative path encodes its ResourceName and which holds a batl.toml. This
module ties the name encoding, root resolution, and config store together
into the resource lifecycle (create, load, save, destroy) and implements
workspace links, listing, and dependency edits.
"""

import logging
import shutil
from pathlib import Path
from typing import ClassVar, Self

from batl.core import locator
from batl.core.config import CONFIG_FILENAME, read_config, write_config
from batl.core.errors import (
    ConfigError,
    NotSetupError,
    ResourceError,
    ResourceExistsError,
    ResourceIOError,
    ResourceNotFoundError,
    resource_error_from_config,
)
from batl.core.paths import RootSearch, get_root_for, resource_path
from batl.models.name import ResourceName
from batl.models.types import ResourceKind
from batl.schema import (
    BUILD_SCRIPT,
    GitConfig,
    LatestConfig,
    RepositoryConfig,
    Restrictor,
    RestrictRequirement,
    RestrictSettings,
    WorkspaceConfig,
)

logger = logging.getLogger(__name__)

# Version given to newly created resources
INITIAL_VERSION = "0.1.0"

# Build script given to newly created repositories
DEFAULT_BUILD_COMMAND = 'echo "No build targets" && exit 1'

# Directory (inside the repository) a clone checks out into
GIT_CHECKOUT_DIRNAME = "git"

# Constraint recorded when a dependency is added without one
DEFAULT_CONSTRAINT = "latest"


class Resource:
    """Base class for a resource loaded from disk.

    Attributes:
        path: Resource directory.
        name: Resource name decoded from (or encoded into) the path.
        config: Latest-shape config read from batl.toml.
    """

    kind: ClassVar[ResourceKind]

    def __init__(self, path: Path, name: ResourceName, config: LatestConfig) -> None:
        self.path = path
        self.name = name
        self.config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={str(self.name)!r}, path={str(self.path)!r})"

    @property
    def config_path(self) -> Path:
        """Path of the resource's batl.toml."""
        return self.path / CONFIG_FILENAME

    @classmethod
    def _read(cls, path: Path) -> LatestConfig:
        try:
            return read_config(path / CONFIG_FILENAME, cls.kind)
        except ConfigError as e:
            raise resource_error_from_config(e) from e

    @classmethod
    def _target(cls, name: ResourceName, search: RootSearch | None) -> Path:
        path = resource_path(cls.kind, name, search)
        if path is None:
            raise NotSetupError()
        return path

    @classmethod
    def load(cls, name: ResourceName, search: RootSearch | None = None) -> Self:
        """Load a resource by name from its kind root.

        Args:
            name: Resource name.
            search: Root resolution inputs. If None, uses the live process state.

        Returns:
            The loaded resource.

        Raises:
            NotSetupError: If no root can be resolved.
            ResourceNotFoundError: If the resource has no batl.toml.
            ResourceInvalidError: If batl.toml exists but cannot be parsed.
            ResourceIOError: If batl.toml cannot be read.
        """
        path = cls._target(name, search)
        return cls(path, name, cls._read(path))

    @classmethod
    def _name_at(cls, directory: Path, search: RootSearch | None = None) -> ResourceName:
        """Decode a resource name from its directory.

        Under the kind root only the path below the root is decoded, so
        '@' directories above the root never become segments.
        """
        root = get_root_for(cls.kind, search)
        if root is not None:
            resolved = directory.resolve()
            root = root.resolve()
            if resolved != root and resolved.is_relative_to(root):
                return ResourceName.from_path(resolved.relative_to(root))
        return ResourceName.from_path(directory)

    @classmethod
    def from_path(cls, path: Path) -> Self:
        """Load a resource from its directory, decoding the name from the path.

        Prefer load() or locate_then_load(); this exists for callers that
        already hold a resource directory.

        Raises:
            ResourceNotFoundError: If the directory has no batl.toml.
            ResourceInvalidError: If batl.toml cannot be parsed.
            ResourceIOError: If batl.toml cannot be read.
        """
        return cls(path, cls._name_at(path), cls._read(path))

    @classmethod
    def locate_then_load(cls, start: Path) -> Self | None:
        """Find the nearest resource of this kind at or above start.

        Corrupt configs on the way up are skipped.

        Returns:
            The loaded resource, or None if there is none.
        """
        found = locator.locate_then_load(start, cls.kind)
        if found is None:
            return None
        config_path, config = found
        directory = config_path.parent
        return cls(directory, cls._name_at(directory), config)

    def save(self) -> Path:
        """Write the config back to batl.toml.

        Raises:
            ResourceIOError: If the file cannot be written.
        """
        try:
            return write_config(self.config_path, self.config)
        except ConfigError as e:
            raise resource_error_from_config(e) from e

    def destroy(self) -> None:
        """Delete the resource directory and everything in it.

        Symlinks inside the directory are removed, never followed.

        Raises:
            ResourceIOError: If the directory cannot be removed.
        """
        try:
            shutil.rmtree(self.path)
        except OSError as e:
            raise ResourceIOError(f"Cannot delete {self.path}: {e}") from e
        logger.info("Deleted %s %s", self.kind.value, self.name)

    @property
    def scripts(self) -> dict[str, str]:
        """Script name to shell command."""
        return dict(self.config.scripts)

    def script(self, name: str) -> str | None:
        """Get a script's command, or None if it is not defined."""
        return self.config.scripts.get(name)

    @classmethod
    def _create_dir(cls, name: ResourceName, search: RootSearch | None) -> Path:
        path = cls._target(name, search)
        if path.exists():
            raise ResourceExistsError(f"{cls.kind.value.capitalize()} {name} already exists")
        try:
            path.mkdir(parents=True)
        except OSError as e:
            raise ResourceIOError(f"Cannot create {path}: {e}") from e
        logger.info("Created %s directory %s", cls.kind.value, path)
        return path


class Repository(Resource):
    """A repository resource."""

    kind = ResourceKind.REPOSITORY
    config: RepositoryConfig

    @classmethod
    def create(
        cls,
        name: ResourceName,
        git_url: str | None = None,
        search: RootSearch | None = None,
    ) -> Self:
        """Create a repository with a fresh config.

        New repositories get version 0.1.0, a placeholder build script, and
        a requirement on the current platform family.

        Args:
            name: Repository name.
            git_url: Remote URL when the repository is a clone.
            search: Root resolution inputs. If None, uses the live process state.

        Returns:
            The created repository.

        Raises:
            NotSetupError: If no root can be resolved.
            ResourceExistsError: If the target directory already exists.
            ResourceIOError: If the directory or config cannot be written.
        """
        path = cls._create_dir(name, search)
        git = None
        if git_url is not None:
            git = GitConfig(url=git_url, path=GIT_CHECKOUT_DIRNAME)

        config = RepositoryConfig.new(
            name,
            INITIAL_VERSION,
            git=git,
            scripts={BUILD_SCRIPT: DEFAULT_BUILD_COMMAND},
            restrict={Restrictor.current(): RestrictSettings(include=RestrictRequirement.REQUIRE)},
        )
        repository = cls(path, name, config)
        repository.save()
        return repository

    @property
    def git(self) -> GitConfig | None:
        """Git remote, if the repository is a clone."""
        return self.config.git


class Workspace(Resource):
    """A workspace resource, linking repositories under local aliases."""

    kind = ResourceKind.WORKSPACE
    config: WorkspaceConfig

    @classmethod
    def create(cls, name: ResourceName, search: RootSearch | None = None) -> Self:
        """Create a workspace with a fresh config.

        Raises:
            NotSetupError: If no root can be resolved.
            ResourceExistsError: If the target directory already exists.
            ResourceIOError: If the directory or config cannot be written.
        """
        path = cls._create_dir(name, search)
        workspace = cls(path, name, WorkspaceConfig.new(name, INITIAL_VERSION))
        workspace.save()
        return workspace

    @property
    def links(self) -> dict[str, ResourceName]:
        """Link alias to repository name."""
        return dict(self.config.links)

    def link(self, alias: str, search: RootSearch | None = None) -> Repository | None:
        """Resolve a link to its repository.

        Returns:
            The linked repository, or None if the alias is unknown or the
            repository cannot be loaded.
        """
        name = self.config.links.get(alias)
        if name is None:
            return None
        try:
            return Repository.load(name, search)
        except ResourceError as e:
            logger.debug("Link %s does not resolve: %s", alias, e)
            return None

    def create_link(self, alias: str, repository: Repository) -> Path:
        """Link a repository into the workspace.

        Records the alias in the config and creates a directory symlink
        named after the alias pointing at the repository.

        Returns:
            Path of the created symlink.

        Raises:
            ResourceExistsError: If the alias is already in use.
            ResourceIOError: If the symlink or config cannot be written.
        """
        if alias in self.config.links:
            raise ResourceExistsError(f"Link {alias} already exists")

        link_path = self.path / alias
        try:
            link_path.symlink_to(repository.path, target_is_directory=True)
        except OSError as e:
            raise ResourceIOError(f"Cannot create link {link_path}: {e}") from e

        self.config.links[alias] = repository.name
        self.save()
        logger.info("Linked %s -> %s in %s", alias, repository.name, self.name)
        return link_path

    def unlink(self, alias: str) -> None:
        """Remove a link's entry and its symlink.

        Raises:
            ResourceNotFoundError: If the alias is not linked.
            ResourceIOError: If the symlink or config cannot be written.
        """
        if alias not in self.config.links:
            raise ResourceNotFoundError(f"Link {alias} does not exist")

        link_path = self.path / alias
        try:
            link_path.unlink(missing_ok=True)
        except OSError as e:
            raise ResourceIOError(f"Cannot remove link {link_path}: {e}") from e

        del self.config.links[alias]
        self.save()
        logger.info("Removed link %s from %s", alias, self.name)


_RESOURCE_CLASSES: dict[ResourceKind, type[Resource]] = {
    ResourceKind.REPOSITORY: Repository,
    ResourceKind.WORKSPACE: Workspace,
}


def resource_class(kind: ResourceKind) -> type[Resource]:
    """Get the resource class for a kind."""
    return _RESOURCE_CLASSES[kind]


# =============================================================================
# Listing
# =============================================================================


def _walk_names(directory: Path, namespaces: tuple[str, ...]) -> list[ResourceName]:
    names: list[ResourceName] = []
    for entry in sorted(directory.iterdir()):
        if not entry.is_dir():
            continue
        if entry.name.startswith("@"):
            names.extend(_walk_names(entry, (*namespaces, entry.name[1:])))
        elif (entry / CONFIG_FILENAME).is_file():
            names.append(ResourceName((*namespaces, entry.name)))
        else:
            logger.debug("Skipping %s: no %s", entry, CONFIG_FILENAME)
    return names


def list_resources(
    kind: ResourceKind,
    prefix: str | None = None,
    search: RootSearch | None = None,
) -> list[ResourceName]:
    """List resource names under a kind root.

    Directories starting with '@' are namespaces and are searched
    recursively. Any other directory is listed if it holds a batl.toml.

    Args:
        kind: Resource kind to list.
        prefix: Only include names whose display form starts with this.
        search: Root resolution inputs. If None, uses the live process state.

    Returns:
        Matching names, sorted by display form.

    Raises:
        NotSetupError: If no root can be resolved.
        ResourceIOError: If a directory cannot be read.
    """
    root = get_root_for(kind, search)
    if root is None:
        raise NotSetupError()
    if not root.is_dir():
        logger.debug("%s root %s does not exist", kind.value, root)
        return []

    try:
        names = _walk_names(root, ())
    except OSError as e:
        raise ResourceIOError(f"Cannot list {root}: {e}") from e

    if prefix:
        names = [name for name in names if name.startswith(prefix)]
    return sorted(names, key=str)


# =============================================================================
# Dependencies
# =============================================================================


def _locate_for_edit(start: Path) -> tuple[Path, LatestConfig]:
    found = locator.locate_then_load(start)
    if found is None:
        raise ResourceNotFoundError(f"No valid {CONFIG_FILENAME} found at or above {start}")
    return found


def _write(path: Path, config: LatestConfig) -> Path:
    try:
        return write_config(path, config)
    except ConfigError as e:
        raise resource_error_from_config(e) from e


def add_dependency(
    start: Path, name: ResourceName, constraint: str = DEFAULT_CONSTRAINT
) -> Path:
    """Add (or replace) a dependency in the nearest resource config.

    Args:
        start: Directory to search upward from.
        name: Dependency name.
        constraint: Version constraint to record.

    Returns:
        Path of the edited batl.toml.

    Raises:
        ResourceNotFoundError: If no valid config is found.
        ResourceIOError: If the config cannot be written.
    """
    path, config = _locate_for_edit(start)
    config.dependencies[name] = constraint
    logger.info("Adding dependency %s (%s) to %s", name, constraint, path)
    return _write(path, config)


def remove_dependency(start: Path, name: ResourceName) -> Path:
    """Remove a dependency from the nearest resource config.

    Returns:
        Path of the edited batl.toml.

    Raises:
        ResourceNotFoundError: If no valid config is found or the
            dependency is not declared.
        ResourceIOError: If the config cannot be written.
    """
    path, config = _locate_for_edit(start)
    if name not in config.dependencies:
        raise ResourceNotFoundError(f"Dependency {name} does not exist")
    del config.dependencies[name]
    logger.info("Removing dependency %s from %s", name, path)
    return _write(path, config)
