"""batl.toml file I/O operations.

This module reads config files through the schema registry (so any known
schema version is accepted and upgraded) and writes them back in the
latest shape. Empty maps are never written: an absent table and an empty
table mean the same thing.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from batl.core.errors import ConfigFormatError, ConfigIOError
from batl.core.paths import RootSearch, get_root_for
from batl.models.batlrc import BatlRc
from batl.models.name import ResourceName
from batl.models.types import ResourceKind
from batl.schema import (
    LatestConfig,
    ParsedConfig,
    RepositoryConfig,
    RestrictRequirement,
    RestrictSettings,
    WorkspaceConfig,
    get_registry,
)

logger = logging.getLogger(__name__)

# Name of the per-resource config file
CONFIG_FILENAME = "batl.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    """Read and decode a TOML file.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigFormatError: If the content is not valid UTF-8 TOML.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigFormatError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigIOError(path, e) from e


def _write_toml(path: Path, data: dict[str, Any]) -> Path:
    """Create or truncate a file and write a TOML document to it.

    Raises:
        ConfigIOError: If the file cannot be written.
    """
    try:
        with open(path, "wb") as f:
            tomli_w.dump(data, f)
    except OSError as e:
        raise ConfigIOError(path, e) from e
    return path


def parse_config(path: Path, kind: ResourceKind) -> ParsedConfig:
    """Read a config file and parse it under the newest matching schema version.

    Args:
        path: Path to a batl.toml file.
        kind: Resource kind the file must describe.

    Returns:
        The matched schema version and the record in that version's shape.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigFormatError: If no known schema version parses the file.
    """
    data = _read_toml(path)
    try:
        return get_registry(kind).parse(data)
    except ConfigFormatError as e:
        raise ConfigFormatError(f"{path}: {e}") from e


def read_config(path: Path, kind: ResourceKind) -> LatestConfig:
    """Read a config file and upgrade it to the latest shape.

    Args:
        path: Path to a batl.toml file.
        kind: Resource kind the file must describe.

    Returns:
        RepositoryConfig or WorkspaceConfig, matching kind.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigFormatError: If no known schema version parses the file.
    """
    parsed = parse_config(path, kind)
    if parsed.version != get_registry(kind).latest.version:
        logger.debug("Upgrading %s from schema %s", path, parsed.version)
    return get_registry(kind).upgrade(parsed)  # type: ignore[return-value]


def infer_kind(path: Path, search: RootSearch | None = None) -> ResourceKind | None:
    """Work out a config's kind from the resource root it sits under.

    Args:
        path: Path to a batl.toml file.
        search: Root resolution inputs. If None, uses the live process state.

    Returns:
        REPOSITORY or WORKSPACE when the file is under that kind's root,
        None when it is outside both or no root resolves.
    """
    directory = path.parent.resolve()
    for kind in ResourceKind:
        root = get_root_for(kind, search)
        if root is not None and directory.is_relative_to(root.resolve()):
            return kind
    return None


def read_any_config(path: Path, search: RootSearch | None = None) -> LatestConfig:
    """Read a config file of either kind and upgrade it to the latest shape.

    Under a resource root only that root's kind is accepted. Elsewhere
    workspace shapes are tried first: a 0.2.0 or 0.2.1 workspace without
    links is also a valid repository of that version.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigFormatError: If the file is neither a repository nor a workspace config.
    """
    kind = infer_kind(path, search)
    if kind is not None:
        return read_config(path, kind)

    data = _read_toml(path)
    for candidate in (ResourceKind.WORKSPACE, ResourceKind.REPOSITORY):
        try:
            return get_registry(candidate).load(data)  # type: ignore[return-value]
        except ConfigFormatError:
            logger.debug("%s is not a %s config", path, candidate.value)
    raise ConfigFormatError(f"{path}: not a valid repository or workspace config")


def write_config(path: Path, config: LatestConfig) -> Path:
    """Write a latest-shape config to a file.

    The file is created or truncated and then written; no other path is
    touched.

    Args:
        path: Destination batl.toml path.
        config: RepositoryConfig or WorkspaceConfig to save.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigIOError: If the file cannot be written.
    """
    _write_toml(path, config_to_dict(config))
    logger.debug("Wrote %s config %s", config.kind.value, path)
    return path


def config_to_dict(config: LatestConfig) -> dict[str, Any]:
    """Convert a config to a dictionary suitable for TOML serialization.

    Args:
        config: The RepositoryConfig or WorkspaceConfig to convert.

    Returns:
        Dictionary ready for TOML serialization, without empty maps.
    """
    if isinstance(config, RepositoryConfig):
        return _repository_to_dict(config)
    return _workspace_to_dict(config)


def _repository_to_dict(config: RepositoryConfig) -> dict[str, Any]:
    section: dict[str, Any] = {
        "name": str(config.name),
        "version": str(config.version),
    }
    if config.git is not None:
        section["git"] = {"url": config.git.url, "path": config.git.path}

    result: dict[str, Any] = {
        "environment": {"version": config.environment.version},
        "repository": section,
    }
    if config.scripts:
        result["scripts"] = dict(config.scripts)
    if config.dependencies:
        result["dependencies"] = _dependencies_to_dict(config.dependencies)
    if config.restrict:
        result["restrict"] = {
            condition.value: _restrict_settings_to_dict(settings)
            for condition, settings in config.restrict.items()
        }
    return result


def _workspace_to_dict(config: WorkspaceConfig) -> dict[str, Any]:
    result: dict[str, Any] = {
        "environment": {"version": config.environment.version},
        "workspace": {
            "name": str(config.name),
            "version": str(config.version),
        },
    }
    if config.links:
        result["links"] = {alias: str(name) for alias, name in config.links.items()}
    if config.scripts:
        result["scripts"] = dict(config.scripts)
    if config.dependencies:
        result["dependencies"] = _dependencies_to_dict(config.dependencies)
    return result


def _dependencies_to_dict(dependencies: dict[ResourceName, str]) -> dict[str, str]:
    return {str(name): constraint for name, constraint in dependencies.items()}


def _restrict_settings_to_dict(settings: RestrictSettings) -> dict[str, Any]:
    """Convert restriction settings, dropping the default "allow" and empty overrides."""
    result: dict[str, Any] = {}
    if settings.include is not RestrictRequirement.ALLOW:
        result["include"] = settings.include.value
    if settings.dependencies:
        result["dependencies"] = _dependencies_to_dict(settings.dependencies)
    return result


# =============================================================================
# Root settings file
# =============================================================================


def read_batlrc(path: Path) -> BatlRc:
    """Read the root settings file.

    Raises:
        ConfigIOError: If the file cannot be read.
        ConfigFormatError: If the content is invalid.
    """
    data = _read_toml(path)
    try:
        return BatlRc.model_validate(data)
    except ValueError as e:
        raise ConfigFormatError(f"Invalid root settings in {path}: {e}") from e


def write_batlrc(path: Path, batlrc: BatlRc) -> Path:
    """Write the root settings file.

    Raises:
        ConfigIOError: If the file cannot be written.
    """
    return _write_toml(path, {"api": {"credentials": batlrc.api.credentials}})
