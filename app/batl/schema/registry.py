"""Versioned schema registry for batl.toml.

Each resource kind has an ordered list of known schema versions, newest
first. Parsing tries every version strictly in that order and commits to
the first shape that validates, so a file matching several shapes always
resolves to the newest one. Upgrading applies each version's step
conversion until the latest shape is reached.

Adding a schema version means adding one module with its shapes and step
conversion, and prepending one SchemaVersion entry below. Existing entries
are never edited.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from batl.core.errors import ConfigFormatError
from batl.models.types import ResourceKind
from batl.schema import v0_2_0, v0_2_1, v0_2_2

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SchemaVersion:
    """One historical config shape.

    Attributes:
        version: Schema version string (e.g. "0.2.1").
        model: Pydantic model describing the on-disk shape.
        upgrade: Conversion to the next newer shape; None for the latest.
    """

    version: str
    model: type[BaseModel]
    upgrade: Callable[[Any], BaseModel] | None = None


@dataclass(frozen=True, slots=True)
class ParsedConfig:
    """A config parsed under a specific schema version.

    Attributes:
        version: Schema version the data matched.
        record: The parsed model in that version's shape.
    """

    version: str
    record: BaseModel


class SchemaRegistry:
    """Ordered set of schema versions for one resource kind.

    Attributes:
        kind: Resource kind this registry parses.
    """

    def __init__(self, kind: ResourceKind, versions: Sequence[SchemaVersion]) -> None:
        """Initialize the registry.

        Args:
            kind: Resource kind this registry parses.
            versions: Known versions, newest first.

        Raises:
            ValueError: If the chain is empty or an older version lacks an upgrade step.
        """
        if not versions:
            msg = "Schema registry requires at least one version"
            raise ValueError(msg)
        for older in versions[1:]:
            if older.upgrade is None:
                msg = f"Schema version {older.version} has no upgrade step"
                raise ValueError(msg)

        self.kind = kind
        self._versions = tuple(versions)

    @property
    def versions(self) -> tuple[str, ...]:
        """Known version strings, newest first."""
        return tuple(entry.version for entry in self._versions)

    @property
    def latest(self) -> SchemaVersion:
        """The latest schema version."""
        return self._versions[0]

    def _entry(self, version: str) -> tuple[int, SchemaVersion]:
        for index, entry in enumerate(self._versions):
            if entry.version == version:
                return index, entry
        msg = f"Unknown {self.kind.value} schema version: {version}"
        raise KeyError(msg)

    def try_parse_as(self, version: str, data: Mapping[str, Any]) -> BaseModel | None:
        """Parse data under one specific version.

        Args:
            version: Schema version to try.
            data: Decoded TOML document.

        Returns:
            The parsed model, or None if the data does not fit that shape.

        Raises:
            KeyError: If the version is not part of this registry.
        """
        _, entry = self._entry(version)
        try:
            return entry.model.model_validate(data)
        except ValidationError as e:
            logger.debug(
                "%s config does not match schema %s (%d errors)",
                self.kind.value,
                version,
                e.error_count(),
            )
            return None

    def parse(self, data: Mapping[str, Any]) -> ParsedConfig:
        """Parse data under the newest version whose shape fits.

        Args:
            data: Decoded TOML document.

        Returns:
            The matched version and the parsed model.

        Raises:
            ConfigFormatError: If no known version parses the data.
        """
        for entry in self._versions:
            record = self.try_parse_as(entry.version, data)
            if record is not None:
                return ParsedConfig(version=entry.version, record=record)

        tried = ", ".join(self.versions)
        msg = f"Not a valid {self.kind.value} config under any known schema version ({tried})"
        raise ConfigFormatError(msg)

    def upgrade(self, parsed: ParsedConfig) -> BaseModel:
        """Convert a parsed config to the latest shape.

        Never fails for a record produced by parse(); the latest version
        is returned unchanged.

        Args:
            parsed: Result of parse().

        Returns:
            The record in the latest shape.
        """
        index, _ = self._entry(parsed.version)
        record = parsed.record
        for entry in self._versions[index:0:-1]:
            assert entry.upgrade is not None  # checked in __init__
            record = entry.upgrade(record)
        return record

    def load(self, data: Mapping[str, Any]) -> BaseModel:
        """Parse data and upgrade it to the latest shape.

        Raises:
            ConfigFormatError: If no known version parses the data.
        """
        return self.upgrade(self.parse(data))


REPOSITORY_REGISTRY = SchemaRegistry(
    ResourceKind.REPOSITORY,
    [
        SchemaVersion(v0_2_2.VERSION, v0_2_2.RepositoryConfig0_2_2),
        SchemaVersion(v0_2_1.VERSION, v0_2_1.RepositoryConfig0_2_1, v0_2_2.upgrade_repository),
        SchemaVersion(v0_2_0.VERSION, v0_2_0.RepositoryConfig0_2_0, v0_2_1.upgrade_repository),
    ],
)

WORKSPACE_REGISTRY = SchemaRegistry(
    ResourceKind.WORKSPACE,
    [
        SchemaVersion(v0_2_2.VERSION, v0_2_2.WorkspaceConfig0_2_2),
        SchemaVersion(v0_2_1.VERSION, v0_2_1.WorkspaceConfig0_2_1, v0_2_2.upgrade_workspace),
        SchemaVersion(v0_2_0.VERSION, v0_2_0.WorkspaceConfig0_2_0, v0_2_1.upgrade_workspace),
    ],
)

_REGISTRIES: dict[ResourceKind, SchemaRegistry] = {
    ResourceKind.REPOSITORY: REPOSITORY_REGISTRY,
    ResourceKind.WORKSPACE: WORKSPACE_REGISTRY,
}


def get_registry(kind: ResourceKind) -> SchemaRegistry:
    """Get the schema registry for a resource kind."""
    return _REGISTRIES[kind]
