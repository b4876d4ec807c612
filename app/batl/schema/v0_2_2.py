"""batl.toml schema version 0.2.2 (latest).

Workspaces get their own ``[workspace]`` identity section and a top-level
``[links]`` map. Repositories drop ``build`` in favour of ``[scripts]`` and
gain ``[restrict]`` platform conditions.

Map fields default to empty here; the config store omits empty maps when
writing, so an absent table and an empty table read the same.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Annotated, ClassVar, Literal

import semver
from pydantic import BaseModel, ConfigDict, Field

from batl.models.name import ResourceName
from batl.models.types import ResourceKind, SemVer
from batl.schema.v0_2_1 import (
    Dependencies0_2_1,
    Links0_2_1,
    RepositoryConfig0_2_1,
    RepositoryGit0_2_1,
    Scripts0_2_1,
    WorkspaceConfig0_2_1,
)

VERSION = "0.2.2"

RepositoryGit0_2_2 = RepositoryGit0_2_1
Links0_2_2 = Links0_2_1
Scripts0_2_2 = Scripts0_2_1
Dependencies0_2_2 = Dependencies0_2_1

# Script name that replaces the pre-0.2.2 ``build`` field
BUILD_SCRIPT = "build"


class Environment0_2_2(BaseModel):
    """Environment tag accepting only version "0.2.2"."""

    model_config = ConfigDict(extra="forbid")

    version: Literal["0.2.2"] = "0.2.2"


class Restrictor0_2_2(Enum):
    """Platform condition a repository can be restricted on."""

    WINDOWS = "Windows"
    LINUX = "Linux"
    UNIX = "Unix"
    MACOS = "MacOs"

    @classmethod
    def current(cls) -> Restrictor0_2_2:
        """Condition describing the running platform family."""
        if sys.platform == "win32":
            return cls.WINDOWS
        return cls.UNIX


class RestrictRequirement0_2_2(Enum):
    """How strictly a repository depends on a platform condition."""

    DENY = "deny"
    ALLOW = "allow"
    REQUIRE = "require"


class RestrictorSettings0_2_2(BaseModel):
    """Settings for a single restriction condition.

    Attributes:
        include: Inclusion requirement; an absent value means "allow".
        dependencies: Dependency overrides applied under this condition.
    """

    model_config = ConfigDict(extra="forbid")

    include: Annotated[
        RestrictRequirement0_2_2,
        Field(description="Inclusion requirement"),
    ] = RestrictRequirement0_2_2.ALLOW
    dependencies: Annotated[
        Dependencies0_2_2,
        Field(default_factory=dict, description="Dependency overrides"),
    ]


Restrict0_2_2 = dict[Restrictor0_2_2, RestrictorSettings0_2_2]


class RepositorySection0_2_2(BaseModel):
    """The [repository] section of a 0.2.2 repository config."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[ResourceName, Field(description="Repository name")]
    version: Annotated[SemVer, Field(description="Repository version")]
    git: Annotated[RepositoryGit0_2_2 | None, Field(description="Git remote")] = None


class WorkspaceSection0_2_2(BaseModel):
    """The [workspace] section of a 0.2.2 workspace config."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[ResourceName, Field(description="Workspace name")]
    version: Annotated[SemVer, Field(description="Workspace version")]


class RepositoryConfig0_2_2(BaseModel):
    """A complete 0.2.2 repository batl.toml.

    Attributes:
        environment: Schema version tag.
        repository: Name, version, and optional git remote.
        scripts: Script name to shell command.
        dependencies: Dependency name to version constraint.
        restrict: Platform condition to restriction settings.
    """

    model_config = ConfigDict(extra="forbid")

    kind: ClassVar[ResourceKind] = ResourceKind.REPOSITORY

    environment: Annotated[Environment0_2_2, Field(description="Schema version tag")]
    repository: Annotated[RepositorySection0_2_2, Field(description="Repository identity")]
    scripts: Annotated[Scripts0_2_2, Field(default_factory=dict, description="Scripts")]
    dependencies: Annotated[
        Dependencies0_2_2,
        Field(default_factory=dict, description="Dependencies"),
    ]
    restrict: Annotated[Restrict0_2_2, Field(default_factory=dict, description="Restrictions")]

    @classmethod
    def new(
        cls,
        name: ResourceName,
        version: semver.Version | str = "0.1.0",
        git: RepositoryGit0_2_2 | None = None,
        **fields: object,
    ) -> RepositoryConfig0_2_2:
        """Build a latest-shape repository config tagged with the current version."""
        return cls.model_validate(
            {
                "environment": Environment0_2_2(),
                "repository": RepositorySection0_2_2(name=name, version=version, git=git),
                **fields,
            }
        )

    @property
    def name(self) -> ResourceName:
        """Repository name."""
        return self.repository.name

    @property
    def version(self) -> semver.Version:
        """Repository version."""
        return self.repository.version

    @property
    def git(self) -> RepositoryGit0_2_2 | None:
        """Git remote, if the repository is a clone."""
        return self.repository.git


class WorkspaceConfig0_2_2(BaseModel):
    """A complete 0.2.2 workspace batl.toml.

    Attributes:
        environment: Schema version tag.
        workspace: Name and version.
        links: Link alias to repository name.
        scripts: Script name to shell command.
        dependencies: Dependency name to version constraint.
    """

    model_config = ConfigDict(extra="forbid")

    kind: ClassVar[ResourceKind] = ResourceKind.WORKSPACE

    environment: Annotated[Environment0_2_2, Field(description="Schema version tag")]
    workspace: Annotated[WorkspaceSection0_2_2, Field(description="Workspace identity")]
    links: Annotated[Links0_2_2, Field(default_factory=dict, description="Links")]
    scripts: Annotated[Scripts0_2_2, Field(default_factory=dict, description="Scripts")]
    dependencies: Annotated[
        Dependencies0_2_2,
        Field(default_factory=dict, description="Dependencies"),
    ]

    @classmethod
    def new(
        cls,
        name: ResourceName,
        version: semver.Version | str = "0.1.0",
        **fields: object,
    ) -> WorkspaceConfig0_2_2:
        """Build a latest-shape workspace config tagged with the current version."""
        return cls.model_validate(
            {
                "environment": Environment0_2_2(),
                "workspace": WorkspaceSection0_2_2(name=name, version=version),
                **fields,
            }
        )

    @property
    def name(self) -> ResourceName:
        """Workspace name."""
        return self.workspace.name

    @property
    def version(self) -> semver.Version:
        """Workspace version."""
        return self.workspace.version


def _fold_build(build: str | None, scripts: Scripts0_2_1 | None) -> Scripts0_2_2:
    """Carry a legacy build command into the scripts map.

    An existing "build" script wins over the legacy field.
    """
    result = dict(scripts or {})
    if build is not None:
        result.setdefault(BUILD_SCRIPT, build)
    return result


def upgrade_repository(config: RepositoryConfig0_2_1) -> RepositoryConfig0_2_2:
    """Convert a 0.2.1 repository config to 0.2.2."""
    section = config.repository
    git = None
    if section.git is not None:
        git = RepositoryGit0_2_2(url=section.git.url, path=section.git.path)

    return RepositoryConfig0_2_2(
        environment=Environment0_2_2(),
        repository=RepositorySection0_2_2(name=section.name, version=section.version, git=git),
        scripts=_fold_build(section.build, config.scripts),
        dependencies=dict(config.dependencies or {}),
        restrict={},
    )


def upgrade_workspace(config: WorkspaceConfig0_2_1) -> WorkspaceConfig0_2_2:
    """Convert a 0.2.1 workspace config to 0.2.2.

    The identity moves from [repository] to [workspace], and the link map
    moves from [workspace] to [links].
    """
    section = config.repository

    return WorkspaceConfig0_2_2(
        environment=Environment0_2_2(),
        workspace=WorkspaceSection0_2_2(name=section.name, version=section.version),
        links=dict(config.workspace or {}),
        scripts=_fold_build(section.build, config.scripts),
        dependencies=dict(config.dependencies or {}),
    )
