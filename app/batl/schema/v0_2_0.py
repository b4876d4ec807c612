"""batl.toml schema version 0.2.0.

The oldest supported layout. Repositories keep their identity under
``[repository]`` with an optional ``build`` command. Workspaces reuse the
``[repository]`` section for their identity and keep their link map under
``[workspace]``.

Released shapes are never edited.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from batl.models.name import ResourceName
from batl.models.types import SemVer

VERSION = "0.2.0"


class Environment0_2_0(BaseModel):
    """Environment tag accepting only version "0.2.0"."""

    model_config = ConfigDict(extra="forbid")

    version: Literal["0.2.0"] = "0.2.0"


class RepositoryGit0_2_0(BaseModel):
    """Git remote of a repository.

    Attributes:
        url: Remote URL to clone from.
        path: Subdirectory of the repository holding the clone.
    """

    model_config = ConfigDict(extra="forbid")

    url: Annotated[str, Field(description="Remote URL")]
    path: Annotated[str, Field(description="Clone subdirectory")]


class RepositorySection0_2_0(BaseModel):
    """The [repository] section of a 0.2.0 repository config."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[ResourceName, Field(description="Repository name")]
    version: Annotated[SemVer, Field(description="Repository version")]
    build: Annotated[str | None, Field(description="Build command")] = None
    git: Annotated[RepositoryGit0_2_0 | None, Field(description="Git remote")] = None


class WorkspaceSection0_2_0(BaseModel):
    """The identity section of a 0.2.0 workspace config (stored as [repository])."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[ResourceName, Field(description="Workspace name")]
    version: Annotated[SemVer, Field(description="Workspace version")]
    build: Annotated[str | None, Field(description="Build command")] = None


# Link alias -> repository name
Links0_2_0 = dict[str, ResourceName]

# Script name -> shell command
Scripts0_2_0 = dict[str, str]

# Dependency name -> version constraint
Dependencies0_2_0 = dict[ResourceName, str]


class RepositoryConfig0_2_0(BaseModel):
    """A complete 0.2.0 repository batl.toml."""

    model_config = ConfigDict(extra="forbid")

    environment: Environment0_2_0
    repository: RepositorySection0_2_0
    scripts: Scripts0_2_0 | None = None
    dependencies: Dependencies0_2_0 | None = None


class WorkspaceConfig0_2_0(BaseModel):
    """A complete 0.2.0 workspace batl.toml."""

    model_config = ConfigDict(extra="forbid")

    environment: Environment0_2_0
    repository: WorkspaceSection0_2_0
    workspace: Links0_2_0 | None = None
    scripts: Scripts0_2_0 | None = None
    dependencies: Dependencies0_2_0 | None = None
