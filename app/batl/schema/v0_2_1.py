"""batl.toml schema version 0.2.1.

Same layout as 0.2.0; only the environment tag changed.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from batl.schema.v0_2_0 import (
    Dependencies0_2_0,
    Links0_2_0,
    RepositoryConfig0_2_0,
    RepositoryGit0_2_0,
    RepositorySection0_2_0,
    Scripts0_2_0,
    WorkspaceConfig0_2_0,
    WorkspaceSection0_2_0,
)

VERSION = "0.2.1"

RepositoryGit0_2_1 = RepositoryGit0_2_0
RepositorySection0_2_1 = RepositorySection0_2_0
WorkspaceSection0_2_1 = WorkspaceSection0_2_0
Links0_2_1 = Links0_2_0
Scripts0_2_1 = Scripts0_2_0
Dependencies0_2_1 = Dependencies0_2_0


class Environment0_2_1(BaseModel):
    """Environment tag accepting only version "0.2.1"."""

    model_config = ConfigDict(extra="forbid")

    version: Literal["0.2.1"] = "0.2.1"


class RepositoryConfig0_2_1(RepositoryConfig0_2_0):
    """A complete 0.2.1 repository batl.toml."""

    environment: Environment0_2_1


class WorkspaceConfig0_2_1(WorkspaceConfig0_2_0):
    """A complete 0.2.1 workspace batl.toml."""

    environment: Environment0_2_1


def upgrade_repository(config: RepositoryConfig0_2_0) -> RepositoryConfig0_2_1:
    """Convert a 0.2.0 repository config to 0.2.1 (re-tag only)."""
    return RepositoryConfig0_2_1(
        environment=Environment0_2_1(),
        repository=config.repository,
        scripts=config.scripts,
        dependencies=config.dependencies,
    )


def upgrade_workspace(config: WorkspaceConfig0_2_0) -> WorkspaceConfig0_2_1:
    """Convert a 0.2.0 workspace config to 0.2.1 (re-tag only)."""
    return WorkspaceConfig0_2_1(
        environment=Environment0_2_1(),
        repository=config.repository,
        workspace=config.workspace,
        scripts=config.scripts,
        dependencies=config.dependencies,
    )
