"""batl.toml schema versions and the registry that resolves them.

The names exported here always refer to the latest shape; callers never
need to know which version a file on disk was written with.
"""

from batl.schema.registry import (
    REPOSITORY_REGISTRY,
    WORKSPACE_REGISTRY,
    ParsedConfig,
    SchemaRegistry,
    SchemaVersion,
    get_registry,
)
from batl.schema.v0_2_2 import (
    BUILD_SCRIPT,
    VERSION,
    Environment0_2_2,
    RepositoryConfig0_2_2,
    RepositoryGit0_2_2,
    Restrictor0_2_2,
    RestrictorSettings0_2_2,
    RestrictRequirement0_2_2,
    WorkspaceConfig0_2_2,
)

LATEST_VERSION = VERSION

EnvironmentLatest = Environment0_2_2
RepositoryConfig = RepositoryConfig0_2_2
WorkspaceConfig = WorkspaceConfig0_2_2
GitConfig = RepositoryGit0_2_2
Restrictor = Restrictor0_2_2
RestrictRequirement = RestrictRequirement0_2_2
RestrictSettings = RestrictorSettings0_2_2

# Any latest-shape config record
LatestConfig = RepositoryConfig | WorkspaceConfig

__all__ = [
    "BUILD_SCRIPT",
    "LATEST_VERSION",
    "REPOSITORY_REGISTRY",
    "WORKSPACE_REGISTRY",
    "EnvironmentLatest",
    "GitConfig",
    "LatestConfig",
    "ParsedConfig",
    "RepositoryConfig",
    "RestrictRequirement",
    "RestrictSettings",
    "Restrictor",
    "SchemaRegistry",
    "SchemaVersion",
    "WorkspaceConfig",
    "get_registry",
]
