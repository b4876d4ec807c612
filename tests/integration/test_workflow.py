"""Integration tests for the batl command line.

These tests drive the CLI through a full session: setting up a root,
creating resources, linking them, editing dependencies, and upgrading
configs written by older releases.
"""

import tomllib
from pathlib import Path

import pytest
from batl.cli.main import app
from batl.core import locator
from batl.core.resources import Repository, Workspace
from batl.models.name import ResourceName
from batl.models.types import ResourceKind
from typer.testing import CliRunner

runner = CliRunner()

LEGACY_REPOSITORY_TOML = """\
[environment]
version = "0.2.1"

[repository]
name = "infra/legacy"
version = "0.4.0"
build = "cargo build"

[dependencies]
"infra/tools" = "latest"
"""


def _invoke(*args: str) -> str:
    result = runner.invoke(app, list(args))
    assert result.exit_code == 0, result.output
    return result.output


class TestSession:
    """A user session from setup to upgrade."""

    def test_setup_create_link_and_depend(
        self, no_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Resources created through the CLI are wired together on disk."""
        root = no_root / "battalion"

        _invoke("setup")
        _invoke("repository", "init", "infra/tools")
        _invoke("workspace", "init", "team/app")

        workspace_dir = root / "workspaces" / "@team" / "app"
        monkeypatch.chdir(workspace_dir)
        _invoke("link", "init", "infra/tools")
        _invoke("add", "infra/tools", "-c", "^0.1")

        with open(workspace_dir / "batl.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["links"] == {"tools": "infra/tools"}
        assert data["dependencies"] == {"infra/tools": "^0.1"}
        assert (workspace_dir / "tools" / "batl.toml").is_file()

        # The linked checkout resolves to the repository, not the workspace.
        monkeypatch.chdir(workspace_dir / "tools")
        repository = Repository.locate_then_load(Path.cwd())
        assert repository is not None
        assert repository.name == ResourceName.parse("infra/tools")

        monkeypatch.chdir(workspace_dir)
        _invoke("link", "delete", "tools")
        _invoke("workspace", "delete", "team/app")
        assert (root / "repositories" / "@infra" / "tools").is_dir()

    def test_upgrade_legacy_root(self, batl_root: Path) -> None:
        """upgrade rewrites older configs so later commands see the latest shape."""
        legacy_dir = batl_root / "repositories" / "@infra" / "legacy"
        legacy_dir.mkdir(parents=True)
        (legacy_dir / "batl.toml").write_text(LEGACY_REPOSITORY_TOML)

        _invoke("upgrade")

        with open(legacy_dir / "batl.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["environment"]["version"] == "0.2.2"
        assert data["scripts"] == {"build": "cargo build"}
        assert data["dependencies"] == {"infra/tools": "latest"}

        repository = Repository.load(ResourceName.parse("infra/legacy"))
        assert str(repository.config.version) == "0.4.0"

    def test_nested_corrupt_config_falls_through(self, batl_root: Path) -> None:
        """A broken batl.toml inside a workspace does not hide the workspace."""
        workspace = Workspace.create(ResourceName.parse("team/app"))
        nested = workspace.path / "build" / "out"
        nested.mkdir(parents=True)
        (workspace.path / "build" / "batl.toml").write_text("[workspace\n")

        found = locator.locate_then_load(nested, ResourceKind.WORKSPACE)

        assert found is not None
        assert found[0] == workspace.config_path
        assert locator.locate_possible(nested) == workspace.path / "build"


class TestLoadFromInside:
    """Loading a repository from a directory inside it."""

    def test_load_from_source_dir(self, batl_root: Path) -> None:
        """The config found from infra/tools/src matches what was written."""
        created = Repository.create(ResourceName.parse("infra/tools"))
        source = created.path / "src"
        source.mkdir()

        config = locator.load(source, ResourceKind.REPOSITORY)
        repository = Repository.locate_then_load(source)

        assert config is not None
        assert config.name == ResourceName.parse("infra/tools")
        assert str(config.version) == "0.1.0"
        assert config.scripts == {"build": 'echo "No build targets" && exit 1'}
        assert config.git is None
        assert repository is not None
        assert repository.config == config
