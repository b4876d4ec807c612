"""Unit tests for the add and remove commands."""

from pathlib import Path

import pytest
from batl.cli.main import app
from batl.core.resources import Repository
from batl.models.name import ResourceName
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def in_repository(batl_root: Path, monkeypatch: pytest.MonkeyPatch) -> Repository:
    """Repository infra/tools with the cwd in a subdirectory of it."""
    repository = Repository.create(ResourceName.parse("infra/tools"))
    nested = repository.path / "src"
    nested.mkdir()
    monkeypatch.chdir(nested)
    return repository


def _dependencies() -> dict[ResourceName, str]:
    return Repository.load(ResourceName.parse("infra/tools")).config.dependencies


class TestDependencyCommands:
    """Tests for batl add and batl remove."""

    def test_add_default_constraint(self, in_repository: Repository) -> None:
        """add records the dependency as latest."""
        result = runner.invoke(app, ["add", "infra/lib"])

        assert result.exit_code == 0
        assert "Added dependency infra/lib" in result.output
        assert _dependencies() == {ResourceName.parse("infra/lib"): "latest"}

    def test_add_constraint(self, in_repository: Repository) -> None:
        """--constraint overrides the default."""
        result = runner.invoke(app, ["add", "infra/lib", "--constraint", "^1.2"])

        assert result.exit_code == 0
        assert _dependencies() == {ResourceName.parse("infra/lib"): "^1.2"}

    def test_add_invalid_name(self, in_repository: Repository) -> None:
        """Dependency names are validated."""
        result = runner.invoke(app, ["add", "lib"])

        assert result.exit_code == 1
        assert "Invalid name" in result.output

    def test_remove(self, in_repository: Repository) -> None:
        """remove drops the dependency."""
        runner.invoke(app, ["add", "infra/lib"])

        result = runner.invoke(app, ["remove", "infra/lib"])

        assert result.exit_code == 0
        assert _dependencies() == {}

    def test_remove_unknown(self, in_repository: Repository) -> None:
        """Removing an undeclared dependency fails."""
        result = runner.invoke(app, ["remove", "infra/lib"])

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_outside_resource(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a batl.toml above the working directory, add fails."""
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["add", "infra/lib"])

        assert result.exit_code == 1
