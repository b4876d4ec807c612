"""Unit tests for the repository commands."""

from pathlib import Path
from unittest.mock import patch

import pytest
from batl.cli.main import app
from batl.core.resources import Repository
from batl.models.name import ResourceName
from typer.testing import CliRunner

runner = CliRunner()


class TestRepositoryInit:
    """Tests for batl repository init."""

    def test_init(self, batl_root: Path) -> None:
        """init creates the repository directory and config."""
        result = runner.invoke(app, ["repository", "init", "infra/tools"])

        assert result.exit_code == 0
        assert "Initialized repository infra/tools" in result.output
        assert (batl_root / "repositories" / "@infra" / "tools" / "batl.toml").is_file()

    def test_init_with_git(self, batl_root: Path) -> None:
        """--git records the remote."""
        result = runner.invoke(
            app, ["repository", "init", "infra/tools", "--git", "https://example.com/t.git"]
        )

        assert result.exit_code == 0
        repository = Repository.load(ResourceName.parse("infra/tools"))
        assert repository.git is not None
        assert repository.git.url == "https://example.com/t.git"

    def test_invalid_names(self, batl_root: Path) -> None:
        """Names must have two or more lowercase segments."""
        for bad in ["tools", "Infra/tools", "infra/", "infra//tools", "1nfra/tools"]:
            result = runner.invoke(app, ["repository", "init", bad])

            assert result.exit_code == 1, bad
            assert "Invalid name" in result.output

    def test_init_existing(self, batl_root: Path) -> None:
        """init refuses an existing repository."""
        runner.invoke(app, ["repository", "init", "infra/tools"])

        result = runner.invoke(app, ["repository", "init", "infra/tools"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_not_set_up(self, no_root: Path) -> None:
        """Without a root, init fails with a hint."""
        result = runner.invoke(app, ["repository", "init", "infra/tools"])

        assert result.exit_code == 1
        assert "batl setup" in result.output


class TestRepositoryQueries:
    """Tests for ls, which, and delete."""

    def test_ls(self, batl_root: Path) -> None:
        """ls prints one name per line, sorted, filtered by prefix."""
        for raw in ["team/lib", "infra/tools", "infra/lib"]:
            Repository.create(ResourceName.parse(raw))

        result = runner.invoke(app, ["repository", "ls"])
        filtered = runner.invoke(app, ["repository", "ls", "infra"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["infra/lib", "infra/tools", "team/lib"]
        assert filtered.stdout.splitlines() == ["infra/lib", "infra/tools"]

    def test_which(self, batl_root: Path) -> None:
        """which prints the repository directory."""
        repository = Repository.create(ResourceName.parse("infra/tools"))

        result = runner.invoke(app, ["repository", "which", "infra/tools"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(repository.path)

    def test_which_missing(self, batl_root: Path) -> None:
        """which fails for unknown repositories."""
        result = runner.invoke(app, ["repository", "which", "infra/nope"])

        assert result.exit_code == 1

    def test_delete(self, batl_root: Path) -> None:
        """delete removes the repository."""
        repository = Repository.create(ResourceName.parse("infra/tools"))

        result = runner.invoke(app, ["repository", "delete", "infra/tools"])

        assert result.exit_code == 0
        assert not repository.path.exists()


class TestRepositoryExec:
    """Tests for batl repository exec."""

    def test_exec_by_name(self, batl_root: Path) -> None:
        """exec -n runs the named script in the repository directory."""
        repository = Repository.create(ResourceName.parse("infra/tools"))
        repository.config.scripts["test"] = "make test"
        repository.save()

        with patch("batl.cli.commands.repository.run_script", return_value=0) as mock_run:
            result = runner.invoke(app, ["repository", "exec", "test", "-n", "infra/tools"])

        assert result.exit_code == 0
        mock_run.assert_called_once_with("make test", cwd=repository.path)

    def test_exec_from_working_directory(
        self, batl_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without -n the repository containing the working directory is used."""
        repository = Repository.create(ResourceName.parse("infra/tools"))
        nested = repository.path / "src"
        nested.mkdir()
        monkeypatch.chdir(nested)

        with patch("batl.cli.commands.repository.run_script", return_value=0) as mock_run:
            result = runner.invoke(app, ["repository", "exec", "build"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["cwd"] == repository.path

    def test_exec_failure(self, batl_root: Path) -> None:
        """A failing script exits with code 1."""
        Repository.create(ResourceName.parse("infra/tools"))

        with patch("batl.cli.commands.repository.run_script", return_value=2):
            result = runner.invoke(app, ["repository", "exec", "build", "-n", "infra/tools"])

        assert result.exit_code == 1
        assert "exit code 2" in result.output

    def test_exec_unknown_script(self, batl_root: Path) -> None:
        """An undefined script is an error."""
        Repository.create(ResourceName.parse("infra/tools"))

        result = runner.invoke(app, ["repository", "exec", "deploy", "-n", "infra/tools"])

        assert result.exit_code == 1
        assert "Script not found" in result.output

    def test_exec_outside_repository(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without -n and outside a repository, exec fails."""
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["repository", "exec", "build"])

        assert result.exit_code == 1
        assert "does not exist" in result.output
