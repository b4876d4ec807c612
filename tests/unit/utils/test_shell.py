"""Unit tests for shell execution utilities."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from batl.utils.shell import run_interactive, run_script


class TestRunInteractive:
    """Tests for run_interactive function."""

    @patch("batl.utils.shell.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock) -> None:
        """run_interactive returns the subprocess exit code."""
        mock_run.return_value = MagicMock(returncode=3)

        assert run_interactive(["false"]) == 3

    @patch("batl.utils.shell.subprocess.run")
    def test_does_not_capture_output(self, mock_run: MagicMock) -> None:
        """run_interactive does not capture stdout/stderr (inherits TTY)."""
        mock_run.return_value = MagicMock(returncode=0)

        run_interactive(["echo", "hello"])

        kwargs = mock_run.call_args.kwargs
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs
        assert kwargs["check"] is False

    @patch("batl.utils.shell.subprocess.run")
    def test_merges_env(self, mock_run: MagicMock) -> None:
        """Extra variables are merged over the current environment."""
        mock_run.return_value = MagicMock(returncode=0)

        with patch.dict("os.environ", {"EXISTING": "1"}):
            run_interactive(["env"], env={"EXTRA": "2"})

        env = mock_run.call_args.kwargs["env"]
        assert env["EXISTING"] == "1"
        assert env["EXTRA"] == "2"


class TestRunScript:
    """Tests for run_script function."""

    @patch("batl.utils.shell.subprocess.run")
    def test_runs_through_sh(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Scripts are passed to sh -c in the given directory."""
        mock_run.return_value = MagicMock(returncode=0)

        assert run_script("make && make test", cwd=tmp_path) == 0

        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ["sh", "-c", "make && make test"]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    def test_real_exit_status(self, tmp_path: Path) -> None:
        """The shell's exit status is returned."""
        assert run_script("exit 4", cwd=tmp_path) == 4

    def test_runs_in_directory(self, tmp_path: Path) -> None:
        """The command sees the given working directory."""
        assert run_script("test -f marker", cwd=tmp_path) == 1
        (tmp_path / "marker").write_text("")
        assert run_script("test -f marker", cwd=tmp_path) == 0
