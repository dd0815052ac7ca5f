"""
Tests for external process helpers.
"""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cronetkit.core.exceptions import ExternalToolError
from cronetkit.core.process import command_succeeds, run_command, run_command_output


def _completed(returncode=0, stdout=None):
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    return result


class TestRunCommand:
    """Tests for run_command()."""

    @patch("cronetkit.core.process.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = _completed(0)

        run_command([Path("/src/gn/out/gn"), "gen", "out/x"], cwd="/src")

        args, kwargs = mock_run.call_args
        assert args[0] == ["/src/gn/out/gn", "gen", "out/x"]
        assert kwargs["cwd"] == "/src"
        assert kwargs["env"] is None

    @patch("cronetkit.core.process.subprocess.run")
    def test_env_is_layered_over_environment(self, mock_run, monkeypatch):
        monkeypatch.setenv("PATH_MARKER", "kept")
        mock_run.return_value = _completed(0)

        run_command(["bash", "get-clang.sh"], env={"EXTRA_FLAGS": 'target_os="linux"'})

        env = mock_run.call_args.kwargs["env"]
        assert env["EXTRA_FLAGS"] == 'target_os="linux"'
        assert env["PATH_MARKER"] == "kept"

    @patch("cronetkit.core.process.subprocess.run")
    def test_nonzero_exit(self, mock_run):
        mock_run.return_value = _completed(2)

        with pytest.raises(ExternalToolError) as exc_info:
            run_command(["ninja", "-C", "out/x", "cronet_static"])

        assert exc_info.value.returncode == 2
        assert exc_info.value.command == ["ninja", "-C", "out/x", "cronet_static"]
        assert "exit code 2" in str(exc_info.value)

    @patch("cronetkit.core.process.subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("No such file: ninja")

        with pytest.raises(ExternalToolError, match="No such file"):
            run_command(["ninja"])


class TestRunCommandOutput:
    """Tests for run_command_output()."""

    @patch("cronetkit.core.process.subprocess.run")
    def test_returns_stdout(self, mock_run):
        mock_run.return_value = _completed(0, stdout="main\n")

        assert run_command_output(["git", "rev-parse"]) == "main\n"
        assert mock_run.call_args.kwargs["stdout"] == subprocess.PIPE

    @patch("cronetkit.core.process.subprocess.run")
    def test_failure(self, mock_run):
        mock_run.return_value = _completed(128, stdout="")

        with pytest.raises(ExternalToolError):
            run_command_output(["git", "status"])


class TestCommandSucceeds:
    """Tests for command_succeeds()."""

    @patch("cronetkit.core.process.subprocess.run")
    def test_exit_status(self, mock_run):
        mock_run.return_value = _completed(0)
        assert command_succeeds(["git", "rev-parse", "--verify", "go"]) is True

        mock_run.return_value = _completed(1)
        assert command_succeeds(["git", "rev-parse", "--verify", "go"]) is False

    @patch("cronetkit.core.process.subprocess.run")
    def test_not_startable(self, mock_run):
        mock_run.side_effect = OSError("boom")
        assert command_succeeds(["git"]) is False
