"""
Tests for CLI argument parser.
"""

import logging
from pathlib import Path

import pytest
from unittest.mock import patch

from cronetkit.cli.parser import CLI
from cronetkit.core.exceptions import UnknownTargetError


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "cronetkit" in capsys.readouterr().out

    def test_global_options(self):
        args = CLI().parse_args(
            ["-v", "--config", "alt.yaml", "--project-root", "/work", "sync"]
        )

        assert args.verbose is True
        assert args.config == Path("alt.yaml")
        assert args.project_root == Path("/work")
        assert args.command == "sync"


class TestCommandParsing:
    def test_build_defaults(self):
        args = CLI().parse_args(["build"])

        assert args.targets == ""
        assert args.keep_going is False

    def test_build_options(self):
        args = CLI().parse_args(
            ["build", "--targets", "linux/amd64,darwin/arm64", "--keep-going"]
        )

        assert args.targets == "linux/amd64,darwin/arm64"
        assert args.keep_going is True

    def test_package_targets(self):
        assert CLI().parse_args(["package", "--targets", "all"]).targets == "all"

    def test_publish(self):
        assert CLI().parse_args(["publish"]).command == "publish"

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["deploy"])


class TestDispatch:
    @patch("cronetkit.cli.commands.build.run", return_value=0)
    def test_dispatches_to_module(self, mock_run):
        assert CLI().run(["build", "--targets", "all"]) == 0

        args = mock_run.call_args.args[0]
        assert args.targets == "all"

    @patch("cronetkit.cli.commands.build.run")
    def test_error_returns_one(self, mock_run, capsys):
        mock_run.side_effect = UnknownTargetError("linux/mips")

        assert CLI().run(["build", "--targets", "linux/mips"]) == 1
        assert "Unsupported target: linux/mips" in capsys.readouterr().err

    @patch("cronetkit.cli.commands.publish.run")
    def test_keyboard_interrupt(self, mock_run):
        mock_run.side_effect = KeyboardInterrupt()
        assert CLI().run(["publish"]) == 130
