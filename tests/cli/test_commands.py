"""
Tests for CLI command implementations.
"""

import logging

import pytest
from unittest.mock import patch

from cronetkit.cli.parser import CLI
from cronetkit.cross.targets import resolve_targets


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _run(workspace, *argv):
    return CLI().run(["--project-root", str(workspace), *argv])


class TestBuildCommand:
    @patch("cronetkit.cli.commands.build.BuildPipeline")
    def test_resolves_targets(self, mock_pipeline, temp_workspace):
        mock_pipeline.return_value.build.return_value.ok = True

        assert _run(temp_workspace, "build", "--targets", "linux/amd64") == 0

        targets, = mock_pipeline.return_value.build.call_args.args
        assert targets == resolve_targets("linux/amd64")
        assert mock_pipeline.return_value.build.call_args.kwargs == {
            "fail_fast": True
        }

    @patch("cronetkit.cli.commands.build.BuildPipeline")
    def test_keep_going_failure(self, mock_pipeline, temp_workspace):
        mock_pipeline.return_value.build.return_value.ok = False

        assert _run(temp_workspace, "build", "--targets", "all", "--keep-going") == 1
        assert mock_pipeline.return_value.build.call_args.kwargs == {
            "fail_fast": False
        }

    @patch("cronetkit.cli.commands.build.BuildPipeline")
    def test_bad_selector_builds_nothing(self, mock_pipeline, temp_workspace):
        assert _run(temp_workspace, "build", "--targets", "linux/mips") == 1
        mock_pipeline.assert_not_called()

    def test_outside_project(self, temp_dir):
        orphan = temp_dir / "orphan"
        orphan.mkdir()
        assert _run(orphan, "build") == 1


class TestOtherCommands:
    @patch("cronetkit.cli.commands.package.BuildPipeline")
    def test_package(self, mock_pipeline, temp_workspace):
        assert _run(temp_workspace, "package", "--targets", "darwin/arm64") == 0

        mock_pipeline.return_value.package.assert_called_once_with(
            resolve_targets("darwin/arm64")
        )

    @patch("cronetkit.cli.commands.publish.Publisher")
    def test_publish(self, mock_publisher, temp_workspace):
        assert _run(temp_workspace, "publish") == 0
        mock_publisher.return_value.publish.assert_called_once_with()

    @patch("cronetkit.cli.commands.sync.ComponentSync")
    def test_sync(self, mock_sync, temp_workspace):
        assert _run(temp_workspace, "sync") == 0

        context = mock_sync.call_args.args[0]
        assert context.project_root == temp_workspace.resolve()
        mock_sync.return_value.sync.assert_called_once_with()
