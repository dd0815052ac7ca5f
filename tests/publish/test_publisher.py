"""
Tests for publishing to the distribution branch.
"""

import pytest
from unittest.mock import MagicMock, call, patch

from cronetkit.core.exceptions import ExternalToolError, PublishError
from cronetkit.publish.publisher import GitRepository, Publisher

SHA = "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def git():
    git = MagicMock(spec=GitRepository)

    def output(*args):
        return {
            ("status", "--porcelain"): "",
            ("rev-parse", "--abbrev-ref", "HEAD"): "main",
            ("rev-parse", "HEAD"): SHA,
        }[args]

    git.output.side_effect = output
    git.succeeds.return_value = True
    return git


class TestGitRepository:
    @patch("cronetkit.publish.publisher.run_command_output")
    def test_output_stripped(self, mock_output, temp_dir):
        mock_output.return_value = "main\n"

        assert GitRepository(temp_dir).output("rev-parse", "--abbrev-ref", "HEAD") == (
            "main"
        )
        mock_output.assert_called_once_with(
            ["git", "-C", temp_dir, "rev-parse", "--abbrev-ref", "HEAD"]
        )

    @patch("cronetkit.publish.publisher.run_command")
    def test_run(self, mock_run, temp_dir):
        GitRepository(temp_dir).run("add", "-A")
        mock_run.assert_called_once_with(["git", "-C", temp_dir, "add", "-A"])


class TestCheckClean:
    def test_clean(self, context, git):
        assert Publisher(context, git).check_clean() == SHA

    def test_dirty(self, context, git):
        git.output.side_effect = lambda *args: " M go.mod"

        with pytest.raises(PublishError, match="Uncommitted changes"):
            Publisher(context, git).check_clean()

    def test_wrong_branch(self, context, git):
        outputs = {
            ("status", "--porcelain"): "",
            ("rev-parse", "--abbrev-ref", "HEAD"): "feature",
        }
        git.output.side_effect = lambda *args: outputs[args]

        with pytest.raises(PublishError, match="main"):
            Publisher(context, git).check_clean()


class TestPublish:
    def test_existing_branch(self, context, git):
        message = Publisher(context, git).publish()

        assert message == "Build from 01234567"
        git.succeeds.assert_called_once_with("rev-parse", "--verify", "go")

        files = context.config.publish.files
        expected = (
            [
                call("checkout", "go"),
                call("rm", "-rf", "--ignore-unmatch", "--quiet", "."),
            ]
            + [call("checkout", SHA, "--", pattern) for pattern in files]
            + [
                call("add", "-A"),
                call("commit", "-m", "Build from 01234567", "--allow-empty"),
                call("push", "-f", "origin", "go"),
                call("checkout", "main"),
            ]
        )
        assert git.run.call_args_list == expected

    def test_creates_orphan_branch(self, context, git):
        git.succeeds.return_value = False

        Publisher(context, git).publish()

        assert git.run.call_args_list[:3] == [
            call("checkout", "--orphan", "go"),
            call("reset", "--hard"),
            call("rm", "-rf", "--ignore-unmatch", "--quiet", "."),
        ]

    def test_missing_patterns_skipped(self, context, git):
        def run(*args):
            if args[:1] == ("checkout",) and args[-1] == "naive/":
                raise ExternalToolError(["git", *args], 1)

        git.run.side_effect = run

        copied = Publisher(context, git).copy_files_from(SHA)

        assert "naive/" not in copied
        assert "lib/" in copied

    def test_dirty_tree_touches_nothing(self, context, git):
        git.output.side_effect = lambda *args: "?? stray.txt"

        with pytest.raises(PublishError):
            Publisher(context, git).publish()

        git.run.assert_not_called()

    def test_push_failure_propagates(self, context, git):
        def run(*args):
            if args[0] == "push":
                raise ExternalToolError(["git", *args], 128)

        git.run.side_effect = run

        with pytest.raises(ExternalToolError):
            Publisher(context, git).publish()

        assert git.run.call_args_list[-1] == call("checkout", "main")

    def test_copy_failure_returns_to_main(self, context, git):
        def run(*args):
            if args[0] == "rm":
                raise ExternalToolError(["git", *args], 1)

        git.run.side_effect = run

        with pytest.raises(ExternalToolError):
            Publisher(context, git).publish()

        assert git.run.call_args_list[-1] == call("checkout", "main")
        assert call("commit", "-m", f"Build from {SHA[:8]}", "--allow-empty") not in (
            git.run.call_args_list
        )
