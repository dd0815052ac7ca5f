"""
Publishing of the packaged Go module to the distribution branch.

The distribution branch holds only the files a Go consumer needs (sources,
headers, prebuilt libraries). Each publish replaces its whole content with the
selected files from the current main commit and force-pushes it.
"""

import logging
from pathlib import Path
from typing import List, Optional

from cronetkit.core.context import BuildContext
from cronetkit.core.exceptions import ExternalToolError, PublishError
from cronetkit.core.process import command_succeeds, run_command, run_command_output

logger = logging.getLogger(__name__)


class GitRepository:
    """Thin wrapper running git in one working tree."""

    def __init__(self, root: Path):
        self.root = root

    def run(self, *args: str) -> None:
        run_command(["git", "-C", self.root, *args])

    def output(self, *args: str) -> str:
        return run_command_output(["git", "-C", self.root, *args]).strip()

    def succeeds(self, *args: str) -> bool:
        return command_succeeds(["git", "-C", self.root, *args])


class Publisher:
    """Commit the packaged tree to the distribution branch and push it."""

    def __init__(self, context: BuildContext, git: Optional[GitRepository] = None):
        self.context = context
        self.settings = context.config.publish
        self.git = git or GitRepository(context.project_root)

    def check_clean(self) -> str:
        """
        Verify the working tree is publishable.

        Returns:
            Full SHA of the main branch HEAD

        Raises:
            PublishError: On uncommitted changes or when not on the main branch
        """
        if self.git.output("status", "--porcelain"):
            raise PublishError("Uncommitted changes in working directory")

        current = self.git.output("rev-parse", "--abbrev-ref", "HEAD")
        if current != self.settings.main_branch:
            raise PublishError(
                f"Must be on {self.settings.main_branch} branch to publish "
                f"(current: {current})"
            )

        return self.git.output("rev-parse", "HEAD")

    def checkout_distribution_branch(self) -> None:
        branch = self.settings.branch
        if self.git.succeeds("rev-parse", "--verify", branch):
            self.git.run("checkout", branch)
        else:
            logger.info(f"Creating orphan branch {branch}")
            self.git.run("checkout", "--orphan", branch)
            self.git.run("reset", "--hard")

    def copy_files_from(self, commit: str) -> List[str]:
        """
        Check out the configured file patterns from ``commit``.

        Patterns that match nothing in the commit are skipped.

        Returns:
            Patterns that were checked out
        """
        copied = []
        for pattern in self.settings.files:
            try:
                self.git.run("checkout", commit, "--", pattern)
            except ExternalToolError:
                logger.debug(f"Nothing matches {pattern} in {commit[:8]}, skipped")
                continue
            copied.append(pattern)
        return copied

    def publish(self) -> str:
        """
        Publish the current main commit.

        Returns:
            The commit message used on the distribution branch
        """
        branch = self.settings.branch
        logger.info(f"Publishing to {branch} branch...")

        main_commit = self.check_clean()
        message = f"Build from {main_commit[:8]}"

        self.checkout_distribution_branch()
        try:
            self.git.run("rm", "-rf", "--ignore-unmatch", "--quiet", ".")
            self.copy_files_from(main_commit)

            self.git.run("add", "-A")
            self.git.run("commit", "-m", message, "--allow-empty")
            self.git.run("push", "-f", self.settings.remote, branch)
        finally:
            self.git.run("checkout", self.settings.main_branch)

        logger.info(f"Published to {branch} branch!")
        return message
