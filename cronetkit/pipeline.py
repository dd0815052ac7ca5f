"""
Pipeline driver.

The only entry point the CLI uses for building and packaging. Targets are
processed one at a time, in order. Building is fail-fast: the first failing
target aborts the run and later targets are never started. Packaging collects
every per-target outcome.
"""

import logging
from pathlib import Path
from typing import Sequence

from cronetkit.build.gn_args import synthesize
from cronetkit.build.invoker import BuildInvoker
from cronetkit.build.results import PipelineReport, run_collect_all, run_fail_fast
from cronetkit.core.context import BuildContext
from cronetkit.cross.provisioner import PrerequisiteProvisioner
from cronetkit.cross.targets import Target
from cronetkit.package.packager import Packager

logger = logging.getLogger(__name__)


class BuildPipeline:
    """Provision, configure, build and package a list of targets."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.provisioner = PrerequisiteProvisioner(context)
        self.invoker = BuildInvoker(context)
        self.packager = Packager(context, self.invoker)

    def build_target(self, target: Target) -> Path:
        logger.info(f"Building {target}...")
        self.provisioner.ensure(target)
        configuration = synthesize(target, self.context)
        return self.invoker.build(target, configuration)

    def build(
        self, targets: Sequence[Target], fail_fast: bool = True
    ) -> PipelineReport:
        """
        Build ``targets`` in order.

        Args:
            targets: Resolved targets
            fail_fast: Abort on the first failure (default). When False every
                target is attempted and failures are returned in the report.

        Raises:
            CronetKitError: The first failure, when fail_fast is set
        """
        product = self.context.config.build.product
        logger.info(f"Building {product} for {len(targets)} target(s)")

        if fail_fast:
            report = run_fail_fast(targets, self.build_target)
        else:
            report = run_collect_all(targets, self.build_target)
            for result in report.failed:
                logger.error(f"{result.target} failed: {result.error}")

        logger.info(f"Build complete! ({report.summary()})")
        return report

    def package(self, targets: Sequence[Target]) -> PipelineReport:
        return self.packager.package(targets)
