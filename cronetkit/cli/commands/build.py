"""
Build command implementation.

Builds cronet_static for the selected targets.
"""

import logging

from cronetkit.cli.utils import load_context
from cronetkit.cross.targets import resolve_targets
from cronetkit.pipeline import BuildPipeline

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments with:
            - targets: Target selector
            - keep_going: Attempt every target instead of failing fast

    Returns:
        Exit code (0 for success, 1 if any target failed)
    """
    context = load_context(args)
    targets = resolve_targets(args.targets, context.host)

    report = BuildPipeline(context).build(targets, fail_fast=not args.keep_going)
    return 0 if report.ok else 1
