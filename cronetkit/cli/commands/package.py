"""
Package command implementation.

Copies built libraries and headers into the Go module and writes the cgo
linkage files.
"""

import logging

from cronetkit.cli.utils import load_context
from cronetkit.cross.targets import resolve_targets
from cronetkit.pipeline import BuildPipeline

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the package command.

    Missing libraries are reported as warnings and do not fail the command.

    Returns:
        Exit code (0 for success)
    """
    context = load_context(args)
    targets = resolve_targets(args.targets, context.host)

    BuildPipeline(context).package(targets)
    return 0
