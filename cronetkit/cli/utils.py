"""
Shared utilities for CLI commands.
"""

import logging

from cronetkit.core.context import BuildContext

logger = logging.getLogger(__name__)


def load_context(args) -> BuildContext:
    """
    Build the invocation's BuildContext from global CLI options.

    Args:
        args: Parsed arguments with project_root and config

    Raises:
        ProjectRootNotFoundError: If no go.mod is found
        ConfigError: If the configuration file is invalid
    """
    context = BuildContext.discover(
        start=getattr(args, "project_root", None),
        config_path=getattr(args, "config", None),
    )
    logger.debug(f"Host platform: {context.host}")
    return context
