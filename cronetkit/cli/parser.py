"""
cronetkit CLI argument parser.

This module implements the command-line interface for cronetkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cronetkit.core.exceptions import CronetKitError

try:
    from importlib.metadata import version

    __version__ = version("cronetkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

TARGETS_HELP = (
    "Comma-separated list of targets (e.g. linux/amd64,darwin/arm64), "
    "'all' for every supported target. Empty means host only."
)


class CLI:
    """cronetkit command-line interface."""

    COMMAND_MAP = {
        "sync": "cronetkit.cli.commands.sync",
        "build": "cronetkit.cli.commands.build",
        "package": "cronetkit.cli.commands.package",
        "publish": "cronetkit.cli.commands.publish",
    }

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="cronetkit",
            description="Build, package and publish cronet static libraries for Go",
            epilog='Use "cronetkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"cronetkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: <project root>/cronetkit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            help="Directory to search upwards for go.mod (default: current directory)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        subparsers.add_parser(
            "sync",
            help="Download Chromium cronet components",
            description="Download the cronet components for CHROMIUM_VERSION "
            "and commit them to the naiveproxy checkout",
        )

        build_parser = subparsers.add_parser(
            "build",
            help="Build cronet_static for specified targets",
            description="Provision toolchains, run gn gen and ninja per target",
        )
        build_parser.add_argument(
            "--targets", default="", metavar="SELECTOR", help=TARGETS_HELP
        )
        build_parser.add_argument(
            "--keep-going",
            action="store_true",
            help="Attempt every target instead of stopping at the first failure",
        )

        package_parser = subparsers.add_parser(
            "package",
            help="Package libraries and generate cgo config files",
            description="Copy headers and libraries into the Go module and "
            "write one cgo_<os>_<arch>.go file per target",
        )
        package_parser.add_argument(
            "--targets", default="", metavar="SELECTOR", help=TARGETS_HELP
        )

        subparsers.add_parser(
            "publish",
            help="Commit to the distribution branch and push",
            description="Replace the distribution branch with the packaged "
            "files of the current main commit and force-push it",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None):
        """Parse command-line arguments (sys.argv if None)."""
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except CronetKitError as e:
            logger.error(f"ERROR: {e}")
            if parsed_args.verbose:
                logger.debug("Traceback:", exc_info=True)
            return 1

    def _configure_logging(self, args):
        """Configure logging based on verbose/quiet flags."""
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """Import the command module and call its run()."""
        module_name = self.COMMAND_MAP.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
