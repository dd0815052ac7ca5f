"""GN/Ninja invocation for a single target."""

import logging
from pathlib import Path

from cronetkit.build.gn_args import BuildConfiguration
from cronetkit.core.context import BuildContext
from cronetkit.core.process import run_command
from cronetkit.cross.targets import Target

logger = logging.getLogger(__name__)

LIBRARY_SUBPATH = Path("obj") / "components" / "cronet" / "libcronet_static.a"


class BuildInvoker:
    """Drive the two-stage native build: ``gn gen`` then ``ninja``."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.settings = context.config.build

    @property
    def gn_path(self) -> Path:
        return self.context.src_root / self.settings.gn

    def out_dir(self, target: Target) -> str:
        """Output directory relative to the source root."""
        return target.out_dir_name(self.settings.out_prefix)

    def library_path(self, target: Target) -> Path:
        """Where ninja leaves the static library for ``target``."""
        return self.context.src_root / self.out_dir(target) / LIBRARY_SUBPATH

    def build(self, target: Target, configuration: BuildConfiguration) -> Path:
        """
        Generate the build graph and build the product for ``target``.

        Returns:
            Path to the built static library

        Raises:
            ExternalToolError: If gn or ninja exits non-zero
        """
        out_dir = self.out_dir(target)
        src_root = self.context.src_root

        logger.info(f"Generating {out_dir}...")
        run_command(
            [self.gn_path, "gen", out_dir, f"--args={configuration.to_gn_args()}"],
            cwd=src_root,
            env=configuration.env,
        )

        logger.info(f"Building {self.settings.product} in {out_dir}...")
        run_command(
            [self.settings.ninja, "-C", out_dir, self.settings.product],
            cwd=src_root,
            env=configuration.env,
        )

        return self.library_path(target)
