"""
Toolchain bootstrap through the checkout's fetch script.

The naiveproxy tree ships a script that downloads the pinned clang and, for
Linux-family targets, the matching sysroot. It reads the desired platform
from a single environment variable holding GN-style assignments.
"""

import logging
from pathlib import Path
from typing import Optional

from cronetkit.core.context import BuildContext
from cronetkit.core.filesystem import create_link
from cronetkit.core.process import run_command
from cronetkit.cross.sysroot import SysrootProvisioner
from cronetkit.cross.targets import Target, TargetOS

logger = logging.getLogger(__name__)

# Target OSes whose builds run host tools against a Linux host sysroot
_HOST_SYSROOT_OSES = (TargetOS.LINUX, TargetOS.ANDROID)


def fetch_flags(os_name: str, cpu: str) -> str:
    """Encode a platform the way the fetch script expects it."""
    return f'target_os="{os_name}" target_cpu="{cpu}"'


class ToolchainFetcher:
    """Run the toolchain fetch script for a target (and the host if needed)."""

    def __init__(
        self, context: BuildContext, sysroots: Optional[SysrootProvisioner] = None
    ):
        self.context = context
        self.settings = context.config.toolchain
        self.sysroots = sysroots or SysrootProvisioner(context)

    @property
    def script_path(self) -> Path:
        return self.context.src_root / self.settings.fetch_script

    def needs_host_sysroot(self, target: Target) -> bool:
        """
        Whether a Linux host must also fetch its own sysroot for ``target``.

        GN builds host-side tools (code generators and the like) while cross
        compiling, and those need a host sysroot of their own.
        """
        host = self.context.host
        return (
            host.os == "linux"
            and target.os in _HOST_SYSROOT_OSES
            and target.cpu != host.gn_cpu
        )

    def run_fetch(self, os_name: str, cpu: str) -> None:
        flags = fetch_flags(os_name, cpu)
        logger.info(f"Fetching toolchain ({flags})...")
        run_command(
            ["bash", self.script_path],
            cwd=self.context.src_root,
            env={self.settings.env_var: flags},
        )

    def ensure(self, target: Target) -> None:
        """
        Fetch the toolchain for ``target``.

        When cross compiling from Linux to another Linux/Android CPU, the
        host's own platform is fetched first and its staged sysroot is linked
        into the conventional location unless something is already there.

        Raises:
            ExternalToolError: If the fetch script fails
        """
        if self.needs_host_sysroot(target):
            host_cpu = self.context.host.gn_cpu
            self.run_fetch(TargetOS.LINUX.value, host_cpu)

            staging = self.sysroots.staging_path(host_cpu)
            conventional = self.sysroots.sysroot_path(host_cpu)
            if create_link(staging, conventional):
                logger.info(f"Linked host sysroot {conventional} -> {staging}")
            else:
                logger.debug(f"Host sysroot already present: {conventional}")

        self.run_fetch(target.os.value, target.cpu)
