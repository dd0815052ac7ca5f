"""
Prerequisite provisioning for one build target.

Runs, in order, the toolchain fetch (host first when cross compiling from
Linux), the Linux target sysroot, and the Android NDK. Every step checks for
existing state first, so re-running after a partial failure only redoes what
is missing.
"""

import logging

from cronetkit.core.context import BuildContext
from cronetkit.cross.ndk import AndroidNDKProvisioner
from cronetkit.cross.sysroot import SysrootProvisioner
from cronetkit.cross.targets import Target, TargetOS
from cronetkit.cross.toolchain import ToolchainFetcher

logger = logging.getLogger(__name__)


class PrerequisiteProvisioner:
    """Ensure a target's cross-compilation prerequisites are present."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.sysroots = SysrootProvisioner(context)
        self.toolchain = ToolchainFetcher(context, self.sysroots)
        self.ndk = AndroidNDKProvisioner(context)

    def ensure(self, target: Target) -> None:
        logger.debug(f"Provisioning prerequisites for {target}")

        self.toolchain.ensure(target)

        if target.os == TargetOS.LINUX:
            self.sysroots.ensure(target.cpu)
        elif target.os == TargetOS.ANDROID:
            self.ndk.ensure()
