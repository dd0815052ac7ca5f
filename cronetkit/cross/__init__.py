"""
Cross-compilation support for cronetkit.

This package holds the target registry and the provisioning of everything a
cross build needs before GN runs: toolchains, Debian sysroots and the
Android NDK.
"""

from cronetkit.cross.targets import (
    ALL_TARGETS,
    Target,
    TargetOS,
    find_target,
    resolve_targets,
)
from cronetkit.cross.sysroot import (
    SysrootDescriptor,
    SysrootProvisioner,
    load_sysroot_manifest,
)
from cronetkit.cross.toolchain import ToolchainFetcher
from cronetkit.cross.ndk import AndroidNDKProvisioner
from cronetkit.cross.provisioner import PrerequisiteProvisioner

__all__ = [
    "ALL_TARGETS",
    "Target",
    "TargetOS",
    "find_target",
    "resolve_targets",
    "SysrootDescriptor",
    "SysrootProvisioner",
    "load_sysroot_manifest",
    "ToolchainFetcher",
    "AndroidNDKProvisioner",
    "PrerequisiteProvisioner",
]
