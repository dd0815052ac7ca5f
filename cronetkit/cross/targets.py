"""
Build target registry and selector resolution.

A Target carries two spellings of the same platform: the GN names
(``target_os``/``target_cpu``) that drive the native build and name its
output directory, and the Go names (GOOS/GOARCH) that users type in
selectors and that name the packaged output. The registry is closed: only
the entries of ALL_TARGETS can be built.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from cronetkit.core.exceptions import (
    InvalidTargetFormatError,
    UnknownTargetError,
    UnsupportedHostError,
)
from cronetkit.core.platform import PlatformInfo, detect_platform


class TargetOS(str, Enum):
    """GN ``target_os`` values supported by the pipeline."""

    LINUX = "linux"
    MAC = "mac"
    WIN = "win"
    ANDROID = "android"
    IOS = "ios"


@dataclass(frozen=True)
class Target:
    """
    One (operating system, CPU) build configuration.

    Attributes:
        os: GN target_os
        cpu: GN target_cpu ('x64', 'arm64', 'x86', 'arm')
        goos: Go GOOS for the same platform
        goarch: Go GOARCH for the same platform
    """

    os: TargetOS
    cpu: str
    goos: str
    goarch: str

    @property
    def name(self) -> str:
        """Selector spelling, e.g. 'darwin/arm64'."""
        return f"{self.goos}/{self.goarch}"

    @property
    def lib_dir_name(self) -> str:
        """Packaged library directory name, e.g. 'darwin_arm64'."""
        return f"{self.goos}_{self.goarch}"

    def out_dir_name(self, prefix: str = "out/cronet") -> str:
        """Native build output directory, e.g. 'out/cronet-mac-arm64'."""
        return f"{prefix}-{self.os.value}-{self.cpu}"

    def __str__(self) -> str:
        return self.name


ALL_TARGETS: Tuple[Target, ...] = (
    Target(TargetOS.LINUX, "x64", "linux", "amd64"),
    Target(TargetOS.LINUX, "arm64", "linux", "arm64"),
    Target(TargetOS.MAC, "x64", "darwin", "amd64"),
    Target(TargetOS.MAC, "arm64", "darwin", "arm64"),
    Target(TargetOS.WIN, "x64", "windows", "amd64"),
    Target(TargetOS.WIN, "arm64", "windows", "arm64"),
    Target(TargetOS.IOS, "arm64", "ios", "arm64"),
    Target(TargetOS.ANDROID, "arm64", "android", "arm64"),
    Target(TargetOS.ANDROID, "x64", "android", "amd64"),
    Target(TargetOS.ANDROID, "arm", "android", "arm"),
    Target(TargetOS.ANDROID, "x86", "android", "386"),
)


def find_target(goos: str, goarch: str) -> Optional[Target]:
    """Return the first registry entry with the given Go names, if any."""
    for target in ALL_TARGETS:
        if target.goos == goos and target.goarch == goarch:
            return target
    return None


def resolve_targets(
    selector: str, host: Optional[PlatformInfo] = None
) -> List[Target]:
    """
    Resolve a target selector into registry entries.

    Args:
        selector: '' for the host platform, 'all' for every registered
            target, or a comma-separated list of 'goos/goarch' tokens
        host: Host platform used for the empty selector (default: detected)

    Returns:
        Targets in selector order; duplicates are kept

    Raises:
        UnsupportedHostError: Empty selector on a host that is not registered
        InvalidTargetFormatError: A token is not of the form os/arch
        UnknownTargetError: A token names an unregistered platform

    Example:
        >>> [t.out_dir_name() for t in resolve_targets("linux/amd64,darwin/arm64")]
        ['out/cronet-linux-x64', 'out/cronet-mac-arm64']
    """
    if selector == "":
        host = host or detect_platform()
        target = find_target(host.os, host.arch)
        if target is None:
            raise UnsupportedHostError(host.os, host.arch)
        return [target]

    if selector == "all":
        return list(ALL_TARGETS)

    targets = []
    for token in selector.split(","):
        token = token.strip()
        parts = token.split("/")
        if len(parts) != 2 or not all(parts):
            raise InvalidTargetFormatError(token)

        target = find_target(parts[0], parts[1])
        if target is None:
            raise UnknownTargetError(token)
        targets.append(target)

    return targets
