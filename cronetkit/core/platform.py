"""
Host platform detection for cronetkit.

The host is described in the Go naming convention (GOOS/GOARCH), because that
is the convention target selectors use; the GN spellings of the same values
are available as properties for the provisioning code.

Usage:
    from cronetkit.core.platform import detect_platform

    host = detect_platform()
    print(f"{host.os}/{host.arch}")   # e.g. linux/amd64
    print(host.gn_cpu)                # e.g. x64
"""

import functools
import platform
from dataclasses import dataclass

GOOS_TO_GN_OS = {
    "linux": "linux",
    "darwin": "mac",
    "windows": "win",
    "android": "android",
    "ios": "ios",
}

GOARCH_TO_GN_CPU = {
    "amd64": "x64",
    "arm64": "arm64",
    "386": "x86",
    "arm": "arm",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform identity.

    Attributes:
        os: Operating system in GOOS form ('linux', 'darwin', 'windows', 'android')
        arch: CPU architecture in GOARCH form ('amd64', 'arm64', '386', 'arm')
    """

    os: str
    arch: str

    @property
    def gn_os(self) -> str:
        """GN ``target_os`` spelling of the host OS (e.g. 'mac' for darwin)."""
        return GOOS_TO_GN_OS.get(self.os, self.os)

    @property
    def gn_cpu(self) -> str:
        """GN ``target_cpu`` spelling of the host CPU (e.g. 'x64' for amd64)."""
        return GOARCH_TO_GN_CPU.get(self.arch, self.arch)

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized GOOS name; unknown systems are returned lower-cased as-is
    """
    system = platform.system().lower()

    if system == "linux":
        if "android" in platform.platform().lower():
            return "android"
        return "linux"
    elif system == "darwin":
        return "darwin"
    elif system == "windows":
        return "windows"
    else:
        return system


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized GOARCH name: 'amd64', 'arm64', '386', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "amd64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "386"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
]
