"""
Centralized exception hierarchy for cronetkit.

Every error the pipeline raises derives from CronetKitError so the CLI can
report it uniformly. The families follow the failure classes of a build run:
configuration errors are raised before any external process is started,
integrity errors after the offending download has been removed, external
tool errors as soon as a subprocess exits non-zero.
"""

from typing import Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class CronetKitError(Exception):
    """Base exception for all cronetkit errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(CronetKitError):
    """Base exception for invalid input detected before any work starts."""

    pass


class ConfigError(ConfigurationError):
    """Invalid cronetkit.yaml content."""

    pass


class ProjectRootNotFoundError(ConfigurationError):
    """Raised when no project root (directory containing go.mod) is found."""

    def __init__(self, start: str):
        self.start = start
        super().__init__(f"Could not find project root (go.mod) above {start}")


class TargetSelectionError(ConfigurationError):
    """Base exception for target selector errors."""

    pass


class UnknownTargetError(TargetSelectionError):
    """Raised when a selector names a target that is not in the registry."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unsupported target: {token}")


class InvalidTargetFormatError(TargetSelectionError):
    """Raised when a selector token is not of the form os/arch."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid target format: {token!r} (expected os/arch)")


class UnsupportedHostError(TargetSelectionError):
    """Raised when the host platform is not a registered target."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"Unsupported host platform: {os_name}/{arch}")


class ManifestError(ConfigurationError):
    """Sysroot manifest is unreadable or lacks the requested entry."""

    pass


# ============================================================================
# Download Exceptions
# ============================================================================


class DownloadError(CronetKitError):
    """Raised when a transfer fails (transport error or non-2xx status)."""

    pass


class IntegrityError(CronetKitError):
    """Base exception for content integrity failures."""

    pass


class ChecksumError(IntegrityError):
    """Raised when downloaded content does not match its expected digest."""

    pass


# ============================================================================
# External Tool Exceptions
# ============================================================================


class ExternalToolError(CronetKitError):
    """Raised when an external command fails or cannot be started."""

    def __init__(self, command: Sequence[str], returncode: int, detail: str = ""):
        self.command = list(command)
        self.returncode = returncode
        msg = f"Command failed: {' '.join(self.command)} (exit code {returncode})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class ProvisioningError(CronetKitError):
    """Raised when a cross-compilation prerequisite cannot be provided."""

    pass


# ============================================================================
# Packaging / Publishing Exceptions
# ============================================================================


class PackagingError(CronetKitError):
    """Base exception for packaging errors."""

    pass


class LibraryNotFoundError(PackagingError):
    """The built static library for a target is missing."""

    def __init__(self, target_name: str, path):
        self.target_name = target_name
        self.path = path
        super().__init__(f"Library not found for {target_name}: {path}")


class PublishError(CronetKitError):
    """Raised when the repository is not in a publishable state."""

    pass
