"""
Core functionality for cronetkit.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .exceptions import (
    CronetKitError,
    ConfigurationError,
    ConfigError,
    ProjectRootNotFoundError,
    TargetSelectionError,
    UnknownTargetError,
    InvalidTargetFormatError,
    UnsupportedHostError,
    ManifestError,
    DownloadError,
    IntegrityError,
    ChecksumError,
    ExternalToolError,
    ProvisioningError,
    PackagingError,
    LibraryNotFoundError,
    PublishError,
)

__all__ = [
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "CronetKitError",
    "ConfigurationError",
    "ConfigError",
    "ProjectRootNotFoundError",
    "TargetSelectionError",
    "UnknownTargetError",
    "InvalidTargetFormatError",
    "UnsupportedHostError",
    "ManifestError",
    "DownloadError",
    "IntegrityError",
    "ChecksumError",
    "ExternalToolError",
    "ProvisioningError",
    "PackagingError",
    "LibraryNotFoundError",
    "PublishError",
]
