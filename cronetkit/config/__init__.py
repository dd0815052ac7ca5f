"""
Configuration for cronetkit.

Parses the optional cronetkit.yaml file into typed dataclasses.
"""

from .parser import (
    CONFIG_FILENAME,
    AndroidConfig,
    BuildConfig,
    CronetKitConfig,
    PackageConfig,
    PublishConfig,
    SourceConfig,
    SyncConfig,
    SysrootConfig,
    ToolchainConfig,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "AndroidConfig",
    "BuildConfig",
    "CronetKitConfig",
    "PackageConfig",
    "PublishConfig",
    "SourceConfig",
    "SyncConfig",
    "SysrootConfig",
    "ToolchainConfig",
    "load_config",
    "parse_config",
]
