"""YAML configuration parser for cronetkit.

This module provides parsing and validation for cronetkit.yaml configuration
files. Every setting has a default, so a project without a configuration file
builds with the stock naiveproxy layout.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

from cronetkit.core.exceptions import ConfigError

CONFIG_FILENAME = "cronetkit.yaml"


@dataclass
class SourceConfig:
    """Location of the embedded Chromium checkout."""

    naive_dir: str = "naiveproxy"  # Chromium tree lives in <naive_dir>/src


@dataclass
class BuildConfig:
    """GN/Ninja invocation settings."""

    product: str = "cronet_static"
    out_prefix: str = "out/cronet"
    gn: str = "gn/out/gn"  # relative to the source root
    ninja: str = "ninja"


@dataclass
class SysrootConfig:
    """Debian sysroot settings for Linux targets."""

    release: str = "bullseye"
    manifest: str = "build/linux/sysroot_scripts/sysroots.json"
    staging_dir: str = "out/sysroot-build/bullseye"


@dataclass
class ToolchainConfig:
    """Toolchain fetch script used to bootstrap clang and sysroots."""

    fetch_script: str = "get-clang.sh"
    env_var: str = "EXTRA_FLAGS"


@dataclass
class AndroidConfig:
    """Android NDK pinning."""

    ndk_version: str = "28.0.13004108"
    min_sdk_version: int = 24
    sdk_root: Optional[str] = None

    @property
    def ndk_major_version(self) -> int:
        return int(self.ndk_version.split(".", 1)[0])


@dataclass
class PackageConfig:
    """Output layout of the package step."""

    lib_dir: str = "lib"
    include_dir: str = "include"
    go_package: str = "cronet"
    library_name: str = "cronet"


@dataclass
class PublishConfig:
    """Distribution branch settings."""

    branch: str = "go"
    main_branch: str = "main"
    remote: str = "origin"
    files: List[str] = field(
        default_factory=lambda: [
            "*.go",
            "go.mod",
            "go.sum",
            "include/",
            "lib/",
            "naive/",
            "LICENSE",
            "README.md",
        ]
    )


@dataclass
class SyncConfig:
    """Chromium component download settings."""

    components: List[str] = field(
        default_factory=lambda: ["cronet", "grpc_support", "prefs"]
    )
    url_template: str = (
        "https://chromium.googlesource.com/chromium/src/+archive/"
        "refs/tags/{version}/components/{name}.tar.gz"
    )


@dataclass
class CronetKitConfig:
    """Complete cronetkit configuration."""

    source: SourceConfig = field(default_factory=SourceConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    sysroot: SysrootConfig = field(default_factory=SysrootConfig)
    toolchain: ToolchainConfig = field(default_factory=ToolchainConfig)
    android: AndroidConfig = field(default_factory=AndroidConfig)
    package: PackageConfig = field(default_factory=PackageConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)


def load_config(config_path: Optional[Path]) -> CronetKitConfig:
    """
    Load configuration, falling back to defaults when no file exists.

    Args:
        config_path: Path to cronetkit.yaml, or None

    Returns:
        Parsed configuration (defaults if the file is absent)

    Raises:
        ConfigError: If the file exists but is invalid
    """
    if config_path is None or not config_path.exists():
        return CronetKitConfig()
    return parse_config(config_path)


def parse_config(config_path: Path) -> CronetKitConfig:
    """
    Parse cronetkit.yaml configuration file.

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return CronetKitConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> CronetKitConfig:
    """Parse and validate configuration data."""
    sections = {f.name: f for f in fields(CronetKitConfig)}

    unknown = sorted(set(data) - set(sections))
    if unknown:
        raise ConfigError(f"Unknown configuration section(s): {', '.join(unknown)}")

    parsed = {}
    for name, section_data in data.items():
        section_cls = sections[name].default_factory
        parsed[name] = _parse_section(name, section_cls, section_data or {})

    config = CronetKitConfig(**parsed)
    _validate(config)
    return config


def _parse_section(name: str, section_cls, data):
    """Build one section dataclass from a mapping, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")

    known = {f.name for f in fields(section_cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown key(s) in '{name}': {', '.join(unknown)}")

    return section_cls(**data)


def _validate(config: CronetKitConfig) -> None:
    version = str(config.android.ndk_version)
    config.android.ndk_version = version
    if not version.split(".", 1)[0].isdigit():
        raise ConfigError(
            f"android.ndk_version must start with a major number: {version}"
        )

    if not isinstance(config.android.min_sdk_version, int):
        raise ConfigError("android.min_sdk_version must be an integer")

    if not isinstance(config.publish.files, list) or not config.publish.files:
        raise ConfigError("publish.files must be a non-empty list")

    if not isinstance(config.sync.components, list):
        raise ConfigError("sync.components must be a list")

    if "{version}" not in config.sync.url_template:
        raise ConfigError("sync.url_template must contain {version}")
