"""
GN argument synthesis.

A BuildConfiguration is the common baseline shared by every target followed
by an overlay chosen from OVERLAYS, a mapping that covers every TargetOS.
Overlays only append; nothing in the baseline is removed or rewritten.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple, Union

from cronetkit.core.context import BuildContext
from cronetkit.cross.sysroot import SysrootProvisioner
from cronetkit.cross.targets import Target, TargetOS

logger = logging.getLogger(__name__)

GNValue = Union[bool, int, str]


@dataclass
class BuildConfiguration:
    """
    Ordered GN arguments plus environment for one target.

    Attributes:
        args: (name, value) pairs in emission order; strings are quoted when
            serialized, booleans become true/false
        env: Extra environment variables for the gn invocation
    """

    args: List[Tuple[str, GNValue]] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)

    def add(self, name: str, value: GNValue) -> "BuildConfiguration":
        self.args.append((name, value))
        return self

    def get(self, name: str):
        """Return the last value assigned to ``name`` (GN is last-wins)."""
        value = None
        for key, val in self.args:
            if key == name:
                value = val
        return value

    def to_gn_list(self) -> List[str]:
        return [f"{name}={format_gn_value(value)}" for name, value in self.args]

    def to_gn_args(self) -> str:
        """Serialize for ``gn gen --args=``."""
        return " ".join(self.to_gn_list())


def format_gn_value(value: GNValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return f'"{value}"'


# Official, release, warning-tolerant build with every optional subsystem that
# cronet does not need switched off.
BASELINE_ARGS: Tuple[Tuple[str, GNValue], ...] = (
    ("is_official_build", True),
    ("is_debug", False),
    ("is_clang", True),
    ("fatal_linker_warnings", False),
    ("treat_warnings_as_errors", False),
    ("is_cronet_build", True),
    ("use_udev", False),
    ("use_aura", False),
    ("use_ozone", False),
    ("use_gio", False),
    ("use_platform_icu_alternatives", True),
    ("use_glib", False),
    ("disable_file_support", True),
    ("enable_websockets", False),
    ("use_kerberos", False),
    ("disable_zstd_filter", False),
    ("enable_mdns", False),
    ("enable_reporting", False),
    ("include_transport_security_state_preload_list", False),
    ("enable_device_bound_sessions", False),
    ("enable_bracketed_proxy_uris", True),
    ("enable_quic_proxy_support", True),
    ("enable_disk_cache_sql_backend", False),
    ("use_nss_certs", False),
    ("enable_backup_ref_ptr_support", False),
    ("enable_dangling_raw_ptr_checks", False),
    ("exclude_unwind_tables", True),
    ("enable_resource_allowlist_generation", False),
    ("symbol_level", 0),
)


OverlayBuilder = Callable[[BuildConfiguration, Target, BuildContext], None]


def _mac_overlay(config: BuildConfiguration, target: Target, context: BuildContext):
    config.add("use_sysroot", False)


def _win_overlay(config: BuildConfiguration, target: Target, context: BuildContext):
    config.add("use_sysroot", False)
    # Use the locally installed Visual Studio toolchain, not Google's bundle
    config.env["DEPOT_TOOLS_WIN_TOOLCHAIN"] = "0"


def _linux_overlay(config: BuildConfiguration, target: Target, context: BuildContext):
    sysroots = SysrootProvisioner(context)
    sysroot_dir = sysroots.sysroot_path(target.cpu)
    if not sysroot_dir.exists():
        sysroot_dir = sysroots.staging_path(target.cpu)

    rel_sysroot = sysroot_dir.relative_to(context.src_root).as_posix()
    config.add("use_sysroot", True)
    config.add("target_sysroot", f"//{rel_sysroot}")

    # CFI indirect-call checking does not link against the x64 sysroot
    if target.cpu == "x64":
        config.add("use_cfi_icall", False)


def _android_overlay(
    config: BuildConfiguration, target: Target, context: BuildContext
):
    android = context.config.android
    config.add("use_sysroot", False)
    config.add("default_min_sdk_version", android.min_sdk_version)
    config.add("is_high_end_android", True)
    config.add("android_ndk_major_version", android.ndk_major_version)


def _ios_overlay(config: BuildConfiguration, target: Target, context: BuildContext):
    config.add("use_sysroot", False)
    config.add("ios_enable_code_signing", False)
    config.add("enable_ios_bitcode", False)
    config.add("target_environment", "device")


OVERLAYS: Dict[TargetOS, OverlayBuilder] = {
    TargetOS.MAC: _mac_overlay,
    TargetOS.WIN: _win_overlay,
    TargetOS.LINUX: _linux_overlay,
    TargetOS.ANDROID: _android_overlay,
    TargetOS.IOS: _ios_overlay,
}

_missing = set(TargetOS) - set(OVERLAYS)
if _missing:
    raise RuntimeError(f"No GN overlay for: {sorted(m.value for m in _missing)}")


def synthesize(target: Target, context: BuildContext) -> BuildConfiguration:
    """
    Produce the GN configuration for ``target``.

    The result depends only on the target, the configuration and whether the
    conventional sysroot directory exists on disk.

    Example:
        >>> config = synthesize(Target(TargetOS.MAC, "arm64", "darwin", "arm64"), ctx)
        >>> config.get("use_sysroot")
        False
    """
    config = BuildConfiguration(args=list(BASELINE_ARGS))
    config.add("target_os", target.os.value)
    config.add("target_cpu", target.cpu)
    # dSYMs are off even for host tools built during a cross build
    config.add("enable_dsyms", False)

    OVERLAYS[target.os](config, target, context)

    logger.debug(f"GN args for {target}: {config.to_gn_args()}")
    return config
