"""
Android NDK provisioning.

GN expects the NDK at ``third_party/android_toolchain/ndk`` inside the
Chromium tree. Rather than downloading it, the provisioner borrows the NDK
from a local Android SDK installation and links the two subtrees the build
uses: the cpufeatures helper sources and the prebuilt LLVM toolchain.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from cronetkit.core.context import BuildContext
from cronetkit.core.exceptions import ProvisioningError
from cronetkit.core.filesystem import create_link
from cronetkit.core.process import run_command

logger = logging.getLogger(__name__)


def default_sdk_root(host_os: str) -> Path:
    """Default Android Studio SDK location for a host OS (GOOS naming)."""
    home = Path.home()
    if host_os == "darwin":
        return home / "Library" / "Android" / "sdk"
    if host_os == "windows":
        local_appdata = os.environ.get("LOCALAPPDATA")
        base = Path(local_appdata) if local_appdata else home / "AppData" / "Local"
        return base / "Android" / "Sdk"
    return home / "Android" / "Sdk"


class AndroidNDKProvisioner:
    """Link a locally installed NDK into the Chromium source tree."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.settings = context.config.android
        self.ndk_dir = context.src_root / "third_party" / "android_toolchain" / "ndk"

    @property
    def sdk_root(self) -> Path:
        """
        Android SDK root.

        Resolution order: android.sdk_root in cronetkit.yaml, $ANDROID_HOME,
        $ANDROID_SDK_ROOT, then the platform's Android Studio default.
        """
        if self.settings.sdk_root:
            return Path(self.settings.sdk_root).expanduser()
        for var in ("ANDROID_HOME", "ANDROID_SDK_ROOT"):
            value = os.environ.get(var)
            if value:
                return Path(value)
        return default_sdk_root(self.context.host.os)

    @property
    def sdkmanager_path(self) -> Path:
        name = "sdkmanager.bat" if self.context.host.os == "windows" else "sdkmanager"
        return self.sdk_root / "cmdline-tools" / "latest" / "bin" / name

    def find_local_ndk(self) -> Optional[Path]:
        """Return the first installed NDK matching the pinned major version."""
        ndk_base = self.sdk_root / "ndk"
        if not ndk_base.is_dir():
            return None

        prefix = f"{self.settings.ndk_major_version}."
        for entry in sorted(ndk_base.iterdir()):
            if entry.is_dir() and entry.name.startswith(prefix):
                return entry
        return None

    def install_ndk(self) -> Path:
        """
        Install the pinned NDK through sdkmanager.

        Raises:
            ProvisioningError: If sdkmanager is not available
            ExternalToolError: If sdkmanager fails
        """
        version = self.settings.ndk_version
        sdkmanager = self.sdkmanager_path

        if not sdkmanager.exists():
            raise ProvisioningError(
                f"Android NDK r{self.settings.ndk_major_version} not found in "
                f"{self.sdk_root} and sdkmanager is not available. Install NDK "
                f"{version} via Android Studio (SDK Manager > SDK Tools > NDK) "
                "or set android.sdk_root / ANDROID_HOME."
            )

        logger.info(f"Installing Android NDK {version} via sdkmanager...")
        run_command([sdkmanager, "--install", f"ndk;{version}"], cwd=self.sdk_root)
        return self.sdk_root / "ndk" / version

    def ensure(self) -> Path:
        """
        Make the NDK layout GN expects available.

        Returns:
            Path to the NDK directory inside the source tree
        """
        if (self.ndk_dir / "toolchains").exists():
            logger.info("Android NDK already configured")
            return self.ndk_dir

        local_ndk = self.find_local_ndk() or self.install_ndk()
        logger.info(f"Using Android NDK from: {local_ndk}")

        (self.ndk_dir / "sources" / "android").mkdir(parents=True, exist_ok=True)
        (self.ndk_dir / "toolchains" / "llvm").mkdir(parents=True, exist_ok=True)

        create_link(
            local_ndk / "sources" / "android" / "cpufeatures",
            self.ndk_dir / "sources" / "android" / "cpufeatures",
        )
        create_link(
            local_ndk / "toolchains" / "llvm" / "prebuilt",
            self.ndk_dir / "toolchains" / "llvm" / "prebuilt",
        )

        logger.info(f"Android NDK configured at: {self.ndk_dir}")
        return self.ndk_dir
