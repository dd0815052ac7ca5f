"""
Debian sysroot provisioning for Linux targets.

Chromium publishes its sysroots in a manifest (sysroots.json) that maps a
``<release>_<arch>`` key to the archive's hash, file name and URL. This
module reads that manifest and stages the sysroot at the location GN expects
(``build/linux/debian_<release>_<arch>-sysroot``) when it is not already
there.
"""

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from cronetkit.core.context import BuildContext
from cronetkit.core.download import download_file
from cronetkit.core.exceptions import ManifestError, ProvisioningError
from cronetkit.core.filesystem import extract_archive

logger = logging.getLogger(__name__)

# GN target_cpu -> Debian architecture
SYSROOT_ARCH = {
    "x64": "amd64",
    "arm64": "arm64",
    "x86": "i386",
    "arm": "armhf",
}


@dataclass(frozen=True)
class SysrootDescriptor:
    """
    One manifest entry.

    Attributes:
        key: Manifest key, e.g. 'bullseye_amd64'
        sha256: Expected SHA-256 of the archive
        sysroot_dir: Directory name the archive is extracted into
        tarball: Archive file name
        url: Base URL; the archive lives at <url>/<sha256>
    """

    key: str
    sha256: str
    sysroot_dir: str
    tarball: str
    url: str

    @property
    def download_url(self) -> str:
        return f"{self.url}/{self.sha256}"


def load_sysroot_manifest(manifest_path: Path) -> Dict[str, SysrootDescriptor]:
    """
    Read sysroots.json into descriptors keyed by manifest key.

    Raises:
        ManifestError: If the manifest is missing, malformed, or an entry
            lacks one of the required fields
    """
    try:
        data = json.loads(Path(manifest_path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ManifestError(f"Sysroot manifest not found: {manifest_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Failed to read {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Sysroot manifest must be an object: {manifest_path}")

    descriptors = {}
    for key, entry in data.items():
        try:
            descriptors[key] = SysrootDescriptor(
                key=key,
                sha256=entry["Sha256Sum"],
                sysroot_dir=entry["SysrootDir"],
                tarball=entry["Tarball"],
                url=entry["URL"],
            )
        except (KeyError, TypeError) as e:
            raise ManifestError(f"Malformed sysroot entry '{key}': {e}") from e

    return descriptors


class SysrootProvisioner:
    """Stage Debian sysroots under the Chromium source tree."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.settings = context.config.sysroot
        self.linux_dir = context.src_root / "build" / "linux"

    def sysroot_arch(self, cpu: str) -> str:
        try:
            return SYSROOT_ARCH[cpu]
        except KeyError:
            raise ProvisioningError(f"Unsupported Linux arch for sysroot: {cpu}")

    def manifest_key(self, cpu: str) -> str:
        return f"{self.settings.release}_{self.sysroot_arch(cpu)}"

    def sysroot_path(self, cpu: str) -> Path:
        """Conventional location GN looks for the sysroot of ``cpu``."""
        arch = self.sysroot_arch(cpu)
        return self.linux_dir / f"debian_{self.settings.release}_{arch}-sysroot"

    def staging_path(self, cpu: str) -> Path:
        """Where the toolchain fetch script stages the sysroot of ``cpu``."""
        return (
            self.context.src_root
            / self.settings.staging_dir
            / f"{self.manifest_key(cpu)}_staging"
        )

    def ensure(self, cpu: str) -> Path:
        """
        Make sure the sysroot for ``cpu`` is staged.

        Returns immediately when the sysroot directory already exists.

        Returns:
            Path to the sysroot directory

        Raises:
            ManifestError: If the manifest has no entry for this architecture
            DownloadError: If the archive cannot be fetched
            ChecksumError: If the archive does not match the manifest hash
            ArchiveExtractionError: If the archive cannot be unpacked; the
                partially extracted directory is removed
        """
        sysroot_dir = self.sysroot_path(cpu)

        if sysroot_dir.exists():
            logger.info(f"Sysroot already exists: {sysroot_dir}")
            return sysroot_dir

        key = self.manifest_key(cpu)
        manifest = load_sysroot_manifest(self.context.src_root / self.settings.manifest)
        if key not in manifest:
            raise ManifestError(f"Sysroot not found in manifest: {key}")
        descriptor = manifest[key]

        logger.info(f"Downloading sysroot from {descriptor.download_url}...")
        archive_path = self.linux_dir / descriptor.tarball
        download_file(
            descriptor.download_url, archive_path, expected_sha256=descriptor.sha256
        )

        logger.info("Extracting sysroot...")
        extract_dir = self.linux_dir / descriptor.sysroot_dir
        try:
            extract_archive(archive_path, extract_dir)
        except Exception:
            # Never leave a partial tree at the sysroot location
            shutil.rmtree(extract_dir, ignore_errors=True)
            raise
        finally:
            archive_path.unlink(missing_ok=True)

        logger.info(f"Sysroot installed: {sysroot_dir}")
        return sysroot_dir
