"""
Chromium component sync.

naiveproxy carries a trimmed Chromium tree without the cronet sources. This
module downloads the missing components for the pinned Chromium version
(``CHROMIUM_VERSION``) from the googlesource tarball archive and commits them
to the naiveproxy checkout.
"""

import logging
import tempfile
from pathlib import Path
from typing import List

from cronetkit.core.context import BuildContext
from cronetkit.core.download import download_file
from cronetkit.core.exceptions import ConfigurationError
from cronetkit.core.filesystem import extract_archive, reset_directory
from cronetkit.core.process import run_command, run_command_output

logger = logging.getLogger(__name__)

COMMIT_TEMPLATE = """\
Add Chromium cronet components (v{version})

Downloaded from Chromium source:
{components}

Use 'cronetkit sync' to re-download."""


class ComponentSync:
    """Download cronet's Chromium components into the naiveproxy tree."""

    def __init__(self, context: BuildContext):
        self.context = context
        self.settings = context.config.sync

    def chromium_version(self) -> str:
        version_file = self.context.naive_root / "CHROMIUM_VERSION"
        try:
            return version_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigurationError(f"Failed to read {version_file}: {e}") from e

    def component_paths(self) -> List[str]:
        """Component directories relative to the naiveproxy root."""
        return [f"src/components/{name}" for name in self.settings.components]

    def is_up_to_date(self) -> bool:
        """True when the first component exists and has no local changes."""
        if not self.settings.components:
            return True

        first = self.component_paths()[0]
        if not (self.context.naive_root / first).exists():
            return False

        status = run_command_output(
            ["git", "status", "--porcelain", first], cwd=self.context.naive_root
        )
        return status.strip() == ""

    def fetch_component(self, version: str, name: str) -> Path:
        url = self.settings.url_template.format(version=version, name=name)
        dest_dir = reset_directory(self.context.src_root / "components" / name)

        with tempfile.TemporaryDirectory(prefix="cronetkit_") as tmp:
            archive = download_file(url, Path(tmp) / f"{name}.tar.gz")
            extract_archive(archive, dest_dir)

        return dest_dir

    def sync(self) -> bool:
        """
        Download and commit the components unless already present.

        Returns:
            True if components were downloaded, False if already up to date
        """
        logger.info("Syncing Chromium cronet components...")

        version = self.chromium_version()
        logger.info(f"Chromium version: {version}")

        if self.is_up_to_date():
            logger.info("Components already up to date")
            return False

        for name in self.settings.components:
            logger.info(f"Downloading {name}...")
            self.fetch_component(version, name)
            logger.info(f"Downloaded {name}")

        logger.info("Creating git commit...")
        paths = self.component_paths()
        run_command(["git", "add", *paths], cwd=self.context.naive_root)

        components = "\n".join(
            f"- components/{name}/" for name in self.settings.components
        )
        message = COMMIT_TEMPLATE.format(version=version, components=components)
        run_command(["git", "commit", "-m", message], cwd=self.context.naive_root)

        logger.info("Sync complete!")
        return True
