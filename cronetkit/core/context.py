"""
Immutable build context.

A BuildContext is constructed once at startup and passed to every component.
It carries the resolved project layout, the parsed configuration and the host
platform, so components never consult process-wide path state and tests can
point them at a temporary directory.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from cronetkit.config.parser import CONFIG_FILENAME, CronetKitConfig, load_config
from cronetkit.core.exceptions import ProjectRootNotFoundError
from cronetkit.core.platform import PlatformInfo, detect_platform

logger = logging.getLogger(__name__)

ROOT_MARKER = "go.mod"


def find_project_root(start: Optional[Path] = None) -> Path:
    """
    Walk up from ``start`` to the first directory containing go.mod.

    Raises:
        ProjectRootNotFoundError: If no ancestor contains go.mod
    """
    start = (start or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        if (directory / ROOT_MARKER).is_file():
            return directory

    raise ProjectRootNotFoundError(str(start))


@dataclass(frozen=True)
class BuildContext:
    """
    Resolved paths, configuration and host identity for one invocation.

    Attributes:
        project_root: Directory containing go.mod; packaged output lands here
        config: Parsed cronetkit.yaml (or defaults)
        host: Platform the tool is running on
    """

    project_root: Path
    config: CronetKitConfig = field(default_factory=CronetKitConfig)
    host: PlatformInfo = field(default_factory=detect_platform)

    @classmethod
    def discover(
        cls,
        start: Optional[Path] = None,
        config_path: Optional[Path] = None,
    ) -> "BuildContext":
        """
        Locate the project root and load its configuration.

        Args:
            start: Directory to search upwards from (default: cwd)
            config_path: Explicit config file; defaults to <root>/cronetkit.yaml
        """
        project_root = find_project_root(start)
        config = load_config(config_path or project_root / CONFIG_FILENAME)
        logger.debug(f"Project root: {project_root}")
        return cls(project_root=project_root, config=config)

    @property
    def naive_root(self) -> Path:
        return self.project_root / self.config.source.naive_dir

    @property
    def src_root(self) -> Path:
        return self.naive_root / "src"
