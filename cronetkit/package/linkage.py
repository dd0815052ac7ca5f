"""
cgo linkage descriptors.

Each packaged target gets a ``cgo_<goos>_<goarch>.go`` file in the project
root. Its build constraint restricts it to that platform, and its cgo
directives point the Go toolchain at the target's library directory, the
shared headers and the system libraries the static library depends on.
"""

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader, TemplateError

from cronetkit.config.parser import PackageConfig
from cronetkit.core.exceptions import PackagingError
from cronetkit.cross.targets import ALL_TARGETS, Target

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
CGO_TEMPLATE = "cgo.go.j2"

_APPLE_FRAMEWORKS = (
    "-framework Security",
    "-framework CoreFoundation",
    "-framework SystemConfiguration",
    "-framework Network",
)

# Extra link flags per GOOS, appended after the library itself
SYSTEM_LINK_FLAGS: Dict[str, Tuple[str, ...]] = {
    "linux": ("-ldl", "-lpthread", "-lm", "-lresolv"),
    "darwin": _APPLE_FRAMEWORKS
    + (
        "-framework AppKit",
        "-framework CFNetwork",
        "-framework UniformTypeIdentifiers",
    ),
    "windows": ("-lws2_32", "-lcrypt32", "-lsecur32", "-ladvapi32", "-lwinhttp"),
    "android": ("-ldl", "-llog", "-landroid"),
    "ios": _APPLE_FRAMEWORKS + ("-framework UIKit",),
}

_missing = {t.goos for t in ALL_TARGETS} - set(SYSTEM_LINK_FLAGS)
if _missing:
    raise RuntimeError(f"No link flags for: {sorted(_missing)}")


@functools.lru_cache(maxsize=1)
def _jinja_env() -> Environment:
    """Jinja2 environment over the bundled templates."""
    logger.debug(f"Jinja2 templates initialized from: {TEMPLATE_DIR}")
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


@dataclass(frozen=True)
class LinkageDescriptor:
    """Link configuration a cgo consumer needs for one target."""

    target: Target
    search_path: str
    libraries: Tuple[str, ...]
    flags: Tuple[str, ...]
    package: str = "cronet"
    include_dir: str = "include"

    @property
    def filename(self) -> str:
        return f"cgo_{self.target.goos}_{self.target.goarch}.go"

    @property
    def ldflags(self) -> List[str]:
        return (
            [f"-L{self.search_path}"]
            + [f"-l{lib}" for lib in self.libraries]
            + list(self.flags)
        )

    def render(self) -> str:
        """
        Render the cgo source file for this target.

        Raises:
            PackagingError: If the template cannot be loaded or rendered
        """
        try:
            template = _jinja_env().get_template(CGO_TEMPLATE)
            return template.render(
                goos=self.target.goos,
                goarch=self.target.goarch,
                package=self.package,
                include_dir=self.include_dir,
                ldflags=self.ldflags,
            )
        except TemplateError as e:
            raise PackagingError(f"Failed to render {self.filename}: {e}") from e


def build_descriptor(target: Target, settings: PackageConfig) -> LinkageDescriptor:
    """Describe how to link the packaged library for ``target``."""
    return LinkageDescriptor(
        target=target,
        search_path=f"${{SRCDIR}}/{settings.lib_dir}/{target.lib_dir_name}",
        libraries=(settings.library_name, "c++"),
        flags=SYSTEM_LINK_FLAGS[target.goos],
        package=settings.go_package,
        include_dir=settings.include_dir,
    )
