"""
Packaging of built libraries for the Go module.

Output layout under the project root::

    include/                     shared C headers (reset on every run)
    lib/<goos>_<goarch>/libcronet.a
    cgo_<goos>_<goarch>.go       one linkage descriptor per target

Packaging is best-effort per target: a missing library is reported and the
target skipped, while descriptors are written for every requested target.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from cronetkit.build.invoker import BuildInvoker
from cronetkit.build.results import PipelineReport, run_collect_all
from cronetkit.core.context import BuildContext
from cronetkit.core.exceptions import LibraryNotFoundError, PackagingError
from cronetkit.core.filesystem import (
    FilesystemError,
    atomic_write,
    copy_file,
    reset_directory,
)
from cronetkit.cross.targets import Target
from cronetkit.package.linkage import LinkageDescriptor, build_descriptor

logger = logging.getLogger(__name__)

# Source-root relative header paths; copied flat into include/
HEADERS = (
    "components/cronet/native/include/cronet_c.h",
    "components/cronet/native/include/cronet_export.h",
    "components/cronet/native/generated/cronet.idl_c.h",
    "components/grpc_support/include/bidirectional_stream_c.h",
)


class Packager:
    """Copy build outputs into the Go module and emit cgo descriptors."""

    def __init__(self, context: BuildContext, invoker: Optional[BuildInvoker] = None):
        self.context = context
        self.settings = context.config.package
        self.invoker = invoker or BuildInvoker(context)

    @property
    def lib_dir(self) -> Path:
        return self.context.project_root / self.settings.lib_dir

    @property
    def include_dir(self) -> Path:
        return self.context.project_root / self.settings.include_dir

    @property
    def library_filename(self) -> str:
        return f"lib{self.settings.library_name}.a"

    def copy_headers(self) -> None:
        reset_directory(self.include_dir)

        for header in HEADERS:
            source = self.context.src_root / header
            try:
                copy_file(source, self.include_dir / Path(header).name)
            except FilesystemError as e:
                raise PackagingError(f"Failed to copy header {header}: {e}") from e

        logger.info(f"Copied headers to {self.settings.include_dir}/")

    def copy_library(self, target: Target) -> Path:
        """
        Copy the built library of ``target`` into its lib directory.

        Raises:
            LibraryNotFoundError: If the target has not been built
        """
        target_dir = self.lib_dir / target.lib_dir_name
        target_dir.mkdir(parents=True, exist_ok=True)

        source = self.invoker.library_path(target)
        if not source.is_file():
            raise LibraryNotFoundError(target.name, source)

        destination = copy_file(source, target_dir / self.library_filename)
        logger.info(f"Copied library for {target}")
        return destination

    def write_descriptors(self, targets: Sequence[Target]) -> List[LinkageDescriptor]:
        descriptors = []
        for target in targets:
            descriptor = build_descriptor(target, self.settings)
            atomic_write(
                self.context.project_root / descriptor.filename, descriptor.render()
            )
            logger.info(f"Generated {descriptor.filename}")
            descriptors.append(descriptor)
        return descriptors

    def package(self, targets: Sequence[Target]) -> PipelineReport:
        """
        Package every target in ``targets``.

        Returns:
            Report with one result per target; missing libraries appear as
            failed results carrying LibraryNotFoundError

        Raises:
            PackagingError: If the shared headers cannot be copied
        """
        logger.info(f"Packaging libraries for {len(targets)} target(s)")

        self.copy_headers()

        report = run_collect_all(targets, self.copy_library)
        for result in report.failed:
            if not isinstance(result.error, LibraryNotFoundError):
                raise result.error
            logger.warning(f"Library not found for {result.target}, skipping")

        self.write_descriptors(targets)

        logger.info(f"Package complete! ({report.summary()})")
        return report
