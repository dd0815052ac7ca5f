"""
File system utilities for cronetkit.

This module provides the file operations the pipeline performs on staging
and output directories:
- Archive extraction (tar.gz, tar.xz, tar.bz2, tar, zip) with traversal checks
- Idempotent symlink creation
- Directory reset and single-file copy
- Atomic writes for generated files
"""

import os
import shutil
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Union

from cronetkit.core.exceptions import CronetKitError


# ============================================================================
# Error Handling
# ============================================================================


class FilesystemError(CronetKitError):
    """Base exception for filesystem operations."""

    pass


class LinkCreationError(FilesystemError):
    """Failed to create a symbolic link."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Links
# ============================================================================


def create_link(source: Union[str, Path], link: Union[str, Path]) -> bool:
    """
    Create a symbolic link at ``link`` pointing to ``source``.

    Nothing is done when something (including a dangling symlink) already
    occupies ``link``; an existing link is never replaced.

    Args:
        source: Path to the actual directory/file (link target)
        link: Path where the link should be created

    Returns:
        True if a link was created, False if the path was already taken

    Raises:
        LinkCreationError: If the operating system refuses to create the link

    Example:
        >>> create_link(ndk / "toolchains" / "llvm" / "prebuilt",
        ...             src / "third_party/android_toolchain/ndk/toolchains/llvm/prebuilt")
        True
    """
    source = Path(source)
    link = Path(link)

    if link.exists() or link.is_symlink():
        return False

    link.parent.mkdir(parents=True, exist_ok=True)

    try:
        os.symlink(source, link, target_is_directory=source.is_dir())
    except OSError as e:
        raise LinkCreationError(f"Failed to link {link} -> {source}: {e}") from e

    return True


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not member_path.is_relative_to(destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
) -> None:
    """
    Extract an archive to a destination directory.

    Supported formats: .zip, .tar.gz/.tgz, .tar.xz, .tar.bz2, .tar

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to (created if missing)

    Raises:
        UnsupportedArchiveFormat: If archive format is not recognized
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    archive_name = archive_path.name.lower()

    try:
        if archive_name.endswith(".zip"):
            _extract_zip(archive_path, destination)
        elif archive_name.endswith((".tar.gz", ".tgz")):
            _extract_tar(archive_path, destination, "r:gz")
        elif archive_name.endswith(".tar.xz"):
            _extract_tar(archive_path, destination, "r:xz")
        elif archive_name.endswith((".tar.bz2", ".tbz2")):
            _extract_tar(archive_path, destination, "r:bz2")
        elif archive_name.endswith(".tar"):
            _extract_tar(archive_path, destination, "r:")
        else:
            raise UnsupportedArchiveFormat(
                f"Unsupported archive format: {archive_path.suffix}. "
                "Supported: .zip, .tar.gz, .tar.xz, .tar.bz2, .tar"
            )
    except (InsecureArchiveError, UnsupportedArchiveFormat):
        raise
    except (OSError, tarfile.TarError, zipfile.BadZipFile) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e


def _extract_zip(archive_path: Path, destination: Path) -> None:
    """Extract a ZIP archive."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.namelist()

        for member in members:
            _validate_archive_path(member, destination)

        zf.extractall(destination)


def _extract_tar(archive_path: Path, destination: Path, mode: str) -> None:
    """Extract a tar archive with specified compression."""
    with tarfile.open(archive_path, mode) as tar:
        for member in tar.getmembers():
            _validate_archive_path(member.name, destination)

        # Sysroots contain absolute symlinks, which the "data" filter refuses
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="tar")
        else:
            tar.extractall(destination)


# ============================================================================
# Directories and Files
# ============================================================================


def reset_directory(path: Union[str, Path]) -> Path:
    """Delete ``path`` (if present) and recreate it empty."""
    path = Path(path)

    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)

    path.mkdir(parents=True)
    return path


def copy_file(source: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Copy a single file, creating the destination's parent directories.

    Raises:
        FilesystemError: If the source is missing or the copy fails
    """
    source = Path(source)
    destination = Path(destination)

    if not source.is_file():
        raise FilesystemError(f"Source file does not exist: {source}")

    destination.parent.mkdir(parents=True, exist_ok=True)

    try:
        shutil.copyfile(source, destination)
    except OSError as e:
        raise FilesystemError(f"Failed to copy {source} to {destination}: {e}") from e

    return destination


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never observed in a partially-written state.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding, newline="\n") as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
