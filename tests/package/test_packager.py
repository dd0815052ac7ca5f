"""
Tests for packaging built libraries into the Go module.
"""

import logging

import pytest
from unittest.mock import patch

from cronetkit.build.invoker import BuildInvoker
from cronetkit.core.exceptions import LibraryNotFoundError, PackagingError
from cronetkit.core.filesystem import FilesystemError
from cronetkit.cross.targets import find_target, resolve_targets
from cronetkit.package.packager import HEADERS, Packager


@pytest.fixture
def headers(context):
    for header in HEADERS:
        path = context.src_root / header
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"/* {path.name} */\n")


def _build_library(context, target, data=b"!<arch>\n"):
    library = BuildInvoker(context).library_path(target)
    library.parent.mkdir(parents=True, exist_ok=True)
    library.write_bytes(data)
    return library


class TestPackage:
    """Tests for Packager.package()."""

    def test_present_and_missing_library(self, context, headers, caplog):
        """Test one built and one unbuilt target."""
        targets = resolve_targets("linux/amd64,darwin/arm64")
        _build_library(context, targets[0])
        root = context.project_root

        with caplog.at_level(logging.WARNING):
            report = Packager(context).package(targets)

        assert (root / "lib" / "linux_amd64" / "libcronet.a").read_bytes() == (
            b"!<arch>\n"
        )
        assert (root / "lib" / "darwin_arm64").is_dir()
        assert not (root / "lib" / "darwin_arm64" / "libcronet.a").exists()
        assert (root / "cgo_linux_amd64.go").exists()
        assert (root / "cgo_darwin_arm64.go").exists()

        assert [t.name for t in report.succeeded] == ["linux/amd64"]
        assert isinstance(report.failed[0].error, LibraryNotFoundError)
        assert "Library not found for darwin/arm64, skipping" in caplog.text

    def test_headers_copied_flat(self, context, headers):
        Packager(context).package([])

        include = context.project_root / "include"
        assert sorted(p.name for p in include.iterdir()) == [
            "bidirectional_stream_c.h",
            "cronet.idl_c.h",
            "cronet_c.h",
            "cronet_export.h",
        ]

    def test_include_reset_lib_kept(self, context, headers):
        """Test stale headers are removed but other targets' libraries stay."""
        include = context.project_root / "include"
        include.mkdir()
        (include / "stale.h").write_text("old")
        other = context.project_root / "lib" / "windows_amd64" / "libcronet.a"
        other.parent.mkdir(parents=True)
        other.write_bytes(b"win")

        Packager(context).package(resolve_targets("linux/arm64"))

        assert not (include / "stale.h").exists()
        assert other.read_bytes() == b"win"

    def test_missing_header_fails(self, context):
        with pytest.raises(PackagingError, match="cronet_c.h"):
            Packager(context).package(resolve_targets("linux/amd64"))

    def test_unexpected_copy_error_propagates(self, context, headers):
        target = find_target("linux", "amd64")
        _build_library(context, target)

        with patch(
            "cronetkit.package.packager.copy_file",
            side_effect=[None] * len(HEADERS) + [FilesystemError("disk full")],
        ):
            with pytest.raises(FilesystemError, match="disk full"):
                Packager(context).package([target])

    def test_descriptor_content(self, context, headers):
        Packager(context).package(resolve_targets("android/arm64"))

        content = (context.project_root / "cgo_android_arm64.go").read_text()
        assert content.startswith("//go:build android && arm64\n")
        assert "-L${SRCDIR}/lib/android_arm64" in content


class TestCopyLibrary:
    def test_missing_library(self, context):
        target = find_target("ios", "arm64")

        with pytest.raises(LibraryNotFoundError) as exc_info:
            Packager(context).copy_library(target)

        assert exc_info.value.target_name == "ios/arm64"
        assert (context.project_root / "lib" / "ios_arm64").is_dir()

    def test_custom_library_name(self, context):
        context.config.package.library_name = "naive"
        target = find_target("linux", "arm64")
        _build_library(context, target)

        destination = Packager(context).copy_library(target)

        assert destination.name == "libnaive.a"
