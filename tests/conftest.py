"""
Pytest configuration and shared fixtures for cronetkit tests.
"""

import pytest
import tempfile
from pathlib import Path
from typing import Generator

from cronetkit.config.parser import CronetKitConfig
from cronetkit.core.context import BuildContext
from cronetkit.core.platform import PlatformInfo


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_workspace(temp_dir: Path) -> Path:
    """Create a Go module workspace with an embedded naiveproxy checkout."""
    workspace = temp_dir / "workspace"
    workspace.mkdir()

    (workspace / "go.mod").write_text("module example.com/cronet\n\ngo 1.22\n")
    (workspace / "naiveproxy" / "src").mkdir(parents=True)
    (workspace / "naiveproxy" / "CHROMIUM_VERSION").write_text("131.0.6778.86\n")

    return workspace


@pytest.fixture
def linux_host() -> PlatformInfo:
    return PlatformInfo(os="linux", arch="amd64")


@pytest.fixture
def context(temp_workspace: Path, linux_host: PlatformInfo) -> BuildContext:
    """BuildContext for temp_workspace on a linux/amd64 host with defaults."""
    return BuildContext(
        project_root=temp_workspace, config=CronetKitConfig(), host=linux_host
    )


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = temp_dir / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    for var in ("ANDROID_HOME", "ANDROID_SDK_ROOT", "LOCALAPPDATA"):
        monkeypatch.delenv(var, raising=False)

    return fake_home
