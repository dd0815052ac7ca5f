"""
Tests for project root discovery and BuildContext.
"""

import pytest

from cronetkit.config.parser import CronetKitConfig
from cronetkit.core.context import BuildContext, find_project_root
from cronetkit.core.exceptions import ConfigError, ProjectRootNotFoundError


class TestFindProjectRoot:
    """Tests for find_project_root()."""

    def test_from_root(self, temp_workspace):
        assert find_project_root(temp_workspace) == temp_workspace.resolve()

    def test_from_subdirectory(self, temp_workspace):
        nested = temp_workspace / "naiveproxy" / "src"
        assert find_project_root(nested) == temp_workspace.resolve()

    def test_not_found(self, temp_dir):
        orphan = temp_dir / "orphan"
        orphan.mkdir()

        with pytest.raises(ProjectRootNotFoundError):
            find_project_root(orphan)

    def test_defaults_to_cwd(self, temp_workspace, monkeypatch):
        monkeypatch.chdir(temp_workspace / "naiveproxy")
        assert find_project_root() == temp_workspace.resolve()


class TestBuildContext:
    """Tests for BuildContext."""

    def test_paths(self, context, temp_workspace):
        assert context.naive_root == temp_workspace / "naiveproxy"
        assert context.src_root == temp_workspace / "naiveproxy" / "src"

    def test_custom_naive_dir(self, temp_workspace, linux_host):
        config = CronetKitConfig()
        config.source.naive_dir = "third_party/naive"
        context = BuildContext(temp_workspace, config, linux_host)

        assert context.src_root == temp_workspace / "third_party" / "naive" / "src"

    def test_immutable(self, context, temp_dir):
        with pytest.raises(AttributeError):
            context.project_root = temp_dir

    def test_discover_without_config(self, temp_workspace):
        context = BuildContext.discover(temp_workspace / "naiveproxy")

        assert context.project_root == temp_workspace.resolve()
        assert context.config == CronetKitConfig()

    def test_discover_reads_config(self, temp_workspace):
        (temp_workspace / "cronetkit.yaml").write_text(
            "android:\n  min_sdk_version: 26\n"
        )

        context = BuildContext.discover(temp_workspace)

        assert context.config.android.min_sdk_version == 26

    def test_discover_explicit_config(self, temp_workspace, temp_dir):
        config_file = temp_dir / "alt.yaml"
        config_file.write_text("build:\n  ninja: /opt/ninja\n")

        context = BuildContext.discover(temp_workspace, config_path=config_file)

        assert context.config.build.ninja == "/opt/ninja"

    def test_discover_invalid_config(self, temp_workspace):
        (temp_workspace / "cronetkit.yaml").write_text("bogus: {}\n")

        with pytest.raises(ConfigError):
            BuildContext.discover(temp_workspace)
