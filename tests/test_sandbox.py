"""Tests for the sandboxed DirsProvider."""

from pathlib import Path

import pytest
from cfgstore.sandbox import SandboxDirs


class TestSandboxDirs:
    """Test SandboxDirs layouts."""

    @pytest.mark.parametrize(
        ("platform", "home", "config", "cache"),
        [
            ("linux", "home/alice", "home/alice/.config", "home/alice/.cache"),
            ("darwin", "Users/alice", "Users/alice/Library/Application Support", "Users/alice/Library/Caches"),
            ("win32", "Users/alice", "Users/alice/AppData/Roaming", "Users/alice/AppData/Local"),
        ],
    )
    def test_per_platform_layout(self, tmp_path, platform, home, config, cache):
        sandbox = SandboxDirs(root=tmp_path, username="alice", platform=platform)
        provider = sandbox.provider()

        assert provider.user_home_dir() == tmp_path / home
        assert provider.user_config_dir() == tmp_path / config
        assert provider.user_cache_dir() == tmp_path / cache

    def test_project_and_working_dir(self, tmp_path):
        sandbox = SandboxDirs(root=tmp_path, project_dir="work/app")
        provider = sandbox.provider()

        assert provider.project_dir() == tmp_path / "work" / "app"
        assert provider.getwd() == tmp_path / "work" / "app"

    def test_unknown_platform_uses_linux_layout(self, tmp_path):
        sandbox = SandboxDirs(root=tmp_path, username="alice", platform="freebsd13")
        assert sandbox.home() == tmp_path / "home" / "alice"

    def test_root_accepts_strings(self, tmp_path):
        sandbox = SandboxDirs(root=str(tmp_path))  # type: ignore[arg-type]
        assert isinstance(sandbox.root, Path)

    def test_empty_username_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="required"):
            SandboxDirs(root=tmp_path, username="")

    @pytest.mark.parametrize("username", ["a/b", "a\\b"])
    def test_username_with_slash_rejected(self, tmp_path, username):
        with pytest.raises(ValueError, match="slashes"):
            SandboxDirs(root=tmp_path, username=username)
