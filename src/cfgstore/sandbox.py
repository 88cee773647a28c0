"""Sandboxed directory lookups for tests.

``SandboxDirs`` builds a DirsProvider whose every answer lives under one root
directory while keeping the per-OS layout of home, config and cache
directories, so code under test never touches real user directories.

Example:
    ```python
    sandbox = SandboxDirs(root=tmp_path, username="alice", project_dir="work/app")
    stores = ConfigStoreSet("acme", "config.json", dirs=sandbox.provider())
    ```
"""

import sys
from dataclasses import dataclass
from pathlib import Path

from .dirs import DirsProvider

_HOME_PARENTS = {"linux": "home", "darwin": "Users", "win32": "Users"}
_CONFIG_DIRS = {"linux": ".config", "darwin": "Library/Application Support", "win32": "AppData/Roaming"}
_CACHE_DIRS = {"linux": ".cache", "darwin": "Library/Caches", "win32": "AppData/Local"}


@dataclass
class SandboxDirs:
    """Sandbox layout for a fake user.

    Attributes:
        root: Directory everything is placed under
        username: Fake user name; one path segment, not empty
        project_dir: Project directory, relative to root
        platform: Layout to mimic (default: ``sys.platform``)
    """

    root: Path
    username: str = "testuser"
    project_dir: str = "project"
    platform: str | None = None

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if not self.username:
            raise ValueError("username is required")
        if "/" in self.username or "\\" in self.username:
            raise ValueError("username cannot contain slashes ('\\' or '/')")

    @property
    def _layout(self) -> str:
        platform = self.platform or sys.platform
        if platform.startswith("linux"):
            return "linux"
        if platform in _HOME_PARENTS:
            return platform
        return "linux"

    def home(self) -> Path:
        return self.root / _HOME_PARENTS[self._layout] / self.username

    def user_config_dir(self) -> Path:
        return self.home() / _CONFIG_DIRS[self._layout]

    def user_cache_dir(self) -> Path:
        return self.home() / _CACHE_DIRS[self._layout]

    def project(self) -> Path:
        return self.root / self.project_dir

    def provider(self) -> DirsProvider:
        """Create a DirsProvider answering from this sandbox."""
        return DirsProvider(
            user_home_dir=self.home,
            getwd=self.project,
            project_dir=self.project,
            user_config_dir=self.user_config_dir,
            user_cache_dir=self.user_cache_dir,
        )
