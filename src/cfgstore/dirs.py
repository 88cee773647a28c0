"""Swappable OS directory lookups.

Production code uses the real OS answers; tests substitute a provider whose
answers all live in a sandbox (see ``cfgstore.sandbox``).
"""

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_cache_path
from platformdirs import user_config_path

DirFunc = Callable[[], Path]


def _user_config_dir() -> Path:
    # Roaming so Windows answers %APPDATA% rather than %LOCALAPPDATA%
    return user_config_path(roaming=True)


def _user_cache_dir() -> Path:
    return user_cache_path()


@dataclass
class DirsProvider:
    """Bundle of directory lookup functions.

    Each field can be replaced independently before the provider is first
    used. A provider may be shared read-only by any number of stores.

    Attributes:
        user_home_dir: Current user's home directory
        getwd: Current working directory
        project_dir: Root of the current project (working directory by default)
        user_config_dir: OS-native user config directory
            (``$XDG_CONFIG_HOME`` or ``~/.config`` on Linux,
            ``~/Library/Application Support`` on macOS, ``%APPDATA%`` on Windows)
        user_cache_dir: OS-native user cache directory
    """

    user_home_dir: DirFunc = Path.home
    getwd: DirFunc = Path.cwd
    project_dir: DirFunc = Path.cwd
    user_config_dir: DirFunc = _user_config_dir
    user_cache_dir: DirFunc = _user_cache_dir

    def with_project_dir(self, path: Path | str) -> "DirsProvider":
        """Return a copy whose project directory is always ``path``."""
        fixed = Path(path)
        return dataclasses.replace(self, project_dir=lambda: fixed)


def default_dirs_provider() -> DirsProvider:
    """Create a provider backed by real OS lookups."""
    return DirsProvider()
