"""Directory resolution for configuration and cache directories.

Maps a directory kind and slug onto an absolute directory path:

| Kind           | Linux                      | macOS / Windows / other    |
|----------------|----------------------------|----------------------------|
| CLI_CONFIG     | <user-config-dir>/<slug>   | <home>/.config/<slug>      |
| APP_CONFIG     | <user-config-dir>/<slug>   | <user-config-dir>/<slug>   |
| PROJECT_CONFIG | <project-dir>/.<slug>      | <project-dir>/.<slug>      |

Resolution only consults the DirsProvider and joins paths; it never touches
the filesystem. The one exception is ``ensure_config_dirs``, which creates
subdirectories under an already resolved directory.
"""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .dirs import DirFunc
from .dirs import DirsProvider
from .dirs import default_dirs_provider
from .exceptions import ConfigErrors
from .exceptions import DirectoryCreationFailed
from .exceptions import DirectoryKindNotSet
from .exceptions import DirectoryLookupFailed
from .exceptions import InvalidDirectoryKind
from .exceptions import InvalidSlug
from .models import DirectoryKind

logger = logging.getLogger(__name__)

DOT_CONFIG_DIR = ".config"


def resolve_config_dir(
    kind: DirectoryKind,
    slug: str,
    dirs: DirsProvider | None = None,
    *,
    platform: str | None = None,
) -> Path:
    """Compute the config directory for a directory kind and slug.

    Args:
        kind: Which directory convention to apply
        slug: Single path segment naming the application
        dirs: Directory lookups to use (default: real OS lookups)
        platform: Platform name to resolve for (default: ``sys.platform``)

    Returns:
        Absolute directory path

    Raises:
        DirectoryKindNotSet: If kind is UNSPECIFIED
        InvalidDirectoryKind: If kind is not a DirectoryKind member
        DirectoryLookupFailed: If the underlying OS lookup fails
        InvalidSlug: If slug contains a path separator
    """
    if not isinstance(kind, DirectoryKind):
        raise InvalidDirectoryKind(kind)
    if kind is DirectoryKind.UNSPECIFIED:
        raise DirectoryKindNotSet()

    _check_slug(slug)
    if dirs is None:
        dirs = default_dirs_provider()
    if platform is None:
        platform = sys.platform

    if kind is DirectoryKind.APP_CONFIG:
        directory = _lookup(kind, "user-config", dirs.user_config_dir) / slug
    elif kind is DirectoryKind.CLI_CONFIG:
        if platform.startswith("linux"):
            base = _lookup(kind, "user-config", dirs.user_config_dir)
        else:
            base = _lookup(kind, "home", dirs.user_home_dir) / DOT_CONFIG_DIR
        directory = base / slug
    else:
        directory = _lookup(kind, "project", dirs.project_dir) / f".{slug}"

    logger.debug(f"Resolved {kind.value} config dir for '{slug}': {directory}")
    return directory


def cli_config_dir(slug: str, dirs: DirsProvider | None = None) -> Path:
    """Return ``~/.config/<slug>`` (``$XDG_CONFIG_HOME/<slug>`` on Linux)."""
    return resolve_config_dir(DirectoryKind.CLI_CONFIG, slug, dirs)


def app_config_dir(slug: str, dirs: DirsProvider | None = None) -> Path:
    """Return ``<OS user config dir>/<slug>``."""
    return resolve_config_dir(DirectoryKind.APP_CONFIG, slug, dirs)


def project_config_dir(slug: str, dirs: DirsProvider | None = None) -> Path:
    """Return ``<project dir>/.<slug>``."""
    return resolve_config_dir(DirectoryKind.PROJECT_CONFIG, slug, dirs)


# ===== Cache Directories =====


def shared_cache_dir(slug: str, dirs: DirsProvider | None = None) -> Path:
    """Return the shared cache directory for a slug.

    ``~/.cache/<slug>`` on Linux, ``~/Library/Caches/<slug>`` on macOS and
    ``%LOCALAPPDATA%\\<slug>`` on Windows.
    """
    return _cache_dir(slug, None, dirs)


def app_cache_dir(slug: str, app_name: str, dirs: DirsProvider | None = None) -> Path:
    """Return an app-specific cache directory under the shared cache directory.

    Example:
        ``app_cache_dir("acme", "cli")`` is ``~/.cache/acme/cli`` on Linux.
    """
    _check_slug(app_name)
    return _cache_dir(slug, app_name, dirs)


def _cache_dir(slug: str, app_name: str | None, dirs: DirsProvider | None) -> Path:
    _check_slug(slug)
    if dirs is None:
        dirs = default_dirs_provider()
    directory = _lookup(None, "user-cache", dirs.user_cache_dir) / slug
    if app_name:
        directory = directory / app_name
    return directory


# ===== Subdirectories =====


def ensure_config_dirs(config_dir: Path, subdirs: Iterable[str | Path]) -> None:
    """Create subdirectories under a config directory.

    Every subdirectory is attempted; failures are reported together.

    Args:
        config_dir: Base config directory (e.g. ``~/.config/acme``)
        subdirs: Subdirectories to create, e.g. ``["demos", "logs"]``

    Raises:
        ConfigErrors: Holding one DirectoryCreationFailed per failed subdirectory
    """
    errors = []
    for subdir in subdirs:
        path = Path(config_dir) / subdir
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = DirectoryCreationFailed(f"Failed to create directory {path}: {e}", path=path)
            error.__cause__ = e
            errors.append(error)

    if errors:
        raise ConfigErrors(errors)


# ===== Private Helpers =====


def _lookup(kind: Any, lookup: str, func: DirFunc) -> Path:
    try:
        return Path(func())
    except Exception as e:
        raise DirectoryLookupFailed(kind, lookup) from e


def _check_slug(slug: str) -> None:
    if "/" in slug or "\\" in slug:
        raise InvalidSlug(slug)
