"""Single configuration file store."""

import dataclasses
import json
import logging
import shutil
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

from .dirs import DirsProvider
from .dirs import default_dirs_provider
from .exceptions import ConfigError
from .exceptions import ConfigFileNotFound
from .exceptions import DeserializationFailed
from .exceptions import InvalidRelativePath
from .exceptions import ReadFailed
from .exceptions import SerializationFailed
from .exceptions import WriteFailed
from .models import DirectoryKind
from .resolver import ensure_config_dirs
from .resolver import resolve_config_dir
from .utils import close_or_log
from .utils import is_valid_rel_path


class DirState(Enum):
    """Where a store's directory came from."""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    OVERRIDDEN = "overridden"


class ConfigStore:
    """One configuration file at a resolved location.

    The directory is resolved lazily on first use and cached for the life of
    the store. ``set_config_dir`` replaces it outright, bypassing resolution.

    A store is not safe for concurrent first use from several threads; use it
    from one thread or synchronize externally.

    Args:
        kind: Directory kind deciding where the store lives
        slug: Single path segment naming the application
        config_file: File path relative to the config directory
            (may include subdirectories, e.g. ``tokens/alice.json``)
        dirs: Directory lookups (default: real OS lookups)
        logger: Logger to use instead of the module logger
    """

    def __init__(
        self,
        kind: DirectoryKind,
        slug: str,
        config_file: str | Path,
        dirs: DirsProvider | None = None,
        logger: logging.Logger | None = None,
    ):
        self.kind = kind
        self.slug = slug
        self.config_file = config_file
        self.dirs = dirs if dirs is not None else default_dirs_provider()
        self.logger = logger or logging.getLogger(__name__)
        self._dir_state = DirState.UNRESOLVED
        self._config_dir: Path | None = None

    def __repr__(self) -> str:
        return f"ConfigStore(kind={self.kind}, slug={self.slug!r}, config_file={str(self.config_file)!r})"

    # ===== Location =====

    @property
    def dir_state(self) -> DirState:
        return self._dir_state

    def config_dir(self) -> Path:
        """Get the store's directory, resolving it on first call.

        Returns:
            Absolute config directory (the override, if one was set)

        Raises:
            ConfigDirectoryError: If the directory cannot be resolved
        """
        if self._dir_state is DirState.UNRESOLVED:
            self._config_dir = resolve_config_dir(self.kind, self.slug, self.dirs)
            self._dir_state = DirState.RESOLVED
        assert self._config_dir is not None
        return self._config_dir

    def set_config_dir(self, path: str | Path) -> None:
        """Override the config directory, bypassing resolution from now on."""
        self._config_dir = Path(path)
        self._dir_state = DirState.OVERRIDDEN

    def set_config_file(self, config_file: str | Path) -> None:
        self.config_file = config_file

    def filepath(self) -> Path:
        """Get the absolute path of the config file.

        Raises:
            ConfigDirectoryError: If the directory cannot be resolved
            InvalidRelativePath: If config_file is empty, absolute or escapes
                the config directory
        """
        directory = self.config_dir()
        if not is_valid_rel_path(self.config_file):
            raise InvalidRelativePath(self.config_file, directory)
        return directory / self.config_file

    def exists(self) -> bool:
        """Check whether the config file is present.

        Never raises: a directory that can't be resolved, an invalid path or a
        failed stat all count as absent.
        """
        try:
            return self.filepath().exists()
        except (ConfigError, OSError):
            return False

    # ===== Raw I/O =====

    def load(self) -> bytes:
        """Read the whole config file.

        Raises:
            ConfigFileNotFound: If the file does not exist
            ReadFailed: If the file exists but can't be read
        """
        path = self.filepath()
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise ConfigFileNotFound(f"Config file does not exist: {path}", path=path) from e
        except OSError as e:
            raise ReadFailed(f"Failed to read config file {path}: {e}", path=path) from e

        self.logger.debug(f"Loaded {len(data)} bytes from {path}")
        return data

    def save(self, data: bytes) -> None:
        """Write the whole config file, creating missing parent directories.

        Existing content is overwritten. The file handle is always closed;
        a failure to close is logged, not raised.

        Raises:
            WriteFailed: If the directory or file can't be written
        """
        path = self.filepath()
        try:
            # config_file may contain subdirectories, e.g. tokens/alice.json
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(path, "wb")
        except OSError as e:
            raise WriteFailed(f"Failed to write configuration to {path}: {e}", path=path) from e

        try:
            handle.write(data)
        except OSError as e:
            raise WriteFailed(f"Failed to write configuration to {path}: {e}", path=path) from e
        finally:
            close_or_log(handle, self.logger)

    # ===== JSON I/O =====

    def load_json(self, into: Any = None) -> Any:
        """Load and decode the config file.

        Args:
            into: Value to populate via its ``update_from_dict`` method. When
                omitted, the decoded JSON is returned as-is.

        Returns:
            ``into`` after population, or the decoded JSON

        Raises:
            ConfigLoadFailed: ConfigFileNotFound, ReadFailed or
                DeserializationFailed
        """
        data = self.load()
        path = self.filepath()
        try:
            decoded = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DeserializationFailed(f"Failed to unmarshal config file {path}: {e}", path=path) from e

        if into is None:
            return decoded

        try:
            into.update_from_dict(decoded)
        except DeserializationFailed as e:
            if e.path is None:
                e.path = path
            raise
        except (TypeError, ValueError) as e:
            raise DeserializationFailed(f"Failed to unmarshal config file {path}: {e}", path=path) from e
        return into

    def save_json(self, value: Any) -> None:
        """Encode a value as two-space indented JSON and save it.

        Dataclasses and objects with a ``to_dict`` method are encoded through
        their dict form.

        Raises:
            SerializationFailed: If the value can't be encoded
            WriteFailed: If the file can't be written
        """
        try:
            text = json.dumps(value, indent=2, ensure_ascii=False, default=_to_json)
        except (TypeError, ValueError) as e:
            raise SerializationFailed(f"Failed to marshal configuration for {self}: {e}") from e

        self.save(text.encode("utf-8"))

    # ===== Directory Management =====

    def ensure_subdirectories(self, subdirs: Iterable[str | Path]) -> None:
        """Create subdirectories under the config directory.

        Raises:
            ConfigErrors: Listing every subdirectory that couldn't be created
        """
        ensure_config_dirs(self.config_dir(), subdirs)

    def remove_all(self) -> None:
        """Delete the config directory and everything in it."""
        directory = self.config_dir()
        if directory.exists():
            shutil.rmtree(directory)
            self.logger.info(f"Removed config dir {directory}")


def cli_config_store(slug: str, config_file: str | Path, dirs: DirsProvider | None = None) -> ConfigStore:
    """Create a store in ``~/.config/<slug>`` (``$XDG_CONFIG_HOME/<slug>`` on Linux)."""
    return ConfigStore(DirectoryKind.CLI_CONFIG, slug, config_file, dirs)


def app_config_store(slug: str, config_file: str | Path, dirs: DirsProvider | None = None) -> ConfigStore:
    """Create a store in the OS-native user config directory."""
    return ConfigStore(DirectoryKind.APP_CONFIG, slug, config_file, dirs)


def project_config_store(slug: str, config_file: str | Path, dirs: DirsProvider | None = None) -> ConfigStore:
    """Create a store in ``<project dir>/.<slug>``."""
    return ConfigStore(DirectoryKind.PROJECT_CONFIG, slug, config_file, dirs)


def _to_json(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
