"""Exceptions for cfgstore.

Every error carries its diagnostic context as attributes (directory kind,
file path, underlying cause) so callers can inspect failures without parsing
messages.
"""

from pathlib import Path
from typing import Any
from typing import Iterator


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


# ===== Directory resolution =====


class ConfigDirectoryError(ConfigError):
    """Error resolving a configuration directory."""

    pass


class DirectoryKindNotSet(ConfigDirectoryError):
    """Directory kind was left UNSPECIFIED."""

    def __init__(self) -> None:
        super().__init__("config directory kind not set")

    def __reduce__(self):
        return (self.__class__, ())


class InvalidDirectoryKind(ConfigDirectoryError):
    """Value is not a known directory kind."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"invalid config directory kind: {value!r}")

    def __reduce__(self):
        return (self.__class__, (self.value,))


class DirectoryLookupFailed(ConfigDirectoryError):
    """An OS directory lookup (home, cwd, project, user-config) failed."""

    def __init__(self, kind: Any, lookup: str):
        self.kind = kind
        self.lookup = lookup
        super().__init__(f"failed getting {lookup} directory")

    def __reduce__(self):
        return (self.__class__, (self.kind, self.lookup))


# ===== Path validation =====


class ConfigPathError(ConfigError):
    """Error validating a slug or relative config path."""

    pass


class InvalidRelativePath(ConfigPathError):
    """Relative config path is empty, anchored or escapes its base directory."""

    def __init__(self, path: Any, base: Path | None = None):
        self.path = path
        self.base = base
        super().__init__(f"path {str(path)!r} is not valid for use in {base}")

    def __reduce__(self):
        return (self.__class__, (self.path, self.base))


class InvalidSlug(ConfigPathError):
    """Slug contains a path separator."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"config slug {slug!r} must be a single path segment")

    def __reduce__(self):
        return (self.__class__, (self.slug,))


# ===== File I/O =====


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


class ConfigLoadFailed(ConfigFileError):
    """Configuration file could not be loaded."""

    pass


class ConfigFileNotFound(ConfigLoadFailed):
    """Configuration file does not exist."""

    pass


class ReadFailed(ConfigLoadFailed):
    """Configuration file exists but could not be read."""

    pass


class DeserializationFailed(ConfigLoadFailed):
    """Configuration file content is not valid JSON for the target value."""

    pass


class ConfigSaveFailed(ConfigFileError):
    """Configuration file could not be saved."""

    pass


class WriteFailed(ConfigSaveFailed):
    """Writing the configuration file failed."""

    pass


class SerializationFailed(ConfigSaveFailed):
    """Value could not be encoded as JSON."""

    pass


class DirectoryCreationFailed(ConfigFileError):
    """A configuration subdirectory could not be created."""

    pass


class ConfigAlreadyExists(ConfigFileError):
    """Configuration file is already present and was left untouched."""

    pass


# ===== Validation =====


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    pass


# ===== Multi-store orchestration =====


class StoreFailure(ConfigError):
    """Failure of a single store during a multi-store load.

    The underlying error is available as ``__cause__``.
    """

    def __init__(self, kind: Any, filepath: Path | None, cause: BaseException):
        self.kind = kind
        self.filepath = filepath
        self.__cause__ = cause
        super().__init__(f"failed to ensure {getattr(kind, 'value', kind)} config at {filepath}: {cause}")

    @property
    def cause(self) -> BaseException:
        return self.__cause__  # type: ignore[return-value]

    def __reduce__(self):
        return (self.__class__, (self.kind, self.filepath, self.__cause__))


class ConfigErrors(ConfigError):
    """Several configuration errors reported together."""

    def __init__(self, errors: list[ConfigError]):
        self.errors = list(errors)
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(f"{len(self.errors)} configuration error(s):\n{lines}")

    def __reduce__(self):
        return (self.__class__, (self.errors,))

    def __iter__(self) -> Iterator[ConfigError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def matches(self, *error_types: type[BaseException]) -> bool:
        """Check whether any collected error, or anything in its cause chain, is one of ``error_types``."""
        for error in self.errors:
            seen: set[int] = set()
            current: BaseException | None = error
            while current is not None and id(current) not in seen:
                if isinstance(current, error_types):
                    return True
                seen.add(id(current))
                current = current.__cause__
        return False


class NoConfigurationAvailable(ConfigError):
    """No store contributed a configuration value."""

    def __init__(self) -> None:
        super().__init__("no valid config dirs available")

    def __reduce__(self):
        return (self.__class__, ())


class InternalMergeInvariantViolated(ConfigError):
    """Merge finished without identifying the last merged store.

    Signals a defect in the merge loop, never a user error.
    """

    def __init__(self, config_count: int):
        self.config_count = config_count
        super().__init__(f"directory kind not assigned after merging {config_count} configs")

    def __reduce__(self):
        return (self.__class__, (self.config_count,))
