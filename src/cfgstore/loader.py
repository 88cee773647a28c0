"""Load-or-create configuration across stores and merge the results."""

import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from typing import TypeVar

from .dirs import DirsProvider
from .exceptions import ConfigAlreadyExists
from .exceptions import ConfigError
from .exceptions import ConfigErrors
from .exceptions import InternalMergeInvariantViolated
from .exceptions import NoConfigurationAvailable
from .exceptions import StoreFailure
from .models import DEFAULT_KINDS
from .models import DirectoryKind
from .models import NormalizeContext
from .models import RootConfig
from .store import ConfigStore
from .stores import ConfigStoreSet

R = TypeVar("R", bound=RootConfig)


def load_merged(
    config_type: Callable[[], R],
    stores: ConfigStoreSet,
    options: Any = None,
    logger: logging.Logger | None = None,
) -> R:
    """Load configuration from every store and merge it into one value.

    Every store is attempted before anything is merged. For each store:

    - If the file exists it is loaded and normalized.
    - If the file is missing from a PROJECT_CONFIG store, the store
      contributes nothing.
    - If the file is missing from any other store, a default value is
      created, normalized and persisted there.

    Values are then merged in ``stores.kinds`` order, later kinds overriding
    earlier ones (see ``merge_configs``).

    Args:
        config_type: Zero-argument factory (usually the class) for an empty
            configuration value
        stores: Stores to load from, in precedence order
        options: Passed through to each value's ``normalize``
        logger: Logger to use instead of the module logger

    Returns:
        Merged configuration value

    Raises:
        ConfigErrors: If any store failed to load, normalize or persist; holds
            one StoreFailure per failing store
        NoConfigurationAvailable: If no store contributed a value
    """
    log = logger or logging.getLogger(__name__)
    values: dict[DirectoryKind, R | None] = {}
    failures: list[ConfigError] = []

    for kind, store in stores.items():
        try:
            values[kind] = _load_or_create(config_type, store, options, log)
        except (ConfigError, TypeError, ValueError) as e:
            failures.append(StoreFailure(kind, _safe_filepath(store), e))

    if failures:
        raise ConfigErrors(failures)

    return merge_configs(values, stores.kinds)


def merge_configs(values: Mapping[DirectoryKind, R | None], kinds: Iterable[DirectoryKind]) -> R:
    """Fold per-store values into one, following ``kinds`` order.

    Kinds whose value is ``None`` (or missing) are skipped. A single
    contributor is returned unchanged without calling ``merge``. Otherwise
    each later contributor merges the accumulated value:
    ``value.merge(accumulated)``.

    Raises:
        NoConfigurationAvailable: If no kind contributed a value
        InternalMergeInvariantViolated: If no merged kind was recorded
    """
    contributing = [kind for kind in kinds if values.get(kind) is not None]
    if not contributing:
        raise NoConfigurationAvailable()

    merged = values[contributing[0]]
    assert merged is not None
    if len(contributing) == 1:
        return merged

    last_kind: DirectoryKind | None = None
    for kind in contributing[1:]:
        value = values[kind]
        assert value is not None
        merged = value.merge(merged)
        last_kind = kind

    if last_kind is None:
        raise InternalMergeInvariantViolated(len(contributing))

    return merged


def init_config(
    config_type: Callable[[], R],
    store: ConfigStore,
    options: Any = None,
    logger: logging.Logger | None = None,
) -> R:
    """Create a new config file for a single store.

    Args:
        config_type: Zero-argument factory for an empty configuration value
        store: Store whose file should be created
        options: Passed through to the value's ``normalize``
        logger: Logger to use instead of the module logger

    Returns:
        The normalized value that was written

    Raises:
        ConfigAlreadyExists: If the file is already present (left untouched)
    """
    log = logger or logging.getLogger(__name__)
    if store.exists():
        path = store.filepath()
        raise ConfigAlreadyExists(f"Config file already exists: {path}", path=path)

    value = _create(config_type, store, options)
    log.info(f"Initialized {store.kind.value} config at {store.filepath()}")
    return value


# ===== Convenience Loaders =====


def load_config(
    config_type: Callable[[], R],
    slug: str,
    config_file: str | Path,
    *,
    kinds: Iterable[DirectoryKind] | None = None,
    dirs: DirsProvider | None = None,
    options: Any = None,
    logger: logging.Logger | None = None,
) -> R:
    """Build a store set and load merged configuration from it.

    Args:
        config_type: Zero-argument factory for an empty configuration value
        slug: Single path segment naming the application
        config_file: File path relative to each config directory
        kinds: Directory kinds in precedence order
            (default: CLI_CONFIG then PROJECT_CONFIG)
        dirs: Directory lookups (default: real OS lookups)
        options: Passed through to ``normalize``
        logger: Logger to use instead of the module logger

    Returns:
        Merged configuration value
    """
    stores = ConfigStoreSet(slug, config_file, kinds=kinds, dirs=dirs, logger=logger)
    return load_merged(config_type, stores, options, logger=logger)


def load_cli_config(config_type: Callable[[], R], slug: str, config_file: str | Path, **kwargs: Any) -> R:
    """Load configuration from the CLI config directory only."""
    return load_config(config_type, slug, config_file, kinds=[DirectoryKind.CLI_CONFIG], **kwargs)


def load_project_config(config_type: Callable[[], R], slug: str, config_file: str | Path, **kwargs: Any) -> R:
    """Load configuration from the project directory only."""
    return load_config(config_type, slug, config_file, kinds=[DirectoryKind.PROJECT_CONFIG], **kwargs)


def load_default_config(config_type: Callable[[], R], slug: str, config_file: str | Path, **kwargs: Any) -> R:
    """Load CLI configuration overridden by project configuration."""
    return load_config(config_type, slug, config_file, kinds=list(DEFAULT_KINDS), **kwargs)


# ===== Private Helpers =====


def _load_or_create(config_type: Callable[[], R], store: ConfigStore, options: Any, log: logging.Logger) -> R | None:
    if store.exists():
        value = config_type()
        store.load_json(into=value)
        value.normalize(NormalizeContext(store.kind, store.filepath(), options))
        log.debug(f"Loaded {store.kind.value} config from {store.filepath()}")
        return value

    if store.kind is DirectoryKind.PROJECT_CONFIG:
        # Project config is optional; absence contributes nothing
        return None

    value = _create(config_type, store, options)
    log.info(f"Created default {store.kind.value} config at {store.filepath()}")
    return value


def _create(config_type: Callable[[], R], store: ConfigStore, options: Any) -> R:
    value = config_type()
    value.normalize(NormalizeContext(store.kind, store.filepath(), options))
    store.save_json(value)
    return value


def _safe_filepath(store: ConfigStore) -> Path | None:
    try:
        return store.filepath()
    except ConfigError:
        return None
