"""Ordered set of configuration stores sharing one identity."""

import logging
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path

from .dirs import DirsProvider
from .dirs import default_dirs_provider
from .models import DEFAULT_KINDS
from .models import DirectoryKind
from .store import ConfigStore


class ConfigStoreSet:
    """One ConfigStore per directory kind, all for the same slug and file.

    The order of ``kinds`` is the merge precedence: later kinds override
    earlier ones.

    Args:
        slug: Single path segment naming the application
        config_file: File path relative to each store's config directory
        kinds: Directory kinds in precedence order
            (default: CLI_CONFIG then PROJECT_CONFIG)
        dirs: Directory lookups shared by every store (default: real OS lookups)
        logger: Logger handed to every store
    """

    def __init__(
        self,
        slug: str,
        config_file: str | Path,
        kinds: Iterable[DirectoryKind] | None = None,
        dirs: DirsProvider | None = None,
        logger: logging.Logger | None = None,
    ):
        kinds = list(dict.fromkeys(kinds or ()))
        if not kinds:
            kinds = list(DEFAULT_KINDS)

        self.slug = slug
        self.config_file = config_file
        self.dirs = dirs if dirs is not None else default_dirs_provider()
        self.kinds: list[DirectoryKind] = kinds
        self.stores: dict[DirectoryKind, ConfigStore] = {
            kind: ConfigStore(kind, slug, config_file, self.dirs, logger) for kind in kinds
        }

    def __iter__(self) -> Iterator[ConfigStore]:
        return iter(self.stores.values())

    def __len__(self) -> int:
        return len(self.stores)

    def items(self) -> Iterator[tuple[DirectoryKind, ConfigStore]]:
        return iter(self.stores.items())

    def store(self, kind: DirectoryKind) -> ConfigStore | None:
        return self.stores.get(kind)

    def first_store(self) -> ConfigStore:
        """Return the store for the first (lowest precedence) kind."""
        if not self.kinds:
            raise RuntimeError("ConfigStoreSet.first_store(): no stores found")
        return self.stores[self.kinds[0]]

    def last_store(self) -> ConfigStore:
        """Return the store for the last (highest precedence) kind."""
        if not self.kinds:
            raise RuntimeError("ConfigStoreSet.last_store(): no stores found")
        return self.stores[self.kinds[-1]]

    # ===== Well-known Kinds =====

    def cli_store(self) -> ConfigStore | None:
        return self.stores.get(DirectoryKind.CLI_CONFIG)

    def project_store(self) -> ConfigStore | None:
        return self.stores.get(DirectoryKind.PROJECT_CONFIG)

    def app_store(self) -> ConfigStore | None:
        return self.stores.get(DirectoryKind.APP_CONFIG)
