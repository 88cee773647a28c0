"""cfgstore: Cross-platform configuration file stores with layered merging.

This library resolves where an application's configuration belongs, reads and
writes a JSON value there, and merges configuration loaded from several
locations into one effective value:
- CLI config (~/.config/<slug>, or $XDG_CONFIG_HOME/<slug> on Linux)
- App config (OS-native user config dir, e.g. ~/Library/Application Support/<slug>)
- Project config (<project dir>/.<slug>)

Configuration values are caller-defined; they normalize themselves after
loading and decide field by field how to merge with lower-precedence values.

Public API:
    ConfigStore: One configuration file at a resolved location
    ConfigStoreSet: Ordered stores sharing one slug and file, in precedence order
    DirectoryKind: Enum for APP_CONFIG/CLI_CONFIG/PROJECT_CONFIG
    DirsProvider: Swappable OS directory lookups
    ConfigBase: Dataclass mixin providing normalize/merge/decoding defaults
    load_config, load_merged, init_config: Multi-store load and single-store init
    resolve_config_dir: Directory resolution for a kind and slug
    ConfigError and subclasses: Exception types

Example:
    ```python
    from dataclasses import dataclass
    from cfgstore import ConfigBase, load_config

    @dataclass
    class AcmeConfig(ConfigBase):
        username: str = ""
        theme: str = ""

    # ~/.config/acme/config.json, overridden by ./.acme/config.json
    config = load_config(AcmeConfig, "acme", "config.json")
    ```
"""

from .dirs import DirsProvider
from .dirs import default_dirs_provider
from .exceptions import ConfigAlreadyExists
from .exceptions import ConfigDirectoryError
from .exceptions import ConfigError
from .exceptions import ConfigErrors
from .exceptions import ConfigFileError
from .exceptions import ConfigFileNotFound
from .exceptions import ConfigLoadFailed
from .exceptions import ConfigPathError
from .exceptions import ConfigSaveFailed
from .exceptions import ConfigValidationError
from .exceptions import DeserializationFailed
from .exceptions import DirectoryCreationFailed
from .exceptions import DirectoryKindNotSet
from .exceptions import DirectoryLookupFailed
from .exceptions import InternalMergeInvariantViolated
from .exceptions import InvalidDirectoryKind
from .exceptions import InvalidRelativePath
from .exceptions import InvalidSlug
from .exceptions import NoConfigurationAvailable
from .exceptions import ReadFailed
from .exceptions import SerializationFailed
from .exceptions import StoreFailure
from .exceptions import WriteFailed
from .loader import init_config
from .loader import load_cli_config
from .loader import load_config
from .loader import load_default_config
from .loader import load_merged
from .loader import load_project_config
from .loader import merge_configs
from .models import ConfigBase
from .models import DirectoryKind
from .models import NormalizeContext
from .models import RootConfig
from .resolver import app_cache_dir
from .resolver import app_config_dir
from .resolver import cli_config_dir
from .resolver import ensure_config_dirs
from .resolver import project_config_dir
from .resolver import resolve_config_dir
from .resolver import shared_cache_dir
from .store import ConfigStore
from .store import app_config_store
from .store import cli_config_store
from .store import project_config_store
from .stores import ConfigStoreSet
from .utils import deep_merge

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "ConfigStoreSet",
    "DirectoryKind",
    "DirsProvider",
    "default_dirs_provider",
    "ConfigBase",
    "NormalizeContext",
    "RootConfig",
    "load_config",
    "load_cli_config",
    "load_project_config",
    "load_default_config",
    "load_merged",
    "merge_configs",
    "init_config",
    "resolve_config_dir",
    "cli_config_dir",
    "app_config_dir",
    "project_config_dir",
    "shared_cache_dir",
    "app_cache_dir",
    "ensure_config_dirs",
    "cli_config_store",
    "app_config_store",
    "project_config_store",
    "deep_merge",
    "ConfigError",
    "ConfigDirectoryError",
    "DirectoryKindNotSet",
    "InvalidDirectoryKind",
    "DirectoryLookupFailed",
    "ConfigPathError",
    "InvalidRelativePath",
    "InvalidSlug",
    "ConfigFileError",
    "ConfigLoadFailed",
    "ConfigFileNotFound",
    "ReadFailed",
    "DeserializationFailed",
    "ConfigSaveFailed",
    "WriteFailed",
    "SerializationFailed",
    "DirectoryCreationFailed",
    "ConfigAlreadyExists",
    "ConfigValidationError",
    "StoreFailure",
    "ConfigErrors",
    "NoConfigurationAvailable",
    "InternalMergeInvariantViolated",
]
