"""Data models for cfgstore."""

import copy
import dataclasses
import types
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any
from typing import Protocol
from typing import TypeVar
from typing import Union
from typing import get_args
from typing import get_origin
from typing import get_type_hints
from typing import runtime_checkable

from .exceptions import DeserializationFailed
from .utils import deep_merge
from .utils import is_zero

C = TypeVar("C", bound="ConfigBase")


class DirectoryKind(Enum):
    """Directory kind enumeration.

    Selects which path convention governs where a configuration store lives.
    """

    UNSPECIFIED = "unspecified"
    APP_CONFIG = "app"  # OS-native user config dir, e.g. ~/Library/Application Support
    CLI_CONFIG = "cli"  # ~/.config/<slug>, or $XDG_CONFIG_HOME/<slug> on Linux
    PROJECT_CONFIG = "project"  # <project>/.<slug>


DEFAULT_KINDS = (DirectoryKind.CLI_CONFIG, DirectoryKind.PROJECT_CONFIG)


@dataclass(frozen=True)
class NormalizeContext:
    """Context handed to a configuration value's ``normalize`` hook.

    Attributes:
        kind: Directory kind of the store the value came from
        source_file: Absolute path of the file the value was loaded from
            (or is about to be written to)
        options: Caller-supplied options, passed through untouched
    """

    kind: DirectoryKind
    source_file: Path | None = None
    options: Any = None


@runtime_checkable
class RootConfig(Protocol):
    """Capabilities a configuration value needs to take part in a merged load.

    ``normalize`` applies defaults and validates in place, raising
    ``ConfigValidationError`` for invalid contents. ``merge`` combines the
    receiver with a lower-precedence value of the same type and returns the
    result. ``update_from_dict`` populates the value from decoded JSON.
    """

    def normalize(self, context: NormalizeContext) -> None: ...

    def merge(self, lower: Any) -> Any: ...

    def update_from_dict(self, data: Any) -> None: ...


class ConfigBase:
    """Mixin implementing ``RootConfig`` for plain dataclasses.

    Decoding follows the field annotations: nested dataclass fields (and
    lists of them) are rebuilt from JSON objects, scalar fields must hold a
    value of their annotated type, ``null`` leaves a field untouched, and keys
    that don't name a field are ignored.

    The default merge keeps each non-empty field of the receiver and inherits
    empty ones from the lower-precedence value. Dict fields are deep merged
    and nested dataclass fields are merged field by field, both with the
    receiver on top.

    Example:
        ```python
        @dataclass
        class EditorSettings(ConfigBase):
            theme: str = ""
            tab_width: int = 0

        @dataclass
        class AppSettings(ConfigBase):
            username: str = ""
            debug: bool = False
            editor: EditorSettings = field(default_factory=EditorSettings)
        ```
    """

    def normalize(self, context: NormalizeContext) -> None:
        pass

    def merge(self: C, lower: C) -> C:
        return _merge_fields(self, lower)

    def update_from_dict(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise DeserializationFailed(f"expected a JSON object, got {type(data).__name__}")
        for name, value in _decode_fields(type(self), data).items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)  # type: ignore[call-overload]


# ===== Private Helpers =====


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _merge_fields(upper: Any, lower: Any) -> Any:
    for field in dataclasses.fields(upper):
        mine = getattr(upper, field.name)
        theirs = getattr(lower, field.name)
        if isinstance(mine, dict) and isinstance(theirs, dict):
            setattr(upper, field.name, deep_merge(copy.deepcopy(theirs), mine))
        elif _is_dataclass_instance(mine) and type(mine) is type(theirs):
            merged = mine.merge(theirs) if isinstance(mine, ConfigBase) else _merge_fields(mine, theirs)
            setattr(upper, field.name, merged)
        elif is_zero(mine):
            # Copied so the merged value never aliases the lower one
            setattr(upper, field.name, copy.deepcopy(theirs))
    return upper


def _decode_fields(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    hints = get_type_hints(cls)
    decoded = {}
    for field in dataclasses.fields(cls):
        value = data.get(field.name)
        if value is None:
            continue
        decoded[field.name] = _decode_value(hints.get(field.name, Any), value, field.name)
    return decoded


def _decode_value(annotation: Any, value: Any, name: str) -> Any:
    if value is None:
        return None

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        options = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(options) == 1:
            return _decode_value(options[0], value, name)
        return value

    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        if not isinstance(value, dict):
            raise DeserializationFailed(f"{name}: expected a JSON object, got {type(value).__name__}")
        if issubclass(annotation, ConfigBase):
            nested = annotation()
            nested.update_from_dict(value)
            return nested
        try:
            return annotation(**_decode_fields(annotation, value))
        except TypeError as e:
            raise DeserializationFailed(f"{name}: {e}") from e

    if origin is list:
        if not isinstance(value, list):
            raise DeserializationFailed(f"{name}: expected a JSON array, got {type(value).__name__}")
        args = get_args(annotation)
        item_type = args[0] if args else Any
        return [_decode_value(item_type, item, f"{name}[{index}]") for index, item in enumerate(value)]

    if origin is dict and not isinstance(value, dict):
        raise DeserializationFailed(f"{name}: expected a JSON object, got {type(value).__name__}")

    if annotation in _SCALAR_CHECKS and not _SCALAR_CHECKS[annotation](value):
        raise DeserializationFailed(f"{name}: expected {annotation.__name__}, got {type(value).__name__}")

    return value


# bool is a subclass of int, so JSON true/false must not pass as a number
_SCALAR_CHECKS = {
    str: lambda value: isinstance(value, str),
    bool: lambda value: isinstance(value, bool),
    int: lambda value: isinstance(value, int) and not isinstance(value, bool),
    float: lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
}
