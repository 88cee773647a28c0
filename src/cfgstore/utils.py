"""Utility functions for cfgstore."""

import logging
from pathlib import Path
from pathlib import PurePosixPath
from pathlib import PureWindowsPath
from typing import IO
from typing import Any


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries with overlay precedence.

    Recursively merges nested dictionaries. Non-dict values in overlay
    completely replace corresponding values in base.

    Args:
        base: Base dictionary (lower precedence)
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary (base and overlay are not modified)

    Examples:
        >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
        >>> overlay = {"b": {"c": 20}, "e": 5}
        >>> deep_merge(base, overlay)
        {'a': 1, 'b': {'c': 20, 'd': 3}, 'e': 5}
    """
    result = base.copy()

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def is_zero(value: Any) -> bool:
    """Check whether a configuration field holds its empty value.

    ``None``, ``False``, numeric zero and empty strings or containers count as
    empty.

    Examples:
        >>> is_zero(""), is_zero(0), is_zero([]), is_zero("dark")
        (True, True, True, False)
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return value == 0
    return False


def is_valid_rel_path(path: str | Path) -> bool:
    """Check that a path is usable as a file path inside a config directory.

    Rejects empty paths, paths anchored at a root or drive (in either POSIX or
    Windows form), and any ``..`` segment.

    Examples:
        >>> is_valid_rel_path("config.json"), is_valid_rel_path("tokens/a.json")
        (True, True)
        >>> is_valid_rel_path("/etc/passwd"), is_valid_rel_path("../x.json")
        (False, False)
    """
    text = str(path)
    if not text or text == ".":
        return False
    posix = PurePosixPath(text)
    windows = PureWindowsPath(text)
    if posix.is_absolute() or windows.anchor:
        return False
    return ".." not in posix.parts and ".." not in windows.parts


def close_or_log(handle: IO[Any], logger: logging.Logger) -> None:
    """Close a file handle, logging instead of raising on failure."""
    try:
        handle.close()
    except OSError as e:
        logger.warning(f"Failed to close {getattr(handle, 'name', handle)}: {e}")
