"""Tests for utility functions."""

import io
import logging

import pytest
from cfgstore.utils import close_or_log
from cfgstore.utils import deep_merge
from cfgstore.utils import is_valid_rel_path
from cfgstore.utils import is_zero


class TestDeepMerge:
    """Test deep_merge function."""

    def test_empty_dicts(self):
        """Test merging empty dictionaries."""
        assert deep_merge({}, {}) == {}

    def test_overlay_wins(self):
        """Test overlay takes precedence for simple values."""
        assert deep_merge({"theme": "light", "debug": False}, {"theme": "dark"}) == {"theme": "dark", "debug": False}

    def test_nested_merge(self):
        """Test merging nested dictionaries."""
        base = {"editor": {"tabs": 4, "font": "mono"}}
        overlay = {"editor": {"tabs": 2}, "username": "alice"}
        assert deep_merge(base, overlay) == {"editor": {"tabs": 2, "font": "mono"}, "username": "alice"}

    def test_lists_not_merged(self):
        """Test lists are replaced, not merged."""
        assert deep_merge({"plugins": ["a", "b"]}, {"plugins": ["c"]}) == {"plugins": ["c"]}

    def test_original_not_modified(self):
        """Test that original dicts are not modified."""
        base = {"a": {"b": 1}}
        overlay = {"a": {"c": 2}}
        deep_merge(base, overlay)

        assert base == {"a": {"b": 1}}
        assert overlay == {"a": {"c": 2}}


class TestIsZero:
    """Test is_zero function."""

    @pytest.mark.parametrize("value", [None, "", 0, 0.0, False, [], {}, (), set()])
    def test_empty_values(self, value):
        assert is_zero(value)

    @pytest.mark.parametrize("value", ["dark", 1, -1, 0.5, True, ["a"], {"k": "v"}, object()])
    def test_non_empty_values(self, value):
        assert not is_zero(value)


class TestIsValidRelPath:
    """Test is_valid_rel_path function."""

    @pytest.mark.parametrize("path", ["config.json", "tokens/alice.json", "a/b/c.json", "./config.json"])
    def test_valid(self, path):
        assert is_valid_rel_path(path)

    @pytest.mark.parametrize(
        "path",
        ["", ".", "/etc/config.json", "../config.json", "tokens/../../x.json", "C:\\config.json", "\\\\server\\share\\x"],
    )
    def test_invalid(self, path):
        assert not is_valid_rel_path(path)


class TestCloseOrLog:
    """Test close_or_log function."""

    def test_closes_handle(self):
        handle = io.BytesIO()
        close_or_log(handle, logging.getLogger("test"))
        assert handle.closed

    def test_close_failure_is_logged(self, caplog):
        class BrokenHandle:
            name = "broken.json"

            def close(self):
                raise OSError("disk gone")

        with caplog.at_level(logging.WARNING, logger="test"):
            close_or_log(BrokenHandle(), logging.getLogger("test"))  # type: ignore[arg-type]

        assert "Failed to close broken.json" in caplog.text
        assert "disk gone" in caplog.text
