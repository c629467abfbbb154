"""Tests for ContextVar-based patch configuration.

Validates thread isolation, context manager behavior, and that explicit
``config=`` arguments override the context.
"""

from threading import Thread

import pytest

from jsonsplice import (
    PatchConfig,
    apply_patch,
    get_patch_config,
    patch_config_context,
    reset_patch_config,
    set_patch_config,
)
from jsonsplice.config import resolve_config


class TestPatchConfigDataclass:
    """Test PatchConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Default config writes 2-space JSON and tolerates comments."""
        config = PatchConfig()
        assert config.indent == 2
        assert config.insert_spaces is True
        assert config.eol == "\n"
        assert config.allow_comments is True
        assert config.allow_trailing_commas is True
        assert config.verify_edits is True
        assert config.ensure_ascii is False

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = PatchConfig()
        with pytest.raises(AttributeError):
            config.indent = 4  # type: ignore[misc]

    def test_indent_unit(self) -> None:
        assert PatchConfig().indent_unit == "  "
        assert PatchConfig(indent=4).indent_unit == "    "
        assert PatchConfig(insert_spaces=False).indent_unit == "\t"

    def test_dumps_indent(self) -> None:
        assert PatchConfig(indent=3).dumps_indent == 3
        assert PatchConfig(insert_spaces=False).dumps_indent == "\t"


class TestFromDict:
    def test_known_keys(self) -> None:
        config = PatchConfig.from_dict({"indent": 4, "verify_edits": False})
        assert config.indent == 4
        assert config.verify_edits is False

    def test_unknown_keys_ignored(self) -> None:
        config = PatchConfig.from_dict({"indent": 1, "color": "blue"})
        assert config == PatchConfig(indent=1)

    def test_empty(self) -> None:
        assert PatchConfig.from_dict({}) == PatchConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_patch_config()

    def test_default_config(self) -> None:
        assert get_patch_config() == PatchConfig()

    def test_set_and_get(self) -> None:
        set_patch_config(PatchConfig(indent=8))
        assert get_patch_config().indent == 8

    def test_reset_restores_default(self) -> None:
        set_patch_config(PatchConfig(indent=8))
        reset_patch_config()
        assert get_patch_config().indent == 2

    def test_resolve_prefers_explicit(self) -> None:
        set_patch_config(PatchConfig(indent=8))
        assert resolve_config(PatchConfig(indent=3)).indent == 3
        assert resolve_config(None).indent == 8


class TestPatchConfigContext:
    """Test patch_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with patch_config_context(PatchConfig(indent=4)):
            assert get_patch_config().indent == 4
        assert get_patch_config().indent == 2

    def test_nested_contexts(self) -> None:
        with patch_config_context(PatchConfig(indent=4)):
            with patch_config_context(PatchConfig(verify_edits=False)):
                assert get_patch_config().indent == 2
                assert get_patch_config().verify_edits is False
            assert get_patch_config().indent == 4
        assert get_patch_config() == PatchConfig()

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with patch_config_context(PatchConfig(indent=4)):
                raise ValueError("test")
        assert get_patch_config().indent == 2

    def test_explicit_argument_beats_context(self) -> None:
        with patch_config_context(PatchConfig(indent=4)):
            result = apply_patch("", '{"a": 1}', ("a",), "2", config=PatchConfig(indent=1))
        assert result.text == '{\n "a": 2\n}'


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread rebuilds with its own indent."""
        results: dict[int, str] = {}

        def worker(thread_id: int, config: PatchConfig) -> None:
            set_patch_config(config)
            results[thread_id] = apply_patch("", '{"a": 1}', ("a",), "2").text

        configs = [PatchConfig(indent=1), PatchConfig(indent=2), PatchConfig(indent=3)]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results[0] == '{\n "a": 2\n}'
        assert results[1] == '{\n  "a": 2\n}'
        assert results[2] == '{\n   "a": 2\n}'
        assert get_patch_config() == PatchConfig()
