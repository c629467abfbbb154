"""ContextVar-based patch configuration for jsonsplice.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Every public operation reads the active config unless an explicit
``config=`` argument is passed.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed.

Usage:
    from jsonsplice.config import PatchConfig, patch_config_context

    with patch_config_context(PatchConfig(indent=4)):
        result = apply_patch(original, document, ("a",), "1")

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class PatchConfig:
    """Immutable patch configuration.

    Attributes:
        indent: Width of one indentation level
        insert_spaces: Indent with spaces (False indents with tabs)
        eol: Line terminator used for inserted lines
        allow_comments: Tolerate ``//`` and ``/* */`` comments in original text
        allow_trailing_commas: Tolerate a comma before ``}`` or ``]``
        verify_edits: Re-parse minimal edits and rebuild on any mismatch
        ensure_ascii: Escape non-ASCII characters when serializing

    """

    indent: int = 2
    insert_spaces: bool = True
    eol: str = "\n"
    allow_comments: bool = True
    allow_trailing_commas: bool = True
    verify_edits: bool = True
    ensure_ascii: bool = False

    @property
    def indent_unit(self) -> str:
        """Text of one indentation level."""
        return " " * self.indent if self.insert_spaces else "\t"

    @property
    def dumps_indent(self) -> int | str:
        """Value for the ``indent`` argument of ``json.dumps``."""
        return self.indent if self.insert_spaces else "\t"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PatchConfig":
        """Create PatchConfig from dictionary.

        Only includes keys that are valid PatchConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> PatchConfig.from_dict({"indent": 4, "unknown_key": 1}).indent
            4

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PatchConfig = PatchConfig()

_patch_config: ContextVar[PatchConfig] = ContextVar(
    "patch_config",
    default=_DEFAULT_CONFIG,
)


def get_patch_config() -> PatchConfig:
    """Get current patch configuration (thread-local)."""
    return _patch_config.get()


def set_patch_config(config: PatchConfig) -> None:
    """Set patch configuration for current context.

    Args:
        config: PatchConfig instance to use for this context.

    """
    _patch_config.set(config)


def reset_patch_config() -> None:
    """Reset to default configuration."""
    _patch_config.set(_DEFAULT_CONFIG)


def resolve_config(config: PatchConfig | None) -> PatchConfig:
    """Return ``config`` if given, else the active context config."""
    return config if config is not None else _patch_config.get()


@contextmanager
def patch_config_context(config: PatchConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with patch_config_context(PatchConfig(indent=4)):
        ...     get_patch_config().indent
        4

    """
    previous = _patch_config.get()
    _patch_config.set(config)
    try:
        yield
    finally:
        _patch_config.set(previous)


__all__ = [
    "PatchConfig",
    "get_patch_config",
    "set_patch_config",
    "reset_patch_config",
    "resolve_config",
    "patch_config_context",
]
