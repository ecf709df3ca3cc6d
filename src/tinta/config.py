"""ContextVar-based markup configuration for Tinta.

Controls how the stringifier spells its markup. Config is read through a
ContextVar (PEP 567), so each thread or task sees its own value without
locks.

Usage:
    # Highlighter applies its config around stringification
    highlighter = Highlighter(config=HighlightConfig(class_prefix="tt-"))
    html = highlighter.highlight("x = 1", "clike")

    # Direct stringifier usage
    with highlight_config_context(HighlightConfig(tag="code")):
        html = stringify(tokens, "clike")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Immutable markup configuration.

    Attributes:
        tag: Element name wrapping each token
        token_class: Class added to every token element before its type
        class_prefix: Prefix applied to every class name
        language_class_prefix: Prefix for the language class on block output

    """

    tag: str = "span"
    token_class: str = "token"
    class_prefix: str = ""
    language_class_prefix: str = "language-"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "HighlightConfig":
        """Create HighlightConfig from dictionary.

        Unknown keys are ignored.

        Example:
            >>> HighlightConfig.from_dict({"tag": "code", "theme": "dark"}).tag
            'code'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: HighlightConfig = HighlightConfig()

_highlight_config: ContextVar[HighlightConfig] = ContextVar(
    "highlight_config",
    default=_DEFAULT_CONFIG,
)


def get_highlight_config() -> HighlightConfig:
    """Get current markup configuration for this context."""
    return _highlight_config.get()


def set_highlight_config(config: HighlightConfig) -> None:
    """Set markup configuration for the current context."""
    _highlight_config.set(config)


def reset_highlight_config() -> None:
    """Reset to the default configuration."""
    _highlight_config.set(_DEFAULT_CONFIG)


@contextmanager
def highlight_config_context(config: HighlightConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with highlight_config_context(HighlightConfig(class_prefix="x-")):
        ...     html = stringify(tokens)
    """
    previous = _highlight_config.get()
    _highlight_config.set(config)
    try:
        yield
    finally:
        _highlight_config.set(previous)


__all__ = [
    "HighlightConfig",
    "get_highlight_config",
    "highlight_config_context",
    "reset_highlight_config",
    "set_highlight_config",
]
