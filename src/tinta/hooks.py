"""Named extension points for the highlight lifecycle.

A HookRegistry maps hook names to callbacks. Callbacks run synchronously,
in registration order, on the thread that triggered them, and receive a
mutable env they may rewrite.

Lifecycle of one highlight cycle:

1. ``before-tokenize`` (HighlightEnv): may rewrite ``code`` or ``grammar``
2. ``after-tokenize`` (HighlightEnv): may rewrite ``tokens``
3. ``before-stringify`` (HighlightEnv): last chance to edit ``tokens``
4. ``wrap`` (WrapEnv): once per Token while building markup
5. ``after-stringify`` (HighlightEnv): may rewrite ``output``

Exceptions raised by callbacks propagate to the caller and abort the cycle.

Example:
    >>> hooks = HookRegistry()
    >>> @hooks.on(WRAP)
    ... def add_title(env: WrapEnv) -> None:
    ...     env.attributes["title"] = env.type

Thread Safety:
Registration assumes a single writer. run() iterates over a snapshot, so
callbacks may add or remove hooks while running.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from tinta.utils.logger import get_logger

if TYPE_CHECKING:
    from tinta.grammar import Grammar
    from tinta.tokens import TokenStream

logger = get_logger(__name__)

BEFORE_TOKENIZE: Final = "before-tokenize"
AFTER_TOKENIZE: Final = "after-tokenize"
BEFORE_STRINGIFY: Final = "before-stringify"
AFTER_STRINGIFY: Final = "after-stringify"
WRAP: Final = "wrap"


@dataclass(slots=True)
class HighlightEnv:
    """Mutable state shared by the hooks of one tokenize/stringify cycle.

    Attributes:
        code: Text to tokenize
        grammar: Grammar or language name to tokenize with
        language: Language name passed to the stringifier
        tokens: Token stream (set after tokenizing)
        output: Markup (set after stringifying)

    """

    code: str = ""
    grammar: Grammar | str | None = None
    language: str = ""
    tokens: TokenStream = field(default_factory=list)
    output: str = ""


@dataclass(slots=True)
class WrapEnv:
    """Per-token markup about to be emitted by the stringifier.

    ``content`` is the already-stringified inner markup.
    """

    type: str
    content: str
    tag: str
    classes: list[str]
    attributes: dict[str, str] = field(default_factory=dict)
    language: str = ""


type HookCallback = Callable[[Any], None]


class HookRegistry:
    """Ordered multimap from hook name to callbacks.

    Create one per Highlighter (or share one explicitly). Adding a callback
    under a name that already has callbacks appends to the list.
    """

    __slots__ = ("_hooks",)

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = {}

    def add(self, name: str, callback: HookCallback) -> HookRegistry:
        """Append ``callback`` to the hooks for ``name``.

        Returns:
            Self for chaining
        """
        if not callable(callback):
            msg = f"Hook callback for '{name}' must be callable"
            raise TypeError(msg)
        self._hooks.setdefault(name, []).append(callback)
        logger.debug("Added hook %s: %r", name, callback)
        return self

    def on(self, name: str) -> Callable[[HookCallback], HookCallback]:
        """Decorator form of add()."""

        def decorator(callback: HookCallback) -> HookCallback:
            self.add(name, callback)
            return callback

        return decorator

    def remove(self, name: str, callback: HookCallback) -> bool:
        """Remove the first registration of ``callback`` under ``name``.

        Returns:
            True if a callback was removed
        """
        callbacks = self._hooks.get(name)
        if not callbacks or callback not in callbacks:
            return False
        callbacks.remove(callback)
        if not callbacks:
            del self._hooks[name]
        return True

    def run(self, name: str, env: Any) -> None:
        """Call every callback registered under ``name`` with ``env``."""
        callbacks = self._hooks.get(name)
        if not callbacks:
            return
        for callback in tuple(callbacks):
            callback(env)

    def callbacks(self, name: str) -> tuple[HookCallback, ...]:
        """Callbacks registered under ``name``, in run order."""
        return tuple(self._hooks.get(name, ()))

    def clear(self, name: str | None = None) -> None:
        """Remove the callbacks for ``name``, or all callbacks."""
        if name is None:
            self._hooks.clear()
        else:
            self._hooks.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def __len__(self) -> int:
        """Total number of registered callbacks."""
        return sum(len(callbacks) for callbacks in self._hooks.values())


__all__ = [
    "AFTER_STRINGIFY",
    "AFTER_TOKENIZE",
    "BEFORE_STRINGIFY",
    "BEFORE_TOKENIZE",
    "WRAP",
    "HighlightEnv",
    "HookCallback",
    "HookRegistry",
    "WrapEnv",
]
