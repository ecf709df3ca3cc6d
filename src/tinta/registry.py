"""Language registry for grammar lookup and registration.

The registry maps language names (and aliases) to grammars. It changes only
through explicit registration calls; tokenization reads it and never
writes to it.

Registration is where configuration errors surface: a grammar that requires
or references an unregistered language is rejected, and the registry is
left unchanged.

Thread Safety:
Designed for single-writer registration at startup and many concurrent
readers afterwards. Concurrent registration needs external locking.

Example:
    >>> registry = LanguageRegistry()
    >>> registry.register("ini", {"comment": r"^[;#].*", "key": r"^[^=\\n]+(?==)"})
    >>> registry.register(
    ...     "ini-ext",
    ...     lambda ctx: ctx.extend("ini", {"section": r"^\\[[^\\]]*\\]"}),
    ...     aliases=["inix"],
    ...     require=["ini"],
    ... )
    >>> registry.get("inix")
    Grammar([comment, key, section])
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tinta.errors import GrammarError, LanguageNotFoundError
from tinta.grammar import Grammar
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


class GrammarContext:
    """Helpers handed to grammar builder functions.

    Attributes:
        name: The language being registered

    """

    __slots__ = ("_registry", "name")

    def __init__(self, registry: LanguageRegistry, name: str) -> None:
        self._registry = registry
        self.name = name

    def get(self, language: str) -> Grammar:
        """Return the registered grammar for ``language``."""
        return self._registry.get(language)

    def extend(self, language: str, overrides: Mapping[str, Any]) -> Grammar:
        """Deep copy of a registered grammar with ``overrides`` applied."""
        return self._registry.get(language).extend(overrides)

    def insert_before(
        self, grammar: Grammar, anchor: str, insertions: Mapping[str, Any]
    ) -> Grammar:
        """Splice ``insertions`` into ``grammar`` before ``anchor``."""
        return grammar.insert_before(anchor, insertions)


type GrammarBuilder = Callable[[GrammarContext], Grammar | Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class LanguageDefinition:
    """Declarative description of a language.

    Attributes:
        id: Canonical language name
        grammar: A grammar, a mapping of grammar entries, or a builder
            function receiving a GrammarContext
        aliases: Alternative names
        require: Languages that must be registered first

    """

    id: str
    grammar: Grammar | Mapping[str, Any] | GrammarBuilder
    aliases: tuple[str, ...] = ()
    require: tuple[str, ...] = ()


class LanguageRegistry:
    """Mutable mapping of language names to grammars.

    Lookup is alias-aware. Registering a name that already exists replaces
    its grammar.
    """

    __slots__ = ("_grammars", "_aliases")

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._grammars: dict[str, Grammar] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        grammar: Grammar | Mapping[str, Any] | GrammarBuilder,
        *,
        aliases: Iterable[str] = (),
        require: Iterable[str] = (),
    ) -> Grammar:
        """Register a grammar under ``name``.

        Args:
            name: Canonical language name
            grammar: A Grammar, a mapping coerced to one, or a builder
                function called with a GrammarContext
            aliases: Alternative names resolving to ``name``
            require: Languages that must already be registered

        Returns:
            The registered Grammar

        Raises:
            LanguageNotFoundError: If a required or referenced language is
                not registered
            GrammarError: If the grammar is malformed
        """
        aliases = tuple(aliases)
        for required in require:
            if not self.has(required):
                raise LanguageNotFoundError(required, f"required by '{name}'")

        if callable(grammar) and not isinstance(grammar, Mapping):
            built = grammar(GrammarContext(self, name))
        else:
            built = grammar
        if not isinstance(built, Grammar):
            if not isinstance(built, Mapping):
                msg = f"Language '{name}' must build a grammar, got {type(built).__name__}"
                raise GrammarError(msg)
            built = Grammar(built)

        own_names = {name, *aliases}
        for reference in built.references():
            if reference not in own_names and not self.has(reference):
                raise LanguageNotFoundError(reference, f"referenced by '{name}'")

        self._grammars[name] = built
        self._aliases.pop(name, None)
        for alias in aliases:
            self._aliases[alias] = name
        logger.debug("Registered language %s (%d entries)", name, len(built))
        return built

    def add(self, definition: LanguageDefinition) -> Grammar:
        """Register a LanguageDefinition."""
        return self.register(
            definition.id,
            definition.grammar,
            aliases=definition.aliases,
            require=definition.require,
        )

    def canonical_name(self, name: str) -> str:
        """Resolve an alias to its language name.

        Raises:
            LanguageNotFoundError: If ``name`` is neither a name nor an alias
        """
        if name in self._grammars:
            return name
        target = self._aliases.get(name)
        if target is None:
            raise LanguageNotFoundError(name)
        return target

    def get(self, name: str) -> Grammar:
        """Get the grammar for a language name or alias.

        Raises:
            LanguageNotFoundError: If ``name`` is not registered
        """
        return self._grammars[self.canonical_name(name)]

    def resolve(self, grammar: Grammar | str) -> Grammar:
        """Return ``grammar`` itself, or the grammar registered under it."""
        if isinstance(grammar, Grammar):
            return grammar
        return self.get(grammar)

    def has(self, name: str) -> bool:
        """Check if a language name or alias is registered."""
        return name in self._grammars or name in self._aliases

    def extend(self, name: str, overrides: Mapping[str, Any]) -> Grammar:
        """Deep copy of the grammar registered as ``name`` with ``overrides``.

        The registry itself is not changed; register the result to keep it.
        """
        return self.get(name).extend(overrides)

    def insert_before(
        self, name: str, anchor: str, insertions: Mapping[str, Any]
    ) -> Grammar:
        """Re-register ``name`` with ``insertions`` spliced before ``anchor``.

        Grammars that hold the previous object directly (rather than by
        name) keep seeing the previous version.

        Returns:
            The newly registered Grammar
        """
        canonical = self.canonical_name(name)
        updated = self._grammars[canonical].insert_before(anchor, insertions)
        return self.register(canonical, updated)

    @property
    def names(self) -> frozenset[str]:
        """Canonical names of all registered languages."""
        return frozenset(self._grammars)

    @property
    def aliases(self) -> dict[str, str]:
        """Alias to canonical name mapping (a copy)."""
        return dict(self._aliases)

    def __contains__(self, name: object) -> bool:
        """Support 'name in registry' syntax."""
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        """Number of registered languages (aliases not counted)."""
        return len(self._grammars)


def create_default_registry() -> LanguageRegistry:
    """Create a registry populated with the built-in languages.

    Returns a fresh, independent registry on each call.
    """
    from tinta.languages import BUILTIN_LANGUAGES

    registry = LanguageRegistry()
    for definition in BUILTIN_LANGUAGES:
        registry.add(definition)
    return registry


# Lazily built shared registry for the module-level convenience functions
_DEFAULT_REGISTRY: LanguageRegistry | None = None


def get_default_registry() -> LanguageRegistry:
    """Get the shared registry of built-in languages (built on first use).

    Callers that register their own languages should create their own
    registry instead of mutating this one.
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_default_registry()
    return _DEFAULT_REGISTRY


__all__ = [
    "GrammarBuilder",
    "GrammarContext",
    "LanguageDefinition",
    "LanguageRegistry",
    "create_default_registry",
    "get_default_registry",
]
