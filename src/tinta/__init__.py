"""
Tinta — Grammar-driven syntax tokenizer and highlighter for Python

Applies declarative, priority-ordered regex grammars to source text and
produces a tree of typed tokens, then renders that tree as flat HTML markup
or JSON. Zero runtime dependencies.

Quick Start:
    >>> from tinta import Grammar, tokenize, stringify
    >>> grammar = Grammar({"number": r"\\d+", "word": r"[a-z]+"})
    >>> tokens = tokenize("ab12cd", grammar)
    >>> [t.type for t in tokens]
    ['word', 'number', 'word']
    >>> stringify(tokens)
    '<span class="token word">ab</span><span class="token number">12</span>...'

    >>> # Registered languages and hooks
    >>> from tinta import Highlighter
    >>> highlighter = Highlighter()
    >>> html = highlighter.highlight("let x = 1;", "qsharp")

Custom Languages:
    >>> from tinta import LanguageRegistry, create_default_registry
    >>> registry = create_default_registry()
    >>> registry.register(
    ...     "clike-todo",
    ...     lambda ctx: ctx.extend("clike", {"todo": r"\\bTODO\\b"}),
    ...     require=["clike"],
    ... )
    >>> html = Highlighter(registry=registry).highlight("// TODO", "clike-todo")
"""

from tinta.config import (
    HighlightConfig,
    get_highlight_config,
    highlight_config_context,
    reset_highlight_config,
    set_highlight_config,
)
from tinta.errors import GrammarError, LanguageNotFoundError, PatternError, TintaError
from tinta.grammar import (
    SELF,
    Alternatives,
    Grammar,
    Rule,
    Single,
    extend,
    insert_before,
)
from tinta.highlighter import Highlighter
from tinta.hooks import (
    AFTER_STRINGIFY,
    AFTER_TOKENIZE,
    BEFORE_STRINGIFY,
    BEFORE_TOKENIZE,
    WRAP,
    HighlightEnv,
    HookRegistry,
    WrapEnv,
)
from tinta.markup import stringify, strip_markup
from tinta.registry import (
    GrammarContext,
    LanguageDefinition,
    LanguageRegistry,
    create_default_registry,
    get_default_registry,
)
from tinta.serialization import from_dict, from_json, to_dict, to_json
from tinta.tokenizer import Tokenizer, tokenize
from tinta.tokens import Token, TokenStream, iter_tokens, simplify, text_of

__version__ = "0.1.0"


def highlight(
    text: str,
    language: str,
    *,
    registry: LanguageRegistry | None = None,
    hooks: HookRegistry | None = None,
) -> str:
    """Tokenize and stringify ``text`` with a registered language.

    Args:
        text: Source text
        language: Registered language name or alias
        registry: Languages to use (the shared built-in registry if None)
        hooks: Hooks fired during the cycle (none if None)

    Returns:
        Markup string

    Example:
        >>> highlight("1 + 2", "clike")
        '<span class="token number">1</span> <span class="token operator">+</span> ...'
    """
    highlighter = Highlighter(
        registry=registry if registry is not None else get_default_registry(),
        hooks=hooks,
    )
    return highlighter.highlight(text, language)


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "highlight",
    "stringify",
    "strip_markup",
    "tokenize",
    # Grammar model
    "SELF",
    "Alternatives",
    "Grammar",
    "Rule",
    "Single",
    "extend",
    "insert_before",
    # Tokens
    "Token",
    "TokenStream",
    "iter_tokens",
    "simplify",
    "text_of",
    # Engine
    "Tokenizer",
    "Highlighter",
    # Languages
    "GrammarContext",
    "LanguageDefinition",
    "LanguageRegistry",
    "create_default_registry",
    "get_default_registry",
    # Hooks
    "AFTER_STRINGIFY",
    "AFTER_TOKENIZE",
    "BEFORE_STRINGIFY",
    "BEFORE_TOKENIZE",
    "WRAP",
    "HighlightEnv",
    "HookRegistry",
    "WrapEnv",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "HighlightConfig",
    "get_highlight_config",
    "set_highlight_config",
    "reset_highlight_config",
    "highlight_config_context",
    # Errors
    "TintaError",
    "GrammarError",
    "PatternError",
    "LanguageNotFoundError",
]
