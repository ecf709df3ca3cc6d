"""High-level highlighter combining registry, tokenizer, hooks and markup.

A Highlighter owns (or is handed) a LanguageRegistry and a HookRegistry and
runs the full lifecycle for each call:

    before-tokenize -> tokenize -> after-tokenize
    -> before-stringify -> stringify (wrap per token) -> after-stringify

Usage:
    >>> highlighter = Highlighter()
    >>> highlighter.highlight("if (x) return 1;", "clike")
    '<span class="token keyword">if</span> ...'

    >>> # As a code-block highlighter: (code, language) -> HTML
    >>> highlighter("x = 1", "qsharp")
    '<pre class="language-qsharp"><code class="language-qsharp">...</code></pre>'

Thread Safety:
The tokenizer and stringifier keep no shared per-call state. Hooks added
to a shared HookRegistry run on whichever thread calls the highlighter;
registration should happen before concurrent use.

"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from tinta.config import get_highlight_config, highlight_config_context
from tinta.errors import GrammarError
from tinta.hooks import (
    AFTER_STRINGIFY,
    AFTER_TOKENIZE,
    BEFORE_STRINGIFY,
    BEFORE_TOKENIZE,
    HighlightEnv,
    HookRegistry,
)
from tinta.markup import encode, stringify
from tinta.registry import LanguageRegistry, create_default_registry
from tinta.tokenizer import Tokenizer

if TYPE_CHECKING:
    from tinta.config import HighlightConfig
    from tinta.grammar import Grammar
    from tinta.tokens import TokenStream


class Highlighter:
    """Tokenize and stringify source text with registered grammars.

    Args:
        registry: Languages to resolve names against (a fresh registry of
            built-in languages if None)
        hooks: Hook registry fired during each cycle (a fresh, empty one if
            None)
        config: Markup config applied while stringifying (the context's
            current config if None)

    """

    __slots__ = ("_config", "_hooks", "_registry", "_tokenizer")

    def __init__(
        self,
        *,
        registry: LanguageRegistry | None = None,
        hooks: HookRegistry | None = None,
        config: HighlightConfig | None = None,
    ) -> None:
        self._registry = registry if registry is not None else create_default_registry()
        self._hooks = hooks if hooks is not None else HookRegistry()
        self._config = config
        self._tokenizer = Tokenizer(self._registry)

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def config(self) -> HighlightConfig | None:
        return self._config

    def tokenize(
        self, text: str, grammar: Grammar | str, *, language: str | None = None
    ) -> TokenStream:
        """Tokenize ``text``, firing the before/after-tokenize hooks.

        Args:
            text: Source text
            grammar: Grammar or registered language name/alias
            language: Name exposed to hooks (defaults to ``grammar`` when it
                is a name)

        Returns:
            Token stream (possibly rewritten by hooks)
        """
        env = HighlightEnv(code=text, grammar=grammar, language=_language_of(grammar, language))
        self._run_tokenize(env)
        return env.tokens

    def stringify(self, tokens: TokenStream, language: str = "") -> str:
        """Render ``tokens`` as markup, firing the stringify and wrap hooks."""
        env = HighlightEnv(tokens=tokens, language=language)
        self._run_stringify(env)
        return env.output

    def highlight(
        self, text: str, grammar: Grammar | str, language: str | None = None
    ) -> str:
        """Run one full tokenize + stringify cycle.

        All hooks of the cycle share a single HighlightEnv.

        Returns:
            Markup for ``text`` (no surrounding block element)
        """
        env = HighlightEnv(code=text, grammar=grammar, language=_language_of(grammar, language))
        self._run_tokenize(env)
        self._run_stringify(env)
        return env.output

    def highlight_block(self, code: str, language: str) -> str:
        """Highlight ``code`` inside ``<pre><code>`` tagged with the language.

        Unknown languages fall back to escaped plain text.
        """
        config = self._config or get_highlight_config()
        lang_class = ""
        if language:
            lang_class = f' class="{html.escape(config.language_class_prefix + language)}"'
        if language and self.supports_language(language):
            body = self.highlight(code, language)
        else:
            body = encode(code)
        return f"<pre{lang_class}><code{lang_class}>{body}</code></pre>"

    def __call__(self, code: str, language: str) -> str:
        """Alias for highlight_block(), for use as a (code, language) callable."""
        return self.highlight_block(code, language)

    def supports_language(self, language: str) -> bool:
        """Check if ``language`` (name or alias) is registered."""
        return self._registry.has(language)

    def _run_tokenize(self, env: HighlightEnv) -> None:
        self._hooks.run(BEFORE_TOKENIZE, env)
        if env.grammar is None:
            raise GrammarError("No grammar to tokenize with")
        env.tokens = self._tokenizer.tokenize(env.code, env.grammar)
        self._hooks.run(AFTER_TOKENIZE, env)

    def _run_stringify(self, env: HighlightEnv) -> None:
        self._hooks.run(BEFORE_STRINGIFY, env)
        if self._config is None:
            env.output = stringify(env.tokens, env.language, hooks=self._hooks)
        else:
            with highlight_config_context(self._config):
                env.output = stringify(env.tokens, env.language, hooks=self._hooks)
        self._hooks.run(AFTER_STRINGIFY, env)


def _language_of(grammar: Grammar | str, language: str | None) -> str:
    if language is not None:
        return language
    return grammar if isinstance(grammar, str) else ""


__all__ = ["Highlighter"]
