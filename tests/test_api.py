"""Tests for the high-level Tinta API."""

from concurrent.futures import ThreadPoolExecutor


class TestHighlightFunction:
    """Tests for the highlight() function."""

    def test_highlight_numbers_and_operator(self) -> None:
        """Test highlighting a simple expression."""
        from tinta import highlight

        html = highlight("1 + 2", "clike")
        assert html == (
            '<span class="token number">1</span> '
            '<span class="token operator">+</span> '
            '<span class="token number">2</span>'
        )

    def test_highlight_by_alias(self) -> None:
        """Test that aliases resolve to the same grammar."""
        from tinta import highlight

        assert highlight("let x = 1;", "qs") == highlight("let x = 1;", "qsharp")

    def test_highlight_custom_registry(self) -> None:
        """Test highlighting with a caller-owned registry."""
        from tinta import LanguageRegistry, highlight

        registry = LanguageRegistry()
        registry.register("digits", {"number": r"\d+"})
        assert highlight("a1", "digits", registry=registry) == (
            'a<span class="token number">1</span>'
        )


class TestTokenizeAndStringify:
    """Tests for the tokenize() and stringify() functions."""

    def test_tokenize_custom_grammar(self) -> None:
        from tinta import Grammar, Token, tokenize

        grammar = Grammar({"number": r"\d+", "word": r"[a-z]+"})
        assert tokenize("ab12cd", grammar) == [
            Token("word", "ab"),
            Token("number", "12"),
            Token("word", "cd"),
        ]

    def test_stringify_tokens(self) -> None:
        from tinta import Grammar, stringify, tokenize

        html = stringify(tokenize("x<1", Grammar({"operator": "<"})))
        assert html == 'x<span class="token operator">&lt;</span>1'


class TestHighlighterClass:
    """Tests for the Highlighter class."""

    def test_highlight_block(self) -> None:
        from tinta import Highlighter

        html = Highlighter().highlight_block("1", "clike")
        assert html == (
            '<pre class="language-clike"><code class="language-clike">'
            '<span class="token number">1</span></code></pre>'
        )

    def test_callable_form(self) -> None:
        from tinta import Highlighter

        highlighter = Highlighter()
        assert highlighter("1", "clike") == highlighter.highlight_block("1", "clike")

    def test_block_without_language(self) -> None:
        from tinta import Highlighter

        assert Highlighter().highlight_block("a & b", "") == "<pre><code>a &amp; b</code></pre>"

    def test_supports_language(self) -> None:
        from tinta import Highlighter

        highlighter = Highlighter()
        assert highlighter.supports_language("qs")
        assert not highlighter.supports_language("cobol")

    def test_own_registry_by_default(self) -> None:
        from tinta import Highlighter, get_default_registry

        assert Highlighter().registry is not get_default_registry()

    def test_highlight_with_grammar_and_language(self) -> None:
        from tinta import Grammar, Highlighter, HookRegistry, WRAP

        hooks = HookRegistry()
        seen: list[str] = []
        hooks.add(WRAP, lambda env: seen.append(env.language))
        html = Highlighter(hooks=hooks).highlight("ab", Grammar({"a": "a"}), "custom")
        assert html == '<span class="token a">a</span>b'
        assert seen == ["custom"]

    def test_extend_builtin_language(self) -> None:
        from tinta import Highlighter, create_default_registry

        registry = create_default_registry()
        registry.register(
            "clike-todo",
            lambda ctx: ctx.extend("clike", {"todo": r"\bTODO\b"}),
            require=["clike"],
        )
        html = Highlighter(registry=registry).highlight("TODO", "clike-todo")
        assert html == '<span class="token todo">TODO</span>'


class TestThreadSafety:
    """Concurrent highlighting with a shared highlighter."""

    def test_concurrent_highlight(self) -> None:
        from tinta import Highlighter

        highlighter = Highlighter()
        sources = [f"let x{i} = {i};" for i in range(50)]
        expected = [highlighter.highlight(s, "qsharp") for s in sources]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda s: highlighter.highlight(s, "qsharp"), sources))

        assert results == expected
