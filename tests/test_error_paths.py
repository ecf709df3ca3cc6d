"""Error-path and malformed input tests.

Configuration mistakes surface as GrammarError subclasses at construction
or registration time. Tokenizing odd input never raises.
"""

import pytest

from tinta import Highlighter, highlight, tokenize
from tinta.errors import GrammarError, LanguageNotFoundError, PatternError, TintaError
from tinta.grammar import Grammar, Rule
from tinta.registry import LanguageRegistry

# =========================================================================
# Error hierarchy and formatting
# =========================================================================


class TestErrorFormatting:
    def test_pattern_error_message(self) -> None:
        err = PatternError("(", "missing ), unterminated subpattern at position 0")
        assert err.pattern == "("
        assert str(err).startswith("Invalid pattern '(':")

    def test_language_error_without_detail(self) -> None:
        err = LanguageNotFoundError("cobol")
        assert err.language == "cobol"
        assert str(err) == "Language 'cobol' is not registered"

    def test_language_error_with_detail(self) -> None:
        err = LanguageNotFoundError("clike", "required by 'qsharp'")
        assert str(err) == "Language 'clike' is not registered: required by 'qsharp'"

    @pytest.mark.parametrize("error_class", [GrammarError, PatternError, LanguageNotFoundError])
    def test_hierarchy(self, error_class: type[Exception]) -> None:
        assert issubclass(error_class, TintaError)
        assert issubclass(error_class, GrammarError)


# =========================================================================
# Construction-time failures
# =========================================================================


class TestGrammarConstruction:
    def test_bad_pattern_in_grammar(self) -> None:
        with pytest.raises(PatternError):
            Grammar({"broken": "[a-"})

    def test_bad_pattern_in_alternatives(self) -> None:
        with pytest.raises(PatternError):
            Grammar({"number": [r"\d+", "(?P<x"]})

    def test_bad_pattern_in_nested_grammar(self) -> None:
        with pytest.raises(PatternError):
            Rule("x", inside={"inner": "*oops"})

    def test_bad_entry_shape(self) -> None:
        with pytest.raises(GrammarError):
            Grammar({"number": 42})

    def test_non_string_name(self) -> None:
        with pytest.raises(GrammarError):
            Grammar({1: "x"})  # type: ignore[dict-item]


# =========================================================================
# Lookup failures
# =========================================================================


class TestLookup:
    def test_highlight_unknown_language(self) -> None:
        with pytest.raises(LanguageNotFoundError):
            highlight("x", "cobol")

    def test_tokenize_unknown_language(self) -> None:
        with pytest.raises(LanguageNotFoundError):
            tokenize("x", "cobol")

    def test_inside_name_unknown_to_registry(self) -> None:
        outer = Grammar({"embed": Rule("e", inside="inner")})
        with pytest.raises(LanguageNotFoundError):
            Highlighter(registry=LanguageRegistry()).tokenize("e", outer)

    def test_block_falls_back_for_unknown_language(self) -> None:
        html = Highlighter()("a < b", "nope")
        assert html == '<pre class="language-nope"><code class="language-nope">a &lt; b</code></pre>'


# =========================================================================
# Odd input never raises
# =========================================================================


class TestOddInput:
    @pytest.mark.parametrize(
        "source",
        [
            "",
            "\n",
            '"',
            '"unterminated',
            "/*",
            "*/",
            '$"{',
            '$"{"}"',
            "\\",
            "\x00\x01",
            "🐍 = 1;",
            "(" * 50,
            ")" * 50,
        ],
    )
    @pytest.mark.parametrize("language", ["clike", "pascaligo", "qsharp"])
    def test_no_exceptions(self, source: str, language: str) -> None:
        html = highlight(source, language)
        assert isinstance(html, str)

    def test_empty_text_gives_empty_stream(self) -> None:
        assert tokenize("", "clike") == []
        assert highlight("", "clike") == ""
