"""Base grammar shared by C-family languages.

Not meant to be highlighted directly; other languages extend it.
"""

from tinta.grammar import Grammar, Rule
from tinta.registry import LanguageDefinition

GRAMMAR = Grammar({
    "comment": [
        Rule(r"(^|[^\\])/\*[\s\S]*?(?:\*/|\Z)", lookbehind=True, greedy=True),
        Rule(r"(^|[^\\:])//.*", lookbehind=True, greedy=True),
    ],
    "string": Rule(r"""(["'])(?:\\(?:\r\n|[\s\S])|(?!\1)[^\\\r\n])*\1""", greedy=True),
    "class-name": Rule(
        r"(\b(?:class|extends|implements|instanceof|interface|new|trait)\s+|\bcatch\s+\()[\w.\\]+",
        lookbehind=True,
        ignore_case=True,
        inside={"punctuation": r"[.\\]"},
    ),
    "keyword": r"\b(?:break|catch|continue|do|else|finally|for|function|if|in|instanceof|new|null|return|throw|try|while)\b",
    "boolean": r"\b(?:false|true)\b",
    "function": r"\b\w+(?=\()",
    "number": Rule(r"\b0x[\da-f]+\b|(?:\b\d+(?:\.\d*)?|\B\.\d+)(?:e[+-]?\d+)?", ignore_case=True),
    "operator": r"[<>]=?|[!=]=?=?|--?|\+\+?|&&?|\|\|?|[?*/~^%]",
    "punctuation": r"[{}\[\];(),.:]",
})

LANGUAGE = LanguageDefinition(id="clike", grammar=GRAMMAR)
