"""Q#, Microsoft's quantum programming language.

Built on the C-like base grammar. String interpolation expressions are
tokenized recursively with the registered ``qsharp`` grammar itself.
"""

import re

from tinta.grammar import Grammar, Rule
from tinta.registry import GrammarContext, LanguageDefinition

_PLACEHOLDER_RE = re.compile(r"<<(\d+)>>")

# https://docs.microsoft.com/en-us/azure/quantum/user-guide/language/typesystem/
_TYPE_KEYWORDS = (
    "Adj BigInt Bool Ctl Double false Int One Pauli PauliI PauliX PauliY PauliZ Qubit Range"
    " Result String true Unit Zero"
)
_OTHER_KEYWORDS = (
    "Adjoint adjoint apply as auto body borrow borrowing Controlled controlled distribute elif"
    " else fail fixup for function if in internal intrinsic invert is let mutable namespace new"
    " newtype open operation repeat return self set until use using while within"
)


def _replace(pattern: str, replacements: list[str]) -> str:
    """Substitute each ``<<n>>`` with the n-th replacement, as a group.

    Plain text substitution: backreferences inside replacements are not
    renumbered.
    """
    return _PLACEHOLDER_RE.sub(lambda m: "(?:" + replacements[int(m.group(1))] + ")", pattern)


def _nested(pattern: str, depth_log2: int) -> str:
    """Expand ``<<self>>`` recursively, allowing 2**depth_log2 nesting levels."""
    for _ in range(depth_log2):
        pattern = pattern.replace("<<self>>", "(?:" + pattern + ")")
    return pattern.replace("<<self>>", r"[^\s\S]")


def _keywords(words: str) -> str:
    return r"\b(?:" + "|".join(words.split()) + r")\b"


def _build(ctx: GrammarContext) -> Grammar:
    keywords = re.compile(_keywords(_TYPE_KEYWORDS + " " + _OTHER_KEYWORDS))

    identifier = r"\b[A-Za-z_]\w*\b"
    qualified_name = _replace(r"<<0>>(?:\s*\.\s*<<0>>)*", [identifier])
    type_inside = {
        "keyword": keywords,
        "punctuation": r"[<>()?,.:\[\]]",
    }

    regular_string = r'"(?:\\.|[^\\"])*"'

    qsharp = ctx.extend("clike", {
        "comment": r"//.*",
        "string": [
            Rule(_replace(r"(^|[^$\\])<<0>>", [regular_string]), lookbehind=True, greedy=True),
        ],
        "class-name": [
            # open Microsoft.Quantum.Canon;
            # open Microsoft.Quantum.Canon as CN;
            Rule(
                _replace(r"(\b(?:as|open)\s+)<<0>>(?=\s*(?:;|as\b))", [qualified_name]),
                lookbehind=True,
                inside=type_inside,
            ),
            # namespace Quantum.App1;
            Rule(
                _replace(r"(\bnamespace\s+)<<0>>(?=\s*\{)", [qualified_name]),
                lookbehind=True,
                inside=type_inside,
            ),
        ],
        "keyword": keywords,
        "number": Rule(
            r"(?:\b0(?:x[\da-f]+|b[01]+|o[0-7]+)|(?:\B\.\d+|\b\d+(?:\.\d*)?)(?:e[-+]?\d+)?)l?\b",
            ignore_case=True,
        ),
        "operator": (
            r"\band=|\bor=|\band\b|\bnot\b|\bor\b|<[-=]|[-=]>|>>>=?|<<<=?|\^\^\^=?|\|\|\|=?"
            r"|&&&=?|w/=?|~~~|[*/+\-^=!%]=?"
        ),
        "punctuation": r"::|[{}\[\];(),.:]",
    })

    qsharp = qsharp.insert_before("number", {
        "range": {"pattern": r"\.\.", "alias": "operator"},
    })

    # single line
    interpolation_expr = _nested(
        _replace(r'\{(?:[^"{}]|<<0>>|<<self>>)*\}', [regular_string]), 2
    )

    return qsharp.insert_before("string", {
        "interpolation-string": Rule(
            _replace(r'\$"(?:\\.|<<0>>|[^\\"{])*"', [interpolation_expr]),
            greedy=True,
            inside={
                "interpolation": Rule(
                    _replace(r"((?:^|[^\\])(?:\\\\)*)<<0>>", [interpolation_expr]),
                    lookbehind=True,
                    inside={
                        "punctuation": r"^\{|\}$",
                        "expression": Rule(
                            r"[\s\S]+", alias="language-qsharp", inside=ctx.name
                        ),
                    },
                ),
                "string": r"[\s\S]+",
            },
        ),
    })


LANGUAGE = LanguageDefinition(id="qsharp", grammar=_build, aliases=("qs",), require=("clike",))
