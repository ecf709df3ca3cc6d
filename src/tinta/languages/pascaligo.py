"""PascaLIGO, the Pascal-like smart contract language for Tezos."""

from tinta.grammar import Grammar, Rule
from tinta.registry import GrammarContext, LanguageDefinition

_BRACES = r"\((?:[^()]|\((?:[^()]|\([^()]*\))*\))*\)"
_TYPE = r"(?:\b\w+(?:<braces>)?|<braces>)".replace("<braces>", _BRACES)


def _build(ctx: GrammarContext) -> Grammar:
    # Filled in below once the entries it borrows exist
    class_name_inside = Grammar()

    pascaligo = Grammar({
        "comment": r"\(\*[\s\S]+?\*\)|//.*",
        "string": Rule(r"""(["'`])(?:\\[\s\S]|(?!\1)[^\\])*\1|\^[a-z]""", greedy=True, ignore_case=True),
        "class-name": [
            Rule(
                r"(\btype\s+\w+\s+is\s+)" + _TYPE,
                lookbehind=True,
                ignore_case=True,
                inside=class_name_inside,
            ),
            Rule(_TYPE + r"(?=\s+is\b)", ignore_case=True, inside=class_name_inside),
            Rule(r"(:\s*)" + _TYPE, lookbehind=True, inside=class_name_inside),
        ],
        "keyword": Rule(
            r"(^|[^&])\b(?:begin|block|case|const|else|end|fail|for|from|function|if|is|nil|of"
            r"|remove|return|skip|then|type|var|while|with)\b",
            lookbehind=True,
            ignore_case=True,
        ),
        "boolean": Rule(r"(^|[^&])\b(?:False|True)\b", lookbehind=True, ignore_case=True),
        "builtin": Rule(
            r"(^|[^&])\b(?:bool|int|list|map|nat|record|string|unit)\b",
            lookbehind=True,
            ignore_case=True,
        ),
        "function": r"\b\w+(?=\s*\()",
        "number": [
            # Hexadecimal, octal and binary
            Rule(r"%[01]+|&[0-7]+|\$[a-f\d]+", ignore_case=True),
            # Decimal
            Rule(r"\b\d+(?:\.\d+)?(?:e[+-]?\d+)?(?:mtz|n)?", ignore_case=True),
        ],
        "operator": r"->|=/=|\.\.|\*\*|:=|<[<=>]?|>[>=]?|[+\-*/]=?|[@^=|]|\b(?:and|mod|or)\b",
        "punctuation": r"\(\.|\.\)|[()\[\]:;,.{}]",
    })

    for key in ("comment", "keyword", "builtin", "operator", "punctuation"):
        class_name_inside[key] = pascaligo[key]

    return pascaligo


LANGUAGE = LanguageDefinition(id="pascaligo", grammar=_build)
