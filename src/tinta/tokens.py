"""Token definitions for the Tinta tokenizer.

The tokenizer produces a TokenStream: a list whose items are either plain
strings (text no rule claimed) or Token objects. A Token's content is either
its matched text or, when its rule has an inside grammar, a nested stream.

Concatenating every string leaf of a stream in order reproduces the
tokenized input exactly:

    >>> stream = tokenize("ab12cd", grammar)
    >>> text_of(stream) == "ab12cd"
    True

Thread Safety:
Streams are created fresh per tokenize call and owned by the caller. Hooks
may rewrite them in place between lifecycle phases.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

type TokenStream = list[str | Token]


@dataclass(slots=True)
class Token:
    """A typed span of the input.

    Attributes:
        type: Token-type name (the grammar key that produced it)
        content: Matched text, or the nested stream from an inside grammar
        alias: Extra names, in order, without duplicates
        length: Length of the matched text. Computed from content when not
            given; excluded from equality and repr.

    """

    type: str
    content: str | TokenStream
    alias: tuple[str, ...] = ()
    length: int = field(default=-1, repr=False, compare=False)

    def __post_init__(self) -> None:
        alias: Any = self.alias
        if isinstance(alias, str):
            alias = (alias,)
        self.alias = tuple(dict.fromkeys(alias))
        if self.length < 0:
            self.length = len(text_of(self.content))

    @property
    def text(self) -> str:
        """The matched text, with any nesting flattened."""
        return text_of(self.content)


def text_of(content: str | Token | Iterable[str | Token]) -> str:
    """Concatenate the leaf text of a stream, token, or content value."""
    if isinstance(content, str):
        return content
    if isinstance(content, Token):
        return text_of(content.content)
    return "".join(text_of(item) for item in content)


def iter_tokens(stream: Iterable[str | Token]) -> Iterator[Token]:
    """Yield every Token in ``stream``, depth-first, parents before children."""
    for item in stream:
        if isinstance(item, Token):
            yield item
            if not isinstance(item.content, str):
                yield from iter_tokens(item.content)


def simplify(stream: Iterable[str | Token]) -> list[Any]:
    """Reduce a stream to nested plain lists for quick comparison.

    Each Token becomes ``[type, content]`` where content is a string or a
    simplified nested list. Whitespace-only string leaves are dropped.

    Example:
        >>> simplify(tokenize("if (x)", grammar))
        [['keyword', 'if'], ['punctuation', '('], 'x', ['punctuation', ')']]
    """
    result: list[Any] = []
    for item in stream:
        if isinstance(item, Token):
            content = item.content if isinstance(item.content, str) else simplify(item.content)
            result.append([item.type, content])
        elif item.strip():
            result.append(item)
    return result


__all__ = ["Token", "TokenStream", "iter_tokens", "simplify", "text_of"]
