"""Priority-ordered, backtracking regex tokenizer.

Applies a Grammar to text by maintaining a list of segments. Unclaimed
text is a plain string; claimed text is a Token. Each rule, in grammar
order, scans the unclaimed segments and replaces each match with a Token,
leaving leftovers on either side as strings for later rules.

Matching modes:
- Non-greedy rules match against a single unclaimed segment. Text claimed
  by an earlier rule is invisible to them, and ``^`` anchors at the start
  of the segment.
- Greedy rules search the whole input from the segment's offset. A match
  must start in unclaimed text but may run over tokens claimed earlier;
  those are replaced, and the rules declared before the greedy one are
  re-run over the affected region.

Empty matches never produce tokens. The search resumes one character
further on, so zero-width patterns always terminate.

Thread Safety:
Tokenizer holds no per-call state. Grammars are read, never written.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tinta.errors import LanguageNotFoundError
from tinta.grammar import SELF, Grammar, Rule, RuleEntry
from tinta.tokens import Token, TokenStream

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tinta.grammar import InsideRef
    from tinta.registry import LanguageRegistry


@dataclass(slots=True)
class _Rematch:
    """Bounds for re-running earlier rules after a greedy match.

    Attributes:
        cause: (name, alternative index) of the greedy rule; the rematch
            pass stops when it reaches this rule.
        reach: Input offset past which the rematch pass does not scan.
            Grows when a nested match extends further.

    """

    cause: tuple[str, int]
    reach: int


def _length(segment: str | Token) -> int:
    if isinstance(segment, Token):
        return segment.length
    return len(segment)


def _match_pattern(rule: Rule, text: str, pos: int) -> tuple[int, int] | None:
    """Find the first non-empty token span for ``rule`` at or after ``pos``.

    Returns:
        (start, end) of the token in ``text`` with any lookbehind prefix
        already removed, or None if nothing matches.
    """
    pattern = rule.pattern
    size = len(text)
    while pos <= size:
        match = pattern.search(text, pos)
        if match is None:
            return None
        start = match.start()
        if rule.lookbehind:
            prefix = match.group(1)
            if prefix:
                start += len(prefix)
        end = match.end()
        if end > start:
            return start, end
        # Zero-width: advance at least one character
        pos = match.start() + 1
    return None


class Tokenizer:
    """Applies grammars to text.

    Usage:
        >>> tokenizer = Tokenizer(registry)
        >>> tokenizer.tokenize("x = 0x1f;", "clike")
        ['x ', Token(type='operator', content='=', alias=()), ' ', ...]

    Args:
        registry: Registry used to resolve language names (as the grammar
            argument, in ``inside`` references, and in ``rest``). Without
            one, only Grammar objects can be tokenized.

    """

    __slots__ = ("_registry",)

    def __init__(self, registry: LanguageRegistry | None = None) -> None:
        self._registry = registry

    @property
    def registry(self) -> LanguageRegistry | None:
        return self._registry

    def tokenize(self, text: str, grammar: Grammar | str) -> TokenStream:
        """Tokenize ``text`` with ``grammar``.

        Args:
            text: Source text
            grammar: A Grammar or a registered language name/alias

        Returns:
            Token stream whose leaf text concatenates back to ``text``

        Raises:
            LanguageNotFoundError: If a language name cannot be resolved
        """
        if isinstance(grammar, str):
            grammar = self._lookup(grammar)
        return self._tokenize(text, grammar)

    def _tokenize(self, text: str, grammar: Grammar) -> TokenStream:
        if not text:
            return []
        segments: TokenStream = [text]
        self._match_grammar(text, segments, grammar, 0, 0, None)
        return segments

    def _lookup(self, name: str) -> Grammar:
        if self._registry is None:
            raise LanguageNotFoundError(name, "no registry to resolve names")
        return self._registry.get(name)

    def _resolve(self, ref: InsideRef, current: Grammar) -> Grammar:
        if ref is SELF:
            return current
        if isinstance(ref, str):
            return self._lookup(ref)
        return ref

    def _entries(self, grammar: Grammar) -> Iterable[tuple[str, RuleEntry]]:
        if grammar.rest is None:
            return grammar.items()
        merged = dict(grammar.items())
        merged.update(self._resolve(grammar.rest, grammar).items())
        return merged.items()

    def _match_grammar(
        self,
        text: str,
        segments: TokenStream,
        grammar: Grammar,
        start_index: int,
        start_pos: int,
        rematch: _Rematch | None,
    ) -> None:
        """Apply every rule of ``grammar`` to ``segments`` in priority order.

        Scans from ``segments[start_index]``, which begins at input offset
        ``start_pos``. During a rematch pass, stops at the causing rule and
        does not scan past ``rematch.reach``.
        """
        for name, entry in self._entries(grammar):
            for alt, rule in enumerate(entry.rules):
                if rematch is not None and rematch.cause == (name, alt):
                    return

                index = start_index
                pos = start_pos
                while index < len(segments):
                    if rematch is not None and pos >= rematch.reach:
                        break

                    segment = segments[index]
                    if isinstance(segment, Token):
                        pos += segment.length
                        index += 1
                        continue

                    if rule.greedy:
                        found = _match_pattern(rule, text, pos)
                        if found is None:
                            break
                        match_start, match_end = found

                        # Move to the segment containing the match start
                        p = pos + _length(segments[index])
                        while match_start >= p:
                            index += 1
                            p += _length(segments[index])
                        p -= _length(segments[index])
                        pos = p

                        # A match starting inside a claimed token is invalid
                        if isinstance(segments[index], Token):
                            pos += _length(segments[index])
                            index += 1
                            continue

                        # Take every segment the match covers, plus any
                        # directly following unclaimed text
                        k = index
                        while k < len(segments) and (
                            p < match_end or isinstance(segments[k], str)
                        ):
                            p += _length(segments[k])
                            k += 1
                        remove_count = k - index
                        source = text[pos:p]
                        match_start -= pos
                        match_end -= pos
                    else:
                        found = _match_pattern(rule, segment, 0)
                        if found is None:
                            pos += len(segment)
                            index += 1
                            continue
                        match_start, match_end = found
                        remove_count = 1
                        source = segment

                    before = source[:match_start]
                    matched = source[match_start:match_end]
                    after = source[match_end:]

                    reach = pos + len(source)
                    if rematch is not None and reach > rematch.reach:
                        rematch.reach = reach

                    if rule.inside is not None:
                        inner = self._resolve(rule.inside, grammar)
                        content: str | TokenStream = self._tokenize(matched, inner)
                    else:
                        content = matched
                    token = Token(name, content, rule.alias, len(matched))

                    replacement: TokenStream = []
                    if before:
                        replacement.append(before)
                    replacement.append(token)
                    if after:
                        replacement.append(after)
                    segments[index : index + remove_count] = replacement

                    if before:
                        index += 1
                        pos += len(before)

                    if remove_count > 1:
                        nested = _Rematch(cause=(name, alt), reach=reach)
                        self._match_grammar(text, segments, grammar, index, pos, nested)
                        if rematch is not None and nested.reach > rematch.reach:
                            rematch.reach = nested.reach

                    pos += token.length
                    index += 1


def tokenize(
    text: str,
    grammar: Grammar | str,
    *,
    registry: LanguageRegistry | None = None,
) -> TokenStream:
    """Tokenize ``text`` with ``grammar``.

    Language names resolve through ``registry``, or through the shared
    default registry of built-in languages when none is given.

    Example:
        >>> g = Grammar({"number": r"\\d+", "word": r"[a-z]+"})
        >>> tokenize("ab12cd", g)
        [Token(type='word', content='ab', alias=()), Token(type='number', ...), ...]
    """
    if registry is None:
        from tinta.registry import get_default_registry

        registry = get_default_registry()
    return Tokenizer(registry).tokenize(text, grammar)


__all__ = ["Tokenizer", "tokenize"]
