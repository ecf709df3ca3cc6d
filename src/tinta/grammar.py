"""Grammar model: rules, rule alternatives, and ordered grammars.

A Grammar is an ordered mapping from token-type name to the rule(s) that
produce tokens of that type. Order is priority: the tokenizer tries entries
top-to-bottom, and within an entry tries alternatives in declared order.

Authoring shorthand is coerced on assignment:

    >>> g = Grammar({
    ...     "comment": r"#.*",
    ...     "string": {"pattern": r'"[^"]*"', "greedy": True},
    ...     "number": [r"0x[\\da-f]+", r"\\d+"],
    ... })
    >>> g["number"]
    Alternatives(rules=(...))

Thread Safety:
Rules and entries are frozen. A Grammar is mutable while it is being
authored and must not be mutated while any tokenize call is applying it.
extend() and insert_before() return new grammars and leave their inputs
untouched.

"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from tinta.errors import GrammarError, PatternError


class _SelfReference(Enum):
    SELF = "self"

    def __repr__(self) -> str:
        return "SELF"


# Sentinel for `inside`: recurse into the grammar currently being applied
SELF: Final = _SelfReference.SELF

type InsideRef = Grammar | str | _SelfReference


@dataclass(frozen=True, slots=True)
class Rule:
    """One pattern-matching directive within a grammar.

    Attributes:
        pattern: Regular expression (string or compiled). Strings are compiled
            on construction, so a malformed pattern fails here rather than
            during tokenization.
        lookbehind: The first capturing group is context that belongs to the
            preceding text; it is left out of the token.
        greedy: Match against the whole input instead of a single segment,
            allowing the match to run over text claimed by earlier rules.
        alias: Extra names attached to every token this rule produces.
        inside: Grammar used to tokenize the matched text. A Grammar, a
            registered language name, or SELF.
        ignore_case: Match case-insensitively.

    """

    pattern: re.Pattern[str]
    lookbehind: bool = False
    greedy: bool = False
    alias: tuple[str, ...] = ()
    inside: InsideRef | None = None
    ignore_case: bool = False

    def __post_init__(self) -> None:
        pattern: Any = self.pattern
        if isinstance(pattern, str):
            flags = re.IGNORECASE if self.ignore_case else 0
            try:
                pattern = re.compile(pattern, flags)
            except re.error as exc:
                raise PatternError(self.pattern, str(exc)) from exc
        elif isinstance(pattern, re.Pattern):
            if self.ignore_case and not pattern.flags & re.IGNORECASE:
                pattern = re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
        else:
            msg = f"Rule pattern must be a string or compiled pattern, got {type(pattern).__name__}"
            raise GrammarError(msg)

        if self.lookbehind and pattern.groups < 1:
            msg = f"Lookbehind rule {pattern.pattern!r} needs a capturing group for its prefix"
            raise GrammarError(msg)

        alias: Any = self.alias
        if isinstance(alias, str):
            alias = (alias,)
        alias = tuple(dict.fromkeys(alias))

        inside: Any = self.inside
        if inside == "self":
            inside = SELF
        elif isinstance(inside, Mapping) and not isinstance(inside, Grammar):
            inside = Grammar(inside)
        elif inside is not None and not isinstance(inside, (Grammar, str, _SelfReference)):
            msg = f"Rule inside must be a grammar, a language name or SELF, got {type(inside).__name__}"
            raise GrammarError(msg)

        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "alias", alias)
        object.__setattr__(self, "inside", inside)

    def _clone(self, memo: dict[int, Grammar]) -> Rule:
        if isinstance(self.inside, Grammar):
            return dataclasses.replace(self, inside=self.inside._clone(memo))
        return self


@dataclass(frozen=True, slots=True)
class Single:
    """A token-type name bound to exactly one rule."""

    rule: Rule

    @property
    def rules(self) -> tuple[Rule, ...]:
        return (self.rule,)

    def _clone(self, memo: dict[int, Grammar]) -> Single:
        return Single(self.rule._clone(memo))


@dataclass(frozen=True, slots=True)
class Alternatives:
    """A token-type name bound to alternative rules, tried in order."""

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        rules = tuple(self.rules)
        if not rules:
            raise GrammarError("Alternatives need at least one rule")
        object.__setattr__(self, "rules", rules)

    def _clone(self, memo: dict[int, Grammar]) -> Alternatives:
        return Alternatives(tuple(rule._clone(memo) for rule in self.rules))


type RuleEntry = Single | Alternatives


def as_rule(value: Any) -> Rule:
    """Coerce authoring shorthand into a Rule.

    Accepts a Rule, a pattern string, a compiled pattern, or a mapping of
    Rule keyword arguments.

    Raises:
        GrammarError: For any other shape
    """
    if isinstance(value, Rule):
        return value
    if isinstance(value, (str, re.Pattern)):
        return Rule(value)
    if isinstance(value, Mapping) and not isinstance(value, Grammar):
        try:
            return Rule(**value)
        except TypeError as exc:
            msg = f"Invalid rule options {sorted(value)}: {exc}"
            raise GrammarError(msg) from exc
    msg = f"Cannot build a rule from {type(value).__name__}"
    raise GrammarError(msg)


def as_entry(value: Any) -> RuleEntry:
    """Coerce a grammar value into Single or Alternatives.

    A list or tuple becomes Alternatives (in order); anything else must be
    accepted by as_rule().
    """
    if isinstance(value, (Single, Alternatives)):
        return value
    if isinstance(value, (list, tuple)):
        return Alternatives(tuple(as_rule(item) for item in value))
    return Single(as_rule(value))


class Grammar(MutableMapping[str, RuleEntry]):
    """Ordered rule set for one language or nested context.

    Iteration order is priority order. Assigning to an existing name keeps
    its position; new names are appended.

    Attributes:
        rest: Optional grammar (or registered language name) whose entries
            are applied after this grammar's own entries.

    """

    __slots__ = ("_entries", "_rest")

    def __init__(
        self,
        entries: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        *,
        rest: Grammar | Mapping[str, Any] | str | None = None,
    ) -> None:
        self._entries: dict[str, RuleEntry] = {}
        self._rest: Grammar | str | None = None
        self.rest = rest
        if entries is not None:
            self.update(entries)

    @property
    def rest(self) -> Grammar | str | None:
        return self._rest

    @rest.setter
    def rest(self, value: Grammar | Mapping[str, Any] | str | None) -> None:
        if isinstance(value, Mapping) and not isinstance(value, Grammar):
            value = Grammar(value)
        elif value is not None and not isinstance(value, (Grammar, str)):
            msg = f"Grammar rest must be a grammar or a language name, got {type(value).__name__}"
            raise GrammarError(msg)
        self._rest = value

    def __getitem__(self, name: str) -> RuleEntry:
        return self._entries[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if not isinstance(name, str) or not name:
            msg = f"Token type names must be non-empty strings, got {name!r}"
            raise GrammarError(msg)
        self._entries[name] = as_entry(value)

    def __delitem__(self, name: str) -> None:
        del self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grammar):
            return NotImplemented
        return (
            list(self._entries.items()) == list(other._entries.items())
            and self._rest == other._rest
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        names = ", ".join(self._entries)
        rest = f", rest={self._rest!r}" if isinstance(self._rest, str) else ""
        return f"Grammar([{names}]{rest})"

    def rules(self, name: str) -> tuple[Rule, ...]:
        """Rules bound to ``name``, in priority order."""
        return self._entries[name].rules

    def copy(self) -> Grammar:
        """Deep copy of this grammar and every nested grammar.

        Cycles and shared sub-grammars keep the same shape in the copy.
        Compiled patterns are shared (they are immutable).
        """
        return self._clone({})

    def _clone(self, memo: dict[int, Grammar]) -> Grammar:
        existing = memo.get(id(self))
        if existing is not None:
            return existing
        clone = Grammar()
        memo[id(self)] = clone
        for name, entry in self._entries.items():
            clone._entries[name] = entry._clone(memo)
        clone._rest = self._rest._clone(memo) if isinstance(self._rest, Grammar) else self._rest
        return clone

    def extend(self, overrides: Mapping[str, Any]) -> Grammar:
        """Return a deep copy with ``overrides`` applied.

        Entries whose name already exists are replaced at their original
        position; new names are appended in the order given.

        Example:
            >>> css_colors = css.extend({"comment": r"/\\*.*?\\*/", "color": r"\\b(?:red|blue)\\b"})
        """
        grammar = self.copy()
        grammar.update(overrides)
        return grammar

    def insert_before(self, anchor: str, insertions: Mapping[str, Any]) -> Grammar:
        """Return a grammar with ``insertions`` spliced in before ``anchor``.

        Every other entry keeps its relative order. A name in ``insertions``
        that already exists here is dropped from its old position, so
        re-supplying the anchor inserts *after* it:

            >>> g.insert_before("comment", {"comment": g["comment"], "doc": r"///.*"})

        Raises:
            GrammarError: If ``anchor`` is not an entry of this grammar
        """
        if anchor not in self._entries:
            msg = f"Cannot insert before unknown entry '{anchor}'"
            raise GrammarError(msg)

        additions = Grammar(insertions)
        result = Grammar(rest=self._rest)
        for name, entry in self._entries.items():
            if name == anchor:
                result._entries.update(additions._entries)
            if name not in additions._entries:
                result._entries[name] = entry
        return result

    def references(self) -> Iterator[str]:
        """Yield each language name referenced anywhere in this grammar.

        Follows nested grammars through ``inside`` and ``rest``; each
        grammar object is visited once, so cyclic grammars terminate.
        """
        seen_grammars: set[int] = set()
        seen_names: set[str] = set()
        stack: list[Grammar] = [self]
        while stack:
            grammar = stack.pop()
            if id(grammar) in seen_grammars:
                continue
            seen_grammars.add(id(grammar))

            refs: list[Any] = [grammar._rest]
            for entry in grammar._entries.values():
                refs.extend(rule.inside for rule in entry.rules)

            for ref in refs:
                if isinstance(ref, Grammar):
                    stack.append(ref)
                elif isinstance(ref, str) and ref not in seen_names:
                    seen_names.add(ref)
                    yield ref


def extend(base: Grammar, overrides: Mapping[str, Any]) -> Grammar:
    """Deep-copy ``base`` and apply ``overrides``. See Grammar.extend."""
    return base.extend(overrides)


def insert_before(grammar: Grammar, anchor: str, insertions: Mapping[str, Any]) -> Grammar:
    """Splice ``insertions`` in before ``anchor``. See Grammar.insert_before."""
    return grammar.insert_before(anchor, insertions)


__all__ = [
    "SELF",
    "Alternatives",
    "Grammar",
    "Rule",
    "RuleEntry",
    "Single",
    "as_entry",
    "as_rule",
    "extend",
    "insert_before",
]
