"""Exception classes for Tinta.

Configuration problems (bad grammar shapes, malformed patterns, missing
language references) surface at grammar construction or registration time.
Tokenization itself never raises for a well-formed grammar.
"""

from __future__ import annotations


class TintaError(Exception):
    """Base exception for all Tinta errors.

    Subclass this for specific error categories.
    """

    pass


class GrammarError(TintaError):
    """Error in a grammar definition.

    Raised when a grammar entry has an invalid shape, a rule combines
    incompatible options, or an operation references a missing entry.
    """

    pass


class PatternError(GrammarError):
    """A rule pattern is not a valid regular expression."""

    def __init__(self, pattern: str, message: str) -> None:
        """Initialize pattern error.

        Args:
            pattern: Source of the offending pattern
            message: Description from the regex compiler
        """
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {message}")


class LanguageNotFoundError(GrammarError):
    """A language name could not be resolved through the registry.

    Raised when registering a grammar that references (or requires) an
    unregistered language, and when tokenizing against an unknown name.
    """

    def __init__(self, language: str, message: str | None = None) -> None:
        """Initialize lookup error.

        Args:
            language: The name that failed to resolve
            message: Optional context (e.g., which registration needed it)
        """
        self.language = language
        detail = f": {message}" if message else ""
        super().__init__(f"Language '{language}' is not registered{detail}")
