"""Histogram Query Language (HQL) error types."""

from __future__ import annotations


class HQLError(ValueError):
    """Base class for all HQL errors."""


class LexError(HQLError):
    """Raised when query text contains a character no token matches."""

    def __init__(self, message: str, text: str = "", position: int = -1) -> None:
        self.text = text
        self.position = position
        super().__init__(message)


class QuerySyntaxError(HQLError):
    """Raised when a token sequence violates the HQL grammar."""

    def __init__(self, message: str, text: str = "") -> None:
        self.text = text
        super().__init__(message)


class CompilationError(HQLError):
    """Raised when a query source line cannot be compiled.

    Attributes:
        source: The offending logical source line.
    """

    def __init__(self, message: str, source: str = "") -> None:
        self.source = source
        super().__init__(message)


class DegenerateScoreError(HQLError):
    """Raised when a score cannot be normalized (zero-width score range)."""
