"""Enums for quickfuzzy API."""

from enum import Enum


class Mode(str, Enum):
    """Corpus lifecycle modes for FuzzyMatcher.

    String values are accepted anywhere a Mode is expected.

    Example:
        >>> from quickfuzzy import FuzzyMatcher, Mode
        >>> matcher = FuzzyMatcher(["apple", "banana"], mode=Mode.STATIC)
    """

    STATIC = "static"
    """Corpus fixed at construction; unknown strings are never hashed on the fly"""

    DYNAMIC = "dynamic"
    """Unknown candidate strings are hashed and indexed on first encounter"""


__all__ = ["Mode"]
