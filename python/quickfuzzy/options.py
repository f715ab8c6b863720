"""Configuration for FuzzyMatcher.

Options are validated eagerly and never clamped: any out of range value
raises ValidationError at construction time.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Union

from quickfuzzy._utils import check_non_negative, normalize_mode
from quickfuzzy.enums import Mode
from quickfuzzy.exceptions import ValidationError

_NUMERIC_FIELDS = (
    "max_query_cache",
    "string_length_tolerance",
    "hash_min_tolerance",
    "hash_base_tolerance",
    "hash_length_penalty",
    "hash_entropy_boost",
)


@dataclass(frozen=True)
class Options:
    """
    Immutable matcher configuration.

    Attributes:
        mode: "static" or "dynamic" corpus handling (see Mode).
        max_query_cache: Capacity of the query fingerprint LRU cache (0 disables it).
        string_length_tolerance: Fraction of the query length a candidate may
            differ by and still be hash-compared, in [0, 1].
        hash_min_tolerance: Lower bound for the adaptive hash score tolerance.
        hash_base_tolerance: Starting point of the adaptive tolerance.
        hash_length_penalty: Tolerance removed per log2 of query length.
        hash_entropy_boost: Tolerance added for repetitive (low entropy) queries.
        ignore_case: Lowercase before fingerprinting.
        ignore_symbols: Drop characters that are not letters, digits or whitespace.
        remove_diacritics: Drop combining marks and spacing modifiers (^ ` ´ ¨)
            after NFKD decomposition.
        normalize_whitespace: Collapse whitespace runs to a single space.
        disable_normalization: Skip normalization entirely.
    """

    mode: Union[str, Mode] = Mode.DYNAMIC
    max_query_cache: int = 10_000
    string_length_tolerance: float = 0.2
    hash_min_tolerance: float = 4
    hash_base_tolerance: float = 16
    hash_length_penalty: float = 2
    hash_entropy_boost: float = 4
    ignore_case: bool = False
    ignore_symbols: bool = False
    remove_diacritics: bool = True
    normalize_whitespace: bool = True
    disable_normalization: bool = False

    def __post_init__(self):
        object.__setattr__(self, "mode", normalize_mode(self.mode))

        for name in _NUMERIC_FIELDS:
            check_non_negative(name, getattr(self, name))

        if self.string_length_tolerance > 1:
            raise ValidationError(
                f"string_length_tolerance must be in range [0, 1], got {self.string_length_tolerance}"
            )
        if self.max_query_cache != int(self.max_query_cache):
            raise ValidationError(
                f"max_query_cache must be an integer, got {self.max_query_cache}"
            )

    @classmethod
    def create(cls, **overrides: Any) -> "Options":
        """Build Options from keyword overrides, rejecting unknown names.

        Example:
            >>> Options.create(mode="static", ignore_case=True).mode
            <Mode.STATIC: 'static'>
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s): {unknown}. Valid options: {sorted(known)}"
            )
        return cls(**overrides)

    def replace(self, **overrides: Any) -> "Options":
        """Return a validated copy with some fields changed."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s): {unknown}. Valid options: {sorted(known)}"
            )
        return replace(self, **overrides)

    @property
    def is_static(self) -> bool:
        return self.mode is Mode.STATIC

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        return data


__all__ = ["Options"]
