"""String normalization applied before fingerprinting.

Steps, in order: Unicode NFKD decomposition, optional lowercasing, optional
removal of diacritics (combining marks and spacing modifiers), optional
removal of symbols, optional whitespace collapsing, then trimming.
"""

import re
import unicodedata
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from quickfuzzy.options import Options

_WHITESPACE_RE = re.compile(r"\s+")


def _is_diacritic(ch: str) -> bool:
    # Combining marks, modifier symbols (^ ` ¨ ´ ...) and spacing modifier letters
    return (
        unicodedata.combining(ch) != 0
        or unicodedata.category(ch) == "Sk"
        or "\u02b0" <= ch <= "\u02ff"
    )


def _strip_diacritics(text: str) -> str:
    return "".join(ch for ch in text if not _is_diacritic(ch))


def _strip_symbols(text: str) -> str:
    # Keep letters, numbers and whitespace
    return "".join(
        ch for ch in text
        if ch.isspace() or unicodedata.category(ch)[0] in ("L", "N")
    )


def _identity(text: str) -> str:
    return text


def create_normalizer(options: "Options") -> Callable[[str], str]:
    """Build a normalization function from the flags in ``options``.

    Returns the identity function when ``options.disable_normalization`` is
    set.
    """
    if options.disable_normalization:
        return _identity

    ignore_case = options.ignore_case
    remove_diacritics = options.remove_diacritics
    ignore_symbols = options.ignore_symbols
    normalize_whitespace = options.normalize_whitespace

    def normalize(text: str) -> str:
        out = unicodedata.normalize("NFKD", text)
        if ignore_case:
            out = out.lower()
        if remove_diacritics:
            out = _strip_diacritics(out)
        if ignore_symbols:
            out = _strip_symbols(out)
        if normalize_whitespace:
            out = _WHITESPACE_RE.sub(" ", out)
        return out.strip()

    return normalize


def normalize_string(
    text: str,
    *,
    ignore_case: bool = False,
    ignore_symbols: bool = False,
    remove_diacritics: bool = True,
    normalize_whitespace: bool = True,
) -> str:
    """Normalize a single string with the given flags.

    Example:
        >>> normalize_string("  Crème   Brûlée ", ignore_case=True)
        'creme brulee'
    """
    from quickfuzzy.options import Options

    options = Options(
        ignore_case=ignore_case,
        ignore_symbols=ignore_symbols,
        remove_diacritics=remove_diacritics,
        normalize_whitespace=normalize_whitespace,
    )
    return create_normalizer(options)(text)


__all__ = ["create_normalizer", "normalize_string"]
