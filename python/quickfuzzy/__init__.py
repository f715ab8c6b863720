"""
quickfuzzy - Fast typo-tolerant string lookup

A two-stage fuzzy matcher for names, codes and short identifiers: Nilsimsa
fingerprints narrow a length-bucketed corpus, then Jaro-Winkler picks the
winner.

Example usage:
    >>> import quickfuzzy as qf

    # Build a matcher over a fixed corpus
    >>> matcher = qf.FuzzyMatcher(["Kyivska", "Lvivska", "Odeska"], mode="static")
    >>> matcher.search("Kyivsca")
    ['Kyivska']

    # Search an explicit candidate list instead of the corpus
    >>> matcher.search("Odesa", ["Odeska", "Lvivska"])
    ['Odeska']

    # Raw fingerprints
    >>> fp = qf.fingerprint("hello world")
    >>> qf.compare_raw(fp, fp)
    128
"""

from importlib.metadata import version as _get_version

from quickfuzzy.cache import LRUCache
from quickfuzzy.enums import Mode
from quickfuzzy.exceptions import FingerprintError, QuickFuzzyError, ValidationError
from quickfuzzy.index import BUCKET_SIZE, BucketIndex, bucket_of
from quickfuzzy.jaro import jaro_similarity, jaro_winkler_similarity
from quickfuzzy.matcher import FuzzyMatcher, ThreadSafeFuzzyMatcher
from quickfuzzy.nilsimsa import (
    FINGERPRINT_SIZE,
    Nilsimsa,
    compare,
    compare_raw,
    fingerprint,
    from_hex,
    to_hex,
)
from quickfuzzy.normalization import create_normalizer, normalize_string
from quickfuzzy.options import Options

__version__ = _get_version("quickfuzzy")
__all__ = [
    # Version
    "__version__",
    # Exceptions
    "QuickFuzzyError",
    "ValidationError",
    "FingerprintError",
    # Enums and configuration
    "Mode",
    "Options",
    # Matchers
    "FuzzyMatcher",
    "ThreadSafeFuzzyMatcher",
    # Fingerprints
    "FINGERPRINT_SIZE",
    "Nilsimsa",
    "fingerprint",
    "compare_raw",
    "compare",
    "to_hex",
    "from_hex",
    # Building blocks
    "BucketIndex",
    "BUCKET_SIZE",
    "bucket_of",
    "LRUCache",
    "jaro_similarity",
    "jaro_winkler_similarity",
    # Normalization
    "create_normalizer",
    "normalize_string",
]


# Convenience aliases
similarity = jaro_winkler_similarity
