"""Length-bucketed fingerprint index.

Strings are sharded by ``len(text) // BUCKET_SIZE`` (code points of the raw,
un-normalized string), so a query only has to be compared against entries
whose length is close to its own.

Warning:
    This class is NOT thread-safe. ``get_or_insert`` mutates the index during
    what is otherwise a read; guard it with the same lock as ``insert``.
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from quickfuzzy.exceptions import FingerprintError
from quickfuzzy.nilsimsa import FINGERPRINT_SIZE, from_hex

logger = logging.getLogger(__name__)

BUCKET_SIZE = 4
MIN_LENGTH_TOLERANCE = 3


def bucket_of(length: int) -> int:
    """Bucket key for a string of ``length`` code points."""
    return length // BUCKET_SIZE


def length_tolerance(length: int, tolerance_ratio: float) -> int:
    """Absolute length window for a query: at least 3 characters."""
    return max(MIN_LENGTH_TOLERANCE, math.floor(length * tolerance_ratio))


def _coerce_fingerprint(text: str, value: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(value, str):
        value = from_hex(value)
    value = bytes(value)
    if len(value) != FINGERPRINT_SIZE:
        raise FingerprintError(
            f"Fingerprint for {text!r} must be {FINGERPRINT_SIZE} bytes, got {len(value)}"
        )
    return value


class BucketIndex:
    """
    Mapping of corpus strings to fingerprints, grouped by length bucket.

    Each string lives in exactly one bucket; inserting it again overwrites
    its fingerprint.

    Example:
        >>> from quickfuzzy.nilsimsa import fingerprint
        >>> index = BucketIndex()
        >>> index.insert("hello", fingerprint("hello"))
        >>> "hello" in index
        True
        >>> [text for text, _ in index.candidates_near(6, 0.2)]
        ['hello']
    """

    def __init__(self):
        self._buckets: Dict[int, Dict[str, bytes]] = {}
        self._size = 0

    @classmethod
    def from_hash_map(cls, hash_map: Mapping[str, Union[bytes, str]]) -> "BucketIndex":
        """
        Build an index from precomputed fingerprints.

        Args:
            hash_map: Mapping of string to fingerprint, either 32 raw bytes or
                a 64 character hex digest.

        Raises:
            FingerprintError: If any fingerprint is malformed.
        """
        index = cls()
        for text, value in hash_map.items():
            index.insert(text, _coerce_fingerprint(text, value))
        logger.debug("Loaded %d prebuilt fingerprints into %d buckets", len(index), len(index._buckets))
        return index

    def insert(self, text: str, fp: bytes) -> None:
        """Add ``text`` or overwrite its fingerprint."""
        bucket = self._buckets.setdefault(bucket_of(len(text)), {})
        if text not in bucket:
            self._size += 1
        bucket[text] = fp

    def get(self, text: str) -> Optional[bytes]:
        bucket = self._buckets.get(bucket_of(len(text)))
        if bucket is None:
            return None
        return bucket.get(text)

    def get_or_insert(self, text: str, compute: Callable[[str], bytes]) -> bytes:
        """Return the stored fingerprint, computing and storing it if absent.

        This is the only read path that mutates the index.
        """
        fp = self.get(text)
        if fp is None:
            fp = compute(text)
            self.insert(text, fp)
            logger.debug("Lazily indexed %r", text)
        return fp

    def candidates_near(self, length: int, tolerance_ratio: float) -> Iterator[Tuple[str, bytes]]:
        """
        Yield ``(text, fingerprint)`` for strings of roughly ``length`` characters.

        Covers every bucket from ``bucket_of(length - tol)`` to
        ``bucket_of(length + tol)`` inclusive, where
        ``tol = max(3, floor(length * tolerance_ratio))``. Entries come out in
        bucket order, then insertion order. Each call starts a fresh
        enumeration.
        """
        tol = length_tolerance(length, tolerance_ratio)
        low = bucket_of(max(0, length - tol))
        high = bucket_of(length + tol)
        for key in range(low, high + 1):
            bucket = self._buckets.get(key)
            if bucket:
                yield from bucket.items()

    def buckets(self) -> List[int]:
        """Return the populated bucket keys in ascending order."""
        return sorted(key for key, bucket in self._buckets.items() if bucket)

    def items(self) -> Iterator[Tuple[str, bytes]]:
        for key in self.buckets():
            yield from self._buckets[key].items()

    def clear(self) -> None:
        self._buckets.clear()
        self._size = 0

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        return self.get(text) is not None

    def __iter__(self) -> Iterator[str]:
        for text, _ in self.items():
            yield text

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"BucketIndex(size={self._size}, buckets={len(self._buckets)})"


__all__ = ["BucketIndex", "BUCKET_SIZE", "bucket_of", "length_tolerance"]
