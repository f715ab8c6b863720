"""Nilsimsa locality-sensitive fingerprints.

A Nilsimsa digest summarizes the trigram-like byte contexts of a string in
256 bits. Strings that differ by a few edits produce digests that differ in a
few bits, so the Hamming distance between two digests is a cheap proxy for
string similarity.

Example usage:
    >>> from quickfuzzy.nilsimsa import Nilsimsa, compare_raw, fingerprint
    >>> a = fingerprint("Kyivska oblast")
    >>> b = fingerprint("Kyivsca oblast")
    >>> compare_raw(a, a)
    128
    >>> compare_raw(a, b) > 64
    True

    # hashlib-style streaming interface
    >>> h = Nilsimsa()
    >>> h.update("Kyivska ")
    >>> h.update("oblast")
    >>> h.digest() == a
    True
"""

import re
from typing import List, Union

from quickfuzzy.exceptions import FingerprintError

FINGERPRINT_SIZE = 32
"""Digest length in bytes (256 bits)."""

HEX_SIZE = FINGERPRINT_SIZE * 2

_HEX_RE = re.compile(r"[0-9a-fA-F]*")

_SEED = 0x12345678
_MASK32 = 0xFFFFFFFF


def _build_tran() -> bytes:
    """Shuffle 0..255 with a 32-bit xorshift generator.

    The seed and generator are fixed so digests stay comparable with ones
    stored by earlier runs.
    """
    table = list(range(256))
    seed = _SEED

    for i in range(255, 0, -1):
        seed ^= (seed << 13) & _MASK32
        seed ^= seed >> 17
        seed ^= (seed << 5) & _MASK32
        j = (seed & 0xFF) % (i + 1)
        table[i], table[j] = table[j], table[i]

    return bytes(table)


def _build_popc() -> bytes:
    popc = []
    for i in range(256):
        n = i
        count = 0
        while n:
            count += 1
            n &= n - 1
        popc.append(count)
    return bytes(popc)


TRAN = _build_tran()
"""Fixed byte substitution table."""

POPC = _build_popc()
"""Population count of every byte value."""


def _tran3(a: int, b: int, c: int, n: int) -> int:
    return (TRAN[(a + n) & 255] ^ TRAN[b] * (n + n + 1) ^ TRAN[c ^ TRAN[n]]) & 255


def _encode(text: str) -> bytes:
    """UTF-8 encode ``text``, replacing lone surrogates with U+FFFD."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # Join valid surrogate pairs, then replace the unpaired ones
        return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")


class Nilsimsa:
    """Streaming Nilsimsa hasher with a hashlib-like interface.

    Text is UTF-8 encoded before hashing; unpaired surrogates become U+FFFD.
    The digest always reflects every byte passed to ``update`` so far.
    """

    def __init__(self, data: Union[str, bytes] = b""):
        self._acc: List[int] = [0] * 256
        self._count = 0
        self._last = [-1, -1, -1, -1]
        if data:
            self.update(data)

    def update(self, data: Union[str, bytes]) -> None:
        """Feed more data into the accumulator."""
        if isinstance(data, str):
            data = _encode(data)

        acc = self._acc
        c0, c1, c2, c3 = self._last

        for ch in data:
            if c1 > -1:
                acc[_tran3(ch, c0, c1, 0)] += 1
            if c2 > -1:
                acc[_tran3(ch, c0, c2, 1)] += 1
                acc[_tran3(ch, c1, c2, 2)] += 1
            if c3 > -1:
                acc[_tran3(ch, c0, c3, 3)] += 1
                acc[_tran3(ch, c1, c3, 4)] += 1
                acc[_tran3(ch, c2, c3, 5)] += 1
                acc[_tran3(c3, c0, ch, 6)] += 1
                acc[_tran3(c3, c2, ch, 7)] += 1
            c3, c2, c1, c0 = c2, c1, c0, ch

        self._last = [c0, c1, c2, c3]
        self._count += len(data)

    def digest(self) -> bytes:
        """Return the 32-byte digest of the data seen so far."""
        code = bytearray(FINGERPRINT_SIZE)
        count = self._count
        if count < 3:
            return bytes(code)

        if count == 3:
            total = 1
        elif count == 4:
            total = 4
        else:
            total = 8 * count - 28
        threshold = total / 256

        for i, value in enumerate(self._acc):
            if value > threshold:
                code[i >> 3] |= 1 << (i & 7)
        return bytes(code)

    def hexdigest(self) -> str:
        """Return the digest as 64 lowercase hex characters."""
        return to_hex(self.digest())

    def __repr__(self) -> str:
        return f"Nilsimsa(count={self._count})"


def fingerprint(text: Union[str, bytes]) -> bytes:
    """Compute the Nilsimsa digest of ``text`` in one call."""
    return Nilsimsa(text).digest()


def compare_raw(fp1: bytes, fp2: bytes) -> int:
    """Score two raw digests as ``128 - hamming_distance``.

    Args:
        fp1: First 32-byte digest.
        fp2: Second 32-byte digest.

    Returns:
        Integer in [-128, 128]; 128 means identical digests.

    Raises:
        FingerprintError: If either digest is not exactly 32 bytes.
    """
    if len(fp1) != FINGERPRINT_SIZE or len(fp2) != FINGERPRINT_SIZE:
        raise FingerprintError(
            f"Fingerprints must be {FINGERPRINT_SIZE} bytes, got {len(fp1)} and {len(fp2)}"
        )
    diff = 0
    for x, y in zip(fp1, fp2):
        diff += POPC[x ^ y]
    return 128 - diff


def compare(hex1: str, hex2: str) -> int:
    """Score two hex encoded digests. See :func:`compare_raw`."""
    return compare_raw(from_hex(hex1), from_hex(hex2))


def to_hex(fp: bytes) -> str:
    """Encode a digest as lowercase, zero padded hex."""
    return bytes(fp).hex()


def from_hex(value: str) -> bytes:
    """Decode a hex digest.

    Raises:
        FingerprintError: If the string has odd length or non-hex characters.
    """
    if len(value) % 2 != 0:
        raise FingerprintError(f"Invalid hex string of odd length {len(value)}")
    if not _HEX_RE.fullmatch(value):
        raise FingerprintError(f"Invalid hex string: {value!r}")
    return bytes.fromhex(value)


__all__ = [
    "FINGERPRINT_SIZE",
    "HEX_SIZE",
    "TRAN",
    "POPC",
    "Nilsimsa",
    "fingerprint",
    "compare_raw",
    "compare",
    "to_hex",
    "from_hex",
]
