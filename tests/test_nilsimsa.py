"""Tests for Nilsimsa fingerprints and the fingerprint comparator."""

import pytest

import quickfuzzy as qf
from quickfuzzy.nilsimsa import HEX_SIZE, POPC, TRAN


class TestTables:
    """The substitution and popcount tables."""

    def test_tran_is_permutation(self):
        assert len(TRAN) == 256
        assert sorted(TRAN) == list(range(256))

    def test_tran_is_shuffled(self):
        assert list(TRAN) != list(range(256))

    def test_popc(self):
        assert POPC[0] == 0
        assert POPC[0xFF] == 8
        assert POPC[0b1010_0101] == 4
        assert all(POPC[i] == bin(i).count("1") for i in range(256))


class TestFingerprint:
    """Digest computation."""

    def test_fixed_size(self):
        for text in ["", "a", "ab", "abc", "abcd", "hello world", "x" * 1000]:
            assert len(qf.fingerprint(text)) == qf.FINGERPRINT_SIZE

    def test_short_input_is_zero(self):
        zero = bytes(32)
        assert qf.fingerprint("") == zero
        assert qf.fingerprint("a") == zero
        assert qf.fingerprint("ab") == zero

    def test_three_bytes_not_zero(self):
        assert qf.fingerprint("abc") != bytes(32)

    def test_length_measured_in_utf8_bytes(self):
        # One Cyrillic letter is two bytes, two letters are four
        assert qf.fingerprint("ж") == bytes(32)
        assert qf.fingerprint("жж") != bytes(32)

    def test_deterministic(self):
        assert qf.fingerprint("Львівська") == qf.fingerprint("Львівська")

    def test_str_and_bytes_agree(self):
        assert qf.fingerprint("Львівська") == qf.fingerprint("Львівська".encode("utf-8"))

    def test_streaming_matches_one_shot(self):
        h = qf.Nilsimsa()
        h.update("hello ")
        h.update(b"wor")
        h.update("ld")
        assert h.digest() == qf.fingerprint("hello world")

    def test_digest_is_repeatable(self):
        h = qf.Nilsimsa("hello world")
        assert h.digest() == h.digest()
        assert h.hexdigest() == qf.to_hex(h.digest())

    def test_near_duplicates_score_higher(self):
        base = qf.fingerprint("The quick brown fox jumps over the lazy dog")
        near = qf.fingerprint("The quick brown fox jumps over the lazy cog")
        far = qf.fingerprint("Completely unrelated sentence about weather!")
        assert qf.compare_raw(base, near) > qf.compare_raw(base, far)


class TestCompare:
    """Hamming-based fingerprint comparison."""

    def test_identical(self):
        fp = qf.fingerprint("hello world")
        assert qf.compare_raw(fp, fp) == 128

    def test_extremes(self):
        assert qf.compare_raw(bytes(32), bytes(32)) == 128
        assert qf.compare_raw(bytes(32), b"\xff" * 32) == -128

    def test_bit_flips_reduce_score_exactly(self):
        fp = bytearray(qf.fingerprint("hello world"))
        original = bytes(fp)
        fp[0] ^= 0b0000_0001
        fp[5] ^= 0b1000_0000
        fp[31] ^= 0b0011_0000
        assert qf.compare_raw(original, bytes(fp)) == 128 - 4

    @pytest.mark.parametrize("size", [0, 16, 31, 33, 64])
    def test_wrong_length_raises(self, size):
        with pytest.raises(qf.FingerprintError):
            qf.compare_raw(bytes(size), bytes(32))
        with pytest.raises(qf.FingerprintError):
            qf.compare_raw(bytes(32), bytes(size))

    def test_fingerprint_error_is_value_error(self):
        with pytest.raises(ValueError):
            qf.compare_raw(b"abc", b"abc")

    def test_compare_hex(self):
        a = qf.Nilsimsa("hello world").hexdigest()
        b = qf.Nilsimsa("hello wurld").hexdigest()
        assert qf.compare(a, a) == 128
        assert qf.compare(a, b) == qf.compare_raw(qf.from_hex(a), qf.from_hex(b))


class TestHexEncoding:
    """Fingerprint hex interchange format."""

    def test_hex_shape(self):
        value = qf.to_hex(qf.fingerprint("hello world"))
        assert len(value) == HEX_SIZE == 64
        assert value == value.lower()
        assert all(c in "0123456789abcdef" for c in value)

    def test_zero_padding(self):
        assert qf.to_hex(bytes([0, 1, 15, 16, 255])) == "00010f10ff"

    def test_from_hex(self):
        fp = qf.fingerprint("hello world")
        assert qf.from_hex(qf.to_hex(fp)) == fp

    def test_odd_length_raises(self):
        with pytest.raises(qf.FingerprintError, match="odd length"):
            qf.from_hex("abc")

    def test_invalid_characters_raise(self):
        with pytest.raises(qf.FingerprintError):
            qf.from_hex("zz")

    def test_whitespace_in_hex_raises(self):
        value = qf.to_hex(qf.fingerprint("hello world"))
        spaced = value[:10] + " " + value[10:20] + " " + value[20:]
        assert len(spaced) == 66
        with pytest.raises(qf.FingerprintError, match="Invalid hex"):
            qf.from_hex(spaced)

    def test_uppercase_hex_accepted(self):
        fp = qf.fingerprint("hello world")
        assert qf.from_hex(qf.to_hex(fp).upper()) == fp

    def test_compare_short_hex_raises(self):
        with pytest.raises(qf.FingerprintError):
            qf.compare("00", "00")
