"""Tests for string normalization applied before fingerprinting.

This module tests each normalization flag on its own, their combination,
and that disable_normalization bypasses everything.
"""

import pytest

import quickfuzzy as qf


def _normalizer(**flags):
    return qf.create_normalizer(qf.Options(**flags))


class TestNormalizeString:
    """Tests for the one-shot normalize_string helper."""

    def test_defaults_strip_diacritics_and_whitespace(self):
        assert qf.normalize_string("  Crème   Brûlée ") == "Creme Brulee"

    def test_ignore_case(self):
        assert qf.normalize_string("Crème Brûlée", ignore_case=True) == "creme brulee"

    def test_strip_spacing_diacritics(self):
        # NFKD turns the acute and diaeresis into a space plus a combining mark
        assert qf.normalize_string("a^b`c\u00b4d\u00a8e") == "abc d e"

    def test_strip_modifier_letters(self):
        assert qf.normalize_string("a\u02b9b\u02c6c") == "abc"

    def test_spacing_diacritics_kept_when_disabled(self):
        assert qf.normalize_string("a^b`c", remove_diacritics=False) == "a^b`c"

    def test_keep_diacritics(self):
        # NFKD still decomposes; recomposition is not attempted
        out = qf.normalize_string("\u00e9", remove_diacritics=False)
        assert out == "e\u0301"

    def test_ignore_symbols(self):
        assert qf.normalize_string("Hello, World! #1", ignore_symbols=True) == "Hello World 1"

    def test_symbols_kept_by_default(self):
        assert qf.normalize_string("Hello, World!") == "Hello, World!"

    def test_whitespace_kept_when_disabled(self):
        assert qf.normalize_string(" a \t b ", normalize_whitespace=False) == "a \t b"

    def test_nfkd_compatibility_forms(self):
        # Fullwidth letters and ligatures fold to their plain forms
        assert qf.normalize_string("ＡＢＣ") == "ABC"
        assert qf.normalize_string("ﬁne") == "fine"

    def test_cyrillic_short_i(self):
        # й decomposes to и + breve; ї to і + diaeresis
        assert qf.normalize_string("Київський") == "Киівськии"


class TestCreateNormalizer:
    """Tests for normalizers built from Options."""

    def test_disable_normalization_is_identity(self):
        normalize = _normalizer(disable_normalization=True, ignore_case=True)
        assert normalize("  Crème  ") == "  Crème  "

    def test_all_flags(self):
        normalize = _normalizer(ignore_case=True, ignore_symbols=True)
        assert normalize("  Ärzte-Kammer\n\nBerlin!! ") == "arztekammer berlin"

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "\n\t"],
    )
    def test_blank_input(self, text):
        assert _normalizer()(text) == ""

    def test_idempotent(self):
        normalize = _normalizer(ignore_case=True, ignore_symbols=True)
        once = normalize("  Ça   va?  Très-bien ")
        assert normalize(once) == once
