"""
Option validation tests for quickfuzzy.

Tests cover:
- Numeric option bounds (negative, NaN, infinity)
- string_length_tolerance range
- Mode names and static mode requirements
- Type validation (non-string queries)
"""

import math

import pytest

import quickfuzzy as qf

NUMERIC_OPTIONS = [
    "max_query_cache",
    "string_length_tolerance",
    "hash_min_tolerance",
    "hash_base_tolerance",
    "hash_length_penalty",
    "hash_entropy_boost",
]


class TestOptionDefaults:
    """Default values."""

    def test_defaults(self):
        options = qf.Options()
        assert options.mode is qf.Mode.DYNAMIC
        assert options.max_query_cache == 10_000
        assert options.string_length_tolerance == 0.2
        assert options.hash_min_tolerance == 4
        assert options.hash_base_tolerance == 16
        assert options.hash_length_penalty == 2
        assert options.hash_entropy_boost == 4
        assert options.ignore_case is False
        assert options.ignore_symbols is False
        assert options.remove_diacritics is True
        assert options.normalize_whitespace is True
        assert options.disable_normalization is False

    def test_frozen(self):
        options = qf.Options()
        with pytest.raises(AttributeError):
            options.ignore_case = True

    def test_to_dict(self):
        data = qf.Options(mode="static").to_dict()
        assert data["mode"] == "static"
        assert data["hash_base_tolerance"] == 16


class TestParameterValidation:
    """Tests for numeric option validation."""

    @pytest.mark.parametrize("name", NUMERIC_OPTIONS)
    def test_negative(self, name):
        with pytest.raises(qf.ValidationError):
            qf.Options(**{name: -1})

    @pytest.mark.parametrize("name", NUMERIC_OPTIONS)
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite(self, name, value):
        with pytest.raises(qf.ValidationError):
            qf.Options(**{name: value})

    @pytest.mark.parametrize("name", NUMERIC_OPTIONS)
    def test_non_numeric(self, name):
        with pytest.raises(qf.ValidationError):
            qf.Options(**{name: "5"})

    def test_string_length_tolerance_above_one(self):
        with pytest.raises(qf.ValidationError, match="must be in range"):
            qf.Options(string_length_tolerance=1.5)

    def test_string_length_tolerance_boundaries(self):
        assert qf.Options(string_length_tolerance=0).string_length_tolerance == 0
        assert qf.Options(string_length_tolerance=1).string_length_tolerance == 1

    def test_fractional_cache_size(self):
        with pytest.raises(qf.ValidationError):
            qf.Options(max_query_cache=2.5)

    def test_zero_values_allowed(self):
        options = qf.Options(
            max_query_cache=0,
            hash_min_tolerance=0,
            hash_base_tolerance=0,
            hash_length_penalty=0,
            hash_entropy_boost=0,
        )
        assert options.max_query_cache == 0

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            qf.Options(hash_base_tolerance=-1)

    def test_replace_validates(self):
        with pytest.raises(qf.ValidationError):
            qf.Options().replace(string_length_tolerance=2)

    def test_unknown_option(self):
        with pytest.raises(qf.ValidationError, match="Unknown option"):
            qf.Options.create(hash_tolerance=3)
        with pytest.raises(qf.ValidationError, match="Unknown option"):
            qf.FuzzyMatcher(["hello"], ignorecase=True)


class TestModeValidation:
    """Mode names and static mode requirements."""

    def test_mode_strings(self):
        assert qf.Options(mode="static").mode is qf.Mode.STATIC
        assert qf.Options(mode="DYNAMIC").mode is qf.Mode.DYNAMIC
        assert qf.Options(mode=qf.Mode.STATIC).mode is qf.Mode.STATIC

    def test_unknown_mode(self):
        with pytest.raises(qf.ValidationError, match="Unknown mode"):
            qf.Options(mode="frozen")

    def test_mode_wrong_type(self):
        with pytest.raises(TypeError):
            qf.Options(mode=1)

    def test_static_requires_data(self):
        with pytest.raises(qf.ValidationError, match="Static mode"):
            qf.FuzzyMatcher(mode="static")

    def test_static_with_empty_data(self):
        matcher = qf.FuzzyMatcher([], mode="static")
        assert len(matcher) == 0

    def test_static_with_hash_map(self):
        matcher = qf.FuzzyMatcher(mode="static", hash_map={"hello": qf.fingerprint("hello")})
        assert "hello" in matcher

    def test_dynamic_without_data(self):
        matcher = qf.FuzzyMatcher()
        assert len(matcher) == 0


class TestTypeValidation:
    """Non-string inputs."""

    @pytest.mark.parametrize("query", [None, 42, b"bytes", ["list"]])
    def test_non_string_query(self, query):
        matcher = qf.FuzzyMatcher(["hello"])
        with pytest.raises(TypeError):
            matcher.search(query)

    def test_non_string_data(self):
        with pytest.raises(TypeError):
            qf.FuzzyMatcher(["hello", 42])

    def test_options_object_with_overrides(self):
        base = qf.Options(ignore_case=True)
        matcher = qf.FuzzyMatcher(["hello"], base, mode="static")
        assert matcher.options.ignore_case is True
        assert matcher.options.mode is qf.Mode.STATIC
        assert not math.isnan(matcher.options.string_length_tolerance)
