"""Tests for character pools and password generation."""

import string
from unittest.mock import patch

import pytest

from passforge import constants
from passforge.config import GenerationConfig
from passforge.errors import (
    MalformedPatternError,
    NoCharacterTypesError,
    RangeError,
    ValidationError,
)
from passforge.generator import (
    GenerationOptions,
    build_pool,
    generate,
    generate_memorable,
    generate_multiple,
    generate_pattern,
    generate_pin,
    generate_with_custom_set,
    generate_with_separators,
    get_suggestions,
    pool_size,
    required_categories,
)

ALL = {"uppercase": True, "lowercase": True, "numbers": True, "symbols": True}
NONE = {"uppercase": False, "lowercase": False, "numbers": False, "symbols": False}


def _only(**kwargs) -> GenerationOptions:
    flags = {
        "include_uppercase": False,
        "include_lowercase": False,
        "include_numbers": False,
        "include_symbols": False,
    }
    flags.update(kwargs)
    return GenerationOptions(length=20, **flags)


# ── Character pool ─────────────────────────────────────────────────────────


class TestCharacterPool:
    def test_full_pool_order(self):
        pool = build_pool(ALL)
        assert pool == constants.UPPERCASE + constants.LOWERCASE + constants.NUMBERS + constants.SYMBOLS

    def test_partial_pool(self):
        assert build_pool({"numbers": True, "uppercase": True}) == constants.UPPERCASE + constants.NUMBERS

    def test_empty_pool(self):
        assert build_pool(NONE) == ""

    def test_pool_size(self):
        assert pool_size({"lowercase": True, "numbers": True}) == 36
        assert pool_size(ALL) == len(build_pool(ALL))

    def test_pool_size_floored_at_one(self):
        assert pool_size(NONE) == 1

    def test_required_categories_fixed_order(self):
        flags = {"symbols": True, "lowercase": True}
        assert required_categories(flags) == ["lowercase", "symbols"]

    def test_categories_are_disjoint(self):
        sets = [set(s) for s in constants.CHAR_SETS.values()]
        total = sum(len(s) for s in sets)
        assert len(set().union(*sets)) == total


# ── generate ───────────────────────────────────────────────────────────────


class TestGenerate:
    def test_default_length(self):
        assert len(generate()) == constants.DEFAULT_LENGTH

    @pytest.mark.parametrize("length", [4, 5, 16, 32, 64])
    def test_exact_length(self, length):
        assert len(generate(GenerationOptions(length=length))) == length

    def test_contains_every_selected_category(self):
        for _ in range(50):
            pwd = generate(GenerationOptions(length=4))
            assert any(c in constants.UPPERCASE for c in pwd)
            assert any(c in constants.LOWERCASE for c in pwd)
            assert any(c in constants.NUMBERS for c in pwd)
            assert any(c in constants.SYMBOLS for c in pwd)

    def test_uppercase_only(self):
        for _ in range(20):
            pwd = generate(_only(include_uppercase=True))
            assert len(pwd) == 20
            assert all(c in string.ascii_uppercase for c in pwd)

    def test_no_symbols(self):
        options = GenerationOptions(length=16, include_symbols=False)
        for _ in range(20):
            assert generate(options).isalnum()

    def test_numbers_and_symbols(self):
        allowed = set(constants.NUMBERS + constants.SYMBOLS)
        for _ in range(20):
            pwd = generate(_only(include_numbers=True, include_symbols=True))
            assert set(pwd) <= allowed
            assert any(c.isdigit() for c in pwd)
            assert any(not c.isalnum() for c in pwd)

    def test_no_categories_raises(self):
        options = GenerationOptions(
            length=10,
            include_uppercase=False,
            include_lowercase=False,
            include_numbers=False,
            include_symbols=False,
        )
        with pytest.raises(NoCharacterTypesError):
            generate(options)

    def test_no_categories_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            generate(_only())

    @pytest.mark.parametrize("length", [3, 65, 0, -1])
    def test_length_out_of_range(self, length):
        with pytest.raises(ValidationError, match="between 4 and 64"):
            generate(GenerationOptions(length=length))

    def test_errors_are_aggregated(self):
        options = GenerationOptions(
            length=2,
            include_uppercase=False,
            include_lowercase=False,
            include_numbers=False,
            include_symbols=False,
        )
        with pytest.raises(ValidationError) as exc_info:
            generate(options)
        assert len(exc_info.value.errors) == 2
        assert ", " in str(exc_info.value)

    def test_short_length_is_truncated(self):
        config = GenerationConfig(min_length=2)
        for _ in range(20):
            assert len(generate(GenerationOptions(length=2), config)) == 2

    def test_custom_bounds(self):
        config = GenerationConfig(min_length=8, max_length=10)
        with pytest.raises(ValidationError, match="between 8 and 10"):
            generate(GenerationOptions(length=12), config)

    def test_guaranteed_chars_are_shuffled(self):
        # Always swapping with index 0 rotates [U, L, N, S] to [L, N, S, U]
        with patch("passforge.generator.secrets.randbelow", return_value=0):
            pwd = generate(GenerationOptions(length=4))
        assert pwd[0] in constants.LOWERCASE
        assert pwd[1] in constants.NUMBERS
        assert pwd[2] in constants.SYMBOLS
        assert pwd[3] in constants.UPPERCASE

    def test_uniqueness(self):
        passwords = {generate(GenerationOptions(length=16)) for _ in range(50)}
        assert len(passwords) == 50


# ── Variants ───────────────────────────────────────────────────────────────


class TestGenerateMultiple:
    def test_count(self):
        assert len(generate_multiple(5, GenerationOptions(length=8))) == 5

    def test_each_valid(self):
        for pwd in generate_multiple(10, GenerationOptions(length=10)):
            assert len(pwd) == 10

    def test_zero(self):
        assert generate_multiple(0) == []


class TestCustomSet:
    def test_only_custom_chars(self):
        pwd = generate_with_custom_set(30, "xyz")
        assert len(pwd) == 30
        assert set(pwd) <= set("xyz")

    def test_empty_set_raises(self):
        with pytest.raises(ValidationError):
            generate_with_custom_set(10, "")

    def test_bad_length_raises(self):
        with pytest.raises(RangeError):
            generate_with_custom_set(0, "abc")


class TestPattern:
    def test_counts_per_category(self):
        pwd = generate_pattern("2u3l2n1s")
        assert len(pwd) == 8
        assert sum(c in constants.UPPERCASE for c in pwd) == 2
        assert sum(c in constants.LOWERCASE for c in pwd) == 3
        assert sum(c in constants.NUMBERS for c in pwd) == 2
        assert sum(c in constants.SYMBOLS for c in pwd) == 1

    def test_case_insensitive_letters(self):
        pwd = generate_pattern("4N")
        assert len(pwd) == 4
        assert pwd.isdigit()

    def test_multi_digit_counts(self):
        assert len(generate_pattern("12l")) == 12

    @pytest.mark.parametrize("pattern", ["", "abc", "2x", "u2", "2u 3l", "2u-1n", "2u\n", "\n2u"])
    def test_malformed(self, pattern):
        with pytest.raises(MalformedPatternError):
            generate_pattern(pattern)

    def test_too_long(self):
        with pytest.raises(RangeError):
            generate_pattern("60u10l")


class TestPin:
    @pytest.mark.parametrize("length", [4, 6, 12])
    def test_digits_only(self, length):
        pin = generate_pin(length)
        assert len(pin) == length
        assert pin.isdigit()

    @pytest.mark.parametrize("length", [3, 13])
    def test_out_of_range(self, length):
        with pytest.raises(RangeError, match="between 4 and 12"):
            generate_pin(length)


class TestMemorable:
    def test_length_and_charset(self):
        allowed = set(constants.LOWERCASE + constants.NUMBERS + constants.SYMBOLS[:4])
        for _ in range(20):
            pwd = generate_memorable(12)
            assert len(pwd) == 12
            assert set(pwd) <= allowed

    def test_out_of_range(self):
        with pytest.raises(RangeError):
            generate_memorable(2)


class TestSeparatorsAndSuggestions:
    def test_groups_of_four(self):
        options = GenerationOptions(length=12, include_symbols=False)
        pwd = generate_with_separators(options, "-")
        groups = pwd.split("-")
        assert [len(g) for g in groups] == [4, 4, 4]

    def test_uneven_tail(self):
        options = GenerationOptions(length=10, include_symbols=False)
        groups = generate_with_separators(options, " ").split(" ")
        assert [len(g) for g in groups] == [4, 4, 2]

    def test_suggestions(self):
        suggestions = get_suggestions(GenerationOptions(length=10))
        assert [s["name"] for s in suggestions] == ["Standard", "Strong", "Memorable"]
        assert len(suggestions[0]["password"]) == 10
        assert len(suggestions[1]["password"]) == constants.STRONG_LENGTH
        assert len(suggestions[2]["password"]) == 10
