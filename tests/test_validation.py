"""Tests for the input validators."""

import pytest

from passforge.config import GenerationConfig
from passforge.generator import GenerationOptions
from passforge.validation import (
    sanitize_input,
    validate_category_name,
    validate_generation_options,
    validate_import_data,
    validate_notes,
    validate_number_range,
    validate_password,
    validate_password_name,
    validate_search_query,
    validate_settings,
)


class TestGenerationOptions:
    def test_valid(self):
        r = validate_generation_options(GenerationOptions(length=12))
        assert r["valid"] is True
        assert r["errors"] == []
        assert r["checks"]["valid_length"] is True

    def test_none(self):
        r = validate_generation_options(None)
        assert r["valid"] is False
        assert "required" in r["errors"][0]

    def test_aggregates_every_rule(self):
        options = GenerationOptions(
            length=100,
            include_uppercase=False,
            include_lowercase=False,
            include_numbers=False,
            include_symbols=False,
        )
        r = validate_generation_options(options)
        assert r["valid"] is False
        assert len(r["errors"]) == 2
        assert r["checks"]["has_character_types"] is False

    def test_bounds_are_inclusive(self):
        assert validate_generation_options(GenerationOptions(length=4))["valid"]
        assert validate_generation_options(GenerationOptions(length=64))["valid"]

    def test_config_bounds(self):
        config = GenerationConfig(min_length=10, max_length=20)
        assert not validate_generation_options(GenerationOptions(length=8), config)["valid"]


class TestNames:
    def test_too_short(self):
        r = validate_password_name("a")
        assert r["valid"] is False
        assert "at least 2" in r["error"]

    def test_ok(self):
        assert validate_password_name("ok-name")["valid"] is True

    @pytest.mark.parametrize("name", [None, "", "   ", 42])
    def test_required(self, name):
        r = validate_password_name(name)
        assert r["valid"] is False
        assert "required" in r["error"]

    def test_trimmed_before_length_check(self):
        assert validate_password_name("  a  ")["valid"] is False

    def test_too_long(self):
        r = validate_password_name("x" * 51)
        assert r["valid"] is False
        assert "at most 50" in r["error"]

    @pytest.mark.parametrize("char", list("<>\"'&"))
    def test_forbidden_characters(self, char):
        assert validate_password_name(f"my{char}name")["valid"] is False

    def test_category_bounds(self):
        assert validate_category_name("x" * 30)["valid"] is True
        r = validate_category_name("x" * 31)
        assert r["valid"] is False
        assert r["error"].startswith("Category name")


class TestNotes:
    @pytest.mark.parametrize("notes", [None, "", "short note"])
    def test_valid(self, notes):
        assert validate_notes(notes)["valid"] is True

    def test_too_long(self):
        assert validate_notes("n" * 201)["valid"] is False

    def test_trimmed(self):
        assert validate_notes("  " + "n" * 200 + "  ")["valid"] is True

    def test_not_text(self):
        assert validate_notes(["x"])["valid"] is False


class TestPassword:
    def test_good_password(self):
        r = validate_password("Zq8#Lm2!Vx5&")
        assert r["valid"] is True
        assert all(r["checks"].values())

    def test_missing(self):
        r = validate_password("")
        assert r["valid"] is False
        assert r["errors"] == ["Password is required"]

    def test_length_bounds(self):
        assert not validate_password("Zq8")["checks"]["length"]
        assert not validate_password("Zq8#" * 17)["checks"]["length"]

    def test_requirements(self):
        r = validate_password(
            "zqxmlwvp",
            {"require_uppercase": True, "require_numbers": True, "require_symbols": True},
        )
        assert r["valid"] is False
        assert len(r["errors"]) == 3

    def test_common_is_exact(self):
        r = validate_password("Password")
        assert r["checks"]["not_common"] is False
        assert validate_password("Password!x9Q")["checks"]["not_common"] is True

    def test_sequence_and_repeats_reported_separately(self):
        r = validate_password("Xy123aaa!")
        assert r["checks"]["no_pattern"] is False
        assert r["checks"]["no_repeats"] is False
        assert len(r["errors"]) == 2


class TestImportData:
    def test_valid(self):
        data = {"passwords": [{"id": "1"}], "categories": [], "settings": {"theme": "dark"}}
        r = validate_import_data(data)
        assert r["valid"] is True
        assert r["data"]["passwords"] == [{"id": "1"}]
        assert r["data"]["history"] == []

    def test_not_an_object(self):
        r = validate_import_data("nope")
        assert r["valid"] is False
        assert r["data"]["passwords"] == []

    def test_normalises_bad_fields(self):
        r = validate_import_data({"passwords": "x", "categories": {}, "settings": []})
        assert r["valid"] is False
        assert len(r["errors"]) == 3
        assert r["data"] == {"passwords": [], "categories": [], "settings": {}, "history": []}


class TestSettings:
    def test_sanitized_subset(self):
        r = validate_settings({"theme": "dark", "auto_copy": True, "unknown": 1})
        assert r["valid"] is True
        assert r["sanitized"] == {"theme": "dark", "auto_copy": True}

    def test_invalid_fields_reported(self):
        r = validate_settings({"theme": "blue", "show_strength": "yes", "save_history": False})
        assert r["valid"] is False
        assert len(r["errors"]) == 2
        assert r["sanitized"] == {"save_history": False}

    def test_not_an_object(self):
        assert validate_settings(None)["valid"] is False


class TestFreeText:
    def test_search_query(self):
        assert validate_search_query(None) == {"valid": True, "sanitized": ""}
        r = validate_search_query("  <mail>  ")
        assert r["sanitized"] == "mail"
        assert validate_search_query("q" * 101)["valid"] is False

    def test_sanitize_input(self):
        assert sanitize_input(" a<b>&c ") == "abc"
        assert sanitize_input(5) == ""
        assert len(sanitize_input("x" * 2000)) == 1000

    def test_number_range(self):
        assert validate_number_range("7", 1, 10) == {"valid": True, "value": 7}
        assert validate_number_range("abc", 1, 10)["valid"] is False
        r = validate_number_range(11, 1, 10, "Count")
        assert r["error"] == "Count must be between 1 and 10"
