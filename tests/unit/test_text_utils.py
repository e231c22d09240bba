#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_text_utils.py
"""Unit tests for identifier slug helpers."""

import pytest

from md2dita.utils.text import make_unique_slug, slugify


@pytest.mark.unit
class TestSlugify:
    """Test slug generation from heading text."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello World!", "hello-world"),
            ("Café résumé", "cafe-resume"),
            ("snake_case  name", "snake-case-name"),
            ("  --Leading and trailing--  ", "leading-and-trailing"),
            ("C++ & Rust", "c-rust"),
        ],
    )
    def test_basic_slugs(self, text, expected):
        """Test common heading texts."""
        assert slugify(text) == expected

    def test_leading_digit_prefixed(self):
        """Test that slugs never start with a digit."""
        assert slugify("2024 Roadmap") == "topic-2024-roadmap"

    @pytest.mark.parametrize("text", ["", "!!!", "日本語"])
    def test_default_when_empty(self, text):
        """Test the fallback when no characters survive."""
        assert slugify(text) == "topic"
        assert slugify(text, default="section") == "section"

    def test_max_length(self):
        """Test truncation without a trailing separator."""
        assert slugify("alpha beta gamma", max_length=11) == "alpha-beta"

    def test_custom_separator(self):
        """Test a different word separator."""
        assert slugify("Hello World", separator="_") == "hello_world"


@pytest.mark.unit
class TestMakeUniqueSlug:
    """Test duplicate slug handling."""

    def test_first_occurrence_unchanged(self):
        """Test that a new slug is returned as-is."""
        seen: dict[str, int] = {}

        assert make_unique_slug("setup", seen) == "setup"
        assert seen == {"setup": 1}

    def test_numeric_suffixes(self):
        """Test suffixes for repeated slugs."""
        seen: dict[str, int] = {}

        assert [make_unique_slug("setup", seen) for _ in range(3)] == ["setup", "setup-2", "setup-3"]

    def test_suffix_skips_existing_literal(self):
        """Test that a suffix already used by a literal slug is skipped."""
        seen: dict[str, int] = {}
        make_unique_slug("setup-2", seen)
        make_unique_slug("setup", seen)

        assert make_unique_slug("setup", seen) == "setup-3"

    def test_generated_slug_reserved(self):
        """Test that a generated slug cannot be produced again by a literal."""
        seen: dict[str, int] = {}
        make_unique_slug("setup", seen)
        make_unique_slug("setup", seen)

        assert make_unique_slug("setup-2", seen) == "setup-2-2"
