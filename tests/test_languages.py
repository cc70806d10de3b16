"""Tests for code fence language normalization."""

import pytest

from noteclip.blocks import CANONICAL_LANGUAGES, PLAIN_TEXT, normalize_language


class TestNormalizeLanguage:
    """Tests for normalize_language."""

    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("js", "javascript"),
            ("ts", "typescript"),
            ("py", "python"),
            ("rb", "ruby"),
            ("sh", "bash"),
            ("yml", "yaml"),
            ("md", "markdown"),
            ("c++", "cpp"),
        ],
    )
    def test_aliases(self, alias, expected):
        """Test built-in aliases."""
        assert normalize_language(alias) == expected

    def test_case_and_whitespace(self):
        """Test that matching ignores case and surrounding whitespace."""
        assert normalize_language("PY") == "python"
        assert normalize_language("  Rust ") == "rust"
        assert normalize_language("Visual Basic") == "visual basic"

    def test_unknown_is_plain_text(self):
        """Test unknown languages."""
        assert normalize_language("brainfuck") == PLAIN_TEXT

    def test_empty_is_plain_text(self):
        """Test empty and missing tags."""
        assert normalize_language("") == PLAIN_TEXT
        assert normalize_language(None) == PLAIN_TEXT

    def test_plain_text_is_canonical(self):
        """Test the sentinel maps to itself."""
        assert normalize_language("plain text") == PLAIN_TEXT
        assert PLAIN_TEXT in CANONICAL_LANGUAGES

    def test_extra_aliases(self):
        """Test caller supplied aliases."""
        assert normalize_language("zsh", {"zsh": "shell"}) == "shell"

    def test_extra_alias_must_be_canonical(self):
        """Test that an alias to an unknown language still falls back."""
        assert normalize_language("foo", {"foo": "bar"}) == PLAIN_TEXT

    def test_every_canonical_tag_is_stable(self):
        """Test that canonical tags normalize to themselves."""
        assert all(normalize_language(tag) == tag for tag in CANONICAL_LANGUAGES)
