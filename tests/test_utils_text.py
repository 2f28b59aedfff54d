"""Tests for text utility functions."""

from __future__ import annotations

from sitesearch.utils.text import make_snippet, normalize_whitespace, tokenize


class TestTokenize:
    """Test tokenize function."""

    def test_lowercases_and_splits(self) -> None:
        assert tokenize("Hello, World! v2.0") == ["hello", "world", "v2", "0"]

    def test_underscore_is_a_boundary(self) -> None:
        assert tokenize("snake_case") == ["snake", "case"]

    def test_unicode_letters(self) -> None:
        """Should keep non-ASCII letters inside tokens."""
        assert tokenize("Café Übersicht") == ["café", "übersicht"]

    def test_empty(self) -> None:
        assert tokenize("") == []
        assert tokenize(" --- !!! ") == []


class TestMakeSnippet:
    """Test make_snippet function."""

    def test_short_body_unchanged(self) -> None:
        assert make_snippet("Short body") == "Short body"

    def test_hard_prefix(self) -> None:
        """Should cut at exactly max_chars, even mid-word."""
        body = "word " * 100

        snippet = make_snippet(body, 12)

        assert snippet == "word word wo"

    def test_default_length(self) -> None:
        assert len(make_snippet("x" * 500)) == 200

    def test_newline_runs_become_spaces(self) -> None:
        assert make_snippet("First\n\n\nSecond\nThird") == "First Second Third"

    def test_cut_happens_before_collapsing(self) -> None:
        assert make_snippet("abc\n\n\ndef", 5) == "abc d"

    def test_empty_body(self) -> None:
        assert make_snippet("") == ""


class TestNormalizeWhitespace:
    """Test normalize_whitespace function."""

    def test_collapses_runs(self) -> None:
        assert normalize_whitespace(["a", "", "", "", "b"]) == "a\n\nb"

    def test_trims_lines(self) -> None:
        assert normalize_whitespace(["  a  ", "   ", "b\t"]) == "a\n\nb"

    def test_all_blank(self) -> None:
        assert normalize_whitespace(["", "  ", "\t"]) == ""

    def test_collapses_runs_inside_lines(self) -> None:
        assert normalize_whitespace(["Use  the \t tool"]) == "Use the tool"
