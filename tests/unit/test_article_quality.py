# tests/unit/test_article_quality.py
"""
Unit tests for the article completeness check.
"""

import pytest

from wararka.services.article_quality import is_complete


def _words(n: int, word: str = "wararka") -> str:
    return " ".join([word] * n)


class TestIsComplete:
    """Tests for is_complete()."""

    @pytest.mark.parametrize("text", [None, "", "   ", "<p> </p>"])
    def test_empty_is_incomplete(self, text):
        assert is_complete(text) is False

    def test_long_text_is_complete(self, long_body):
        assert is_complete(long_body) is True

    def test_truncation_marker_is_incomplete(self, long_body):
        assert is_complete(f"{long_body} [+1811 chars]") is False

    def test_ascii_ellipsis_is_incomplete(self, long_body):
        assert is_complete(f"{long_body}...") is False

    def test_unicode_ellipsis_is_incomplete(self, long_body):
        assert is_complete(f"{long_body}…") is False

    def test_too_few_chars(self):
        # 30 words but well under 180 characters
        assert is_complete(_words(30, "ab")) is False

    def test_too_few_words(self):
        # Plenty of characters but only 10 words
        assert is_complete(_words(10, "x" * 30)) is False

    def test_thresholds_are_inclusive(self):
        # 30 words of 5 chars + 29 spaces = 179 chars, add one char
        text = _words(30, "abcde") + "f"
        assert len(text) == 180
        assert is_complete(text) is True

    def test_html_is_stripped_before_measuring(self):
        padded = "<div>" * 200 + "short body" + "</div>" * 200
        assert is_complete(padded) is False

    def test_custom_thresholds(self):
        assert is_complete("one two three", min_chars=5, min_words=3) is True
