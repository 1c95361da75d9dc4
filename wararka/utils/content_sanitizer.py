# wararka/utils/content_sanitizer.py
"""
Shared utilities for normalizing article text and detecting truncation.

Handles:
- NewsAPI-style truncation markers: "... [+1811 chars]"
- HTML tag stripping and whitespace collapsing
- The handful of HTML entities NewsAPI leaves in previews

This module centralizes cleanup so it isn't duplicated across the fetcher,
the quality filter and the read endpoints.
"""

import html
import re

# Matches a NewsAPI truncation marker at the very end of text: "[+1811 chars]"
TRUNCATION_PATTERN = re.compile(r"\[\+\d+\s+chars\]$", re.IGNORECASE)

# Same marker plus any whitespace before it, used when stripping
TRAILING_TRUNCATION_PATTERN = re.compile(r"\s*\[\+\d+\s+chars\]$", re.IGNORECASE)

# Trailing ellipsis, ASCII or the single glyph
TRAILING_ELLIPSIS_PATTERN = re.compile(r"(?:\.\.\.|…)$")

HTML_TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")


def strip_html(text: str) -> str:
    """Replace HTML tags with spaces."""
    return HTML_TAG_PATTERN.sub(" ", text)


def normalize_text(text: str | None) -> str:
    """Strip tags, collapse whitespace and trim."""
    if not text:
        return ""
    return WHITESPACE_PATTERN.sub(" ", strip_html(text)).strip()


def decode_html_entities(text: str) -> str:
    """Decode HTML entities (&amp;, &nbsp;, &#39;, ...) to characters."""
    return html.unescape(text).replace("\xa0", " ")


def clean_html_text(text: str | None) -> str:
    """Strip tags, decode entities, collapse whitespace."""
    if not text:
        return ""
    return WHITESPACE_PATTERN.sub(" ", decode_html_entities(strip_html(text))).strip()


def has_truncation_marker(text: str | None) -> bool:
    """Check if text ends with a provider truncation marker."""
    if not text:
        return False
    return bool(TRUNCATION_PATTERN.search(text.strip()))


def strip_truncation_marker(text: str | None) -> str:
    """Remove a trailing provider truncation marker and trim."""
    if not text:
        return ""
    return TRAILING_TRUNCATION_PATTERN.sub("", text.strip()).strip()


def has_trailing_ellipsis(text: str | None) -> bool:
    if not text:
        return False
    return bool(TRAILING_ELLIPSIS_PATTERN.search(text.strip()))


def word_count(text: str) -> int:
    """Whitespace-delimited word count, empty tokens discarded."""
    return len([token for token in text.split() if token])
