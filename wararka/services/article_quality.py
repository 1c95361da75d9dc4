# wararka/services/article_quality.py
"""
Article completeness check.

Decides whether article text is substantive enough to publish. Providers
often ship a preview that ends in "[+1234 chars]" or an ellipsis and keep
the rest behind a paywall; such bodies are treated as incomplete.
"""

from wararka.constants import QualityThresholds
from wararka.utils.content_sanitizer import (
    has_trailing_ellipsis,
    has_truncation_marker,
    normalize_text,
    word_count,
)


def is_complete(
    text: str | None,
    min_chars: int = QualityThresholds.MIN_CHARS,
    min_words: int = QualityThresholds.MIN_WORDS,
) -> bool:
    """
    Return True if the text looks like a complete article body.

    Steps:
    1. Empty/None -> False
    2. Strip tags, collapse whitespace, trim; empty -> False
    3. Trailing "[+N chars]" marker -> False
    4. Trailing "..." or "…" -> False
    5. True iff at least min_chars characters and min_words words
    """
    if not text:
        return False

    normalized = normalize_text(text)
    if not normalized:
        return False

    if has_truncation_marker(normalized):
        return False

    if has_trailing_ellipsis(normalized):
        return False

    return len(normalized) >= min_chars and word_count(normalized) >= min_words
