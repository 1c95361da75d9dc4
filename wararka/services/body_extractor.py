"""
Full article text extraction from the source page.

Used by the news fetcher when full-article scraping is enabled. The page is
downloaded once with a hard timeout, paragraph text is pulled from the most
specific content container (<article>, then <main>, then <body>), and
trafilatura is tried on the same HTML when paragraph extraction comes up
short. Every failure yields None so the caller keeps the preview text.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum

import httpx
import trafilatura
from bs4 import BeautifulSoup

from wararka.constants import ScrapeDefaults
from wararka.utils.content_sanitizer import clean_html_text

logger = logging.getLogger(__name__)


class ExtractionFailureReason(str, Enum):
    """Categorized failure reasons for observability."""

    DOWNLOAD_FAILED = "download_failed"
    NOT_HTML = "not_html"
    CONTENT_TOO_SHORT = "content_too_short"
    TIMEOUT = "timeout"


@dataclass
class ExtractionResult:
    """Result of a body extraction attempt."""

    success: bool
    body: str | None = None
    char_count: int = 0
    failure_reason: ExtractionFailureReason | None = None
    duration_ms: int = 0
    extractor_used: str | None = None  # "paragraphs" or "trafilatura"


def extract_paragraph_text(html: str) -> str:
    """
    Extract readable text from an HTML page.

    Picks the first <article>, else <main>, else <body>, else the whole
    document, drops script/style/noscript, and joins its <p> texts with blank
    lines. Without any <p>, returns the container's plain text.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    target = soup.find("article") or soup.find("main") or soup.find("body") or soup

    paragraphs = target.find_all("p")
    if paragraphs:
        texts = [clean_html_text(p.get_text(" ")) for p in paragraphs]
        return "\n\n".join(t for t in texts if t).strip()

    return clean_html_text(target.get_text(" "))


class BodyExtractor:
    """Fetch a source article page and extract its full text."""

    MIN_BODY_LENGTH = ScrapeDefaults.MIN_EXTRACTED_CHARS
    TIMEOUT_SECONDS = ScrapeDefaults.TIMEOUT_SECONDS

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    def _try_trafilatura(self, html: str) -> str | None:
        """Fallback extractor on the already downloaded HTML."""
        try:
            text = trafilatura.extract(
                html,
                include_comments=False,
                include_tables=False,
            )
        except Exception as e:
            logger.debug(f"trafilatura extraction failed: {e}")
            return None
        if text and len(text) >= self.MIN_BODY_LENGTH:
            return text.strip()
        return None

    async def extract(self, url: str) -> ExtractionResult:
        """
        Download the page and extract its body.

        Extraction flow:
        1. GET the URL (10s cap); non-2xx or non-HTML -> failure
        2. Paragraph extraction from article/main/body
        3. If under the minimum length: trafilatura on the same HTML
        4. Still short -> CONTENT_TOO_SHORT
        """
        start_time = time.time()

        def _elapsed() -> int:
            return int((time.time() - start_time) * 1000)

        try:
            response = await self.client.get(
                url,
                headers={"User-Agent": ScrapeDefaults.USER_AGENT},
                timeout=self.TIMEOUT_SECONDS,
                follow_redirects=True,
            )
        except httpx.TimeoutException:
            logger.debug(f"Timed out fetching article page {url}")
            return ExtractionResult(
                success=False,
                failure_reason=ExtractionFailureReason.TIMEOUT,
                duration_ms=_elapsed(),
            )
        except httpx.HTTPError as e:
            logger.debug(f"Failed to fetch article page {url}: {e}")
            return ExtractionResult(
                success=False,
                failure_reason=ExtractionFailureReason.DOWNLOAD_FAILED,
                duration_ms=_elapsed(),
            )

        if not response.is_success:
            return ExtractionResult(
                success=False,
                failure_reason=ExtractionFailureReason.DOWNLOAD_FAILED,
                duration_ms=_elapsed(),
            )

        content_type = response.headers.get("content-type", "")
        if "text/html" not in content_type:
            return ExtractionResult(
                success=False,
                failure_reason=ExtractionFailureReason.NOT_HTML,
                duration_ms=_elapsed(),
            )

        html = response.text
        extractors = [
            (extract_paragraph_text, "paragraphs"),
            (self._try_trafilatura, "trafilatura"),
        ]
        for extractor_fn, name in extractors:
            text = extractor_fn(html)
            if text and len(text) >= self.MIN_BODY_LENGTH:
                logger.debug(f"{name} extracted {len(text)} chars from {url}")
                return ExtractionResult(
                    success=True,
                    body=text,
                    char_count=len(text),
                    duration_ms=_elapsed(),
                    extractor_used=name,
                )

        return ExtractionResult(
            success=False,
            failure_reason=ExtractionFailureReason.CONTENT_TOO_SHORT,
            duration_ms=_elapsed(),
        )

    async def fetch_full_text(self, url: str) -> str | None:
        """Full text for the URL, or None on any failure."""
        try:
            result = await self.extract(url)
        except Exception as e:
            logger.warning(f"Full-text extraction crashed for {url}: {e}")
            return None
        return result.body if result.success else None
