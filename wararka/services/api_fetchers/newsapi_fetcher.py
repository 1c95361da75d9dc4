# wararka/services/api_fetchers/newsapi_fetcher.py
"""
NewsAPI.org fetcher for the refresh pipeline.

Two topic buckets are fetched:
- world: /top-headlines, general category
- football: /everything, "football OR soccer" sorted by publish time

Free-plan responses cut `content` at ~200 characters and append a
"[+N chars]" marker; the marker is stripped here and downstream readers
decide whether the remaining text is complete enough to show.

API Documentation: https://newsapi.org/docs
"""

import asyncio
import logging
import time
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from wararka.constants import NewsApiDefaults
from wararka.services.api_fetchers.base import (
    BaseFetcher,
    NewsProviderConfigError,
    NormalizedArticle,
)
from wararka.services.body_extractor import BodyExtractor
from wararka.utils.content_sanitizer import strip_truncation_marker

logger = logging.getLogger(__name__)


class RateLimitedError(Exception):
    """NewsAPI answered 429 Too Many Requests."""

    pass


class NewsApiFetcher(BaseFetcher):
    """
    Fetch articles from NewsAPI.org.

    Provider failures (missing key, non-2xx, network errors, bad JSON) are
    logged and turned into an empty list. HTTP 429 is retried a few times
    with a fixed delay first.
    """

    BASE_URL = NewsApiDefaults.BASE_URL
    DEFAULT_TIMEOUT = NewsApiDefaults.REQUEST_TIMEOUT_SECONDS

    def __init__(
        self,
        api_key: str | None,
        page_size: int = NewsApiDefaults.PAGE_SIZE,
        full_article_scrape: bool = False,
        strict: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limit_attempts: int = NewsApiDefaults.RATE_LIMIT_ATTEMPTS,
        rate_limit_wait_seconds: float = NewsApiDefaults.RATE_LIMIT_WAIT_SECONDS,
    ):
        """
        Initialize NewsAPI fetcher.

        Args:
            api_key: NewsAPI key; None degrades to empty results
            page_size: Articles requested per bucket
            full_article_scrape: Replace previews with text scraped from source pages
            strict: Raise NewsProviderConfigError instead of degrading on a missing key
            timeout: HTTP request timeout in seconds
            rate_limit_attempts: Total tries when the API answers 429
            rate_limit_wait_seconds: Fixed delay between 429 retries
        """
        self.api_key = api_key
        self.page_size = page_size
        self.full_article_scrape = full_article_scrape
        self.strict = strict
        self.rate_limit_attempts = rate_limit_attempts
        self.rate_limit_wait_seconds = rate_limit_wait_seconds
        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Accept": "application/json",
            },
        )
        self.body_extractor = BodyExtractor(self.client)

    @property
    def source_type(self) -> str:
        return "newsapi"

    async def fetch_world_news(self) -> list[NormalizedArticle]:
        return await self._fetch(
            "top-headlines",
            {
                "category": "general",
                "language": "en",
                "pageSize": str(self.page_size),
            },
        )

    async def fetch_football_news(self) -> list[NormalizedArticle]:
        return await self._fetch(
            "everything",
            {
                "q": NewsApiDefaults.FOOTBALL_QUERY,
                "language": "en",
                "sortBy": "publishedAt",
                "pageSize": str(self.page_size),
            },
        )

    async def _get_json(self, path: str, params: dict[str, str]) -> dict[str, Any] | None:
        """One API call with fixed-delay retries on 429. None on any other non-2xx."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.rate_limit_attempts),
            wait=wait_fixed(self.rate_limit_wait_seconds),
            retry=retry_if_exception_type(RateLimitedError),
            reraise=True,
        ):
            with attempt:
                response = await self.client.get(
                    f"{self.BASE_URL}/{path}",
                    params={**params, "apiKey": self.api_key},
                )
                if response.status_code == 429:
                    logger.warning(
                        f"NewsAPI rate limited on /{path} (attempt {attempt.retry_state.attempt_number})",
                        extra={"provider": "newsapi", "status_code": 429},
                    )
                    raise RateLimitedError(f"NewsAPI rate limited on /{path}")

        if not response.is_success:
            logger.error(
                f"NewsAPI request failed: {response.status_code} {response.reason_phrase}",
                extra={"provider": "newsapi", "status_code": response.status_code},
            )
            return None

        return response.json()

    async def _fetch(self, path: str, params: dict[str, str]) -> list[NormalizedArticle]:
        """
        Fetch and normalize one bucket.

        Returns:
            Normalized articles, possibly empty. Never raises on provider failure.
        """
        if not self.api_key:
            if self.strict:
                raise NewsProviderConfigError("NEWS_API_KEY is not configured")
            logger.info("NEWS_API_KEY not configured, skipping NewsAPI fetch")
            return []

        start_time = time.time()
        try:
            data = await self._get_json(path, params)
        except RateLimitedError:
            logger.error(f"NewsAPI still rate limited after {self.rate_limit_attempts} attempts")
            return []
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers malformed JSON bodies
            logger.error(f"NewsAPI request error on /{path}: {e}")
            return []

        if not isinstance(data, dict):
            return []

        raw_articles = data.get("articles")
        if not isinstance(raw_articles, list):
            return []

        normalized = await asyncio.gather(
            *(self._safe_normalize(article) for article in raw_articles)
        )
        articles = [a for a in normalized if a is not None]

        logger.info(
            f"NewsAPI fetched {len(articles)} articles from /{path} in {int((time.time() - start_time) * 1000)}ms",
            extra={"provider": "newsapi", "duration_ms": int((time.time() - start_time) * 1000)},
        )
        return articles

    async def _safe_normalize(self, article: Any) -> NormalizedArticle | None:
        """Normalize one item; a malformed item is dropped instead of failing the bucket."""
        try:
            return await self._normalize_article(article)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Dropping malformed NewsAPI article: {e}", extra={"provider": "newsapi"})
            return None

    async def _normalize_article(self, article: Any) -> NormalizedArticle | None:
        """
        Convert a NewsAPI article to a NormalizedArticle.

        Non-string fields are treated as missing.

        Returns:
            Normalized article or None if the title is missing/blank
        """
        if not isinstance(article, dict):
            return None

        title = _text(article.get("title"))
        if not title:
            return None

        description = _text(article.get("description"))
        preview = strip_truncation_marker(_text(article.get("content"))) or description

        url = _text(article.get("url")) or None
        content = preview
        if self.full_article_scrape and url:
            full_text = await self.body_extractor.fetch_full_text(url)
            if full_text:
                content = full_text

        source = article.get("source")
        source_name = _text(source.get("name")) if isinstance(source, dict) else ""

        return NormalizedArticle(
            title=title,
            content=content,
            image_url=_text(article.get("urlToImage")) or None,
            published_at=_text(article.get("publishedAt")) or None,
            source=source_name or None,
            url=url,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "NewsApiFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _text(value: Any) -> str:
    """Trimmed string value, or "" for anything that is not a string."""
    return value.strip() if isinstance(value, str) else ""
