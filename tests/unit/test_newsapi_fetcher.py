# tests/unit/test_newsapi_fetcher.py
"""
Unit tests for the NewsAPI.org fetcher.

Tests request parameters, article normalization, degradation on provider
errors and the 429 retry.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from wararka.services.api_fetchers import (
    NewsApiFetcher,
    NewsProviderConfigError,
)

TOP_HEADLINES_URL = "https://newsapi.org/v2/top-headlines"
EVERYTHING_URL = "https://newsapi.org/v2/everything"


def _response(status_code: int, json_data=None, url: str = TOP_HEADLINES_URL) -> httpx.Response:
    return httpx.Response(status_code, json=json_data, request=httpx.Request("GET", url))


class TestNewsApiFetcher:
    """Tests for NewsApiFetcher class."""

    @pytest.fixture
    def fetcher(self):
        """Create a NewsApiFetcher instance for testing."""
        return NewsApiFetcher(api_key="test-api-key", rate_limit_wait_seconds=0)

    @pytest.fixture
    def sample_article(self):
        """Sample NewsAPI article."""
        return {
            "source": {"id": "bbc-news", "name": "BBC News"},
            "author": "Reporter",
            "title": "  Leaders meet in Nairobi  ",
            "description": "Regional leaders met on Tuesday.",
            "url": "https://example.com/news/story",
            "urlToImage": "https://example.com/image.jpg",
            "publishedAt": "2026-10-18T09:00:00Z",
            "content": "Regional leaders met on Tuesday to discuss trade… [+2345 chars]",
        }

    @pytest.fixture
    def sample_api_response(self, sample_article):
        return {"status": "ok", "totalResults": 1, "articles": [sample_article]}

    def test_source_type(self, fetcher):
        assert fetcher.source_type == "newsapi"

    @pytest.mark.asyncio
    async def test_world_request_params(self, fetcher, sample_api_response):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, sample_api_response)
            await fetcher.fetch_world_news()

        url = mock_get.call_args.args[0]
        params = mock_get.call_args.kwargs["params"]
        assert url == TOP_HEADLINES_URL
        assert params["category"] == "general"
        assert params["language"] == "en"
        assert params["pageSize"] == "12"
        assert params["apiKey"] == "test-api-key"

    @pytest.mark.asyncio
    async def test_football_request_params(self, fetcher, sample_api_response):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, sample_api_response, EVERYTHING_URL)
            await fetcher.fetch_football_news()

        url = mock_get.call_args.args[0]
        params = mock_get.call_args.kwargs["params"]
        assert url == EVERYTHING_URL
        assert params["q"] == "football OR soccer"
        assert params["sortBy"] == "publishedAt"
        assert params["language"] == "en"

    @pytest.mark.asyncio
    async def test_normalizes_article(self, fetcher, sample_api_response):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, sample_api_response)
            articles = await fetcher.fetch_world_news()

        assert len(articles) == 1
        article = articles[0]
        assert article["title"] == "Leaders meet in Nairobi"
        assert article["content"] == "Regional leaders met on Tuesday to discuss trade…"
        assert article["image_url"] == "https://example.com/image.jpg"
        assert article["published_at"] == "2026-10-18T09:00:00Z"
        assert article["source"] == "BBC News"
        assert article["url"] == "https://example.com/news/story"

    @pytest.mark.asyncio
    async def test_missing_content_falls_back_to_description(self, fetcher, sample_article):
        sample_article["content"] = None
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, {"articles": [sample_article]})
            articles = await fetcher.fetch_world_news()

        assert articles[0]["content"] == "Regional leaders met on Tuesday."

    @pytest.mark.asyncio
    async def test_blank_titles_dropped(self, fetcher, sample_article):
        blank = {**sample_article, "title": "   "}
        missing = {k: v for k, v in sample_article.items() if k != "title"}
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, {"articles": [blank, missing, sample_article, "junk"]})
            articles = await fetcher.fetch_world_news()

        assert len(articles) == 1

    @pytest.mark.asyncio
    async def test_missing_key_returns_empty_without_request(self):
        fetcher = NewsApiFetcher(api_key=None)
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            assert await fetcher.fetch_world_news() == []
            assert await fetcher.fetch_football_news() == []
        mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_key_raises_in_strict_mode(self):
        fetcher = NewsApiFetcher(api_key=None, strict=True)
        with pytest.raises(NewsProviderConfigError):
            await fetcher.fetch_world_news()

    @pytest.mark.asyncio
    async def test_non_2xx_returns_empty(self, fetcher):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(401, {"status": "error", "code": "apiKeyInvalid"})
            assert await fetcher.fetch_world_news() == []

    @pytest.mark.asyncio
    async def test_network_error_returns_empty(self, fetcher):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.ConnectError("Connection refused")
            assert await fetcher.fetch_football_news() == []

    @pytest.mark.asyncio
    async def test_invalid_json_returns_empty(self, fetcher):
        bad = httpx.Response(200, content=b"not json", request=httpx.Request("GET", TOP_HEADLINES_URL))
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = bad
            assert await fetcher.fetch_world_news() == []

    @pytest.mark.asyncio
    async def test_non_list_articles_returns_empty(self, fetcher):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, {"status": "ok", "articles": None})
            assert await fetcher.fetch_world_news() == []

    @pytest.mark.asyncio
    async def test_retries_after_rate_limit(self, fetcher, sample_api_response):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = [
                _response(429, {"status": "error"}),
                _response(200, sample_api_response),
            ]
            articles = await fetcher.fetch_world_news()

        assert mock_get.call_count == 2
        assert len(articles) == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_rate_limit_attempts(self, fetcher):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(429, {"status": "error"})
            articles = await fetcher.fetch_world_news()

        assert articles == []
        assert mock_get.call_count == 3

    @pytest.mark.asyncio
    async def test_full_article_scrape_replaces_preview(self, sample_api_response):
        fetcher = NewsApiFetcher(api_key="test-api-key", full_article_scrape=True)
        full_text = "Full body scraped from the source page. " * 20
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get, patch.object(
            fetcher.body_extractor, "fetch_full_text", new_callable=AsyncMock
        ) as mock_scrape:
            mock_get.return_value = _response(200, sample_api_response)
            mock_scrape.return_value = full_text
            articles = await fetcher.fetch_world_news()

        mock_scrape.assert_awaited_once_with("https://example.com/news/story")
        assert articles[0]["content"] == full_text

    @pytest.mark.asyncio
    async def test_failed_scrape_keeps_preview(self, sample_api_response):
        fetcher = NewsApiFetcher(api_key="test-api-key", full_article_scrape=True)
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get, patch.object(
            fetcher.body_extractor, "fetch_full_text", new_callable=AsyncMock
        ) as mock_scrape:
            mock_get.return_value = _response(200, sample_api_response)
            mock_scrape.return_value = None
            articles = await fetcher.fetch_world_news()

        assert articles[0]["content"] == "Regional leaders met on Tuesday to discuss trade…"

    @pytest.mark.asyncio
    async def test_scrape_disabled_by_default(self, fetcher, sample_api_response):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get, patch.object(
            fetcher.body_extractor, "fetch_full_text", new_callable=AsyncMock
        ) as mock_scrape:
            mock_get.return_value = _response(200, sample_api_response)
            await fetcher.fetch_world_news()

        mock_scrape.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_body_returns_empty(self, fetcher):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, [{"title": "x"}])
            assert await fetcher.fetch_world_news() == []

    @pytest.mark.asyncio
    async def test_non_string_title_is_dropped(self, fetcher, sample_article):
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, {"articles": [{"title": 123}, sample_article]})
            articles = await fetcher.fetch_world_news()

        assert [a["title"] for a in articles] == ["Leaders meet in Nairobi"]

    @pytest.mark.asyncio
    async def test_non_string_content_treated_as_missing(self, fetcher):
        malformed = {
            "title": "Transfer news",
            "content": {"a": 1},
            "description": ["not", "text"],
            "urlToImage": 42,
            "source": {"name": None},
        }
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = _response(200, {"articles": [malformed]}, EVERYTHING_URL)
            articles = await fetcher.fetch_football_news()

        assert len(articles) == 1
        assert articles[0]["title"] == "Transfer news"
        assert articles[0]["content"] == ""
        assert articles[0]["image_url"] is None
        assert articles[0]["source"] is None

    @pytest.mark.asyncio
    async def test_item_error_drops_only_that_item(self, fetcher, sample_article):
        good = await fetcher._normalize_article(sample_article)
        with patch.object(fetcher.client, "get", new_callable=AsyncMock) as mock_get, patch.object(
            fetcher, "_normalize_article", new_callable=AsyncMock
        ) as mock_normalize:
            mock_get.return_value = _response(200, {"articles": [sample_article, sample_article]})
            mock_normalize.side_effect = [TypeError("unexpected shape"), good]
            articles = await fetcher.fetch_world_news()

        assert articles == [good]
