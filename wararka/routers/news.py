# wararka/routers/news.py
"""
News page endpoints.

GET /api/world-news     - Stored world articles (or samples)
GET /api/football-news  - Stored sport articles (or samples)
"""

import logging
from typing import Literal

from cachetools import TTLCache
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from wararka.constants import CacheConfig, FeedDefaults
from wararka.database import get_db
from wararka.models import ArticleCategory
from wararka.schemas.news import NewsFeedResponse
from wararka.services.article_store import ArticleStore
from wararka.services.news_feed import fallback_articles, get_news_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["news"])

# Live (non-sample) feeds only; cleared after each successful refresh
_news_cache: TTLCache = TTLCache(
    maxsize=CacheConfig.NEWS_FEED_MAX_ENTRIES,
    ttl=CacheConfig.NEWS_FEED_TTL_SECONDS,
)


def invalidate_news_cache() -> None:
    """Clear the news feed cache. Called after a successful refresh."""
    _news_cache.clear()


def _serve_feed(
    response: Response,
    db: Session,
    category: ArticleCategory,
    lang: str,
    limit: int,
) -> NewsFeedResponse:
    cache_key = f"{category.value}:{lang}:{limit}"
    cached = _news_cache.get(cache_key)
    if cached is not None:
        response.headers["X-Cache"] = "HIT"
        return cached

    response.headers["X-Cache"] = "MISS"
    try:
        articles, is_fallback = get_news_feed(ArticleStore(db), category, lang=lang, limit=limit)
    except Exception as e:
        logger.exception(f"Unexpected error loading {category.value} feed: {e}")
        return NewsFeedResponse(articles=fallback_articles(category))

    result = NewsFeedResponse(articles=articles)
    if not is_fallback:
        _news_cache[cache_key] = result
    return result


@router.get("/world-news", response_model=NewsFeedResponse)
def world_news(
    response: Response,
    db: Session = Depends(get_db),
    lang: Literal["en", "so"] = Query("en", description="Display language"),
    limit: int = Query(FeedDefaults.LIMIT, ge=1, le=FeedDefaults.MAX_LIMIT),
) -> NewsFeedResponse:
    """World headlines that pass the completeness check."""
    return _serve_feed(response, db, ArticleCategory.WORLD, lang, limit)


@router.get("/football-news", response_model=NewsFeedResponse)
def football_news(
    response: Response,
    db: Session = Depends(get_db),
    lang: Literal["en", "so"] = Query("en", description="Display language"),
    limit: int = Query(FeedDefaults.LIMIT, ge=1, le=FeedDefaults.MAX_LIMIT),
) -> NewsFeedResponse:
    """Football articles that pass the completeness check."""
    return _serve_feed(response, db, ArticleCategory.SPORT, lang, limit)
