# wararka/services/news_feed.py
"""
Read side of the news pages.

Serves stored world/sport articles that pass the completeness check, in
either English or Somali. When the store is empty, fails, or nothing
passes the check, a fixed set of sample articles is returned so the pages
never render an empty state.
"""

import logging
from datetime import UTC, datetime, timedelta

from wararka.constants import FeedDefaults
from wararka.models import Article, ArticleCategory
from wararka.services.article_quality import is_complete
from wararka.services.article_store import ArticleStore, ArticleStoreError

logger = logging.getLogger(__name__)

# Read more rows than requested since some are dropped by the completeness check
OVERFETCH_FACTOR = 3

_IMAGE_BASE = "https://images.unsplash.com"

FALLBACK_ARTICLES: dict[ArticleCategory, list[dict]] = {
    ArticleCategory.WORLD: [
        {
            "title": "Global Economic Summit Concludes with New Trade Agreement",
            "description": "World leaders gathered for a three-day economic summit, resulting in a comprehensive trade agreement aimed at boosting international commerce. The agreement focuses on renewable energy partnerships and technology innovation hubs across participating nations.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1552664730-d307ca884978?w=400&h=200&fit=crop",
            "source": "Global News Network",
        },
        {
            "title": "Breakthrough in Climate Change Research",
            "description": "Scientists announce a major breakthrough in carbon capture technology that could significantly reduce atmospheric carbon dioxide levels. The new method is 40% more efficient than previous solutions and could be implemented globally within 5 years.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1569163139394-de4798aa62b3?w=400&h=200&fit=crop",
            "source": "Science Today",
        },
        {
            "title": "Major Sporting Event Draws Record Viewership",
            "description": "International sporting event achieves record-breaking viewership numbers, with over 3 billion viewers tuning in across multiple platforms. The event showcased outstanding athletic performances and broke several world records.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1552672260-eb7149bda42d?w=400&h=200&fit=crop",
            "source": "Sports International",
        },
        {
            "title": "Tech Giants Announce Joint Sustainability Initiative",
            "description": "Leading technology companies have partnered to launch a comprehensive sustainability initiative focused on reducing electronic waste and promoting recycling. The five-year plan aims to process 500 million tons of electronic waste responsibly.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1531482615713-2afd69097998?w=400&h=200&fit=crop",
            "source": "Tech News Daily",
        },
        {
            "title": "Healthcare Innovation Extends Life Expectancy",
            "description": "New healthcare protocols and medical technologies are credited with increasing global life expectancy. The innovation includes AI-assisted diagnostics and personalized medicine approaches that improve treatment outcomes.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1576091160550-2173dba999ef?w=400&h=200&fit=crop",
            "source": "Health & Science",
        },
    ],
    ArticleCategory.SPORT: [
        {
            "title": "Manchester City Extends Lead After Dominant Win",
            "description": "Manchester City secured a commanding 3-0 victory over their rivals, extending their lead at the top of the Premier League. The team's attacking performance was exceptional, with multiple goals from different players showing their depth.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1461896836934-ffe607ba8211?w=400&h=200&fit=crop",
            "source": "Sports Central",
        },
        {
            "title": "Transfer Window: Major Signings Announced",
            "description": "Several top European clubs have announced major transfer signings ahead of the new season. The moves include high-profile international players and promising young talents from various leagues.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1522869635100-ce697e9058b3?w=400&h=200&fit=crop",
            "source": "Football Transfer News",
        },
        {
            "title": "Young Talent Breaks League Scoring Record",
            "description": "A rising star player has broken the league's single-season scoring record, showcasing exceptional form and clinical finishing. The achievement comes at the midway point of the season, promising another successful chapter.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1552315154-5a3a9e4f5e63?w=400&h=200&fit=crop",
            "source": "Elite Football",
        },
        {
            "title": "Champions League Quarterfinals Draw Set",
            "description": "The Champions League quarterfinal draw has set up exciting matchups between Europe's elite teams. The fixtures promise thrilling football with several David vs Goliath scenarios.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1543699330-ab127b08ba38?w=400&h=200&fit=crop",
            "source": "European Football",
        },
        {
            "title": "National Team Advances to Tournament Finals",
            "description": "The national football team has qualified for the tournament finals after an impressive playoff performance. The team will face tough opposition but believes they can compete for the title.",
            "urlToImage": f"{_IMAGE_BASE}/photo-1566418699018-b5f0e2e9f6e4?w=400&h=200&fit=crop",
            "source": "Sports News Daily",
        },
    ],
}


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value.isoformat() + "Z"


def fallback_articles(category: ArticleCategory, now: datetime | None = None) -> list[dict]:
    """Sample articles, one day apart starting from now."""
    now = now or datetime.now(UTC)
    return [
        {**item, "publishedAt": _isoformat(now - timedelta(days=i))}
        for i, item in enumerate(FALLBACK_ARTICLES[category])
    ]


def to_display_article(article: Article, lang: str = "en") -> dict:
    """Map a stored row to the shape the news pages render."""
    if lang == "so":
        title = article.title_so or article.title
        body = article.content_so or article.content
    else:
        title = article.title
        body = article.content
    return {
        "title": title,
        "description": body,
        "urlToImage": article.image_url,
        "publishedAt": _isoformat(article.published_at or article.created_at),
        "source": FeedDefaults.UNKNOWN_SOURCE,
    }


def get_news_feed(
    store: ArticleStore,
    category: ArticleCategory,
    lang: str = "en",
    limit: int = FeedDefaults.LIMIT,
) -> tuple[list[dict], bool]:
    """
    Articles for one category page.

    Returns:
        (articles, is_fallback). The completeness check always runs on the
        primary-language content, whatever language is displayed.
    """
    try:
        rows = store.list_articles(category, limit=limit * OVERFETCH_FACTOR)
    except ArticleStoreError as e:
        logger.error(f"Failed to load {category.value} articles, serving samples: {e}")
        return fallback_articles(category), True

    articles = [to_display_article(row, lang) for row in rows if is_complete(row.content)][:limit]
    if not articles:
        logger.info(
            f"No complete {category.value} articles stored, serving samples",
            extra={"category": category.value},
        )
        return fallback_articles(category), True

    return articles, False
