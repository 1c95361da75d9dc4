# wararka/cli/refresh_news.py
"""
Run one news refresh from the command line.

Uses the same orchestrator as /api/cron/update-news, without going through HTTP.

Usage:
    python -m wararka.cli.refresh_news             # fetch, translate and replace
    python -m wararka.cli.refresh_news --dry-run   # fetch only, print what would be stored
"""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()


def get_db_session():
    """Get a database session."""
    from wararka.database import SessionLocal
    return SessionLocal()


def _build_fetcher(settings):
    from wararka.services.api_fetchers import NewsApiFetcher

    return NewsApiFetcher(
        api_key=settings.NEWS_API_KEY,
        page_size=settings.NEWS_API_PAGE_SIZE,
        full_article_scrape=settings.ENABLE_FULL_ARTICLE_SCRAPE,
        strict=settings.STRICT_CONFIG,
    )


async def preview() -> int:
    """Fetch both buckets and print titles. Nothing is translated or stored."""
    from wararka.config import get_settings
    from wararka.services.article_quality import is_complete

    async with _build_fetcher(get_settings()) as fetcher:
        world, football = await asyncio.gather(
            fetcher.fetch_world_news(),
            fetcher.fetch_football_news(),
        )

    for label, articles in (("world", world), ("sport", football)):
        print(f"{label}: {len(articles)} articles")
        for article in articles:
            marker = " " if is_complete(article.get("content")) else "~"
            print(f"  {marker} {article['title'][:80]}")

    print(f"\nDry run: {len(world) + len(football)} articles would be stored")
    return 0


async def refresh() -> int:
    """Run a full refresh and print its outcome. Returns a process exit code."""
    from wararka.config import get_settings
    from wararka.services.article_store import ArticleStore
    from wararka.services.news_refresh import NewsRefreshOrchestrator
    from wararka.services.refresh_lease import RefreshLeaseService
    from wararka.services.translator import Translator

    settings = get_settings()
    db = get_db_session()
    try:
        async with _build_fetcher(settings) as fetcher, Translator(
            api_key=settings.GOOGLE_TRANSLATE_KEY,
            target_language=settings.TRANSLATE_TARGET_LANGUAGE,
            strict=settings.STRICT_CONFIG,
        ) as translator:
            orchestrator = NewsRefreshOrchestrator(
                store=ArticleStore(db),
                fetcher=fetcher,
                translator=translator,
                lease=RefreshLeaseService(db, ttl_seconds=settings.REFRESH_LEASE_TTL_SECONDS),
            )
            outcome = await orchestrator.run()
    finally:
        db.close()

    print(f"Run {outcome.run_id}: {outcome.status.value}")
    print(f"  world fetched: {outcome.world_fetched}")
    print(f"  sport fetched: {outcome.sport_fetched}")
    print(f"  inserted:      {outcome.inserted}")
    if outcome.skip_reason:
        print(f"  skipped:       {outcome.skip_reason.value}")
    if outcome.error_message:
        print(f"  error:         {outcome.error_message}")
    return 0 if outcome.success else 1


def main():
    parser = argparse.ArgumentParser(description="Refresh world and sport news")
    parser.add_argument("--dry-run", action="store_true", help="Fetch only, do not translate or store")
    args = parser.parse_args()

    from wararka.config import get_settings
    from wararka.logging_config import configure_logging

    settings = get_settings()
    configure_logging(json_format=settings.LOG_FORMAT == "json", level=settings.LOG_LEVEL)

    code = asyncio.run(preview() if args.dry_run else refresh())
    sys.exit(code)


if __name__ == "__main__":
    main()
