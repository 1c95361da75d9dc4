# wararka/routers/cron.py
"""
News refresh trigger endpoints.

GET /api/cron/update-news      - Run one refresh (external cron or the in-process scheduler)
GET /api/manual-update-news    - Call the trigger server-side and relay its result
"""

import logging
from collections.abc import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wararka.auth import require_cron_secret
from wararka.config import Settings, get_settings
from wararka.constants import RefreshDefaults
from wararka.database import get_db
from wararka.routers.news import invalidate_news_cache
from wararka.services.api_fetchers import NewsApiFetcher
from wararka.services.article_store import ArticleStore
from wararka.services.news_refresh import NewsRefreshOrchestrator
from wararka.services.refresh_lease import RefreshLeaseService
from wararka.services.scheduler import REFRESH_PATH
from wararka.services.translator import Translator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["cron"])


async def get_refresh_orchestrator(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[NewsRefreshOrchestrator]:
    """Build an orchestrator wired to the configured providers; close clients afterwards."""
    fetcher = NewsApiFetcher(
        api_key=settings.NEWS_API_KEY,
        page_size=settings.NEWS_API_PAGE_SIZE,
        full_article_scrape=settings.ENABLE_FULL_ARTICLE_SCRAPE,
        strict=settings.STRICT_CONFIG,
    )
    translator = Translator(
        api_key=settings.GOOGLE_TRANSLATE_KEY,
        target_language=settings.TRANSLATE_TARGET_LANGUAGE,
        strict=settings.STRICT_CONFIG,
    )
    try:
        yield NewsRefreshOrchestrator(
            store=ArticleStore(db),
            fetcher=fetcher,
            translator=translator,
            lease=RefreshLeaseService(db, ttl_seconds=settings.REFRESH_LEASE_TTL_SECONDS),
            on_success=invalidate_news_cache,
        )
    finally:
        await fetcher.close()
        await translator.close()


def get_http_transport() -> httpx.AsyncBaseTransport | None:
    """Transport for server-side calls to our own endpoints. None = default network."""
    return None


@router.get("/cron/update-news", dependencies=[Depends(require_cron_secret)])
async def update_news(
    orchestrator: NewsRefreshOrchestrator = Depends(get_refresh_orchestrator),
) -> JSONResponse:
    """
    Refresh world and sport articles.

    200 {"success": true, "inserted", "worldFetched", "sportFetched"} on success,
    200 {"success": true, "inserted": 0, "skippedDelete": true} when skipped,
    500 {"success": false} on failure.
    """
    outcome = await orchestrator.run()
    return JSONResponse(outcome.to_response(), status_code=outcome.http_status)


@router.get("/manual-update-news")
async def manual_update_news(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> JSONResponse:
    """
    Trigger a refresh through the cron endpoint.

    The caller's Authorization header is forwarded unchanged, so this
    endpoint grants no access the caller does not already have.
    """
    headers = {"Content-Type": "application/json"}
    if authorization:
        headers["Authorization"] = authorization

    try:
        async with httpx.AsyncClient(
            timeout=RefreshDefaults.TRIGGER_TIMEOUT_SECONDS,
            transport=transport,
        ) as client:
            response = await client.get(f"{settings.APP_BASE_URL}{REFRESH_PATH}", headers=headers)
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Manual news update failed: {e}")
        return JSONResponse({"success": False, "error": str(e)}, status_code=500)

    return JSONResponse(
        {
            "success": True,
            "message": "Manual news update triggered",
            "result": data,
        }
    )
