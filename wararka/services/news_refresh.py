"""
News refresh orchestrator.

One run walks these states:

    FETCHING -> TRANSLATING -> (SKIPPED | REPLACING) -> DONE
                                          \\-> ERROR (from any step)

- Fetching: world and football buckets concurrently
- Translating: every article concurrently, title and content in parallel,
  all rows stamped with the single run timestamp
- Skipped: nothing fetched, or another run holds the refresh lease; stored
  rows are left untouched
- Replacing: world/sport rows swapped in one transaction
- Every run appends one row to news_update_logs

Authorization is checked by the HTTP layer before a run is created.
"""

import asyncio
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from wararka.constants import RefreshDefaults
from wararka.logging_config import log_stage, trace_id_var
from wararka.models import ArticleCategory, RunStatus, SkipReason, utcnow
from wararka.services.api_fetchers.base import BaseFetcher, NormalizedArticle
from wararka.services.article_store import ArticleStore, ArticleStoreError
from wararka.services.refresh_lease import RefreshLeaseService
from wararka.services.translator import Translator

logger = logging.getLogger(__name__)


@dataclass
class RefreshOutcome:
    """Result of one refresh run, shaped for the HTTP response."""

    status: RunStatus
    run_id: str
    inserted: int = 0
    world_fetched: int = 0
    sport_fetched: int = 0
    skip_reason: SkipReason | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.status != RunStatus.ERROR

    @property
    def http_status(self) -> int:
        return 500 if self.status == RunStatus.ERROR else 200

    def to_response(self) -> dict[str, Any]:
        if self.status == RunStatus.ERROR:
            return {"success": False}
        if self.status == RunStatus.SKIPPED:
            return {"success": True, "inserted": 0, "skippedDelete": True}
        return {
            "success": True,
            "inserted": self.inserted,
            "worldFetched": self.world_fetched,
            "sportFetched": self.sport_fetched,
        }


class NewsRefreshOrchestrator:
    """
    Coordinates fetch -> translate -> replace for the world and sport buckets.

    Collaborators are injected so tests can swap any of them. The lease is
    optional; without one, overlapping runs are not serialised.
    """

    def __init__(
        self,
        store: ArticleStore,
        fetcher: BaseFetcher,
        translator: Translator,
        lease: RefreshLeaseService | None = None,
        clock: Callable[[], datetime] = utcnow,
        translate_concurrency: int = RefreshDefaults.TRANSLATE_CONCURRENCY,
        on_success: Callable[[], None] | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.translator = translator
        self.lease = lease
        self.clock = clock
        self.translate_concurrency = translate_concurrency
        self.on_success = on_success

    async def run(self) -> RefreshOutcome:
        """Execute one refresh. Never raises; failures come back as an ERROR outcome."""
        run_id = str(uuid.uuid4())
        token = trace_id_var.set(run_id)
        run_timestamp = self.clock()
        world_fetched = 0
        sport_fetched = 0

        logger.info("News refresh started", extra={"event": "refresh_start", "run_id": run_id})

        try:
            with log_stage("fetching"):
                world_news, football_news = await asyncio.gather(
                    self.fetcher.fetch_world_news(),
                    self.fetcher.fetch_football_news(),
                )
            world_fetched = len(world_news)
            sport_fetched = len(football_news)

            with log_stage("translating"):
                semaphore = asyncio.Semaphore(self.translate_concurrency)
                world_rows, sport_rows = await asyncio.gather(
                    self._translate_articles(world_news, ArticleCategory.WORLD, run_timestamp, semaphore),
                    self._translate_articles(football_news, ArticleCategory.SPORT, run_timestamp, semaphore),
                )
            rows = world_rows + sport_rows

            if not rows:
                logger.warning("No articles fetched, keeping existing rows")
                return self._finish(
                    RefreshOutcome(
                        status=RunStatus.SKIPPED,
                        run_id=run_id,
                        skip_reason=SkipReason.NOTHING_FETCHED,
                    )
                )

            if self.lease is not None and not self.lease.acquire():
                return self._finish(
                    RefreshOutcome(
                        status=RunStatus.SKIPPED,
                        run_id=run_id,
                        world_fetched=world_fetched,
                        sport_fetched=sport_fetched,
                        skip_reason=SkipReason.REFRESH_IN_PROGRESS,
                    )
                )

            try:
                with log_stage("replacing"):
                    inserted = self.store.replace_refresh_articles(rows, run_id=run_id)
            except ArticleStoreError as e:
                logger.error(f"Refresh {e.step} step failed: {e}", extra={"event": "refresh_store_failed"})
                return self._finish(
                    RefreshOutcome(
                        status=RunStatus.ERROR,
                        run_id=run_id,
                        world_fetched=world_fetched,
                        sport_fetched=sport_fetched,
                        error_message=str(e),
                    )
                )
            finally:
                if self.lease is not None:
                    self.lease.release()

            if self.on_success is not None:
                self.on_success()

            return self._finish(
                RefreshOutcome(
                    status=RunStatus.SUCCESS,
                    run_id=run_id,
                    inserted=inserted,
                    world_fetched=world_fetched,
                    sport_fetched=sport_fetched,
                )
            )

        except Exception as e:
            logger.exception(f"Unexpected error during news refresh: {e}")
            return self._finish(
                RefreshOutcome(
                    status=RunStatus.ERROR,
                    run_id=run_id,
                    world_fetched=world_fetched,
                    sport_fetched=sport_fetched,
                    error_message=str(e),
                )
            )
        finally:
            trace_id_var.reset(token)

    async def _translate_articles(
        self,
        articles: list[NormalizedArticle],
        category: ArticleCategory,
        run_timestamp: datetime,
        semaphore: asyncio.Semaphore,
    ) -> list[dict[str, Any]]:
        """Build insert rows for one bucket, translating every article concurrently."""

        async def translate_one(article: NormalizedArticle) -> dict[str, Any]:
            title = article["title"]
            content = article.get("content") or ""
            async with semaphore:
                title_so, content_so = await asyncio.gather(
                    self.translator.translate_to_somali(title),
                    self.translator.translate_to_somali(content),
                )
            return {
                "title": title,
                "content": content,
                "title_so": title_so,
                "content_so": content_so,
                "category": category.value,
                "image_url": article.get("image_url"),
                "published_at": run_timestamp,
            }

        return list(await asyncio.gather(*(translate_one(a) for a in articles)))

    def _finish(self, outcome: RefreshOutcome) -> RefreshOutcome:
        """Log the outcome and append the run log row (best effort)."""
        extra = {
            "event": "refresh_complete",
            "status": outcome.status.value,
            "inserted": outcome.inserted,
            "world_fetched": outcome.world_fetched,
            "sport_fetched": outcome.sport_fetched,
            "run_id": outcome.run_id,
        }
        if outcome.skip_reason:
            extra["skip_reason"] = outcome.skip_reason.value

        if outcome.status == RunStatus.ERROR:
            logger.error(f"News refresh failed: {outcome.error_message}", extra=extra)
        else:
            logger.info(f"News refresh finished with status {outcome.status.value}", extra=extra)

        try:
            self.store.record_run(
                run_id=outcome.run_id,
                status=outcome.status,
                inserted_count=outcome.inserted,
                world_fetched=outcome.world_fetched,
                sport_fetched=outcome.sport_fetched,
                skip_reason=outcome.skip_reason.value if outcome.skip_reason else None,
                error_message=outcome.error_message,
            )
        except Exception as e:
            logger.warning(f"Failed to record news update log: {e}")

        return outcome
