# wararka/services/scheduler.py
"""
In-process scheduler for the daily news refresh.

The scheduler does not run the refresh itself: it calls this service's own
/api/cron/update-news endpoint, so scheduled, external-cron and manual
triggers all go through the same authorization and run logging. One
instance is built in the FastAPI lifespan and kept on app.state.
"""

import logging
from datetime import UTC, datetime, timedelta

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger

from wararka.config import Settings
from wararka.constants import RefreshDefaults

logger = logging.getLogger(__name__)

DAILY_JOB_ID = "news-refresh-daily"
STARTUP_JOB_ID = "news-refresh-startup"
REFRESH_PATH = "/api/cron/update-news"


class NewsRefreshScheduler:
    """
    Daily refresh job plus a one-shot warm-up shortly after startup.

    start() is idempotent for the lifetime of the instance; shutdown()
    makes it startable again.
    """

    def __init__(
        self,
        settings: Settings,
        scheduler: AsyncIOScheduler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.scheduler = scheduler or AsyncIOScheduler(timezone=UTC)
        self._transport = transport
        self._started = False

    @property
    def is_running(self) -> bool:
        return self._started

    @property
    def refresh_url(self) -> str:
        return f"{self.settings.APP_BASE_URL}{REFRESH_PATH}"

    def start(self) -> bool:
        """
        Register the jobs and start the scheduler.

        Returns:
            True if this call started it, False if it was already running.
        """
        if self._started:
            logger.info("News refresh scheduler already initialized")
            return False

        self.scheduler.add_job(
            self.trigger_refresh,
            trigger=CronTrigger(hour=self.settings.REFRESH_HOUR_UTC, minute=0, timezone=UTC),
            id=DAILY_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.add_job(
            self.trigger_refresh,
            trigger=DateTrigger(
                run_date=datetime.now(UTC) + timedelta(seconds=self.settings.STARTUP_REFRESH_DELAY_SECONDS),
            ),
            id=STARTUP_JOB_ID,
            replace_existing=True,
        )
        self.scheduler.start()
        self._started = True

        logger.info(
            f"News refresh scheduled daily at {self.settings.REFRESH_HOUR_UTC:02d}:00 UTC, "
            f"warm-up in {self.settings.STARTUP_REFRESH_DELAY_SECONDS}s",
            extra={"event": "scheduler_started"},
        )
        return True

    def shutdown(self) -> None:
        if not self._started:
            return
        self.scheduler.shutdown(wait=False)
        self._started = False
        logger.info("News refresh scheduler stopped", extra={"event": "scheduler_stopped"})

    async def trigger_refresh(self) -> dict | None:
        """
        Call the refresh endpoint once.

        Returns:
            The endpoint's JSON body, or None if the call failed. Never raises;
            the next scheduled tick is the only retry.
        """
        headers = {"Content-Type": "application/json"}
        if self.settings.CRON_SECRET:
            headers["Authorization"] = f"Bearer {self.settings.CRON_SECRET}"

        logger.info("Starting scheduled news update", extra={"event": "scheduled_refresh_start"})
        try:
            async with httpx.AsyncClient(
                timeout=RefreshDefaults.TRIGGER_TIMEOUT_SECONDS,
                transport=self._transport,
            ) as client:
                response = await client.get(self.refresh_url, headers=headers)
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Scheduled news update failed: {e}", extra={"event": "scheduled_refresh_failed"})
            return None

        logger.info(
            f"Scheduled news update completed: {data}",
            extra={"event": "scheduled_refresh_complete", "status_code": response.status_code},
        )
        return data
