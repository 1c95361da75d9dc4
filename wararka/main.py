# wararka/main.py
"""
FastAPI application for the Wararka news site backend.

Serves the world/football feeds, the refresh trigger and the home page
widgets. The daily refresh scheduler is started in the lifespan and
kept on app.state.scheduler.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wararka import __version__
from wararka.auth import CronUnauthorizedError
from wararka.config import get_settings
from wararka.logging_config import configure_logging
from wararka.routers import cron_router, news_router, widgets_router
from wararka.services.scheduler import NewsRefreshScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(json_format=settings.LOG_FORMAT == "json", level=settings.LOG_LEVEL)

    app.state.scheduler = None
    if settings.SCHEDULER_ENABLED:
        scheduler = NewsRefreshScheduler(settings)
        scheduler.start()
        app.state.scheduler = scheduler
    else:
        logger.info("Refresh scheduler disabled")

    yield

    if app.state.scheduler is not None:
        app.state.scheduler.shutdown()


app = FastAPI(title="Wararka News API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(CronUnauthorizedError)
async def cron_unauthorized_handler(request: Request, exc: CronUnauthorizedError) -> JSONResponse:
    logger.warning(f"Unauthorized refresh trigger from {request.client.host if request.client else 'unknown'}")
    return JSONResponse({"success": False, "error": "Unauthorized"}, status_code=401)


app.include_router(cron_router)
app.include_router(news_router)
app.include_router(widgets_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@app.get("/health")
def health() -> dict:
    return {"status": "ok", "service": "wararka-api", "version": __version__}
