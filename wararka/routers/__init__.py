# wararka/routers/__init__.py
"""
API routers.
"""

from wararka.routers.cron import router as cron_router
from wararka.routers.news import router as news_router
from wararka.routers.widgets import router as widgets_router

__all__ = [
    "cron_router",
    "news_router",
    "widgets_router",
]
