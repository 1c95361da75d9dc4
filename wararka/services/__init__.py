# wararka/services/__init__.py
"""
Business logic services.
"""

from wararka.services.article_quality import is_complete
from wararka.services.article_store import ArticleStore, ArticleStoreError
from wararka.services.news_refresh import NewsRefreshOrchestrator, RefreshOutcome
from wararka.services.refresh_lease import RefreshLeaseService
from wararka.services.scheduler import NewsRefreshScheduler
from wararka.services.translator import Translator, TranslatorConfigError

__all__ = [
    "is_complete",
    "ArticleStore",
    "ArticleStoreError",
    "NewsRefreshOrchestrator",
    "RefreshOutcome",
    "RefreshLeaseService",
    "NewsRefreshScheduler",
    "Translator",
    "TranslatorConfigError",
]
