# wararka/services/api_fetchers/__init__.py
"""
News API fetchers for the refresh pipeline.

Each fetcher normalizes provider responses into NormalizedArticle records
so the translator and orchestrator never see provider-specific shapes.

Supported APIs:
- NewsAPI.org
"""

from wararka.services.api_fetchers.base import BaseFetcher, NewsProviderConfigError, NormalizedArticle
from wararka.services.api_fetchers.newsapi_fetcher import NewsApiFetcher, RateLimitedError

__all__ = [
    "BaseFetcher",
    "NormalizedArticle",
    "NewsProviderConfigError",
    "NewsApiFetcher",
    "RateLimitedError",
]
