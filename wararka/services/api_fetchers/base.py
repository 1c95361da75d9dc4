# wararka/services/api_fetchers/base.py
"""
Base classes and types for news API fetchers.

Defines the abstract BaseFetcher interface and the NormalizedArticle
TypedDict that every fetcher produces, independent of the provider's
response shape.
"""

from abc import ABC, abstractmethod
from typing import TypedDict


class NormalizedArticle(TypedDict):
    """
    Provider-independent article record consumed by the translator and
    the refresh orchestrator. Never persisted as is.
    """

    title: str  # Always non-empty
    content: str  # Best-effort body text, may be empty
    image_url: str | None
    published_at: str | None  # Provider timestamp, informational only
    source: str | None  # Publisher name
    url: str | None  # Source article URL


class NewsProviderConfigError(Exception):
    """Raised in strict mode when the provider API key is missing."""

    pass


class BaseFetcher(ABC):
    """
    Abstract base class for news API fetchers.

    Fetch methods never raise on provider failure: they log and return an
    empty list, and callers treat empty as "nothing fetched".
    """

    @abstractmethod
    async def fetch_world_news(self) -> list[NormalizedArticle]:
        """Top general/world headlines."""
        pass

    @abstractmethod
    async def fetch_football_news(self) -> list[NormalizedArticle]:
        """Latest football/soccer articles."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (close HTTP client, etc.)."""
        pass

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the provider identifier (e.g., 'newsapi')."""
        pass
