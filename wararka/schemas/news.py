# wararka/schemas/news.py
"""
News API response schemas.

Field names are camelCase where the front end already consumes them.
"""

from pydantic import BaseModel, Field


class DisplayArticle(BaseModel):
    """Article as rendered on the world/football pages."""

    title: str
    description: str | None = None
    urlToImage: str | None = None
    publishedAt: str | None = None
    source: str | None = None


class NewsFeedResponse(BaseModel):
    """GET /api/world-news and /api/football-news."""

    articles: list[DisplayArticle] = Field(default_factory=list)


class Weather(BaseModel):
    """GET /api/weather."""

    city: str
    temperature: float
    feelsLike: float
    humidity: float
    wind: float
    condition: str
    updatedAt: str


class Match(BaseModel):
    """A single fixture in the live scores widget."""

    home_team: str
    away_team: str
    home_score: int | None = None
    away_score: int | None = None
    league: str
    status: str
    time: str


class LiveScoresResponse(BaseModel):
    """GET /api/live-scores."""

    matches: list[Match]
