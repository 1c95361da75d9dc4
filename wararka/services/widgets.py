# wararka/services/widgets.py
"""
Weather and live-score lookups for the home page widgets.

Both proxies always answer with something renderable: a missing key,
a provider error or an unexpected payload yields fixed fallback data.
"""

import logging
from datetime import UTC, date, datetime
from typing import Any

import httpx

from wararka.constants import WidgetDefaults

logger = logging.getLogger(__name__)

WEATHER_CODE_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Foggy",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

FALLBACK_MATCHES = [
    {
        "home_team": "Match data unavailable",
        "away_team": "Please try again later",
        "home_score": None,
        "away_score": None,
        "league": "Football",
        "status": "Unavailable",
        "time": "",
    }
]


def _utc_iso() -> str:
    return datetime.now(UTC).replace(tzinfo=None).isoformat() + "Z"


def fallback_weather(city: str) -> dict[str, Any]:
    return {
        "city": city,
        "temperature": 22,
        "feelsLike": 20,
        "humidity": 65,
        "wind": 12,
        "condition": "Clear sky",
        "updatedAt": _utc_iso(),
    }


def _number_or(value: Any, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return default


class WidgetService:
    """Open-Meteo weather and SportMonks fixtures behind one HTTP client."""

    def __init__(
        self,
        sportmonks_api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.sportmonks_api_key = sportmonks_api_key
        self.client = httpx.AsyncClient(
            timeout=WidgetDefaults.REQUEST_TIMEOUT_SECONDS,
            headers={"User-Agent": WidgetDefaults.USER_AGENT},
            transport=transport,
        )

    async def get_weather(
        self,
        lat: float = WidgetDefaults.DEFAULT_LAT,
        lon: float = WidgetDefaults.DEFAULT_LON,
        city: str = WidgetDefaults.DEFAULT_CITY,
    ) -> dict[str, Any]:
        """Current conditions for the coordinates, or fallback values."""
        try:
            response = await self.client.get(
                WidgetDefaults.OPEN_METEO_URL,
                params={
                    "latitude": str(lat),
                    "longitude": str(lon),
                    "current": "temperature_2m,relative_humidity_2m,apparent_temperature,weather_code,wind_speed_10m",
                    "timezone": "auto",
                },
            )
            if not response.is_success:
                logger.info(f"Weather API failed with {response.status_code}, using fallback data")
                return fallback_weather(city)
            current = response.json().get("current")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.info(f"Error fetching weather, using fallback data: {e}")
            return fallback_weather(city)

        if not isinstance(current, dict):
            return fallback_weather(city)

        return {
            "city": city,
            "temperature": _number_or(current.get("temperature_2m"), 22),
            "feelsLike": _number_or(current.get("apparent_temperature"), 20),
            "humidity": _number_or(current.get("relative_humidity_2m"), 65),
            "wind": _number_or(current.get("wind_speed_10m"), 12),
            "condition": WEATHER_CODE_DESCRIPTIONS.get(current.get("weather_code"), "Current conditions"),
            "updatedAt": current.get("time") or _utc_iso(),
        }

    async def get_live_scores(self, today: date | None = None) -> list[dict[str, Any]]:
        """Today's fixtures (first few), or a single placeholder match."""
        if not self.sportmonks_api_key:
            return FALLBACK_MATCHES

        today = today or datetime.now(UTC).date()
        try:
            response = await self.client.get(
                WidgetDefaults.SPORTMONKS_FIXTURES_URL,
                params={
                    "api_token": self.sportmonks_api_key,
                    "filter[date]": today.isoformat(),
                    "include": "participants;league;scores;state",
                },
            )
            if not response.is_success:
                logger.info(f"SportMonks request failed with {response.status_code}")
                return FALLBACK_MATCHES
            fixtures = response.json().get("data")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.info(f"Error fetching live scores: {e}")
            return FALLBACK_MATCHES

        if not isinstance(fixtures, list):
            return FALLBACK_MATCHES

        matches = [
            normalize_fixture(f)
            for f in fixtures[: WidgetDefaults.LIVE_SCORES_MAX_MATCHES]
            if isinstance(f, dict)
        ]
        return matches or FALLBACK_MATCHES

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "WidgetService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _as_goals(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def normalize_fixture(fixture: dict[str, Any]) -> dict[str, Any]:
    """
    Map a SportMonks v3 fixture to the widget's match shape.

    Entries of the wrong type are skipped and fields fall back to defaults,
    so one odd fixture never breaks the widget.
    """
    raw_participants = fixture.get("participants")
    participants = [p for p in raw_participants if isinstance(p, dict)] if isinstance(raw_participants, list) else []

    def side(location: str, index: int) -> dict:
        for p in participants:
            if _as_dict(p.get("meta")).get("location") == location:
                return p
        return participants[index] if len(participants) > index else {}

    home, away = side("home", 0), side("away", 1)

    home_score = None
    away_score = None
    scores = fixture.get("scores")
    for entry in scores if isinstance(scores, list) else []:
        if not isinstance(entry, dict):
            continue
        if _as_str(entry.get("description"), "").lower() != "current":
            continue
        score = _as_dict(entry.get("score"))
        if score.get("participant") == "home":
            home_score = _as_goals(score.get("goals"))
        elif score.get("participant") == "away":
            away_score = _as_goals(score.get("goals"))

    return {
        "home_team": _as_str(home.get("name"), "TBD"),
        "away_team": _as_str(away.get("name"), "TBD"),
        "home_score": home_score,
        "away_score": away_score,
        "league": _as_str(_as_dict(fixture.get("league")).get("name"), "Football"),
        "status": _as_str(_as_dict(fixture.get("state")).get("name"), _as_str(fixture.get("status"), "Scheduled")),
        "time": _as_str(fixture.get("starting_at"), ""),
    }
