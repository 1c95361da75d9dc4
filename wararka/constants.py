# wararka/constants.py
"""
Centralized magic constants organized by domain.

All hardcoded numbers/strings used throughout the codebase should be
defined here with documentation explaining their purpose.
"""


class QualityThresholds:
    """Minimums for an article body to count as complete."""

    MIN_CHARS = 180                     # Normalized character length
    MIN_WORDS = 30                      # Whitespace-delimited words


class NewsApiDefaults:
    """NewsAPI.org request settings."""

    BASE_URL = "https://newsapi.org/v2"
    PAGE_SIZE = 12                      # Articles per topic bucket
    REQUEST_TIMEOUT_SECONDS = 30
    RATE_LIMIT_ATTEMPTS = 3             # Tries on HTTP 429 before giving up
    RATE_LIMIT_WAIT_SECONDS = 2.0       # Fixed delay between 429 retries
    FOOTBALL_QUERY = "football OR soccer"


class ScrapeDefaults:
    """Full-article scraping limits."""

    TIMEOUT_SECONDS = 10                # Per-article page fetch cap
    MIN_EXTRACTED_CHARS = 300           # Below this the preview is kept
    USER_AGENT = "Mozilla/5.0 WararkaBot/1.0"


class TranslateDefaults:
    """Google Cloud Translation settings."""

    BASE_URL = "https://translation.googleapis.com/language/translate/v2"
    TARGET_LANGUAGE = "so"
    REQUEST_TIMEOUT_SECONDS = 20


class RefreshDefaults:
    """Refresh orchestrator settings."""

    TRANSLATE_CONCURRENCY = 10          # Max articles translated at once
    LEASE_NAME = "news-refresh"
    LEASE_TTL_SECONDS = 600
    TRIGGER_TIMEOUT_SECONDS = 300       # Scheduler call to its own endpoint


class CacheConfig:
    """Cache TTL and size constants."""

    NEWS_FEED_TTL_SECONDS = 300         # 5 minutes
    NEWS_FEED_MAX_ENTRIES = 32


class FeedDefaults:
    """Read endpoint settings."""

    LIMIT = 12
    MAX_LIMIT = 50
    UNKNOWN_SOURCE = "Unknown"


class WidgetDefaults:
    """Weather and live-score widget settings."""

    DEFAULT_CITY = "New York"
    DEFAULT_LAT = 40.7128
    DEFAULT_LON = -74.006
    OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
    SPORTMONKS_FIXTURES_URL = "https://api.sportmonks.com/v3/football/fixtures"
    LIVE_SCORES_MAX_MATCHES = 5
    REQUEST_TIMEOUT_SECONDS = 10
    USER_AGENT = "Wararka/1.0"
