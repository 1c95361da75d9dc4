# wararka/services/translator.py
"""
Somali translation through the Google Cloud Translation v2 REST API.

The translator never raises on provider trouble: without a key, or when a
call fails, the input text comes back unchanged so the refresh pipeline
still stores a usable title_so/content_so. Strict mode turns the missing
key case into TranslatorConfigError.
"""

import logging

import httpx

from wararka.constants import TranslateDefaults
from wararka.utils.content_sanitizer import decode_html_entities

logger = logging.getLogger(__name__)


class TranslatorConfigError(Exception):
    """Raised in strict mode when no translation key is configured."""

    pass


class Translator:
    """Translate text into the configured secondary language (Somali by default)."""

    BASE_URL = TranslateDefaults.BASE_URL

    def __init__(
        self,
        api_key: str | None,
        target_language: str = TranslateDefaults.TARGET_LANGUAGE,
        strict: bool = False,
        timeout: float = TranslateDefaults.REQUEST_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.target_language = target_language
        self.strict = strict
        self.client = httpx.AsyncClient(timeout=timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def translate_to_somali(self, text: str | None) -> str:
        """
        Translate text, degrading to pass-through.

        Returns:
            "" for blank input (no network call), the translation on success,
            otherwise the input unchanged.
        """
        trimmed = (text or "").strip()
        if not trimmed:
            return ""

        if not self.api_key:
            if self.strict:
                raise TranslatorConfigError("GOOGLE_TRANSLATE_KEY is not configured")
            logger.info("GOOGLE_TRANSLATE_KEY not configured, returning source text")
            return text

        try:
            response = await self.client.post(
                self.BASE_URL,
                params={"key": self.api_key},
                json={
                    "q": trimmed,
                    "target": self.target_language,
                    "format": "text",
                },
            )
            response.raise_for_status()
            translations = response.json().get("data", {}).get("translations", [])
            translated = translations[0].get("translatedText") if translations else None
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as e:
            logger.error(f"Translation failed: {e}", extra={"provider": "google_translate"})
            return text

        if not translated or not isinstance(translated, str):
            return text
        return decode_html_entities(translated)

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "Translator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
