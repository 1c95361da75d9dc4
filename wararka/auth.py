# wararka/auth.py
"""Shared authentication dependencies."""

import secrets

from fastapi import Depends, Header

from wararka.config import Settings, get_settings


class CronUnauthorizedError(Exception):
    """The refresh trigger was called without the configured bearer secret."""

    pass


def require_cron_secret(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Validate `Authorization: Bearer <CRON_SECRET>`.

    Open when CRON_SECRET is not configured, matching external cron setups
    that rely on network-level protection.
    """
    expected = settings.CRON_SECRET
    if not expected:
        return

    if not authorization or not secrets.compare_digest(authorization, f"Bearer {expected}"):
        raise CronUnauthorizedError()
