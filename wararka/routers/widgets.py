# wararka/routers/widgets.py
"""
Home page widget endpoints.

GET /api/weather       - Current weather (Open-Meteo), never fails
GET /api/live-scores   - Today's football fixtures (SportMonks), never fails
"""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, Query

from wararka.config import Settings, get_settings
from wararka.constants import WidgetDefaults
from wararka.schemas.news import LiveScoresResponse, Weather
from wararka.services.widgets import WidgetService

router = APIRouter(prefix="/api", tags=["widgets"])


async def get_widget_service(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[WidgetService]:
    service = WidgetService(sportmonks_api_key=settings.SPORTMONKS_API_KEY)
    try:
        yield service
    finally:
        await service.close()


@router.get("/weather", response_model=Weather)
async def weather(
    lat: float = Query(WidgetDefaults.DEFAULT_LAT, ge=-90, le=90),
    lon: float = Query(WidgetDefaults.DEFAULT_LON, ge=-180, le=180),
    city: str = Query(WidgetDefaults.DEFAULT_CITY, max_length=100),
    service: WidgetService = Depends(get_widget_service),
) -> dict:
    return await service.get_weather(lat=lat, lon=lon, city=city)


@router.get("/live-scores", response_model=LiveScoresResponse)
async def live_scores(
    service: WidgetService = Depends(get_widget_service),
) -> dict:
    return {"matches": await service.get_live_scores()}
