# tests/test_api.py
"""
Contract tests for API responses.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from wararka.config import Settings, get_settings
from wararka.database import get_db
from wararka.main import app
from wararka.models import Article, RunStatus, SkipReason
from wararka.routers.cron import get_http_transport, get_refresh_orchestrator
from wararka.routers.news import invalidate_news_cache
from wararka.routers.widgets import get_widget_service
from wararka.services.news_refresh import RefreshOutcome
from wararka.services.widgets import WidgetService


def _settings(**overrides) -> Settings:
    values = {"DATABASE_URL": "sqlite:///:memory:", "APP_BASE_URL": "http://wararka.test"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client(db_session):
    """Test client bound to the in-memory database."""

    def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    invalidate_news_cache()
    yield TestClient(app)
    app.dependency_overrides.clear()
    invalidate_news_cache()


@pytest.fixture
def orchestrator():
    """Stub orchestrator; tests set run.return_value."""
    stub = MagicMock()
    stub.run = AsyncMock(
        return_value=RefreshOutcome(
            status=RunStatus.SUCCESS,
            run_id="run-1",
            inserted=5,
            world_fetched=3,
            sport_fetched=2,
        )
    )
    app.dependency_overrides[get_refresh_orchestrator] = lambda: stub
    return stub


class TestHealthEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "wararka-api"
        assert "version" in data


class TestCronEndpoint:
    def test_missing_secret_is_401_and_runs_nothing(self, client, orchestrator):
        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET="s3cret")

        response = client.get("/api/cron/update-news")

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized"}
        orchestrator.run.assert_not_called()

    def test_wrong_secret_is_401(self, client, orchestrator):
        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET="s3cret")

        response = client.get("/api/cron/update-news", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        orchestrator.run.assert_not_called()

    def test_valid_secret_runs_refresh(self, client, orchestrator):
        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET="s3cret")

        response = client.get("/api/cron/update-news", headers={"Authorization": "Bearer s3cret"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "inserted": 5, "worldFetched": 3, "sportFetched": 2}
        orchestrator.run.assert_awaited_once()

    def test_open_when_no_secret_configured(self, client, orchestrator):
        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET=None)

        response = client.get("/api/cron/update-news")

        assert response.status_code == 200

    def test_skipped_run(self, client, orchestrator):
        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET=None)
        orchestrator.run.return_value = RefreshOutcome(
            status=RunStatus.SKIPPED,
            run_id="run-2",
            skip_reason=SkipReason.NOTHING_FETCHED,
        )

        response = client.get("/api/cron/update-news")

        assert response.status_code == 200
        assert response.json() == {"success": True, "inserted": 0, "skippedDelete": True}

    def test_failed_run_is_500(self, client, orchestrator):
        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET=None)
        orchestrator.run.return_value = RefreshOutcome(status=RunStatus.ERROR, run_id="run-3", error_message="boom")

        response = client.get("/api/cron/update-news")

        assert response.status_code == 500
        assert response.json() == {"success": False}


class TestManualUpdateEndpoint:
    def test_forwards_authorization_and_relays_result(self, client):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"success": True, "inserted": 4})

        app.dependency_overrides[get_settings] = lambda: _settings()
        app.dependency_overrides[get_http_transport] = lambda: httpx.MockTransport(handler)

        response = client.get("/api/manual-update-news", headers={"Authorization": "Bearer s3cret"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Manual news update triggered",
            "result": {"success": True, "inserted": 4},
        }
        assert seen["url"] == "http://wararka.test/api/cron/update-news"
        assert seen["auth"] == "Bearer s3cret"

    def test_does_not_inject_secret(self, client):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(401, json={"success": False, "error": "Unauthorized"})

        app.dependency_overrides[get_settings] = lambda: _settings(CRON_SECRET="s3cret")
        app.dependency_overrides[get_http_transport] = lambda: httpx.MockTransport(handler)

        response = client.get("/api/manual-update-news")

        assert seen["auth"] is None
        assert response.json()["result"] == {"success": False, "error": "Unauthorized"}

    def test_connection_error_is_500(self, client):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        app.dependency_overrides[get_settings] = lambda: _settings()
        app.dependency_overrides[get_http_transport] = lambda: httpx.MockTransport(handler)

        response = client.get("/api/manual-update-news")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert "error" in response.json()


class TestNewsEndpoints:
    def test_world_news_fallback_when_empty(self, client):
        response = client.get("/api/world-news")

        assert response.status_code == 200
        articles = response.json()["articles"]
        assert len(articles) == 5
        assert articles[0]["title"] == "Global Economic Summit Concludes with New Trade Agreement"

    def test_football_news_serves_complete_rows(self, client, db_session, long_body):
        db_session.add(Article(title="Derby day", content=long_body, title_so="Maalinta derby", category="sport"))
        db_session.add(Article(title="Teaser", content="Short teaser…", category="sport"))
        db_session.commit()

        response = client.get("/api/football-news")

        articles = response.json()["articles"]
        assert [a["title"] for a in articles] == ["Derby day"]
        assert articles[0]["source"] == "Unknown"

    def test_somali_titles(self, client, db_session, long_body):
        db_session.add(Article(title="Derby day", content=long_body, title_so="Maalinta derby", category="sport"))
        db_session.commit()

        response = client.get("/api/football-news", params={"lang": "so"})

        assert response.json()["articles"][0]["title"] == "Maalinta derby"

    def test_live_feed_is_cached(self, client, db_session, long_body):
        db_session.add(Article(title="Summit", content=long_body, category="world"))
        db_session.commit()

        first = client.get("/api/world-news")
        second = client.get("/api/world-news")

        assert first.headers["X-Cache"] == "MISS"
        assert second.headers["X-Cache"] == "HIT"
        assert first.json() == second.json()

    def test_fallback_is_not_cached(self, client):
        client.get("/api/world-news")
        response = client.get("/api/world-news")

        assert response.headers["X-Cache"] == "MISS"

    @pytest.mark.parametrize("params", [{"lang": "fr"}, {"limit": 0}, {"limit": 51}])
    def test_invalid_params_are_422(self, client, params):
        response = client.get("/api/world-news", params=params)
        assert response.status_code == 422


class TestWidgetEndpoints:
    def test_weather_fallback(self, client):
        def handler(request):
            return httpx.Response(500)

        app.dependency_overrides[get_widget_service] = lambda: WidgetService(transport=httpx.MockTransport(handler))

        response = client.get("/api/weather", params={"city": "Mogadishu"})

        assert response.status_code == 200
        data = response.json()
        assert data["city"] == "Mogadishu"
        assert data["condition"] == "Clear sky"

    def test_live_scores_placeholder_without_key(self, client):
        app.dependency_overrides[get_widget_service] = lambda: WidgetService(sportmonks_api_key=None)

        response = client.get("/api/live-scores")

        assert response.status_code == 200
        assert response.json()["matches"][0]["status"] == "Unavailable"
