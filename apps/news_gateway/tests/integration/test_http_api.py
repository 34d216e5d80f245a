"""HTTP API Integration Tests.

FastAPI TestClient + 가짜 업스트림으로 전체 요청 경로를 검증한다.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from news_gateway.application.exceptions import (
    FeedFetchError,
    UpstreamFailureError,
    UpstreamQuotaExceededError,
)
from news_gateway.main import create_app
from news_gateway.setup.config import Settings


@pytest.fixture
def feed_source(feed_source_factory, settings: Settings, sample_items):
    return feed_source_factory({settings.news_feed_url: sample_items})


@pytest.fixture
def client(settings: Settings, fake_generator, feed_source):
    app = create_app(settings, generator=fake_generator, feed_source=feed_source)
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    """헬스체크 테스트."""

    def test_health_snapshot(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "cacheEntryCount": 0,
            "limiterEntryCount": 0,
            "hasUpstreamCredential": False,
        }

    def test_health_not_rate_limited(self, client: TestClient, settings: Settings) -> None:
        for _ in range(settings.rate_limit_requests + 3):
            assert client.get("/health").status_code == 200


class TestAskQuestion:
    """POST /chisme 테스트."""

    def test_empty_question_rejected(self, client: TestClient, fake_generator) -> None:
        response = client.post("/chisme", json={"pregunta": "   "})

        assert response.status_code == 400
        assert response.json() == {"detail": "Pregunta vacía", "code": "INVALID_INPUT"}
        assert fake_generator.stream_calls == 0

    def test_missing_body_rejected(self, client: TestClient) -> None:
        response = client.post("/chisme")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_stream_then_cache_hit(self, client: TestClient, fake_generator) -> None:
        first = client.post("/chisme", json={"pregunta": "¿Es cierto?"})
        second = client.post("/chisme", json={"pregunta": "  ¿es CIERTO? "})

        assert first.status_code == 200
        assert first.text == "Hola mundo"
        assert first.headers["content-type"].startswith("text/plain")
        assert first.headers["x-cache"] == "MISS"

        assert second.status_code == 200
        assert second.text == "Hola mundo"
        assert second.headers["x-cache"] == "HIT"
        assert fake_generator.stream_calls == 1

    def test_non_streaming_answer(self, client: TestClient) -> None:
        first = client.post("/chisme", params={"stream": "false"}, json={"pregunta": "hola"})
        second = client.post("/chisme", params={"stream": "false"}, json={"pregunta": "HOLA"})

        assert first.json() == {"respuesta": "Hola mundo", "cached": False}
        assert second.json() == {"respuesta": "Hola mundo", "cached": True}

    def test_upstream_quota_error_fragment(
        self, settings: Settings, generator_factory, feed_source
    ) -> None:
        generator = generator_factory(["Hola "], error=UpstreamQuotaExceededError())
        app = create_app(settings, generator=generator, feed_source=feed_source)

        with TestClient(app) as client:
            response = client.post("/chisme", json={"pregunta": "hola"})
            health = client.get("/health").json()

        assert response.status_code == 200
        assert response.text == "Hola " + settings.quota_error_message
        assert health["cacheEntryCount"] == 0

    @pytest.mark.parametrize(
        ("error", "status_code", "code", "message_field"),
        [
            (
                UpstreamQuotaExceededError("429 RESOURCE_EXHAUSTED {'quota': 'raw'}"),
                503,
                "UPSTREAM_QUOTA_EXCEEDED",
                "quota_error_message",
            ),
            (
                UpstreamFailureError("500 INTERNAL {'trace': 'raw'}"),
                502,
                "UPSTREAM_ERROR",
                "upstream_error_message",
            ),
        ],
    )
    def test_non_streaming_upstream_error_hides_details(
        self,
        settings: Settings,
        generator_factory,
        feed_source,
        error,
        status_code,
        code,
        message_field,
    ) -> None:
        generator = generator_factory([], error=error)
        app = create_app(settings, generator=generator, feed_source=feed_source)

        with TestClient(app) as client:
            response = client.post("/chisme", params={"stream": "false"}, json={"pregunta": "hola"})

        assert response.status_code == status_code
        body = response.json()
        assert body == {"detail": getattr(settings, message_field).strip(), "code": code}
        assert "raw" not in response.text

    def test_unexpected_error_is_generic_500(
        self, settings: Settings, generator_factory, feed_source
    ) -> None:
        generator = generator_factory([], error=RuntimeError("boom"))
        app = create_app(settings, generator=generator, feed_source=feed_source)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post("/chisme", params={"stream": "false"}, json={"pregunta": "hola"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Error interno", "code": "INTERNAL_ERROR"}


class TestTodayNews:
    """GET /noticias-dia 테스트."""

    def test_news_then_cached(self, client: TestClient, feed_source) -> None:
        first = client.get("/noticias-dia")
        second = client.get("/noticias-dia")

        body = first.json()
        assert first.status_code == 200
        assert body["itemCount"] == 5
        assert body["cached"] is False
        assert body["content"].count('class="news-card"') == 5
        assert " de " in body["date"]

        assert second.json()["cached"] is True
        assert second.json()["content"] == body["content"]
        assert len(feed_source.calls) == 1

    def test_feed_failure_returns_error_card(
        self, settings: Settings, fake_generator, feed_source_factory
    ) -> None:
        url = settings.news_feed_url
        source = feed_source_factory({url: FeedFetchError(url, "HTTP 503")})
        app = create_app(settings, generator=fake_generator, feed_source=source)

        with TestClient(app) as client:
            response = client.get("/noticias-dia")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] is True
        assert "Noticias no disponibles" in body["content"]

    def test_unexpected_source_error_returns_error_card(
        self, settings: Settings, fake_generator, feed_source_factory
    ) -> None:
        url = settings.news_feed_url
        source = feed_source_factory({url: RuntimeError("boom")})
        app = create_app(settings, generator=fake_generator, feed_source=source)

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/noticias-dia")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] is True
        assert "Noticias no disponibles" in body["content"]


class TestRateLimit:
    """Rate Limit 게이트 테스트."""

    def test_limit_plus_one_denied(self, client: TestClient, settings: Settings) -> None:
        for _ in range(settings.rate_limit_requests):
            assert client.get("/noticias-dia").status_code == 200

        response = client.get("/noticias-dia")

        assert response.status_code == 429
        body = response.json()
        assert body["code"] == "RATE_LIMITED"
        assert body["retry_after_seconds"] > 0
        assert int(response.headers["retry-after"]) == body["retry_after_seconds"]

    def test_denied_request_does_no_work(
        self, client: TestClient, settings: Settings, fake_generator
    ) -> None:
        for _ in range(settings.rate_limit_requests):
            client.get("/noticias-dia")

        response = client.post("/chisme", json={"pregunta": "hola"})

        assert response.status_code == 429
        assert fake_generator.stream_calls == 0

    def test_forwarded_header_ignored_by_default(
        self, client: TestClient, settings: Settings
    ) -> None:
        for i in range(settings.rate_limit_requests):
            client.get("/noticias-dia", headers={"X-Forwarded-For": f"10.0.0.{i}"})

        response = client.get("/noticias-dia", headers={"X-Forwarded-For": "10.0.0.99"})

        assert response.status_code == 429

    def test_forwarded_header_trusted_when_enabled(
        self, settings: Settings, fake_generator, feed_source
    ) -> None:
        trusted = settings.model_copy(update={"trust_forwarded_headers": True})
        app = create_app(trusted, generator=fake_generator, feed_source=feed_source)

        with TestClient(app) as client:
            for _ in range(trusted.rate_limit_requests):
                client.get("/noticias-dia", headers={"X-Forwarded-For": "10.0.0.1"})
            blocked = client.get("/noticias-dia", headers={"X-Forwarded-For": "10.0.0.1"})
            other = client.get("/noticias-dia", headers={"X-Forwarded-For": "10.0.0.2, 172.16.0.1"})

        assert blocked.status_code == 429
        assert other.status_code == 200


class TestAdminClear:
    """POST /admin/cache/clear 테스트."""

    def test_clear_resets_cache_and_limiter(self, client: TestClient, settings: Settings) -> None:
        client.get("/noticias-dia")
        client.post("/chisme", json={"pregunta": "hola"})

        response = client.post("/admin/cache/clear")

        assert response.status_code == 200
        assert response.json() == {
            "cleared": True,
            "cacheEntriesRemoved": 2,
            "limiterEntriesRemoved": 1,
        }
        health = client.get("/health").json()
        assert health["cacheEntryCount"] == 0
        assert health["limiterEntryCount"] == 0

    def test_clear_is_idempotent(self, client: TestClient) -> None:
        client.post("/admin/cache/clear")
        response = client.post("/admin/cache/clear")

        body = response.json()
        assert body["cleared"] is True
        assert body["cacheEntriesRemoved"] == 0
        assert client.get("/health").json()["cacheEntryCount"] == 0

    def test_clear_lifts_rate_limit(self, client: TestClient, settings: Settings) -> None:
        for _ in range(settings.rate_limit_requests - 1):
            client.get("/noticias-dia")

        client.post("/admin/cache/clear")

        assert client.get("/noticias-dia").status_code == 200
