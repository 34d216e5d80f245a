"""Test Configuration and Fixtures.

pytest 설정 및 공통 픽스처.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator, Mapping
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest

from news_gateway.application.exceptions import UpstreamError
from news_gateway.application.ports.feed_source import FeedSourcePort
from news_gateway.application.ports.text_generation import TextGenerationPort
from news_gateway.domain.entities import FeedItem
from news_gateway.setup.config import Settings

# pytest-asyncio 자동 모드 설정
pytest_plugins = ("pytest_asyncio",)


# ============================================================
# Environment
# ============================================================


@pytest.fixture(scope="session", autouse=True)
def _test_env() -> Generator[None, None, None]:
    """Set test environment variables."""
    original = os.environ.copy()
    os.environ.pop("GEMINI_API_KEY", None)
    os.environ.pop("GATEWAY_GEMINI_API_KEY", None)
    os.environ.update(
        {
            "ENVIRONMENT": "test",
            "GATEWAY_LOG_LEVEL": "DEBUG",
        }
    )
    yield
    os.environ.clear()
    os.environ.update(original)


@pytest.fixture
def settings() -> Settings:
    """테스트용 설정 (외부 API 키 없음)."""
    return Settings(
        environment="test",
        gemini_api_key=None,
        rate_limit_requests=5,
        rate_limit_window_seconds=60.0,
        cache_ttl_seconds=900.0,
        cache_sweep_interval_seconds=3600.0,
        news_feed_url="https://feeds.example.com/top",
        news_category_feeds={},
    )


# ============================================================
# Test Doubles
# ============================================================


class FakeClock:
    """수동으로 진행하는 단조 시계."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTextGenerator(TextGenerationPort):
    """고정 조각을 내보내는 생성 포트.

    error가 있으면 모든 조각을 내보낸 뒤 발생시킨다.
    gate가 설정되면 각 조각 전에 대기한다.
    """

    def __init__(
        self,
        fragments: tuple[str, ...] | list[str] = (),
        error: UpstreamError | Exception | None = None,
    ):
        self.fragments = list(fragments)
        self.error = error
        self.gate: asyncio.Event | None = None
        self.prompts: list[str] = []
        self.system_instructions: list[str | None] = []
        self.generate_calls = 0
        self.stream_calls = 0
        self.consumed = 0
        self.closed = False

    async def generate(self, prompt: str, system_instruction: str | None = None) -> str:
        self.generate_calls += 1
        self.prompts.append(prompt)
        self.system_instructions.append(system_instruction)
        if self.error is not None:
            raise self.error
        return "".join(self.fragments)

    async def generate_stream(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> AsyncIterator[str]:
        self.stream_calls += 1
        self.prompts.append(prompt)
        self.system_instructions.append(system_instruction)
        try:
            for fragment in self.fragments:
                if self.gate is not None:
                    await self.gate.wait()
                self.consumed += 1
                yield fragment
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


class FakeFeedSource(FeedSourcePort):
    """URL별 고정 결과(또는 예외)를 반환하는 피드 소스."""

    def __init__(self, feeds: Mapping[str, list[FeedItem] | Exception] | None = None):
        self.feeds = dict(feeds or {})
        self.calls: list[str] = []

    @property
    def source_name(self) -> str:
        return "fake"

    async def fetch_feed(self, url: str) -> list[FeedItem]:
        self.calls.append(url)
        result = self.feeds.get(url, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator(["Hola ", "mundo"])


# ============================================================
# Domain Fixtures
# ============================================================


@pytest.fixture
def now() -> datetime:
    """고정 현재 시간 (UTC)."""
    return datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


def make_item(
    title: str,
    link: str | None = None,
    published_at: datetime | None = None,
    summary: str = "Resumen de la nota.",
    source_name: str = "El Universal",
) -> FeedItem:
    return FeedItem(
        title=title,
        summary=summary,
        link=link or f"https://news.example.com/{title.strip().lower().replace(' ', '-')}",
        source_name=source_name,
        published_at=published_at,
    )


@pytest.fixture
def sample_items(now: datetime) -> list[FeedItem]:
    """샘플 피드 항목 (중복 제목 포함)."""
    return [
        make_item("Breaking News", published_at=now),
        make_item("Sismo en Oaxaca", published_at=now - timedelta(hours=1)),
        make_item(" breaking news ", published_at=now - timedelta(hours=2)),
        make_item("Peso se aprecia", published_at=now - timedelta(hours=3)),
        make_item("Lluvias en CDMX", published_at=now - timedelta(hours=4)),
        make_item("Elecciones 2027", published_at=now - timedelta(hours=5)),
        make_item("Final de futbol", published_at=now - timedelta(hours=6)),
    ]


@pytest.fixture
def item_factory():
    """FeedItem 팩토리."""
    return make_item


@pytest.fixture
def generator_factory():
    """FakeTextGenerator 팩토리."""
    return FakeTextGenerator


@pytest.fixture
def feed_source_factory():
    """FakeFeedSource 팩토리."""
    return FakeFeedSource
