"""News Gateway Application.

질문 검증(생성형 텍스트 스트리밍)과 오늘의 뉴스 집계를 제공하는 게이트웨이.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from news_gateway.application.ports.feed_source import FeedSourcePort
from news_gateway.application.ports.text_generation import TextGenerationPort
from news_gateway.presentation.http import router
from news_gateway.presentation.http.errors import register_exception_handlers
from news_gateway.setup.config import Settings, get_settings
from news_gateway.setup.dependencies import build_container
from news_gateway.setup.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    generator: TextGenerationPort | None = None,
    feed_source: FeedSourcePort | None = None,
) -> FastAPI:
    """FastAPI 애플리케이션 팩토리.

    Args:
        settings: 설정 (None이면 환경변수에서 로드)
        generator: 생성형 텍스트 포트 구현 (None이면 Gemini)
        feed_source: 피드 소스 구현 (None이면 feed_provider 설정에 따름)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        setup_logging(settings.log_level)
        container = build_container(settings, generator=generator, feed_source=feed_source)
        app.state.container = container
        container.start()
        logger.info(
            "News gateway starting",
            extra={
                "environment": settings.environment,
                "feed_provider": container.feed_source.source_name,
                "cache_ttl": settings.cache_ttl_seconds,
                "rate_limit": settings.rate_limit_requests,
                "gemini_enabled": settings.has_upstream_credential,
            },
        )
        yield
        logger.info("News gateway shutting down")
        await container.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="생성형 답변 스트리밍 및 오늘의 뉴스 게이트웨이",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Retry-After", "X-Cache"],
    )

    # 예외 핸들러 등록
    register_exception_handlers(app)

    # Router
    app.include_router(router)

    return app


# Uvicorn entrypoint
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "news_gateway.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
    )
