"""Exception Handlers.

애플리케이션 예외를 HTTP 응답으로 변환합니다.
처리되지 않은 예외는 스택 트레이스 없이 500으로 응답합니다.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from news_gateway.application.exceptions import (
    ApplicationError,
    InvalidInputError,
    RateLimitedError,
    UpstreamError,
    UpstreamQuotaExceededError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록."""

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "code": "INVALID_INPUT"},
        )

    @app.exception_handler(RateLimitedError)
    async def rate_limited_handler(request: Request, exc: RateLimitedError):
        return JSONResponse(
            status_code=429,
            content={
                "detail": exc.message,
                "code": "RATE_LIMITED",
                "retry_after_seconds": exc.retry_after_seconds,
            },
            headers={"Retry-After": str(exc.retry_after_seconds)},
        )

    @app.exception_handler(UpstreamQuotaExceededError)
    async def upstream_quota_handler(request: Request, exc: UpstreamQuotaExceededError):
        logger.warning("Upstream quota exceeded", extra={"error": exc.message})
        settings = request.app.state.container.settings
        return JSONResponse(
            status_code=503,
            content={
                "detail": settings.quota_error_message.strip(),
                "code": "UPSTREAM_QUOTA_EXCEEDED",
            },
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        logger.error(
            "Upstream error",
            extra={"error": exc.message, "type": type(exc).__name__},
        )
        settings = request.app.state.container.settings
        return JSONResponse(
            status_code=502,
            content={
                "detail": settings.upstream_error_message.strip(),
                "code": "UPSTREAM_ERROR",
            },
        )

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "code": "APPLICATION_ERROR"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Error interno", "code": "INTERNAL_ERROR"},
        )
