"""Rate Limit Gate.

라우터 의존성으로 동작하는 클라이언트별 요청 제한.
"""

from __future__ import annotations

import logging

from fastapi import Request

from news_gateway.application.exceptions import RateLimitedError
from news_gateway.setup.dependencies import get_container

logger = logging.getLogger(__name__)


def get_client_id(request: Request, trust_forwarded_headers: bool = False) -> str:
    """요청의 클라이언트 식별자 (네트워크 주소).

    프록시 헤더는 신뢰 설정일 때만 사용한다.
    """
    if trust_forwarded_headers:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request) -> None:
    """요청 승인.

    Raises:
        RateLimitedError: 현재 윈도우 한도 초과
    """
    container = get_container(request)
    client_id = get_client_id(request, container.settings.trust_forwarded_headers)

    with container.admission_lock:
        decision = container.rate_limiter.allow(client_id)

    if not decision.permitted:
        logger.info(
            "Rate limit exceeded",
            extra={"client_id": client_id, "retry_after": decision.retry_after_seconds},
        )
        raise RateLimitedError(
            retry_after_seconds=decision.retry_after_seconds or 1,
            message=container.settings.rate_limited_message,
        )
