"""Health Controller."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from news_gateway.application.queries import GetHealthQuery
from news_gateway.presentation.http.schemas import HealthResponseSchema
from news_gateway.setup.dependencies import get_health_query

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponseSchema,
    summary="헬스체크",
)
async def health_check(
    query: GetHealthQuery = Depends(get_health_query),
) -> HealthResponseSchema:
    """서비스 헬스체크 (읽기 전용 스냅샷)."""
    status = query.execute()
    return HealthResponseSchema(
        status=status.status,
        cache_entry_count=status.cache_entry_count,
        limiter_entry_count=status.limiter_entry_count,
        has_upstream_credential=status.has_upstream_credential,
    )
