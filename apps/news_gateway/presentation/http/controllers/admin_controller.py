"""Admin Controller."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from news_gateway.application.commands import ClearStateCommand
from news_gateway.presentation.http.schemas import ClearCacheResponseSchema
from news_gateway.setup.dependencies import get_clear_state_command

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/cache/clear",
    response_model=ClearCacheResponseSchema,
    summary="캐시/리미터 초기화",
)
async def clear_cache(
    command: ClearStateCommand = Depends(get_clear_state_command),
) -> ClearCacheResponseSchema:
    result = command.execute()
    return ClearCacheResponseSchema(
        cleared=True,
        cache_entries_removed=result.cache_entries_removed,
        limiter_entries_removed=result.limiter_entries_removed,
    )
