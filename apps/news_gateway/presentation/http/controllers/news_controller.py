"""News Controller.

오늘의 뉴스 엔드포인트 핸들러.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from news_gateway.application.commands import FetchTodayNewsCommand
from news_gateway.presentation.http.schemas import (
    NewsErrorResponseSchema,
    TodayNewsResponseSchema,
)
from news_gateway.setup.dependencies import get_fetch_today_news_command

router = APIRouter(tags=["news"])


@router.get(
    "/noticias-dia",
    response_model=TodayNewsResponseSchema,
    summary="오늘의 뉴스",
    description="뉴스 피드를 집계해 카드 HTML로 반환합니다.",
    responses={500: {"model": NewsErrorResponseSchema, "description": "뉴스 조회 실패"}},
)
async def get_today_news(
    command: FetchTodayNewsCommand = Depends(get_fetch_today_news_command),
):
    """오늘의 뉴스 조회.

    실패 시에도 빈 본문 대신 오류 카드를 반환한다.
    """
    result = await command.execute()

    if result.error:
        return JSONResponse(
            status_code=500,
            content=NewsErrorResponseSchema(content=result.content).model_dump(),
        )

    return TodayNewsResponseSchema(
        content=result.content,
        date=result.date,
        item_count=result.item_count,
        cached=result.cached,
    )
