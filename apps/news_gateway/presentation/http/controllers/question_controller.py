"""Question Controller.

질문 검증 엔드포인트 핸들러.
캐시 히트는 단일 본문, 미스는 청크 단위 스트리밍 텍스트로 응답한다.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, StreamingResponse

from news_gateway.application.commands import AskQuestionCommand
from news_gateway.application.dto.question import AskQuestionRequest
from news_gateway.presentation.http.schemas import (
    AnswerResponseSchema,
    AskQuestionRequestSchema,
    ErrorResponseSchema,
)
from news_gateway.setup.dependencies import get_ask_question_command

router = APIRouter(tags=["question"])

TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


@router.post(
    "/chisme",
    summary="질문 검증",
    description="질문을 웹 검색 기반으로 검증하고 답변을 스트리밍합니다.",
    responses={
        200: {
            "description": "답변 텍스트 (스트리밍) 또는 JSON (stream=false)",
            "content": {"text/plain": {}, "application/json": {}},
        },
        400: {"model": ErrorResponseSchema, "description": "빈 질문"},
        429: {"model": ErrorResponseSchema, "description": "요청 한도 초과"},
    },
)
async def ask_question(
    body: AskQuestionRequestSchema | None = None,
    stream: Annotated[
        bool,
        Query(description="False면 전체 답변을 JSON으로 반환"),
    ] = True,
    command: AskQuestionCommand = Depends(get_ask_question_command),
):
    """질문 검증.

    - **pregunta**: 질문 텍스트 (공백뿐이면 400)
    - **stream**: 스트리밍 여부 (기본: true)
    """
    request = AskQuestionRequest(question=body.pregunta if body else None)

    if not stream:
        answer = await command.answer(request)
        return AnswerResponseSchema(respuesta=answer.text, cached=answer.cached)

    result = await command.execute(request)
    if result.is_cached:
        return PlainTextResponse(
            result.cached_text,
            media_type=TEXT_MEDIA_TYPE,
            headers={"X-Cache": "HIT"},
        )

    return StreamingResponse(
        result.stream,
        media_type=TEXT_MEDIA_TYPE,
        headers={"X-Cache": "MISS", "Cache-Control": "no-cache"},
    )
