"""HTTP Request/Response Schemas.

Pydantic 모델 기반 API 스키마.
JSON 키는 기존 클라이언트 호환을 위해 camelCase 별칭으로 직렬화한다.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 별칭 베이스."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AskQuestionRequestSchema(BaseModel):
    """질문 요청 스키마."""

    pregunta: str | None = Field(None, description="검증할 질문 텍스트")


class AnswerResponseSchema(BaseModel):
    """비스트리밍 답변 응답 스키마."""

    respuesta: str = Field(..., description="생성된 전체 답변")
    cached: bool = Field(..., description="캐시 히트 여부")


class TodayNewsResponseSchema(CamelModel):
    """오늘의 뉴스 응답 스키마."""

    content: str = Field(..., description="렌더링된 뉴스 카드 HTML")
    date: str | None = Field(None, description="로컬 날짜 (예: lunes, 19 de octubre)")
    item_count: int = Field(0, description="항목 수")
    cached: bool = Field(False, description="캐시 히트 여부")


class NewsErrorResponseSchema(BaseModel):
    """뉴스 degraded 응답 스키마."""

    content: str = Field(..., description="오류 카드 HTML")
    error: bool = Field(True, description="오류 여부")


class HealthResponseSchema(CamelModel):
    """헬스체크 응답 스키마."""

    status: str = Field(..., description="서비스 상태")
    cache_entry_count: int = Field(..., description="캐시 항목 수")
    limiter_entry_count: int = Field(..., description="추적 중인 클라이언트 수")
    has_upstream_credential: bool = Field(..., description="Gemini API 키 설정 여부")


class ClearCacheResponseSchema(CamelModel):
    """전체 초기화 응답 스키마."""

    cleared: bool = Field(True, description="초기화 완료 여부")
    cache_entries_removed: int = Field(..., description="삭제된 캐시 항목 수")
    limiter_entries_removed: int = Field(..., description="삭제된 리미터 윈도우 수")


class ErrorResponseSchema(BaseModel):
    """오류 응답 스키마."""

    detail: str = Field(..., description="오류 메시지")
    code: str = Field(..., description="오류 코드")
    retry_after_seconds: int | None = Field(None, description="재시도 대기 시간 (초)")
