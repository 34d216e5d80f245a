"""Application DTOs."""

from news_gateway.application.dto.news import AggregatedResult, TodayNewsResponse
from news_gateway.application.dto.question import (
    AnswerResult,
    AskQuestionRequest,
    AskQuestionResult,
)
from news_gateway.application.dto.status import ClearStateResult, HealthStatus

__all__ = [
    "AggregatedResult",
    "AnswerResult",
    "AskQuestionRequest",
    "AskQuestionResult",
    "ClearStateResult",
    "HealthStatus",
    "TodayNewsResponse",
]
