"""Question DTOs."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass


@dataclass(frozen=True)
class AskQuestionRequest:
    """질문 요청 DTO."""

    question: str | None


@dataclass
class AskQuestionResult:
    """질문 처리 결과.

    cached_text 또는 stream 중 하나만 설정된다.
    """

    cache_key: str
    cached_text: str | None = None
    stream: AsyncIterator[str] | None = None

    @property
    def is_cached(self) -> bool:
        return self.cached_text is not None


@dataclass(frozen=True)
class AnswerResult:
    """비스트리밍 답변 결과."""

    text: str
    cached: bool
