"""Ask Question Command.

질문 검증 UseCase.
입력 검증 → 캐시 확인 → 미스 시 스트리밍 릴레이 시작.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from news_gateway.application.dto.question import (
    AnswerResult,
    AskQuestionRequest,
    AskQuestionResult,
)
from news_gateway.application.exceptions import InvalidInputError
from news_gateway.domain.cache_keys import question_key

if TYPE_CHECKING:
    from news_gateway.application.ports.response_cache import ResponseCachePort
    from news_gateway.application.services.prompt_builder import PromptBuilder
    from news_gateway.application.services.stream_relay import StreamRelayService
    from news_gateway.infrastructure.streaming.queue_stream_sink import QueueStreamSink

logger = logging.getLogger(__name__)


class AskQuestionCommand:
    """질문 Command (UseCase).

    플로우:
    1. 입력 검증 (비어 있으면 업스트림/캐시 접근 없이 거부)
    2. 정규화 키로 캐시 확인 → 히트면 전체 텍스트 반환
    3. 미스 → 싱크 생성 후 릴레이를 백그라운드로 시작, 싱크 스트림 반환
    """

    def __init__(
        self,
        relay: StreamRelayService,
        cache: ResponseCachePort,
        prompt_builder: PromptBuilder,
        sink_factory: Callable[[], QueueStreamSink],
        empty_question_message: str = "Pregunta vacía",
    ):
        """초기화.

        Args:
            relay: 스트리밍 릴레이 서비스
            cache: 응답 캐시
            prompt_builder: 프롬프트 빌더
            sink_factory: 요청마다 새 싱크를 만드는 팩토리
            empty_question_message: 빈 질문 오류 메시지
        """
        self._relay = relay
        self._cache = cache
        self._prompt_builder = prompt_builder
        self._sink_factory = sink_factory
        self._empty_question_message = empty_question_message

    async def execute(self, request: AskQuestionRequest) -> AskQuestionResult:
        """Command 실행 (스트리밍).

        Raises:
            InvalidInputError: 빈 질문
        """
        question = self._validate(request)
        cache_key = question_key(question)

        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.info("Question cache hit", extra={"cache_key": cache_key})
            return AskQuestionResult(cache_key=cache_key, cached_text=cached)

        logger.info("Question cache miss", extra={"cache_key": cache_key})
        sink = self._sink_factory()
        self._relay.spawn(
            prompt=self._prompt_builder.build_prompt(question),
            system_instruction=self._prompt_builder.build_system_instruction(),
            cache_key=cache_key,
            sink=sink,
        )
        return AskQuestionResult(cache_key=cache_key, stream=sink.iter_fragments())

    async def answer(self, request: AskQuestionRequest) -> AnswerResult:
        """Command 실행 (비스트리밍).

        Raises:
            InvalidInputError: 빈 질문
            UpstreamError: 업스트림 실패
        """
        question = self._validate(request)
        text, cached = await self._relay.resolve(
            prompt=self._prompt_builder.build_prompt(question),
            system_instruction=self._prompt_builder.build_system_instruction(),
            cache_key=question_key(question),
        )
        return AnswerResult(text=text, cached=cached)

    def _validate(self, request: AskQuestionRequest) -> str:
        question = request.question
        if question is None or not question.strip():
            raise InvalidInputError(self._empty_question_message)
        return question
